#!/usr/bin/env python3
"""Validate VAT IDs from the command line.

Usage:
    python scripts/check_vat.py DE136695976 --eu
    python scripts/check_vat.py 136695976 --country DE
    python scripts/check_vat.py --list
"""
import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.utils.env import load_env_if_present

load_env_if_present()

from app.core.logging import setup_logging
from app.services.vat_service import supported_countries, validate_vat_request


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Validate VAT identifiers (format + check digits)")
    parser.add_argument("vat_ids", nargs="*", help="VAT IDs to validate")
    parser.add_argument("--country", "-c", help="ISO country code (default: taken from the VAT ID prefix)")
    parser.add_argument("--eu", action="store_true", help="IDs are EU VAT IDs carrying their country prefix")
    parser.add_argument("--list", action="store_true", help="List supported countries and exit")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    setup_logging("DEBUG" if args.verbose else None)

    if args.list:
        for c in supported_countries():
            print(f"{c['country_code']}  {c['local_format']:<45} {c['eu_format']}")
        return 0

    if not args.vat_ids:
        parser.error("at least one VAT ID is required")

    failures = 0
    for vat_id in args.vat_ids:
        result = validate_vat_request(vat_id, args.country, args.eu)
        if result["valid"]:
            details = result["vat_details"]
            print(f"OK       {vat_id}  ({details['country_code']} {details['vat_number']})")
        else:
            failures += 1
            print(f"INVALID  {vat_id}  {result['message']}")

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
