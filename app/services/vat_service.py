"""VAT validation service: entry point used by onboarding and the API.

Cleans user input, derives the country from the identifier when the caller
omits it, runs the validator and attaches display details on success.
"""
import logging
import re
from typing import Any, Optional

from app.core.config import settings
from app.utils.vat import VAT_RULES, vat_prefix_for, validate_vat

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[.\s\-]")
_PREFIX = re.compile(r"^[A-Z]{2}")


def extract_country_code(vat_id: str) -> Optional[str]:
    """Return the leading two-letter country prefix of a cleaned VAT ID, if any."""
    match = _PREFIX.match(vat_id)
    return match.group(0) if match else None


def build_vat_details(vat_id: str, country_code: str, is_eu_vat: bool) -> dict[str, Any]:
    """
    Display details for a validated VAT ID.

    Company name and address would come from a registry such as VIES; no
    lookup is performed, configured placeholders (default None) are returned.
    """
    vat_number = vat_id
    prefix = vat_prefix_for(country_code)
    if is_eu_vat and vat_id.startswith(prefix):
        vat_number = vat_id[len(prefix):]
    return {
        "country_code": country_code,
        "vat_number": vat_number,
        "is_eu_vat": is_eu_vat,
        "name": settings.vat_registry_placeholder_name,
        "address": settings.vat_registry_placeholder_address,
    }


def validate_vat_request(
    vat_id: Optional[str],
    country_code: Optional[str] = None,
    is_eu_vat: bool = False,
) -> dict[str, Any]:
    """
    Validate a VAT ID as submitted by a user.

    Args:
        vat_id: Raw VAT ID (with or without country prefix, any separators)
        country_code: ISO country code; extracted from vat_id when omitted
        is_eu_vat: Whether vat_id is an EU VAT ID carrying its prefix

    Returns:
        dict with "valid", "message" and, on success, "vat_details"
    """
    logger.debug("VAT validation request for %s VAT ID", "EU" if is_eu_vat else "local")

    if not vat_id:
        return {"valid": False, "message": "VAT ID is required"}

    cleaned = _SEPARATORS.sub("", vat_id).upper()

    if not country_code:
        country_code = extract_country_code(cleaned)
        if country_code:
            logger.debug("Extracted country code %s from VAT ID", country_code)
    if not country_code:
        return {"valid": False, "message": "Country code is required for VAT validation"}
    country_code = country_code.strip().upper()

    try:
        result = validate_vat(cleaned, country_code, is_eu_vat)
    except Exception:
        logger.exception("Error during %s VAT validation", "EU" if is_eu_vat else "local")
        return {"valid": False, "message": "Error during VAT validation"}

    if not result.valid:
        logger.info(
            "VAT ID rejected for %s (%s): %s",
            country_code,
            result.error.value if result.error else "unknown",
            result.message,
        )
        return {"valid": False, "message": result.message}

    return {
        "valid": True,
        "message": None,
        "vat_details": build_vat_details(cleaned, country_code, is_eu_vat),
    }


def supported_countries() -> list[dict[str, str]]:
    """Supported VAT regimes with their local and EU formats."""
    return [
        {
            "country_code": rule.country_code,
            "vat_prefix": rule.vat_prefix,
            "local_format": rule.expected(False),
            "eu_format": rule.expected(True),
        }
        for rule in sorted(VAT_RULES.values(), key=lambda r: r.vat_prefix)
    ]
