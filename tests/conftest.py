"""Pytest configuration and shared fixtures.

Pin settings-relevant environment before any app module imports so a local
.env cannot change test outcomes.
"""
import os

import pytest

os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ["VAT_DEFAULT_EU_MODE"] = "false"
os.environ.pop("VAT_REGISTRY_PLACEHOLDER_NAME", None)
os.environ.pop("VAT_REGISTRY_PLACEHOLDER_ADDRESS", None)

from app.core.config import settings


# ── Valid national numbers, one per supported VAT regime ────────────

VALID_LOCAL_IDS = {
    "AT": "U12345679",
    "BE": "0404616494",
    "BG": "123456789",
    "CY": "12345678L",
    "CZ": "12345678",
    "DE": "136695976",
    "DK": "12345678",
    "EE": "123456789",
    "EL": "123456789",
    "ES": "A1234567B",
    "FI": "12345678",
    "FR": "12345678880",
    "HR": "12345678901",
    "HU": "12345678",
    "IE": "1234567WA",
    "IT": "12345678901",
    "LT": "123456789",
    "LU": "12345678",
    "LV": "12345678901",
    "MT": "12345678",
    "NL": "123456789B01",
    "PL": "1234567890",
    "PT": "123456789",
    "RO": "1234567",
    "SE": "123456789012",
    "SI": "12345678",
    "SK": "1234567890",
}


@pytest.fixture()
def registry_placeholders(monkeypatch):
    """Configure placeholder company details returned on successful validation."""
    monkeypatch.setattr(settings, "vat_registry_placeholder_name", "ACME Corporation")
    monkeypatch.setattr(settings, "vat_registry_placeholder_address", "123 Business Street, Business City")
    return settings
