"""Application services."""
from app.services.vat_service import supported_countries, validate_vat_request

__all__ = ["supported_countries", "validate_vat_request"]
