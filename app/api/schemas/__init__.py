"""API schemas."""
from app.api.schemas.vat import VatCountryRead, VatDetails, VatValidationResponse

__all__ = ["VatCountryRead", "VatDetails", "VatValidationResponse"]
