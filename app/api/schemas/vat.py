"""VAT validation schemas."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class VatDetails(BaseModel):
    """Details attached to a successful validation."""

    model_config = ConfigDict(populate_by_name=True)

    country_code: str = Field(..., serialization_alias="countryCode")
    vat_number: str = Field(..., serialization_alias="vatNumber")
    is_eu_vat: bool = Field(..., serialization_alias="isEuVat")
    name: Optional[str] = None
    address: Optional[str] = None


class VatValidationResponse(BaseModel):
    """Result of GET /api/vat/validate."""

    model_config = ConfigDict(populate_by_name=True)

    valid: bool
    message: Optional[str] = None
    vat_details: Optional[VatDetails] = Field(None, serialization_alias="vatDetails")


class VatCountryRead(BaseModel):
    """One supported VAT regime."""

    country_code: str = Field(..., serialization_alias="countryCode")
    vat_prefix: str = Field(..., serialization_alias="vatPrefix")
    local_format: str = Field(..., serialization_alias="localFormat")
    eu_format: str = Field(..., serialization_alias="euFormat")
