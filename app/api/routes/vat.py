"""VAT validation endpoints."""
import logging
from typing import List, Optional

from fastapi import APIRouter, Query

from app.api.schemas.vat import VatCountryRead, VatValidationResponse
from app.core.config import settings
from app.services.vat_service import supported_countries, validate_vat_request

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/vat", tags=["vat"])


@router.get(
    "/validate",
    response_model=VatValidationResponse,
    response_model_by_alias=True,
)
async def validate_vat_id(
    vat_id: str = Query(..., alias="vatId", description="VAT ID, with or without country prefix"),
    country_code: Optional[str] = Query(None, alias="countryCode", description="ISO country code (2 letters)"),
    is_eu_vat: Optional[str] = Query(None, alias="isEuVat", description="Whether this is an EU VAT ID (true/false)"),
) -> VatValidationResponse:
    """Validate a VAT ID. Invalid IDs are a normal 200 response with valid=false."""
    eu_mode = settings.vat_default_eu_mode if is_eu_vat is None else is_eu_vat.lower() == "true"
    logger.info("Validating %s VAT ID for country %s", "EU" if eu_mode else "local", country_code or "-")
    result = validate_vat_request(vat_id, country_code, eu_mode)
    return VatValidationResponse.model_validate(result)


@router.get(
    "/countries",
    response_model=List[VatCountryRead],
    response_model_by_alias=True,
)
async def list_vat_countries() -> List[VatCountryRead]:
    """List supported countries and their expected formats."""
    return [VatCountryRead.model_validate(c) for c in supported_countries()]
