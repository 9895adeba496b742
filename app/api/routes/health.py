"""Health check endpoints."""
from typing import Any

from fastapi import APIRouter

from app.core.config import settings
from app.utils.vat import SUPPORTED_COUNTRIES

router = APIRouter()


@router.get("/health")
async def health_check() -> dict[str, Any]:
    """Liveness check. The validator holds no external state, so this never degrades."""
    return {
        "status": "ok",
        "env": settings.env,
        "vat_countries": len(SUPPORTED_COUNTRIES),
    }
