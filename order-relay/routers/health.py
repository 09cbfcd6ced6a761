from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from core.config import Settings, get_settings

router = APIRouter(tags=["Health"])


@router.get("/", response_class=PlainTextResponse)
async def liveness():
    return "Shopify B2B backend OK"


@router.get("/health/")
async def health(settings: Settings = Depends(get_settings)):
    # No upstream probe: only report whether the relay can be used at all
    return {
        "api": "ok",
        "shopify": "configured" if settings.shopify_configured else "missing_config",
        "api_version": settings.api_version,
    }
