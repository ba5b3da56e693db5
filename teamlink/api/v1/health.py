# teamlink/api/v1/health.py
from fastapi import APIRouter, Request

from teamlink.core.config import get_settings

router = APIRouter()


@router.get("/health")
async def health(request: Request):
    settings = get_settings()
    return {
        "status": "ok",
        "service": settings.app_name,
        "environment": settings.environment,
        "request_id": getattr(request.state, "request_id", None),
    }
