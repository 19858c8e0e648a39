# snapsteam/api/v1/endpoints/health.py
from __future__ import annotations
from fastapi import APIRouter
from pydantic import BaseModel
from snapsteam.core.config import settings

router = APIRouter(prefix="/health", tags=["health"])


class CredentialsOut(BaseModel):
    api_key_configured: bool
    model: str
    message: str | None = None


@router.get("", response_model=dict)
def health_simple():
    return {"status": "ok", "env": getattr(settings, "APP_ENV", "local")}


@router.get("/credentials", response_model=CredentialsOut)
def health_credentials():
    # API Key 미설정이면 UI에서 "Set API Key" 경고를 띄울 수 있도록 안내 메시지 포함
    configured = settings.has_api_key
    return CredentialsOut(
        api_key_configured=configured,
        model=settings.GEMINI_MODEL,
        message=None if configured else "API_KEY is not set. Calculations will fail until it is configured.",
    )
