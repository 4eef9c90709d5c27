"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from shared.config import get_settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    storage: str
    email: str
    providers: list[str]


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check() -> ReadinessResponse:
    """
    Readiness check endpoint.

    Reports which backends are configured. Does not contact them.
    """
    settings = get_settings()

    if settings.storage_backend == "memory":
        storage = "memory"
    elif settings.supabase_url and settings.supabase_service_role_key:
        storage = "supabase"
    else:
        storage = "not_configured"

    email = "configured" if settings.resend_api_key and settings.resend_from_email else "not_configured"
    providers = [
        name
        for name, key in (("groq", settings.groq_api_key), ("openai", settings.openai_api_key))
        if key
    ]

    return ReadinessResponse(
        status="ready" if storage != "not_configured" else "degraded",
        storage=storage,
        email=email,
        providers=providers,
    )
