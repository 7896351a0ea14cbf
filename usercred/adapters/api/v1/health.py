from fastapi import APIRouter
from pydantic import BaseModel

from usercred.core.config.settings import settings

router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    env: str
    version: str


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe. It does not touch the user store."""
    return HealthResponse(status="ok", env=settings.APP_ENV, version=settings.VERSION)
