import logging
from typing import Literal

from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy import text

from leavemarker.config import get_settings
from leavemarker.db import SessionDep

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Liveness report for load balancers and the worker's supervisor."""

    service: str
    status: Literal["ok", "degraded"]
    database: bool
    version: str
    environment: str


@router.get("/health", response_model=HealthResponse)
async def health(session: SessionDep) -> HealthResponse:
    settings = get_settings()
    database_ok = True

    try:
        await session.execute(text("SELECT 1"))
    except Exception:
        logger.exception("Health check: database unreachable")
        database_ok = False

    return HealthResponse(
        service=settings.app_name,
        status="ok" if database_ok else "degraded",
        database=database_ok,
        version=settings.app_version,
        environment=settings.environment,
    )
