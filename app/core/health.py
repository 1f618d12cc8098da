"""Liveness and readiness endpoints.

Readiness covers what a storefront request can depend on: the database,
photo storage credentials (catalog writes) and the payment key (checkout).
Missing credentials degrade the service without taking it out of rotation;
a lost database connection makes it unhealthy.
"""

from typing import Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.database import get_db
from app.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["health"])

Credential = Literal["configured", "missing"]


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: Literal["ok", "degraded", "unhealthy"]
    database: Literal["connected", "disconnected"] | None = None
    object_storage: Credential | None = None
    payments: Credential | None = None


def _credential(present: bool) -> Credential:
    return "configured" if present else "missing"


@router.get("/health", response_model=HealthResponse, response_model_exclude_none=True)
async def health_check() -> HealthResponse:
    """Liveness check; touches nothing."""
    return HealthResponse(status="ok")


@router.get("/health/ready", response_model=HealthResponse)
async def readiness_check(
    db: AsyncSession = Depends(get_db),
) -> HealthResponse:
    """Readiness check.

    Returns:
        ``unhealthy`` without a database, ``degraded`` when photo storage
        or payment credentials are missing, otherwise ``ok``.
    """
    settings = get_settings()
    object_storage = _credential(settings.cloudinary_configured)
    payments = _credential(bool(settings.stripe_key))

    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(
            "health.database_disconnected",
            error=str(e),
            error_type=type(e).__name__,
            exc_info=True,
        )
        return HealthResponse(
            status="unhealthy",
            database="disconnected",
            object_storage=object_storage,
            payments=payments,
        )

    status: Literal["ok", "degraded"] = "ok"
    if object_storage == "missing" or payments == "missing":
        status = "degraded"
        logger.warning("health.degraded", object_storage=object_storage, payments=payments)

    return HealthResponse(
        status=status,
        database="connected",
        object_storage=object_storage,
        payments=payments,
    )
