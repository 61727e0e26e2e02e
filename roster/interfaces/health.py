"""
Health check router.

Provides a simple health endpoint for liveness/readiness probes.
No business logic. Returns application status, version and whether
the database answers.
"""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from roster.core.config import Settings
from roster.core.database import Database
from roster.interfaces.membership.dependencies import get_database, get_settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Response schema for the health endpoint."""

    status: str
    version: str
    database: str


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns application health status, version and database reachability.",
)
def health_check(
    database: Database = Depends(get_database),
    settings: Settings = Depends(get_settings),
) -> HealthResponse:
    """Return current application health status."""
    try:
        with database.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        database_status = "ok"
    except SQLAlchemyError:
        logger.warning("Health check could not reach the database.", exc_info=True)
        database_status = "unavailable"
    return HealthResponse(status="ok", version=settings.version, database=database_status)
