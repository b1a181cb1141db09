# This project was developed with assistance from AI tools.
"""Liveness/readiness endpoint reporting API and database status."""

from db import DatabaseService, get_db_service
from fastapi import APIRouter, Depends

from .. import __version__
from ..schemas.health import HealthStatus

router = APIRouter()


@router.get("/", response_model=list[HealthStatus])
async def health(db: DatabaseService = Depends(get_db_service)) -> list[HealthStatus]:
    """Report API and database health."""
    db_health = await db.health_check()
    return [
        HealthStatus(name="API", status="healthy", message="API is running", version=__version__),
        HealthStatus(name="Database", status=db_health["status"], message=db_health["message"]),
    ]
