"""System routes: health check and database overview."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.engine import make_url

from core.config import Settings
from core.db import Storage
from core.dependencies import get_settings, get_storage
from modules.components.models import components_table
from modules.maintenance.models import tasks_table
from modules.system.schemas import HealthCheck, SystemInfo
from modules.users.models import users_table

log = logging.getLogger("shipmaint.api")
router = APIRouter()

__version__ = "1.0.0"


def _count(storage: Storage, table) -> int:
    return storage.scalar(select(func.count()).select_from(table)) or 0


def _describe_database(database_url: str) -> str:
    """File path for SQLite, otherwise the URL with the password masked."""
    url = make_url(database_url)
    if url.drivername.startswith("sqlite"):
        return url.database or ":memory:"
    return url.render_as_string(hide_password=True)


@router.get("/health", response_model=HealthCheck, tags=["System"])
async def health_check():
    """Check API health."""
    return HealthCheck(status="ok", version=__version__)


@router.get("/system/info", response_model=SystemInfo, tags=["System"])
def system_info(storage: Storage = Depends(get_storage), settings: Settings = Depends(get_settings)):
    """Row counts and database location for the about screen."""
    return SystemInfo(
        version=__version__,
        database=_describe_database(settings.database_url),
        components=_count(storage, components_table),
        maintenance_tasks=_count(storage, tasks_table),
        users=_count(storage, users_table),
    )
