"""
modules/system/schemas.py: Pydantic schemas for the system domain.
"""

from pydantic import BaseModel


class HealthCheck(BaseModel):
    status: str
    version: str


class SystemInfo(BaseModel):
    version: str
    database: str
    components: int
    maintenance_tasks: int
    users: int
