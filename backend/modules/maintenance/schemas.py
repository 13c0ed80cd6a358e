"""
modules/maintenance/schemas.py: Pydantic schemas for tasks, completions and history.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class TaskCreate(BaseModel):
    component_id: int
    name: str
    description: Optional[str] = None
    interval_hours: Optional[float] = None
    last_done_at: Optional[datetime] = None
    due_at: Optional[datetime] = None


class TaskUpdate(BaseModel):
    component_id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    interval_hours: Optional[float] = None
    last_done_at: Optional[datetime] = None
    due_at: Optional[datetime] = None


class TaskCompletion(BaseModel):
    performed_at: Optional[datetime] = None
    running_hours: Optional[float] = Field(default=None, ge=0)
    performed_by: Optional[int] = None
    notes: Optional[str] = None


class HistoryEntryCreate(BaseModel):
    """Unscheduled work not tied to a task."""
    component_id: int
    name: str
    description: Optional[str] = None
    performed_at: Optional[datetime] = None
    running_hours: Optional[float] = Field(default=None, ge=0)
    performed_by: Optional[int] = None
    notes: Optional[str] = None
