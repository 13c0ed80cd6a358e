"""Maintenance routes: tasks, completion, and history."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from core.base import TaskStatus
from core.config import Settings
from core.db import Storage
from core.dependencies import get_settings, get_storage
from modules.maintenance.schemas import HistoryEntryCreate, TaskCompletion, TaskCreate, TaskUpdate
from modules.maintenance.services import MaintenanceHistoryLog, MaintenanceScheduler

router = APIRouter()


def get_scheduler(storage: Storage = Depends(get_storage),
                  settings: Settings = Depends(get_settings)) -> MaintenanceScheduler:
    return MaintenanceScheduler(storage, soon_days=settings.due_soon_days)


def get_history_log(storage: Storage = Depends(get_storage)) -> MaintenanceHistoryLog:
    return MaintenanceHistoryLog(storage)


# ============== Tasks ==============

@router.get("/maintenance/tasks", tags=["Maintenance"])
def list_tasks(
    component_id: Optional[int] = None,
    sfi_code: Optional[str] = Query(None, description="SFI code prefix"),
    status: Optional[TaskStatus] = None,
    scheduler: MaintenanceScheduler = Depends(get_scheduler),
):
    """Tasks with derived status and days until due (negative = overdue)."""
    return scheduler.list(component_id=component_id, sfi_code=sfi_code, status=status)


@router.get("/maintenance/tasks/{task_id}", tags=["Maintenance"])
def get_task(task_id: int, scheduler: MaintenanceScheduler = Depends(get_scheduler)):
    return scheduler.get(task_id)


@router.post("/maintenance/tasks", tags=["Maintenance"])
def create_task(data: TaskCreate, scheduler: MaintenanceScheduler = Depends(get_scheduler)):
    task_id = scheduler.create(data)
    return {"success": True, "id": task_id}


@router.put("/maintenance/tasks/{task_id}", tags=["Maintenance"])
def update_task(task_id: int, data: TaskUpdate, scheduler: MaintenanceScheduler = Depends(get_scheduler)):
    scheduler.update(task_id, data)
    return {"success": True}


@router.delete("/maintenance/tasks/{task_id}", tags=["Maintenance"])
def delete_task(task_id: int, scheduler: MaintenanceScheduler = Depends(get_scheduler)):
    removed = scheduler.delete(task_id)
    return {"success": True, "history_removed": removed}


@router.post("/maintenance/tasks/{task_id}/complete", tags=["Maintenance"])
def complete_task(task_id: int, data: Optional[TaskCompletion] = None,
                  scheduler: MaintenanceScheduler = Depends(get_scheduler)):
    """Record a completion; the task is rescheduled from the completion time."""
    result = scheduler.complete(task_id, data)
    return {"success": True, **result}


# ============== History ==============

@router.get("/maintenance/history", tags=["Maintenance"])
def list_history(
    component_id: Optional[int] = None,
    sfi_code: Optional[str] = Query(None, description="SFI code prefix"),
    task_id: Optional[int] = None,
    limit: Optional[int] = Query(None, ge=1, le=1000),
    history_log: MaintenanceHistoryLog = Depends(get_history_log),
):
    return history_log.query(component_id=component_id, sfi_code=sfi_code, task_id=task_id, limit=limit)


@router.post("/maintenance/history", tags=["Maintenance"])
def record_history(data: HistoryEntryCreate, history_log: MaintenanceHistoryLog = Depends(get_history_log)):
    """Log unscheduled work on a component."""
    entry_id = history_log.record(data)
    return {"success": True, "id": entry_id}
