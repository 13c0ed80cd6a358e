"""
maintenance/services.py: Maintenance scheduler and history log.

Scheduler
---------
Tasks carry an optional interval in hours. Completing a task appends a
history entry, moves last_done_at to the completion time and, for
recurring tasks, pushes due_at to last_done_at + interval. All three writes
share one transaction.

Status (overdue / soon / normal / unscheduled) and the signed day count are
computed on read from the injected clock; nothing derived is stored.

History
-------
Append-only. Entries are written by task completion or recorded directly
for unscheduled work, and removed only together with their task.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from sqlalchemy import delete, func, insert, select, update

from core.base import TaskStatus
from core.db import Storage
from core.errors import NotFound, ValidationError
from core.time_utils import to_naive_utc, utcnow
from modules.components.models import components_table as components
from modules.maintenance.models import history_table as history, tasks_table as tasks
from modules.maintenance.schemas import HistoryEntryCreate, TaskCompletion, TaskCreate, TaskUpdate
from modules.maintenance.status import days_until, derive_status
from modules.users.models import users_table as users

log = logging.getLogger("shipmaint.maintenance")

Clock = Callable[[], datetime]


def next_due(last_done_at: Optional[datetime], interval_hours: Optional[float]) -> Optional[datetime]:
    if last_done_at is None or not interval_hours:
        return None
    return last_done_at + timedelta(hours=interval_hours)


def _check_interval(interval_hours: Optional[float]) -> None:
    if interval_hours is not None and interval_hours <= 0:
        raise ValidationError("interval_hours must be greater than zero")


def _component_exists(storage: Storage, component_id: int) -> bool:
    return storage.query_one(select(components.c.id).where(components.c.id == component_id)) is not None


def _check_performer(storage: Storage, user_id: Optional[int]) -> None:
    if user_id is not None and not storage.query_one(select(users.c.id).where(users.c.id == user_id)):
        raise NotFound(f"User {user_id} not found")


class MaintenanceScheduler:
    def __init__(self, storage: Storage, clock: Clock = utcnow, soon_days: int = 7):
        self.storage = storage
        self.clock = clock
        self.soon_days = soon_days

    def _select(self):
        last_performed = (
            select(func.max(history.c.performed_at))
            .where(history.c.task_id == tasks.c.id)
            .scalar_subquery()
        )
        return (
            select(
                tasks,
                components.c.name.label("component_name"),
                components.c.sfi_code,
                last_performed.label("last_performed_at"),
            )
            .select_from(tasks.join(components, tasks.c.component_id == components.c.id))
        )

    def _annotate(self, row: dict, now: datetime) -> dict:
        row["status"] = derive_status(row["due_at"], now, self.soon_days).value
        row["days_until_due"] = days_until(row["due_at"], now)
        return row

    def _require(self, task_id: int) -> dict:
        task = self.storage.query_one(select(tasks).where(tasks.c.id == task_id))
        if not task:
            raise NotFound(f"Maintenance task {task_id} not found")
        return task

    # -------------- Reads --------------

    def list(
        self,
        component_id: Optional[int] = None,
        sfi_code: Optional[str] = None,
        status: Optional[TaskStatus] = None,
    ) -> List[dict]:
        """Tasks ordered by due date (unscheduled last), annotated with status."""
        stmt = self._select()
        if component_id is not None:
            stmt = stmt.where(tasks.c.component_id == component_id)
        if sfi_code:
            stmt = stmt.where(components.c.sfi_code.startswith(sfi_code.strip(), autoescape=True))
        stmt = stmt.order_by(tasks.c.due_at.is_(None), tasks.c.due_at, tasks.c.id)

        now = self.clock()
        rows = [self._annotate(row, now) for row in self.storage.query_many(stmt)]
        if status is not None:
            wanted = TaskStatus(status).value
            rows = [row for row in rows if row["status"] == wanted]
        return rows

    def get(self, task_id: int) -> dict:
        row = self.storage.query_one(self._select().where(tasks.c.id == task_id))
        if not row:
            raise NotFound(f"Maintenance task {task_id} not found")
        return self._annotate(row, self.clock())

    # -------------- Mutations --------------

    def create(self, data: TaskCreate) -> int:
        name = (data.name or "").strip()
        if not name:
            raise ValidationError("Task name is required")
        _check_interval(data.interval_hours)

        last_done_at = to_naive_utc(data.last_done_at)
        due_at = to_naive_utc(data.due_at)
        if due_at is None:
            due_at = next_due(last_done_at, data.interval_hours)

        with self.storage.transaction():
            if not _component_exists(self.storage, data.component_id):
                raise NotFound(f"Component {data.component_id} not found")
            result = self.storage.execute(insert(tasks).values(
                component_id=data.component_id,
                name=name,
                description=data.description,
                interval_hours=data.interval_hours,
                last_done_at=last_done_at,
                due_at=due_at,
            ))
        log.info(f"Created maintenance task {result.inserted_id} '{name}' on component {data.component_id}")
        return result.inserted_id

    def update(self, task_id: int, data: TaskUpdate) -> None:
        """Replace the provided fields.

        Changing interval_hours or last_done_at without an explicit due_at
        recomputes due_at when both values are known.
        """
        fields = data.model_dump(exclude_unset=True)
        if "name" in fields:
            fields["name"] = (fields["name"] or "").strip()
            if not fields["name"]:
                raise ValidationError("Task name is required")
        if "component_id" in fields and fields["component_id"] is None:
            raise ValidationError("component_id cannot be empty")
        _check_interval(fields.get("interval_hours"))
        for key in ("last_done_at", "due_at"):
            if key in fields:
                fields[key] = to_naive_utc(fields[key])

        with self.storage.transaction():
            task = self._require(task_id)
            if "component_id" in fields and not _component_exists(self.storage, fields["component_id"]):
                raise NotFound(f"Component {fields['component_id']} not found")

            if "due_at" not in fields and ("interval_hours" in fields or "last_done_at" in fields):
                merged = {**task, **fields}
                due_at = next_due(merged["last_done_at"], merged["interval_hours"])
                if due_at is not None:
                    fields["due_at"] = due_at

            if fields:
                self.storage.execute(update(tasks).where(tasks.c.id == task_id).values(**fields))

    def complete(self, task_id: int, completion: Optional[TaskCompletion] = None) -> dict:
        """Record a completion and reschedule the task.

        performed_at defaults to now and running_hours to the component's
        current counter. Returns the history id and the task's new dates.
        """
        completion = completion or TaskCompletion()
        performed_at = to_naive_utc(completion.performed_at) or self.clock()

        with self.storage.transaction():
            task = self._require(task_id)
            _check_performer(self.storage, completion.performed_by)

            running_hours = completion.running_hours
            if running_hours is None:
                running_hours = self.storage.scalar(
                    select(components.c.running_hours).where(components.c.id == task["component_id"])
                )

            entry = self.storage.execute(insert(history).values(
                component_id=task["component_id"],
                task_id=task_id,
                name=task["name"],
                description=task["description"],
                performed_by=completion.performed_by,
                performed_at=performed_at,
                running_hours=running_hours,
                notes=completion.notes,
            ))

            due_at = task["due_at"]
            if task["interval_hours"]:
                due_at = next_due(performed_at, task["interval_hours"])
            self.storage.execute(
                update(tasks).where(tasks.c.id == task_id).values(last_done_at=performed_at, due_at=due_at)
            )

        log.info(f"Completed maintenance task {task_id}; next due {due_at}")
        return {"history_id": entry.inserted_id, "last_done_at": performed_at, "due_at": due_at}

    def delete(self, task_id: int) -> int:
        """Delete a task together with its history. Returns history rows removed."""
        with self.storage.transaction():
            self._require(task_id)
            removed = self.storage.execute(delete(history).where(history.c.task_id == task_id))
            self.storage.execute(delete(tasks).where(tasks.c.id == task_id))
        log.info(f"Deleted maintenance task {task_id} and {removed.rows_affected} history entries")
        return removed.rows_affected


class MaintenanceHistoryLog:
    def __init__(self, storage: Storage, clock: Clock = utcnow):
        self.storage = storage
        self.clock = clock

    def query(
        self,
        component_id: Optional[int] = None,
        sfi_code: Optional[str] = None,
        task_id: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[dict]:
        """Entries newest first, with component and performer names."""
        stmt = (
            select(
                history,
                components.c.name.label("component_name"),
                components.c.sfi_code,
                users.c.name.label("performed_by_name"),
            )
            .select_from(
                history.join(components, history.c.component_id == components.c.id)
                .outerjoin(users, history.c.performed_by == users.c.id)
            )
            .order_by(history.c.performed_at.desc(), history.c.id.desc())
        )
        if component_id is not None:
            stmt = stmt.where(history.c.component_id == component_id)
        if sfi_code:
            stmt = stmt.where(components.c.sfi_code.startswith(sfi_code.strip(), autoescape=True))
        if task_id is not None:
            stmt = stmt.where(history.c.task_id == task_id)
        if limit:
            stmt = stmt.limit(limit)
        return self.storage.query_many(stmt)

    def record(self, entry: HistoryEntryCreate) -> int:
        """Append an entry for work done outside any scheduled task."""
        name = (entry.name or "").strip()
        if not name:
            raise ValidationError("History entry name is required")

        with self.storage.transaction():
            running_hours = entry.running_hours
            current = self.storage.query_one(
                select(components.c.running_hours).where(components.c.id == entry.component_id)
            )
            if not current:
                raise NotFound(f"Component {entry.component_id} not found")
            _check_performer(self.storage, entry.performed_by)
            if running_hours is None:
                running_hours = current["running_hours"]

            result = self.storage.execute(insert(history).values(
                component_id=entry.component_id,
                task_id=None,
                name=name,
                description=entry.description,
                performed_by=entry.performed_by,
                performed_at=to_naive_utc(entry.performed_at) or self.clock(),
                running_hours=running_hours,
                notes=entry.notes,
            ))
        return result.inserted_id
