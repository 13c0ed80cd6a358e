"""
modules/maintenance/models.py: ORM models for maintenance scheduling.

Owns tables: maintenance_tasks, maintenance_history
"""

from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, Text
from sqlalchemy.sql import func

from core.base import Base


class MaintenanceTask(Base):
    """Recurring (or one-shot) task attached to a component."""
    __tablename__ = "maintenance_tasks"

    id = Column(Integer, primary_key=True)
    component_id = Column(Integer, ForeignKey("components.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    interval_hours = Column(Float, nullable=True)   # null = non-recurring
    last_done_at = Column(DateTime, nullable=True)
    due_at = Column(DateTime, nullable=True)        # last_done_at + interval_hours once completed
    created_at = Column(DateTime, server_default=func.now())


class MaintenanceHistory(Base):
    """Record of maintenance performed on a component. Append-only."""
    __tablename__ = "maintenance_history"

    id = Column(Integer, primary_key=True)
    component_id = Column(Integer, ForeignKey("components.id"), nullable=False, index=True)
    task_id = Column(Integer, ForeignKey("maintenance_tasks.id"), nullable=True, index=True)  # null = ad-hoc work
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    performed_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    performed_at = Column(DateTime, nullable=False)
    running_hours = Column(Float, nullable=True)    # Component counter at time of service
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())


tasks_table = MaintenanceTask.__table__
history_table = MaintenanceHistory.__table__
