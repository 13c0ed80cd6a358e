"""
core/base.py: Declarative Base and shared enums.

All ORM models import Base from here.
All shared enums (used across multiple domain modules) live here
to avoid circular imports between domain modules.
"""

from enum import Enum
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class ComponentType(str, Enum):
    SYSTEM = "system"
    COMPONENT = "component"
    SPACE = "space"
    DOCUMENT = "document"


class Criticality(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskStatus(str, Enum):
    """Derived at read time from due_at relative to now. Never persisted."""
    OVERDUE = "overdue"
    SOON = "soon"
    NORMAL = "normal"
    UNSCHEDULED = "unscheduled"   # no due date yet


class UserRole(str, Enum):
    ADMINISTRATOR = "administrator"
    ENGINEER = "engineer"
    USER = "user"


class PurchaseOrderStatus(str, Enum):
    """Status progression for purchase orders."""
    DRAFT = "draft"
    PENDING = "pending"           # Created, awaiting approval/sending
    ORDERED = "ordered"           # Sent to supplier
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
