"""
modules/components/models.py: ORM models for the component registry.

Owns tables: components, component_attributes, sfi_groups
"""

from sqlalchemy import Column, Integer, String, Float, DateTime, Date, ForeignKey, Text
from sqlalchemy.sql import func

from core.base import Base


class Component(Base):
    """Physical or functional ship component. Flat row; the tree is built on read."""
    __tablename__ = "components"

    id = Column(Integer, primary_key=True)
    name = Column(String(200), nullable=False)
    parent_id = Column(Integer, ForeignKey("components.id"), nullable=True, index=True)  # null = root
    type = Column(String(20), nullable=False)               # system / component / space / document
    sfi_code = Column(String(10), nullable=True, index=True)
    technical_specs = Column(Text, nullable=True)
    manufacturer = Column(String(200), nullable=True)
    model = Column(String(200), nullable=True)
    serial_number = Column(String(100), nullable=True)
    installation_date = Column(Date, nullable=True)
    warranty_expiry = Column(Date, nullable=True)
    criticality = Column(String(10), nullable=False, default="medium")
    running_hours = Column(Float, nullable=False, default=0)  # Monotonic counter, updated externally
    created_at = Column(DateTime, server_default=func.now())


class ComponentAttribute(Base):
    """Free-form name/value attribute attached to a component."""
    __tablename__ = "component_attributes"

    id = Column(Integer, primary_key=True)
    component_id = Column(Integer, ForeignKey("components.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    value = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())


class SfiGroup(Base):
    """Entry of the SFI classification catalogue."""
    __tablename__ = "sfi_groups"

    id = Column(Integer, primary_key=True)
    code = Column(String(10), nullable=False, unique=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    parent_code = Column(String(10), ForeignKey("sfi_groups.code"), nullable=True)
    level = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime, server_default=func.now())


components_table = Component.__table__
attributes_table = ComponentAttribute.__table__
sfi_groups_table = SfiGroup.__table__
