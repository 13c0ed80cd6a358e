"""
modules/inventory/models.py: ORM models for spare-parts inventory.

Owns tables: parts, part_movements
"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text
from sqlalchemy.sql import func

from core.base import Base


class Part(Base):
    """Stocked spare part."""
    __tablename__ = "parts"

    id = Column(Integer, primary_key=True)
    name = Column(String(200), nullable=False)
    part_number = Column(String(100), nullable=False, unique=True, index=True)
    manufacturer = Column(String(200), nullable=True)
    model = Column(String(200), nullable=True)
    stock = Column(Integer, nullable=False, default=0)
    min_stock = Column(Integer, nullable=False, default=0)   # Reorder threshold
    location = Column(String(100), nullable=True)
    technical_specs = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())


class PartMovement(Base):
    """Stock adjustment audit row."""
    __tablename__ = "part_movements"

    id = Column(Integer, primary_key=True)
    part_id = Column(Integer, ForeignKey("parts.id", ondelete="CASCADE"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)         # Signed delta
    previous_stock = Column(Integer, nullable=False)
    new_stock = Column(Integer, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())


parts_table = Part.__table__
movements_table = PartMovement.__table__
