"""
modules/purchasing/models.py: ORM models for purchasing.

Owns tables: purchase_orders, purchase_order_items
"""

from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, Text
from sqlalchemy.sql import func

from core.base import Base


class PurchaseOrder(Base):
    __tablename__ = "purchase_orders"

    id = Column(Integer, primary_key=True)
    order_number = Column(String(50), nullable=False, unique=True)
    supplier = Column(String(200), nullable=False)
    status = Column(String(20), nullable=False, default="pending")
    total_amount = Column(Float, nullable=False, default=0)
    created_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())


class PurchaseOrderItem(Base):
    """Line item. Replaced as a set whenever the order's items are edited."""
    __tablename__ = "purchase_order_items"

    id = Column(Integer, primary_key=True)
    purchase_order_id = Column(Integer, ForeignKey("purchase_orders.id", ondelete="CASCADE"),
                               nullable=False, index=True)
    name = Column(String(200), nullable=False)
    part_number = Column(String(100), nullable=True)
    quantity = Column(Integer, nullable=False, default=1)
    unit_price = Column(Float, nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now())


orders_table = PurchaseOrder.__table__
items_table = PurchaseOrderItem.__table__
