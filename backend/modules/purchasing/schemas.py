"""
modules/purchasing/schemas.py: Pydantic schemas for purchase orders.
"""

from typing import Optional, List
from pydantic import BaseModel, Field

from core.base import PurchaseOrderStatus


class OrderItemIn(BaseModel):
    name: str
    part_number: Optional[str] = None
    quantity: int = Field(default=1, gt=0)
    unit_price: float = Field(default=0, ge=0)


class PurchaseOrderCreate(BaseModel):
    order_number: str
    supplier: str
    status: PurchaseOrderStatus = PurchaseOrderStatus.PENDING
    total_amount: Optional[float] = Field(default=None, ge=0)   # computed from items when omitted
    created_by: Optional[int] = None
    notes: Optional[str] = None
    items: List[OrderItemIn] = []


class PurchaseOrderUpdate(BaseModel):
    order_number: Optional[str] = None
    supplier: Optional[str] = None
    status: Optional[PurchaseOrderStatus] = None
    total_amount: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None
    items: Optional[List[OrderItemIn]] = None
