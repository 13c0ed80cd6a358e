"""
modules/inventory/schemas.py: Pydantic schemas for spare parts.
"""

from typing import Optional
from pydantic import BaseModel, Field


class PartCreate(BaseModel):
    name: str
    part_number: str
    manufacturer: Optional[str] = None
    model: Optional[str] = None
    stock: int = Field(default=0, ge=0)
    min_stock: int = Field(default=0, ge=0)
    location: Optional[str] = None
    technical_specs: Optional[str] = None


class PartUpdate(BaseModel):
    """Stock is changed through adjustments only."""
    name: Optional[str] = None
    part_number: Optional[str] = None
    manufacturer: Optional[str] = None
    model: Optional[str] = None
    min_stock: Optional[int] = Field(default=None, ge=0)
    location: Optional[str] = None
    technical_specs: Optional[str] = None


class StockAdjustment(BaseModel):
    quantity: int
    notes: Optional[str] = None
