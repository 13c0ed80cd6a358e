"""
modules/components/schemas.py: Pydantic schemas for the component registry.
"""

from datetime import date
from typing import Optional, List
from pydantic import BaseModel, Field

from core.base import ComponentType, Criticality


class AttributeIn(BaseModel):
    name: str
    value: Optional[str] = None


class ComponentCreate(BaseModel):
    name: str
    type: ComponentType
    parent_id: Optional[int] = None
    sfi_code: Optional[str] = None
    technical_specs: Optional[str] = None
    manufacturer: Optional[str] = None
    model: Optional[str] = None
    serial_number: Optional[str] = None
    installation_date: Optional[date] = None
    warranty_expiry: Optional[date] = None
    criticality: Criticality = Criticality.MEDIUM
    running_hours: float = Field(default=0, ge=0)
    attributes: List[AttributeIn] = []


class ComponentUpdate(BaseModel):
    """Only the fields that are sent are replaced."""
    name: Optional[str] = None
    type: Optional[ComponentType] = None
    parent_id: Optional[int] = None
    sfi_code: Optional[str] = None
    technical_specs: Optional[str] = None
    manufacturer: Optional[str] = None
    model: Optional[str] = None
    serial_number: Optional[str] = None
    installation_date: Optional[date] = None
    warranty_expiry: Optional[date] = None
    criticality: Optional[Criticality] = None
    attributes: Optional[List[AttributeIn]] = None


class RunningHoursReading(BaseModel):
    running_hours: float = Field(ge=0)
