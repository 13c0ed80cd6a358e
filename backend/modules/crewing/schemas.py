"""
modules/crewing/schemas.py: Pydantic schemas for crew members and documents.
"""

from datetime import date
from typing import Optional, List
from pydantic import BaseModel


class CrewDocumentIn(BaseModel):
    name: str
    document_type: str
    document_number: str
    issued_date: date
    expiry_date: date


class CrewMemberCreate(BaseModel):
    name: str
    dob: Optional[date] = None
    country: Optional[str] = None
    position: Optional[str] = None
    role: str = "crew"
    documents: List[CrewDocumentIn] = []


class CrewMemberUpdate(BaseModel):
    name: Optional[str] = None
    dob: Optional[date] = None
    country: Optional[str] = None
    position: Optional[str] = None
    role: Optional[str] = None
    documents: Optional[List[CrewDocumentIn]] = None
