"""
modules/crewing/models.py: ORM models for crewing.

Owns tables: crew_members, crew_documents
"""

from sqlalchemy import Column, Integer, String, DateTime, Date, ForeignKey
from sqlalchemy.sql import func

from core.base import Base


class CrewMember(Base):
    """Person on board. Independent of application user accounts."""
    __tablename__ = "crew_members"

    id = Column(Integer, primary_key=True)
    name = Column(String(200), nullable=False)
    dob = Column(Date, nullable=True)
    country = Column(String(100), nullable=True)
    position = Column(String(100), nullable=True, index=True)
    role = Column(String(50), nullable=False, default="crew")
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class CrewDocument(Base):
    """Certificate, passport or similar document with an expiry date."""
    __tablename__ = "crew_documents"

    id = Column(Integer, primary_key=True)
    crew_member_id = Column(Integer, ForeignKey("crew_members.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    document_type = Column(String(100), nullable=False)
    document_number = Column(String(100), nullable=False)
    issued_date = Column(Date, nullable=False)
    expiry_date = Column(Date, nullable=False, index=True)
    created_at = Column(DateTime, server_default=func.now())


crew_table = CrewMember.__table__
documents_table = CrewDocument.__table__
