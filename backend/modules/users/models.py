"""
modules/users/models.py: ORM models for user accounts.

Owns tables: users
"""

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func

from core.base import Base


class User(Base):
    """Application user. Also referenced as the performer of maintenance work."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    username = Column(String(100), nullable=False, unique=True)
    password = Column(String(200), nullable=False)  # Plaintext credential, compared as-is
    name = Column(String(200), nullable=False)
    role = Column(String(50), nullable=False, default="user")
    created_at = Column(DateTime, server_default=func.now())


users_table = User.__table__
