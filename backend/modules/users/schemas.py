"""
modules/users/schemas.py: Pydantic schemas for user accounts.
"""

from typing import Optional
from pydantic import BaseModel

from core.base import UserRole


class UserCreate(BaseModel):
    username: str
    password: str
    name: str
    role: UserRole = UserRole.USER


class UserUpdate(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None   # Omit to keep the current password
    name: Optional[str] = None
    role: Optional[UserRole] = None


class LoginRequest(BaseModel):
    username: str
    password: str
