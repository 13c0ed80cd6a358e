"""
users/services.py: User accounts and the plaintext credential check.
"""

import hmac
import logging
from typing import List

from sqlalchemy import delete, func, insert, select, update

from core.base import UserRole
from core.db import Storage
from core.errors import AuthenticationFailed, Conflict, NotFound, ValidationError
from modules.users.models import users_table as users
from modules.users.schemas import UserCreate, UserUpdate

log = logging.getLogger("shipmaint.users")

# Columns safe to hand back to callers (never the password)
_PUBLIC_COLUMNS = (users.c.id, users.c.username, users.c.name, users.c.role, users.c.created_at)

DEFAULT_USERS = [
    {"username": "admin", "password": "password", "name": "Administrator", "role": UserRole.ADMINISTRATOR.value},
    {"username": "engineer", "password": "password", "name": "Marine Engineer", "role": UserRole.ENGINEER.value},
]


class UserService:
    def __init__(self, storage: Storage):
        self.storage = storage

    def list(self) -> List[dict]:
        return self.storage.query_many(select(*_PUBLIC_COLUMNS).order_by(users.c.name))

    def get(self, user_id: int) -> dict:
        user = self.storage.query_one(select(*_PUBLIC_COLUMNS).where(users.c.id == user_id))
        if not user:
            raise NotFound(f"User {user_id} not found")
        return user

    def exists(self, user_id: int) -> bool:
        return self.storage.query_one(select(users.c.id).where(users.c.id == user_id)) is not None

    def _check_username_free(self, username: str, exclude_id: int = None) -> None:
        stmt = select(users.c.id).where(users.c.username == username)
        if exclude_id is not None:
            stmt = stmt.where(users.c.id != exclude_id)
        if self.storage.query_one(stmt):
            raise Conflict("Username already exists")

    def create(self, data: UserCreate) -> int:
        for field in ("username", "password", "name"):
            if not getattr(data, field).strip():
                raise ValidationError(f"{field} is required")
        with self.storage.transaction():
            self._check_username_free(data.username)
            result = self.storage.execute(insert(users).values(
                username=data.username,
                password=data.password,
                name=data.name,
                role=data.role.value,
            ))
        return result.inserted_id

    def update(self, user_id: int, data: UserUpdate) -> None:
        fields = data.model_dump(exclude_unset=True)
        if not fields.get("password"):
            fields.pop("password", None)
        if "role" in fields and fields["role"] is not None:
            fields["role"] = UserRole(fields["role"]).value
        for key in ("username", "name", "role"):
            if key in fields and not fields[key]:
                raise ValidationError(f"{key} cannot be empty")

        with self.storage.transaction():
            if not self.exists(user_id):
                raise NotFound(f"User {user_id} not found")
            if "username" in fields:
                self._check_username_free(fields["username"], exclude_id=user_id)
            if fields:
                self.storage.execute(update(users).where(users.c.id == user_id).values(**fields))

    def delete(self, user_id: int) -> None:
        with self.storage.transaction():
            user = self.storage.query_one(select(users.c.role).where(users.c.id == user_id))
            if not user:
                raise NotFound(f"User {user_id} not found")
            if user["role"] == UserRole.ADMINISTRATOR.value:
                admins = self.storage.scalar(
                    select(func.count()).select_from(users).where(users.c.role == UserRole.ADMINISTRATOR.value)
                )
                if admins <= 1:
                    raise Conflict("Cannot delete the last administrator account")
            self.storage.execute(delete(users).where(users.c.id == user_id))
        log.info(f"Deleted user {user_id}")

    def seed_defaults(self) -> int:
        """Create the default accounts when no user exists yet. Returns rows created."""
        with self.storage.transaction():
            if self.storage.scalar(select(func.count()).select_from(users)):
                return 0
            for row in DEFAULT_USERS:
                self.storage.execute(insert(users).values(**row))
        log.info(f"Seeded {len(DEFAULT_USERS)} default users")
        return len(DEFAULT_USERS)


class AuthService:
    """Plaintext credential comparison against the users table."""

    def __init__(self, storage: Storage):
        self.storage = storage

    def authenticate(self, username: str, password: str) -> dict:
        row = self.storage.query_one(
            select(*_PUBLIC_COLUMNS, users.c.password).where(users.c.username == username)
        )
        if not row or not hmac.compare_digest(row.pop("password").encode(), password.encode()):
            raise AuthenticationFailed("Invalid credentials")
        row.pop("created_at", None)
        return row
