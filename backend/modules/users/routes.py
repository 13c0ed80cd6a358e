"""Users routes: account CRUD and login."""

from fastapi import APIRouter, Depends

from core.db import Storage
from core.dependencies import get_storage
from modules.users.schemas import LoginRequest, UserCreate, UserUpdate
from modules.users.services import AuthService, UserService

router = APIRouter()


def get_user_service(storage: Storage = Depends(get_storage)) -> UserService:
    return UserService(storage)


def get_auth_service(storage: Storage = Depends(get_storage)) -> AuthService:
    return AuthService(storage)


@router.get("/users", tags=["Users"])
def list_users(users: UserService = Depends(get_user_service)):
    """List all users (passwords are never returned)."""
    return users.list()


@router.post("/users", tags=["Users"])
def create_user(data: UserCreate, users: UserService = Depends(get_user_service)):
    user_id = users.create(data)
    return {"success": True, "id": user_id}


@router.put("/users/{user_id}", tags=["Users"])
def update_user(user_id: int, data: UserUpdate, users: UserService = Depends(get_user_service)):
    users.update(user_id, data)
    return {"success": True}


@router.delete("/users/{user_id}", tags=["Users"])
def delete_user(user_id: int, users: UserService = Depends(get_user_service)):
    users.delete(user_id)
    return {"success": True}


@router.post("/auth/login", tags=["Auth"])
def login(data: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    user = auth.authenticate(data.username, data.password)
    return {"success": True, "user": user}
