"""User routes: registration, login and account listing."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from unispace.dependencies import get_user_service
from unispace.domain.models import (
    AuthenticateRequest,
    Envelope,
    LoginRequest,
    RegisterRequest,
    User,
    UserCreate,
)
from unispace.services.users import UserService

router = APIRouter(prefix="/api/users", tags=["users"])


# Auth routes are declared before /{user_id}.


@router.post("/register", response_model=Envelope[User], status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, service: UserService = Depends(get_user_service)) -> dict:
    """Create an account with a bcrypt-hashed password."""
    return {"data": service.register(payload), "message": "User registered successfully"}


@router.post("/login", response_model=Envelope[User])
def login(payload: LoginRequest, service: UserService = Depends(get_user_service)) -> dict:
    return {"data": service.login(payload), "message": "Login successful"}


@router.post("/authenticate", response_model=Envelope[User])
def authenticate(
    payload: AuthenticateRequest, service: UserService = Depends(get_user_service)
) -> dict:
    """Passwordless demo sign-in used by the original single-page client."""
    return {"data": service.authenticate(payload), "message": "Authentication successful"}


@router.get("", response_model=Envelope[list[User]])
def list_users(service: UserService = Depends(get_user_service)) -> dict:
    return {"data": service.list_all(), "message": "Users retrieved successfully"}


@router.get("/{user_id}", response_model=Envelope[User])
def get_user(user_id: int, service: UserService = Depends(get_user_service)) -> dict:
    return {"data": service.get(user_id), "message": "User retrieved successfully"}


@router.post("", response_model=Envelope[User], status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, service: UserService = Depends(get_user_service)) -> dict:
    return {"data": service.create(payload), "message": "User created successfully"}
