"""Service for user accounts: registration, login and admin listing."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from unispace.domain.errors import AuthenticationError, DuplicateEmailError, NotFoundError
from unispace.domain.models import (
    AuthenticateRequest,
    LoginRequest,
    RegisterRequest,
    User,
    UserCreate,
)
from unispace.repos.sql import UserRepository
from unispace.services.auth import PasswordHasher

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, session: Session, hasher: PasswordHasher) -> None:
        self.users = UserRepository(session)
        self.hasher = hasher

    def list_all(self) -> list[User]:
        return [User.model_validate(row) for row in self.users.list_all()]

    def get(self, user_id: int) -> User:
        row = self.users.get(user_id)
        if row is None:
            raise NotFoundError("User", user_id)
        return User.model_validate(row)

    def create(self, payload: UserCreate) -> User:
        """Create an account without a password (admin-managed)."""
        self._ensure_email_free(payload.email)
        row = self.users.add(name=payload.name, email=payload.email, role=payload.role)
        return User.model_validate(row)

    def register(self, payload: RegisterRequest) -> User:
        self._ensure_email_free(payload.email)
        row = self.users.add(
            name=payload.name,
            email=payload.email,
            role=payload.role,
            password_hash=self.hasher.hash(payload.password),
        )
        logger.info("User %s registered as %s", row.id, row.role)
        return User.model_validate(row)

    def login(self, payload: LoginRequest) -> User:
        row = self.users.get_by_email(payload.email)
        # Same message for unknown email and wrong password.
        if row is None or not self.hasher.verify(payload.password, row.password_hash):
            logger.info("Failed login for %s", payload.email)
            raise AuthenticationError("Invalid email or password")
        return User.model_validate(row)

    def authenticate(self, payload: AuthenticateRequest) -> User:
        """Demo sign-in: return the user for *email*, creating it on first use."""
        row = self.users.get_by_email(payload.email)
        if row is None:
            row = self.users.add(
                name=payload.email.split("@")[0],
                email=payload.email,
                role=payload.role,
            )
            logger.info("User %s created on first sign-in", row.id)
        return User.model_validate(row)

    def _ensure_email_free(self, email: str) -> None:
        if self.users.get_by_email(email) is not None:
            raise DuplicateEmailError(email)
