"""Password hashing and credential checks."""

from __future__ import annotations

import logging

from passlib.context import CryptContext

logger = logging.getLogger(__name__)


class PasswordHasher:
    """bcrypt via passlib, with a configurable cost factor."""

    def __init__(self, rounds: int = 12) -> None:
        self._context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds
        )

    def hash(self, password: str) -> str:
        return str(self._context.hash(password))

    def verify(self, password: str, hashed: str | None) -> bool:
        """Return False for missing or malformed hashes instead of raising."""
        if not hashed:
            return False
        try:
            return bool(self._context.verify(password, hashed))
        except ValueError:
            logger.warning("Stored password hash could not be parsed")
            return False
