"""Password hashing helpers."""
from __future__ import annotations

from passlib.context import CryptContext

BCRYPT_ROUNDS = 10


def build_password_context(rounds: int = BCRYPT_ROUNDS) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


_pwd_context = build_password_context()


def hash_password(password: str) -> str:
    """Return a salted bcrypt hash for ``password``."""

    if not password:
        raise ValueError("Password must not be empty")
    return _pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    try:
        return _pwd_context.verify(password, hashed)
    except ValueError:
        return False


__all__ = ["BCRYPT_ROUNDS", "build_password_context", "hash_password", "verify_password"]
