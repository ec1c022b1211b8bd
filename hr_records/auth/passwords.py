"""Credential hashing (bcrypt)."""

from __future__ import annotations

from functools import lru_cache

import bcrypt

from hr_records.config import settings


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return hash_password("not-a-real-password")


def burn_verification(password: str) -> None:
    """Spend one bcrypt check so unknown emails take as long as wrong passwords."""
    verify_password(password, _dummy_hash())
