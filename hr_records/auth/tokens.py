"""JWT issuance and verification for access tokens."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from hr_records.common.constants import UserRole
from hr_records.config import settings


@dataclass(frozen=True)
class TokenClaims:
    """Verified contents of an access token."""

    identity_id: uuid.UUID
    role: UserRole


def issue_access_token(identity_id: uuid.UUID, role: UserRole) -> tuple[str, int]:
    """Return (encoded_jwt, expires_in_seconds)."""
    expires_in = settings.JWT_EXPIRY_HOURS * 3600
    payload = {
        "sub": str(identity_id),
        "role": role.value,
        "type": "access",
        "exp": datetime.now(timezone.utc) + timedelta(hours=settings.JWT_EXPIRY_HOURS),
    }
    token = jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
    return token, expires_in


def verify_access_token(token: str) -> Optional[TokenClaims]:
    """Decode and validate *token*. Returns ``None`` for anything unusable."""
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except JWTError:
        return None

    if payload.get("type") != "access":
        return None

    try:
        return TokenClaims(
            identity_id=uuid.UUID(str(payload["sub"])),
            role=UserRole(payload["role"]),
        )
    except (KeyError, ValueError):
        return None
