"""Access gate — the single capability check every entry point goes through."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Optional

from hr_records.auth.tokens import verify_access_token
from hr_records.common.constants import UserRole
from hr_records.common.exceptions import ForbiddenException, UnauthenticatedException


@dataclass(frozen=True)
class AuthorizedIdentity:
    id: uuid.UUID
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.admin


def authorize(
    token: Optional[str],
    required_role: Optional[UserRole] = None,
) -> AuthorizedIdentity:
    """Verify *token* and check it against *required_role*.

    ``required_role=None`` accepts any authenticated identity. Otherwise the
    role must match exactly; admin does not stand in for employee.

    Raises ``UnauthenticatedException`` for a missing or invalid token and
    ``ForbiddenException`` for a valid token with the wrong role.
    """
    if not token:
        raise UnauthenticatedException("Missing or invalid Authorization header.")

    claims = verify_access_token(token)
    if claims is None:
        raise UnauthenticatedException("Invalid or expired token.")

    if required_role is not None and claims.role is not required_role:
        raise ForbiddenException(
            detail=f"Role '{claims.role.value}' is not permitted. Required: '{required_role.value}'.",
        )

    return AuthorizedIdentity(id=claims.identity_id, role=claims.role)
