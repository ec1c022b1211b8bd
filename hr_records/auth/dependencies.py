"""Auth dependencies — wire the access gate into FastAPI routes."""

from __future__ import annotations

from typing import Callable, Optional

from fastapi import Request

from hr_records.auth.gate import AuthorizedIdentity, authorize
from hr_records.common.constants import UserRole


def _extract_bearer(request: Request) -> Optional[str]:
    """Return the Bearer token from the Authorization header, if any."""
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        return None
    return auth_header[7:].strip() or None


def require_role(required_role: Optional[UserRole] = None) -> Callable:
    """Return a FastAPI dependency that runs the access gate.

    ``require_role()`` admits any authenticated identity.
    """

    async def _check(request: Request) -> AuthorizedIdentity:
        identity = authorize(_extract_bearer(request), required_role)
        request.state.identity = identity
        return identity

    return _check


get_current_identity = require_role()
require_admin = require_role(UserRole.admin)
require_employee = require_role(UserRole.employee)
