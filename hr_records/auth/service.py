"""Auth service — credential checks and token issuance."""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from hr_records.auth.passwords import burn_verification, verify_password
from hr_records.auth.schemas import TokenResponse, UserInfo
from hr_records.auth.tokens import issue_access_token
from hr_records.common.exceptions import InvalidCredentialsException
from hr_records.core_hr.models import Employee
from hr_records.core_hr.service import EmployeeService

logger = logging.getLogger(__name__)


async def authenticate(db: AsyncSession, email: str, password: str) -> Employee:
    """Return the identity for *email* if *password* matches.

    Unknown email and wrong password raise the same exception.
    """
    employee = await EmployeeService.get_by_email(db, email)
    if employee is None:
        burn_verification(password)
        logger.warning("Failed login: unknown account")
        raise InvalidCredentialsException()

    if not verify_password(password, employee.password_hash):
        logger.warning("Failed login for identity %s", employee.id)
        raise InvalidCredentialsException()

    return employee


def build_token_response(employee: Employee) -> TokenResponse:
    access_token, expires_in = issue_access_token(employee.id, employee.role)
    return TokenResponse(
        access_token=access_token,
        expires_in=expires_in,
        user=UserInfo(
            id=employee.id,
            name=employee.name,
            email=employee.email,
            role=employee.role,
        ),
    )
