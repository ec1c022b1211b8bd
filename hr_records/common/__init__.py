"""Common module — shared utilities for HR Records."""

from hr_records.common.constants import (
    LEAVE_TRANSITIONS,
    SALARY_BUCKETS,
    SALARY_FLOOR,
    EmployeeStatus,
    GenderType,
    LeaveStatus,
    MaritalStatus,
    UserRole,
    Weekday,
)
from hr_records.common.exceptions import (
    AppException,
    ConflictError,
    DuplicateException,
    ForbiddenException,
    InvalidCredentialsException,
    NotFoundException,
    UnauthenticatedException,
    ValidationException,
    register_exception_handlers,
)
from hr_records.common.filters import apply_filters, apply_search

__all__ = [
    # Constants / Enums
    "EmployeeStatus",
    "GenderType",
    "LeaveStatus",
    "MaritalStatus",
    "UserRole",
    "Weekday",
    "LEAVE_TRANSITIONS",
    "SALARY_BUCKETS",
    "SALARY_FLOOR",
    # Exceptions
    "AppException",
    "ConflictError",
    "DuplicateException",
    "ForbiddenException",
    "InvalidCredentialsException",
    "NotFoundException",
    "UnauthenticatedException",
    "ValidationException",
    "register_exception_handlers",
    # Filters
    "apply_filters",
    "apply_search",
]
