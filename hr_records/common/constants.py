"""Enums and constants for HR Records — matching PostgreSQL ENUM types."""

from __future__ import annotations

import enum


# ── Auth / Roles ────────────────────────────────────────────────────

class UserRole(str, enum.Enum):
    admin = "admin"
    employee = "employee"


# ── Employee / Core HR ──────────────────────────────────────────────

class EmployeeStatus(str, enum.Enum):
    active = "active"
    inactive = "inactive"


class GenderType(str, enum.Enum):
    male = "male"
    female = "female"
    other = "other"


class MaritalStatus(str, enum.Enum):
    single = "single"
    married = "married"
    divorced = "divorced"
    widowed = "widowed"


class Weekday(str, enum.Enum):
    monday = "Monday"
    tuesday = "Tuesday"
    wednesday = "Wednesday"
    thursday = "Thursday"
    friday = "Friday"
    saturday = "Saturday"
    sunday = "Sunday"


# ── Leave ───────────────────────────────────────────────────────────

class LeaveStatus(str, enum.Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


# pending is the only non-terminal state
LEAVE_TRANSITIONS: dict[LeaveStatus, set[LeaveStatus]] = {
    LeaveStatus.pending: {LeaveStatus.approved, LeaveStatus.rejected},
    LeaveStatus.approved: set(),
    LeaveStatus.rejected: set(),
}


# ── Reporting ───────────────────────────────────────────────────────

# (label, inclusive ceiling). A bucket covers (previous ceiling, ceiling];
# the first one starts at SALARY_FLOOR inclusive. Salaries above the last
# ceiling fall into no bucket.
SALARY_FLOOR = 0
SALARY_BUCKETS: list[tuple[str, int]] = [
    ("0-30000", 30000),
    ("30001-50000", 50000),
    ("50001+", 1000000),
]
