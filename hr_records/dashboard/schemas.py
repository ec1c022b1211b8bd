"""Dashboard Pydantic v2 schemas — response models for all dashboard endpoints."""

from __future__ import annotations

import uuid

from pydantic import BaseModel, Field


# ═════════════════════════════════════════════════════════════════════
# GET /counts
# ═════════════════════════════════════════════════════════════════════


class EmployeeCountsResponse(BaseModel):
    """Active / inactive split over identities with role=employee."""

    active_employees: int = Field(..., description="Employees with status=active")
    inactive_employees: int = Field(..., description="Employees with status=inactive")
    total_employees: int = Field(..., description="All employees, any status")


# ═════════════════════════════════════════════════════════════════════
# GET /departments
# ═════════════════════════════════════════════════════════════════════


class DepartmentRollupItem(BaseModel):
    """Employee count for a single department (zero included)."""

    department_id: uuid.UUID
    name: str
    employee_count: int = 0


# ═════════════════════════════════════════════════════════════════════
# GET /  (everything at once)
# ═════════════════════════════════════════════════════════════════════


class DashboardSummaryResponse(EmployeeCountsResponse):
    """All admin dashboard aggregates in one payload."""

    departments: list[DepartmentRollupItem] = Field(
        default_factory=list,
        description="Every department sorted by name, with employee counts",
    )
    salary_distribution: dict[str, int] = Field(
        default_factory=dict,
        description="Employee count per salary bucket (bucket order preserved)",
    )
