"""Dashboard router — read-only aggregate endpoints. Admin only."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from hr_records.auth.dependencies import require_admin
from hr_records.auth.gate import AuthorizedIdentity
from hr_records.dashboard.schemas import (
    DashboardSummaryResponse,
    DepartmentRollupItem,
    EmployeeCountsResponse,
)
from hr_records.dashboard.service import DashboardService
from hr_records.database import get_db

router = APIRouter()


# ── GET / ───────────────────────────────────────────────────────────

@router.get("", response_model=DashboardSummaryResponse)
async def dashboard_summary(
    admin: AuthorizedIdentity = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Employee counts, department rollup and salary distribution."""
    return await DashboardService.get_summary(db)


# ── GET /counts ─────────────────────────────────────────────────────

@router.get("/counts", response_model=EmployeeCountsResponse)
async def employee_counts(
    admin: AuthorizedIdentity = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await DashboardService.get_counts(db)


# ── GET /departments ────────────────────────────────────────────────

@router.get("/departments", response_model=list[DepartmentRollupItem])
async def department_rollup(
    admin: AuthorizedIdentity = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Every department with its employee count, including empty ones."""
    return await DashboardService.get_department_rollup(db)


# ── GET /salary-distribution ────────────────────────────────────────

@router.get("/salary-distribution", response_model=dict[str, int])
async def salary_distribution(
    admin: AuthorizedIdentity = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Employee count per salary bucket."""
    return await DashboardService.get_salary_distribution(db)
