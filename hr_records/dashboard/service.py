"""Dashboard service — read-only aggregation queries over employee records.

All methods are static async, following the project convention.
Each aggregate is a single SQL statement, so the numbers inside one
aggregate always come from the same snapshot.
"""

from __future__ import annotations

from sqlalchemy import and_, case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from hr_records.common.constants import (
    SALARY_BUCKETS,
    SALARY_FLOOR,
    EmployeeStatus,
    UserRole,
)
from hr_records.core_hr.models import Department, Employee
from hr_records.dashboard.schemas import (
    DashboardSummaryResponse,
    DepartmentRollupItem,
    EmployeeCountsResponse,
)


class DashboardService:
    """Async dashboard aggregation queries."""

    # ═════════════════════════════════════════════════════════════════
    # GET /counts
    # ═════════════════════════════════════════════════════════════════

    @staticmethod
    async def get_counts(db: AsyncSession) -> EmployeeCountsResponse:
        """Active, inactive and total employees in one conditional aggregate."""
        stmt = select(
            func.count(case((Employee.status == EmployeeStatus.active, 1))).label("active"),
            func.count(case((Employee.status == EmployeeStatus.inactive, 1))).label("inactive"),
            func.count(Employee.id).label("total"),
        ).where(Employee.role == UserRole.employee)

        row = (await db.execute(stmt)).one()
        return EmployeeCountsResponse(
            active_employees=row.active or 0,
            inactive_employees=row.inactive or 0,
            total_employees=row.total or 0,
        )

    # ═════════════════════════════════════════════════════════════════
    # GET /departments
    # ═════════════════════════════════════════════════════════════════

    @staticmethod
    async def get_department_rollup(db: AsyncSession) -> list[DepartmentRollupItem]:
        """Every department with its employee count, sorted by name.

        LEFT OUTER JOIN from departments so empty departments report 0.
        """
        stmt = (
            select(
                Department.id,
                Department.name,
                func.count(Employee.id).label("employee_count"),
            )
            .outerjoin(
                Employee,
                and_(
                    Employee.department_id == Department.id,
                    Employee.role == UserRole.employee,
                ),
            )
            .group_by(Department.id, Department.name)
            .order_by(Department.name)
        )

        result = await db.execute(stmt)
        return [
            DepartmentRollupItem(
                department_id=row.id,
                name=row.name,
                employee_count=row.employee_count or 0,
            )
            for row in result.all()
        ]

    # ═════════════════════════════════════════════════════════════════
    # GET /salary-distribution
    # ═════════════════════════════════════════════════════════════════

    @staticmethod
    def _bucket_conditions() -> list:
        """One predicate per bucket: ``floor <= salary <= ceiling`` for the
        first, ``previous < salary <= ceiling`` for the rest."""
        conditions = []
        previous = None
        for _, ceiling in SALARY_BUCKETS:
            lower = (
                Employee.salary >= SALARY_FLOOR
                if previous is None
                else Employee.salary > previous
            )
            conditions.append(and_(lower, Employee.salary <= ceiling))
            previous = ceiling
        return conditions

    @staticmethod
    async def get_salary_distribution(db: AsyncSession) -> dict[str, int]:
        """Employee count per salary bucket.

        Fractional salaries between two labels (30000.50) belong to the
        upper bucket. Salaries above the top ceiling (1,000,000) and null
        salaries are not counted.
        """
        columns = [
            func.count(case((condition, 1))).label(f"b{i}")
            for i, condition in enumerate(DashboardService._bucket_conditions())
        ]
        stmt = select(*columns).where(Employee.role == UserRole.employee)

        row = (await db.execute(stmt)).one()
        return {
            label: row[i] or 0
            for i, (label, _) in enumerate(SALARY_BUCKETS)
        }

    # ═════════════════════════════════════════════════════════════════
    # GET /
    # ═════════════════════════════════════════════════════════════════

    @staticmethod
    async def get_summary(db: AsyncSession) -> DashboardSummaryResponse:
        """All aggregates, read in one session/transaction."""
        counts = await DashboardService.get_counts(db)
        departments = await DashboardService.get_department_rollup(db)
        salary_distribution = await DashboardService.get_salary_distribution(db)

        return DashboardSummaryResponse(
            **counts.model_dump(),
            departments=departments,
            salary_distribution=salary_distribution,
        )
