"""Core HR router — Employee and Department API endpoints.

Every route here is admin-only.

Routes:
    /employees              — List, create employees
    /employees/{id}         — Get, update employee
    /departments            — List, create departments
    /departments/{id}       — Get, update, delete department
"""


import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from hr_records.auth.dependencies import require_admin
from hr_records.auth.gate import AuthorizedIdentity
from hr_records.common.constants import EmployeeStatus, UserRole
from hr_records.core_hr.schemas import (
    DepartmentCreate,
    DepartmentUpdate,
    EmployeeCreate,
    EmployeeDetail,
    EmployeeListItem,
    EmployeeUpdate,
)
from hr_records.core_hr.service import DepartmentService, EmployeeService
from hr_records.database import get_db


# ═════════════════════════════════════════════════════════════════════
# Routers
# ═════════════════════════════════════════════════════════════════════

employees_router = APIRouter(prefix="", tags=["employees"])
departments_router = APIRouter(prefix="", tags=["departments"])


# ═════════════════════════════════════════════════════════════════════
# Employee Endpoints
# ═════════════════════════════════════════════════════════════════════


# ── GET /employees — List employees ─────────────────────────────────

@employees_router.get("")
async def list_employees(
    db: AsyncSession = Depends(get_db),
    admin: AuthorizedIdentity = Depends(require_admin),
    q: Optional[str] = Query(None, description="Search by name, email or position"),
    role: UserRole = Query(UserRole.employee, description="Filter by role"),
    status: Optional[EmployeeStatus] = Query(None, description="Filter by status (active, inactive)"),
    department_id: Optional[uuid.UUID] = Query(None, description="Filter by department"),
    position: Optional[str] = Query(None, description="Position contains (case-insensitive)"),
):
    """List identities matching every filter; ``q`` matches any of name/email/position.

    The department list (with employee counts) rides along for filter pickers.
    """
    employees = await EmployeeService.list_employees(
        db,
        role=role,
        status=status,
        department_id=department_id,
        position=position,
        search=q,
    )
    departments = await DepartmentService.list_departments(db)
    items = [EmployeeListItem.model_validate(emp) for emp in employees]
    return {
        "data": [item.model_dump(mode="json") for item in items],
        "total": len(items),
        "departments": [d.model_dump(mode="json") for d in departments],
    }


# ── POST /employees — Create employee ──────────────────────────────

@employees_router.post("", status_code=201)
async def create_employee(
    body: EmployeeCreate,
    db: AsyncSession = Depends(get_db),
    admin: AuthorizedIdentity = Depends(require_admin),
):
    """Create a new employee record. The new identity always has role ``employee``."""
    employee = await EmployeeService.create_employee(db, body)
    return {
        "data": EmployeeDetail.model_validate(employee).model_dump(mode="json"),
        "message": "Employee created successfully.",
    }


# ── GET /employees/{id} — Full employee record ─────────────────────

@employees_router.get("/{employee_id}")
async def get_employee(
    employee_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    admin: AuthorizedIdentity = Depends(require_admin),
):
    employee = await EmployeeService.get_employee(
        db, employee_id, role=UserRole.employee,
    )
    return {
        "data": EmployeeDetail.model_validate(employee).model_dump(mode="json"),
        "message": "Employee retrieved successfully.",
    }


# ── PUT /employees/{id} — Update employee ──────────────────────────

@employees_router.put("/{employee_id}")
async def update_employee(
    employee_id: uuid.UUID,
    body: EmployeeUpdate,
    db: AsyncSession = Depends(get_db),
    admin: AuthorizedIdentity = Depends(require_admin),
):
    """Partial update: only fields present in the body change; nested
    blocks are merged key-by-key."""
    employee = await EmployeeService.update_employee(db, employee_id, body)
    return {
        "data": EmployeeDetail.model_validate(employee).model_dump(mode="json"),
        "message": "Employee updated successfully.",
    }


# ═════════════════════════════════════════════════════════════════════
# Department Endpoints
# ═════════════════════════════════════════════════════════════════════


@departments_router.get("")
async def list_departments(
    db: AsyncSession = Depends(get_db),
    admin: AuthorizedIdentity = Depends(require_admin),
):
    """All departments sorted by name, with employee counts."""
    departments = await DepartmentService.list_departments(db)
    return {"data": [d.model_dump(mode="json") for d in departments]}


@departments_router.post("", status_code=201)
async def create_department(
    body: DepartmentCreate,
    db: AsyncSession = Depends(get_db),
    admin: AuthorizedIdentity = Depends(require_admin),
):
    department = await DepartmentService.create_department(db, body)
    return {
        "data": department.model_dump(mode="json"),
        "message": "Department created successfully.",
    }


@departments_router.get("/{department_id}")
async def get_department(
    department_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    admin: AuthorizedIdentity = Depends(require_admin),
):
    department = await DepartmentService.get_department(db, department_id)
    return {"data": department.model_dump(mode="json")}


@departments_router.put("/{department_id}")
async def update_department(
    department_id: uuid.UUID,
    body: DepartmentUpdate,
    db: AsyncSession = Depends(get_db),
    admin: AuthorizedIdentity = Depends(require_admin),
):
    department = await DepartmentService.update_department(db, department_id, body)
    return {
        "data": department.model_dump(mode="json"),
        "message": "Department updated successfully.",
    }


@departments_router.delete("/{department_id}")
async def delete_department(
    department_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    admin: AuthorizedIdentity = Depends(require_admin),
):
    """Delete a department. Its employees stay, with no department."""
    await DepartmentService.delete_department(db, department_id)
    return {"message": "Department deleted successfully."}
