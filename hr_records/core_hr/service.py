"""Core HR service layer — async CRUD + business logic.

Uses:
  - ``apply_filters / apply_search`` from hr_records.common.filters
  - ``NotFoundException / DuplicateException / ConflictError`` from
    hr_records.common.exceptions
  - ``hash_password`` from hr_records.auth.passwords
"""

from __future__ import annotations

import copy
import logging
import uuid
from typing import Any, Optional, Sequence

from pydantic import BaseModel
from sqlalchemy import and_, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hr_records.auth.passwords import hash_password
from hr_records.common.constants import EmployeeStatus, UserRole
from hr_records.common.exceptions import (
    ConflictError,
    DuplicateException,
    NotFoundException,
    ValidationException,
)
from hr_records.common.filters import apply_filters, apply_search
from hr_records.config import settings
from hr_records.core_hr.models import Department, Employee
from hr_records.core_hr.schemas import (
    DepartmentCreate,
    DepartmentResponse,
    DepartmentUpdate,
    EmployeeCreate,
    EmployeeUpdate,
    ProfileUpdate,
)

logger = logging.getLogger(__name__)

# Free-form JSON blocks merged key-by-key on update
_NESTED_BLOCKS = ("personal_details", "contacts", "working_hours")

# Columns that may be omitted from an update but never set to null
_NON_NULLABLE = ("name", "email", "status")


# ── Helpers ─────────────────────────────────────────────────────────

def normalize_email(email: str) -> str:
    email = email.strip()
    return email.lower() if settings.EMAIL_CASE_INSENSITIVE else email


def deep_merge(current: Optional[dict], changes: dict) -> dict:
    """Merge *changes* into a copy of *current*, recursing into nested dicts.

    Keys absent from *changes* keep their previous value; lists and scalars
    are replaced.
    """
    merged = copy.deepcopy(current) if current else {}
    for key, value in changes.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _dump_block(block: Optional[BaseModel], *, partial: bool) -> Optional[dict]:
    if block is None:
        return None
    return block.model_dump(mode="json", exclude_unset=partial)


def _employee_query():
    return select(Employee).options(
        selectinload(Employee.department),
        selectinload(Employee.leave_requests),
    )


# ═════════════════════════════════════════════════════════════════════
# EmployeeService
# ═════════════════════════════════════════════════════════════════════


class EmployeeService:
    """Async operations on identity records."""

    # ── Get single ──────────────────────────────────────────────────

    @staticmethod
    async def get_employee(
        db: AsyncSession,
        employee_id: uuid.UUID,
        *,
        role: Optional[UserRole] = None,
    ) -> Employee:
        """Load an identity with department and leave requests.

        When *role* is given, identities holding another role are reported
        as not found.
        """
        query = _employee_query().where(Employee.id == employee_id)
        if role is not None:
            query = query.where(Employee.role == role)

        result = await db.execute(query.execution_options(populate_existing=True))
        employee = result.scalars().first()
        if employee is None:
            raise NotFoundException("Employee", str(employee_id))
        return employee

    @staticmethod
    async def get_by_email(db: AsyncSession, email: str) -> Optional[Employee]:
        result = await db.execute(
            select(Employee).where(Employee.email == normalize_email(email)),
        )
        return result.scalars().first()

    # ── List (filterable, searchable) ───────────────────────────────

    @staticmethod
    async def list_employees(
        db: AsyncSession,
        *,
        role: Optional[UserRole] = UserRole.employee,
        status: Optional[EmployeeStatus] = None,
        department_id: Optional[uuid.UUID] = None,
        position: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Sequence[Employee]:
        """Return identities matching every given filter, newest first.

        *search* matches name, email or position (any of them).
        """
        query = _employee_query()

        filters: dict[str, Any] = {
            "role": role,
            "status": status,
            "department_id": department_id,
            "position__ilike": position,
        }
        query = apply_filters(query, Employee, filters)
        query = apply_search(query, Employee, search, ["name", "email", "position"])

        result = await db.execute(
            query.order_by(Employee.created_at.desc(), Employee.id),
        )
        return result.scalars().all()

    # ── Create ──────────────────────────────────────────────────────

    @staticmethod
    async def _create_identity(
        db: AsyncSession,
        *,
        role: UserRole,
        name: str,
        email: str,
        password: str,
        **fields: Any,
    ) -> Employee:
        email = normalize_email(email)

        if await EmployeeService.get_by_email(db, email) is not None:
            raise DuplicateException("email", email)

        if fields.get("department_id") is not None:
            await DepartmentService.ensure_exists(db, fields["department_id"])

        employee = Employee(
            name=name,
            email=email,
            password_hash=hash_password(password),
            role=role,
            leave_requests=[],
            **fields,
        )
        db.add(employee)
        try:
            await db.flush()
        except IntegrityError as exc:
            await db.rollback()
            err = str(exc.orig)
            if "single_admin" in err or "employees.role" in err:
                raise ConflictError("An admin account already exists.")
            if "email" in err:
                raise DuplicateException("email", email)
            raise

        return await EmployeeService.get_employee(db, employee.id)

    @staticmethod
    async def create_employee(db: AsyncSession, data: EmployeeCreate) -> Employee:
        """Admin-created identity; role is always employee."""
        employee = await EmployeeService._create_identity(
            db,
            role=UserRole.employee,
            name=data.name,
            email=data.email,
            password=data.password,
            department_id=data.department_id,
            salary=data.salary,
            status=data.status,
            position=data.position,
            personal_details=_dump_block(data.personal_details, partial=False),
            contacts=_dump_block(data.contacts, partial=False),
            working_hours=_dump_block(data.working_hours, partial=False),
        )
        logger.info("Created employee %s", employee.id)
        return employee

    @staticmethod
    async def create_first_admin(
        db: AsyncSession,
        *,
        name: str,
        email: str,
        password: str,
    ) -> Employee:
        """Bootstrap the single self-registered admin.

        The existence check gives a clean error in the common case; the
        partial unique index on ``role`` catches concurrent attempts.
        """
        result = await db.execute(
            select(Employee.id).where(Employee.role == UserRole.admin).limit(1),
        )
        if result.first() is not None:
            logger.warning("Rejected admin self-registration: admin already exists")
            raise ConflictError("An admin account already exists. Cannot self-register.")

        admin = await EmployeeService._create_identity(
            db,
            role=UserRole.admin,
            name=name,
            email=email,
            password=password,
        )
        logger.info("Bootstrapped admin account %s", admin.id)
        return admin

    # ── Update ──────────────────────────────────────────────────────

    @staticmethod
    async def _apply_changes(
        db: AsyncSession,
        employee: Employee,
        data: BaseModel,
    ) -> Employee:
        changes = data.model_dump(exclude_unset=True, exclude=set(_NESTED_BLOCKS))

        for field in _NON_NULLABLE:
            if field in changes and changes[field] is None:
                raise ValidationException({field: ["This field may not be null."]})

        if "email" in changes:
            changes["email"] = normalize_email(changes["email"])
            if changes["email"] != employee.email:
                existing = await EmployeeService.get_by_email(db, changes["email"])
                if existing is not None:
                    raise DuplicateException("email", changes["email"])

        if changes.get("department_id") is not None:
            await DepartmentService.ensure_exists(db, changes["department_id"])

        for field, value in changes.items():
            setattr(employee, field, value)

        for block in _NESTED_BLOCKS:
            if block not in data.model_fields_set:
                continue
            patch = _dump_block(getattr(data, block), partial=True)
            # Reassign a new dict so the JSON column is flagged dirty
            setattr(
                employee,
                block,
                None if patch is None else deep_merge(getattr(employee, block), patch),
            )

        try:
            await db.flush()
        except IntegrityError as exc:
            await db.rollback()
            if "email" in str(exc.orig):
                raise DuplicateException("email", changes.get("email", ""))
            raise

        return await EmployeeService.get_employee(db, employee.id)

    @staticmethod
    async def update_employee(
        db: AsyncSession,
        employee_id: uuid.UUID,
        data: EmployeeUpdate,
    ) -> Employee:
        """Partial-update an employee; nested blocks are merged, not replaced."""
        employee = await EmployeeService.get_employee(
            db, employee_id, role=UserRole.employee,
        )
        return await EmployeeService._apply_changes(db, employee, data)

    @staticmethod
    async def update_own_profile(
        db: AsyncSession,
        identity_id: uuid.UUID,
        data: ProfileUpdate,
    ) -> Employee:
        """Self-service update of the caller's personal and contact blocks."""
        employee = await EmployeeService.get_employee(db, identity_id)
        return await EmployeeService._apply_changes(db, employee, data)


# ═════════════════════════════════════════════════════════════════════
# DepartmentService
# ═════════════════════════════════════════════════════════════════════


class DepartmentService:
    """Async CRUD operations for departments."""

    @staticmethod
    def _with_counts():
        """Departments LEFT OUTER JOINed to their employees, counted per row."""
        return (
            select(Department, func.count(Employee.id).label("employee_count"))
            .outerjoin(
                Employee,
                and_(
                    Employee.department_id == Department.id,
                    Employee.role == UserRole.employee,
                ),
            )
            .group_by(Department.id)
        )

    @staticmethod
    def _to_response(dept: Department, employee_count: int) -> DepartmentResponse:
        resp = DepartmentResponse.model_validate(dept)
        resp.employee_count = employee_count or 0
        return resp

    @staticmethod
    async def ensure_exists(db: AsyncSession, department_id: uuid.UUID) -> None:
        """Raise a validation error if a referenced department is unknown."""
        result = await db.execute(
            select(Department.id).where(Department.id == department_id),
        )
        if result.first() is None:
            raise ValidationException(
                {"department_id": [f"Department '{department_id}' does not exist."]},
            )

    @staticmethod
    async def list_departments(db: AsyncSession) -> list[DepartmentResponse]:
        """Return all departments sorted by name, with employee counts."""
        result = await db.execute(
            DepartmentService._with_counts().order_by(Department.name),
        )
        return [
            DepartmentService._to_response(dept, count)
            for dept, count in result.all()
        ]

    @staticmethod
    async def get_department(
        db: AsyncSession,
        department_id: uuid.UUID,
    ) -> DepartmentResponse:
        result = await db.execute(
            DepartmentService._with_counts().where(Department.id == department_id),
        )
        row = result.first()
        if row is None:
            raise NotFoundException("Department", str(department_id))
        return DepartmentService._to_response(*row)

    @staticmethod
    async def _get_model(db: AsyncSession, department_id: uuid.UUID) -> Department:
        result = await db.execute(
            select(Department).where(Department.id == department_id),
        )
        dept = result.scalars().first()
        if dept is None:
            raise NotFoundException("Department", str(department_id))
        return dept

    @staticmethod
    async def _name_taken(
        db: AsyncSession,
        name: str,
        *,
        exclude_id: Optional[uuid.UUID] = None,
    ) -> bool:
        query = select(Department.id).where(Department.name == name)
        if exclude_id is not None:
            query = query.where(Department.id != exclude_id)
        result = await db.execute(query)
        return result.first() is not None

    @staticmethod
    async def create_department(
        db: AsyncSession,
        data: DepartmentCreate,
    ) -> DepartmentResponse:
        name = data.name.strip()
        if not name:
            raise ValidationException({"name": ["Department name is required."]})
        if await DepartmentService._name_taken(db, name):
            raise DuplicateException("name", name)

        dept = Department(name=name, description=data.description)
        db.add(dept)
        try:
            await db.flush()
        except IntegrityError:
            await db.rollback()
            raise DuplicateException("name", name)

        return DepartmentService._to_response(dept, 0)

    @staticmethod
    async def update_department(
        db: AsyncSession,
        department_id: uuid.UUID,
        data: DepartmentUpdate,
    ) -> DepartmentResponse:
        dept = await DepartmentService._get_model(db, department_id)
        changes = data.model_dump(exclude_unset=True)

        if "name" in changes:
            name = (changes["name"] or "").strip()
            if not name:
                raise ValidationException({"name": ["Department name may not be empty."]})
            if await DepartmentService._name_taken(db, name, exclude_id=dept.id):
                raise DuplicateException("name", name)
            dept.name = name
        if "description" in changes:
            dept.description = changes["description"]

        try:
            await db.flush()
        except IntegrityError:
            await db.rollback()
            raise DuplicateException("name", dept.name)

        return await DepartmentService.get_department(db, dept.id)

    @staticmethod
    async def delete_department(db: AsyncSession, department_id: uuid.UUID) -> None:
        """Delete a department; referencing employees keep their record, unassigned."""
        dept = await DepartmentService._get_model(db, department_id)

        # Not every backend enforces ON DELETE SET NULL (SQLite without PRAGMA)
        await db.execute(
            update(Employee)
            .where(Employee.department_id == department_id)
            .values(department_id=None)
            .execution_options(synchronize_session="fetch"),
        )
        await db.delete(dept)
        await db.flush()
        logger.info("Deleted department %s", department_id)
