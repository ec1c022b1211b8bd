"""Department module test suite — CRUD, duplicate name detection, employee
counts, and delete leaving members unassigned.

Uses the shared conftest.py pattern with in-memory SQLite.
"""

from __future__ import annotations

import uuid

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hr_records.common.exceptions import (
    DuplicateException,
    NotFoundException,
    ValidationException,
)
from hr_records.core_hr.models import Department, Employee
from hr_records.core_hr.schemas import DepartmentCreate, DepartmentUpdate
from hr_records.core_hr.service import DepartmentService
from tests.conftest import TestSessionFactory, insert_department, insert_employee


# ═════════════════════════════════════════════════════════════════════
# 1. DEPARTMENT CRUD (service layer)
# ═════════════════════════════════════════════════════════════════════


class TestDepartmentService:
    """Tests for department create, read, update, delete."""

    async def test_create_department(self, db: AsyncSession):
        dept = await DepartmentService.create_department(
            db, DepartmentCreate(name="  Finance  ", description="Money"),
        )
        assert dept.name == "Finance"
        assert dept.employee_count == 0

    async def test_duplicate_name(self, db: AsyncSession):
        await DepartmentService.create_department(db, DepartmentCreate(name="Finance"))

        with pytest.raises(DuplicateException):
            await DepartmentService.create_department(db, DepartmentCreate(name="Finance"))

    async def test_blank_name_after_strip(self, db: AsyncSession):
        with pytest.raises(ValidationException):
            await DepartmentService.create_department(db, DepartmentCreate(name="   "))

    async def test_get_unknown(self, db: AsyncSession):
        with pytest.raises(NotFoundException):
            await DepartmentService.get_department(db, uuid.uuid4())

    async def test_rename_to_own_name_allowed(self, db: AsyncSession):
        dept = await DepartmentService.create_department(db, DepartmentCreate(name="Finance"))

        updated = await DepartmentService.update_department(
            db, dept.id, DepartmentUpdate(name="Finance", description="Still money"),
        )
        assert updated.description == "Still money"

    async def test_rename_onto_other_name(self, db: AsyncSession):
        await DepartmentService.create_department(db, DepartmentCreate(name="Finance"))
        legal = await DepartmentService.create_department(db, DepartmentCreate(name="Legal"))

        with pytest.raises(DuplicateException):
            await DepartmentService.update_department(
                db, legal.id, DepartmentUpdate(name="Finance"),
            )

    async def test_list_sorted_with_counts(self, db: AsyncSession):
        sales = await insert_department(db, name="Sales")
        await insert_department(db, name="Audit")
        await insert_employee(db, email="a@example.com", department_id=sales["id"])
        await insert_employee(db, email="b@example.com", department_id=sales["id"])

        departments = await DepartmentService.list_departments(db)
        assert [(d.name, d.employee_count) for d in departments] == [
            ("Audit", 0),
            ("Sales", 2),
        ]


# ═════════════════════════════════════════════════════════════════════
# 2. DEPARTMENT API
# ═════════════════════════════════════════════════════════════════════


class TestDepartmentAPI:

    async def test_create_and_get(self, client, admin_headers):
        created = await client.post(
            "/api/v1/departments",
            headers=admin_headers,
            json={"name": "Research", "description": "R&D"},
        )
        assert created.status_code == 201
        dept_id = created.json()["data"]["id"]

        resp = await client.get(f"/api/v1/departments/{dept_id}", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["name"] == "Research"
        assert resp.json()["data"]["employee_count"] == 0

    async def test_duplicate_name_422(self, client, admin_headers, test_department):
        resp = await client.post(
            "/api/v1/departments",
            headers=admin_headers,
            json={"name": test_department["name"]},
        )
        assert resp.status_code == 422
        assert "name" in resp.json()["errors"]

    async def test_empty_name_422(self, client, admin_headers):
        resp = await client.post(
            "/api/v1/departments", headers=admin_headers, json={"name": ""},
        )
        assert resp.status_code == 422

    async def test_update(self, client, admin_headers, test_department):
        resp = await client.put(
            f"/api/v1/departments/{test_department['id']}",
            headers=admin_headers,
            json={"description": "Platform and product"},
        )
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["description"] == "Platform and product"
        assert data["name"] == test_department["name"]

    async def test_list_counts_only_employees(self, client, admin_headers, test_employee, test_department):
        resp = await client.get("/api/v1/departments", headers=admin_headers)
        assert resp.status_code == 200

        (dept,) = resp.json()["data"]
        assert dept["id"] == str(test_department["id"])
        assert dept["employee_count"] == 1

    async def test_delete_leaves_employees_unassigned(
        self, client, admin_headers, test_employee, test_department,
    ):
        resp = await client.delete(
            f"/api/v1/departments/{test_department['id']}", headers=admin_headers,
        )
        assert resp.status_code == 200

        async with TestSessionFactory() as session:
            emp = await session.get(Employee, test_employee["id"])
            remaining = (await session.execute(select(Department))).scalars().all()

        assert emp is not None
        assert emp.department_id is None
        assert remaining == []

    async def test_delete_unknown(self, client, admin_headers):
        resp = await client.delete(
            f"/api/v1/departments/{uuid.uuid4()}", headers=admin_headers,
        )
        assert resp.status_code == 404

    async def test_employee_cannot_manage_departments(self, client, employee_headers):
        resp = await client.post(
            "/api/v1/departments", headers=employee_headers, json={"name": "Shadow IT"},
        )
        assert resp.status_code == 403
