"""Employee module test suite — create, list/filter/search, detail, partial update.

All routes are admin-only; the admin identity itself never shows up as an
employee record.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy import select

from hr_records.common.constants import EmployeeStatus
from hr_records.core_hr.models import Employee
from tests.conftest import TestSessionFactory, insert_department, insert_employee


def _create_payload(**overrides) -> dict:
    payload = {
        "name": "Priya Shah",
        "email": "priya.shah@example.com",
        "password": "initial-pass-123",
        "salary": "48000.00",
        "position": "QA Engineer",
        "personal_details": {
            "date_of_birth": "1994-03-12",
            "gender": "female",
            "address": {"street": "12 Park Lane", "city": "Pune", "country": "India"},
        },
        "contacts": {
            "phone": ["+91-9000000000"],
            "emergency_contact": {"name": "Ravi Shah", "relationship": "Brother"},
        },
        "working_hours": {
            "start_time": "09:00",
            "end_time": "18:00",
            "days": ["Monday", "Tuesday", "Wednesday"],
        },
    }
    payload.update(overrides)
    return payload


# ═════════════════════════════════════════════════════════════════════
# 1. CREATE
# ═════════════════════════════════════════════════════════════════════


class TestCreateEmployee:

    async def test_create_employee(self, client, admin_headers, test_department):
        resp = await client.post(
            "/api/v1/employees",
            headers=admin_headers,
            json=_create_payload(department_id=str(test_department["id"])),
        )
        assert resp.status_code == 201

        data = resp.json()["data"]
        assert data["role"] == "employee"
        assert data["status"] == "active"
        assert data["department"]["id"] == str(test_department["id"])
        assert data["personal_details"]["address"]["city"] == "Pune"
        assert data["working_hours"]["days"] == ["Monday", "Tuesday", "Wednesday"]
        assert data["leave_requests"] == []
        assert "password" not in data
        assert "password_hash" not in data

    async def test_created_employee_can_log_in(self, client, admin_headers):
        await client.post("/api/v1/employees", headers=admin_headers, json=_create_payload())

        resp = await client.post(
            "/api/v1/auth/login",
            json={"email": "priya.shah@example.com", "password": "initial-pass-123"},
        )
        assert resp.status_code == 200
        assert resp.json()["user"]["role"] == "employee"

    async def test_duplicate_email(self, client, admin_headers, test_employee):
        resp = await client.post(
            "/api/v1/employees",
            headers=admin_headers,
            json=_create_payload(email=test_employee["email"].upper()),
        )
        assert resp.status_code == 422
        assert "email" in resp.json()["errors"]

    async def test_email_taken_by_admin(self, client, admin_headers, test_admin):
        resp = await client.post(
            "/api/v1/employees",
            headers=admin_headers,
            json=_create_payload(email=test_admin["email"]),
        )
        assert resp.status_code == 422

    async def test_unknown_department(self, client, admin_headers):
        resp = await client.post(
            "/api/v1/employees",
            headers=admin_headers,
            json=_create_payload(department_id=str(uuid.uuid4())),
        )
        assert resp.status_code == 422
        assert "department_id" in resp.json()["errors"]

    async def test_negative_salary_rejected(self, client, admin_headers):
        resp = await client.post(
            "/api/v1/employees",
            headers=admin_headers,
            json=_create_payload(salary="-1"),
        )
        assert resp.status_code == 422

    async def test_invalid_weekday_rejected(self, client, admin_headers):
        resp = await client.post(
            "/api/v1/employees",
            headers=admin_headers,
            json=_create_payload(working_hours={"days": ["Funday"]}),
        )
        assert resp.status_code == 422

    async def test_role_in_payload_ignored(self, client, admin_headers):
        resp = await client.post(
            "/api/v1/employees",
            headers=admin_headers,
            json=_create_payload(role="admin"),
        )
        assert resp.status_code == 201
        assert resp.json()["data"]["role"] == "employee"


# ═════════════════════════════════════════════════════════════════════
# 2. LIST / FILTER / SEARCH
# ═════════════════════════════════════════════════════════════════════


class TestListEmployees:

    async def _seed(self, db):
        eng = await insert_department(db, name="Engineering")
        ops = await insert_department(db, name="Operations")
        now = datetime.now(timezone.utc)
        await insert_employee(
            db, email="alice@example.com", name="Alice Kumar",
            department_id=eng["id"], position="Backend Engineer",
            created_at=now - timedelta(days=3),
        )
        await insert_employee(
            db, email="bob@example.com", name="Bob Menon",
            department_id=eng["id"], position="Frontend Engineer",
            status=EmployeeStatus.inactive, created_at=now - timedelta(days=2),
        )
        await insert_employee(
            db, email="carol@example.com", name="Carol Dsouza",
            department_id=ops["id"], position="Ops Lead",
            created_at=now - timedelta(days=1),
        )
        return eng, ops

    async def test_list_excludes_admin(self, client, db, admin_headers):
        await self._seed(db)

        resp = await client.get("/api/v1/employees", headers=admin_headers)
        assert resp.status_code == 200

        body = resp.json()
        assert body["total"] == 3
        assert all(item["role"] == "employee" for item in body["data"])

    async def test_newest_first(self, client, db, admin_headers):
        await self._seed(db)

        resp = await client.get("/api/v1/employees", headers=admin_headers)
        names = [item["name"] for item in resp.json()["data"]]
        assert names == ["Carol Dsouza", "Bob Menon", "Alice Kumar"]

    async def test_filter_by_department_and_status(self, client, db, admin_headers):
        eng, _ = await self._seed(db)

        resp = await client.get(
            "/api/v1/employees",
            headers=admin_headers,
            params={"department_id": str(eng["id"]), "status": "active"},
        )
        assert [item["name"] for item in resp.json()["data"]] == ["Alice Kumar"]

    async def test_filter_by_position(self, client, db, admin_headers):
        await self._seed(db)

        resp = await client.get(
            "/api/v1/employees", headers=admin_headers, params={"position": "engineer"},
        )
        assert resp.json()["total"] == 2

    async def test_search_name_or_email(self, client, db, admin_headers):
        await self._seed(db)

        by_name = await client.get(
            "/api/v1/employees", headers=admin_headers, params={"q": "menon"},
        )
        by_email = await client.get(
            "/api/v1/employees", headers=admin_headers, params={"q": "CAROL@"},
        )
        assert [i["name"] for i in by_name.json()["data"]] == ["Bob Menon"]
        assert [i["name"] for i in by_email.json()["data"]] == ["Carol Dsouza"]

    async def test_no_matches(self, client, db, admin_headers):
        await self._seed(db)

        resp = await client.get(
            "/api/v1/employees", headers=admin_headers, params={"q": "zzz"},
        )
        body = resp.json()
        assert body["data"] == []
        assert body["total"] == 0

    async def test_departments_listed_with_counts(self, client, db, admin_headers):
        await self._seed(db)
        await insert_department(db, name="Archive")

        resp = await client.get(
            "/api/v1/employees", headers=admin_headers, params={"q": "alice"},
        )
        departments = resp.json()["departments"]
        assert [(d["name"], d["employee_count"]) for d in departments] == [
            ("Archive", 0),
            ("Engineering", 2),
            ("Operations", 1),
        ]


# ═════════════════════════════════════════════════════════════════════
# 3. DETAIL
# ═════════════════════════════════════════════════════════════════════


class TestGetEmployee:

    async def test_get_employee(self, client, admin_headers, test_employee):
        resp = await client.get(
            f"/api/v1/employees/{test_employee['id']}", headers=admin_headers,
        )
        assert resp.status_code == 200
        assert resp.json()["data"]["email"] == test_employee["email"]

    async def test_unknown_id(self, client, admin_headers):
        resp = await client.get(f"/api/v1/employees/{uuid.uuid4()}", headers=admin_headers)
        assert resp.status_code == 404
        assert resp.json()["type"].endswith("/not-found")

    async def test_admin_id_is_not_an_employee(self, client, admin_headers, test_admin):
        resp = await client.get(
            f"/api/v1/employees/{test_admin['id']}", headers=admin_headers,
        )
        assert resp.status_code == 404

    async def test_malformed_id(self, client, admin_headers):
        resp = await client.get("/api/v1/employees/not-a-uuid", headers=admin_headers)
        assert resp.status_code == 422


# ═════════════════════════════════════════════════════════════════════
# 4. UPDATE
# ═════════════════════════════════════════════════════════════════════


class TestUpdateEmployee:

    async def test_partial_nested_update_keeps_siblings(self, client, db, admin_headers):
        employee = await insert_employee(
            db,
            personal_details={
                "nationality": "Indian",
                "address": {"street": "12 Park Lane", "city": "Pune"},
            },
        )

        resp = await client.put(
            f"/api/v1/employees/{employee['id']}",
            headers=admin_headers,
            json={"personal_details": {"address": {"city": "Mumbai"}}},
        )
        assert resp.status_code == 200

        details = resp.json()["data"]["personal_details"]
        assert details["address"] == {"street": "12 Park Lane", "city": "Mumbai"}
        assert details["nationality"] == "Indian"

    async def test_gender_only_update_keeps_address(self, client, db, admin_headers):
        employee = await insert_employee(
            db,
            personal_details={"gender": "male", "address": {"city": "Pune"}},
        )

        resp = await client.put(
            f"/api/v1/employees/{employee['id']}",
            headers=admin_headers,
            json={"personal_details": {"gender": "other"}},
        )
        details = resp.json()["data"]["personal_details"]
        assert details == {"gender": "other", "address": {"city": "Pune"}}

    async def test_omitted_fields_unchanged(self, client, admin_headers, test_employee):
        resp = await client.put(
            f"/api/v1/employees/{test_employee['id']}",
            headers=admin_headers,
            json={"position": "Staff Engineer"},
        )
        data = resp.json()["data"]
        assert data["position"] == "Staff Engineer"
        assert data["name"] == test_employee["name"]
        assert Decimal(data["salary"]) == test_employee["salary"]

    async def test_role_not_changeable(self, client, admin_headers, test_employee):
        resp = await client.put(
            f"/api/v1/employees/{test_employee['id']}",
            headers=admin_headers,
            json={"role": "admin", "status": "inactive"},
        )
        assert resp.status_code == 200

        async with TestSessionFactory() as session:
            emp = await session.get(Employee, test_employee["id"])
        assert emp.role.value == "employee"
        assert emp.status is EmployeeStatus.inactive

    async def test_null_name_rejected(self, client, admin_headers, test_employee):
        resp = await client.put(
            f"/api/v1/employees/{test_employee['id']}",
            headers=admin_headers,
            json={"name": None},
        )
        assert resp.status_code == 422

    async def test_email_conflict(self, client, db, admin_headers, test_employee):
        other = await insert_employee(db, email="other@example.com", name="Other")

        resp = await client.put(
            f"/api/v1/employees/{other['id']}",
            headers=admin_headers,
            json={"email": test_employee["email"]},
        )
        assert resp.status_code == 422
        assert "email" in resp.json()["errors"]

    async def test_clear_department(self, client, admin_headers, test_employee):
        resp = await client.put(
            f"/api/v1/employees/{test_employee['id']}",
            headers=admin_headers,
            json={"department_id": None},
        )
        assert resp.status_code == 200
        assert resp.json()["data"]["department"] is None

    async def test_update_unknown_employee(self, client, admin_headers):
        resp = await client.put(
            f"/api/v1/employees/{uuid.uuid4()}",
            headers=admin_headers,
            json={"position": "Ghost"},
        )
        assert resp.status_code == 404

    async def test_admin_record_not_updatable_here(self, client, admin_headers, test_admin):
        resp = await client.put(
            f"/api/v1/employees/{test_admin['id']}",
            headers=admin_headers,
            json={"position": "Chief"},
        )
        assert resp.status_code == 404

    async def test_password_stored_hashed(self, db, test_employee):
        result = await db.execute(select(Employee.password_hash))
        assert result.scalar().startswith("$2")
