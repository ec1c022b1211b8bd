"""Shared test fixtures — async DB, client, auth helpers, factories.

Reusable across all test modules (auth, employees, departments, leave, dashboard).
Uses SQLite + aiosqlite for fast isolated tests without PostgreSQL.
"""

from __future__ import annotations

import os

# Set test settings before any other import touches pydantic-settings
os.environ.setdefault("JWT_SECRET", "test-secret-for-ci-do-not-use-in-production")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("AUTH_RATE_LIMIT", "1000/minute")

import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import AsyncGenerator, Optional

import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from hr_records.auth.passwords import hash_password
from hr_records.common.constants import EmployeeStatus, UserRole
from hr_records.config import settings
from hr_records.database import Base, get_db
from hr_records.main import create_app

# Import ALL model modules so SQLAlchemy can resolve cross-module relationships
# (Employee → LeaveRequest)
import hr_records.core_hr.models  # noqa: F401
import hr_records.leave.models  # noqa: F401

# ── SQLite compat: compile PG-specific types to TEXT/CHAR ───────────

from sqlalchemy.dialects.postgresql import JSONB, UUID as PG_UUID
from sqlalchemy.ext.compiler import compiles


@compiles(JSONB, "sqlite")
def _jsonb_sqlite(element, compiler, **kw):
    return "TEXT"


@compiles(PG_UUID, "sqlite")
def _uuid_sqlite(element, compiler, **kw):
    return "CHAR(36)"


# ── Test database (SQLite in-memory) ────────────────────────────────

TEST_DATABASE_URL = "sqlite+aiosqlite://"

engine = create_async_engine(
    TEST_DATABASE_URL,
    echo=False,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestSessionFactory = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False,
)

DEFAULT_PASSWORD = "correct-horse-battery"


@pytest.fixture(autouse=True)
async def _setup_db():
    """Create all tables before each test, drop after."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture(autouse=True)
def _reset_rate_limiter():
    """Reset rate limiter storage between tests to prevent cross-test interference."""
    from hr_records.common.rate_limit import limiter
    if hasattr(limiter, "_storage"):
        limiter._storage.reset()
    yield


async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
    async with TestSessionFactory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── FastAPI test client ─────────────────────────────────────────────

@pytest.fixture
async def app():
    """Create a fresh app instance with DB dependency overridden."""
    application = create_app()
    application.dependency_overrides[get_db] = _override_get_db
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client wired to the test app."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# ── Database session (for direct DB operations in tests) ────────────

@pytest.fixture
async def db() -> AsyncGenerator[AsyncSession, None]:
    async with TestSessionFactory() as session:
        yield session
        await session.commit()


# ── Model factories ─────────────────────────────────────────────────

def _make_department(
    *,
    name: str = "Engineering",
    description: Optional[str] = "Builds the product",
) -> dict:
    return dict(
        id=uuid.uuid4(),
        name=name,
        description=description,
        created_at=datetime.now(timezone.utc),
        updated_at=datetime.now(timezone.utc),
    )


def _make_employee(
    *,
    email: str = "jane.doe@example.com",
    name: str = "Jane Doe",
    role: UserRole = UserRole.employee,
    department_id: Optional[uuid.UUID] = None,
    salary: Optional[Decimal] = Decimal("42000.00"),
    status: EmployeeStatus = EmployeeStatus.active,
    position: Optional[str] = "Backend Engineer",
    password: str = DEFAULT_PASSWORD,
    personal_details: Optional[dict] = None,
    contacts: Optional[dict] = None,
    created_at: Optional[datetime] = None,
) -> dict:
    now = created_at or datetime.now(timezone.utc)
    return dict(
        id=uuid.uuid4(),
        name=name,
        email=email,
        password_hash=hash_password(password),
        role=role,
        department_id=department_id,
        salary=salary,
        status=status,
        position=position,
        personal_details=personal_details,
        contacts=contacts,
        created_at=now,
        updated_at=now,
    )


async def insert_department(db: AsyncSession, **kwargs) -> dict:
    """Persist a department row and commit so the API session can see it."""
    from hr_records.core_hr.models import Department

    data = _make_department(**kwargs)
    db.add(Department(**data))
    await db.commit()
    return data


async def insert_employee(db: AsyncSession, **kwargs) -> dict:
    """Persist an identity row and commit so the API session can see it."""
    from hr_records.core_hr.models import Employee

    data = _make_employee(**kwargs)
    db.add(Employee(**data))
    await db.commit()
    return data


@pytest.fixture
async def test_department(db) -> dict:
    """Insert a test department and return its data dict."""
    return await insert_department(db)


@pytest.fixture
async def test_employee(db, test_department) -> dict:
    """Insert an active employee assigned to test_department."""
    return await insert_employee(db, department_id=test_department["id"])


@pytest.fixture
async def test_admin(db) -> dict:
    """Insert the single admin account."""
    return await insert_employee(
        db,
        email="admin@example.com",
        name="Ada Admin",
        role=UserRole.admin,
        salary=None,
        position=None,
    )


# ── Auth helpers ────────────────────────────────────────────────────

def create_access_token(
    identity_id: uuid.UUID,
    role: UserRole = UserRole.employee,
    expired: bool = False,
) -> str:
    """Generate a JWT access token for testing."""
    if expired:
        exp = datetime.now(timezone.utc) - timedelta(hours=1)
    else:
        exp = datetime.now(timezone.utc) + timedelta(hours=settings.JWT_EXPIRY_HOURS)
    payload = {
        "sub": str(identity_id),
        "role": role.value,
        "type": "access",
        "exp": exp,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def bearer(identity: dict) -> dict[str, str]:
    """Authorization header for a factory-made identity."""
    token = create_access_token(identity["id"], identity["role"])
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(test_admin) -> dict[str, str]:
    return bearer(test_admin)


@pytest.fixture
def employee_headers(test_employee) -> dict[str, str]:
    return bearer(test_employee)
