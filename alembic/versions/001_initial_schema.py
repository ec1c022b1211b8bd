"""001 – Initial schema: departments, employees, leave_requests.

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19 10:00:00.000000+00:00
"""

from alembic import op

# Revision identifiers
revision = "001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

ENUM_TYPES: list[tuple[str, list[str]]] = [
    ("user_role", ["admin", "employee"]),
    ("employee_status", ["active", "inactive"]),
    ("leave_status", ["pending", "approved", "rejected"]),
]


def _create_enum(name: str, values: list[str]) -> None:
    vals = ", ".join(f"'{v}'" for v in values)
    op.execute(f"CREATE TYPE {name} AS ENUM ({vals})")


def _drop_enum(name: str) -> None:
    op.execute(f"DROP TYPE IF EXISTS {name}")


# ---------------------------------------------------------------------------
# UPGRADE
# ---------------------------------------------------------------------------


def upgrade() -> None:
    # ── Enum types ────────────────────────────────────────────────────────
    for name, values in ENUM_TYPES:
        _create_enum(name, values)

    # ── 1. departments ────────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE departments (
            id          UUID PRIMARY KEY,
            name        VARCHAR(150) NOT NULL UNIQUE,
            description TEXT,
            created_at  TIMESTAMPTZ DEFAULT NOW(),
            updated_at  TIMESTAMPTZ DEFAULT NOW()
        )
    """)

    # ── 2. employees ──────────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE employees (
            id               UUID PRIMARY KEY,
            name             VARCHAR(200) NOT NULL,
            email            VARCHAR(255) NOT NULL UNIQUE,
            password_hash    VARCHAR(255) NOT NULL,
            role             user_role NOT NULL DEFAULT 'employee',
            department_id    UUID REFERENCES departments(id) ON DELETE SET NULL,
            salary           NUMERIC(12, 2),
            status           employee_status NOT NULL DEFAULT 'active',
            position         VARCHAR(150),
            personal_details JSONB,
            contacts         JSONB,
            working_hours    JSONB,
            created_at       TIMESTAMPTZ DEFAULT NOW(),
            updated_at       TIMESTAMPTZ DEFAULT NOW(),
            CONSTRAINT ck_employees_salary_non_negative
                CHECK (salary IS NULL OR salary >= 0)
        )
    """)
    op.execute("CREATE INDEX ix_employees_department_id ON employees(department_id)")
    # A single admin may ever exist; concurrent bootstrap attempts race here
    op.execute("""
        CREATE UNIQUE INDEX uq_employees_single_admin
            ON employees(role)
            WHERE role = 'admin'
    """)

    # ── 3. leave_requests ─────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE leave_requests (
            id          UUID PRIMARY KEY,
            employee_id UUID NOT NULL REFERENCES employees(id) ON DELETE CASCADE,
            sequence    INTEGER NOT NULL,
            start_date  DATE NOT NULL,
            end_date    DATE NOT NULL,
            reason      TEXT NOT NULL,
            status      leave_status NOT NULL DEFAULT 'pending',
            created_at  TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_leave_request_sequence UNIQUE (employee_id, sequence)
        )
    """)


# ---------------------------------------------------------------------------
# DOWNGRADE
# ---------------------------------------------------------------------------


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS leave_requests")
    op.execute("DROP TABLE IF EXISTS employees")
    op.execute("DROP TABLE IF EXISTS departments")
    for name, _ in reversed(ENUM_TYPES):
        _drop_enum(name)
