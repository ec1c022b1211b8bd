"""Leave ORM model: LeaveRequest (owned by an Employee)."""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from typing import TYPE_CHECKING

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hr_records.common.constants import LeaveStatus
from hr_records.database import Base

if TYPE_CHECKING:
    from hr_records.core_hr.models import Employee


class LeaveRequest(Base):
    """A leave request nested inside exactly one employee record.

    Always addressed by ``(employee_id, id)``; there is no lookup by ``id``
    alone.
    """

    __tablename__ = "leave_requests"
    __table_args__ = (
        sa.UniqueConstraint("employee_id", "sequence", name="uq_leave_request_sequence"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    employee_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        sa.ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
    )
    sequence: Mapped[int] = mapped_column(sa.Integer, nullable=False)
    start_date: Mapped[date] = mapped_column(sa.Date, nullable=False)
    end_date: Mapped[date] = mapped_column(sa.Date, nullable=False)
    reason: Mapped[str] = mapped_column(sa.Text, nullable=False)
    status: Mapped[LeaveStatus] = mapped_column(
        sa.Enum(LeaveStatus, name="leave_status"),
        nullable=False,
        default=LeaveStatus.pending,
    )
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    # Relationships
    employee: Mapped[Employee] = relationship(
        back_populates="leave_requests",
    )

    def __repr__(self) -> str:
        return f"<LeaveRequest {self.start_date}..{self.end_date} {self.status.value}>"
