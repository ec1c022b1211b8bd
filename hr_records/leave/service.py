"""Leave service — request creation, status transitions, listing.

A leave request lives inside its owner's record: every lookup goes through
the composite key ``(employee_id, request_id)``.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hr_records.auth.gate import AuthorizedIdentity
from hr_records.common.constants import LEAVE_TRANSITIONS, LeaveStatus, UserRole
from hr_records.common.exceptions import (
    ConflictError,
    ForbiddenException,
    NotFoundException,
    ValidationException,
)
from hr_records.core_hr.models import Employee
from hr_records.leave.models import LeaveRequest

logger = logging.getLogger(__name__)


class LeaveService:
    """Async leave workflow operations."""

    # ── Internal helpers ────────────────────────────────────────────

    @staticmethod
    async def _get_owner(db: AsyncSession, employee_id: uuid.UUID) -> Employee:
        result = await db.execute(select(Employee).where(Employee.id == employee_id))
        employee = result.scalars().first()
        if employee is None:
            raise NotFoundException("Employee", str(employee_id))
        return employee

    @staticmethod
    async def _next_sequence(db: AsyncSession, employee_id: uuid.UUID) -> int:
        result = await db.execute(
            select(func.coalesce(func.max(LeaveRequest.sequence), 0)).where(
                LeaveRequest.employee_id == employee_id,
            ),
        )
        return (result.scalar() or 0) + 1

    # ── Create ──────────────────────────────────────────────────────

    @staticmethod
    async def create_request(
        db: AsyncSession,
        owner_id: uuid.UUID,
        start_date: date,
        end_date: date,
        reason: str,
    ) -> LeaveRequest:
        """Append a pending leave request to the owner's record."""
        owner = await LeaveService._get_owner(db, owner_id)
        if owner.role is not UserRole.employee:
            raise ForbiddenException("Only employees can request leave.")

        if end_date < start_date:
            raise ValidationException(
                {"end_date": ["end_date must be on or after start_date."]},
            )
        reason = reason.strip()
        if not reason:
            raise ValidationException({"reason": ["Reason is required."]})

        leave = LeaveRequest(
            employee_id=owner.id,
            sequence=await LeaveService._next_sequence(db, owner.id),
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            status=LeaveStatus.pending,
        )
        db.add(leave)
        try:
            await db.flush()
        except IntegrityError:
            await db.rollback()
            raise ConflictError("Another leave request was filed concurrently; retry.")

        return leave

    # ── Transition ──────────────────────────────────────────────────

    @staticmethod
    async def transition_status(
        db: AsyncSession,
        owner_id: uuid.UUID,
        request_id: uuid.UUID,
        new_status: LeaveStatus,
    ) -> LeaveRequest:
        """Move a pending request to approved or rejected.

        Resolved requests are final: approving a rejected request (or the
        reverse) is a conflict.
        """
        if new_status is LeaveStatus.pending:
            raise ValidationException(
                {"status": ["Status must be 'approved' or 'rejected'."]},
            )

        await LeaveService._get_owner(db, owner_id)

        result = await db.execute(
            select(LeaveRequest).where(
                LeaveRequest.employee_id == owner_id,
                LeaveRequest.id == request_id,
            ),
        )
        leave = result.scalars().first()
        if leave is None:
            raise NotFoundException("LeaveRequest", str(request_id))

        if new_status not in LEAVE_TRANSITIONS[leave.status]:
            raise ConflictError(
                f"Leave request is already {leave.status.value}; it cannot become {new_status.value}.",
            )

        old_status = leave.status
        leave.status = new_status
        await db.flush()

        logger.info(
            "Leave request %s of employee %s: %s -> %s",
            leave.id, owner_id, old_status.value, new_status.value,
        )
        return leave

    # ── List ────────────────────────────────────────────────────────

    @staticmethod
    async def list_requests(
        db: AsyncSession,
        owner_id: uuid.UUID,
        requester: AuthorizedIdentity,
    ) -> tuple[Employee, Sequence[LeaveRequest]]:
        """Return the owner and their requests in creation order.

        Admins may read any employee's requests; everyone else only their own.
        """
        if not requester.is_admin and requester.id != owner_id:
            raise ForbiddenException("You can only view your own leave requests.")

        owner = await LeaveService._get_owner(db, owner_id)
        result = await db.execute(
            select(LeaveRequest)
            .where(LeaveRequest.employee_id == owner_id)
            .order_by(LeaveRequest.sequence),
        )
        return owner, result.scalars().all()
