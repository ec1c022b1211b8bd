"""Leave router — self-service requests, admin status changes, listing."""


import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from hr_records.auth.dependencies import (
    get_current_identity,
    require_admin,
    require_employee,
)
from hr_records.auth.gate import AuthorizedIdentity
from hr_records.database import get_db
from hr_records.leave.schemas import (
    EmployeeLeaveList,
    LeaveRequestCreate,
    LeaveRequestOut,
    LeaveStatusUpdate,
)
from hr_records.leave.service import LeaveService

router = APIRouter(prefix="", tags=["leave"])


# ── POST / — Request leave for yourself ─────────────────────────────

@router.post("", response_model=LeaveRequestOut, status_code=201)
async def create_leave_request(
    body: LeaveRequestCreate,
    identity: AuthorizedIdentity = Depends(require_employee),
    db: AsyncSession = Depends(get_db),
):
    """Create a pending leave request owned by the caller (employees only)."""
    return await LeaveService.create_request(
        db, identity.id, body.start_date, body.end_date, body.reason,
    )


# ── GET /{employee_id} — List an employee's requests ───────────────

@router.get("/{employee_id}", response_model=EmployeeLeaveList)
async def list_leave_requests(
    employee_id: uuid.UUID,
    identity: AuthorizedIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    """Leave requests in creation order. Owner or admin."""
    owner, requests = await LeaveService.list_requests(db, employee_id, identity)
    return EmployeeLeaveList(
        employee_id=owner.id,
        name=owner.name,
        leave_requests=[LeaveRequestOut.model_validate(r) for r in requests],
    )


# ── PATCH /{employee_id}/{request_id} — Approve / reject ───────────

@router.patch("/{employee_id}/{request_id}", response_model=LeaveRequestOut)
async def update_leave_status(
    employee_id: uuid.UUID,
    request_id: uuid.UUID,
    body: LeaveStatusUpdate,
    admin: AuthorizedIdentity = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Approve or reject a pending leave request. Admin only."""
    return await LeaveService.transition_status(
        db, employee_id, request_id, body.status,
    )
