"""Leave Pydantic v2 schemas — request / response validation."""

from __future__ import annotations

import uuid
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from hr_records.common.constants import LeaveStatus


# ── Requests ────────────────────────────────────────────────────────

class LeaveRequestCreate(BaseModel):
    """Payload for an employee requesting leave for themselves."""

    start_date: date
    end_date: date
    reason: str = Field(..., min_length=1, max_length=1000)

    @field_validator("reason")
    @classmethod
    def _reason_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Reason is required.")
        return value

    @model_validator(mode="after")
    def _check_date_order(self) -> "LeaveRequestCreate":
        if self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date.")
        return self


class LeaveStatusUpdate(BaseModel):
    status: LeaveStatus


# ── Responses ───────────────────────────────────────────────────────

class LeaveRequestOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    employee_id: uuid.UUID
    start_date: date
    end_date: date
    reason: str
    status: LeaveStatus
    created_at: datetime


class EmployeeLeaveList(BaseModel):
    """Leave listing for one employee — id, name and requests only."""

    employee_id: uuid.UUID
    name: str
    leave_requests: list[LeaveRequestOut]
