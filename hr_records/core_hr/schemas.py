"""Core HR Pydantic v2 schemas — request / response validation.

Naming conventions:
  - *Create / *Update  → request bodies (write)
  - *Response / *Detail → response bodies (read)
  - *Brief / *ListItem → compact read representations
"""


import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from hr_records.common.constants import (
    EmployeeStatus,
    GenderType,
    LeaveStatus,
    MaritalStatus,
    UserRole,
    Weekday,
)


# ═════════════════════════════════════════════════════════════════════
# Shared / embedded (stored as JSONB)
# ═════════════════════════════════════════════════════════════════════


class AddressSchema(BaseModel):
    """Reusable address block."""

    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None


class EducationEntry(BaseModel):
    degree: Optional[str] = None
    institution: Optional[str] = None
    field_of_study: Optional[str] = None
    start_year: Optional[int] = None
    end_year: Optional[int] = None
    grade: Optional[str] = None


class WorkExperienceEntry(BaseModel):
    company_name: Optional[str] = None
    position: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    responsibilities: Optional[list[str]] = None
    location: Optional[str] = None


class PersonalDetailsSchema(BaseModel):
    """Personal details block. Every field is optional."""

    date_of_birth: Optional[date] = None
    address: Optional[AddressSchema] = None
    gender: Optional[GenderType] = None
    marital_status: Optional[MaritalStatus] = None
    nationality: Optional[str] = None
    languages_spoken: Optional[list[str]] = None
    education_history: Optional[list[EducationEntry]] = None
    previous_work_experience: Optional[list[WorkExperienceEntry]] = None


class EmergencyContactSchema(BaseModel):
    name: Optional[str] = None
    relationship: Optional[str] = None
    phone: Optional[str] = None


class ContactsSchema(BaseModel):
    phone: Optional[list[str]] = None
    emergency_contact: Optional[EmergencyContactSchema] = None


class WorkingHoursSchema(BaseModel):
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    days: Optional[list[Weekday]] = None


# ═════════════════════════════════════════════════════════════════════
# Department
# ═════════════════════════════════════════════════════════════════════


class DepartmentCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    description: Optional[str] = None


class DepartmentUpdate(BaseModel):
    """Partial update; omitted fields are left as they are."""

    name: Optional[str] = Field(None, min_length=1, max_length=150)
    description: Optional[str] = None


class DepartmentResponse(BaseModel):
    """Full department representation."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    # Enriched by the service layer
    employee_count: int = 0


class DepartmentBrief(BaseModel):
    """Minimal department info embedded in other responses."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str


# ═════════════════════════════════════════════════════════════════════
# Employee — write schemas
# ═════════════════════════════════════════════════════════════════════


class EmployeeCreate(BaseModel):
    """Payload for an admin creating a new employee. Role is always employee."""

    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    department_id: Optional[uuid.UUID] = None
    salary: Optional[Decimal] = Field(None, ge=0)
    status: EmployeeStatus = EmployeeStatus.active
    position: Optional[str] = Field(None, max_length=150)
    personal_details: Optional[PersonalDetailsSchema] = None
    contacts: Optional[ContactsSchema] = None
    working_hours: Optional[WorkingHoursSchema] = None


class EmployeeUpdate(BaseModel):
    """Partial-update payload (all fields optional). Role and password are not updatable."""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    email: Optional[EmailStr] = None
    department_id: Optional[uuid.UUID] = None
    salary: Optional[Decimal] = Field(None, ge=0)
    status: Optional[EmployeeStatus] = None
    position: Optional[str] = Field(None, max_length=150)
    personal_details: Optional[PersonalDetailsSchema] = None
    contacts: Optional[ContactsSchema] = None
    working_hours: Optional[WorkingHoursSchema] = None


class ProfileUpdate(BaseModel):
    """Self-service profile update — personal and contact blocks only."""

    model_config = ConfigDict(extra="forbid")

    personal_details: Optional[PersonalDetailsSchema] = None
    contacts: Optional[ContactsSchema] = None


# ═════════════════════════════════════════════════════════════════════
# Employee — read schemas
# ═════════════════════════════════════════════════════════════════════


class LeaveRequestBrief(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    start_date: date
    end_date: date
    reason: str
    status: LeaveStatus
    created_at: datetime


class EmployeeListItem(BaseModel):
    """Compact employee row for list endpoints."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    email: str
    role: UserRole
    status: EmployeeStatus
    position: Optional[str] = None
    salary: Optional[Decimal] = None
    department: Optional[DepartmentBrief] = None
    created_at: datetime


class EmployeeDetail(BaseModel):
    """Full identity record — never includes the credential hash."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    email: str
    role: UserRole
    status: EmployeeStatus
    position: Optional[str] = None
    salary: Optional[Decimal] = None
    department: Optional[DepartmentBrief] = None
    personal_details: Optional[dict] = None
    contacts: Optional[dict] = None
    working_hours: Optional[dict] = None
    leave_requests: list[LeaveRequestBrief] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
