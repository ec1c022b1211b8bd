"""Auth Pydantic schemas for request / response validation."""


import uuid

from pydantic import BaseModel, EmailStr, Field

from hr_records.common.constants import UserRole


# ── Requests ────────────────────────────────────────────────────────

class RegisterAdminRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


# ── Embedded / Shared ──────────────────────────────────────────────

class UserInfo(BaseModel):
    id: uuid.UUID
    name: str
    email: str
    role: UserRole


# ── Responses ───────────────────────────────────────────────────────

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserInfo
