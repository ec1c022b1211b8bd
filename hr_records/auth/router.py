"""Auth router — first-admin bootstrap, login, current user profile."""


from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from hr_records.auth.dependencies import get_current_identity
from hr_records.auth.gate import AuthorizedIdentity
from hr_records.auth.schemas import LoginRequest, RegisterAdminRequest, TokenResponse
from hr_records.auth.service import authenticate, build_token_response
from hr_records.common.rate_limit import limiter
from hr_records.config import settings
from hr_records.core_hr.schemas import EmployeeDetail, ProfileUpdate
from hr_records.core_hr.service import EmployeeService
from hr_records.database import get_db

router = APIRouter(prefix="", tags=["auth"])


# ── POST /register-admin — One-time admin bootstrap ────────────────

@router.post("/register-admin", response_model=TokenResponse, status_code=201)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def register_admin(
    request: Request,
    body: RegisterAdminRequest,
    db: AsyncSession = Depends(get_db),
):
    """Create the first admin account. Fails with 409 once an admin exists."""
    admin = await EmployeeService.create_first_admin(
        db, name=body.name, email=body.email, password=body.password,
    )
    return build_token_response(admin)


# ── POST /login ─────────────────────────────────────────────────────

@router.post("/login", response_model=TokenResponse)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def login(
    request: Request,
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    employee = await authenticate(db, body.email, body.password)
    return build_token_response(employee)


# ── GET /me — Current user profile ─────────────────────────────────

@router.get("/me", response_model=EmployeeDetail)
async def me(
    identity: AuthorizedIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    """The caller's own record. Takes no id: the token decides whose profile."""
    employee = await EmployeeService.get_employee(db, identity.id)
    return EmployeeDetail.model_validate(employee)


# ── PUT /me — Update own personal / contact details ────────────────

@router.put("/me", response_model=EmployeeDetail)
async def update_me(
    body: ProfileUpdate,
    identity: AuthorizedIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    employee = await EmployeeService.update_own_profile(db, identity.id, body)
    return EmployeeDetail.model_validate(employee)
