"""Email verification and local registration endpoints."""

from __future__ import annotations

import re

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field, field_validator
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_db
from services.users.email_verification import issue_verification_code, verify_email_code
from services.users.registration import create_local_user
from services.users.schemas import UserSummary

router = APIRouter(prefix="/auth", tags=["auth"])

PASSWORD_PATTERN = re.compile(r"^(?=.*[a-zA-Z])(?=.*\d)(?=.*[!@#$%^&*()_+=-]).{6,30}$")


class EmailVerificationRequest(BaseModel):
    email: EmailStr


class EmailVerificationConfirmRequest(BaseModel):
    email: EmailStr
    code: str = Field(min_length=4, max_length=12)


class DetailResponse(BaseModel):
    detail: str


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=30)
    password_confirmation: str

    @field_validator("password")
    @classmethod
    def _require_password_strength(cls, value: str) -> str:
        if not PASSWORD_PATTERN.match(value):
            raise ValueError(
                "Password must be 6-30 characters with a letter, a digit and a symbol"
            )
        return value


@router.post(
    "/email-verifications",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=DetailResponse,
)
async def request_email_verification(
    payload: EmailVerificationRequest,
    session: AsyncSession = Depends(get_db),
) -> DetailResponse:
    await issue_verification_code(session, str(payload.email))
    return DetailResponse(detail="Verification code issued")


@router.post("/email-verifications/confirm", response_model=DetailResponse)
async def confirm_email_verification(
    payload: EmailVerificationConfirmRequest,
    session: AsyncSession = Depends(get_db),
) -> DetailResponse:
    await verify_email_code(session, str(payload.email), payload.code)
    return DetailResponse(detail="Email verified")


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=UserSummary)
async def register(
    payload: RegisterRequest,
    session: AsyncSession = Depends(get_db),
) -> UserSummary:
    return await create_local_user(
        session,
        email=str(payload.email),
        password=payload.password,
        password_confirmation=payload.password_confirmation,
    )
