from __future__ import annotations

from pydantic import BaseModel, Field

from .config import DEFAULT_AUTH_CONFIG

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., pattern=_EMAIL_PATTERN, max_length=255)
    password: str = Field(..., min_length=DEFAULT_AUTH_CONFIG.min_password_length)


class VerifyEmailRequest(BaseModel):
    email: str = Field(..., pattern=_EMAIL_PATTERN)
    code: str = Field(..., min_length=6, max_length=6)


class ResendVerificationRequest(BaseModel):
    email: str = Field(..., pattern=_EMAIL_PATTERN)


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UpdateProfileRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., pattern=_EMAIL_PATTERN, max_length=255)
    password: str | None = Field(default=None, min_length=DEFAULT_AUTH_CONFIG.min_password_length)
