from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

from fleet_ledger.models.user import UserRole
from fleet_ledger.schemas.common import CamelModel

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

# bcrypt refuses passwords longer than 72 bytes once encoded
MAX_PASSWORD_BYTES = 72


def _check_password_bytes(password: str) -> str:
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes once UTF-8 encoded")
    return password


class SignupRequest(BaseModel):
    email: str = Field(..., pattern=EMAIL_PATTERN, description="Login email, unique")
    password: str = Field(..., min_length=8)
    name: Optional[str] = None

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v):
        return _check_password_bytes(v)


class LoginRequest(BaseModel):
    email: str = Field(..., pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=1)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v):
        return _check_password_bytes(v)


class UserRead(CamelModel):
    id: int
    email: str
    name: Optional[str] = None
    role: UserRole
    created_at: datetime


class AuthResponse(BaseModel):
    """Account plus the bearer token to send in the Authorization header."""
    user: UserRead
    access_token: str
    token_type: str = "bearer"
