from pydantic import EmailStr, Field, field_validator
from typing import Any, Dict, Optional

from app.models.base import CamelModel


class SignupRequest(CamelModel):
    """
    Body of POST /signup. All fields are required.
    """

    email: Optional[EmailStr] = None
    password: Optional[str] = None
    name: Optional[str] = None
    company_name: Optional[str] = None
    location: Optional[str] = None

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_is_missing(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def missing_fields(self) -> list:
        return [
            field for field in ("email", "password", "name", "company_name", "location")
            if not (getattr(self, field) or "").strip()
        ]


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class AuthenticatedUser(CamelModel):
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    company_name: Optional[str] = None
    location: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


class SignupResponse(CamelModel):
    success: bool = True
    user: AuthenticatedUser


class LoginResponse(CamelModel):
    access_token: str
    refresh_token: Optional[str] = None
    expires_at: Optional[int] = None
    user: AuthenticatedUser
