"""
User model and authentication DTOs.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, TypeAdapter, ValidationError

from question_bank.models.common import Document, new_object_id, utcnow


_email_adapter = TypeAdapter(EmailStr)


def normalize_email(value: str) -> str:
    """Canonical form stored for an address; strings that are not emails come back as-is."""
    try:
        return str(_email_adapter.validate_python(value))
    except ValidationError:
        return value


class UserRole(str, Enum):
    """User roles for authorization."""
    ADMIN = "admin"
    STUDENT = "student"


# ===== Database Model =====
class User(Document):
    """User document; ``password`` holds the bcrypt hash, never plain text."""
    id: str = Field(default_factory=new_object_id, alias="_id")
    email: EmailStr
    password: str = Field(..., description="Bcrypt hashed password")
    role: UserRole = UserRole.STUDENT
    created_at: datetime = Field(default_factory=utcnow)

    def public(self) -> dict:
        return self.model_dump(by_alias=True, mode="json", exclude={"password"})


# ===== Request DTOs =====
class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6, description="Password (min 6 chars)")


class LoginRequest(BaseModel):
    # Optional so a missing field yields the login-specific 400 message
    email: Optional[str] = None
    password: Optional[str] = None


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


# ===== Response DTOs =====
class AuthResponse(BaseModel):
    success: bool = True
    token: str
    userId: str
    role: UserRole
