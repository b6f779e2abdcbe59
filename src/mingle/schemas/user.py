"""User-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class RegisterRequest(BaseModel):
    """Schema for account registration."""

    name: str = Field(..., min_length=3, max_length=256, description="Display name")
    email: EmailStr = Field(..., description="Unique login email")
    password: str = Field(..., min_length=6, max_length=1024, description="Plaintext password")

    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("email")
    @classmethod
    def validate_email_length(cls, v: str) -> str:
        """Match the length bounds enforced on login."""
        if not 6 <= len(v) <= 256:
            raise ValueError("Email must be between 6 and 256 characters")
        return v


class LoginRequest(BaseModel):
    """Schema for login submissions."""

    email: EmailStr
    password: str = Field(..., min_length=6, max_length=1024)

    model_config = ConfigDict(str_strip_whitespace=True)


class LoginResponse(BaseModel):
    """Token returned after a successful login."""

    auth_token: str = Field(..., alias="auth-token", description="Bearer token for the auth-token header")

    model_config = ConfigDict(populate_by_name=True)


class UserResponse(BaseModel):
    """Public view of a user; the password hash is never included."""

    id: int
    name: str
    email: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
