"""User/auth request and response schemas - API contract and validation."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    # Argon2 has no 72-byte limit; cap length to bound hashing cost
    password: str = Field(..., min_length=1, max_length=256)


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AuthResponse(BaseModel):
    token: str
    username: str
    email: str


class UserResponse(BaseModel):
    """Public view of a user (never includes the password hash)."""

    id: int
    username: str
    email: str
    created_at: datetime

    model_config = {"from_attributes": True}
