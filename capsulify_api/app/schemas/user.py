"""
Pydantic models for user accounts and sessions.

Passwords are accepted on registration and login only; they are never
part of a response.  ``UserLogin`` keeps both fields optional so the
endpoint can answer a missing field with HTTP 400 instead of a
request-parsing error.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """Schema for registering a user."""

    email: str = Field(..., examples=["user@example.com"])
    password: str = Field(..., examples=["strongpassword"])


class UserLogin(BaseModel):
    email: Optional[str] = Field(None, examples=["user@example.com"])
    password: Optional[str] = Field(None, examples=["strongpassword"])


class WriteAcknowledgement(BaseModel):
    """Store acknowledgement of an insert."""

    acknowledged: bool
    inserted_id: str


class RegisterResponse(BaseModel):
    message: str
    result: WriteAcknowledgement


class TokenResponse(BaseModel):
    accessToken: str
    token_type: str = "bearer"


class ProfileResponse(BaseModel):
    message: str
    user: Dict[str, Any]
