"""
Pydantic schemas for authentication requests and responses.
"""

from pydantic import BaseModel, Field
from typing import Any


class LoginRequest(BaseModel):
    """
    Login request schema.

    Fields are optional and untyped here: missing or non-string credentials
    are reported as invalid credentials, not as a validation failure.
    """

    email: Any = Field(
        None,
        description="User's email address (case-insensitive)",
        examples=["jane.citizen@example.com"]
    )
    password: Any = Field(
        None,
        description="User's password",
        examples=["password123"]
    )


class LoginUser(BaseModel):
    id: int
    email: str


class LoginResponse(BaseModel):
    """Login response schema."""

    token: str = Field(
        ...,
        description="Signed bearer token valid for 24 hours",
        examples=["eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."]
    )
    user: LoginUser


class MessageResponse(BaseModel):
    message: str = Field(..., examples=["Logged out successfully"])
