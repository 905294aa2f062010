"""
Pydantic schemas for user registration.
Handles email normalization and password presence checks.
"""

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError
from email_validator import validate_email, EmailNotValidError
from typing import Optional
from datetime import datetime


# bcrypt ignores input beyond 72 bytes
MAX_PASSWORD_BYTES = 72


class UserCreate(BaseModel):
    """Schema for registering a new user."""

    email: Optional[str] = Field(
        None,
        validate_default=True,
        description="User's email address, stored lower-cased",
        examples=["newuser@example.com"]
    )
    password: Optional[str] = Field(
        None,
        validate_default=True,
        description="User's password",
        examples=["SecurePassword123!"]
    )

    @field_validator("email", mode="before")
    @classmethod
    def validate_email_format(cls, v):
        """Validate email syntax with email-validator and normalize to lower case."""
        if v is None or (isinstance(v, str) and not v.strip()):
            raise PydanticCustomError("blank", "can't be blank")
        if not isinstance(v, str):
            raise PydanticCustomError("invalid", "is invalid")
        try:
            valid_email = validate_email(v.strip(), check_deliverability=False)
        except EmailNotValidError:
            raise PydanticCustomError("invalid", "is invalid")
        return valid_email.normalized.lower()

    @field_validator("password", mode="before")
    @classmethod
    def validate_password(cls, v):
        """Password must be present and fit bcrypt's input limit."""
        if v is None or (isinstance(v, str) and not v):
            raise PydanticCustomError("blank", "can't be blank")
        if not isinstance(v, str):
            raise PydanticCustomError("invalid", "is invalid")
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise PydanticCustomError(
                "too_long",
                "is too long (maximum is {max_length} characters)",
                {"max_length": MAX_PASSWORD_BYTES},
            )
        return v


class UserResponse(BaseModel):
    """Public user representation; never includes the password hash."""

    id: int
    email: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
