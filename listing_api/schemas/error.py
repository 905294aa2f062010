"""
Error response schemas for API documentation and validation message formatting.
Provides error response models for OpenAPI and converts pydantic errors to field messages.
"""

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError
from typing import List, Any, Dict


class ErrorResponse(BaseModel):
    """Single-message error body."""

    error: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Property not found"]
    )


class ValidationErrorResponse(BaseModel):
    """Validation failure body; field keys with their messages are added alongside."""

    errors: List[str] = Field(
        ...,
        description="Full human-readable validation messages",
        examples=[["Email is invalid"]]
    )


# Messages for pydantic error types, phrased to follow the field name
_MESSAGES = {
    "missing": "can't be blank",
    "int_parsing": "is not a number",
    "int_type": "is not a number",
    "int_from_float": "must be an integer",
    "float_parsing": "is not a number",
    "float_type": "is not a number",
    "decimal_parsing": "is not a number",
    "decimal_type": "is not a number",
    "string_type": "must be a string",
    "datetime_parsing": "is not a valid datetime",
    "datetime_from_date_parsing": "is not a valid datetime",
    "datetime_type": "is not a valid datetime",
}


def _message_for(error: Dict[str, Any]) -> str:
    error_type = error["type"]
    ctx = error.get("ctx") or {}

    if error_type in _MESSAGES:
        return _MESSAGES[error_type]
    if error_type == "greater_than_equal":
        return f"must be greater than or equal to {ctx.get('ge')}"
    if error_type == "less_than_equal":
        return f"must be less than or equal to {ctx.get('le')}"
    if error_type == "string_too_long":
        return f"is too long (maximum is {ctx.get('max_length')} characters)"

    message = error["msg"]
    return message[0].lower() + message[1:] if message else "is invalid"


def field_errors_from_pydantic(exc: PydanticValidationError) -> Dict[str, List[str]]:
    """
    Group pydantic validation errors by top-level field.

    Args:
        exc: Pydantic validation error raised by a schema

    Returns:
        Mapping such as {"price": ["is not a number"]}
    """
    field_errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "base"
        field_errors.setdefault(field, []).append(_message_for(error))
    return field_errors


COMMON_ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    400: {
        "description": "Bad Request - Missing required parameter",
        "model": ErrorResponse,
    },
    401: {
        "description": "Unauthorized - Missing, malformed, expired or invalid token",
        "model": ErrorResponse,
    },
    404: {
        "description": "Not Found - Resource does not exist",
        "model": ErrorResponse,
    },
    422: {
        "description": "Unprocessable Entity - Validation failed",
        "model": ValidationErrorResponse,
    },
}


def get_error_responses(*status_codes: int) -> Dict[int, Dict[str, Any]]:
    """
    Get error response schemas for specific status codes.

    Args:
        status_codes: HTTP status codes to include

    Returns:
        Dictionary of error response schemas
    """
    return {
        code: COMMON_ERROR_RESPONSES[code]
        for code in status_codes
        if code in COMMON_ERROR_RESPONSES
    }
