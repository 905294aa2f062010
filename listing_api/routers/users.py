"""
User registration endpoint.
"""

from typing import Any
from fastapi import APIRouter, Body, Depends, status
from listing_api.services.auth import AuthService
from listing_api.schemas.user import UserResponse
from listing_api.schemas.error import get_error_responses
from listing_api.utils.dependencies import get_auth_service
from listing_api.utils.params import require_params


router = APIRouter(prefix="/users", tags=["Users"])

USER_FIELDS = ("email", "password")


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register user",
    description='Create an account from {"user": {"email", "password"}}. The password hash is never returned.',
    responses=get_error_responses(400, 422)
)
async def create_user(
    payload: Any = Body(None),
    auth_service: AuthService = Depends(get_auth_service)
) -> UserResponse:
    """
    Register a new user.

    Raises:
        MissingParameterError: If no user attributes were sent
        ValidationError: If the email is missing, invalid or taken, or the password is missing
    """
    params = require_params(payload, "user", USER_FIELDS)
    user = await auth_service.create_user(params)
    return UserResponse.model_validate(user)
