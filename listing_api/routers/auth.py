"""
Authentication API endpoints for login and logout.
Provides stateless JWT bearer authentication.
"""

from typing import Optional
from fastapi import APIRouter, Body, Depends, status
from listing_api.models.user import User
from listing_api.services.auth import AuthService
from listing_api.schemas.auth import LoginRequest, LoginResponse, MessageResponse
from listing_api.schemas.error import get_error_responses
from listing_api.utils.dependencies import get_auth_service, get_current_user


router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="User login",
    description="Authenticate with email and password and receive a bearer token valid for 24 hours",
    responses=get_error_responses(401)
)
async def login(
    login_data: Optional[LoginRequest] = Body(None),
    auth_service: AuthService = Depends(get_auth_service)
) -> LoginResponse:
    """
    Authenticate user and return a JWT token.

    Args:
        login_data: Login credentials (email and password)
        auth_service: Authentication service

    Returns:
        Token and the user's id and email

    Raises:
        InvalidCredentialsError: If credentials are missing or invalid
    """
    login_data = login_data or LoginRequest()
    user, token = await auth_service.login(
        email=login_data.email,
        password=login_data.password
    )

    return LoginResponse(
        token=token,
        user={"id": user.id, "email": user.email}
    )


@router.delete(
    "/logout",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="User logout",
    description="Stateless logout; the client discards its token",
    responses=get_error_responses(401)
)
async def logout(current_user: User = Depends(get_current_user)) -> MessageResponse:
    """
    Log out the current user.

    No server-side state is kept for tokens, so the token stays valid
    until it expires.
    """
    return MessageResponse(message="Logged out successfully")
