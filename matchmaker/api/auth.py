"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from matchmaker.api.dependencies import get_current_user, get_token_service
from matchmaker.database import get_db
from matchmaker.models.user import User
from matchmaker.schemas.auth import (
    AuthResponse,
    ChangePasswordRequest,
    RefreshRequest,
    TokenPair,
    UserLogin,
    UserRegister,
    UserResponse,
)
from matchmaker.schemas.common import ApiResponse
from matchmaker.services import auth as auth_service
from matchmaker.services.tokens import TokenService

router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_response(user: User, pair: TokenPair) -> AuthResponse:
    return AuthResponse(
        access_token=pair.access_token,
        refresh_token=pair.refresh_token,
        user=UserResponse.from_user(user),
    )


@router.post(
    "/register",
    response_model=ApiResponse[AuthResponse],
    status_code=status.HTTP_201_CREATED,
)
def register(
    user_data: UserRegister,
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
):
    """Register a new user and issue a token pair."""
    user = auth_service.create_user(db, user_data)
    pair = tokens.issue_token_pair(user.id)
    return ApiResponse(message="User registered successfully", data=_auth_response(user, pair))


@router.post("/login", response_model=ApiResponse[AuthResponse])
def login(
    credentials: UserLogin,
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
):
    """Login with username and password."""
    user = auth_service.authenticate_user(db, credentials.username, credentials.password)
    pair = tokens.issue_token_pair(user.id)
    return ApiResponse(message="Login successful", data=_auth_response(user, pair))


@router.post("/refresh", response_model=ApiResponse[TokenPair])
def refresh(
    body: RefreshRequest,
    tokens: Annotated[TokenService, Depends(get_token_service)],
):
    """Exchange the current refresh token for a new token pair."""
    pair = tokens.rotate_refresh(body.refresh_token)
    return ApiResponse(message="Tokens refreshed", data=pair)


@router.post("/logout", response_model=ApiResponse[None])
def logout(
    body: RefreshRequest,
    tokens: Annotated[TokenService, Depends(get_token_service)],
):
    """Revoke the token pair owning this refresh token. Unknown tokens are ignored."""
    tokens.revoke_by_refresh_token(body.refresh_token)
    return ApiResponse(message="Logout successful")


@router.post("/logout-all", response_model=ApiResponse[None])
def logout_all(
    current_user: Annotated[User, Depends(get_current_user)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
):
    """Revoke the current user's tokens."""
    tokens.revoke(current_user.id)
    return ApiResponse(message="Logged out from all sessions")


@router.get("/me", response_model=ApiResponse[UserResponse])
def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return ApiResponse(data=UserResponse.from_user(current_user))


@router.put("/change-password", response_model=ApiResponse[TokenPair])
def change_password(
    body: ChangePasswordRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
):
    """Change password and replace the live token pair."""
    auth_service.change_password(db, current_user, body.current_password, body.new_password)
    pair = tokens.issue_token_pair(current_user.id)
    return ApiResponse(message="Password changed successfully", data=pair)
