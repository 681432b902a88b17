"""FastAPI dependencies for authentication and services."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from matchmaker.database import get_db
from matchmaker.exceptions import AuthError
from matchmaker.models.user import User
from matchmaker.services.game_service import GameService
from matchmaker.services.match_service import MatchService
from matchmaker.services.tokens import TokenService
from matchmaker.services.user_service import UserService

security = HTTPBearer(auto_error=False)


def get_token_service(
    db: Annotated[Session, Depends(get_db)],
) -> TokenService:
    """Get token service bound to the request session."""
    return TokenService(db)


def get_match_service(
    db: Annotated[Session, Depends(get_db)],
) -> MatchService:
    return MatchService(db)


def get_game_service(
    db: Annotated[Session, Depends(get_db)],
) -> GameService:
    return GameService(db)


def get_user_service(
    db: Annotated[Session, Depends(get_db)],
) -> UserService:
    return UserService(db)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> User:
    """Get the current authenticated user from the bearer access token.

    The token must be the one currently stored for the user, so tokens
    replaced by rotation or cleared by logout stop working immediately.
    """
    if credentials is None:
        raise AuthError("Access denied. No token provided.")

    token = credentials.credentials
    user_id = tokens.verify_access(token)

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise AuthError("User not found")
    if not user.is_active:
        raise AuthError("User account is deactivated")
    if user.access_token != token:
        raise AuthError("Token has been revoked")

    return user
