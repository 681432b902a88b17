"""Pydantic schemas for API requests and responses."""

from matchmaker.schemas.auth import (
    AuthResponse,
    PublicUserResponse,
    TokenPair,
    UserLogin,
    UserRegister,
    UserResponse,
)
from matchmaker.schemas.common import ApiResponse, ErrorResponse, Pagination
from matchmaker.schemas.game import GameCreate, GameResponse, GameUpdate
from matchmaker.schemas.match import MatchCreate, MatchResponse, MatchUpdate

__all__ = [
    "ApiResponse",
    "ErrorResponse",
    "Pagination",
    "UserRegister",
    "UserLogin",
    "TokenPair",
    "AuthResponse",
    "UserResponse",
    "PublicUserResponse",
    "GameCreate",
    "GameUpdate",
    "GameResponse",
    "MatchCreate",
    "MatchUpdate",
    "MatchResponse",
]
