"""Authentication schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class Location(BaseModel):
    """A user's home location."""

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    city: str | None = Field(None, max_length=100)
    country: str | None = Field(None, max_length=100)


class UserRegister(BaseModel):
    """User registration request."""

    username: str = Field(..., min_length=3, max_length=20, pattern=r"^[A-Za-z0-9]+$")
    password: str = Field(..., min_length=6, max_length=128)
    email: EmailStr | None = Field(None, max_length=255)
    first_name: str | None = Field(None, max_length=50)
    last_name: str | None = Field(None, max_length=50)
    age: int | None = Field(None, ge=18, le=100)
    bio: str = Field("", max_length=500)
    location: Location | None = None


class UserLogin(BaseModel):
    """User login request."""

    username: str = Field(..., max_length=20)
    password: str = Field(..., max_length=128)


class RefreshRequest(BaseModel):
    """Refresh token presented for rotation or logout."""

    refresh_token: str


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., max_length=128)
    new_password: str = Field(..., min_length=6, max_length=128)


class TokenPair(BaseModel):
    """Access and refresh token pair."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"  # noqa: S105


class PublicUserResponse(BaseModel):
    """User information visible to other users."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    first_name: str | None
    last_name: str | None
    full_name: str | None
    age: int | None
    bio: str
    city: str | None
    country: str | None
    created_at: datetime


class UserResponse(PublicUserResponse):
    """User information returned to the user themself."""

    email: str | None
    latitude: float | None
    longitude: float | None
    favorite_game_ids: list[int] = []
    last_seen_at: datetime | None

    @classmethod
    def from_user(cls, user) -> "UserResponse":
        response = cls.model_validate(user)
        response.favorite_game_ids = [game.id for game in user.favorite_games]
        return response


class AuthResponse(TokenPair):
    """Authentication response with token pair and user info."""

    user: UserResponse
