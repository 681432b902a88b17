"""User profile schemas."""

from pydantic import BaseModel, Field

from matchmaker.schemas.auth import Location, PublicUserResponse


class ProfileUpdate(BaseModel):
    """Update the current user's profile."""

    first_name: str | None = Field(None, max_length=50)
    last_name: str | None = Field(None, max_length=50)
    age: int | None = Field(None, ge=18, le=100)
    bio: str | None = Field(None, max_length=500)
    location: Location | None = None


class NearbyUserResponse(PublicUserResponse):
    distance_km: float
