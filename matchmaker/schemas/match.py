"""Match schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from matchmaker.models.enums import Experience, MatchStatus, Visibility
from matchmaker.schemas.common import Pagination


class MatchLocation(BaseModel):
    """Where a match takes place."""

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    address: str = Field(..., min_length=1, max_length=255)
    venue: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)


class MatchRequirements(BaseModel):
    experience: Experience = Experience.ANY
    age_min: int = Field(18, ge=18)
    notes: str | None = Field(None, max_length=200)


class MatchCreate(BaseModel):
    """Create a match. The caller becomes the host."""

    game_id: int
    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field("", max_length=500)
    location: MatchLocation
    scheduled_date: datetime
    duration: int = Field(..., ge=30, le=480)
    max_players: int = Field(..., ge=2)
    requirements: MatchRequirements = MatchRequirements()
    tags: list[str] = []
    is_public: bool = True
    visibility: Visibility = Visibility.PUBLIC


class MatchUpdate(BaseModel):
    """Update match metadata. Only provided fields are changed."""

    title: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)
    location: MatchLocation | None = None
    scheduled_date: datetime | None = None
    duration: int | None = Field(None, ge=30, le=480)
    max_players: int | None = Field(None, ge=2)
    requirements: MatchRequirements | None = None
    tags: list[str] | None = None
    is_public: bool | None = None
    visibility: Visibility | None = None


class PlayerResponse(BaseModel):
    user_id: int
    username: str
    joined_at: datetime
    status: str


class MatchResponse(BaseModel):
    """Match response with roster and derived capacity fields."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    host_id: int
    host_username: str
    game_id: int
    game_name: str
    title: str
    description: str
    location: MatchLocation
    scheduled_date: datetime
    duration: int
    max_players: int
    status: MatchStatus
    requirements: MatchRequirements
    tags: list[str]
    is_public: bool
    visibility: Visibility
    players: list[PlayerResponse]
    available_spots: int
    is_full: bool
    created_at: datetime
    updated_at: datetime
    distance_km: float | None = None

    @classmethod
    def from_match(cls, match, distance_km: float | None = None) -> "MatchResponse":
        return cls(
            id=match.id,
            host_id=match.host_id,
            host_username=match.host.username,
            game_id=match.game_id,
            game_name=match.game.name,
            title=match.title,
            description=match.description,
            location=MatchLocation(
                latitude=match.latitude,
                longitude=match.longitude,
                address=match.address,
                venue=match.venue,
                city=match.city,
            ),
            scheduled_date=match.scheduled_date,
            duration=match.duration,
            max_players=match.max_players,
            status=match.status,
            requirements=MatchRequirements(
                experience=match.experience,
                age_min=match.age_min,
                notes=match.notes,
            ),
            tags=match.tags or [],
            is_public=match.is_public,
            visibility=match.visibility,
            players=[
                PlayerResponse(
                    user_id=player.user_id,
                    username=player.user.username,
                    joined_at=player.joined_at,
                    status=player.status,
                )
                for player in match.players
            ],
            available_spots=match.available_spots,
            is_full=match.is_full,
            created_at=match.created_at,
            updated_at=match.updated_at,
            distance_km=round(distance_km, 3) if distance_km is not None else None,
        )


class MatchListResponse(BaseModel):
    matches: list[MatchResponse]
    pagination: Pagination
