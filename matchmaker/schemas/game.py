"""Game catalog schemas."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from matchmaker.models.enums import GameCategory, GameMechanic
from matchmaker.schemas.common import Pagination


def _max_year() -> int:
    return datetime.now(UTC).year


class GameCreate(BaseModel):
    """Create a catalog entry."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., max_length=1000)
    min_players: int = Field(..., ge=1)
    max_players: int = Field(..., ge=1)
    playing_time_min: int = Field(..., ge=1)
    playing_time_max: int = Field(..., ge=1)
    age_min: int = Field(..., ge=0)
    age_max: int = Field(100, ge=0, le=100)
    categories: list[GameCategory] = []
    mechanics: list[GameMechanic] = []
    tags: list[str] = []
    complexity: float = Field(..., ge=1, le=5)
    publisher: str = Field(..., max_length=255)
    year_published: int = Field(..., ge=1800)
    bgg_id: int | None = Field(None, gt=0)

    @model_validator(mode="after")
    def validate_ranges(self) -> "GameCreate":
        if self.min_players > self.max_players:
            raise ValueError("min_players cannot exceed max_players")
        if self.playing_time_min > self.playing_time_max:
            raise ValueError("playing_time_min cannot exceed playing_time_max")
        if self.year_published > _max_year():
            raise ValueError("year_published cannot be in the future")
        return self


class GameUpdate(BaseModel):
    """Update a catalog entry. Only provided fields are changed."""

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=1000)
    min_players: int | None = Field(None, ge=1)
    max_players: int | None = Field(None, ge=1)
    playing_time_min: int | None = Field(None, ge=1)
    playing_time_max: int | None = Field(None, ge=1)
    age_min: int | None = Field(None, ge=0)
    age_max: int | None = Field(None, ge=0, le=100)
    categories: list[GameCategory] | None = None
    mechanics: list[GameMechanic] | None = None
    tags: list[str] | None = None
    complexity: float | None = Field(None, ge=1, le=5)
    publisher: str | None = Field(None, max_length=255)
    year_published: int | None = Field(None, ge=1800)
    bgg_id: int | None = Field(None, gt=0)

    @model_validator(mode="after")
    def validate_year(self) -> "GameUpdate":
        if self.year_published is not None and self.year_published > _max_year():
            raise ValueError("year_published cannot be in the future")
        return self


class GameRate(BaseModel):
    rating: float = Field(..., ge=1, le=10)


class RatingResponse(BaseModel):
    rating: float
    count: int


class GameResponse(BaseModel):
    """Game response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    min_players: int
    max_players: int
    playing_time_min: int
    playing_time_max: int
    age_min: int
    age_max: int
    categories: list[str]
    mechanics: list[str]
    tags: list[str]
    complexity: float
    rating_average: float
    rating_count: int
    publisher: str
    year_published: int
    bgg_id: int | None
    popularity: int
    created_at: datetime
    updated_at: datetime


class GameSummary(BaseModel):
    """Short game representation for popular lists and match cards."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    min_players: int
    max_players: int
    complexity: float
    rating_average: float
    popularity: int


class GameListResponse(BaseModel):
    games: list[GameResponse]
    pagination: Pagination
