"""Game catalog API endpoints."""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query, status

from matchmaker.api.dependencies import get_current_user, get_game_service
from matchmaker.models.user import User
from matchmaker.schemas.common import ApiResponse, Pagination, split_csv
from matchmaker.schemas.game import (
    GameCreate,
    GameListResponse,
    GameRate,
    GameResponse,
    GameSummary,
    GameUpdate,
    RatingResponse,
)
from matchmaker.services.game_service import GameSearch, GameService

router = APIRouter(prefix="/games", tags=["games"])


@router.get("", response_model=ApiResponse[GameListResponse])
def list_games(
    games: Annotated[GameService, Depends(get_game_service)],
    search: str | None = None,
    categories: str | None = None,
    mechanics: str | None = None,
    min_players: Annotated[int | None, Query(ge=1)] = None,
    max_players: Annotated[int | None, Query(ge=1)] = None,
    complexity: Annotated[int | None, Query(ge=1, le=5)] = None,
    min_rating: Annotated[float | None, Query(ge=0, le=10)] = None,
    sort_by: Literal["popularity", "name", "rating", "year", "complexity"] = "popularity",
    sort_order: Literal["asc", "desc"] = "desc",
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
):
    """Search the catalog of active games."""
    params = GameSearch(
        search=search,
        categories=split_csv(categories),
        mechanics=split_csv(mechanics),
        min_players=min_players,
        max_players=max_players,
        complexity=complexity,
        min_rating=min_rating,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    items, total = games.search(params)
    return ApiResponse(
        data=GameListResponse(
            games=[GameResponse.model_validate(game) for game in items],
            pagination=Pagination.build(page, limit, total),
        )
    )


@router.get("/popular", response_model=ApiResponse[list[GameSummary]])
def popular_games(
    games: Annotated[GameService, Depends(get_game_service)],
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
):
    """Most popular active games."""
    return ApiResponse(data=[GameSummary.model_validate(game) for game in games.popular(limit)])


@router.get("/categories", response_model=ApiResponse[list[str]])
def game_categories(games: Annotated[GameService, Depends(get_game_service)]):
    """Categories used by active games."""
    return ApiResponse(data=games.distinct_categories())


@router.get("/mechanics", response_model=ApiResponse[list[str]])
def game_mechanics(games: Annotated[GameService, Depends(get_game_service)]):
    """Mechanics used by active games."""
    return ApiResponse(data=games.distinct_mechanics())


@router.get("/{game_id}", response_model=ApiResponse[GameResponse])
def get_game(
    game_id: int,
    games: Annotated[GameService, Depends(get_game_service)],
):
    return ApiResponse(data=GameResponse.model_validate(games.get(game_id)))


@router.post(
    "",
    response_model=ApiResponse[GameResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_game(
    game_data: GameCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    games: Annotated[GameService, Depends(get_game_service)],
):
    """Add a game to the catalog."""
    game = games.create(game_data)
    return ApiResponse(message="Game created successfully", data=GameResponse.model_validate(game))


@router.put("/{game_id}", response_model=ApiResponse[GameResponse])
def update_game(
    game_id: int,
    game_data: GameUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    games: Annotated[GameService, Depends(get_game_service)],
):
    game = games.update(game_id, game_data)
    return ApiResponse(message="Game updated successfully", data=GameResponse.model_validate(game))


@router.post("/{game_id}/rate", response_model=ApiResponse[RatingResponse])
def rate_game(
    game_id: int,
    body: GameRate,
    current_user: Annotated[User, Depends(get_current_user)],
    games: Annotated[GameService, Depends(get_game_service)],
):
    """Submit a 1-10 rating."""
    game = games.rate(game_id, body.rating)
    return ApiResponse(
        message="Game rated successfully",
        data=RatingResponse(rating=game.rating_average, count=game.rating_count),
    )
