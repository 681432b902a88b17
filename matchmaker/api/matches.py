"""Match API endpoints."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from matchmaker.api.dependencies import get_current_user, get_match_service
from matchmaker.config import get_settings
from matchmaker.database import get_db
from matchmaker.models.enums import Experience, MatchStatus
from matchmaker.models.user import User
from matchmaker.schemas.common import ApiResponse, Pagination, split_csv
from matchmaker.schemas.match import MatchCreate, MatchListResponse, MatchResponse, MatchUpdate
from matchmaker.services.match_query import MatchPage, MatchSearch, search_matches, user_matches
from matchmaker.services.match_service import MatchService

router = APIRouter(prefix="/matches", tags=["matches"])


def _page_response(page: MatchPage) -> MatchListResponse:
    return MatchListResponse(
        matches=[
            MatchResponse.from_match(match, page.distances.get(match.id))
            for match in page.matches
        ],
        pagination=Pagination.build(page.page, page.limit, page.total),
    )


@router.get("", response_model=ApiResponse[MatchListResponse])
def list_matches(
    db: Annotated[Session, Depends(get_db)],
    game_id: int | None = None,
    latitude: Annotated[float | None, Query(ge=-90, le=90)] = None,
    longitude: Annotated[float | None, Query(ge=-180, le=180)] = None,
    max_distance: Annotated[float | None, Query(gt=0, le=500)] = None,
    date_from: datetime | None = None,
    date_to: datetime | None = None,
    max_players: Annotated[int | None, Query(ge=1)] = None,
    experience: Experience | None = None,
    tags: str | None = None,
    match_status: Annotated[MatchStatus | None, Query(alias="status")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
):
    """List matches. Without a status filter only open and full matches are shown."""
    search = MatchSearch(
        game_id=game_id,
        latitude=latitude,
        longitude=longitude,
        max_distance_km=max_distance or get_settings().default_search_radius_km,
        date_from=date_from,
        date_to=date_to,
        max_players=max_players,
        experience=experience,
        tags=split_csv(tags),
        status=match_status,
        page=page,
        limit=limit,
    )
    return ApiResponse(data=_page_response(search_matches(db, search)))


@router.get("/mine", response_model=ApiResponse[MatchListResponse])
def list_my_matches(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    match_status: Annotated[MatchStatus | None, Query(alias="status")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
):
    """List matches the current user hosts or plays in."""
    result = user_matches(db, current_user.id, match_status, page, limit)
    return ApiResponse(data=_page_response(result))


@router.post(
    "",
    response_model=ApiResponse[MatchResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_match(
    match_data: MatchCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    matches: Annotated[MatchService, Depends(get_match_service)],
):
    """Create a match hosted by the current user."""
    match = matches.create(current_user.id, match_data)
    return ApiResponse(message="Match created successfully", data=MatchResponse.from_match(match))


@router.get("/{match_id}", response_model=ApiResponse[MatchResponse])
def get_match(
    match_id: int,
    matches: Annotated[MatchService, Depends(get_match_service)],
):
    """Get a specific match."""
    return ApiResponse(data=MatchResponse.from_match(matches.get(match_id)))


@router.put("/{match_id}", response_model=ApiResponse[MatchResponse])
def update_match(
    match_id: int,
    match_data: MatchUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    matches: Annotated[MatchService, Depends(get_match_service)],
):
    """Update match metadata (host only)."""
    match = matches.update_metadata(match_id, current_user.id, match_data)
    return ApiResponse(message="Match updated successfully", data=MatchResponse.from_match(match))


@router.post("/{match_id}/join", response_model=ApiResponse[MatchResponse])
def join_match(
    match_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    matches: Annotated[MatchService, Depends(get_match_service)],
):
    """Join a match as a confirmed player."""
    match = matches.join(match_id, current_user.id)
    return ApiResponse(
        message="Successfully joined the match", data=MatchResponse.from_match(match)
    )


@router.post("/{match_id}/leave", response_model=ApiResponse[MatchResponse])
def leave_match(
    match_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    matches: Annotated[MatchService, Depends(get_match_service)],
):
    """Leave a match."""
    match = matches.leave(match_id, current_user.id)
    return ApiResponse(message="Successfully left the match", data=MatchResponse.from_match(match))


@router.post("/{match_id}/start", response_model=ApiResponse[MatchResponse])
def start_match(
    match_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    matches: Annotated[MatchService, Depends(get_match_service)],
):
    """Mark a match as in progress (host only)."""
    match = matches.start(match_id, current_user.id)
    return ApiResponse(message="Match started", data=MatchResponse.from_match(match))


@router.post("/{match_id}/complete", response_model=ApiResponse[MatchResponse])
def complete_match(
    match_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    matches: Annotated[MatchService, Depends(get_match_service)],
):
    """Mark an in-progress match as completed (host only)."""
    match = matches.complete(match_id, current_user.id)
    return ApiResponse(message="Match completed", data=MatchResponse.from_match(match))


@router.delete("/{match_id}", response_model=ApiResponse[MatchResponse])
def cancel_match(
    match_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    matches: Annotated[MatchService, Depends(get_match_service)],
):
    """Cancel a match (host only)."""
    match = matches.cancel(match_id, current_user.id)
    return ApiResponse(
        message="Match cancelled successfully", data=MatchResponse.from_match(match)
    )
