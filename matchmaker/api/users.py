"""User profile API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from matchmaker.api.dependencies import get_current_user, get_user_service
from matchmaker.config import get_settings
from matchmaker.models.user import User
from matchmaker.schemas.auth import PublicUserResponse, UserResponse
from matchmaker.schemas.common import ApiResponse
from matchmaker.schemas.user import NearbyUserResponse, ProfileUpdate
from matchmaker.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.put("/profile", response_model=ApiResponse[UserResponse])
def update_profile(
    profile: ProfileUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    users: Annotated[UserService, Depends(get_user_service)],
):
    user = users.update_profile(current_user, profile)
    return ApiResponse(message="Profile updated", data=UserResponse.from_user(user))


@router.post("/favorites/{game_id}", response_model=ApiResponse[None])
def add_favorite(
    game_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    users: Annotated[UserService, Depends(get_user_service)],
):
    users.add_favorite(current_user, game_id)
    return ApiResponse(message="Game added to favorites")


@router.delete("/favorites/{game_id}", response_model=ApiResponse[None])
def remove_favorite(
    game_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    users: Annotated[UserService, Depends(get_user_service)],
):
    users.remove_favorite(current_user, game_id)
    return ApiResponse(message="Game removed from favorites")


@router.get("/nearby", response_model=ApiResponse[list[NearbyUserResponse]])
def nearby_users(
    latitude: Annotated[float, Query(ge=-90, le=90)],
    longitude: Annotated[float, Query(ge=-180, le=180)],
    current_user: Annotated[User, Depends(get_current_user)],
    users: Annotated[UserService, Depends(get_user_service)],
    radius: Annotated[float | None, Query(gt=0, le=500)] = None,
):
    """Other users within ``radius`` km of a point, closest first."""
    radius_km = radius or get_settings().nearby_users_radius_km
    results = users.nearby(current_user, latitude, longitude, radius_km)
    return ApiResponse(
        data=[
            NearbyUserResponse(
                **PublicUserResponse.model_validate(user).model_dump(),
                distance_km=round(distance, 3),
            )
            for user, distance in results
        ]
    )


@router.get("/search", response_model=ApiResponse[list[PublicUserResponse]])
def search_users(
    q: str,
    current_user: Annotated[User, Depends(get_current_user)],
    users: Annotated[UserService, Depends(get_user_service)],
    limit: Annotated[int, Query(ge=1, le=50)] = 10,
):
    """Search users by username or bio."""
    return ApiResponse(
        data=[PublicUserResponse.model_validate(user) for user in users.search(q, limit)]
    )


@router.get("/{user_id}", response_model=ApiResponse[PublicUserResponse])
def get_user_profile(
    user_id: int,
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Public profile of a user."""
    return ApiResponse(data=PublicUserResponse.model_validate(users.get(user_id)))
