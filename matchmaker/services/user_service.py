"""User profile, favorites and discovery."""

import logging

from sqlalchemy import or_
from sqlalchemy.orm import Session

from matchmaker.exceptions import NotFoundError, StateError, ValidationError
from matchmaker.models.game import Game
from matchmaker.models.user import User
from matchmaker.schemas.user import ProfileUpdate
from matchmaker.utils.geo import within_radius

logger = logging.getLogger(__name__)


class UserService:
    """Service for user profile operations."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: int) -> User:
        user = self.db.query(User).filter(User.id == user_id, User.is_active.is_(True)).first()
        if not user:
            raise NotFoundError("User not found")
        return user

    def update_profile(self, user: User, data: ProfileUpdate) -> User:
        if data.first_name is not None:
            user.first_name = data.first_name
        if data.last_name is not None:
            user.last_name = data.last_name
        if data.age is not None:
            user.age = data.age
        if data.bio is not None:
            user.bio = data.bio
        if data.location is not None:
            user.latitude = data.location.latitude
            user.longitude = data.location.longitude
            user.city = data.location.city
            user.country = data.location.country

        self.db.commit()
        self.db.refresh(user)
        return user

    def add_favorite(self, user: User, game_id: int) -> None:
        game = self.db.query(Game).filter(Game.id == game_id).first()
        if not game:
            raise NotFoundError("Game not found")
        if game in user.favorite_games:
            raise StateError("Game already in favorites")

        user.favorite_games.append(game)
        self.db.commit()
        logger.info(f"User {user.id} added game {game_id} to favorites")

    def remove_favorite(self, user: User, game_id: int) -> None:
        game = next((g for g in user.favorite_games if g.id == game_id), None)
        if game is None:
            raise StateError("Game not in favorites")

        user.favorite_games.remove(game)
        self.db.commit()

    def nearby(
        self,
        user: User,
        latitude: float,
        longitude: float,
        radius_km: float,
        limit: int = 20,
    ) -> list[tuple[User, float]]:
        """Other active users within ``radius_km``, closest first."""
        candidates = (
            self.db.query(User)
            .filter(
                User.id != user.id,
                User.is_active.is_(True),
                User.latitude.isnot(None),
                User.longitude.isnot(None),
            )
            .all()
        )

        nearby = []
        for candidate in candidates:
            distance = within_radius(
                candidate.latitude, candidate.longitude, latitude, longitude, radius_km
            )
            if distance is not None:
                nearby.append((candidate, distance))

        nearby.sort(key=lambda pair: pair[1])
        return nearby[:limit]

    def search(self, q: str, limit: int = 10) -> list[User]:
        q = q.strip()
        if not q:
            raise ValidationError("Search query is required")
        pattern = f"%{q}%"
        return (
            self.db.query(User)
            .filter(
                User.is_active.is_(True),
                or_(User.username.ilike(pattern), User.bio.ilike(pattern)),
            )
            .order_by(User.username)
            .limit(limit)
            .all()
        )
