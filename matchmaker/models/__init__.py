"""SQLAlchemy models."""

from matchmaker.models.game import Game
from matchmaker.models.match import Match, MatchPlayer
from matchmaker.models.user import User, user_favorite_games

__all__ = [
    "User",
    "user_favorite_games",
    "Game",
    "Match",
    "MatchPlayer",
]
