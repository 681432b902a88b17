"""Enums for model fields."""

from enum import Enum


class MatchStatus(str, Enum):
    """Lifecycle states of a match."""

    OPEN = "open"
    FULL = "full"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    def accepts_players(self) -> bool:
        """Check if new players may join in this state."""
        return self == MatchStatus.OPEN

    def is_locked(self) -> bool:
        """Check if match metadata can no longer be edited."""
        return self in (MatchStatus.IN_PROGRESS, MatchStatus.COMPLETED)

    def is_listed(self) -> bool:
        """Check if the match shows up in the default listing."""
        return self in (MatchStatus.OPEN, MatchStatus.FULL)


class PlayerStatus(str, Enum):
    """Status of a roster entry."""

    CONFIRMED = "confirmed"
    PENDING = "pending"
    CANCELLED = "cancelled"


class Experience(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    ANY = "any"


class Visibility(str, Enum):
    PUBLIC = "public"
    FRIENDS = "friends"
    PRIVATE = "private"


class GameCategory(str, Enum):
    """Catalog categories a game can be tagged with."""

    STRATEGY = "strategy"
    PARTY = "party"
    COOPERATIVE = "cooperative"
    COMPETITIVE = "competitive"
    FAMILY = "family"
    THEMATIC = "thematic"
    EURO = "euro"
    AMERITRASH = "ameritrash"
    ABSTRACT = "abstract"
    CARD = "card"
    DICE = "dice"
    MINIATURE = "miniature"
    ROLE_PLAYING = "role-playing"
    TRIVIA = "trivia"
    WORD = "word"
    PUZZLE = "puzzle"


class GameMechanic(str, Enum):
    """Catalog mechanics a game can be tagged with."""

    AREA_CONTROL = "area-control"
    AUCTION = "auction"
    CARD_DRAFTING = "card-drafting"
    DECK_BUILDING = "deck-building"
    DICE_ROLLING = "dice-rolling"
    HAND_MANAGEMENT = "hand-management"
    WORKER_PLACEMENT = "worker-placement"
    TILE_PLACEMENT = "tile-placement"
    SET_COLLECTION = "set-collection"
    TRADING = "trading"
    NEGOTIATION = "negotiation"
    COOPERATIVE = "cooperative"
    SOLO = "solo"
    ASYMMETRIC = "asymmetric"
