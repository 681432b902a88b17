"""Match and roster models."""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from matchmaker.database import Base
from matchmaker.models.enums import Experience, MatchStatus, PlayerStatus, Visibility
from matchmaker.models.mixins import TimestampMixin


class Match(Base, TimestampMixin):
    """A scheduled in-person game session hosted by a user."""

    __tablename__ = "matches"

    id = Column(Integer, primary_key=True, index=True)
    host_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    game_id = Column(Integer, ForeignKey("games.id"), nullable=False, index=True)
    title = Column(String(100), nullable=False)
    description = Column(String(500), nullable=False, default="")

    # Location
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    address = Column(String(255), nullable=False)
    venue = Column(String(255), nullable=False)
    city = Column(String(100), nullable=False)

    scheduled_date = Column(DateTime(timezone=True), nullable=False, index=True)
    duration = Column(Integer, nullable=False)  # minutes
    max_players = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False, default=MatchStatus.OPEN.value, index=True)

    # Requirements
    experience = Column(String(20), nullable=False, default=Experience.ANY.value)
    age_min = Column(Integer, nullable=False, default=18)
    notes = Column(String(200), nullable=True)

    tags = Column(JSON, nullable=False, default=list)
    is_public = Column(Boolean, nullable=False, default=True)
    visibility = Column(String(20), nullable=False, default=Visibility.PUBLIC.value)

    # Bumped on every write; concurrent roster writes fail with StaleDataError
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    # Relationships
    host = relationship("User", foreign_keys=[host_id])
    game = relationship("Game")
    players = relationship(
        "MatchPlayer",
        back_populates="match",
        cascade="all, delete-orphan",
        order_by="MatchPlayer.id",
        lazy="selectin",
    )

    @property
    def match_status(self) -> MatchStatus:
        return MatchStatus(self.status)

    @property
    def confirmed_count(self) -> int:
        """Number of roster entries counted toward capacity."""
        return sum(1 for player in self.players if player.status == PlayerStatus.CONFIRMED.value)

    @property
    def available_spots(self) -> int:
        return self.max_players - self.confirmed_count

    @property
    def is_full(self) -> bool:
        return self.available_spots <= 0

    def has_player(self, user_id: int) -> bool:
        return any(player.user_id == user_id for player in self.players)

    def get_player(self, user_id: int) -> "MatchPlayer | None":
        for player in self.players:
            if player.user_id == user_id:
                return player
        return None


class MatchPlayer(Base):
    """Roster entry of a user in a match."""

    __tablename__ = "match_players"
    __table_args__ = (UniqueConstraint("match_id", "user_id", name="uq_match_players_match_user"),)

    id = Column(Integer, primary_key=True, index=True)
    match_id = Column(
        Integer, ForeignKey("matches.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    joined_at = Column(DateTime(timezone=True), nullable=False)
    status = Column(String(20), nullable=False, default=PlayerStatus.CONFIRMED.value)

    # Relationships
    match = relationship("Match", back_populates="players")
    user = relationship("User")
