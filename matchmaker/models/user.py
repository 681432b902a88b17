"""User model."""

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Table
from sqlalchemy.orm import relationship

from matchmaker.database import Base
from matchmaker.models.mixins import TimestampMixin

user_favorite_games = Table(
    "user_favorite_games",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("game_id", Integer, ForeignKey("games.id", ondelete="CASCADE"), primary_key=True),
)


class User(Base, TimestampMixin):
    """User model for authentication, hosting and joining matches."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(20), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=True, index=True)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(50), nullable=True)
    last_name = Column(String(50), nullable=True)
    age = Column(Integer, nullable=True)
    bio = Column(String(500), nullable=False, default="")

    # Location
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    city = Column(String(100), nullable=True)
    country = Column(String(100), nullable=True)

    # Currently live token pair, null after logout
    access_token = Column(String(512), nullable=True)
    refresh_token = Column(String(512), nullable=True, index=True)

    is_active = Column(Boolean, nullable=False, default=True)
    last_seen_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    favorite_games = relationship("Game", secondary=user_favorite_games, lazy="selectin")

    @property
    def full_name(self) -> str | None:
        names = [name for name in (self.first_name, self.last_name) if name]
        return " ".join(names) or None
