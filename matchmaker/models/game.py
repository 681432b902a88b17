"""Game catalog model."""

from sqlalchemy import JSON, Boolean, Column, Float, Integer, String

from matchmaker.database import Base
from matchmaker.models.mixins import TimestampMixin


class Game(Base, TimestampMixin):
    """Board game catalog entry."""

    __tablename__ = "games"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False, index=True)
    description = Column(String(1000), nullable=False)
    min_players = Column(Integer, nullable=False)
    max_players = Column(Integer, nullable=False)
    playing_time_min = Column(Integer, nullable=False)  # minutes
    playing_time_max = Column(Integer, nullable=False)
    age_min = Column(Integer, nullable=False)
    age_max = Column(Integer, nullable=False, default=100)
    # Lists of GameCategory / GameMechanic values
    categories = Column(JSON, nullable=False, default=list)
    mechanics = Column(JSON, nullable=False, default=list)
    tags = Column(JSON, nullable=False, default=list)
    complexity = Column(Float, nullable=False)  # 1-5
    rating_average = Column(Float, nullable=False, default=0)
    rating_count = Column(Integer, nullable=False, default=0)
    publisher = Column(String(255), nullable=False)
    year_published = Column(Integer, nullable=False)
    bgg_id = Column(Integer, unique=True, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    popularity = Column(Integer, nullable=False, default=0)

    def add_rating(self, rating: float) -> None:
        """Fold a new rating into the running average."""
        total = self.rating_average * self.rating_count + rating
        self.rating_count += 1
        self.rating_average = total / self.rating_count
