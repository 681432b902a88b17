"""Game catalog service."""

import logging
from dataclasses import dataclass, field

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from matchmaker.exceptions import ConflictError, NotFoundError, ValidationError
from matchmaker.models.game import Game
from matchmaker.schemas.game import GameCreate, GameUpdate

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    "popularity": Game.popularity,
    "name": Game.name,
    "rating": Game.rating_average,
    "year": Game.year_published,
    "complexity": Game.complexity,
}


@dataclass
class GameSearch:
    """Catalog filters. ``None`` means the filter is not applied."""

    search: str | None = None
    categories: list[str] = field(default_factory=list)
    mechanics: list[str] = field(default_factory=list)
    min_players: int | None = None
    max_players: int | None = None
    complexity: int | None = None
    min_rating: float | None = None
    sort_by: str = "popularity"
    sort_order: str = "desc"
    page: int = 1
    limit: int = 20


class GameService:
    """Service for catalog reads and writes."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, game_id: int) -> Game:
        game = self.db.query(Game).filter(Game.id == game_id).first()
        if not game:
            raise NotFoundError("Game not found")
        return game

    def search(self, params: GameSearch) -> tuple[list[Game], int]:
        """Return one page of active games and the total match count."""
        query = self.db.query(Game).filter(Game.is_active.is_(True))

        if params.search:
            pattern = f"%{params.search}%"
            query = query.filter(or_(Game.name.ilike(pattern), Game.description.ilike(pattern)))
        # Player count ranges overlap the requested one
        if params.min_players is not None:
            query = query.filter(Game.max_players >= params.min_players)
        if params.max_players is not None:
            query = query.filter(Game.min_players <= params.max_players)
        if params.complexity is not None:
            query = query.filter(Game.complexity == params.complexity)
        if params.min_rating is not None:
            query = query.filter(Game.rating_average >= params.min_rating)

        column = SORT_COLUMNS.get(params.sort_by, Game.popularity)
        ordering = column.asc() if params.sort_order == "asc" else column.desc()
        query = query.order_by(ordering, Game.id.asc())
        offset = (params.page - 1) * params.limit

        if not params.categories and not params.mechanics:
            total = query.count()
            return query.offset(offset).limit(params.limit).all(), total

        # JSON list columns are filtered in Python
        categories = set(params.categories)
        mechanics = set(params.mechanics)
        games = [
            game
            for game in query.all()
            if (not categories or categories.intersection(game.categories or []))
            and (not mechanics or mechanics.intersection(game.mechanics or []))
        ]
        return games[offset : offset + params.limit], len(games)

    def popular(self, limit: int = 10) -> list[Game]:
        return (
            self.db.query(Game)
            .filter(Game.is_active.is_(True))
            .order_by(Game.popularity.desc(), Game.id.asc())
            .limit(limit)
            .all()
        )

    def distinct_categories(self) -> list[str]:
        return self._distinct_tags(Game.categories)

    def distinct_mechanics(self) -> list[str]:
        return self._distinct_tags(Game.mechanics)

    def _distinct_tags(self, column) -> list[str]:
        values: set[str] = set()
        for (tags,) in self.db.query(column).filter(Game.is_active.is_(True)).all():
            values.update(tags or [])
        return sorted(values)

    def create(self, data: GameCreate) -> Game:
        if self.db.query(Game).filter(Game.name == data.name).first():
            raise ConflictError("A game with this name already exists")

        game = Game(**data.model_dump(mode="json"))
        self.db.add(game)
        self._commit()
        self.db.refresh(game)
        logger.info(f"Created game {game.id} ({game.name})")
        return game

    def update(self, game_id: int, data: GameUpdate) -> Game:
        game = self.get(game_id)
        updates = {
            key: value
            for key, value in data.model_dump(mode="json", exclude_unset=True).items()
            if value is not None
        }

        def merged(key: str):
            return updates.get(key, getattr(game, key))

        if merged("min_players") > merged("max_players"):
            raise ValidationError("min_players cannot exceed max_players")
        if merged("playing_time_min") > merged("playing_time_max"):
            raise ValidationError("playing_time_min cannot exceed playing_time_max")

        for key, value in updates.items():
            setattr(game, key, value)
        self._commit()
        self.db.refresh(game)
        return game

    def rate(self, game_id: int, rating: float) -> Game:
        """Fold a rating into the running average of a game."""
        game = (
            self.db.query(Game)
            .filter(Game.id == game_id)
            .with_for_update()
            .populate_existing()
            .first()
        )
        if not game:
            raise NotFoundError("Game not found")
        game.add_rating(rating)
        self.db.commit()
        self.db.refresh(game)
        return game

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError("A game with this name or BGG id already exists") from e
