"""Filtered, paginated match listings.

Scalar filters run in SQL. Tag and proximity filters run in Python over
the SQL result, using haversine distance to the query point.
"""

from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from matchmaker.models.enums import Experience, MatchStatus
from matchmaker.models.match import Match, MatchPlayer
from matchmaker.utils.datetime_utils import as_utc
from matchmaker.utils.geo import within_radius

LISTED_STATUSES = [status.value for status in MatchStatus if status.is_listed()]


@dataclass
class MatchSearch:
    """Listing filters. ``None`` means the filter is not applied."""

    game_id: int | None = None
    latitude: float | None = None
    longitude: float | None = None
    max_distance_km: float = 50
    date_from: datetime | None = None
    date_to: datetime | None = None
    max_players: int | None = None
    experience: Experience | None = None
    tags: list[str] = field(default_factory=list)
    status: MatchStatus | None = None
    page: int = 1
    limit: int = 20

    @property
    def has_point(self) -> bool:
        return self.latitude is not None and self.longitude is not None


@dataclass
class MatchPage:
    """One page of listing results with per-match distances."""

    matches: list[Match]
    distances: dict[int, float]
    total: int
    page: int
    limit: int


def search_matches(db: Session, search: MatchSearch) -> MatchPage:
    """List matches ordered by scheduled date."""
    query = db.query(Match)

    if search.status is not None:
        query = query.filter(Match.status == search.status.value)
    else:
        query = query.filter(Match.status.in_(LISTED_STATUSES))
    if search.game_id is not None:
        query = query.filter(Match.game_id == search.game_id)
    if search.date_from is not None:
        query = query.filter(Match.scheduled_date >= as_utc(search.date_from))
    if search.date_to is not None:
        query = query.filter(Match.scheduled_date <= as_utc(search.date_to))
    if search.max_players is not None:
        query = query.filter(Match.max_players <= search.max_players)
    if search.experience is not None and search.experience != Experience.ANY:
        query = query.filter(Match.experience == search.experience.value)

    query = query.order_by(Match.scheduled_date.asc(), Match.id.asc())
    offset = (search.page - 1) * search.limit

    if not search.tags and not search.has_point:
        total = query.count()
        matches = query.offset(offset).limit(search.limit).all()
        return MatchPage(matches, {}, total, search.page, search.limit)

    wanted_tags = set(search.tags)
    selected = []
    distances = {}
    for match in query.all():
        if wanted_tags and not wanted_tags.intersection(match.tags or []):
            continue
        if search.has_point:
            distance = within_radius(
                match.latitude,
                match.longitude,
                search.latitude,
                search.longitude,
                search.max_distance_km,
            )
            if distance is None:
                continue
            distances[match.id] = distance
        selected.append(match)

    page = selected[offset : offset + search.limit]
    return MatchPage(page, distances, len(selected), search.page, search.limit)


def user_matches(
    db: Session,
    user_id: int,
    status: MatchStatus | None = None,
    page: int = 1,
    limit: int = 20,
) -> MatchPage:
    """Matches a user hosts or has a roster entry in."""
    roster_match_ids = select(MatchPlayer.match_id).where(MatchPlayer.user_id == user_id)
    query = db.query(Match).filter(
        or_(Match.host_id == user_id, Match.id.in_(roster_match_ids))
    )
    if status is not None:
        query = query.filter(Match.status == status.value)

    total = query.count()
    matches = (
        query.order_by(Match.scheduled_date.asc(), Match.id.asc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return MatchPage(matches, {}, total, page, limit)
