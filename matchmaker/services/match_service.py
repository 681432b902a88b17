"""Match lifecycle: creation, roster changes and status transitions.

Status flow::

    open <-> full            roster count crossing capacity
    open|full -> in-progress  host starts the match
    in-progress -> completed  host completes the match
    open|full|in-progress -> cancelled   host cancels

Writes that touch the roster load the match row ``FOR UPDATE`` and bump
its version counter, so two writers working from the same snapshot cannot
both commit. The loser is rolled back and the operation retried against
fresh state.
"""

import logging
from collections.abc import Callable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from matchmaker.config import Settings, get_settings
from matchmaker.exceptions import (
    AlreadyCompletedError,
    AlreadyJoinedError,
    AppError,
    CapacityBelowRosterError,
    ConcurrentModificationError,
    ForbiddenError,
    HostCannotLeaveError,
    InvalidScheduleError,
    InvalidTransitionError,
    LockedStateError,
    MatchFullError,
    NotAJoinerError,
    NotFoundError,
    NotOpenError,
)
from matchmaker.models.enums import MatchStatus, PlayerStatus
from matchmaker.models.game import Game
from matchmaker.models.match import Match, MatchPlayer
from matchmaker.schemas.match import MatchCreate, MatchUpdate
from matchmaker.utils.datetime_utils import as_utc, is_future, utcnow

logger = logging.getLogger(__name__)


def available_spots(match: Match) -> int:
    """Capacity minus confirmed roster entries."""
    return match.available_spots


def is_full(match: Match) -> bool:
    return match.is_full


def _sync_capacity_status(match: Match) -> None:
    """Move between open and full to follow the confirmed roster count."""
    if match.status == MatchStatus.OPEN.value and match.is_full:
        match.status = MatchStatus.FULL.value
        logger.info(f"Match {match.id} is now full")
    elif match.status == MatchStatus.FULL.value and not match.is_full:
        match.status = MatchStatus.OPEN.value
        logger.info(f"Match {match.id} reopened")


class MatchService:
    """Service for match state transitions."""

    def __init__(self, db: Session, settings: Settings | None = None):
        self.db = db
        self.settings = settings or get_settings()

    def get(self, match_id: int) -> Match:
        match = self.db.query(Match).filter(Match.id == match_id).first()
        if not match:
            raise NotFoundError("Match not found")
        return match

    def _load_match_for_update(self, match_id: int) -> Match:
        match = (
            self.db.query(Match)
            .filter(Match.id == match_id)
            .with_for_update(of=Match)
            .populate_existing()
            .first()
        )
        if not match:
            raise NotFoundError("Match not found")
        return match

    def _write(self, operation: Callable[[], Match], action: str) -> Match:
        """Run a read-modify-write operation and commit it.

        Stale writes are retried up to ``match_write_retries`` times. Domain
        errors roll back and propagate unchanged.
        """
        attempts = self.settings.match_write_retries
        for attempt in range(1, attempts + 1):
            try:
                match = operation()
                self.db.commit()
            except AppError:
                self.db.rollback()
                raise
            except StaleDataError:
                self.db.rollback()
                logger.warning(f"Concurrent {action} detected (attempt {attempt}/{attempts})")
                continue
            except IntegrityError as e:
                self.db.rollback()
                if action == "join":
                    raise AlreadyJoinedError() from e
                raise
            self.db.refresh(match)
            return match

        raise ConcurrentModificationError()

    @staticmethod
    def _touch(match: Match) -> None:
        # Forces an UPDATE of the match row, which checks and bumps the version
        match.updated_at = utcnow()

    def create(self, host_id: int, data: MatchCreate) -> Match:
        """Create a match with the host as its only confirmed player."""
        now = utcnow()
        if not is_future(data.scheduled_date, now):
            raise InvalidScheduleError()
        if not self.db.query(Game).filter(Game.id == data.game_id).first():
            raise NotFoundError("Game not found")

        match = Match(
            host_id=host_id,
            game_id=data.game_id,
            title=data.title,
            description=data.description,
            latitude=data.location.latitude,
            longitude=data.location.longitude,
            address=data.location.address,
            venue=data.location.venue,
            city=data.location.city,
            scheduled_date=as_utc(data.scheduled_date),
            duration=data.duration,
            max_players=data.max_players,
            status=MatchStatus.OPEN.value,
            experience=data.requirements.experience.value,
            age_min=data.requirements.age_min,
            notes=data.requirements.notes,
            tags=data.tags,
            is_public=data.is_public,
            visibility=data.visibility.value,
        )
        match.players.append(
            MatchPlayer(user_id=host_id, joined_at=now, status=PlayerStatus.CONFIRMED.value)
        )
        self.db.add(match)
        self.db.commit()
        self.db.refresh(match)
        logger.info(f"User {host_id} created match {match.id}")
        return match

    def join(self, match_id: int, user_id: int) -> Match:
        """Add a confirmed roster entry for a user."""

        def operation() -> Match:
            match = self._load_match_for_update(match_id)
            if match.has_player(user_id):
                raise AlreadyJoinedError()
            if match.is_full:
                raise MatchFullError()
            if not match.match_status.accepts_players():
                raise NotOpenError()

            match.players.append(
                MatchPlayer(
                    user_id=user_id,
                    joined_at=utcnow(),
                    status=PlayerStatus.CONFIRMED.value,
                )
            )
            _sync_capacity_status(match)
            self._touch(match)
            return match

        match = self._write(operation, "join")
        logger.info(f"User {user_id} joined match {match_id}")
        return match

    def leave(self, match_id: int, user_id: int) -> Match:
        """Remove a user's roster entry. The host has to cancel instead."""

        def operation() -> Match:
            match = self._load_match_for_update(match_id)
            player = match.get_player(user_id)
            if player is None:
                raise NotAJoinerError()
            if match.host_id == user_id:
                raise HostCannotLeaveError()

            match.players.remove(player)
            _sync_capacity_status(match)
            self._touch(match)
            return match

        match = self._write(operation, "leave")
        logger.info(f"User {user_id} left match {match_id}")
        return match

    def cancel(self, match_id: int, by_user_id: int) -> Match:
        """Cancel a match. Cancelling an already cancelled match is a no-op."""

        def operation() -> Match:
            match = self._load_match_for_update(match_id)
            if match.host_id != by_user_id:
                raise ForbiddenError("Only the host can cancel this match")
            if match.status == MatchStatus.COMPLETED.value:
                raise AlreadyCompletedError()

            match.status = MatchStatus.CANCELLED.value
            self._touch(match)
            return match

        match = self._write(operation, "cancel")
        logger.info(f"Match {match_id} cancelled by host {by_user_id}")
        return match

    def start(self, match_id: int, by_user_id: int) -> Match:
        """Move an open or full match to in-progress."""
        return self._transition(
            match_id,
            by_user_id,
            allowed_from=(MatchStatus.OPEN, MatchStatus.FULL),
            target=MatchStatus.IN_PROGRESS,
        )

    def complete(self, match_id: int, by_user_id: int) -> Match:
        """Move an in-progress match to completed."""
        return self._transition(
            match_id,
            by_user_id,
            allowed_from=(MatchStatus.IN_PROGRESS,),
            target=MatchStatus.COMPLETED,
        )

    def _transition(
        self,
        match_id: int,
        by_user_id: int,
        allowed_from: tuple[MatchStatus, ...],
        target: MatchStatus,
    ) -> Match:
        def operation() -> Match:
            match = self._load_match_for_update(match_id)
            if match.host_id != by_user_id:
                raise ForbiddenError("Only the host can change the match status")
            if match.match_status not in allowed_from:
                raise InvalidTransitionError(
                    f"Cannot move match from {match.status} to {target.value}"
                )
            match.status = target.value
            self._touch(match)
            return match

        match = self._write(operation, target.value)
        logger.info(f"Match {match_id} is now {target.value}")
        return match

    def update_metadata(self, match_id: int, by_user_id: int, data: MatchUpdate) -> Match:
        """Apply the provided fields of ``data`` to a match.

        Lowering ``max_players`` below the confirmed roster is rejected; any
        other capacity change re-derives open/full from the roster.
        """
        fields = data.model_dump(exclude_unset=True)

        def operation() -> Match:
            match = self._load_match_for_update(match_id)
            if match.host_id != by_user_id:
                raise ForbiddenError("Only the host can update this match")
            if match.match_status.is_locked():
                raise LockedStateError()

            if "scheduled_date" in fields and data.scheduled_date is not None:
                if not is_future(data.scheduled_date):
                    raise InvalidScheduleError()
                match.scheduled_date = as_utc(data.scheduled_date)
            if "max_players" in fields and data.max_players is not None:
                if data.max_players < match.confirmed_count:
                    raise CapacityBelowRosterError()
                match.max_players = data.max_players
                _sync_capacity_status(match)

            if data.title is not None:
                match.title = data.title
            if data.description is not None:
                match.description = data.description
            if data.duration is not None:
                match.duration = data.duration
            if data.location is not None:
                match.latitude = data.location.latitude
                match.longitude = data.location.longitude
                match.address = data.location.address
                match.venue = data.location.venue
                match.city = data.location.city
            if data.requirements is not None:
                match.experience = data.requirements.experience.value
                match.age_min = data.requirements.age_min
                match.notes = data.requirements.notes
            if data.tags is not None:
                match.tags = data.tags
            if data.is_public is not None:
                match.is_public = data.is_public
            if data.visibility is not None:
                match.visibility = data.visibility.value

            self._touch(match)
            return match

        match = self._write(operation, "update")
        logger.info(f"Match {match_id} updated by host {by_user_id}: {sorted(fields)}")
        return match
