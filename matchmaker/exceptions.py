"""Domain errors raised by services and translated to HTTP responses by the API."""

from fastapi import status


class AppError(Exception):
    """Base class for errors that are recovered at the API boundary."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid input"


class InvalidScheduleError(ValidationError):
    message = "Scheduled date must be in the future"


class AuthError(AppError):
    """Missing, invalid or expired credential."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid authentication credentials"


class InvalidTokenError(AuthError):
    message = "Invalid or expired token"


class InvalidCredentialsError(AuthError):
    message = "Incorrect username or password"


class ForbiddenError(AppError):
    """Authenticated but not allowed to perform the action."""

    status_code = status.HTTP_403_FORBIDDEN
    message = "You are not allowed to perform this action"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class ConflictError(AppError):
    """Duplicate unique field or conflicting concurrent write."""

    status_code = status.HTTP_409_CONFLICT
    message = "Conflict"


class ConcurrentModificationError(ConflictError):
    message = "The record was modified concurrently, please retry"


class StateError(AppError):
    """Illegal transition of a match."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Illegal match state transition"


class AlreadyJoinedError(StateError):
    message = "You are already in this match"


class MatchFullError(StateError):
    message = "Match is full"


class NotOpenError(StateError):
    message = "Match is not accepting new players"


class NotAJoinerError(StateError):
    message = "You are not in this match"


class HostCannotLeaveError(StateError):
    message = "Host cannot leave their own match. Cancel the match instead."


class AlreadyCompletedError(StateError):
    message = "Cannot cancel completed match"


class LockedStateError(StateError):
    message = "Cannot update match that is in progress or completed"


class InvalidTransitionError(StateError):
    message = "Match cannot move to the requested status"


class CapacityBelowRosterError(StateError):
    message = "Maximum players cannot be lower than the number of confirmed players"


class InternalError(AppError):
    pass
