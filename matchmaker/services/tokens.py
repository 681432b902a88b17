"""Access/refresh token issuance, verification and rotation.

Each user has at most one live token pair, stored on the user record.
Issuing a new pair replaces the stored one, rotation only succeeds for the
refresh token that is currently stored, and revocation clears the pair.
"""

import logging
import uuid
from datetime import timedelta

from jose import JWTError, jwt
from sqlalchemy.orm import Session

from matchmaker.config import Settings, get_settings
from matchmaker.exceptions import InvalidTokenError
from matchmaker.models.user import User
from matchmaker.schemas.auth import TokenPair
from matchmaker.utils.datetime_utils import utcnow

logger = logging.getLogger(__name__)

ACCESS = "access"
REFRESH = "refresh"


class TokenService:
    """Service owning the token pair stored on each user."""

    def __init__(self, db: Session, settings: Settings | None = None):
        self.db = db
        self.settings = settings or get_settings()

    def _key_for(self, token_type: str) -> str:
        if token_type == ACCESS:
            return self.settings.jwt_secret
        return self.settings.jwt_refresh_secret

    def _encode(self, user_id: int, token_type: str, lifetime: timedelta) -> str:
        now = utcnow()
        claims = {
            "sub": str(user_id),
            "type": token_type,
            # Unique per token so pairs issued within the same second differ
            "jti": uuid.uuid4().hex,
            "iat": now,
            "exp": now + lifetime,
        }
        return jwt.encode(claims, self._key_for(token_type), algorithm=self.settings.jwt_algorithm)

    def _decode(self, token: str, token_type: str) -> int:
        """Return the user id embedded in a token of the expected type."""
        try:
            payload = jwt.decode(
                token, self._key_for(token_type), algorithms=[self.settings.jwt_algorithm]
            )
        except JWTError as e:
            raise InvalidTokenError() from e

        if payload.get("type") != token_type:
            raise InvalidTokenError("Invalid token type")
        try:
            return int(payload["sub"])
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidTokenError() from e

    def create_token_pair(self, user_id: int) -> TokenPair:
        """Sign a new pair without storing it."""
        return TokenPair(
            access_token=self._encode(
                user_id, ACCESS, timedelta(minutes=self.settings.access_token_expire_minutes)
            ),
            refresh_token=self._encode(
                user_id, REFRESH, timedelta(days=self.settings.refresh_token_expire_days)
            ),
        )

    def issue_token_pair(self, user_id: int) -> TokenPair:
        """Issue a pair for a user, replacing whatever pair was live before."""
        pair = self.create_token_pair(user_id)
        self.db.query(User).filter(User.id == user_id).update(
            {User.access_token: pair.access_token, User.refresh_token: pair.refresh_token},
            synchronize_session=False,
        )
        self.db.commit()
        return pair

    def verify_access(self, token: str) -> int:
        """Return the user id of a valid access token."""
        return self._decode(token, ACCESS)

    def rotate_refresh(self, refresh_token: str) -> TokenPair:
        """Exchange the live refresh token for a new pair.

        The swap is a single conditional UPDATE on the stored refresh token,
        so of two requests presenting the same token only one can succeed.
        """
        user_id = self._decode(refresh_token, REFRESH)
        pair = self.create_token_pair(user_id)
        updated = (
            self.db.query(User)
            .filter(
                User.id == user_id,
                User.refresh_token == refresh_token,
                User.is_active.is_(True),
            )
            .update(
                {User.access_token: pair.access_token, User.refresh_token: pair.refresh_token},
                synchronize_session=False,
            )
        )
        if updated != 1:
            self.db.rollback()
            logger.warning(f"Rejected stale or revoked refresh token for user {user_id}")
            raise InvalidTokenError("Refresh token is no longer valid")

        self.db.commit()
        logger.info(f"Rotated token pair for user {user_id}")
        return pair

    def revoke(self, user_id: int) -> None:
        """Clear the stored pair of a user."""
        self.db.query(User).filter(User.id == user_id).update(
            {User.access_token: None, User.refresh_token: None},
            synchronize_session=False,
        )
        self.db.commit()
        logger.info(f"Revoked tokens for user {user_id}")

    def revoke_by_refresh_token(self, refresh_token: str) -> bool:
        """Revoke the pair owning this refresh token.

        Unknown tokens are ignored so logout can be repeated safely.
        Returns whether a pair was revoked.
        """
        user = self.db.query(User).filter(User.refresh_token == refresh_token).first()
        if user is None:
            return False
        self.revoke(user.id)
        return True
