"""Authentication service for password handling and user accounts."""

import logging

from passlib.context import CryptContext
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from matchmaker.exceptions import ConflictError, InvalidCredentialsError, ValidationError
from matchmaker.models.user import User
from matchmaker.schemas.auth import UserRegister
from matchmaker.utils.datetime_utils import utcnow

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def get_user_by_username(db: Session, username: str) -> User | None:
    """Get a user by username."""
    return db.query(User).filter(User.username == username).first()


def create_user(db: Session, data: UserRegister) -> User:
    """Create a new user.

    Raises ConflictError when the username or email is already taken.
    """
    filters = [User.username == data.username]
    if data.email:
        filters.append(User.email == data.email)
    existing = db.query(User).filter(or_(*filters)).first()
    if existing:
        if existing.username == data.username:
            raise ConflictError("Username already exists")
        raise ConflictError("Email already exists")

    user = User(
        username=data.username,
        email=data.email,
        password_hash=get_password_hash(data.password),
        first_name=data.first_name,
        last_name=data.last_name,
        age=data.age,
        bio=data.bio,
    )
    if data.location:
        user.latitude = data.location.latitude
        user.longitude = data.location.longitude
        user.city = data.location.city
        user.country = data.location.country

    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError("Username or email already exists") from e
    db.refresh(user)
    logger.info(f"Registered user {user.id} ({user.username})")
    return user


def authenticate_user(db: Session, username: str, password: str) -> User:
    """Authenticate a user by username and password.

    Raises InvalidCredentialsError on unknown user, wrong password or a
    deactivated account.
    """
    user = get_user_by_username(db, username)
    if not user or not verify_password(password, user.password_hash):
        raise InvalidCredentialsError()
    if not user.is_active:
        raise InvalidCredentialsError("Account is deactivated")

    user.last_seen_at = utcnow()
    db.commit()
    return user


def change_password(db: Session, user: User, current_password: str, new_password: str) -> None:
    """Replace a user's password after checking the current one."""
    if not verify_password(current_password, user.password_hash):
        raise ValidationError("Current password is incorrect")
    user.password_hash = get_password_hash(new_password)
    db.commit()
    logger.info(f"Password changed for user {user.id}")
