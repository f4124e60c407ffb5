"""User service - user operations and session management."""

from uuid import UUID

from sqlalchemy.orm import Session

from admissions.core.security import hash_password, verify_password
from admissions.db.enums import Role
from admissions.db.models import User
from admissions.utils.normalization import normalize_email, normalize_name


def get_user_by_id(db: Session, user_id: UUID) -> User | None:
    """Get user by ID."""
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_username(db: Session, username: str) -> User | None:
    """Get user by exact username."""
    return db.query(User).filter(User.username == username).first()


def create_user(
    db: Session,
    username: str,
    password: str,
    display_name: str,
    email: str,
    role: Role | str,
) -> User:
    """
    Create a user with a hashed password.

    Raises:
        ValueError: username already taken
    """
    if get_user_by_username(db, username):
        raise ValueError("Username is already in use")

    user = User(
        username=username,
        password_hash=hash_password(password),
        display_name=normalize_name(display_name),
        email=normalize_email(email),
        role=Role(role).value,
    )
    db.add(user)
    db.flush()
    return user


def authenticate(db: Session, username: str, password: str) -> User | None:
    """Return the active user matching the credentials, else None."""
    user = get_user_by_username(db, username)
    if not user or not user.is_active:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def revoke_all_sessions(db: Session, user_id: UUID) -> bool:
    """
    Revoke all sessions for a user by bumping token_version.

    Existing tokens with old version will fail validation.

    Returns:
        True if user found and sessions revoked, False if user not found
    """
    user = get_user_by_id(db, user_id)
    if not user:
        return False

    user.token_version += 1
    db.commit()
    return True


def get_advisor(db: Session, user_id: UUID) -> User | None:
    """Active user with the advisor role, or None."""
    return db.query(User).filter(
        User.id == user_id,
        User.role == Role.ADVISOR.value,
        User.is_active.is_(True),
    ).first()
