"""Request dependencies: DB session, cookie auth, role checks and CSRF."""

from typing import Generator
from uuid import UUID

import jwt
from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from admissions.core.policies import get_policy
from admissions.core.security import decode_session_token
from admissions.db.enums import ROLES_CAN_MANAGE_COMMUNICATIONS, Role
from admissions.db.models import User
from admissions.db.session import SessionLocal
from admissions.schemas.auth import UserSession

COOKIE_NAME = "crm_session"
CSRF_HEADER = "X-Requested-With"
CSRF_HEADER_VALUE = "XMLHttpRequest"


def get_db() -> Generator[Session, None, None]:
    """One session per request, closed when the response is sent."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _user_id_from_claims(claims: dict) -> UUID:
    try:
        return UUID(str(claims.get("sub")))
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid session")


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    """
    Resolve the user behind the session cookie.

    The token must verify against a current or previous secret, and its
    token_version must match the user's (logout bumps it).

    Raises:
        HTTPException 401: No cookie, bad token, unknown or disabled user,
            or a revoked session
    """
    token = request.cookies.get(COOKIE_NAME)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    try:
        claims = decode_session_token(token)
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid session")

    user = db.get(User, _user_id_from_claims(claims))
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    if not user.is_active:
        raise HTTPException(status_code=401, detail="Account disabled")
    if user.token_version != claims.get("token_version"):
        raise HTTPException(status_code=401, detail="Session revoked")
    return user


def get_current_session(request: Request, db: Session = Depends(get_db)) -> UserSession:
    """Authenticated caller as a UserSession. Most endpoints depend on this."""
    user = get_current_user(request, db)

    # A role string outside the enum is a data problem, not a server error
    if not Role.has_value(user.role):
        raise HTTPException(
            status_code=403,
            detail=f"Unknown role '{user.role}'. Contact administrator.",
        )

    # Picked up by the 500 handler's log context
    request.state.user_id = str(user.id)
    request.state.role = user.role

    return UserSession(
        user_id=user.id,
        role=Role(user.role),
        username=user.username,
        email=user.email,
        display_name=user.display_name,
    )


def require_roles(allowed_roles):
    """
    Build a dependency that authenticates and rejects roles outside allowed_roles.

    The dependency returns the UserSession, so handlers can take it directly:
        session: UserSession = Depends(require_roles({Role.DIRECTOR}))
    """
    def dependency(request: Request, db: Session = Depends(get_db)) -> UserSession:
        session = get_current_session(request, db)
        if session.role not in allowed_roles:
            raise HTTPException(
                status_code=403,
                detail=f"Role '{session.role.value}' not authorized for this action",
            )
        return session
    return dependency


def require_policy(resource: str, action: str | None = None):
    """Role check driven by the resource policy table."""
    return require_roles(get_policy(resource).roles_for(action))


def require_csrf_header(request: Request) -> None:
    """
    Reject mutations without the X-Requested-With header.

    Browsers cannot set it on cross-site form posts, so its presence shows
    the request came from the app's own JS.
    """
    if request.headers.get(CSRF_HEADER) != CSRF_HEADER_VALUE:
        raise HTTPException(
            status_code=403,
            detail=f"Missing CSRF header. Include '{CSRF_HEADER}: {CSRF_HEADER_VALUE}'",
        )


# =============================================================================
# Ownership helpers
# =============================================================================

def is_author_or_can_manage(session, author_user_id) -> bool:
    """Authors may edit their own communications; managers and directors any."""
    return session.user_id == author_user_id or session.role in ROLES_CAN_MANAGE_COMMUNICATIONS
