"""Auth router - registration, login/logout and current user."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from admissions.core.config import settings
from admissions.core.deps import (
    COOKIE_NAME,
    get_current_user,
    get_db,
    require_csrf_header,
)
from admissions.core.rate_limit import AUTH_LIMIT, limiter
from admissions.core.security import create_session_token
from admissions.schemas.auth import LoginRequest, RegisterRequest, UserResponse
from admissions.services import user_service

logger = logging.getLogger(__name__)

router = APIRouter()


def _set_session_cookie(response: Response, user) -> None:
    token = create_session_token(user.id, user.role, user.token_version)
    response.set_cookie(
        key=COOKIE_NAME,
        value=token,
        max_age=settings.JWT_EXPIRES_HOURS * 3600,
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
        path="/",
    )


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(AUTH_LIMIT)
def register(
    request: Request,
    response: Response,
    data: RegisterRequest,
    db: Session = Depends(get_db),
    _csrf=Depends(require_csrf_header),
):
    """Create an account and start a session for it."""
    try:
        user = user_service.create_user(
            db,
            username=data.username,
            password=data.password,
            display_name=data.display_name,
            email=data.email,
            role=data.role,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    db.commit()
    logger.info("Registered user %s with role %s", user.id, user.role)

    _set_session_cookie(response, user)
    return user


@router.post("/login", response_model=UserResponse)
@limiter.limit(AUTH_LIMIT)
def login(
    request: Request,
    response: Response,
    data: LoginRequest,
    db: Session = Depends(get_db),
    _csrf=Depends(require_csrf_header),
):
    user = user_service.authenticate(db, data.username, data.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")

    _set_session_cookie(response, user)
    return user


@router.post("/logout")
def logout(
    response: Response,
    user=Depends(get_current_user),
    db: Session = Depends(get_db),
    _csrf=Depends(require_csrf_header),
):
    """
    Revoke every outstanding session of the user and clear the cookie.

    Requires X-Requested-With header for CSRF protection.
    """
    user_service.revoke_all_sessions(db, user.id)
    response.delete_cookie(COOKIE_NAME, path="/")
    return {"status": "logged_out"}


@router.get("/user", response_model=UserResponse)
def get_me(user=Depends(get_current_user)):
    return user
