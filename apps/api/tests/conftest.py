"""
Test configuration and fixtures.

Provides:
- In-memory SQLite database, schema rebuilt for each test
- Users for every role and JWT session cookies for them
- HTTPX AsyncClient with proper headers
"""
import os
import uuid
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal
from typing import AsyncGenerator, Generator

# Configure before any admissions module reads settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["TESTING"] = "1"
os.environ.setdefault("INTERNAL_SECRET", "test-internal-secret")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.orm import Session

from admissions.core import security
from admissions.core.deps import COOKIE_NAME, get_db
from admissions.core.security import create_session_token
from admissions.db.base import Base
from admissions.db.enums import Role
from admissions.db.models import Campaign, Prospect, User
from admissions.db.session import SessionLocal, engine
from admissions.main import app
from admissions.services import user_service
from admissions.utils.dates import utcnow


# =============================================================================
# Configuration
# =============================================================================

@pytest.fixture(autouse=True)
def fast_password_hashing(monkeypatch):
    """Full-cost PBKDF2 makes every user fixture slow."""
    monkeypatch.setattr(security, "PASSWORD_HASH_METHOD", "pbkdf2:sha256:1000")


@pytest.fixture(autouse=True)
def reports_dir(tmp_path, monkeypatch):
    """Keep exported report files out of the working tree."""
    from admissions.core.config import settings

    path = tmp_path / "reports"
    monkeypatch.setattr(settings, "REPORTS_DIR", str(path))
    return path


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """
    Creates a fresh schema and a session for the test.

    App code commits freely; the tables are dropped afterwards.
    """
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def make_user(db: Session):
    """Factory creating a committed user with the given role."""

    def _make(role: Role = Role.ADVISOR, username: str | None = None, password: str = "secret123"):
        username = username or f"{role.value}-{uuid.uuid4().hex[:8]}"
        user = user_service.create_user(
            db,
            username=username,
            password=password,
            display_name=f"Test {role.value.title()}",
            email=f"{username}@example.com",
            role=role,
        )
        db.commit()
        return user

    return _make


@pytest.fixture(scope="function")
def director(make_user) -> User:
    return make_user(Role.DIRECTOR)


@pytest.fixture(scope="function")
def manager(make_user) -> User:
    return make_user(Role.MANAGER)


@pytest.fixture(scope="function")
def advisor(make_user) -> User:
    return make_user(Role.ADVISOR)


@pytest.fixture(scope="function")
def other_advisor(make_user) -> User:
    return make_user(Role.ADVISOR)


@pytest.fixture(scope="function")
def make_prospect(db: Session):
    """Factory creating a committed prospect, optionally owned by an advisor."""

    def _make(advisor: User | None = None, **overrides) -> Prospect:
        now = utcnow()
        values = {
            "full_name": "Maria Lopez",
            "phone": "5551234567",
            "email": f"lead-{uuid.uuid4().hex[:8]}@example.com",
            "education_level": "high_school",
            "origin": "facebook",
            "status": "new",
            "priority": "medium",
            "advisor_id": advisor.id if advisor else None,
            "registered_at": now,
            "last_interaction_at": now,
        }
        values.update(overrides)
        prospect = Prospect(**values)
        db.add(prospect)
        db.commit()
        return prospect

    return _make


@pytest.fixture(scope="function")
def make_campaign(db: Session):
    """Factory creating a committed campaign."""

    def _make(**overrides) -> Campaign:
        now = utcnow()
        values = {
            "name": "Open House",
            "channel": "facebook",
            "budget": Decimal("1000.00"),
            "spent": Decimal("0"),
            "status": "active",
            "starts_at": now - timedelta(days=7),
            "ends_at": now + timedelta(days=30),
        }
        values.update(overrides)
        campaign = Campaign(**values)
        db.add(campaign)
        db.commit()
        return campaign

    return _make


# =============================================================================
# Auth Fixtures
# =============================================================================

@dataclass
class TestAuth:
    """Test authentication context."""
    user: User
    token: str
    cookie_name: str = COOKIE_NAME


def auth_for(user: User) -> TestAuth:
    """Mint a session JWT for the user."""
    token = create_session_token(
        user_id=user.id,
        role=user.role,
        token_version=user.token_version,
    )
    return TestAuth(user=user, token=token)


# =============================================================================
# Client Fixtures
# =============================================================================

@asynccontextmanager
async def _client(db: Session, auth: TestAuth | None = None) -> AsyncGenerator[AsyncClient, None]:
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    kwargs = {}
    if auth:
        kwargs["cookies"] = {auth.cookie_name: auth.token}
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"X-Requested-With": "XMLHttpRequest"},  # CSRF header
        **kwargs,
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def client(db: Session) -> AsyncGenerator[AsyncClient, None]:
    """Unauthenticated AsyncClient for public endpoints."""
    async with _client(db) as c:
        yield c


@pytest.fixture(scope="function")
async def director_client(db: Session, director: User) -> AsyncGenerator[AsyncClient, None]:
    async with _client(db, auth_for(director)) as c:
        yield c


@pytest.fixture(scope="function")
async def manager_client(db: Session, manager: User) -> AsyncGenerator[AsyncClient, None]:
    async with _client(db, auth_for(manager)) as c:
        yield c


@pytest.fixture(scope="function")
async def advisor_client(db: Session, advisor: User) -> AsyncGenerator[AsyncClient, None]:
    async with _client(db, auth_for(advisor)) as c:
        yield c


@pytest.fixture(scope="function")
async def other_advisor_client(db: Session, other_advisor: User) -> AsyncGenerator[AsyncClient, None]:
    async with _client(db, auth_for(other_advisor)) as c:
        yield c


@pytest.fixture(scope="function")
def make_auth():
    """Expose token minting to tests that manage cookies themselves."""
    return auth_for
