"""SQLAlchemy ORM models for public lead-capture forms."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from admissions.db.base import Base
from admissions.db.enums import LeadOrigin
from admissions.utils.dates import utcnow


class PublicForm(Base):
    """Unauthenticated lead-capture form reachable at /api/public/form/{slug}."""

    __tablename__ = "public_forms"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    slug: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    education_level: Mapped[str] = mapped_column(String(30), nullable=False)
    origin: Mapped[str] = mapped_column(
        String(50), default=LeadOrigin.PUBLIC_FORM.value, nullable=False
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    config: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    expires_at: Mapped[datetime | None] = mapped_column(nullable=True)
