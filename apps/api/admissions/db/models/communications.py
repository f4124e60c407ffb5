"""SQLAlchemy ORM models for prospect communications."""

from __future__ import annotations

from typing import TYPE_CHECKING

import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from admissions.db.base import Base
from admissions.db.enums import DEFAULT_COMMUNICATION_STATE
from admissions.utils.dates import utcnow

if TYPE_CHECKING:
    from admissions.db.models import Prospect, User


class Communication(Base):
    """
    A call, email, WhatsApp message or visit logged against a prospect.

    prospect_id and user_id are fixed at creation.
    """

    __tablename__ = "communications"
    __table_args__ = (
        CheckConstraint(
            "duration_minutes IS NULL OR duration_minutes > 0",
            name="ck_communications_duration_positive",
        ),
        Index("idx_communications_prospect", "prospect_id", "occurred_at"),
        Index("idx_communications_user", "user_id", "occurred_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    prospect_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("prospects.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    type: Mapped[str] = mapped_column(String(20), nullable=False)
    direction: Mapped[str] = mapped_column(String(20), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    result: Mapped[str | None] = mapped_column(Text, nullable=True)
    duration_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    state: Mapped[str] = mapped_column(
        String(20), default=DEFAULT_COMMUNICATION_STATE.value, nullable=False
    )
    occurred_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)

    # Relationships
    prospect: Mapped["Prospect"] = relationship()
    user: Mapped["User"] = relationship()
