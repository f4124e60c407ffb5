"""SQLAlchemy ORM models for prospects (admission leads)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import JSON, Boolean, ForeignKey, Index, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from admissions.db.base import Base
from admissions.db.enums import DEFAULT_PROSPECT_PRIORITY, DEFAULT_PROSPECT_STATUS
from admissions.utils.dates import utcnow

if TYPE_CHECKING:
    from admissions.db.models import User


class Prospect(Base):
    """
    A lead moving through the admissions pipeline.

    status is one of ProspectStatus; transitions between stages are not
    restricted. last_interaction_at is bumped on every mutation and whenever
    a communication is logged against the prospect.
    """

    __tablename__ = "prospects"
    __table_args__ = (
        Index("idx_prospects_advisor", "advisor_id"),
        Index("idx_prospects_status", "status"),
        Index("idx_prospects_origin", "origin"),
        Index("idx_prospects_last_interaction", "last_interaction_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    # Contact
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)

    # Qualification
    education_level: Mapped[str] = mapped_column(String(30), nullable=False)
    origin: Mapped[str] = mapped_column(String(50), nullable=False)
    source_detail: Mapped[str | None] = mapped_column(String(255), nullable=True)
    program_of_interest: Mapped[str | None] = mapped_column(String(255), nullable=True)
    data_consent: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Pipeline
    status: Mapped[str] = mapped_column(
        String(30), default=DEFAULT_PROSPECT_STATUS.value, nullable=False
    )
    priority: Mapped[str] = mapped_column(
        String(10), default=DEFAULT_PROSPECT_PRIORITY.value, nullable=False
    )
    advisor_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    enrollment_value: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)

    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    additional_data: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    # Lead capture
    public_form_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("public_forms.id", ondelete="SET NULL"), nullable=True
    )

    # Timestamps
    registered_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    last_interaction_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    appointment_at: Mapped[datetime | None] = mapped_column(nullable=True)

    # Relationships
    advisor: Mapped["User | None"] = relationship()
