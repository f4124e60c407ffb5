"""SQLAlchemy ORM models for marketing campaigns."""

from __future__ import annotations

from typing import TYPE_CHECKING

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    JSON,
    CheckConstraint,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from admissions.db.base import Base
from admissions.db.enums import CampaignStatus
from admissions.utils.dates import utcnow

if TYPE_CHECKING:
    from admissions.db.models import Prospect


class Campaign(Base):
    """
    Marketing campaign on a single channel.

    spent may never exceed budget; ends_at is strictly after starts_at.
    Managers and directors own campaigns; only directors delete them.
    """

    __tablename__ = "campaigns"
    __table_args__ = (
        CheckConstraint("spent <= budget", name="ck_campaigns_spent_within_budget"),
        CheckConstraint("ends_at > starts_at", name="ck_campaigns_date_order"),
        Index("idx_campaigns_status", "status"),
        Index("idx_campaigns_channel", "channel"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    channel: Mapped[str] = mapped_column(String(30), nullable=False)

    # Money
    budget: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    spent: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0"), nullable=False)

    status: Mapped[str] = mapped_column(
        String(20), default=CampaignStatus.ACTIVE.value, nullable=False
    )

    # Scheduling
    starts_at: Mapped[datetime] = mapped_column(nullable=False)
    ends_at: Mapped[datetime] = mapped_column(nullable=False)

    # Goals
    lead_target: Mapped[int | None] = mapped_column(Integer, nullable=True)
    enrollment_target: Mapped[int | None] = mapped_column(Integer, nullable=True)

    channel_config: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)


class CampaignProspect(Base):
    """
    Attribution link between a campaign and a prospect.

    A prospect may be linked to several campaigns.
    """

    __tablename__ = "campaign_prospects"
    __table_args__ = (
        UniqueConstraint("campaign_id", "prospect_id", name="uq_campaign_prospect"),
        Index("idx_campaign_prospects_prospect", "prospect_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    campaign_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("campaigns.id", ondelete="CASCADE"), nullable=False
    )
    prospect_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("prospects.id", ondelete="CASCADE"), nullable=False
    )
    associated_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)

    # Relationships
    campaign: Mapped["Campaign"] = relationship()
    prospect: Mapped["Prospect"] = relationship()
