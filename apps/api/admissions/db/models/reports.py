"""SQLAlchemy ORM models for scheduled report definitions."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from admissions.db.base import Base
from admissions.utils.dates import utcnow


class ReportDefinition(Base):
    """
    A named report generated on a daily/weekly/monthly cadence.

    next_run_at is advisory: an external invoker runs definitions whose
    next_run_at has passed. recipients are handed to the report sink and
    otherwise unused.
    """

    __tablename__ = "report_definitions"
    __table_args__ = (Index("idx_report_definitions_due", "is_active", "next_run_at"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    type: Mapped[str] = mapped_column(String(30), nullable=False)
    frequency: Mapped[str] = mapped_column(String(20), nullable=False)
    recipients: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    config: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    last_run_at: Mapped[datetime | None] = mapped_column(nullable=True)
    next_run_at: Mapped[datetime | None] = mapped_column(nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
