"""SQLAlchemy ORM model for enrolled students."""

from __future__ import annotations

from typing import TYPE_CHECKING

import uuid
from datetime import date, datetime

from sqlalchemy import JSON, Date, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from admissions.db.base import Base
from admissions.db.enums import StudentStatus
from admissions.utils.dates import utcnow

if TYPE_CHECKING:
    from admissions.db.models import Prospect


class Student(Base):
    """
    A prospect that completed enrollment.

    One row per prospect, created by complete_enrollment. enrollment_number
    is unique across all students.
    """

    __tablename__ = "students"
    __table_args__ = (
        Index("idx_students_status", "status"),
        Index("idx_students_modality", "modality"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    prospect_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("prospects.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    enrollment_number: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)

    education_level: Mapped[str] = mapped_column(String(30), nullable=False)
    program: Mapped[str] = mapped_column(String(255), nullable=False)
    modality: Mapped[str] = mapped_column(String(20), nullable=False)
    shift: Mapped[str] = mapped_column(String(20), nullable=False)
    starts_on: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), default=StudentStatus.ACTIVE.value, nullable=False
    )
    academic_data: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    enrolled_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)

    prospect: Mapped["Prospect"] = relationship()
