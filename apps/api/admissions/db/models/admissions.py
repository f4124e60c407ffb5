"""SQLAlchemy ORM models for the admission sub-process (documents, payments)."""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import JSON, ForeignKey, Index, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from admissions.db.base import Base
from admissions.db.enums import DocumentStatus, PaymentStatus
from admissions.utils.dates import utcnow


class AdmissionDocument(Base):
    """Document uploaded during admission. Approval never promotes the prospect."""

    __tablename__ = "admission_documents"
    __table_args__ = (Index("idx_admission_documents_prospect", "prospect_id"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    prospect_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("prospects.id", ondelete="CASCADE"), nullable=False
    )
    document_type: Mapped[str] = mapped_column(String(30), nullable=False)
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    file_path: Mapped[str] = mapped_column(Text, nullable=False)
    size_bytes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), default=DocumentStatus.PENDING.value, nullable=False
    )
    comments: Mapped[str | None] = mapped_column(Text, nullable=True)
    uploaded_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    reviewed_at: Mapped[datetime | None] = mapped_column(nullable=True)
    reviewed_by_user_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )


class Payment(Base):
    """Payment made by a prospect during admission."""

    __tablename__ = "payments"
    __table_args__ = (Index("idx_payments_prospect", "prospect_id", "status"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    prospect_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("prospects.id", ondelete="CASCADE"), nullable=False
    )
    concept: Mapped[str] = mapped_column(String(30), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), default="MXN", nullable=False)
    method: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), default=PaymentStatus.PENDING.value, nullable=False
    )
    transaction_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    payment_data: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    paid_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    due_at: Mapped[datetime | None] = mapped_column(nullable=True)
