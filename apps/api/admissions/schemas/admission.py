"""Admission sub-process schemas (documents, payments, progress)."""

from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from admissions.db.enums import (
    DocumentStatus,
    DocumentType,
    PaymentConcept,
    PaymentMethod,
    PaymentStatus,
)
from admissions.schemas.common import MoneyStr, parse_decimal_string


# =============================================================================
# Documents
# =============================================================================

class AdmissionDocumentCreate(BaseModel):
    prospect_id: UUID
    document_type: DocumentType
    file_name: str = Field(..., min_length=1, max_length=255)
    file_path: str = Field(..., min_length=1)
    size_bytes: int | None = Field(None, ge=0)
    comments: str | None = None


class AdmissionDocumentReview(BaseModel):
    status: DocumentStatus
    comments: str | None = None


class AdmissionDocumentResponse(BaseModel):
    id: UUID
    prospect_id: UUID
    document_type: str
    file_name: str
    file_path: str
    size_bytes: int | None
    status: str
    comments: str | None
    uploaded_at: datetime
    reviewed_at: datetime | None
    reviewed_by_user_id: UUID | None

    model_config = {"from_attributes": True}


# =============================================================================
# Payments
# =============================================================================

class PaymentCreate(BaseModel):
    prospect_id: UUID
    concept: PaymentConcept
    amount: str
    currency: str = Field(default="MXN", min_length=3, max_length=3)
    method: PaymentMethod
    status: PaymentStatus = PaymentStatus.PENDING
    transaction_id: str | None = Field(None, max_length=255)
    payment_data: dict[str, Any] | None = None
    due_at: datetime | None = None

    @field_validator("amount")
    @classmethod
    def _validate_amount(cls, v):
        parse_decimal_string(v, "amount")
        return v

    @property
    def amount_decimal(self) -> Decimal:
        return Decimal(self.amount)


class PaymentUpdate(BaseModel):
    status: PaymentStatus
    transaction_id: str | None = Field(None, max_length=255)


class PaymentResponse(BaseModel):
    id: UUID
    prospect_id: UUID
    concept: str
    amount: MoneyStr
    currency: str
    method: str
    status: str
    transaction_id: str | None
    paid_at: datetime
    due_at: datetime | None

    model_config = {"from_attributes": True}


# =============================================================================
# Progress
# =============================================================================

class AdmissionProgressResponse(BaseModel):
    prospect_id: UUID
    status: str
    progress: int
    approved_documents: int
    completed_payments: int
