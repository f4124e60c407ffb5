"""Prospect schemas for request/response validation."""

from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from admissions.db.enums import EducationLevel, ProspectPriority, ProspectStatus
from admissions.schemas.common import ContactEmail, MoneyFloat, TrimmedStr


# =============================================================================
# Prospect CRUD
# =============================================================================

class ProspectCreate(BaseModel):
    """Create a prospect. Advisors always get the prospect assigned to themselves."""
    full_name: TrimmedStr = Field(..., min_length=1, max_length=255)
    phone: TrimmedStr = Field(..., min_length=1, max_length=50)
    email: ContactEmail
    education_level: EducationLevel
    origin: str = Field(..., min_length=1, max_length=50)
    status: ProspectStatus = ProspectStatus.NEW
    priority: ProspectPriority = ProspectPriority.MEDIUM
    advisor_id: UUID | None = None
    enrollment_value: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    notes: str | None = None
    appointment_at: datetime | None = None
    additional_data: dict[str, Any] | None = None
    program_of_interest: str | None = Field(None, max_length=255)
    data_consent: bool = False
    source_detail: str | None = Field(None, max_length=255)


class ProspectUpdate(BaseModel):
    """Partial update. Only fields present in the request body are applied."""
    full_name: TrimmedStr | None = Field(None, min_length=1, max_length=255)
    phone: TrimmedStr | None = Field(None, min_length=1, max_length=50)
    email: ContactEmail | None = None
    education_level: EducationLevel | None = None
    origin: str | None = Field(None, min_length=1, max_length=50)
    status: ProspectStatus | None = None
    priority: ProspectPriority | None = None
    advisor_id: UUID | None = None
    enrollment_value: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    notes: str | None = None
    appointment_at: datetime | None = None
    additional_data: dict[str, Any] | None = None
    program_of_interest: str | None = Field(None, max_length=255)
    data_consent: bool | None = None
    source_detail: str | None = Field(None, max_length=255)


class ProspectStatusUpdate(BaseModel):
    """Move a prospect to another pipeline stage."""
    status: ProspectStatus
    enrollment_value: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)


class ProspectAssign(BaseModel):
    advisor_id: UUID


class ProspectResponse(BaseModel):
    id: UUID
    full_name: str
    phone: str
    email: str
    education_level: str
    origin: str
    status: str
    priority: str
    advisor_id: UUID | None
    enrollment_value: MoneyFloat | None
    notes: str | None
    registered_at: datetime
    last_interaction_at: datetime
    appointment_at: datetime | None
    additional_data: dict[str, Any] | None
    program_of_interest: str | None
    data_consent: bool
    source_detail: str | None
    public_form_id: UUID | None

    model_config = {"from_attributes": True}


class ProspectStatsResponse(BaseModel):
    total: int
    by_status: dict[str, int]
    by_origin: dict[str, int]
    by_priority: dict[str, int]
    by_education_level: dict[str, int]
    conversion_rate: float
