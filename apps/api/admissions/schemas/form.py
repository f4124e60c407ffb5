"""Public lead-capture form schemas."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from admissions.db.enums import EducationLevel, LeadOrigin
from admissions.schemas.common import ContactEmail, TrimmedStr


# =============================================================================
# Form management (authenticated)
# =============================================================================

class PublicFormCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    education_level: EducationLevel
    origin: str = Field(default=LeadOrigin.PUBLIC_FORM.value, min_length=1, max_length=50)
    is_active: bool = True
    config: dict[str, Any] | None = None
    expires_at: datetime | None = None


class PublicFormUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    education_level: EducationLevel | None = None
    origin: str | None = Field(None, min_length=1, max_length=50)
    is_active: bool | None = None
    config: dict[str, Any] | None = None
    expires_at: datetime | None = None


class PublicFormResponse(BaseModel):
    id: UUID
    name: str
    description: str | None
    slug: str
    education_level: str
    origin: str
    is_active: bool
    config: dict[str, Any] | None
    created_at: datetime
    expires_at: datetime | None

    model_config = {"from_attributes": True}


# =============================================================================
# Public (unauthenticated)
# =============================================================================

class PublicFormRead(BaseModel):
    """What an anonymous visitor sees: no internal ids or flags."""
    name: str
    description: str | None
    education_level: str
    config: dict[str, Any] | None

    model_config = {"from_attributes": True}


class PublicFormSubmission(BaseModel):
    full_name: TrimmedStr = Field(..., min_length=1, max_length=255)
    phone: TrimmedStr = Field(..., min_length=1, max_length=50)
    email: ContactEmail
    program_of_interest: str | None = Field(None, max_length=255)
    notes: str | None = Field(None, max_length=2000)
    additional_data: dict[str, Any] | None = None
    data_consent: bool

    @field_validator("data_consent")
    @classmethod
    def _require_consent(cls, v):
        if not v:
            raise ValueError("data_consent must be accepted to continue")
        return v


class PublicFormSubmitResponse(BaseModel):
    id: UUID
    status: str = "submitted"
