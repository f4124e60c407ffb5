"""Enrolled student schemas."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field

from admissions.db.enums import StudyModality, StudyShift


class EnrollmentDetails(BaseModel):
    """Optional academic placement sent with completar-matricula."""

    program: str | None = Field(None, min_length=1, max_length=255)
    modality: StudyModality = StudyModality.IN_PERSON
    shift: StudyShift = StudyShift.MORNING
    starts_on: date | None = None
    academic_data: dict | None = None


class StudentProspect(BaseModel):
    id: UUID
    full_name: str
    email: str
    phone: str
    advisor_id: UUID | None

    model_config = {"from_attributes": True}


class StudentResponse(BaseModel):
    id: UUID
    prospect_id: UUID
    enrollment_number: str
    education_level: str
    program: str
    modality: str
    shift: str
    starts_on: date
    status: str
    academic_data: dict | None
    enrolled_at: datetime
    prospect: StudentProspect

    model_config = {"from_attributes": True}
