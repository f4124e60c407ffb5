"""Communication schemas for request/response validation."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from admissions.db.enums import CommunicationDirection, CommunicationState, CommunicationType


class CommunicationCreate(BaseModel):
    """Log a communication. The author is always the caller."""
    prospect_id: UUID
    type: CommunicationType
    direction: CommunicationDirection
    content: str = Field(..., min_length=1)
    result: str | None = None
    duration_minutes: int | None = Field(None, gt=0)
    state: CommunicationState = CommunicationState.COMPLETED
    occurred_at: datetime | None = None


class CommunicationUpdate(BaseModel):
    """Only content, result, duration and state are mutable."""
    content: str | None = Field(None, min_length=1)
    result: str | None = None
    duration_minutes: int | None = Field(None, gt=0)
    state: CommunicationState | None = None


class CommunicationResponse(BaseModel):
    id: UUID
    prospect_id: UUID
    user_id: UUID
    type: str
    direction: str
    content: str
    result: str | None
    duration_minutes: int | None
    state: str
    occurred_at: datetime

    model_config = {"from_attributes": True}


class CommunicationStatsResponse(BaseModel):
    total: int
    by_type: dict[str, int]
    by_direction: dict[str, int]
    by_state: dict[str, int]
    average_call_minutes: float
