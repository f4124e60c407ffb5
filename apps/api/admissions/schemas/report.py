"""Report definition schemas."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, model_validator

from admissions.db.enums import ExportFormat, ReportFrequency, ReportType


class ReportFilters(BaseModel):
    """
    Filters accepted by report generation.

    When start/end are omitted the configured default window is used.
    """
    start: datetime | None = None
    end: datetime | None = None
    advisor_id: UUID | None = None
    origin: str | None = None
    channel: str | None = None
    status: str | None = None
    format: ExportFormat | None = None

    @model_validator(mode="after")
    def _validate_window(self):
        if self.start and self.end and self.end <= self.start:
            raise ValueError("end must be after start")
        return self


class ReportDefinitionCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    type: ReportType
    frequency: ReportFrequency
    recipients: list[EmailStr] = Field(default_factory=list)
    config: ReportFilters | None = None
    is_active: bool = True


class ReportDefinitionUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    type: ReportType | None = None
    frequency: ReportFrequency | None = None
    recipients: list[EmailStr] | None = None
    config: ReportFilters | None = None
    is_active: bool | None = None


class ReportDefinitionResponse(BaseModel):
    id: UUID
    name: str
    type: str
    frequency: str
    recipients: list[str]
    config: dict[str, Any] | None
    is_active: bool
    last_run_at: datetime | None
    next_run_at: datetime | None
    created_at: datetime

    model_config = {"from_attributes": True}


class GenerateReportRequest(BaseModel):
    """Ad-hoc generation; an export format also writes the file."""
    type: ReportType
    filters: ReportFilters = Field(default_factory=ReportFilters)
    format: ExportFormat | None = None


class GenerateReportResponse(BaseModel):
    data: dict[str, Any]
    file_path: str | None = None


class ExecuteReportResponse(BaseModel):
    file_path: str
    last_run_at: datetime | None
    next_run_at: datetime | None


class ScheduledReportsResponse(BaseModel):
    executed: int
    failed: int
    file_paths: list[str]
