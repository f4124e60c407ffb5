"""Dashboard metric schemas."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel

from admissions.schemas.common import MoneyFloat
from admissions.schemas.prospect import ProspectResponse


class Period(BaseModel):
    start: datetime
    end: datetime


class WeeklyCount(BaseModel):
    week_start: date
    count: int


class AdvisorPerformance(BaseModel):
    advisor_id: UUID
    name: str
    prospects: int
    enrolled: int
    communications: int
    conversion_rate: float


class DirectorMetrics(BaseModel):
    period: Period
    total_prospects: int
    total_enrolled: int
    conversion_rate: float
    average_active_campaign_spent: MoneyFloat
    prospects_per_week: list[WeeklyCount]
    enrolled_per_advisor: list[AdvisorPerformance]
    by_origin: dict[str, int]


class WeeklyActivity(BaseModel):
    week_start: date
    by_type: dict[str, int]
    total: int


class ManagerMetrics(BaseModel):
    period: Period
    advisors: list[AdvisorPerformance]
    weekly_activity: list[WeeklyActivity]
    by_status: dict[str, int]


class UpcomingAppointment(BaseModel):
    prospect_id: UUID
    full_name: str
    phone: str
    appointment_at: datetime


class AdvisorMetrics(BaseModel):
    total_prospects: int
    enrolled: int
    conversion_rate: float
    communications: int
    communications_this_week: int
    by_status: dict[str, int]
    upcoming_appointments: list[UpcomingAppointment]
    prospects: list[ProspectResponse]
