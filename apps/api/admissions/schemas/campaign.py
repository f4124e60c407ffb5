"""Campaign schemas for request/response validation."""

from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from admissions.db.enums import CampaignChannel, CampaignStatus
from admissions.schemas.common import MoneyFloat, MoneyStr, parse_decimal_string
from admissions.utils.dates import ensure_utc


# =============================================================================
# Campaign CRUD
# =============================================================================

def _check_amount(value, info):
    amount = parse_decimal_string(value, info.field_name)
    # budget is declared before spent, so it is already in info.data when valid
    budget = info.data.get("budget")
    if info.field_name == "spent" and amount is not None and budget is not None:
        if amount > Decimal(budget):
            raise ValueError("spent must not exceed budget")
    return value


def _check_window(value, info):
    starts_at = info.data.get("starts_at")
    if value is not None and starts_at is not None and ensure_utc(value) <= ensure_utc(starts_at):
        raise ValueError("ends_at must be after starts_at")
    return value


class CampaignCreate(BaseModel):
    """
    Create a new campaign.

    budget and spent arrive as fixed-point strings; spent may not exceed
    budget and ends_at must be after starts_at.
    """
    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    channel: CampaignChannel
    budget: str
    spent: str = "0"
    status: CampaignStatus = CampaignStatus.ACTIVE
    starts_at: datetime
    ends_at: datetime
    lead_target: int | None = Field(None, gt=0)
    enrollment_target: int | None = Field(None, gt=0)
    channel_config: dict[str, Any] | None = None

    _validate_amount = field_validator("budget", "spent")(_check_amount)
    _validate_window = field_validator("ends_at")(_check_window)

    @property
    def budget_decimal(self) -> Decimal:
        return Decimal(self.budget)

    @property
    def spent_decimal(self) -> Decimal:
        return Decimal(self.spent)


class CampaignUpdate(BaseModel):
    """Partial update; cross-field rules are re-checked against stored values in the service."""
    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    channel: CampaignChannel | None = None
    budget: str | None = None
    spent: str | None = None
    status: CampaignStatus | None = None
    starts_at: datetime | None = None
    ends_at: datetime | None = None
    lead_target: int | None = Field(None, gt=0)
    enrollment_target: int | None = Field(None, gt=0)
    channel_config: dict[str, Any] | None = None

    _validate_amount = field_validator("budget", "spent")(_check_amount)
    _validate_window = field_validator("ends_at")(_check_window)


class CampaignResponse(BaseModel):
    id: UUID
    name: str
    description: str | None
    channel: str
    budget: MoneyStr
    spent: MoneyStr
    status: str
    starts_at: datetime
    ends_at: datetime
    lead_target: int | None
    enrollment_target: int | None
    channel_config: dict[str, Any] | None
    created_at: datetime

    model_config = {"from_attributes": True}


class CampaignProspectResponse(BaseModel):
    id: UUID
    campaign_id: UUID
    prospect_id: UUID
    associated_at: datetime

    model_config = {"from_attributes": True}


# =============================================================================
# Campaign Stats
# =============================================================================

class CampaignPerformance(BaseModel):
    """Per-campaign aggregates (also used as report rows)."""
    campaign_id: UUID
    name: str
    channel: str
    status: str
    budget: MoneyFloat
    spent: MoneyFloat
    leads: int
    enrollments: int
    revenue: MoneyFloat
    conversion_rate: float
    cost_per_lead: MoneyFloat
    cost_per_enrollment: MoneyFloat
    roi: float


class CampaignStatsResponse(BaseModel):
    total_campaigns: int
    active_campaigns: int
    total_budget: MoneyFloat
    total_spent: MoneyFloat
    total_leads: int
    total_enrollments: int
    total_revenue: MoneyFloat
    roi: float
    by_channel: dict[str, int]
    campaigns: list[CampaignPerformance]
