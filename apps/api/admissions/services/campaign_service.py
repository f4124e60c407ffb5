"""Campaign service - marketing campaigns, prospect attribution and ROI."""

import logging
from decimal import Decimal
from typing import Any
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from admissions.db.enums import CampaignStatus
from admissions.db.models import Campaign, CampaignProspect, Prospect
from admissions.schemas.campaign import CampaignCreate, CampaignUpdate
from admissions.services import analytics_service
from admissions.services.analytics_shared import calculate_roi, quantize_money
from admissions.utils.dates import ensure_utc, utcnow

logger = logging.getLogger(__name__)

# Fields an update may clear with an explicit null
NULLABLE_FIELDS = {"description", "lead_target", "enrollment_target", "channel_config"}


class CampaignRuleError(ValueError):
    """A cross-field campaign rule failed against the stored values."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


# =============================================================================
# Campaign CRUD
# =============================================================================

def list_campaigns(
    db: Session,
    status: str | None = None,
    channel: str | None = None,
) -> list[Campaign]:
    """List campaigns, newest first."""
    query = db.query(Campaign)
    if status:
        query = query.filter(Campaign.status == status)
    if channel:
        query = query.filter(Campaign.channel == channel)
    return query.order_by(Campaign.created_at.desc()).all()


def get_campaign(db: Session, campaign_id: UUID) -> Campaign | None:
    """Get a campaign by ID."""
    return db.query(Campaign).filter(Campaign.id == campaign_id).first()


def create_campaign(db: Session, data: CampaignCreate) -> Campaign:
    """Create a new campaign. Amount and date rules are enforced by the schema."""
    campaign = Campaign(
        name=data.name,
        description=data.description,
        channel=data.channel.value,
        budget=data.budget_decimal,
        spent=data.spent_decimal,
        status=data.status.value,
        starts_at=data.starts_at,
        ends_at=data.ends_at,
        lead_target=data.lead_target,
        enrollment_target=data.enrollment_target,
        channel_config=data.channel_config,
        created_at=utcnow(),
    )
    db.add(campaign)
    db.flush()
    return campaign


def update_campaign(db: Session, campaign: Campaign, data: CampaignUpdate) -> Campaign:
    """
    Apply a partial update.

    Raises:
        CampaignRuleError: resulting spent exceeds budget, or ends_at is not
            after starts_at
    """
    changes = data.model_dump(exclude_unset=True)

    budget = Decimal(changes["budget"]) if changes.get("budget") else campaign.budget
    spent = Decimal(changes["spent"]) if changes.get("spent") else campaign.spent
    if spent > budget:
        raise CampaignRuleError("spent", "spent must not exceed budget")

    starts_at = changes.get("starts_at") or campaign.starts_at
    ends_at = changes.get("ends_at") or campaign.ends_at
    if ensure_utc(ends_at) <= ensure_utc(starts_at):
        raise CampaignRuleError("ends_at", "ends_at must be after starts_at")

    for field, value in changes.items():
        if value is None and field not in NULLABLE_FIELDS:
            continue
        if field in ("budget", "spent"):
            value = Decimal(value)
        elif hasattr(value, "value"):
            value = value.value
        setattr(campaign, field, value)

    db.flush()
    return campaign


def delete_campaign(db: Session, campaign_id: UUID) -> bool:
    """
    Delete a campaign and its prospect links in the caller's transaction.

    Returns False (after rollback) on any database error.
    """
    try:
        db.query(CampaignProspect).filter(
            CampaignProspect.campaign_id == campaign_id
        ).delete(synchronize_session=False)
        deleted = db.query(Campaign).filter(
            Campaign.id == campaign_id
        ).delete(synchronize_session=False)
        db.flush()
    except SQLAlchemyError:
        logger.exception("Error deleting campaign %s", campaign_id)
        db.rollback()
        return False
    return deleted > 0


# =============================================================================
# Prospect attribution
# =============================================================================

def link_prospect(db: Session, campaign_id: UUID, prospect_id: UUID) -> CampaignProspect:
    """Attribute a prospect to a campaign. Linking twice returns the existing link."""
    existing = db.query(CampaignProspect).filter(
        CampaignProspect.campaign_id == campaign_id,
        CampaignProspect.prospect_id == prospect_id,
    ).first()
    if existing:
        return existing

    link = CampaignProspect(
        campaign_id=campaign_id,
        prospect_id=prospect_id,
        associated_at=utcnow(),
    )
    db.add(link)
    db.flush()
    return link


def unlink_prospect(db: Session, campaign_id: UUID, prospect_id: UUID) -> bool:
    """Remove an attribution link. False when there was none."""
    deleted = db.query(CampaignProspect).filter(
        CampaignProspect.campaign_id == campaign_id,
        CampaignProspect.prospect_id == prospect_id,
    ).delete(synchronize_session=False)
    db.flush()
    return deleted > 0


def list_campaign_prospects(db: Session, campaign_id: UUID) -> list[Prospect]:
    return (
        db.query(Prospect)
        .join(CampaignProspect, CampaignProspect.prospect_id == Prospect.id)
        .filter(CampaignProspect.campaign_id == campaign_id)
        .order_by(CampaignProspect.associated_at.desc())
        .all()
    )


def list_prospect_campaigns(db: Session, prospect_id: UUID) -> list[Campaign]:
    return (
        db.query(Campaign)
        .join(CampaignProspect, CampaignProspect.campaign_id == Campaign.id)
        .filter(CampaignProspect.prospect_id == prospect_id)
        .order_by(Campaign.created_at.desc())
        .all()
    )


# =============================================================================
# Stats
# =============================================================================

def get_campaign_stats(db: Session, campaign: Campaign) -> dict[str, Any]:
    """Leads, enrollments, revenue, cost per lead/enrollment and ROI for one campaign."""
    return analytics_service.campaign_performance(db, campaign)


def get_all_campaign_stats(db: Session) -> dict[str, Any]:
    """Totals across every campaign plus per-campaign performance."""
    campaigns = list_campaigns(db)
    performance = [analytics_service.campaign_performance(db, c) for c in campaigns]

    total_budget = quantize_money(sum((p["budget"] for p in performance), Decimal("0")))
    total_spent = quantize_money(sum((p["spent"] for p in performance), Decimal("0")))
    total_revenue = quantize_money(sum((p["revenue"] for p in performance), Decimal("0")))

    return {
        "total_campaigns": len(campaigns),
        "active_campaigns": sum(1 for c in campaigns if c.status == CampaignStatus.ACTIVE.value),
        "total_budget": total_budget,
        "total_spent": total_spent,
        "total_leads": sum(p["leads"] for p in performance),
        "total_enrollments": sum(p["enrollments"] for p in performance),
        "total_revenue": total_revenue,
        "roi": calculate_roi(total_revenue, total_spent),
        "by_channel": analytics_service.count_campaigns_by_channel(db),
        "campaigns": performance,
    }
