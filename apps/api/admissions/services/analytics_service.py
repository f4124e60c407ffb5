"""Analytics service for dashboards and reports.

Pure aggregation functions over the live database state: grouped counts,
conversion rates, campaign cost metrics and ROI, and time-bucketed series.
Callers always pass explicit window bounds; see analytics_shared for the
configured defaults.
"""
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from admissions.db.enums import CampaignStatus, ProspectStatus, Role
from admissions.db.models import Campaign, CampaignProspect, Communication, Prospect, User
from admissions.services.analytics_shared import (
    bucket_by_month,
    bucket_by_week,
    calculate_roi,
    quantize_money,
    safe_rate,
    safe_ratio,
    to_decimal,
    week_starts,
)
from admissions.utils.dates import week_start

ENROLLED = ProspectStatus.ENROLLED.value


# ============================================================================
# Filtering
# ============================================================================

def prospect_query(
    db: Session,
    *,
    start: datetime | None = None,
    end: datetime | None = None,
    advisor_id: uuid.UUID | None = None,
    origin: str | None = None,
    status: str | None = None,
) -> Query:
    """Prospects registered in [start, end) matching the optional filters."""
    query = db.query(Prospect)
    if start:
        query = query.filter(Prospect.registered_at >= start)
    if end:
        query = query.filter(Prospect.registered_at < end)
    if advisor_id:
        query = query.filter(Prospect.advisor_id == advisor_id)
    if origin:
        query = query.filter(Prospect.origin == origin)
    if status:
        query = query.filter(Prospect.status == status)
    return query


def _count_by(query: Query, column) -> dict[str, int]:
    rows = (
        query.with_entities(column, func.count(Prospect.id))
        .group_by(column)
        .order_by(column)
        .all()
    )
    return {key: count for key, count in rows if key is not None}


# ============================================================================
# Grouped counts
# ============================================================================

def count_by_status(db: Session, **filters) -> dict[str, int]:
    return _count_by(prospect_query(db, **filters), Prospect.status)


def count_by_origin(db: Session, **filters) -> dict[str, int]:
    return _count_by(prospect_query(db, **filters), Prospect.origin)


def count_by_priority(db: Session, **filters) -> dict[str, int]:
    return _count_by(prospect_query(db, **filters), Prospect.priority)


def count_by_education_level(db: Session, **filters) -> dict[str, int]:
    return _count_by(prospect_query(db, **filters), Prospect.education_level)


def count_campaigns_by_channel(db: Session, status: str | None = None) -> dict[str, int]:
    query = db.query(Campaign.channel, func.count(Campaign.id))
    if status:
        query = query.filter(Campaign.status == status)
    rows = query.group_by(Campaign.channel).order_by(Campaign.channel).all()
    return {channel: count for channel, count in rows}


# ============================================================================
# Conversion
# ============================================================================

def conversion_summary(db: Session, **filters) -> dict[str, Any]:
    """Total prospects, enrolled count and conversion rate (0 when there are no prospects)."""
    query = prospect_query(db, **filters)
    total = query.count()
    enrolled = query.filter(Prospect.status == ENROLLED).count()
    return {
        "total": total,
        "enrolled": enrolled,
        "conversion_rate": safe_rate(enrolled, total),
    }


def conversion_rate(db: Session, **filters) -> float:
    return conversion_summary(db, **filters)["conversion_rate"]


def conversion_by_origin(db: Session, **filters) -> list[dict[str, Any]]:
    """Per-origin totals, enrolled counts and conversion rates."""
    totals = count_by_origin(db, **filters)
    enrolled = _count_by(
        prospect_query(db, **filters).filter(Prospect.status == ENROLLED), Prospect.origin
    )
    return [
        {
            "origin": origin,
            "total": total,
            "enrolled": enrolled.get(origin, 0),
            "conversion_rate": safe_rate(enrolled.get(origin, 0), total),
        }
        for origin, total in totals.items()
    ]


def funnel_counts(db: Session, **filters) -> list[dict[str, Any]]:
    """Prospects currently in each pipeline stage, in pipeline order."""
    by_status = count_by_status(db, **filters)
    return [
        {"status": stage.value, "count": by_status.get(stage.value, 0)}
        for stage in ProspectStatus
    ]


def enrolled_revenue(db: Session, **filters) -> Decimal:
    """Sum of enrollment_value over enrolled prospects."""
    total = (
        prospect_query(db, **filters)
        .filter(Prospect.status == ENROLLED)
        .with_entities(func.coalesce(func.sum(Prospect.enrollment_value), 0))
        .scalar()
    )
    return quantize_money(total)


# ============================================================================
# Campaign cost metrics
# ============================================================================

def campaign_performance(db: Session, campaign: Campaign) -> dict[str, Any]:
    """
    Attribution metrics for one campaign.

    Leads are prospects linked to the campaign; revenue counts enrolled
    linked prospects only.
    """
    linked = (
        db.query(Prospect)
        .join(CampaignProspect, CampaignProspect.prospect_id == Prospect.id)
        .filter(CampaignProspect.campaign_id == campaign.id)
    )
    leads = linked.count()
    enrolled_query = linked.filter(Prospect.status == ENROLLED)
    enrollments = enrolled_query.count()
    revenue = quantize_money(
        enrolled_query.with_entities(
            func.coalesce(func.sum(Prospect.enrollment_value), 0)
        ).scalar()
    )
    spent = to_decimal(campaign.spent)
    return {
        "campaign_id": campaign.id,
        "name": campaign.name,
        "channel": campaign.channel,
        "status": campaign.status,
        "budget": quantize_money(campaign.budget),
        "spent": quantize_money(spent),
        "leads": leads,
        "enrollments": enrollments,
        "revenue": revenue,
        "conversion_rate": safe_rate(enrollments, leads),
        "cost_per_lead": quantize_money(safe_ratio(spent, leads)),
        "cost_per_enrollment": quantize_money(safe_ratio(spent, enrollments)),
        "roi": calculate_roi(revenue, spent),
    }


def channel_performance(
    db: Session,
    channel: str,
    start: datetime | None = None,
    end: datetime | None = None,
) -> dict[str, Any]:
    """
    Attribution metrics for a marketing channel.

    Spend is summed over the channel's campaigns; leads and revenue come from
    prospects whose origin equals the channel. With a window, only campaigns
    running in it and prospects registered in it count.
    """
    spent = total_campaign_spend(db, start=start, end=end, channel=channel)
    summary = conversion_summary(db, origin=channel, start=start, end=end)
    revenue = enrolled_revenue(db, origin=channel, start=start, end=end)
    return {
        "channel": channel,
        "spent": spent,
        "leads": summary["total"],
        "enrollments": summary["enrolled"],
        "revenue": revenue,
        "cost_per_lead": quantize_money(safe_ratio(spent, summary["total"])),
        "cost_per_enrollment": quantize_money(safe_ratio(spent, summary["enrolled"])),
        "roi": calculate_roi(revenue, spent),
    }


def average_active_campaign_spent(db: Session) -> Decimal:
    avg = (
        db.query(func.avg(Campaign.spent))
        .filter(Campaign.status == CampaignStatus.ACTIVE.value)
        .scalar()
    )
    return quantize_money(avg)


def total_campaign_spend(
    db: Session,
    start: datetime | None = None,
    end: datetime | None = None,
    channel: str | None = None,
) -> Decimal:
    """Spent over campaigns running at any point of [start, end), optionally one channel."""
    query = db.query(func.coalesce(func.sum(Campaign.spent), 0))
    if end is not None:
        query = query.filter(Campaign.starts_at < end)
    if start is not None:
        query = query.filter(Campaign.ends_at > start)
    if channel:
        query = query.filter(Campaign.channel == channel)
    return quantize_money(query.scalar())


# ============================================================================
# Advisors
# ============================================================================

def advisor_performance(
    db: Session,
    start: datetime | None = None,
    end: datetime | None = None,
) -> list[dict[str, Any]]:
    """Prospects, enrollments and communications per advisor (every advisor listed)."""
    advisors = (
        db.query(User)
        .filter(User.role == Role.ADVISOR.value)
        .order_by(User.display_name)
        .all()
    )
    results = []
    for advisor in advisors:
        summary = conversion_summary(db, start=start, end=end, advisor_id=advisor.id)
        comms = db.query(func.count(Communication.id)).filter(
            Communication.user_id == advisor.id
        )
        if start:
            comms = comms.filter(Communication.occurred_at >= start)
        if end:
            comms = comms.filter(Communication.occurred_at < end)
        results.append({
            "advisor_id": advisor.id,
            "name": advisor.display_name,
            "prospects": summary["total"],
            "enrolled": summary["enrolled"],
            "communications": comms.scalar() or 0,
            "conversion_rate": summary["conversion_rate"],
        })
    return results


# ============================================================================
# Time series
# ============================================================================

def prospects_per_week(
    db: Session,
    start: datetime,
    end: datetime,
    advisor_id: uuid.UUID | None = None,
) -> list[dict[str, Any]]:
    """New prospects per ISO week, bucketed by registered_at."""
    rows = (
        prospect_query(db, start=start, end=end, advisor_id=advisor_id)
        .with_entities(Prospect.registered_at)
        .all()
    )
    return bucket_by_week((row[0] for row in rows), start, end)


def prospects_per_month(
    db: Session,
    start: datetime,
    end: datetime,
    advisor_id: uuid.UUID | None = None,
) -> list[dict[str, Any]]:
    rows = (
        prospect_query(db, start=start, end=end, advisor_id=advisor_id)
        .with_entities(Prospect.registered_at)
        .all()
    )
    return bucket_by_month((row[0] for row in rows), start, end)


def communications_per_week_by_type(
    db: Session,
    start: datetime,
    end: datetime,
    user_id: uuid.UUID | None = None,
) -> list[dict[str, Any]]:
    """Communication counts per week split by communication type."""
    query = db.query(Communication.occurred_at, Communication.type).filter(
        Communication.occurred_at >= start,
        Communication.occurred_at < end,
    )
    if user_id:
        query = query.filter(Communication.user_id == user_id)

    buckets: dict = {week: {} for week in week_starts(start, end)}
    for occurred_at, comm_type in query.all():
        by_type = buckets.get(week_start(occurred_at))
        if by_type is None:
            continue
        by_type[comm_type] = by_type.get(comm_type, 0) + 1

    return [
        {"week_start": week, "by_type": by_type, "total": sum(by_type.values())}
        for week, by_type in buckets.items()
    ]
