"""Role dashboards: director, manager and advisor metrics."""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from admissions.db.enums import ProspectStatus
from admissions.db.models import Communication, Prospect
from admissions.services import analytics_service
from admissions.services.analytics_shared import dashboard_window, trailing_weeks_window
from admissions.utils.dates import utcnow


def get_director_metrics(db: Session, now: datetime | None = None) -> dict[str, Any]:
    """Organisation-wide totals plus weekly intake over the configured trailing window."""
    start, end = dashboard_window(now)
    summary = analytics_service.conversion_summary(db)
    advisors = [
        row for row in analytics_service.advisor_performance(db) if row["enrolled"] > 0
    ]
    return {
        "period": {"start": start, "end": end},
        "total_prospects": summary["total"],
        "total_enrolled": summary["enrolled"],
        "conversion_rate": summary["conversion_rate"],
        "average_active_campaign_spent": analytics_service.average_active_campaign_spent(db),
        "prospects_per_week": analytics_service.prospects_per_week(db, start, end),
        "enrolled_per_advisor": advisors,
        "by_origin": analytics_service.count_by_origin(db),
    }


def get_manager_metrics(db: Session, now: datetime | None = None) -> dict[str, Any]:
    """Per-advisor performance and weekly team activity by communication type."""
    start, end = dashboard_window(now)
    return {
        "period": {"start": start, "end": end},
        "advisors": analytics_service.advisor_performance(db),
        "weekly_activity": analytics_service.communications_per_week_by_type(db, start, end),
        "by_status": analytics_service.count_by_status(db),
    }


def get_advisor_metrics(
    db: Session, advisor_id: UUID, now: datetime | None = None
) -> dict[str, Any]:
    """Personal totals, own prospects and upcoming appointments for one advisor."""
    now = now or utcnow()
    summary = analytics_service.conversion_summary(db, advisor_id=advisor_id)

    upcoming = (
        db.query(Prospect)
        .filter(
            Prospect.advisor_id == advisor_id,
            Prospect.status == ProspectStatus.APPOINTMENT_SCHEDULED.value,
            Prospect.appointment_at.isnot(None),
            Prospect.appointment_at >= now,
        )
        .order_by(Prospect.appointment_at)
        .all()
    )

    communications = db.query(func.count(Communication.id)).filter(
        Communication.user_id == advisor_id
    ).scalar() or 0
    week_start, _ = trailing_weeks_window(1, now)
    this_week = db.query(func.count(Communication.id)).filter(
        Communication.user_id == advisor_id,
        Communication.occurred_at >= week_start,
    ).scalar() or 0

    prospects = (
        db.query(Prospect)
        .filter(Prospect.advisor_id == advisor_id)
        .order_by(Prospect.last_interaction_at.desc())
        .all()
    )

    return {
        "total_prospects": summary["total"],
        "enrolled": summary["enrolled"],
        "conversion_rate": summary["conversion_rate"],
        "communications": communications,
        "communications_this_week": this_week,
        "by_status": analytics_service.count_by_status(db, advisor_id=advisor_id),
        "upcoming_appointments": [
            {
                "prospect_id": p.id,
                "full_name": p.full_name,
                "phone": p.phone,
                "appointment_at": p.appointment_at,
            }
            for p in upcoming
        ],
        "prospects": prospects,
    }
