"""Report service - report definitions, generation and scheduled execution.

A definition is either waiting for its next_run_at or being executed.
Nothing here runs on a timer: run_due_reports is called by the internal
scheduled endpoint or the CLI. A failed execution is logged and leaves the
schedule untouched so the next invocation picks it up again.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Callable
from uuid import UUID

from dateutil.relativedelta import relativedelta
from sqlalchemy.orm import Session

from admissions.db.enums import ExportFormat, ReportFrequency, ReportType
from admissions.db.models import Campaign, ReportDefinition
from admissions.schemas.report import (
    ReportDefinitionCreate,
    ReportDefinitionUpdate,
    ReportFilters,
)
from admissions.services import analytics_service, report_export_service
from admissions.services.analytics_shared import calculate_roi, money, report_window
from admissions.services.report_sink import LoggingReportSink, ReportSink
from admissions.utils.dates import ensure_utc, utcnow

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_FORMAT = ExportFormat.PDF


# =============================================================================
# Scheduling
# =============================================================================

def compute_next_run(frequency: str, from_time: datetime) -> datetime:
    """
    Next execution time for a frequency.

    daily +1 day, weekly +7 days, monthly +1 calendar month. Unknown
    frequencies fall back to weekly.
    """
    if frequency == ReportFrequency.DAILY.value:
        return from_time + timedelta(days=1)
    if frequency == ReportFrequency.MONTHLY.value:
        return from_time + relativedelta(months=1)
    return from_time + timedelta(days=7)


# =============================================================================
# Generation
# =============================================================================

def _iso(value) -> str:
    return value.isoformat()


def _prospect_filters(filters: ReportFilters, start: datetime, end: datetime) -> dict[str, Any]:
    return {
        "start": start,
        "end": end,
        "advisor_id": filters.advisor_id,
        "origin": filters.origin or filters.channel,
        "status": filters.status,
    }


def _build_executive(db: Session, filters: ReportFilters, start: datetime, end: datetime) -> dict:
    prospect_filters = _prospect_filters(filters, start, end)
    summary = analytics_service.conversion_summary(db, **prospect_filters)
    revenue = analytics_service.enrolled_revenue(db, **prospect_filters)
    # Spend is attributed like revenue: campaigns running in the window, on the channel
    spend = analytics_service.total_campaign_spend(db, start=start, end=end, channel=filters.channel)
    weekly = analytics_service.prospects_per_week(
        db, start, end, advisor_id=filters.advisor_id
    )
    data = {
        "summary": {
            "total_prospects": summary["total"],
            "enrolled": summary["enrolled"],
            "conversion_rate": summary["conversion_rate"],
            "revenue": money(revenue),
            "spend": money(spend),
            "roi": calculate_roi(revenue, spend),
        },
        "by_status": analytics_service.count_by_status(db, **prospect_filters),
        "by_origin": analytics_service.count_by_origin(db, **prospect_filters),
        "prospects_per_week": [
            {"week_start": _iso(w["week_start"]), "count": w["count"]} for w in weekly
        ],
    }
    if filters.channel:
        perf = analytics_service.channel_performance(db, filters.channel, start=start, end=end)
        data["channel"] = {
            "channel": perf["channel"],
            "spent": money(perf["spent"]),
            "leads": perf["leads"],
            "enrollments": perf["enrollments"],
            "revenue": money(perf["revenue"]),
            "cost_per_lead": money(perf["cost_per_lead"]),
            "cost_per_enrollment": money(perf["cost_per_enrollment"]),
            "roi": perf["roi"],
        }
    return data


def _build_advisors(db: Session, filters: ReportFilters, start: datetime, end: datetime) -> dict:
    rows = analytics_service.advisor_performance(db, start=start, end=end)
    if filters.advisor_id:
        rows = [r for r in rows if r["advisor_id"] == filters.advisor_id]
    return {
        "advisors": [
            {
                "advisor_id": str(r["advisor_id"]),
                "name": r["name"],
                "prospects": r["prospects"],
                "enrolled": r["enrolled"],
                "communications": r["communications"],
                "conversion_rate": r["conversion_rate"],
            }
            for r in rows
        ]
    }


def _build_campaigns(db: Session, filters: ReportFilters, start: datetime, end: datetime) -> dict:
    # Campaigns running at any point of the window
    query = db.query(Campaign).filter(Campaign.starts_at < end, Campaign.ends_at > start)
    if filters.channel:
        query = query.filter(Campaign.channel == filters.channel)
    campaigns = query.order_by(Campaign.starts_at).all()

    rows = []
    for campaign in campaigns:
        perf = analytics_service.campaign_performance(db, campaign)
        rows.append({
            "name": perf["name"],
            "channel": perf["channel"],
            "status": perf["status"],
            "budget": money(perf["budget"]),
            "spent": money(perf["spent"]),
            "leads": perf["leads"],
            "enrollments": perf["enrollments"],
            "revenue": money(perf["revenue"]),
            "cost_per_lead": money(perf["cost_per_lead"]),
            "cost_per_enrollment": money(perf["cost_per_enrollment"]),
            "roi": perf["roi"],
        })

    total_spent = sum(r["spent"] for r in rows)
    total_revenue = sum(r["revenue"] for r in rows)
    return {
        "campaigns": rows,
        "totals": {
            "campaigns": len(rows),
            "budget": money(sum(r["budget"] for r in rows)),
            "spent": money(total_spent),
            "leads": sum(r["leads"] for r in rows),
            "enrollments": sum(r["enrollments"] for r in rows),
            "revenue": money(total_revenue),
            "roi": calculate_roi(total_revenue, total_spent),
        },
    }


def _build_conversions(db: Session, filters: ReportFilters, start: datetime, end: datetime) -> dict:
    prospect_filters = _prospect_filters(filters, start, end)
    monthly = analytics_service.prospects_per_month(
        db, start, end, advisor_id=filters.advisor_id
    )
    return {
        "funnel": analytics_service.funnel_counts(db, **prospect_filters),
        "conversion_rate": analytics_service.conversion_rate(db, **prospect_filters),
        "by_origin": analytics_service.conversion_by_origin(db, **prospect_filters),
        "prospects_per_month": [
            {"month_start": _iso(m["month_start"]), "count": m["count"]} for m in monthly
        ],
    }


REPORT_BUILDERS: dict[str, Callable[..., dict]] = {
    ReportType.EXECUTIVE.value: _build_executive,
    ReportType.ADVISORS.value: _build_advisors,
    ReportType.CAMPAIGNS.value: _build_campaigns,
    ReportType.CONVERSIONS.value: _build_conversions,
}


def generate(
    db: Session,
    report_type: ReportType | str,
    filters: ReportFilters | None = None,
    now: datetime | None = None,
) -> dict[str, Any]:
    """
    Build a report payload.

    The window comes from filters.start/end, falling back to
    REPORT_DEFAULT_WINDOW. The payload is plain JSON-compatible data.

    Raises:
        ValueError: unknown report type
    """
    type_value = report_type.value if isinstance(report_type, ReportType) else report_type
    builder = REPORT_BUILDERS.get(type_value)
    if builder is None:
        raise ValueError(f"Unknown report type '{type_value}'")

    filters = filters or ReportFilters()
    now = now or utcnow()
    start, end = report_window(filters.start, filters.end, now)

    body = builder(db, filters, start, end)
    return {
        "type": type_value,
        "period": {"start": _iso(start), "end": _iso(end)},
        "generated_at": _iso(now),
        "filters": filters.model_dump(mode="json", exclude_none=True),
        **body,
    }


# =============================================================================
# Definition CRUD
# =============================================================================

def list_definitions(db: Session, is_active: bool | None = None) -> list[ReportDefinition]:
    query = db.query(ReportDefinition)
    if is_active is not None:
        query = query.filter(ReportDefinition.is_active.is_(is_active))
    return query.order_by(ReportDefinition.created_at.desc()).all()


def get_definition(db: Session, definition_id: UUID) -> ReportDefinition | None:
    return db.query(ReportDefinition).filter(ReportDefinition.id == definition_id).first()


def create_definition(db: Session, data: ReportDefinitionCreate) -> ReportDefinition:
    now = utcnow()
    definition = ReportDefinition(
        name=data.name,
        type=data.type.value,
        frequency=data.frequency.value,
        recipients=list(data.recipients),
        config=data.config.model_dump(mode="json", exclude_none=True) if data.config else None,
        is_active=data.is_active,
        created_at=now,
        next_run_at=compute_next_run(data.frequency.value, now),
    )
    db.add(definition)
    db.flush()
    return definition


def update_definition(
    db: Session, definition: ReportDefinition, data: ReportDefinitionUpdate
) -> ReportDefinition:
    """Apply changes; next_run_at is recomputed from the (possibly new) frequency."""
    changes = data.model_dump(exclude_unset=True)
    if changes.get("name") is not None:
        definition.name = changes["name"]
    if changes.get("type") is not None:
        definition.type = changes["type"].value
    if changes.get("frequency") is not None:
        definition.frequency = changes["frequency"].value
    if "recipients" in changes:
        definition.recipients = list(changes["recipients"] or [])
    if "config" in changes:
        definition.config = (
            data.config.model_dump(mode="json", exclude_none=True) if data.config else None
        )
    if changes.get("is_active") is not None:
        definition.is_active = changes["is_active"]

    definition.next_run_at = compute_next_run(definition.frequency, utcnow())
    db.flush()
    return definition


def delete_definition(db: Session, definition: ReportDefinition) -> None:
    db.delete(definition)
    db.flush()


# =============================================================================
# Execution
# =============================================================================

def execute_scheduled(
    db: Session,
    definition_id: UUID,
    sink: ReportSink | None = None,
    now: datetime | None = None,
) -> str | None:
    """
    Generate, export and hand off one report definition.

    Returns the exported file path, or None when the definition is missing
    or execution failed. On failure the schedule is not advanced.
    """
    definition = get_definition(db, definition_id)
    if not definition:
        return None

    sink = sink or LoggingReportSink()
    now = now or utcnow()
    try:
        filters = ReportFilters.model_validate(definition.config or {})
        data = generate(db, definition.type, filters, now=now)
        file_path = report_export_service.export_report(
            data, filters.format or DEFAULT_EXPORT_FORMAT, timestamp=now
        )
        sink.deliver(definition.name, file_path, definition.recipients or [])
    except Exception:
        logger.exception("Scheduled report %s failed", definition_id)
        return None

    definition.last_run_at = now
    definition.next_run_at = compute_next_run(definition.frequency, now)
    db.flush()
    return file_path


def get_due_definitions(db: Session, now: datetime) -> list[ReportDefinition]:
    return (
        db.query(ReportDefinition)
        .filter(
            ReportDefinition.is_active.is_(True),
            ReportDefinition.next_run_at.isnot(None),
            ReportDefinition.next_run_at <= ensure_utc(now),
        )
        .order_by(ReportDefinition.next_run_at)
        .all()
    )


def run_due_reports(
    db: Session,
    now: datetime | None = None,
    sink: ReportSink | None = None,
) -> dict[str, Any]:
    """Execute every active definition whose next_run_at has passed."""
    now = now or utcnow()
    executed, failed, paths = 0, 0, []
    for definition in get_due_definitions(db, now):
        path = execute_scheduled(db, definition.id, sink=sink, now=now)
        if path:
            executed += 1
            paths.append(path)
        else:
            failed += 1
    if executed or failed:
        logger.info("Scheduled reports run: executed=%d failed=%d", executed, failed)
    return {"executed": executed, "failed": failed, "file_paths": paths}
