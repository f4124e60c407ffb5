"""Tests for report generation, definitions and scheduled execution."""
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path
from unittest.mock import patch

import pytest
from httpx import AsyncClient

from admissions.db.models import CampaignProspect, ReportDefinition
from admissions.schemas.report import ReportFilters
from admissions.services import report_service
from admissions.utils.dates import utcnow


def _utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


class RecordingSink:
    def __init__(self):
        self.deliveries = []

    def deliver(self, report_name, file_path, recipients):
        self.deliveries.append((report_name, file_path, list(recipients)))


def _definition(db, **overrides) -> ReportDefinition:
    values = {
        "name": "Weekly executive",
        "type": "executive",
        "frequency": "weekly",
        "recipients": ["director@example.com"],
        "config": {"format": "csv"},
        "next_run_at": utcnow() - timedelta(minutes=5),
    }
    values.update(overrides)
    definition = ReportDefinition(**values)
    db.add(definition)
    db.commit()
    return definition


# =============================================================================
# Scheduling
# =============================================================================

def test_compute_next_run_frequencies():
    base = _utc(2026, 1, 31, 8, 0)
    assert report_service.compute_next_run("daily", base) == _utc(2026, 2, 1, 8, 0)
    assert report_service.compute_next_run("weekly", base) == _utc(2026, 2, 7, 8, 0)
    # Calendar month, clamped to the last day of February
    assert report_service.compute_next_run("monthly", base) == _utc(2026, 2, 28, 8, 0)
    assert report_service.compute_next_run("hourly", base) == _utc(2026, 2, 7, 8, 0)


# =============================================================================
# Generation
# =============================================================================

def test_generate_executive_with_explicit_window(db, make_prospect):
    make_prospect(status="enrolled", enrollment_value=Decimal("5000"), registered_at=_utc(2026, 2, 3))
    make_prospect(status="new", registered_at=_utc(2026, 2, 10))
    make_prospect(status="new", registered_at=_utc(2026, 4, 1))

    filters = ReportFilters(start=_utc(2026, 2, 1), end=_utc(2026, 3, 1))
    data = report_service.generate(db, "executive", filters, now=_utc(2026, 3, 5))

    assert data["type"] == "executive"
    assert data["period"] == {
        "start": "2026-02-01T00:00:00+00:00",
        "end": "2026-03-01T00:00:00+00:00",
    }
    assert data["summary"]["total_prospects"] == 2
    assert data["summary"]["enrolled"] == 1
    assert data["summary"]["conversion_rate"] == 50.0
    assert data["summary"]["revenue"] == 5000.0
    assert sum(w["count"] for w in data["prospects_per_week"]) == 2


def test_executive_spend_follows_window_and_channel(db, make_campaign, make_prospect):
    make_campaign(channel="google", spent=Decimal("500.00"),
                  starts_at=_utc(2026, 1, 25), ends_at=_utc(2026, 2, 20))
    # Outside the window and on another channel: neither counts
    make_campaign(channel="google", budget=Decimal("9000.00"), spent=Decimal("9000.00"),
                  starts_at=_utc(2025, 6, 1), ends_at=_utc(2025, 7, 1))
    make_campaign(channel="facebook", spent=Decimal("700.00"),
                  starts_at=_utc(2026, 2, 1), ends_at=_utc(2026, 2, 28))
    make_prospect(origin="google", status="enrolled", enrollment_value=Decimal("1500"),
                  registered_at=_utc(2026, 2, 5))
    make_prospect(origin="google", status="new", registered_at=_utc(2026, 2, 6))
    make_prospect(origin="facebook", status="enrolled", enrollment_value=Decimal("4000"),
                  registered_at=_utc(2026, 2, 7))

    filters = ReportFilters(start=_utc(2026, 2, 1), end=_utc(2026, 3, 1), channel="google")
    data = report_service.generate(db, "executive", filters)

    assert data["summary"]["revenue"] == 1500.0
    assert data["summary"]["spend"] == 500.0
    assert data["summary"]["roi"] == 200.0
    assert data["channel"]["leads"] == 2
    assert data["channel"]["cost_per_lead"] == 250.0
    assert data["channel"]["roi"] == 200.0

    unfiltered = report_service.generate(
        db, "executive", ReportFilters(start=_utc(2026, 2, 1), end=_utc(2026, 3, 1))
    )
    assert unfiltered["summary"]["spend"] == 1200.0
    assert "channel" not in unfiltered


def test_generate_defaults_to_prior_month(db):
    data = report_service.generate(db, "conversions", now=_utc(2026, 3, 15))
    assert data["period"]["start"] == "2026-02-01T00:00:00+00:00"
    assert data["period"]["end"] == "2026-03-01T00:00:00+00:00"
    assert data["conversion_rate"] == 0
    assert [m["month_start"] for m in data["prospects_per_month"]] == ["2026-02-01"]


def test_generate_campaigns_only_overlapping(db, make_campaign, make_prospect):
    running = make_campaign(
        name="Feb Fair", starts_at=_utc(2026, 1, 20), ends_at=_utc(2026, 2, 15),
        spent=Decimal("200.00"),
    )
    make_campaign(name="Summer", starts_at=_utc(2026, 6, 1), ends_at=_utc(2026, 7, 1))
    prospect = make_prospect(status="enrolled", enrollment_value=Decimal("1000"))
    db.add(CampaignProspect(campaign_id=running.id, prospect_id=prospect.id))
    db.commit()

    filters = ReportFilters(start=_utc(2026, 2, 1), end=_utc(2026, 3, 1))
    data = report_service.generate(db, "campaigns", filters)

    assert [c["name"] for c in data["campaigns"]] == ["Feb Fair"]
    assert data["campaigns"][0]["roi"] == 400.0
    assert data["totals"]["spent"] == 200.0


def test_generate_advisors_filter(db, advisor, other_advisor):
    data = report_service.generate(db, "advisors", ReportFilters(advisor_id=advisor.id))
    assert [row["advisor_id"] for row in data["advisors"]] == [str(advisor.id)]


def test_generate_unknown_type(db):
    with pytest.raises(ValueError):
        report_service.generate(db, "weather")


# =============================================================================
# Execution
# =============================================================================

def test_execute_scheduled_advances_schedule(db, reports_dir):
    definition = _definition(db)
    sink = RecordingSink()
    now = utcnow()

    path = report_service.execute_scheduled(db, definition.id, sink=sink, now=now)

    assert path is not None
    assert Path(path).exists()
    assert Path(path).parent == reports_dir
    assert definition.last_run_at == now
    assert definition.next_run_at == now + timedelta(days=7)
    assert sink.deliveries == [("Weekly executive", path, ["director@example.com"])]


def test_failed_execution_does_not_advance(db):
    due = utcnow() - timedelta(minutes=5)
    definition = _definition(db, next_run_at=due)

    with patch(
        "admissions.services.report_service.report_export_service.export_report",
        side_effect=OSError("disk full"),
    ):
        path = report_service.execute_scheduled(db, definition.id)

    assert path is None
    assert definition.last_run_at is None
    assert definition.next_run_at == due


def test_run_due_reports_skips_future_and_inactive(db):
    _definition(db, name="due")
    _definition(db, name="future", next_run_at=utcnow() + timedelta(days=1))
    _definition(db, name="inactive", is_active=False)
    sink = RecordingSink()

    result = report_service.run_due_reports(db, sink=sink)

    assert result["executed"] == 1
    assert result["failed"] == 0
    assert len(result["file_paths"]) == 1
    assert [name for name, _, _ in sink.deliveries] == ["due"]


def test_run_due_reports_counts_failures(db):
    _definition(db, name="ok")
    _definition(db, name="broken", config={"start": "not-a-date"})

    result = report_service.run_due_reports(db, sink=RecordingSink())
    assert result["executed"] == 1
    assert result["failed"] == 1


# =============================================================================
# API
# =============================================================================

@pytest.mark.asyncio
async def test_create_definition_sets_next_run(manager_client: AsyncClient):
    response = await manager_client.post(
        "/api/reportes",
        json={
            "name": "Monthly conversions",
            "type": "conversions",
            "frequency": "monthly",
            "recipients": ["Director@Example.com"],
            "config": {"format": "excel", "origin": "google"},
        },
    )
    assert response.status_code == 201
    data = response.json()
    assert data["next_run_at"] is not None
    assert data["last_run_at"] is None
    assert data["config"] == {"format": "excel", "origin": "google"}


@pytest.mark.asyncio
async def test_reports_forbidden_for_advisor(advisor_client: AsyncClient):
    response = await advisor_client.get("/api/reportes")
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_generate_endpoint_with_export(manager_client: AsyncClient, reports_dir):
    response = await manager_client.post(
        "/api/reportes/generate", json={"type": "executive", "format": "pdf"}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["data"]["type"] == "executive"
    assert body["file_path"].endswith(".pdf")
    assert Path(body["file_path"]).read_bytes().startswith(b"%PDF")


@pytest.mark.asyncio
async def test_generate_endpoint_rejects_inverted_window(manager_client: AsyncClient):
    response = await manager_client.post(
        "/api/reportes/generate",
        json={
            "type": "executive",
            "filters": {"start": "2026-03-01T00:00:00Z", "end": "2026-02-01T00:00:00Z"},
        },
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_execute_endpoint(db, director_client: AsyncClient):
    definition = _definition(db, frequency="daily")

    response = await director_client.post(f"/api/reportes/{definition.id}/execute")
    assert response.status_code == 200
    data = response.json()
    assert data["file_path"].endswith(".csv")
    last_run = datetime.fromisoformat(data["last_run_at"])
    assert datetime.fromisoformat(data["next_run_at"]) == last_run + timedelta(days=1)


@pytest.mark.asyncio
async def test_update_and_delete_definition(db, manager_client: AsyncClient):
    definition = _definition(db)

    response = await manager_client.put(
        f"/api/reportes/{definition.id}", json={"frequency": "daily", "is_active": False}
    )
    assert response.status_code == 200
    assert response.json()["frequency"] == "daily"
    assert response.json()["is_active"] is False

    response = await manager_client.delete(f"/api/reportes/{definition.id}")
    assert response.status_code == 204
    response = await manager_client.get(f"/api/reportes/{definition.id}")
    assert response.status_code == 404
