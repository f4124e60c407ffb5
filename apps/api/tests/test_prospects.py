"""Tests for prospect CRUD, scoping, assignment and cascade delete."""
from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from httpx import AsyncClient

from admissions.db.models import (
    AdmissionDocument,
    CampaignProspect,
    Communication,
    Payment,
    Prospect,
    Student,
)
from admissions.utils.dates import utcnow


def _prospect_payload(**overrides):
    payload = {
        "full_name": "Maria Lopez",
        "phone": "(555) 123-4567",
        "email": "Maria.Lopez@Example.com",
        "education_level": "high_school",
        "origin": "facebook",
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_create_prospect_applies_defaults(manager_client: AsyncClient):
    response = await manager_client.post("/api/prospectos", json=_prospect_payload())
    assert response.status_code == 201
    data = response.json()
    assert data["full_name"] == "Maria Lopez"
    assert data["phone"] == "(555) 123-4567"
    assert data["email"] == "Maria.Lopez@Example.com"
    assert data["status"] == "new"
    assert data["priority"] == "medium"
    assert data["data_consent"] is False
    assert data["registered_at"] == data["last_interaction_at"]


@pytest.mark.asyncio
async def test_contact_fields_round_trip_as_entered(manager_client: AsyncClient):
    payload = _prospect_payload(
        full_name="Ana  Maria   Perez",
        phone="+52 (55) 1234-5678",
        email=" Ana.Perez@Example.com ",
    )
    created = await manager_client.post("/api/prospectos", json=payload)
    assert created.status_code == 201

    fetched = (await manager_client.get(f"/api/prospectos/{created.json()['id']}")).json()
    assert fetched["full_name"] == "Ana  Maria   Perez"
    assert fetched["phone"] == "+52 (55) 1234-5678"
    assert fetched["email"] == "Ana.Perez@Example.com"

    updated = await manager_client.put(
        f"/api/prospectos/{fetched['id']}", json={"phone": " 55-1111-2222 "}
    )
    assert updated.json()["phone"] == "55-1111-2222"


@pytest.mark.asyncio
async def test_invalid_email_rejected(manager_client: AsyncClient):
    response = await manager_client.post(
        "/api/prospectos", json=_prospect_payload(email="not-an-email")
    )
    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "email"


@pytest.mark.asyncio
async def test_additional_data_round_trips(manager_client: AsyncClient):
    extra = {"school": "Colegio Azul", "siblings": 2, "tags": ["beca", "deportes"]}
    created = await manager_client.post(
        "/api/prospectos", json=_prospect_payload(additional_data=extra)
    )
    prospect_id = created.json()["id"]

    fetched = await manager_client.get(f"/api/prospectos/{prospect_id}")
    assert fetched.status_code == 200
    assert fetched.json()["additional_data"] == extra


@pytest.mark.asyncio
async def test_create_prospect_missing_field_is_400(manager_client: AsyncClient):
    payload = _prospect_payload()
    del payload["phone"]
    response = await manager_client.post("/api/prospectos", json=payload)
    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "phone"


@pytest.mark.asyncio
async def test_advisor_created_prospect_is_self_assigned(
    advisor_client: AsyncClient, advisor, other_advisor
):
    response = await advisor_client.post(
        "/api/prospectos", json=_prospect_payload(advisor_id=str(other_advisor.id))
    )
    assert response.status_code == 201
    assert response.json()["advisor_id"] == str(advisor.id)


@pytest.mark.asyncio
async def test_manager_cannot_assign_to_non_advisor(manager_client: AsyncClient, director):
    response = await manager_client.post(
        "/api/prospectos", json=_prospect_payload(advisor_id=str(director.id))
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_advisor_list_is_scoped(
    advisor_client: AsyncClient, advisor, other_advisor, make_prospect
):
    mine = make_prospect(advisor)
    make_prospect(other_advisor)
    make_prospect(None)

    response = await advisor_client.get("/api/prospectos")
    assert response.status_code == 200
    ids = [p["id"] for p in response.json()]
    assert ids == [str(mine.id)]


@pytest.mark.asyncio
async def test_advisor_cannot_read_other_advisors_prospect(
    advisor_client: AsyncClient, other_advisor, make_prospect
):
    theirs = make_prospect(other_advisor)
    response = await advisor_client.get(f"/api/prospectos/{theirs.id}")
    assert response.status_code == 404
    assert response.json() == {"error": "Prospect not found"}


@pytest.mark.asyncio
async def test_list_filters_and_search(manager_client: AsyncClient, make_prospect):
    make_prospect(full_name="Carlos Ruiz", origin="google", status="first_contact")
    make_prospect(full_name="Lucia Perez", origin="events")

    response = await manager_client.get("/api/prospectos", params={"origin": "google"})
    assert [p["full_name"] for p in response.json()] == ["Carlos Ruiz"]

    response = await manager_client.get("/api/prospectos", params={"status": "new"})
    assert [p["full_name"] for p in response.json()] == ["Lucia Perez"]

    response = await manager_client.get("/api/prospectos", params={"search": "perez"})
    assert [p["full_name"] for p in response.json()] == ["Lucia Perez"]


@pytest.mark.asyncio
async def test_list_ordered_by_last_interaction(manager_client: AsyncClient, make_prospect):
    now = utcnow()
    old = make_prospect(last_interaction_at=now - timedelta(days=3))
    recent = make_prospect(last_interaction_at=now)

    response = await manager_client.get("/api/prospectos")
    ids = [p["id"] for p in response.json()]
    assert ids == [str(recent.id), str(old.id)]


@pytest.mark.asyncio
async def test_update_bumps_last_interaction(manager_client: AsyncClient, make_prospect):
    prospect = make_prospect(last_interaction_at=utcnow() - timedelta(days=10))
    before = prospect.last_interaction_at

    response = await manager_client.put(
        f"/api/prospectos/{prospect.id}", json={"notes": "Called back", "priority": "high"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["notes"] == "Called back"
    assert data["priority"] == "high"
    assert data["full_name"] == "Maria Lopez"

    prospect_row = await manager_client.get(f"/api/prospectos/{prospect.id}")
    assert datetime.fromisoformat(prospect_row.json()["last_interaction_at"]) > before


@pytest.mark.asyncio
async def test_advisor_cannot_reassign_via_update(
    advisor_client: AsyncClient, advisor, other_advisor, make_prospect
):
    prospect = make_prospect(advisor)
    response = await advisor_client.put(
        f"/api/prospectos/{prospect.id}", json={"advisor_id": str(other_advisor.id)}
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_assign_requires_manager(
    advisor_client: AsyncClient, advisor, make_prospect
):
    prospect = make_prospect(advisor)
    response = await advisor_client.post(
        f"/api/prospectos/{prospect.id}/asignar", json={"advisor_id": str(advisor.id)}
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_manager_assigns_prospect(manager_client: AsyncClient, advisor, make_prospect):
    prospect = make_prospect(None)
    response = await manager_client.post(
        f"/api/prospectos/{prospect.id}/asignar", json={"advisor_id": str(advisor.id)}
    )
    assert response.status_code == 200
    assert response.json()["advisor_id"] == str(advisor.id)


@pytest.mark.asyncio
async def test_status_change_stores_enrollment_value(
    manager_client: AsyncClient, make_prospect
):
    prospect = make_prospect(status="admitted")
    response = await manager_client.patch(
        f"/api/prospectos/{prospect.id}/status",
        json={"status": "enrolled", "enrollment_value": "15000.50"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "enrolled"
    assert data["enrollment_value"] == 15000.5


@pytest.mark.asyncio
async def test_invalid_status_rejected(manager_client: AsyncClient, make_prospect):
    prospect = make_prospect()
    response = await manager_client.patch(
        f"/api/prospectos/{prospect.id}/status", json={"status": "graduated"}
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_delete_cascades_dependents(
    director_client: AsyncClient, db, advisor, make_prospect, make_campaign
):
    prospect = make_prospect(advisor)
    campaign = make_campaign()
    db.add_all(
        [
            Communication(
                prospect_id=prospect.id,
                user_id=advisor.id,
                type="call",
                direction="sent",
                content="Intro call",
            ),
            CampaignProspect(campaign_id=campaign.id, prospect_id=prospect.id),
            AdmissionDocument(
                prospect_id=prospect.id,
                document_type="identification",
                file_name="id.pdf",
                file_path="/uploads/id.pdf",
            ),
            Payment(
                prospect_id=prospect.id,
                concept="admission_fee",
                amount=Decimal("500.00"),
                method="cash",
            ),
            Student(
                prospect_id=prospect.id,
                enrollment_number="MAT-2026-00001",
                education_level="university",
                program="Law",
                modality="online",
                shift="evening",
                starts_on=utcnow().date(),
            ),
        ]
    )
    db.commit()
    prospect_id = prospect.id

    response = await director_client.delete(f"/api/prospectos/{prospect_id}")
    assert response.status_code == 204

    db.expire_all()
    assert db.get(Prospect, prospect_id) is None
    assert db.query(Communication).filter_by(prospect_id=prospect_id).count() == 0
    assert db.query(CampaignProspect).filter_by(prospect_id=prospect_id).count() == 0
    assert db.query(AdmissionDocument).filter_by(prospect_id=prospect_id).count() == 0
    assert db.query(Payment).filter_by(prospect_id=prospect_id).count() == 0
    assert db.query(Student).filter_by(prospect_id=prospect_id).count() == 0

    response = await director_client.get(f"/api/prospectos/{prospect_id}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_requires_director(manager_client: AsyncClient, make_prospect):
    prospect = make_prospect()
    response = await manager_client.delete(f"/api/prospectos/{prospect.id}")
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_prospect_stats_for_advisor(
    advisor_client: AsyncClient, advisor, other_advisor, make_prospect
):
    make_prospect(advisor, status="enrolled", origin="google")
    make_prospect(advisor, status="new", origin="facebook")
    make_prospect(other_advisor, status="enrolled")

    response = await advisor_client.get("/api/prospectos/stats")
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert data["by_status"]["enrolled"] == 1
    assert data["by_origin"] == {"google": 1, "facebook": 1}
    assert data["conversion_rate"] == 50.0
