"""Tests for the admission sub-process: documents, payments, progress, enrollment."""
from decimal import Decimal

import pytest
from httpx import AsyncClient

from admissions.db.models import Payment


def _document(prospect_id, **overrides):
    payload = {
        "prospect_id": str(prospect_id),
        "document_type": "certificates",
        "file_name": "boleta.pdf",
        "file_path": "uploads/boleta.pdf",
        "size_bytes": 20480,
    }
    payload.update(overrides)
    return payload


def _payment(prospect_id, **overrides):
    payload = {
        "prospect_id": str(prospect_id),
        "concept": "enrollment",
        "amount": "2500.00",
        "method": "transfer",
        "status": "completed",
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_start_admission_moves_to_documents(advisor_client: AsyncClient, advisor, make_prospect):
    prospect = make_prospect(advisor, status="appointment_scheduled")

    response = await advisor_client.post(f"/api/prospectos/{prospect.id}/iniciar-admision")
    assert response.status_code == 200
    assert response.json()["status"] == "documents"

    progress = (await advisor_client.get(f"/api/prospectos/{prospect.id}/progreso")).json()
    assert progress["progress"] == 25


@pytest.mark.asyncio
async def test_document_review_does_not_promote_prospect(
    manager_client: AsyncClient, manager, make_prospect
):
    prospect = make_prospect(status="documents")

    response = await manager_client.post("/api/documentos-admision", json=_document(prospect.id))
    assert response.status_code == 201
    document = response.json()
    assert document["status"] == "pending"
    assert document["reviewed_at"] is None

    response = await manager_client.patch(
        f"/api/documentos-admision/{document['id']}",
        json={"status": "approved", "comments": "Legible"},
    )
    assert response.status_code == 200
    reviewed = response.json()
    assert reviewed["status"] == "approved"
    assert reviewed["reviewed_by_user_id"] == str(manager.id)
    assert reviewed["reviewed_at"] is not None

    detail = (await manager_client.get(f"/api/prospectos/{prospect.id}")).json()
    assert detail["status"] == "documents"

    progress = (await manager_client.get(f"/api/prospectos/{prospect.id}/progreso")).json()
    assert progress["progress"] == 50
    assert progress["approved_documents"] == 1

    documents = (await manager_client.get(f"/api/prospectos/{prospect.id}/documentos")).json()
    assert len(documents) == 1


@pytest.mark.asyncio
async def test_review_unknown_document_is_404(manager_client: AsyncClient):
    response = await manager_client.patch(
        "/api/documentos-admision/00000000-0000-0000-0000-000000000000",
        json={"status": "approved"},
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_advisor_cannot_touch_foreign_prospect_documents(
    advisor_client: AsyncClient, other_advisor, make_prospect
):
    prospect = make_prospect(other_advisor, status="documents")

    response = await advisor_client.post("/api/documentos-admision", json=_document(prospect.id))
    assert response.status_code == 404
    response = await advisor_client.get(f"/api/prospectos/{prospect.id}/pagos")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_record_and_update_payment(manager_client: AsyncClient, make_prospect):
    prospect = make_prospect(status="admitted")

    response = await manager_client.post(
        "/api/pagos", json=_payment(prospect.id, status="pending", currency="mxn")
    )
    assert response.status_code == 201
    payment = response.json()
    assert payment["amount"] == "2500.00"
    assert payment["currency"] == "MXN"
    assert payment["status"] == "pending"

    progress = (await manager_client.get(f"/api/prospectos/{prospect.id}/progreso")).json()
    assert progress["progress"] == 75
    assert progress["completed_payments"] == 0

    response = await manager_client.patch(
        f"/api/pagos/{payment['id']}", json={"status": "completed", "transaction_id": "tx-42"}
    )
    assert response.status_code == 200
    assert response.json()["transaction_id"] == "tx-42"

    progress = (await manager_client.get(f"/api/prospectos/{prospect.id}/progreso")).json()
    assert progress["progress"] == 100
    assert progress["completed_payments"] == 1


@pytest.mark.asyncio
async def test_malformed_payment_amount_rejected(manager_client: AsyncClient, make_prospect):
    prospect = make_prospect()
    response = await manager_client.post("/api/pagos", json=_payment(prospect.id, amount="12,50"))
    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "amount"


@pytest.mark.asyncio
async def test_enrollment_requires_admitted_status(manager_client: AsyncClient, make_prospect):
    prospect = make_prospect(status="documents")

    response = await manager_client.post(f"/api/prospectos/{prospect.id}/completar-matricula")
    assert response.status_code == 400
    assert response.json()["error"] == "Prospect must be admitted before enrollment"


@pytest.mark.asyncio
async def test_enrollment_requires_completed_payment(db, manager_client: AsyncClient, make_prospect):
    prospect = make_prospect(status="admitted")
    db.add(Payment(prospect_id=prospect.id, concept="enrollment", amount=Decimal("900.00"),
                   method="cash", status="pending"))
    db.commit()

    response = await manager_client.post(f"/api/prospectos/{prospect.id}/completar-matricula")
    assert response.status_code == 400
    assert response.json()["error"] == "At least one completed payment is required for enrollment"


@pytest.mark.asyncio
async def test_enrollment_value_defaults_to_completed_payments(
    manager_client: AsyncClient, make_prospect
):
    prospect = make_prospect(status="admitted")
    await manager_client.post("/api/pagos", json=_payment(prospect.id, amount="1500.00"))
    await manager_client.post(
        "/api/pagos", json=_payment(prospect.id, concept="admission_fee", amount="500.50")
    )
    await manager_client.post("/api/pagos", json=_payment(prospect.id, amount="999.00", status="failed"))

    response = await manager_client.post(f"/api/prospectos/{prospect.id}/completar-matricula")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "enrolled"
    assert data["enrollment_value"] == 2000.5


@pytest.mark.asyncio
async def test_enrollment_keeps_recorded_value(manager_client: AsyncClient, make_prospect):
    prospect = make_prospect(status="admitted", enrollment_value=Decimal("7000.00"))
    await manager_client.post("/api/pagos", json=_payment(prospect.id))

    response = await manager_client.post(f"/api/prospectos/{prospect.id}/completar-matricula")
    assert response.status_code == 200
    assert response.json()["enrollment_value"] == 7000.0
