"""Full walk through a prospect's life: assignment, contact, enrollment, conversion."""
from datetime import datetime

import pytest
from httpx import AsyncClient

from admissions.services import analytics_service


@pytest.mark.asyncio
async def test_prospect_lifecycle(
    db,
    manager_client: AsyncClient,
    advisor_client: AsyncClient,
    other_advisor_client: AsyncClient,
    advisor,
):
    response = await manager_client.post(
        "/api/prospectos",
        json={
            "full_name": "Daniel Herrera",
            "phone": "55 8765 4321",
            "email": "daniel@example.com",
            "education_level": "university",
            "origin": "google",
            "advisor_id": str(advisor.id),
        },
    )
    assert response.status_code == 201
    prospect = response.json()
    assert prospect["status"] == "new"
    before = datetime.fromisoformat(prospect["last_interaction_at"])

    response = await advisor_client.post(
        "/api/comunicaciones",
        json={
            "prospect_id": prospect["id"],
            "type": "call",
            "direction": "sent",
            "content": "Intro call",
            "duration_minutes": 15,
        },
    )
    assert response.status_code == 201

    own = (await advisor_client.get("/api/prospectos")).json()
    assert [p["id"] for p in own] == [prospect["id"]]
    after = datetime.fromisoformat(own[0]["last_interaction_at"])
    assert after > before

    foreign = (await other_advisor_client.get("/api/prospectos")).json()
    assert foreign == []

    response = await advisor_client.patch(
        f"/api/prospectos/{prospect['id']}/status",
        json={"status": "enrolled", "enrollment_value": "5000"},
    )
    assert response.status_code == 200
    assert response.json()["enrollment_value"] == 5000.0

    assert analytics_service.conversion_summary(db)["conversion_rate"] == 100.0
    stats = (await advisor_client.get("/api/prospectos/stats")).json()
    assert stats["conversion_rate"] == 100.0
