"""Tests for student records created on enrollment and the students listing."""
from datetime import date
from decimal import Decimal

import pytest
from httpx import AsyncClient

from admissions.db.models import Payment, Student
from admissions.utils.dates import utcnow


def _pay(db, prospect, amount="2500.00"):
    db.add(Payment(prospect_id=prospect.id, concept="enrollment", amount=Decimal(amount),
                   method="transfer", status="completed"))
    db.commit()


def _student(db, prospect, number, **overrides):
    values = {
        "prospect_id": prospect.id,
        "enrollment_number": number,
        "education_level": prospect.education_level,
        "program": "Nursing",
        "modality": "in_person",
        "shift": "morning",
        "starts_on": date(2026, 8, 17),
        "status": "active",
    }
    values.update(overrides)
    student = Student(**values)
    db.add(student)
    db.commit()
    return student


@pytest.mark.asyncio
async def test_enrollment_registers_student_with_defaults(
    db, manager_client: AsyncClient, make_prospect
):
    prospect = make_prospect(status="admitted", full_name="Lucia Mendez",
                             program_of_interest="Nursing")
    _pay(db, prospect)

    response = await manager_client.post(f"/api/prospectos/{prospect.id}/completar-matricula")
    assert response.status_code == 200

    students = (await manager_client.get("/api/estudiantes")).json()
    assert len(students) == 1
    student = students[0]
    assert student["prospect_id"] == str(prospect.id)
    assert student["enrollment_number"] == f"MAT-{utcnow().year}-00001"
    assert student["program"] == "Nursing"
    assert student["education_level"] == "high_school"
    assert student["modality"] == "in_person"
    assert student["shift"] == "morning"
    assert student["status"] == "active"
    assert student["prospect"]["full_name"] == "Lucia Mendez"


@pytest.mark.asyncio
async def test_enrollment_details_are_stored(db, manager_client: AsyncClient, make_prospect):
    first = make_prospect(status="admitted")
    second = make_prospect(status="admitted", education_level="university")
    _pay(db, first)
    _pay(db, second)

    await manager_client.post(f"/api/prospectos/{first.id}/completar-matricula")
    response = await manager_client.post(
        f"/api/prospectos/{second.id}/completar-matricula",
        json={"program": "Law", "modality": "online", "shift": "evening", "starts_on": "2027-01-11"},
    )
    assert response.status_code == 200
    assert response.json()["status"] == "enrolled"

    student = db.query(Student).filter_by(prospect_id=second.id).one()
    assert student.program == "Law"
    assert student.modality == "online"
    assert student.shift == "evening"
    assert student.starts_on == date(2027, 1, 11)
    assert student.enrollment_number == f"MAT-{utcnow().year}-00002"

    # No program of interest on the prospect: falls back to its education level
    fallback = db.query(Student).filter_by(prospect_id=first.id).one()
    assert fallback.program == "high_school"


@pytest.mark.asyncio
async def test_rejected_enrollment_creates_no_student(db, manager_client: AsyncClient, make_prospect):
    prospect = make_prospect(status="admitted")

    response = await manager_client.post(f"/api/prospectos/{prospect.id}/completar-matricula")
    assert response.status_code == 400
    assert db.query(Student).count() == 0


@pytest.mark.asyncio
async def test_invalid_modality_rejected(db, manager_client: AsyncClient, make_prospect):
    prospect = make_prospect(status="admitted")
    _pay(db, prospect)

    response = await manager_client.post(
        f"/api/prospectos/{prospect.id}/completar-matricula", json={"modality": "remote"}
    )
    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "modality"

    response = await manager_client.get("/api/estudiantes", params={"modality": "remote"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_list_filters_by_status_and_modality(db, director_client: AsyncClient, make_prospect):
    _student(db, make_prospect(status="enrolled"), "MAT-2026-00001")
    _student(db, make_prospect(status="enrolled"), "MAT-2026-00002", modality="online")
    _student(db, make_prospect(status="enrolled"), "MAT-2026-00003", modality="online",
             status="withdrawn")

    online = (await director_client.get("/api/estudiantes", params={"modality": "online"})).json()
    assert sorted(s["enrollment_number"] for s in online) == ["MAT-2026-00002", "MAT-2026-00003"]

    active_online = (
        await director_client.get("/api/estudiantes", params={"modality": "online", "status": "active"})
    ).json()
    assert [s["enrollment_number"] for s in active_online] == ["MAT-2026-00002"]

    found = (await director_client.get("/api/estudiantes", params={"search": "00003"})).json()
    assert [s["status"] for s in found] == ["withdrawn"]


@pytest.mark.asyncio
async def test_advisor_sees_only_own_students(
    db, advisor_client: AsyncClient, advisor, other_advisor, make_prospect
):
    own = _student(db, make_prospect(advisor, status="enrolled"), "MAT-2026-00001")
    foreign = _student(db, make_prospect(other_advisor, status="enrolled"), "MAT-2026-00002")

    students = (await advisor_client.get("/api/estudiantes")).json()
    assert [s["id"] for s in students] == [str(own.id)]

    response = await advisor_client.get(f"/api/estudiantes/{own.id}")
    assert response.status_code == 200
    response = await advisor_client.get(f"/api/estudiantes/{foreign.id}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_students_require_login(client: AsyncClient):
    response = await client.get("/api/estudiantes")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_enrollment_number_continues_after_highest(
    db, manager_client: AsyncClient, make_prospect
):
    year = utcnow().year
    _student(db, make_prospect(status="enrolled"), f"MAT-{year}-00007")
    _student(db, make_prospect(status="enrolled"), f"MAT-{year - 1}-00042")
    prospect = make_prospect(status="admitted")
    _pay(db, prospect)

    await manager_client.post(f"/api/prospectos/{prospect.id}/completar-matricula")

    student = db.query(Student).filter_by(prospect_id=prospect.id).one()
    assert student.enrollment_number == f"MAT-{year}-00008"
