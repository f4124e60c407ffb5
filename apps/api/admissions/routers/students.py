"""Students router - prospects that completed enrollment."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from admissions.core.deps import get_db, require_policy
from admissions.core.prospect_access import can_access_prospect
from admissions.db.enums import StudentStatus, StudyModality
from admissions.db.models import Student
from admissions.schemas.auth import UserSession
from admissions.schemas.student import StudentResponse
from admissions.services import student_service

router = APIRouter()


@router.get("", response_model=list[StudentResponse])
def list_students(
    status_filter: StudentStatus | None = Query(None, alias="status"),
    modality: StudyModality | None = Query(None),
    search: str | None = Query(None),
    db: Session = Depends(get_db),
    session: UserSession = Depends(require_policy("students")),
):
    """Advisors only see students whose prospect is assigned to them."""
    return student_service.list_students(
        db,
        session,
        status=status_filter.value if status_filter else None,
        modality=modality.value if modality else None,
        search=search,
    )


@router.get("/{student_id}", response_model=StudentResponse)
def get_student(
    student_id: UUID,
    db: Session = Depends(get_db),
    session: UserSession = Depends(require_policy("students")),
):
    student = db.get(Student, student_id)
    if not student or not can_access_prospect(student.prospect, session.role, session.user_id):
        raise HTTPException(status_code=404, detail="Student not found")
    return student
