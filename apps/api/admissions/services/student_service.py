"""Enrolled students - created on enrollment, listed with status/modality filters."""

import logging

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from admissions.core.prospect_access import scope_prospect_query
from admissions.db.models import Prospect, Student
from admissions.schemas.auth import UserSession
from admissions.schemas.student import EnrollmentDetails
from admissions.utils.dates import utcnow

logger = logging.getLogger(__name__)

ENROLLMENT_NUMBER_PREFIX = "MAT"


def _next_enrollment_number(db: Session, year: int) -> str:
    """MAT-<year>-<sequence>, the sequence restarting every calendar year."""
    prefix = f"{ENROLLMENT_NUMBER_PREFIX}-{year}-"
    # Zero-padded, so the lexical max is the highest sequence issued
    last = db.query(func.max(Student.enrollment_number)).filter(
        Student.enrollment_number.like(f"{prefix}%")
    ).scalar()
    sequence = int(last[len(prefix):]) + 1 if last else 1
    return f"{prefix}{sequence:05d}"


def get_for_prospect(db: Session, prospect_id) -> Student | None:
    return db.query(Student).filter(Student.prospect_id == prospect_id).first()


def create_from_enrollment(
    db: Session,
    prospect: Prospect,
    details: EnrollmentDetails | None = None,
) -> Student:
    """
    Register the student record for a just-enrolled prospect.

    A prospect enrolled twice keeps its first record and number. Program
    falls back to the prospect's program of interest, then to its
    education level.
    """
    existing = get_for_prospect(db, prospect.id)
    if existing:
        return existing

    details = details or EnrollmentDetails()
    now = utcnow()
    student = Student(
        prospect_id=prospect.id,
        enrollment_number=_next_enrollment_number(db, now.year),
        education_level=prospect.education_level,
        program=details.program or prospect.program_of_interest or prospect.education_level,
        modality=details.modality.value,
        shift=details.shift.value,
        starts_on=details.starts_on or now.date(),
        academic_data=details.academic_data,
        enrolled_at=now,
    )
    db.add(student)
    db.flush()
    logger.info("Student %s registered for prospect %s", student.enrollment_number, prospect.id)
    return student


def list_students(
    db: Session,
    session: UserSession,
    status: str | None = None,
    modality: str | None = None,
    search: str | None = None,
) -> list[Student]:
    """
    Students visible to the caller, newest enrollment first.

    Advisors only see students whose prospect is assigned to them.
    """
    query = scope_prospect_query(db.query(Student).join(Student.prospect), session)

    if status:
        query = query.filter(Student.status == status)
    if modality:
        query = query.filter(Student.modality == modality)
    if search:
        pattern = f"%{search.strip().lower()}%"
        query = query.filter(
            or_(
                Student.enrollment_number.ilike(pattern),
                Student.program.ilike(pattern),
                Prospect.full_name.ilike(pattern),
            )
        )

    return query.order_by(Student.enrolled_at.desc()).all()
