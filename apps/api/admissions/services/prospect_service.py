"""Prospect service - CRUD, assignment, listing and cascade delete."""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from admissions.core.prospect_access import scope_prospect_query
from admissions.db.enums import ProspectStatus, Role
from admissions.db.models import (
    AdmissionDocument,
    CampaignProspect,
    Communication,
    Payment,
    Prospect,
    Student,
)
from admissions.schemas.auth import UserSession
from admissions.schemas.prospect import ProspectCreate, ProspectUpdate
from admissions.services import analytics_service, pipeline_service, user_service
from admissions.utils.dates import utcnow

logger = logging.getLogger(__name__)

# Columns that an explicit null in an update leaves untouched
REQUIRED_FIELDS = {
    "full_name", "phone", "email", "education_level", "origin", "priority", "data_consent",
}


# =============================================================================
# Queries
# =============================================================================

def list_prospects(
    db: Session,
    session: UserSession,
    advisor_id: UUID | None = None,
    status: str | None = None,
    origin: str | None = None,
    education_level: str | None = None,
    search: str | None = None,
    limit: int = 100,
    offset: int = 0,
) -> list[Prospect]:
    """
    List prospects visible to the caller, most recently touched first.

    Advisors are silently scoped to their own prospects.
    """
    query = scope_prospect_query(db.query(Prospect), session)

    if advisor_id:
        query = query.filter(Prospect.advisor_id == advisor_id)
    if status:
        query = query.filter(Prospect.status == status)
    if origin:
        query = query.filter(Prospect.origin == origin)
    if education_level:
        query = query.filter(Prospect.education_level == education_level)
    if search:
        pattern = f"%{search.strip().lower()}%"
        query = query.filter(
            or_(
                Prospect.full_name.ilike(pattern),
                Prospect.email.ilike(pattern),
            )
        )

    return (
        query.order_by(Prospect.last_interaction_at.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )


def get_prospect(db: Session, prospect_id: UUID) -> Prospect | None:
    return db.query(Prospect).filter(Prospect.id == prospect_id).first()


# =============================================================================
# Mutations
# =============================================================================

def _check_advisor(db: Session, advisor_id: UUID | None) -> None:
    if advisor_id and not user_service.get_advisor(db, advisor_id):
        raise ValueError("advisor_id must reference an active advisor")


def create_prospect(db: Session, data: ProspectCreate, session: UserSession) -> Prospect:
    """
    Create a prospect.

    Prospects created by an advisor are always assigned to that advisor.

    Raises:
        ValueError: advisor_id does not reference an advisor
    """
    values = data.model_dump(mode="python")
    if session.role == Role.ADVISOR:
        values["advisor_id"] = session.user_id
    else:
        _check_advisor(db, values.get("advisor_id"))

    values["status"] = data.status.value
    values["priority"] = data.priority.value
    values["education_level"] = data.education_level.value

    now = utcnow()
    prospect = Prospect(**values, registered_at=now, last_interaction_at=now)
    db.add(prospect)
    db.flush()
    return prospect


def create_from_public_form(db: Session, form, values: dict[str, Any]) -> Prospect:
    """Create an unassigned prospect from an anonymous form submission."""
    now = utcnow()
    prospect = Prospect(
        **values,
        education_level=form.education_level,
        origin=form.origin,
        status=ProspectStatus.NEW.value,
        public_form_id=form.id,
        registered_at=now,
        last_interaction_at=now,
    )
    db.add(prospect)
    db.flush()
    return prospect


def update_prospect(db: Session, prospect: Prospect, data: ProspectUpdate) -> Prospect:
    """
    Apply the fields present in the request and bump last_interaction_at.

    Status changes go through the pipeline so regressions get logged.
    """
    changes = data.model_dump(exclude_unset=True, mode="python")

    if "advisor_id" in changes:
        _check_advisor(db, changes["advisor_id"])

    status = changes.pop("status", None)
    for field, value in changes.items():
        if value is None and field in REQUIRED_FIELDS:
            continue
        if hasattr(value, "value"):
            value = value.value
        setattr(prospect, field, value)

    if status is not None:
        pipeline_service.transition(db, prospect, status)
    prospect.last_interaction_at = utcnow()
    db.flush()
    return prospect


def assign_advisor(db: Session, prospect: Prospect, advisor_id: UUID) -> Prospect:
    """
    Assign the prospect to an advisor.

    Raises:
        ValueError: advisor_id does not reference an advisor
    """
    _check_advisor(db, advisor_id)
    prospect.advisor_id = advisor_id
    prospect.last_interaction_at = utcnow()
    db.flush()
    return prospect


def delete_prospect(db: Session, prospect_id: UUID) -> bool:
    """
    Hard-delete a prospect with everything that references it.

    Communications, campaign links, admission documents, payments and the
    student record are removed before the prospect, all inside the
    caller's transaction. Any database error rolls the whole delete back
    and returns False.
    """
    try:
        db.query(Communication).filter(
            Communication.prospect_id == prospect_id
        ).delete(synchronize_session=False)
        db.query(CampaignProspect).filter(
            CampaignProspect.prospect_id == prospect_id
        ).delete(synchronize_session=False)
        db.query(AdmissionDocument).filter(
            AdmissionDocument.prospect_id == prospect_id
        ).delete(synchronize_session=False)
        db.query(Student).filter(
            Student.prospect_id == prospect_id
        ).delete(synchronize_session=False)
        db.query(Payment).filter(
            Payment.prospect_id == prospect_id
        ).delete(synchronize_session=False)
        deleted = db.query(Prospect).filter(
            Prospect.id == prospect_id
        ).delete(synchronize_session=False)
        db.flush()
    except SQLAlchemyError:
        logger.exception("Error deleting prospect %s", prospect_id)
        db.rollback()
        return False
    return deleted > 0


# =============================================================================
# Stats
# =============================================================================

def get_prospect_stats(db: Session, session: UserSession) -> dict[str, Any]:
    """Grouped counts over the prospects visible to the caller."""
    advisor_id = session.user_id if session.role == Role.ADVISOR else None
    summary = analytics_service.conversion_summary(db, advisor_id=advisor_id)
    return {
        "total": summary["total"],
        "by_status": analytics_service.count_by_status(db, advisor_id=advisor_id),
        "by_origin": analytics_service.count_by_origin(db, advisor_id=advisor_id),
        "by_priority": analytics_service.count_by_priority(db, advisor_id=advisor_id),
        "by_education_level": analytics_service.count_by_education_level(
            db, advisor_id=advisor_id
        ),
        "conversion_rate": summary["conversion_rate"],
    }
