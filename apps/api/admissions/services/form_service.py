"""Public form service - lead-capture forms and anonymous submissions."""

import logging
import secrets
from datetime import datetime
from uuid import UUID

from sqlalchemy.orm import Session

from admissions.db.models import Prospect, PublicForm
from admissions.schemas.form import PublicFormCreate, PublicFormSubmission, PublicFormUpdate
from admissions.services import prospect_service
from admissions.utils.dates import ensure_utc, utcnow

logger = logging.getLogger(__name__)

# Bytes of entropy behind a form slug
SLUG_BYTES = 12


def _generate_slug(db: Session) -> str:
    while True:
        slug = secrets.token_urlsafe(SLUG_BYTES)
        if not db.query(PublicForm.id).filter(PublicForm.slug == slug).first():
            return slug


# =============================================================================
# Form CRUD
# =============================================================================

def list_forms(db: Session) -> list[PublicForm]:
    return db.query(PublicForm).order_by(PublicForm.created_at.desc()).all()


def get_form(db: Session, form_id: UUID) -> PublicForm | None:
    return db.query(PublicForm).filter(PublicForm.id == form_id).first()


def create_form(db: Session, data: PublicFormCreate) -> PublicForm:
    form = PublicForm(
        name=data.name,
        description=data.description,
        slug=_generate_slug(db),
        education_level=data.education_level.value,
        origin=data.origin,
        is_active=data.is_active,
        config=data.config,
        created_at=utcnow(),
        expires_at=data.expires_at,
    )
    db.add(form)
    db.flush()
    return form


def update_form(db: Session, form: PublicForm, data: PublicFormUpdate) -> PublicForm:
    changes = data.model_dump(exclude_unset=True)
    for field, value in changes.items():
        if value is None and field not in ("description", "config", "expires_at"):
            continue
        if hasattr(value, "value"):
            value = value.value
        setattr(form, field, value)
    db.flush()
    return form


def delete_form(db: Session, form: PublicForm) -> None:
    """Delete a form; prospects it captured are kept and lose the back-reference."""
    db.query(Prospect).filter(Prospect.public_form_id == form.id).update(
        {Prospect.public_form_id: None}, synchronize_session=False
    )
    db.delete(form)
    db.flush()


# =============================================================================
# Public access
# =============================================================================

def is_open(form: PublicForm, now: datetime | None = None) -> bool:
    """Active and not past its expiry."""
    if not form.is_active:
        return False
    if form.expires_at and ensure_utc(form.expires_at) <= (now or utcnow()):
        return False
    return True


def get_open_form_by_slug(db: Session, slug: str) -> PublicForm | None:
    """Form reachable by anonymous visitors, or None."""
    form = db.query(PublicForm).filter(PublicForm.slug == slug).first()
    if not form or not is_open(form):
        return None
    return form


def submit(db: Session, form: PublicForm, data: PublicFormSubmission) -> Prospect:
    """Turn a submission into a new, unassigned prospect."""
    prospect = prospect_service.create_from_public_form(
        db,
        form,
        {
            "full_name": data.full_name,
            "phone": data.phone,
            "email": data.email,
            "program_of_interest": data.program_of_interest,
            "notes": data.notes,
            "additional_data": data.additional_data,
            "data_consent": data.data_consent,
        },
    )
    logger.info("Public form %s captured prospect %s", form.id, prospect.id)
    return prospect
