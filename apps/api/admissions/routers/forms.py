"""Public forms router - manage lead-capture forms (authenticated)."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from admissions.core.deps import get_db, require_csrf_header, require_policy
from admissions.schemas.form import PublicFormCreate, PublicFormResponse, PublicFormUpdate
from admissions.services import form_service

router = APIRouter(dependencies=[Depends(require_policy("forms"))])


def _get_form_or_404(db: Session, form_id: UUID):
    form = form_service.get_form(db, form_id)
    if not form:
        raise HTTPException(status_code=404, detail="Form not found")
    return form


@router.get("", response_model=list[PublicFormResponse])
def list_forms(db: Session = Depends(get_db)):
    return form_service.list_forms(db)


@router.post("", response_model=PublicFormResponse, status_code=status.HTTP_201_CREATED)
def create_form(
    data: PublicFormCreate,
    db: Session = Depends(get_db),
    _csrf=Depends(require_csrf_header),
):
    """Create a form; its public slug is generated server side."""
    form = form_service.create_form(db, data)
    db.commit()
    db.refresh(form)
    return form


@router.put("/{form_id}", response_model=PublicFormResponse)
def update_form(
    form_id: UUID,
    data: PublicFormUpdate,
    db: Session = Depends(get_db),
    _csrf=Depends(require_csrf_header),
):
    form = _get_form_or_404(db, form_id)
    form_service.update_form(db, form, data)
    db.commit()
    db.refresh(form)
    return form


@router.delete("/{form_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_form(
    form_id: UUID,
    db: Session = Depends(get_db),
    _csrf=Depends(require_csrf_header),
):
    form = _get_form_or_404(db, form_id)
    form_service.delete_form(db, form)
    db.commit()
    return None
