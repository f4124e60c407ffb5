"""Public lead-capture endpoints (no auth required)."""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from admissions.core.deps import get_db
from admissions.core.rate_limit import PUBLIC_LIMIT, limiter
from admissions.schemas.form import PublicFormRead, PublicFormSubmission, PublicFormSubmitResponse
from admissions.services import form_service

router = APIRouter(prefix="/api/public/form", tags=["public"])


def _get_open_form_or_404(db: Session, slug: str):
    form = form_service.get_open_form_by_slug(db, slug)
    if not form:
        raise HTTPException(status_code=404, detail="Form not found or no longer available")
    return form


@router.get("/{slug}", response_model=PublicFormRead)
@limiter.limit(PUBLIC_LIMIT)
def get_public_form(request: Request, slug: str, db: Session = Depends(get_db)):
    return _get_open_form_or_404(db, slug)


@router.post(
    "/{slug}/submit",
    response_model=PublicFormSubmitResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(PUBLIC_LIMIT)
def submit_public_form(
    request: Request,
    slug: str,
    data: PublicFormSubmission,
    db: Session = Depends(get_db),
):
    """Create a new prospect from an anonymous submission."""
    form = _get_open_form_or_404(db, slug)
    prospect = form_service.submit(db, form, data)
    db.commit()
    return {"id": prospect.id, "status": "submitted"}
