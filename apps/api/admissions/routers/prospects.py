"""Prospects router - CRUD, pipeline status, assignment and stats."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from admissions.core.deps import (
    get_current_session,
    get_db,
    require_csrf_header,
    require_policy,
)
from admissions.core.prospect_access import get_accessible_prospect
from admissions.db.enums import Role
from admissions.schemas.auth import UserSession
from admissions.schemas.campaign import CampaignResponse
from admissions.schemas.prospect import (
    ProspectAssign,
    ProspectCreate,
    ProspectResponse,
    ProspectStatsResponse,
    ProspectStatusUpdate,
    ProspectUpdate,
)
from admissions.services import campaign_service, pipeline_service, prospect_service

router = APIRouter()


@router.get("", response_model=list[ProspectResponse])
def list_prospects(
    advisor_id: UUID | None = Query(None),
    status_filter: str | None = Query(None, alias="status"),
    origin: str | None = Query(None),
    education_level: str | None = Query(None),
    search: str | None = Query(None, max_length=100),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session),
):
    """List prospects; advisors only ever see their own."""
    return prospect_service.list_prospects(
        db,
        session,
        advisor_id=advisor_id,
        status=status_filter,
        origin=origin,
        education_level=education_level,
        search=search,
        limit=limit,
        offset=offset,
    )


@router.get("/stats", response_model=ProspectStatsResponse)
def get_prospect_stats(
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session),
):
    return prospect_service.get_prospect_stats(db, session)


@router.post("", response_model=ProspectResponse, status_code=status.HTTP_201_CREATED)
def create_prospect(
    data: ProspectCreate,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session),
    _csrf=Depends(require_csrf_header),
):
    try:
        prospect = prospect_service.create_prospect(db, data, session)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    db.commit()
    db.refresh(prospect)
    return prospect


@router.get("/{prospect_id}", response_model=ProspectResponse)
def get_prospect(
    prospect_id: UUID,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session),
):
    return get_accessible_prospect(db, prospect_id, session)


@router.put("/{prospect_id}", response_model=ProspectResponse)
def update_prospect(
    prospect_id: UUID,
    data: ProspectUpdate,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session),
    _csrf=Depends(require_csrf_header),
):
    """Partial update. Reassigning the advisor requires manager or director."""
    prospect = get_accessible_prospect(db, prospect_id, session)
    if "advisor_id" in data.model_fields_set and session.role == Role.ADVISOR:
        raise HTTPException(status_code=403, detail="Advisors cannot reassign prospects")
    try:
        prospect_service.update_prospect(db, prospect, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    db.commit()
    db.refresh(prospect)
    return prospect


@router.patch("/{prospect_id}/status", response_model=ProspectResponse)
def change_status(
    prospect_id: UUID,
    data: ProspectStatusUpdate,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session),
    _csrf=Depends(require_csrf_header),
):
    """Move the prospect to any pipeline stage (kanban drag)."""
    prospect = get_accessible_prospect(db, prospect_id, session)
    pipeline_service.transition(db, prospect, data.status, enrollment_value=data.enrollment_value)
    db.commit()
    db.refresh(prospect)
    return prospect


@router.post("/{prospect_id}/asignar", response_model=ProspectResponse)
def assign_prospect(
    prospect_id: UUID,
    data: ProspectAssign,
    db: Session = Depends(get_db),
    session: UserSession = Depends(require_policy("prospects", "assign")),
    _csrf=Depends(require_csrf_header),
):
    prospect = get_accessible_prospect(db, prospect_id, session)
    try:
        prospect_service.assign_advisor(db, prospect, data.advisor_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    db.commit()
    db.refresh(prospect)
    return prospect


@router.delete("/{prospect_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_prospect(
    prospect_id: UUID,
    db: Session = Depends(get_db),
    session: UserSession = Depends(require_policy("prospects", "delete")),
    _csrf=Depends(require_csrf_header),
):
    """Hard delete with communications, campaign links, documents and payments."""
    get_accessible_prospect(db, prospect_id, session)
    if not prospect_service.delete_prospect(db, prospect_id):
        raise HTTPException(status_code=500, detail="Internal server error")
    db.commit()
    return None


@router.get("/{prospect_id}/campanas", response_model=list[CampaignResponse])
def list_prospect_campaigns(
    prospect_id: UUID,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session),
):
    get_accessible_prospect(db, prospect_id, session)
    return campaign_service.list_prospect_campaigns(db, prospect_id)
