"""Communications router - log and review interactions with prospects."""

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from admissions.core.deps import (
    get_current_session,
    get_db,
    is_author_or_can_manage,
    require_csrf_header,
)
from admissions.core.prospect_access import get_accessible_prospect
from admissions.db.enums import Role
from admissions.schemas.auth import UserSession
from admissions.schemas.communication import (
    CommunicationCreate,
    CommunicationResponse,
    CommunicationStatsResponse,
    CommunicationUpdate,
)
from admissions.services import communication_service

router = APIRouter()


def _get_editable_communication(db: Session, communication_id: UUID, session: UserSession):
    communication = communication_service.get_communication(db, communication_id)
    if not communication:
        raise HTTPException(status_code=404, detail="Communication not found")
    if not is_author_or_can_manage(session, communication.user_id):
        if session.role == Role.ADVISOR:
            # Other advisors' communications are outside the caller's scope
            raise HTTPException(status_code=404, detail="Communication not found")
        raise HTTPException(status_code=403, detail="Not allowed to modify this communication")
    return communication


@router.get("", response_model=list[CommunicationResponse])
def list_communications(
    prospect_id: UUID | None = Query(None),
    user_id: UUID | None = Query(None),
    type: str | None = Query(None),
    state: str | None = Query(None),
    start: datetime | None = Query(None),
    end: datetime | None = Query(None),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session),
):
    """Newest first; advisors only see what they logged."""
    if prospect_id:
        get_accessible_prospect(db, prospect_id, session)
    return communication_service.list_communications(
        db,
        session,
        prospect_id=prospect_id,
        user_id=user_id,
        type=type,
        state=state,
        start=start,
        end=end,
        limit=limit,
        offset=offset,
    )


@router.get("/stats", response_model=CommunicationStatsResponse)
def get_communication_stats(
    start: datetime | None = Query(None),
    end: datetime | None = Query(None),
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session),
):
    return communication_service.get_communication_stats(db, session, start=start, end=end)


@router.post("", response_model=CommunicationResponse, status_code=status.HTTP_201_CREATED)
def create_communication(
    data: CommunicationCreate,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session),
    _csrf=Depends(require_csrf_header),
):
    """Log a communication as the caller; the prospect must be visible to them."""
    prospect = get_accessible_prospect(db, data.prospect_id, session)
    communication = communication_service.create_communication(
        db, data, prospect, session.user_id
    )
    db.commit()
    db.refresh(communication)
    return communication


@router.put("/{communication_id}", response_model=CommunicationResponse)
def update_communication(
    communication_id: UUID,
    data: CommunicationUpdate,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session),
    _csrf=Depends(require_csrf_header),
):
    communication = _get_editable_communication(db, communication_id, session)
    communication_service.update_communication(db, communication, data)
    db.commit()
    db.refresh(communication)
    return communication


@router.delete("/{communication_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_communication(
    communication_id: UUID,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session),
    _csrf=Depends(require_csrf_header),
):
    communication = _get_editable_communication(db, communication_id, session)
    communication_service.delete_communication(db, communication)
    db.commit()
    return None
