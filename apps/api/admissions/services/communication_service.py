"""Communication service - logging calls, emails, messages and visits."""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from admissions.db.enums import CommunicationType, Role
from admissions.db.models import Communication, Prospect
from admissions.schemas.auth import UserSession
from admissions.schemas.communication import CommunicationCreate, CommunicationUpdate
from admissions.utils.dates import ensure_utc, utcnow


def list_communications(
    db: Session,
    session: UserSession,
    prospect_id: UUID | None = None,
    user_id: UUID | None = None,
    type: str | None = None,
    state: str | None = None,
    start: datetime | None = None,
    end: datetime | None = None,
    limit: int = 100,
    offset: int = 0,
) -> list[Communication]:
    """Newest first. Advisors only see communications they authored."""
    query = db.query(Communication)
    if session.role == Role.ADVISOR:
        query = query.filter(Communication.user_id == session.user_id)
    elif user_id:
        query = query.filter(Communication.user_id == user_id)

    if prospect_id:
        query = query.filter(Communication.prospect_id == prospect_id)
    if type:
        query = query.filter(Communication.type == type)
    if state:
        query = query.filter(Communication.state == state)
    if start:
        query = query.filter(Communication.occurred_at >= start)
    if end:
        query = query.filter(Communication.occurred_at < end)

    return (
        query.order_by(Communication.occurred_at.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )


def get_communication(db: Session, communication_id: UUID) -> Communication | None:
    return db.query(Communication).filter(Communication.id == communication_id).first()


def create_communication(
    db: Session,
    data: CommunicationCreate,
    prospect: Prospect,
    user_id: UUID,
) -> Communication:
    """
    Log a communication and bump the prospect's last_interaction_at.

    last_interaction_at never ends up earlier than the communication itself.
    """
    now = utcnow()
    occurred_at = ensure_utc(data.occurred_at) if data.occurred_at else now

    communication = Communication(
        prospect_id=prospect.id,
        user_id=user_id,
        type=data.type.value,
        direction=data.direction.value,
        content=data.content,
        result=data.result,
        duration_minutes=data.duration_minutes,
        state=data.state.value,
        occurred_at=occurred_at,
    )
    db.add(communication)

    prospect.last_interaction_at = max(now, occurred_at)
    db.flush()
    return communication


def update_communication(
    db: Session, communication: Communication, data: CommunicationUpdate
) -> Communication:
    """Only content, result, duration and state can change."""
    changes = data.model_dump(exclude_unset=True)
    for field, value in changes.items():
        if value is None and field in ("content", "state"):
            continue
        if hasattr(value, "value"):
            value = value.value
        setattr(communication, field, value)
    db.flush()
    return communication


def delete_communication(db: Session, communication: Communication) -> None:
    db.delete(communication)
    db.flush()


def get_communication_stats(
    db: Session,
    session: UserSession,
    start: datetime | None = None,
    end: datetime | None = None,
) -> dict[str, Any]:
    """Counts by type, direction and state; advisors see their own only."""
    base = db.query(Communication)
    if session.role == Role.ADVISOR:
        base = base.filter(Communication.user_id == session.user_id)
    if start:
        base = base.filter(Communication.occurred_at >= start)
    if end:
        base = base.filter(Communication.occurred_at < end)

    def grouped(column) -> dict[str, int]:
        rows = base.with_entities(column, func.count(Communication.id)).group_by(column).all()
        return {key: count for key, count in rows}

    avg_call = (
        base.filter(
            Communication.type == CommunicationType.CALL.value,
            Communication.duration_minutes.isnot(None),
        )
        .with_entities(func.avg(Communication.duration_minutes))
        .scalar()
    )

    return {
        "total": base.count(),
        "by_type": grouped(Communication.type),
        "by_direction": grouped(Communication.direction),
        "by_state": grouped(Communication.state),
        "average_call_minutes": round(float(avg_call or 0), 2),
    }
