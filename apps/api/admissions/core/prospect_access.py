"""Prospect access control - ownership checks for advisor-scoped operations.

Managers and directors see every prospect. Advisors only see prospects
assigned to them; anything else is reported as not found so ids of other
advisors' prospects are not revealed.
"""

from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.orm import Query, Session

from admissions.db.enums import ROLES_CAN_VIEW_ALL_PROSPECTS, Role
from admissions.db.models import Prospect


def can_access_prospect(prospect: Prospect, user_role: Role | str, user_id: UUID) -> bool:
    """Return True if the caller may read or modify this prospect."""
    role = Role(user_role) if isinstance(user_role, str) else user_role
    if role in ROLES_CAN_VIEW_ALL_PROSPECTS:
        return True
    return prospect.advisor_id == user_id


def get_accessible_prospect(db: Session, prospect_id: UUID, session) -> Prospect:
    """
    Load a prospect the caller is allowed to see.

    Raises:
        HTTPException 404: Missing, or outside the advisor's scope
    """
    prospect = db.get(Prospect, prospect_id)
    if not prospect or not can_access_prospect(prospect, session.role, session.user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Prospect not found")
    return prospect


def scope_prospect_query(query: Query, session) -> Query:
    """Restrict a prospect query to the rows visible to the caller."""
    if session.role in ROLES_CAN_VIEW_ALL_PROSPECTS:
        return query
    return query.filter(Prospect.advisor_id == session.user_id)
