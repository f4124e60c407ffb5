"""Dashboard metrics router - one endpoint per role dashboard."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from admissions.core.deps import get_db, require_policy
from admissions.schemas.auth import UserSession
from admissions.schemas.metrics import AdvisorMetrics, DirectorMetrics, ManagerMetrics
from admissions.services import metrics_service

router = APIRouter()


@router.get("/director", response_model=DirectorMetrics)
def director_metrics(
    db: Session = Depends(get_db),
    session: UserSession = Depends(require_policy("metrics", "director")),
):
    return metrics_service.get_director_metrics(db)


@router.get("/gerente", response_model=ManagerMetrics)
def manager_metrics(
    db: Session = Depends(get_db),
    session: UserSession = Depends(require_policy("metrics", "manager")),
):
    return metrics_service.get_manager_metrics(db)


@router.get("/asesor", response_model=AdvisorMetrics)
def advisor_metrics(
    db: Session = Depends(get_db),
    session: UserSession = Depends(require_policy("metrics", "advisor")),
):
    """Personal dashboard of the calling user."""
    return metrics_service.get_advisor_metrics(db, session.user_id)
