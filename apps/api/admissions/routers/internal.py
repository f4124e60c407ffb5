"""
Internal endpoints for scheduled/cron operations.

Protected by X-Internal-Secret header.
Call from an external cron; nothing in the API runs on a timer.
"""
import logging

from fastapi import APIRouter, Header, HTTPException

from admissions.core.config import settings
from admissions.db.session import SessionLocal
from admissions.schemas.report import ScheduledReportsResponse
from admissions.services import report_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/internal/scheduled", tags=["internal"])


def verify_internal_secret(x_internal_secret: str = Header(...)):
    """Verify the internal secret header."""
    expected = settings.INTERNAL_SECRET
    if not expected:
        raise HTTPException(status_code=501, detail="INTERNAL_SECRET not configured")
    if x_internal_secret != expected:
        raise HTTPException(status_code=403, detail="Invalid internal secret")


@router.post("/reports", response_model=ScheduledReportsResponse)
def run_scheduled_reports(x_internal_secret: str = Header(...)):
    """Execute every active report definition whose next_run_at has passed."""
    verify_internal_secret(x_internal_secret)

    with SessionLocal() as db:
        result = report_service.run_due_reports(db)
        db.commit()

    return result
