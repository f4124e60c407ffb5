"""Prospect pipeline - stage transitions and admission progress.

Stages run new -> first_contact -> appointment_scheduled -> documents ->
admitted -> enrolled, with not_interested reachable from anywhere.
Transitions are permissive: any valid stage may follow any other, so staff
can revert a prospect. Regressions are logged, never blocked.
"""

import logging
from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.orm import Session

from admissions.db.enums import DocumentStatus, PaymentStatus, ProspectStatus
from admissions.db.models import AdmissionDocument, Payment, Prospect
from admissions.utils.dates import utcnow

logger = logging.getLogger(__name__)

# Ordered stages; not_interested is a terminal exit outside the ordering
PIPELINE_STAGES: list[ProspectStatus] = [
    ProspectStatus.NEW,
    ProspectStatus.FIRST_CONTACT,
    ProspectStatus.APPOINTMENT_SCHEDULED,
    ProspectStatus.DOCUMENTS,
    ProspectStatus.ADMITTED,
    ProspectStatus.ENROLLED,
]
_STAGE_INDEX = {stage.value: i for i, stage in enumerate(PIPELINE_STAGES)}


def is_valid_status(status: str) -> bool:
    return status in ProspectStatus._value2member_map_


def is_backward_transition(current: str, target: str) -> bool:
    """True when target is an earlier pipeline stage than current."""
    if current not in _STAGE_INDEX or target not in _STAGE_INDEX:
        return False
    return _STAGE_INDEX[target] < _STAGE_INDEX[current]


def transition(
    db: Session,
    prospect: Prospect,
    target: ProspectStatus | str,
    enrollment_value: Decimal | None = None,
) -> Prospect:
    """
    Move a prospect to another stage and bump last_interaction_at.

    Raises:
        ValueError: target is not a pipeline stage
    """
    target_value = target.value if isinstance(target, ProspectStatus) else target
    if not is_valid_status(target_value):
        raise ValueError(f"Invalid status '{target_value}'")

    if is_backward_transition(prospect.status, target_value):
        logger.info(
            "Prospect %s moved backward %s -> %s", prospect.id, prospect.status, target_value
        )

    prospect.status = target_value
    if enrollment_value is not None:
        prospect.enrollment_value = enrollment_value
    prospect.last_interaction_at = utcnow()
    db.flush()
    return prospect


# =============================================================================
# Admission progress
# =============================================================================

def compute_progress(status: str, approved_documents: int, completed_payments: int) -> int:
    """
    Admission progress percentage from current flags.

    Rules are evaluated in order and a later satisfied rule overrides an
    earlier one.
    """
    progress = 0
    if status == ProspectStatus.DOCUMENTS.value:
        progress = 25
    if approved_documents > 0:
        progress = 50
    if status == ProspectStatus.ADMITTED.value:
        progress = 75
    if status == ProspectStatus.ENROLLED.value or completed_payments > 0:
        progress = 100
    return progress


def count_approved_documents(db: Session, prospect_id) -> int:
    return db.query(func.count(AdmissionDocument.id)).filter(
        AdmissionDocument.prospect_id == prospect_id,
        AdmissionDocument.status == DocumentStatus.APPROVED.value,
    ).scalar() or 0


def count_completed_payments(db: Session, prospect_id) -> int:
    return db.query(func.count(Payment.id)).filter(
        Payment.prospect_id == prospect_id,
        Payment.status == PaymentStatus.COMPLETED.value,
    ).scalar() or 0


def get_admission_progress(db: Session, prospect: Prospect) -> dict:
    approved = count_approved_documents(db, prospect.id)
    completed = count_completed_payments(db, prospect.id)
    return {
        "prospect_id": prospect.id,
        "status": prospect.status,
        "progress": compute_progress(prospect.status, approved, completed),
        "approved_documents": approved,
        "completed_payments": completed,
    }
