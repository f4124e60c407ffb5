"""Admission sub-process - documents, payments and enrollment."""

import logging
from decimal import Decimal
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from admissions.db.enums import PaymentStatus, ProspectStatus
from admissions.db.models import AdmissionDocument, Payment, Prospect
from admissions.schemas.admission import (
    AdmissionDocumentCreate,
    AdmissionDocumentReview,
    PaymentCreate,
    PaymentUpdate,
)
from admissions.schemas.student import EnrollmentDetails
from admissions.services import pipeline_service, student_service
from admissions.services.analytics_shared import quantize_money
from admissions.utils.dates import utcnow

logger = logging.getLogger(__name__)


def start_admission(db: Session, prospect: Prospect) -> Prospect:
    """Move the prospect into the documents stage."""
    return pipeline_service.transition(db, prospect, ProspectStatus.DOCUMENTS)


# =============================================================================
# Documents
# =============================================================================

def list_documents(db: Session, prospect_id: UUID) -> list[AdmissionDocument]:
    return (
        db.query(AdmissionDocument)
        .filter(AdmissionDocument.prospect_id == prospect_id)
        .order_by(AdmissionDocument.uploaded_at.desc())
        .all()
    )


def get_document(db: Session, document_id: UUID) -> AdmissionDocument | None:
    return db.query(AdmissionDocument).filter(AdmissionDocument.id == document_id).first()


def add_document(db: Session, data: AdmissionDocumentCreate) -> AdmissionDocument:
    document = AdmissionDocument(
        prospect_id=data.prospect_id,
        document_type=data.document_type.value,
        file_name=data.file_name,
        file_path=data.file_path,
        size_bytes=data.size_bytes,
        comments=data.comments,
        uploaded_at=utcnow(),
    )
    db.add(document)
    db.flush()
    return document


def review_document(
    db: Session,
    document: AdmissionDocument,
    data: AdmissionDocumentReview,
    reviewer_id: UUID,
) -> AdmissionDocument:
    """Record a review. Approval never changes the prospect's stage."""
    document.status = data.status.value
    if data.comments is not None:
        document.comments = data.comments
    document.reviewed_at = utcnow()
    document.reviewed_by_user_id = reviewer_id
    db.flush()
    return document


# =============================================================================
# Payments
# =============================================================================

def list_payments(db: Session, prospect_id: UUID) -> list[Payment]:
    return (
        db.query(Payment)
        .filter(Payment.prospect_id == prospect_id)
        .order_by(Payment.paid_at.desc())
        .all()
    )


def get_payment(db: Session, payment_id: UUID) -> Payment | None:
    return db.query(Payment).filter(Payment.id == payment_id).first()


def record_payment(db: Session, data: PaymentCreate) -> Payment:
    payment = Payment(
        prospect_id=data.prospect_id,
        concept=data.concept.value,
        amount=data.amount_decimal,
        currency=data.currency.upper(),
        method=data.method.value,
        status=data.status.value,
        transaction_id=data.transaction_id,
        payment_data=data.payment_data,
        paid_at=utcnow(),
        due_at=data.due_at,
    )
    db.add(payment)
    db.flush()
    return payment


def update_payment(db: Session, payment: Payment, data: PaymentUpdate) -> Payment:
    payment.status = data.status.value
    if data.transaction_id is not None:
        payment.transaction_id = data.transaction_id
    db.flush()
    return payment


def completed_payments_total(db: Session, prospect_id: UUID) -> Decimal:
    total = db.query(func.coalesce(func.sum(Payment.amount), 0)).filter(
        Payment.prospect_id == prospect_id,
        Payment.status == PaymentStatus.COMPLETED.value,
    ).scalar()
    return quantize_money(total)


# =============================================================================
# Enrollment
# =============================================================================

def complete_enrollment(
    db: Session,
    prospect: Prospect,
    details: EnrollmentDetails | None = None,
) -> Prospect:
    """
    Enroll an admitted prospect and register it as a student.

    Requires status admitted and at least one completed payment. When no
    enrollment_value was recorded, the completed payments total is used.

    Raises:
        ValueError: prospect is not admitted or has no completed payment
    """
    if prospect.status != ProspectStatus.ADMITTED.value:
        raise ValueError("Prospect must be admitted before enrollment")
    if pipeline_service.count_completed_payments(db, prospect.id) == 0:
        raise ValueError("At least one completed payment is required for enrollment")

    value = None
    if prospect.enrollment_value is None:
        value = completed_payments_total(db, prospect.id)

    pipeline_service.transition(db, prospect, ProspectStatus.ENROLLED, enrollment_value=value)
    student_service.create_from_enrollment(db, prospect, details)
    logger.info("Prospect %s enrolled", prospect.id)
    return prospect
