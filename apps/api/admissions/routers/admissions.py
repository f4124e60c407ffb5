"""Admission router - documents, payments, progress and enrollment.

Mixed paths: /api/prospectos/{id}/... plus /api/documentos-admision and
/api/pagos. Every operation goes through the prospect's visibility check.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from admissions.core.deps import get_current_session, get_db, require_csrf_header
from admissions.core.prospect_access import get_accessible_prospect
from admissions.schemas.admission import (
    AdmissionDocumentCreate,
    AdmissionDocumentResponse,
    AdmissionDocumentReview,
    AdmissionProgressResponse,
    PaymentCreate,
    PaymentResponse,
    PaymentUpdate,
)
from admissions.schemas.auth import UserSession
from admissions.schemas.prospect import ProspectResponse
from admissions.schemas.student import EnrollmentDetails
from admissions.services import admission_service, pipeline_service

router = APIRouter(prefix="/api")


# =============================================================================
# Per-prospect admission views
# =============================================================================


@router.post("/prospectos/{prospect_id}/iniciar-admision", response_model=ProspectResponse)
def start_admission(
    prospect_id: UUID,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session),
    _csrf=Depends(require_csrf_header),
):
    prospect = get_accessible_prospect(db, prospect_id, session)
    admission_service.start_admission(db, prospect)
    db.commit()
    db.refresh(prospect)
    return prospect


@router.get("/prospectos/{prospect_id}/documentos", response_model=list[AdmissionDocumentResponse])
def list_documents(
    prospect_id: UUID,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session),
):
    get_accessible_prospect(db, prospect_id, session)
    return admission_service.list_documents(db, prospect_id)


@router.get("/prospectos/{prospect_id}/pagos", response_model=list[PaymentResponse])
def list_payments(
    prospect_id: UUID,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session),
):
    get_accessible_prospect(db, prospect_id, session)
    return admission_service.list_payments(db, prospect_id)


@router.get("/prospectos/{prospect_id}/progreso", response_model=AdmissionProgressResponse)
def get_progress(
    prospect_id: UUID,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session),
):
    prospect = get_accessible_prospect(db, prospect_id, session)
    return pipeline_service.get_admission_progress(db, prospect)


@router.post("/prospectos/{prospect_id}/completar-matricula", response_model=ProspectResponse)
def complete_enrollment(
    prospect_id: UUID,
    details: EnrollmentDetails | None = None,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session),
    _csrf=Depends(require_csrf_header),
):
    """
    Enroll an admitted prospect with at least one completed payment.

    The optional body sets the student's program, modality, shift and start date.
    """
    prospect = get_accessible_prospect(db, prospect_id, session)
    try:
        admission_service.complete_enrollment(db, prospect, details)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    db.commit()
    db.refresh(prospect)
    return prospect


# =============================================================================
# Documents
# =============================================================================


@router.post(
    "/documentos-admision",
    response_model=AdmissionDocumentResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_document(
    data: AdmissionDocumentCreate,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session),
    _csrf=Depends(require_csrf_header),
):
    get_accessible_prospect(db, data.prospect_id, session)
    document = admission_service.add_document(db, data)
    db.commit()
    db.refresh(document)
    return document


@router.patch("/documentos-admision/{document_id}", response_model=AdmissionDocumentResponse)
def review_document(
    document_id: UUID,
    data: AdmissionDocumentReview,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session),
    _csrf=Depends(require_csrf_header),
):
    document = admission_service.get_document(db, document_id)
    if not document:
        raise HTTPException(status_code=404, detail="Document not found")
    get_accessible_prospect(db, document.prospect_id, session)
    admission_service.review_document(db, document, data, session.user_id)
    db.commit()
    db.refresh(document)
    return document


# =============================================================================
# Payments
# =============================================================================


@router.post("/pagos", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
def record_payment(
    data: PaymentCreate,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session),
    _csrf=Depends(require_csrf_header),
):
    get_accessible_prospect(db, data.prospect_id, session)
    payment = admission_service.record_payment(db, data)
    db.commit()
    db.refresh(payment)
    return payment


@router.patch("/pagos/{payment_id}", response_model=PaymentResponse)
def update_payment(
    payment_id: UUID,
    data: PaymentUpdate,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session),
    _csrf=Depends(require_csrf_header),
):
    payment = admission_service.get_payment(db, payment_id)
    if not payment:
        raise HTTPException(status_code=404, detail="Payment not found")
    get_accessible_prospect(db, payment.prospect_id, session)
    admission_service.update_payment(db, payment, data)
    db.commit()
    db.refresh(payment)
    return payment
