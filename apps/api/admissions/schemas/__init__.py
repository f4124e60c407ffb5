"""Pydantic schemas for API request/response models."""

from admissions.schemas.admission import (
    AdmissionDocumentCreate,
    AdmissionDocumentResponse,
    AdmissionDocumentReview,
    AdmissionProgressResponse,
    PaymentCreate,
    PaymentResponse,
    PaymentUpdate,
)
from admissions.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    TokenPayload,
    UserResponse,
    UserSession,
)
from admissions.schemas.campaign import (
    CampaignCreate,
    CampaignPerformance,
    CampaignProspectResponse,
    CampaignResponse,
    CampaignStatsResponse,
    CampaignUpdate,
)
from admissions.schemas.communication import (
    CommunicationCreate,
    CommunicationResponse,
    CommunicationStatsResponse,
    CommunicationUpdate,
)
from admissions.schemas.form import (
    PublicFormCreate,
    PublicFormRead,
    PublicFormResponse,
    PublicFormSubmission,
    PublicFormSubmitResponse,
    PublicFormUpdate,
)
from admissions.schemas.metrics import AdvisorMetrics, DirectorMetrics, ManagerMetrics
from admissions.schemas.prospect import (
    ProspectAssign,
    ProspectCreate,
    ProspectResponse,
    ProspectStatsResponse,
    ProspectStatusUpdate,
    ProspectUpdate,
)
from admissions.schemas.report import (
    GenerateReportRequest,
    GenerateReportResponse,
    ReportDefinitionCreate,
    ReportDefinitionResponse,
    ReportDefinitionUpdate,
    ReportFilters,
)

__all__ = [
    "AdmissionDocumentCreate",
    "AdmissionDocumentResponse",
    "AdmissionDocumentReview",
    "AdmissionProgressResponse",
    "AdvisorMetrics",
    "CampaignCreate",
    "CampaignPerformance",
    "CampaignProspectResponse",
    "CampaignResponse",
    "CampaignStatsResponse",
    "CampaignUpdate",
    "CommunicationCreate",
    "CommunicationResponse",
    "CommunicationStatsResponse",
    "CommunicationUpdate",
    "DirectorMetrics",
    "GenerateReportRequest",
    "GenerateReportResponse",
    "LoginRequest",
    "ManagerMetrics",
    "PaymentCreate",
    "PaymentResponse",
    "PaymentUpdate",
    "ProspectAssign",
    "ProspectCreate",
    "ProspectResponse",
    "ProspectStatsResponse",
    "ProspectStatusUpdate",
    "ProspectUpdate",
    "PublicFormCreate",
    "PublicFormRead",
    "PublicFormResponse",
    "PublicFormSubmission",
    "PublicFormSubmitResponse",
    "PublicFormUpdate",
    "RegisterRequest",
    "ReportDefinitionCreate",
    "ReportDefinitionResponse",
    "ReportDefinitionUpdate",
    "ReportFilters",
    "TokenPayload",
    "UserResponse",
    "UserSession",
]
