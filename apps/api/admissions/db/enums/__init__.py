"""Enum definitions for application constants."""

from admissions.db.enums.admissions import (
    DocumentStatus,
    DocumentType,
    PaymentConcept,
    PaymentMethod,
    PaymentStatus,
)
from admissions.db.enums.auth import Role
from admissions.db.enums.campaigns import CampaignChannel, CampaignStatus
from admissions.db.enums.communications import (
    CommunicationDirection,
    CommunicationState,
    CommunicationType,
)
from admissions.db.enums.defaults import (
    DEFAULT_COMMUNICATION_STATE,
    DEFAULT_PROSPECT_PRIORITY,
    DEFAULT_PROSPECT_STATUS,
)
from admissions.db.enums.permissions import (
    ROLES_CAN_ASSIGN,
    ROLES_CAN_DELETE_CAMPAIGNS,
    ROLES_CAN_DELETE_PROSPECTS,
    ROLES_CAN_MANAGE_CAMPAIGNS,
    ROLES_CAN_MANAGE_COMMUNICATIONS,
    ROLES_CAN_MANAGE_FORMS,
    ROLES_CAN_MANAGE_REPORTS,
    ROLES_CAN_VIEW_ALL_PROSPECTS,
)
from admissions.db.enums.prospects import (
    EducationLevel,
    LeadOrigin,
    ProspectPriority,
    ProspectStatus,
)
from admissions.db.enums.reports import ExportFormat, ReportFrequency, ReportType
from admissions.db.enums.students import StudentStatus, StudyModality, StudyShift

__all__ = [
    "CampaignChannel",
    "CampaignStatus",
    "CommunicationDirection",
    "CommunicationState",
    "CommunicationType",
    "DEFAULT_COMMUNICATION_STATE",
    "DEFAULT_PROSPECT_PRIORITY",
    "DEFAULT_PROSPECT_STATUS",
    "DocumentStatus",
    "DocumentType",
    "EducationLevel",
    "ExportFormat",
    "LeadOrigin",
    "PaymentConcept",
    "PaymentMethod",
    "PaymentStatus",
    "ProspectPriority",
    "ProspectStatus",
    "ROLES_CAN_ASSIGN",
    "ROLES_CAN_DELETE_CAMPAIGNS",
    "ROLES_CAN_DELETE_PROSPECTS",
    "ROLES_CAN_MANAGE_CAMPAIGNS",
    "ROLES_CAN_MANAGE_COMMUNICATIONS",
    "ROLES_CAN_MANAGE_FORMS",
    "ROLES_CAN_MANAGE_REPORTS",
    "ROLES_CAN_VIEW_ALL_PROSPECTS",
    "ReportFrequency",
    "ReportType",
    "Role",
    "StudentStatus",
    "StudyModality",
    "StudyShift",
]
