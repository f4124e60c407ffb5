"""SQLAlchemy ORM models."""

from admissions.db.models.admissions import AdmissionDocument, Payment
from admissions.db.models.auth import User
from admissions.db.models.campaigns import Campaign, CampaignProspect
from admissions.db.models.communications import Communication
from admissions.db.models.forms import PublicForm
from admissions.db.models.prospects import Prospect
from admissions.db.models.reports import ReportDefinition
from admissions.db.models.students import Student

__all__ = [
    "AdmissionDocument",
    "Campaign",
    "CampaignProspect",
    "Communication",
    "Payment",
    "Prospect",
    "PublicForm",
    "ReportDefinition",
    "Student",
    "User",
]
