"""Prospect-related enums."""

from enum import Enum


class ProspectStatus(str, Enum):
    """Admissions pipeline stage of a prospect."""

    NEW = "new"
    FIRST_CONTACT = "first_contact"
    APPOINTMENT_SCHEDULED = "appointment_scheduled"
    DOCUMENTS = "documents"
    ADMITTED = "admitted"
    ENROLLED = "enrolled"
    NOT_INTERESTED = "not_interested"


class ProspectPriority(str, Enum):
    """Follow-up priority."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class EducationLevel(str, Enum):
    """Education level the prospect is applying for."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    HIGH_SCHOOL = "high_school"
    UNIVERSITY = "university"


class LeadOrigin(str, Enum):
    """Common lead origins. Prospect.origin is free text; these are the known values."""

    FACEBOOK = "facebook"
    GOOGLE = "google"
    SOCIAL_MEDIA = "social_media"
    EVENTS = "events"
    REFERRALS = "referrals"
    PHONE = "phone"
    EMAIL = "email"
    WEB = "web"
    PUBLIC_FORM = "public_form"
