"""Report-related enums."""

from enum import Enum


class ReportType(str, Enum):
    EXECUTIVE = "executive"
    ADVISORS = "advisors"
    CAMPAIGNS = "campaigns"
    CONVERSIONS = "conversions"


class ReportFrequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class ExportFormat(str, Enum):
    CSV = "csv"
    EXCEL = "excel"
    PDF = "pdf"
