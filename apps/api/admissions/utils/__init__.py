"""Date and contact-field helpers."""

from admissions.utils.dates import ensure_utc, utcnow
from admissions.utils.normalization import (
    normalize_email,
    normalize_name,
)

__all__ = [
    "ensure_utc",
    "normalize_email",
    "normalize_name",
    "utcnow",
]
