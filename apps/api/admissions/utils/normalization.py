"""Input cleanup for contact fields."""

import re
from typing import Optional


def normalize_email(email: Optional[str]) -> Optional[str]:
    """Trimmed, lowercased email; duplicate checks compare this form."""
    if not email:
        return None
    return email.strip().lower()


def normalize_name(name: Optional[str]) -> Optional[str]:
    if not name:
        return None
    collapsed = re.sub(r"\s+", " ", name.strip())
    return collapsed or None
