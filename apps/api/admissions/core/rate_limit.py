"""Rate limiting configuration for the admissions API."""

import os

from slowapi import Limiter
from slowapi.util import get_remote_address

from admissions.core.config import settings

IS_TESTING = os.getenv("TESTING", "").lower() in ("1", "true", "yes")

# In-memory storage by default; point RATE_LIMIT_STORAGE_URI at Redis for multi-worker
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri="memory://" if IS_TESTING else settings.RATE_LIMIT_STORAGE_URI,
    enabled=not IS_TESTING,
)

AUTH_LIMIT = f"{settings.RATE_LIMIT_AUTH}/minute"
PUBLIC_LIMIT = f"{settings.RATE_LIMIT_PUBLIC}/minute"
