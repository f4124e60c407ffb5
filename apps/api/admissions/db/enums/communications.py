"""Communication-related enums."""

from enum import Enum


class CommunicationType(str, Enum):
    """Channel used to reach a prospect."""

    CALL = "call"
    EMAIL = "email"
    WHATSAPP = "whatsapp"
    IN_PERSON = "in_person"


class CommunicationDirection(str, Enum):
    SENT = "sent"
    RECEIVED = "received"


class CommunicationState(str, Enum):
    COMPLETED = "completed"
    PENDING = "pending"
    FAILED = "failed"
