"""Centralized defaults for enums."""

from admissions.db.enums.communications import CommunicationState
from admissions.db.enums.prospects import ProspectPriority, ProspectStatus


DEFAULT_PROSPECT_STATUS: ProspectStatus = ProspectStatus.NEW
DEFAULT_PROSPECT_PRIORITY: ProspectPriority = ProspectPriority.MEDIUM
DEFAULT_COMMUNICATION_STATE: CommunicationState = CommunicationState.COMPLETED
