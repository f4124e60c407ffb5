"""Campaign-related enums."""

from enum import Enum


class CampaignStatus(str, Enum):
    """Status of a campaign."""

    ACTIVE = "active"
    PAUSED = "paused"
    FINISHED = "finished"


class CampaignChannel(str, Enum):
    """Marketing channel a campaign runs on."""

    FACEBOOK = "facebook"
    GOOGLE = "google"
    SOCIAL_MEDIA = "social_media"
    EVENTS = "events"
    REFERRALS = "referrals"
    PHONE = "phone"
    EMAIL = "email"
