"""Auth-related enums."""

from enum import Enum


class Role(str, Enum):
    """
    User roles with increasing privilege levels.

    - ADVISOR: works own prospects and communications
    - MANAGER: sees every prospect, runs campaigns and reports
    - DIRECTOR: manager plus destructive actions and executive metrics
    """

    ADVISOR = "advisor"
    MANAGER = "manager"
    DIRECTOR = "director"

    @classmethod
    def has_value(cls, value: str) -> bool:
        """Check if value is a valid role."""
        return value in cls._value2member_map_
