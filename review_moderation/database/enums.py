"""
Database enumerations for the application.
"""

from enum import Enum


class UserRole(str, Enum):
    """Caller roles forwarded by the authenticator"""

    USER = "USER"
    MODERATOR = "MODERATOR"


class ReviewStatus(str, Enum):
    """Moderation states of a review"""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    @classmethod
    def parse(cls, value: str | None) -> "ReviewStatus | None":
        """Case-insensitive lookup, None for anything outside the enum."""
        if not value:
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None
