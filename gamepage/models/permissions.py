"""Site permission levels."""

from enum import IntEnum


class Permissions(IntEnum):
    """Account permission levels, ordered so comparisons read naturally."""
    BANNED = -2
    SPAM = -1
    UNREGISTERED = 0
    REGISTERED = 1
    JUNIOR_DEVELOPER = 2
    DEVELOPER = 3
    MODERATOR = 4
