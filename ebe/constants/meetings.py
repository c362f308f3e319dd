# ebe/constants/meetings.py
"""
Constants for book-club meetings, memberships and the waiting room.

Plain string values, matching what is stored in the database columns.
"""


class WaitingRoomStatus:
    """Status of a participant's waiting-room record."""
    WAITING = "waiting"
    ADMITTED = "admitted"
    REJECTED = "rejected"

    # Returned by the status check when the user has no record at all.
    NOT_FOUND = "not_found"

    @classmethod
    def all_values(cls) -> list[str]:
        """Return all values that can be stored on a record."""
        return [cls.WAITING, cls.ADMITTED, cls.REJECTED]

    @classmethod
    def is_valid(cls, status: str) -> bool:
        return status in cls.all_values()


class ClubRole:
    """Role of a user inside a book club."""
    ADMIN = "admin"
    MODERATOR = "moderator"
    MEMBER = "member"
    NONE = "none"

    PRIVILEGED = (ADMIN, MODERATOR)

    @classmethod
    def is_privileged(cls, role: str) -> bool:
        """Admins and moderators can admit and reject participants."""
        return role in cls.PRIVILEGED


class MeetingStatus:
    """Lifecycle status of a meeting."""
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    RECORDING = "recording"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @classmethod
    def all_values(cls) -> list[str]:
        return [cls.SCHEDULED, cls.IN_PROGRESS, cls.RECORDING, cls.COMPLETED, cls.CANCELLED]
