# ebe/crud/crud_meeting.py
from typing import Optional
from sqlalchemy.orm import Session

from .base import CRUDBase
from ebe.models.meeting import BookClubMeeting
from ebe.schemas.meeting import Meeting, MeetingUpdate


class CRUDMeeting(CRUDBase[BookClubMeeting, Meeting, MeetingUpdate]):
    """Meeting directory: existence, owning club and waiting-room policy."""

    def get_meeting(self, db: Session, *, meeting_id: str) -> Optional[BookClubMeeting]:
        return self.get(db, id=meeting_id)


meeting = CRUDMeeting(BookClubMeeting)
