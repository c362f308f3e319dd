# ebe/models/meeting_waiting_participant.py
import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, Index, UniqueConstraint, func
from sqlalchemy.orm import relationship
from ebe.constants.meetings import WaitingRoomStatus
from ebe.db.base_class import Base


class MeetingWaitingParticipant(Base):
    """
    Waiting-room record for one user in one meeting.

    At most one row per (meeting_id, user_id). Re-joining overwrites status
    and joined_at on the same row. Rows are kept after the meeting ends.

    Status: waiting, admitted, rejected
    """
    __tablename__ = "meeting_waiting_participants"

    id = Column(String, primary_key=True, default=lambda: f"mwp_{uuid.uuid4().hex[:12]}")
    meeting_id = Column(
        String, ForeignKey("book_club_meetings.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(String(20), nullable=False, server_default=WaitingRoomStatus.WAITING)
    joined_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    meeting = relationship("BookClubMeeting", back_populates="waiting_participants")
    user = relationship("User", lazy="joined")

    __table_args__ = (
        UniqueConstraint("meeting_id", "user_id", name="unique_meeting_user"),
        # WHERE meeting_id = ? AND status = 'waiting'
        Index("ix_meeting_waiting_participants_meeting_status", "meeting_id", "status"),
    )

    def __repr__(self):
        return (
            f"<MeetingWaitingParticipant(meeting={self.meeting_id}, "
            f"user={self.user_id}, status={self.status})>"
        )
