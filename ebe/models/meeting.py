# ebe/models/meeting.py
import uuid
from sqlalchemy import (
    Column,
    String,
    Text,
    Integer,
    Boolean,
    DateTime,
    ForeignKey,
    func,
    text,
)
from sqlalchemy.orm import relationship
from ebe.constants.meetings import MeetingStatus
from ebe.db.base_class import Base


class BookClubMeeting(Base):
    """
    A scheduled video meeting of a book club.

    status moves scheduled -> in_progress (-> recording) -> completed, with
    cancelled reachable from scheduled. Nothing here enforces the order.
    """
    __tablename__ = "book_club_meetings"

    id = Column(String, primary_key=True, default=lambda: f"mtg_{uuid.uuid4().hex[:12]}")
    book_club_id = Column(
        String, ForeignKey("book_clubs.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    scheduled_at = Column(DateTime(timezone=True), nullable=False)
    duration = Column(Integer, nullable=False, server_default="60")  # minutes
    status = Column(String(20), nullable=False, server_default=MeetingStatus.SCHEDULED)
    waiting_room_enabled = Column(Boolean, nullable=False, server_default=text("true"))
    created_by_id = Column(String, ForeignKey("users.id"), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    book_club = relationship("BookClub", back_populates="meetings")
    created_by = relationship("User")
    waiting_participants = relationship("MeetingWaitingParticipant", back_populates="meeting")

    def __repr__(self):
        return f"<BookClubMeeting(id={self.id}, club={self.book_club_id}, status={self.status})>"
