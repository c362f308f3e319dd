# ebe/models/book_club.py
import uuid
from sqlalchemy import (
    Column,
    String,
    Boolean,
    DateTime,
    ForeignKey,
    UniqueConstraint,
    func,
    text,
)
from sqlalchemy.orm import relationship
from ebe.constants.meetings import ClubRole
from ebe.db.base_class import Base


class BookClub(Base):
    __tablename__ = "book_clubs"

    id = Column(String, primary_key=True, default=lambda: f"bc_{uuid.uuid4().hex[:12]}")
    name = Column(String, nullable=False)
    is_public = Column(Boolean, nullable=False, server_default=text("true"))
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    members = relationship("BookClubMember", back_populates="book_club")
    meetings = relationship("BookClubMeeting", back_populates="book_club")


class BookClubMember(Base):
    """
    Membership of a user in a book club.

    role is one of admin, moderator, member.
    """
    __tablename__ = "book_club_members"

    id = Column(String, primary_key=True, default=lambda: f"bcm_{uuid.uuid4().hex[:12]}")
    book_club_id = Column(
        String, ForeignKey("book_clubs.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    role = Column(String(20), nullable=False, server_default=ClubRole.MEMBER)
    joined_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    book_club = relationship("BookClub", back_populates="members")
    user = relationship("User")

    __table_args__ = (
        UniqueConstraint("book_club_id", "user_id", name="unique_book_club_user"),
    )
