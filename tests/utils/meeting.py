from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy.orm import Session

from ebe.models import BookClub, BookClubMeeting, BookClubMember, User


def create_user(db: Session, user_id: str, username: Optional[str] = None) -> User:
    user = User(
        id=user_id,
        username=username or user_id,
        name=f"Reader {user_id}",
        avatar=f"https://cdn.example.com/avatars/{user_id}.png",
    )
    db.add(user)
    db.commit()
    return user


def create_book_club(db: Session, name: str = "Slow Readers") -> BookClub:
    club = BookClub(name=name)
    db.add(club)
    db.commit()
    db.refresh(club)
    return club


def add_member(db: Session, club: BookClub, user_id: str, role: str = "member") -> BookClubMember:
    membership = BookClubMember(book_club_id=club.id, user_id=user_id, role=role)
    db.add(membership)
    db.commit()
    return membership


def create_meeting(
    db: Session,
    club: BookClub,
    *,
    waiting_room_enabled: bool = True,
    created_by_id: Optional[str] = None,
) -> BookClubMeeting:
    meeting = BookClubMeeting(
        book_club_id=club.id,
        title="Chapter 1-5 discussion",
        scheduled_at=datetime.now(timezone.utc) + timedelta(hours=1),
        duration=60,
        status="scheduled",
        waiting_room_enabled=waiting_room_enabled,
        created_by_id=created_by_id,
    )
    db.add(meeting)
    db.commit()
    db.refresh(meeting)
    return meeting


def setup_club_meeting(db: Session, *, waiting_room_enabled: bool = True):
    """
    Club with an admin, a moderator, a plain member and one meeting.

    Returns (club, meeting).
    """
    for user_id in ("admin_1", "mod_1", "member_1", "member_2", "outsider_1"):
        create_user(db, user_id)
    club = create_book_club(db)
    add_member(db, club, "admin_1", role="admin")
    add_member(db, club, "mod_1", role="moderator")
    add_member(db, club, "member_1", role="member")
    add_member(db, club, "member_2", role="member")
    meeting = create_meeting(db, club, waiting_room_enabled=waiting_room_enabled, created_by_id="admin_1")
    return club, meeting
