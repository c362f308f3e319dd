# ebe/crud/crud_book_club_member.py
from typing import Optional
from sqlalchemy import and_
from sqlalchemy.orm import Session

from ebe.models.book_club import BookClubMember


class CRUDBookClubMember:
    """Read-only membership directory."""

    def get_membership(
        self, db: Session, *, book_club_id: str, user_id: str
    ) -> Optional[BookClubMember]:
        return (
            db.query(BookClubMember)
            .filter(
                and_(
                    BookClubMember.book_club_id == book_club_id,
                    BookClubMember.user_id == user_id,
                )
            )
            .first()
        )

    def get_role(self, db: Session, *, book_club_id: str, user_id: str) -> Optional[str]:
        """Role string of the user in the club, or None when not a member."""
        membership = self.get_membership(db, book_club_id=book_club_id, user_id=user_id)
        return membership.role if membership else None


book_club_member = CRUDBookClubMember()
