# tests/crud/test_book_club_member.py

from ebe.crud import crud_book_club_member
from tests.utils.meeting import setup_club_meeting


def test_get_role_for_each_member(db_session):
    club, _ = setup_club_meeting(db_session)
    directory = crud_book_club_member.book_club_member

    assert directory.get_role(db_session, book_club_id=club.id, user_id="admin_1") == "admin"
    assert directory.get_role(db_session, book_club_id=club.id, user_id="mod_1") == "moderator"
    assert directory.get_role(db_session, book_club_id=club.id, user_id="member_1") == "member"


def test_get_role_for_non_member_is_none(db_session):
    club, _ = setup_club_meeting(db_session)

    role = crud_book_club_member.book_club_member.get_role(
        db_session, book_club_id=club.id, user_id="outsider_1"
    )

    assert role is None
