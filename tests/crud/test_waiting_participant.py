# tests/crud/test_waiting_participant.py

from datetime import datetime

import pytest

from ebe.crud import crud_waiting_participant
from ebe.crud.crud_waiting_participant import waiting_participant
from ebe.models import MeetingWaitingParticipant
from tests.utils.meeting import setup_club_meeting


def _naive(value: datetime) -> datetime:
    # SQLite hands datetimes back without tzinfo.
    return value.replace(tzinfo=None)


def test_upsert_creates_waiting_record(db_session):
    # ARRANGE
    _, meeting = setup_club_meeting(db_session)

    # ACT
    record = waiting_participant.upsert_waiting(
        db_session, meeting_id=meeting.id, user_id="member_1"
    )

    # ASSERT
    assert record.id.startswith("mwp_")
    assert record.status == "waiting"
    assert record.meeting_id == meeting.id
    assert record.user.username == "member_1"


def test_upsert_twice_keeps_one_row_and_refreshes_joined_at(db_session, monkeypatch):
    _, meeting = setup_club_meeting(db_session)
    first_time = datetime(2026, 3, 1, 18, 0, 0)
    second_time = datetime(2026, 3, 1, 18, 0, 5)

    monkeypatch.setattr(crud_waiting_participant, "utcnow", lambda: first_time)
    first = waiting_participant.upsert_waiting(db_session, meeting_id=meeting.id, user_id="member_1")
    first_id = first.id

    monkeypatch.setattr(crud_waiting_participant, "utcnow", lambda: second_time)
    second = waiting_participant.upsert_waiting(db_session, meeting_id=meeting.id, user_id="member_1")

    rows = (
        db_session.query(MeetingWaitingParticipant)
        .filter(MeetingWaitingParticipant.meeting_id == meeting.id)
        .all()
    )
    assert len(rows) == 1
    assert second.id == first_id
    assert _naive(second.joined_at) == second_time


def test_upsert_resets_rejected_record_to_waiting(db_session):
    _, meeting = setup_club_meeting(db_session)
    waiting_participant.upsert_waiting(db_session, meeting_id=meeting.id, user_id="member_1")
    waiting_participant.set_status(
        db_session, meeting_id=meeting.id, user_id="member_1", status="rejected"
    )

    record = waiting_participant.upsert_waiting(db_session, meeting_id=meeting.id, user_id="member_1")

    assert record.status == "waiting"


def test_get_waiting_filters_status_and_orders_by_joined_at(db_session, monkeypatch):
    _, meeting = setup_club_meeting(db_session)

    monkeypatch.setattr(crud_waiting_participant, "utcnow", lambda: datetime(2026, 3, 1, 18, 0, 9))
    waiting_participant.upsert_waiting(db_session, meeting_id=meeting.id, user_id="member_2")
    monkeypatch.setattr(crud_waiting_participant, "utcnow", lambda: datetime(2026, 3, 1, 18, 0, 1))
    waiting_participant.upsert_waiting(db_session, meeting_id=meeting.id, user_id="member_1")
    monkeypatch.setattr(crud_waiting_participant, "utcnow", lambda: datetime(2026, 3, 1, 18, 0, 5))
    waiting_participant.upsert_waiting(db_session, meeting_id=meeting.id, user_id="outsider_1")
    waiting_participant.set_status(
        db_session, meeting_id=meeting.id, user_id="outsider_1", status="admitted"
    )

    waiting = waiting_participant.get_waiting(db_session, meeting_id=meeting.id)

    assert [p.user_id for p in waiting] == ["member_1", "member_2"]


def test_set_status_is_idempotent(db_session):
    _, meeting = setup_club_meeting(db_session)
    waiting_participant.upsert_waiting(db_session, meeting_id=meeting.id, user_id="member_1")

    first = waiting_participant.set_status(
        db_session, meeting_id=meeting.id, user_id="member_1", status="admitted"
    )
    second = waiting_participant.set_status(
        db_session, meeting_id=meeting.id, user_id="member_1", status="admitted"
    )

    assert first.status == "admitted"
    assert second is not None
    assert second.status == "admitted"


def test_set_status_without_record_returns_none(db_session):
    _, meeting = setup_club_meeting(db_session)

    result = waiting_participant.set_status(
        db_session, meeting_id=meeting.id, user_id="member_1", status="admitted"
    )

    assert result is None


def test_set_status_rejects_unknown_status(db_session):
    _, meeting = setup_club_meeting(db_session)
    waiting_participant.upsert_waiting(db_session, meeting_id=meeting.id, user_id="member_1")

    with pytest.raises(ValueError):
        waiting_participant.set_status(
            db_session, meeting_id=meeting.id, user_id="member_1", status="not_found"
        )


def test_upsert_on_backend_without_native_upsert_raises(db_session, monkeypatch):
    _, meeting = setup_club_meeting(db_session)
    monkeypatch.setattr(crud_waiting_participant, "_UPSERT_DIALECTS", {})

    with pytest.raises(NotImplementedError):
        waiting_participant.upsert_waiting(db_session, meeting_id=meeting.id, user_id="member_1")

    assert db_session.query(MeetingWaitingParticipant).count() == 0
