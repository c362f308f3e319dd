# tests/api/v1/test_meetings.py

from unittest.mock import MagicMock

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from ebe.api import deps
from ebe.main import app
from tests.utils.auth import get_user_authentication_headers as auth
from tests.utils.meeting import create_user, add_member, setup_club_meeting


def test_get_meeting(db_session, test_client: TestClient):
    club, meeting = setup_club_meeting(db_session)

    response = test_client.get(f"/api/v1/meetings/{meeting.id}", headers=auth("member_1"))

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == meeting.id
    assert data["bookClubId"] == club.id
    assert data["waitingRoomEnabled"] is True


def test_get_meeting_not_found(db_session, test_client: TestClient):
    response = test_client.get("/api/v1/meetings/mtg_missing", headers=auth("member_1"))

    assert response.status_code == 404


def test_moderator_turns_off_waiting_room(db_session, test_client: TestClient):
    _, meeting = setup_club_meeting(db_session)

    response = test_client.patch(
        f"/api/v1/meetings/{meeting.id}",
        json={"waitingRoomEnabled": False},
        headers=auth("mod_1"),
    )

    assert response.status_code == 200
    assert response.json()["meeting"]["waitingRoomEnabled"] is False

    join = test_client.post(
        f"/api/v1/meetings/{meeting.id}/waiting-room/join", headers=auth("member_1")
    )
    assert join.json()["status"] == "admitted"


def test_creator_can_update_meeting(db_session, test_client: TestClient):
    club, meeting = setup_club_meeting(db_session)
    create_user(db_session, "host_1")
    add_member(db_session, club, "host_1", role="member")
    meeting.created_by_id = "host_1"
    db_session.commit()

    response = test_client.patch(
        f"/api/v1/meetings/{meeting.id}",
        json={"title": "Finale", "status": "cancelled"},
        headers=auth("host_1"),
    )

    assert response.status_code == 200
    assert response.json()["meeting"]["title"] == "Finale"
    assert response.json()["meeting"]["status"] == "cancelled"


def test_member_cannot_update_meeting(db_session, test_client: TestClient):
    _, meeting = setup_club_meeting(db_session)

    response = test_client.patch(
        f"/api/v1/meetings/{meeting.id}",
        json={"waitingRoomEnabled": False},
        headers=auth("member_1"),
    )

    assert response.status_code == 403


def test_update_rejects_out_of_range_duration(db_session, test_client: TestClient):
    _, meeting = setup_club_meeting(db_session)

    response = test_client.patch(
        f"/api/v1/meetings/{meeting.id}",
        json={"duration": 5},
        headers=auth("admin_1"),
    )

    assert response.status_code == 400



def test_update_rejects_unknown_status(db_session, test_client: TestClient):
    _, meeting = setup_club_meeting(db_session)

    response = test_client.patch(
        f"/api/v1/meetings/{meeting.id}",
        json={"status": "paused"},
        headers=auth("admin_1"),
    )

    assert response.status_code == 400
    assert response.json()["error"]["category"] == "validation_error"


def test_health(test_client: TestClient):
    response = test_client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_database_health_failure_returns_503(test_client: TestClient):
    broken_session = MagicMock()
    broken_session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("db gone"))
    app.dependency_overrides[deps.get_db] = lambda: broken_session

    response = test_client.get("/api/v1/health/db")

    assert response.status_code == 503
    assert response.headers["retry-after"] == "30"
    error = response.json()["error"]
    assert error["category"] == "database_error"
    assert error["component"] == "database"
