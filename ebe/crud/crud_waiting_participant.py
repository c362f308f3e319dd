# ebe/crud/crud_waiting_participant.py
"""
Storage for waiting-room records, keyed by (meeting_id, user_id).

Every write is a single statement: the join is an INSERT ... ON CONFLICT
DO UPDATE and admit/reject is one UPDATE, so concurrent writers on the
same row resolve as last-write-wins.
"""
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import and_, update
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from ebe.constants.meetings import WaitingRoomStatus
from ebe.models.meeting_waiting_participant import MeetingWaitingParticipant

_UPSERT_DIALECTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CRUDWaitingParticipant:
    """CRUD operations for MeetingWaitingParticipant."""

    model = MeetingWaitingParticipant

    def get_by_meeting_and_user(
        self, db: Session, *, meeting_id: str, user_id: str
    ) -> Optional[MeetingWaitingParticipant]:
        return (
            db.query(self.model)
            .filter(
                and_(
                    self.model.meeting_id == meeting_id,
                    self.model.user_id == user_id,
                )
            )
            .first()
        )

    def get_waiting(self, db: Session, *, meeting_id: str) -> List[MeetingWaitingParticipant]:
        """All WAITING records for a meeting, first come first served."""
        return (
            db.query(self.model)
            .filter(
                and_(
                    self.model.meeting_id == meeting_id,
                    self.model.status == WaitingRoomStatus.WAITING,
                )
            )
            .order_by(self.model.joined_at.asc())
            .all()
        )

    def upsert_waiting(
        self, db: Session, *, meeting_id: str, user_id: str
    ) -> MeetingWaitingParticipant:
        """
        Put the user in the waiting room.

        Creates the record or, if one exists in any status, resets it to
        WAITING with a fresh joined_at.
        """
        now = utcnow()
        dialect = db.get_bind().dialect.name
        insert = _UPSERT_DIALECTS.get(dialect)

        if insert is None:
            raise NotImplementedError(f"No atomic upsert for the {dialect} dialect")

        stmt = insert(self.model).values(
            id=f"mwp_{uuid.uuid4().hex[:12]}",
            meeting_id=meeting_id,
            user_id=user_id,
            status=WaitingRoomStatus.WAITING,
            joined_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["meeting_id", "user_id"],
            set_={"status": WaitingRoomStatus.WAITING, "joined_at": now},
        )
        db.execute(stmt)
        db.commit()

        return self.get_by_meeting_and_user(db, meeting_id=meeting_id, user_id=user_id)

    def set_status(
        self, db: Session, *, meeting_id: str, user_id: str, status: str
    ) -> Optional[MeetingWaitingParticipant]:
        """
        Overwrite the status of an existing record.

        Returns None when there is no record for (meeting_id, user_id).
        Setting the status a record already has is not an error.
        """
        if not WaitingRoomStatus.is_valid(status):
            raise ValueError(f"Invalid waiting-room status: {status}")

        stmt = (
            update(self.model)
            .where(
                and_(
                    self.model.meeting_id == meeting_id,
                    self.model.user_id == user_id,
                )
            )
            .values(status=status)
            .execution_options(synchronize_session=False)
        )
        result = db.execute(stmt)
        db.commit()

        if not result.rowcount:
            return None
        return self.get_by_meeting_and_user(db, meeting_id=meeting_id, user_id=user_id)


waiting_participant = CRUDWaitingParticipant()
