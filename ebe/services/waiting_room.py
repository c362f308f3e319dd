# ebe/services/waiting_room.py
"""
Waiting-room admission for book-club video meetings.

Per (meeting, user) the record moves NOT_PRESENT -> WAITING -> ADMITTED or
REJECTED. Joining again from any state puts the user back to WAITING.
Admins and moderators skip the waiting room and decide for everyone else.
"""
import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from ebe.constants.meetings import ClubRole, WaitingRoomStatus
from ebe.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from ebe.crud.crud_book_club_member import CRUDBookClubMember, book_club_member
from ebe.crud.crud_meeting import CRUDMeeting, meeting as meeting_directory
from ebe.crud.crud_waiting_participant import CRUDWaitingParticipant, waiting_participant
from ebe.models.meeting import BookClubMeeting
from ebe.models.meeting_waiting_participant import MeetingWaitingParticipant
from ebe.utils.waiting_room_notifications import WaitingRoomEvent, WaitingRoomNotifier

logger = logging.getLogger(__name__)


class WaitingRoomService:
    def __init__(
        self,
        notifier: Optional[WaitingRoomNotifier] = None,
        meetings: CRUDMeeting = meeting_directory,
        memberships: CRUDBookClubMember = book_club_member,
        participants: CRUDWaitingParticipant = waiting_participant,
    ):
        self.notifier = notifier
        self.meetings = meetings
        self.memberships = memberships
        self.participants = participants

    # ==================== Authorization ====================

    def resolve_role(self, db: Session, *, book_club_id: str, user_id: str) -> str:
        """admin, moderator, member, or none for non-members."""
        role = self.memberships.get_role(db, book_club_id=book_club_id, user_id=user_id)
        return role or ClubRole.NONE

    def _get_meeting_or_404(self, db: Session, meeting_id: str) -> BookClubMeeting:
        meeting = self.meetings.get_meeting(db, meeting_id=meeting_id)
        if not meeting:
            raise NotFoundError("Meeting not found", details={"meeting_id": meeting_id})
        return meeting

    def _require_privileged(
        self, db: Session, *, meeting: BookClubMeeting, caller_id: str, action: str
    ) -> None:
        role = self.resolve_role(db, book_club_id=meeting.book_club_id, user_id=caller_id)
        if not ClubRole.is_privileged(role):
            logger.warning(
                f"User {caller_id} (role={role}) tried to {action} in meeting {meeting.id}"
            )
            raise ForbiddenError(f"Only admins and moderators can {action}")

    # ==================== Operations ====================

    def request_join(
        self, db: Session, *, meeting_id: str, user_id: str
    ) -> Tuple[str, Optional[MeetingWaitingParticipant]]:
        """
        Returns (ADMITTED, None) when the user may enter directly, otherwise
        (WAITING, record).
        """
        meeting = self._get_meeting_or_404(db, meeting_id)

        role = self.resolve_role(db, book_club_id=meeting.book_club_id, user_id=user_id)
        if role == ClubRole.NONE:
            raise ForbiddenError("You must be a member to join this meeting")

        if not meeting.waiting_room_enabled or ClubRole.is_privileged(role):
            logger.info(f"User {user_id} admitted directly to meeting {meeting_id} (role={role})")
            return WaitingRoomStatus.ADMITTED, None

        participant = self.participants.upsert_waiting(
            db, meeting_id=meeting_id, user_id=user_id
        )
        logger.info(f"User {user_id} is waiting for admission to meeting {meeting_id}")

        self._notify(WaitingRoomEvent.PARTICIPANT_WAITING, meeting, participant)
        return WaitingRoomStatus.WAITING, participant

    def list_waiting(
        self, db: Session, *, meeting_id: str, caller_id: str
    ) -> List[MeetingWaitingParticipant]:
        meeting = self._get_meeting_or_404(db, meeting_id)
        self._require_privileged(
            db, meeting=meeting, caller_id=caller_id, action="view waiting participants"
        )
        return self.participants.get_waiting(db, meeting_id=meeting_id)

    def admit(
        self, db: Session, *, meeting_id: str, caller_id: str, target_user_id: str
    ) -> MeetingWaitingParticipant:
        return self._decide(
            db,
            meeting_id=meeting_id,
            caller_id=caller_id,
            target_user_id=target_user_id,
            status=WaitingRoomStatus.ADMITTED,
            action="admit participants",
        )

    def reject(
        self, db: Session, *, meeting_id: str, caller_id: str, target_user_id: str
    ) -> MeetingWaitingParticipant:
        return self._decide(
            db,
            meeting_id=meeting_id,
            caller_id=caller_id,
            target_user_id=target_user_id,
            status=WaitingRoomStatus.REJECTED,
            action="reject participants",
        )

    def admit_all(
        self, db: Session, *, meeting_id: str, caller_id: str
    ) -> List[MeetingWaitingParticipant]:
        """
        Admit everyone on a snapshot of the waiting list.

        Each admission is its own single-row update; a participant whose
        status changed after the snapshot is simply admitted again.
        """
        meeting = self._get_meeting_or_404(db, meeting_id)
        self._require_privileged(
            db, meeting=meeting, caller_id=caller_id, action="admit participants"
        )

        waiting_user_ids = [
            p.user_id for p in self.participants.get_waiting(db, meeting_id=meeting_id)
        ]

        admitted = []
        for user_id in waiting_user_ids:
            participant = self.participants.set_status(
                db, meeting_id=meeting_id, user_id=user_id, status=WaitingRoomStatus.ADMITTED
            )
            if participant:
                admitted.append(participant)
                self._notify(WaitingRoomEvent.PARTICIPANT_ADMITTED, meeting, participant)

        logger.info(f"User {caller_id} admitted {len(admitted)} participants to meeting {meeting_id}")
        return admitted

    def get_status(
        self, db: Session, *, meeting_id: str, user_id: str
    ) -> Optional[MeetingWaitingParticipant]:
        """The caller's own record, or None if they never joined."""
        return self.participants.get_by_meeting_and_user(
            db, meeting_id=meeting_id, user_id=user_id
        )

    # ==================== Helpers ====================

    def _decide(
        self,
        db: Session,
        *,
        meeting_id: str,
        caller_id: str,
        target_user_id: str,
        status: str,
        action: str,
    ) -> MeetingWaitingParticipant:
        if not target_user_id:
            raise ValidationError("userId is required", field="userId")

        meeting = self._get_meeting_or_404(db, meeting_id)
        self._require_privileged(db, meeting=meeting, caller_id=caller_id, action=action)

        participant = self.participants.set_status(
            db, meeting_id=meeting_id, user_id=target_user_id, status=status
        )
        if not participant:
            raise NotFoundError(
                "Participant not found in waiting room",
                details={"meeting_id": meeting_id, "user_id": target_user_id},
            )

        logger.info(
            f"User {caller_id} set {target_user_id} to {status} in meeting {meeting_id}"
        )
        event_type = (
            WaitingRoomEvent.PARTICIPANT_ADMITTED
            if status == WaitingRoomStatus.ADMITTED
            else WaitingRoomEvent.PARTICIPANT_REJECTED
        )
        self._notify(event_type, meeting, participant)
        return participant

    def _notify(
        self, event_type: str, meeting: BookClubMeeting, participant: MeetingWaitingParticipant
    ) -> None:
        if self.notifier is None:
            return
        self.notifier.publish(
            event_type=event_type,
            meeting_id=meeting.id,
            book_club_id=meeting.book_club_id,
            user_id=participant.user_id,
            status=participant.status,
        )
