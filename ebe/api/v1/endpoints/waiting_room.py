# ebe/api/v1/endpoints/waiting_room.py
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ebe.api import deps
from ebe.constants.meetings import WaitingRoomStatus
from ebe.core.limiter import limiter
from ebe.schemas.token import TokenPayload
from ebe.schemas.waiting_room import (
    AdmitAllResponse,
    JoinWaitingRoomResponse,
    ParticipantActionRequest,
    ParticipantActionResponse,
    WaitingParticipant,
    WaitingParticipantList,
    WaitingRoomStatusResponse,
)
from ebe.services.waiting_room import WaitingRoomService

router = APIRouter(prefix="/meetings/{meeting_id}/waiting-room", tags=["Waiting Room"])


@router.post("/join", response_model=JoinWaitingRoomResponse, response_model_exclude_none=True)
@limiter.limit("10/minute")
def join_waiting_room(
    meeting_id: str,
    request: Request,  # Required for rate limiting
    db: Session = Depends(deps.get_db),
    service: WaitingRoomService = Depends(deps.get_waiting_room_service),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Ask to join a meeting.

    Admins, moderators and everyone in meetings without a waiting room are
    admitted directly. Other members are placed (or placed again) in the
    waiting room.

    **Errors**:
    - 403: Not a member of the book club
    - 404: Meeting not found
    """
    status, participant = service.request_join(
        db, meeting_id=meeting_id, user_id=current_user.user_id
    )

    if status == WaitingRoomStatus.ADMITTED:
        return JoinWaitingRoomResponse(
            status=status,
            message="You can join the meeting directly",
        )

    return JoinWaitingRoomResponse(
        status=status,
        message="You are in the waiting room. The host will admit you shortly.",
        participant=WaitingParticipant.model_validate(participant),
    )


@router.get("/participants", response_model=WaitingParticipantList)
@limiter.limit("60/minute")
def list_waiting_participants(
    meeting_id: str,
    request: Request,
    db: Session = Depends(deps.get_db),
    service: WaitingRoomService = Depends(deps.get_waiting_room_service),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Participants still waiting, oldest first. Admins and moderators only."""
    participants = service.list_waiting(db, meeting_id=meeting_id, caller_id=current_user.user_id)
    return WaitingParticipantList(
        participants=[WaitingParticipant.model_validate(p) for p in participants],
        total=len(participants),
    )


@router.post("/admit", response_model=ParticipantActionResponse)
@limiter.limit("60/minute")
def admit_participant(
    meeting_id: str,
    request: Request,
    body: ParticipantActionRequest,
    db: Session = Depends(deps.get_db),
    service: WaitingRoomService = Depends(deps.get_waiting_room_service),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    participant = service.admit(
        db,
        meeting_id=meeting_id,
        caller_id=current_user.user_id,
        target_user_id=body.user_id,
    )
    return ParticipantActionResponse(
        message="Participant admitted successfully",
        participant=WaitingParticipant.model_validate(participant),
    )


@router.post("/reject", response_model=ParticipantActionResponse)
@limiter.limit("60/minute")
def reject_participant(
    meeting_id: str,
    request: Request,
    body: ParticipantActionRequest,
    db: Session = Depends(deps.get_db),
    service: WaitingRoomService = Depends(deps.get_waiting_room_service),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    participant = service.reject(
        db,
        meeting_id=meeting_id,
        caller_id=current_user.user_id,
        target_user_id=body.user_id,
    )
    return ParticipantActionResponse(
        message="Participant rejected",
        participant=WaitingParticipant.model_validate(participant),
    )


@router.post("/admit-all", response_model=AdmitAllResponse)
@limiter.limit("20/minute")
def admit_all_participants(
    meeting_id: str,
    request: Request,
    db: Session = Depends(deps.get_db),
    service: WaitingRoomService = Depends(deps.get_waiting_room_service),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    admitted = service.admit_all(db, meeting_id=meeting_id, caller_id=current_user.user_id)
    return AdmitAllResponse(
        message=f"Admitted {len(admitted)} participants",
        participants=[WaitingParticipant.model_validate(p) for p in admitted],
        total=len(admitted),
    )


@router.get("/status", response_model=WaitingRoomStatusResponse, response_model_exclude_none=True)
@limiter.limit("60/minute")  # clients poll every few seconds
def get_waiting_room_status(
    meeting_id: str,
    request: Request,
    db: Session = Depends(deps.get_db),
    service: WaitingRoomService = Depends(deps.get_waiting_room_service),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """The caller's own admission status. not_found means they never joined."""
    participant = service.get_status(db, meeting_id=meeting_id, user_id=current_user.user_id)
    if not participant:
        return WaitingRoomStatusResponse(
            status=WaitingRoomStatus.NOT_FOUND,
            message="Not in waiting room",
        )
    return WaitingRoomStatusResponse(status=participant.status, joined_at=participant.joined_at)
