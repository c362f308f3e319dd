# ebe/api/v1/endpoints/meetings.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ebe.api import deps
from ebe.constants.meetings import ClubRole
from ebe.core.exceptions import ForbiddenError, NotFoundError
from ebe.crud import crud_meeting, crud_book_club_member
from ebe.schemas.meeting import Meeting, MeetingUpdate, MeetingUpdateResponse
from ebe.schemas.token import TokenPayload

router = APIRouter(prefix="/meetings", tags=["Meetings"])


@router.get("/{meeting_id}", response_model=Meeting)
def get_meeting(
    meeting_id: str,
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Retrieve a meeting, including whether its waiting room is on."""
    meeting = crud_meeting.meeting.get_meeting(db, meeting_id=meeting_id)
    if not meeting:
        raise NotFoundError("Meeting not found")
    return meeting


@router.patch("/{meeting_id}", response_model=MeetingUpdateResponse)
def update_meeting(
    meeting_id: str,
    meeting_in: MeetingUpdate,
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Update a meeting. Allowed for its creator and for club admins/moderators.

    Switching the waiting room off leaves existing waiting records alone;
    members who join afterwards are admitted directly.
    """
    meeting = crud_meeting.meeting.get_meeting(db, meeting_id=meeting_id)
    if not meeting:
        raise NotFoundError("Meeting not found")

    role = crud_book_club_member.book_club_member.get_role(
        db, book_club_id=meeting.book_club_id, user_id=current_user.user_id
    )
    can_update = meeting.created_by_id == current_user.user_id or (
        role is not None and ClubRole.is_privileged(role)
    )
    if not can_update:
        raise ForbiddenError("You do not have permission to update this meeting")

    # Only description may be cleared; other columns are NOT NULL.
    changes = {
        field: value
        for field, value in meeting_in.model_dump(exclude_unset=True).items()
        if value is not None or field == "description"
    }
    updated = crud_meeting.meeting.update(db, db_obj=meeting, obj_in=changes)
    return MeetingUpdateResponse(
        meeting=Meeting.model_validate(updated),
        message="Meeting updated successfully",
    )
