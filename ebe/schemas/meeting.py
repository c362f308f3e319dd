# ebe/schemas/meeting.py
from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from ebe.constants.meetings import MeetingStatus
from ebe.schemas.waiting_room import CamelModel


class Meeting(CamelModel):
    id: str
    book_club_id: str
    title: str
    description: Optional[str] = None
    scheduled_at: datetime
    duration: int
    status: str
    waiting_room_enabled: bool
    created_by_id: Optional[str] = None


class MeetingUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    scheduled_at: Optional[datetime] = None
    duration: Optional[int] = Field(default=None, ge=15, le=480)
    status: Optional[str] = None
    waiting_room_enabled: Optional[bool] = None

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v not in MeetingStatus.all_values():
            raise ValueError(f"status must be one of {MeetingStatus.all_values()}")
        return v


class MeetingUpdateResponse(CamelModel):
    meeting: Meeting
    message: str
