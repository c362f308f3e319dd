# ebe/schemas/waiting_room.py
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serializes to camelCase, accepts either camelCase or snake_case."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UserDisplay(CamelModel):
    id: str
    username: str
    name: Optional[str] = None
    avatar: Optional[str] = None


class WaitingParticipant(CamelModel):
    id: str
    meeting_id: str
    user_id: str
    status: str
    joined_at: datetime
    user: Optional[UserDisplay] = None


class ParticipantActionRequest(CamelModel):
    """Body of admit / reject."""
    user_id: str = Field(min_length=1)


class JoinWaitingRoomResponse(CamelModel):
    status: Literal["admitted", "waiting"]
    message: str
    participant: Optional[WaitingParticipant] = None


class WaitingParticipantList(CamelModel):
    participants: List[WaitingParticipant]
    total: int


class ParticipantActionResponse(CamelModel):
    message: str
    participant: WaitingParticipant


class AdmitAllResponse(CamelModel):
    message: str
    participants: List[WaitingParticipant]
    total: int


class WaitingRoomStatusResponse(CamelModel):
    status: Literal["waiting", "admitted", "rejected", "not_found"]
    joined_at: Optional[datetime] = None
    message: Optional[str] = None
