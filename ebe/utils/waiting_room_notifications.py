# ebe/utils/waiting_room_notifications.py
"""
Best-effort publisher for waiting-room transitions.

Moderator panels and waiting participants poll the HTTP API; these
pub/sub messages let a realtime gateway push the same changes instead.
A failed publish is logged and never fails the request that caused it.
"""
import json
import logging
from datetime import datetime, timezone
from typing import Optional

from redis import Redis
from redis.exceptions import RedisError

from ebe.core.config import settings

logger = logging.getLogger(__name__)


class WaitingRoomEvent:
    PARTICIPANT_WAITING = "participant_waiting"
    PARTICIPANT_ADMITTED = "participant_admitted"
    PARTICIPANT_REJECTED = "participant_rejected"


class WaitingRoomNotifier:
    def __init__(self, redis_client: Optional[Redis], channel: Optional[str] = None):
        self.redis = redis_client
        self.channel = channel or settings.WAITING_ROOM_CHANNEL

    def publish(
        self,
        *,
        event_type: str,
        meeting_id: str,
        book_club_id: str,
        user_id: str,
        status: str,
    ) -> bool:
        """Returns True when the message reached Redis."""
        if self.redis is None:
            return False

        payload = {
            "type": event_type,
            "meetingId": meeting_id,
            "bookClubId": book_club_id,
            "userId": user_id,
            "status": status,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        try:
            self.redis.publish(self.channel, json.dumps(payload))
        except RedisError as e:
            logger.error(
                f"Failed to publish {event_type} for user {user_id} "
                f"in meeting {meeting_id}: {e}",
                exc_info=True,
            )
            return False
        return True
