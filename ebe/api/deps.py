# ebe/api/deps.py
from typing import Generator, Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from redis import Redis

from ebe.core.config import settings
from ebe.core.exceptions import AuthenticationError
from ebe.db.redis import redis_client
from ebe.db.session import SessionLocal
from ebe.schemas.token import TokenPayload
from ebe.services.waiting_room import WaitingRoomService
from ebe.utils.waiting_room_notifications import WaitingRoomNotifier


def get_db() -> Generator:
    """Dependency to get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# Tokens are issued by the auth service; tokenUrl only feeds the OpenAPI docs.
# auto_error is off so a missing token goes through AuthenticationError too.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token", auto_error=False)


def get_current_user(token: Optional[str] = Depends(oauth2_scheme)) -> TokenPayload:
    if not token:
        raise AuthenticationError("Not authenticated")
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
        token_data = TokenPayload(**payload)
    except (JWTError, ValueError):
        # Catches any error from jose or Pydantic validation
        raise AuthenticationError()

    return token_data


def get_redis() -> Redis:
    return redis_client


def get_waiting_room_service(
    redis: Redis = Depends(get_redis),
) -> WaitingRoomService:
    return WaitingRoomService(notifier=WaitingRoomNotifier(redis))
