# ebe/api/v1/api.py

from fastapi import APIRouter
from ebe.api.v1.endpoints import health, meetings, waiting_room

api_router = APIRouter()

api_router.include_router(health.router)
api_router.include_router(meetings.router)
api_router.include_router(waiting_room.router)
