# ebe/crud/__init__.py

from .crud_book_club_member import book_club_member
from .crud_meeting import meeting
from .crud_waiting_participant import waiting_participant
