# ebe/models/__init__.py
# Importing every model here registers it on Base.metadata.
from .user import User
from .book_club import BookClub, BookClubMember
from .meeting import BookClubMeeting
from .meeting_waiting_participant import MeetingWaitingParticipant
