"""Create book club meeting and waiting room tables

Revision ID: m001_create_meeting_waiting_room
Revises:
Create Date: 2026-10-17 09:12:40.118203

This migration creates:
1. users (display fields only; owned by the auth service)
2. book_clubs and book_club_members
3. book_club_meetings with the waiting_room_enabled flag
4. meeting_waiting_participants, one row per (meeting_id, user_id)
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'm001_create_meeting_waiting_room'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('username', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=True),
        sa.Column('avatar', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    op.create_table(
        'book_clubs',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('is_public', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'book_club_members',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('book_club_id', sa.String(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('role', sa.String(length=20), server_default='member', nullable=False),
        sa.Column('joined_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['book_club_id'], ['book_clubs.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('book_club_id', 'user_id', name='unique_book_club_user'),
    )
    op.create_index('ix_book_club_members_book_club_id', 'book_club_members', ['book_club_id'])
    op.create_index('ix_book_club_members_user_id', 'book_club_members', ['user_id'])

    op.create_table(
        'book_club_meetings',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('book_club_id', sa.String(), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('scheduled_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('duration', sa.Integer(), server_default='60', nullable=False),
        sa.Column('status', sa.String(length=20), server_default='scheduled', nullable=False),
        sa.Column('waiting_room_enabled', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        sa.Column('created_by_id', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['book_club_id'], ['book_clubs.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['created_by_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_book_club_meetings_book_club_id', 'book_club_meetings', ['book_club_id'])

    op.create_table(
        'meeting_waiting_participants',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('meeting_id', sa.String(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('status', sa.String(length=20), server_default='waiting', nullable=False),
        sa.Column('joined_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['meeting_id'], ['book_club_meetings.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('meeting_id', 'user_id', name='unique_meeting_user'),
    )
    op.create_index('ix_meeting_waiting_participants_meeting_id', 'meeting_waiting_participants', ['meeting_id'])
    op.create_index('ix_meeting_waiting_participants_user_id', 'meeting_waiting_participants', ['user_id'])
    # WHERE meeting_id = ? AND status = 'waiting'
    op.create_index(
        'ix_meeting_waiting_participants_meeting_status',
        'meeting_waiting_participants',
        ['meeting_id', 'status'],
    )


def downgrade() -> None:
    op.drop_index('ix_meeting_waiting_participants_meeting_status', table_name='meeting_waiting_participants')
    op.drop_index('ix_meeting_waiting_participants_user_id', table_name='meeting_waiting_participants')
    op.drop_index('ix_meeting_waiting_participants_meeting_id', table_name='meeting_waiting_participants')
    op.drop_table('meeting_waiting_participants')
    op.drop_index('ix_book_club_meetings_book_club_id', table_name='book_club_meetings')
    op.drop_table('book_club_meetings')
    op.drop_index('ix_book_club_members_user_id', table_name='book_club_members')
    op.drop_index('ix_book_club_members_book_club_id', table_name='book_club_members')
    op.drop_table('book_club_members')
    op.drop_table('book_clubs')
    op.drop_index('ix_users_username', table_name='users')
    op.drop_table('users')
