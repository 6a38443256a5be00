"""
Notes API - Note SQLAlchemy Model
==================================

What:  ORM model representing the `notes` table.
How:   Inherits from the project's DeclarativeBase; Alembic reads it for migrations.
Who:   Used by NoteService for CRUD operations and by the mapping profiles.

Table Design:
    - id: UUID primary key, generated in Python by the create handler.
      A unique index mirrors the key constraint explicitly; the database key
      is the only thing enforcing id uniqueness.
    - user_id: owner of the note. Indexed because every query filters on it.
    - title: bounded to 250 characters, the same limit the validators enforce.
    - details: free-form text, may be NULL.
    - creation_date / edit_date: UTC, timezone-aware. edit_date stays NULL
      until the first update.

Generic `Uuid` / `DateTime(timezone=True)` types are used so the same model
runs on PostgreSQL (native UUID, TIMESTAMPTZ) and SQLite (tests).
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from notes_api.database import Base

TITLE_MAX_LENGTH = 250


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Note(Base):
    """
    A title + details text record owned by exactly one user.

    Lifecycle:
        1. Created by NoteService.create_note (edit_date = NULL)
        2. Title, details and edit_date rewritten by NoteService.update_note
        3. Removed by NoteService.delete_note

    Query Patterns:
        - List a user's notes: SELECT id, title WHERE user_id = :uid
          → idx_notes_user_id
        - Single note: SELECT ... WHERE id = :id → primary key
    """

    __tablename__ = "notes"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        nullable=False,
    )

    title: Mapped[str] = mapped_column(
        String(TITLE_MAX_LENGTH),
        nullable=False,
    )

    details: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        default=None,
    )

    creation_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    edit_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    __table_args__ = (
        Index("ix_notes_id", "id", unique=True),
        Index("idx_notes_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<Note(id={self.id}, user_id={self.user_id}, "
            f"title='{self.title}')>"
        )
