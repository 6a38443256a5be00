"""
Notes API - Note Service (Command & Query Handlers)
====================================================

What:  One handler per note operation: create, get details, get list,
       update, delete.
How:   Each handler takes the request session and a request object, performs
       a single read and/or a single write, and returns a mapped result.
Who:   Called only through the request pipeline (services/pipeline.py), which
       has already validated the request.

Ownership rule:
    A note that exists but belongs to another user is reported exactly like a
    note that does not exist (NotFoundError). Callers cannot tell the two
    apart, so ids of other users' notes cannot be probed.

Error Handling Strategy:
    Handlers never catch database errors. Anything SQLAlchemy raises
    propagates unchanged to the catch-all handler (500), and the session
    dependency rolls the transaction back. No retries.

Design Decision:
    NoteService is stateless. It receives the session per call, so a single
    instance is shared by every request without locking.
"""

import logging
import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from notes_api.exceptions import NotFoundError
from notes_api.mappings import map_to, project
from notes_api.models.note import Note, utc_now
from notes_api.schemas.commands import (
    CreateNoteCommand,
    DeleteNoteCommand,
    GetNoteDetailsQuery,
    GetNoteListQuery,
    UpdateNoteCommand,
)
from notes_api.schemas.note import NoteDetailsVm, NoteListVm, NoteLookupDto

logger = logging.getLogger(__name__)


class NoteService:
    """
    Handlers for note requests.

    Responsibilities:
        - create_note():       insert a new row, return its id
        - get_note_details():  one owned note as NoteDetailsVm
        - get_note_list():     every owned note as NoteListVm (id + title)
        - update_note():       overwrite title/details, stamp edit_date
        - delete_note():       remove an owned note
    """

    async def _get_owned_note(
        self, db: AsyncSession, note_id: uuid.UUID, user_id: uuid.UUID
    ) -> Note:
        """
        Load a note by id and check its owner.

        Raises:
            NotFoundError: no such note, or it belongs to someone else
        """
        result = await db.execute(select(Note).where(Note.id == note_id))
        note: Optional[Note] = result.scalar_one_or_none()

        if note is None or note.user_id != user_id:
            raise NotFoundError(name=Note.__name__, key=note_id)

        return note

    async def create_note(self, db: AsyncSession, request: CreateNoteCommand) -> uuid.UUID:
        """
        Persist a new note for the caller.

        The id is generated here and the creation date is "now" (UTC).
        edit_date starts as NULL.

        Returns:
            The id of the new note
        """
        note = Note(
            id=uuid.uuid4(),
            user_id=request.user_id,
            title=request.title,
            details=request.details,
            creation_date=utc_now(),
            edit_date=None,
        )
        db.add(note)
        await db.flush()

        logger.info("Note %s created for user %s", note.id, note.user_id)
        return note.id

    async def get_note_details(
        self, db: AsyncSession, request: GetNoteDetailsQuery
    ) -> NoteDetailsVm:
        """
        Return one note owned by the caller.

        Raises:
            NotFoundError: missing or not owned (→ 404)
        """
        note = await self._get_owned_note(db, request.id, request.user_id)
        return map_to(NoteDetailsVm, note)

    async def get_note_list(
        self, db: AsyncSession, request: GetNoteListQuery
    ) -> NoteListVm:
        """
        Return every note owned by the caller as lightweight list items.

        Query plan:
            SELECT id, title FROM notes WHERE user_id = :uid
            ORDER BY creation_date, id
            → idx_notes_user_id; only the two projected columns are read.

        The fixed ordering keeps repeated calls byte-identical when nothing
        changed in between.
        """
        result = await db.execute(
            select(Note.id, Note.title)
            .where(Note.user_id == request.user_id)
            .order_by(Note.creation_date, Note.id)
        )
        return NoteListVm(notes=list(project(result, Note, NoteLookupDto)))

    async def update_note(self, db: AsyncSession, request: UpdateNoteCommand) -> None:
        """
        Overwrite title and details of an owned note and stamp edit_date.

        Raises:
            NotFoundError: missing or not owned (→ 404)
        """
        note = await self._get_owned_note(db, request.id, request.user_id)

        note.title = request.title
        note.details = request.details
        note.edit_date = utc_now()
        await db.flush()

        logger.info("Note %s updated by user %s", note.id, request.user_id)

    async def delete_note(self, db: AsyncSession, request: DeleteNoteCommand) -> None:
        """
        Remove an owned note.

        Raises:
            NotFoundError: missing or not owned (→ 404)
        """
        note = await self._get_owned_note(db, request.id, request.user_id)

        await db.delete(note)
        await db.flush()

        logger.info("Note %s deleted by user %s", request.id, request.user_id)


# ── Singleton Instance ────────────────────────────────────────────────────
note_service = NoteService()
