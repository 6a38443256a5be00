"""
Notes API - Note Route Handlers
================================

What:  CRUD endpoints for the caller's notes under /api/{version}/note.
How:   Each route builds a request object with the caller's user id (from the
       bearer token), sends it through the request pipeline, and shapes the
       HTTP response. No route touches the database or checks ownership itself.

Endpoints:
    GET    /api/{version}/note          → 200 NoteListVm
    GET    /api/{version}/note/{id}     → 200 NoteDetailsVm | 404
    POST   /api/{version}/note          → 201 new id        | 400
    PUT    /api/{version}/note          → 204               | 400, 404
    DELETE /api/{version}/note/{id}     → 204               | 404
    All of them → 401 without a valid bearer token.
"""

import logging
import uuid

from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from notes_api.config import settings
from notes_api.database import get_db_session
from notes_api.exceptions import UnsupportedApiVersionError
from notes_api.mappings import map_to
from notes_api.schemas.commands import (
    CreateNoteCommand,
    DeleteNoteCommand,
    GetNoteDetailsQuery,
    GetNoteListQuery,
    UpdateNoteCommand,
)
from notes_api.schemas.note import (
    CreateNoteDto,
    ErrorResponse,
    NoteDetailsVm,
    NoteListVm,
    UpdateNoteDto,
    ValidationFailure,
)
from notes_api.security import get_current_user_id
from notes_api.services.pipeline import pipeline

logger = logging.getLogger(__name__)


async def check_api_version(
    version: str = Path(description="API version, e.g. 1.0"),
) -> str:
    """Reject calls to a version segment that is not configured."""
    supported = settings.api_versions_list
    if version not in supported:
        raise UnsupportedApiVersionError(version=version, supported=supported)
    return version


# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(
    prefix="/api/{version}/note",
    tags=["Note"],
    dependencies=[Depends(check_api_version)],
    responses={
        401: {"description": "Missing or invalid bearer token", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
)


@router.get(
    "",
    response_model=NoteListVm,
    summary="Get the list of notes",
    description="Returns id and title of every note owned by the caller.",
    operation_id="GetAll",
)
async def get_all(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> NoteListVm:
    return await pipeline.send(db, GetNoteListQuery(user_id=user_id))


@router.get(
    "/{id}",
    response_model=NoteDetailsVm,
    responses={404: {"description": "Note not found", "model": ErrorResponse}},
    summary="Get a note by id",
    operation_id="Get",
)
async def get(
    id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> NoteDetailsVm:
    """Notes owned by other users answer 404, the same as unknown ids."""
    return await pipeline.send(db, GetNoteDetailsQuery(user_id=user_id, id=id))


@router.post(
    "",
    response_model=uuid.UUID,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Validation failed", "model": list[ValidationFailure]}},
    summary="Create a note",
    operation_id="Create",
)
async def create(
    body: CreateNoteDto,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> uuid.UUID:
    """
    Sample request:

        POST /api/1.0/note
        {
            "title": "note title",
            "details": "note details"
        }

    Returns the id of the new note.
    """
    command = map_to(CreateNoteCommand, body, user_id=user_id)
    note_id = await pipeline.send(db, command)
    logger.debug("Created note %s for user %s", note_id, user_id)
    return note_id


@router.put(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        400: {"description": "Validation failed", "model": list[ValidationFailure]},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Update a note",
    operation_id="Update",
)
async def update(
    body: UpdateNoteDto,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> Response:
    """
    Sample request:

        PUT /api/1.0/note
        {
            "id": "5b3e9f1e-2c4e-4b0a-9b8e-3a1f2d6c7e90",
            "title": "updated title",
            "details": "updated details"
        }
    """
    command = map_to(UpdateNoteCommand, body, user_id=user_id)
    await pipeline.send(db, command)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"description": "Note not found", "model": ErrorResponse}},
    summary="Delete a note",
    operation_id="Delete",
)
async def delete(
    id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> Response:
    await pipeline.send(db, DeleteNoteCommand(user_id=user_id, id=id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
