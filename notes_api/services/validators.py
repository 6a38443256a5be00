"""
Notes API - Request Validators
===============================

What:  Field-level rules for every request object.
How:   Each validator is a plain function `validator(request) -> list[ValidationFailure]`.
       `VALIDATORS` maps each request type to the validators the pipeline
       runs for it.

Contract:
    - Never mutate the request.
    - Never touch storage. There are no cross-record rules; id uniqueness is
      the database key's job.
    - Report, don't raise. The pipeline collects failures from all
      validators and raises once.

Rules:
    id       (update, delete, get-details)  must not be the all-zero UUID
    userId   (every request)                must not be the all-zero UUID
    title    (create, update)               must not be empty, at most 250 chars
"""

import uuid
from typing import Callable, Dict, List, Optional, Sequence

from notes_api.models.note import TITLE_MAX_LENGTH
from notes_api.schemas.commands import (
    CreateNoteCommand,
    DeleteNoteCommand,
    GetNoteDetailsQuery,
    GetNoteListQuery,
    UpdateNoteCommand,
)
from notes_api.schemas.note import ValidationFailure

EMPTY_ID = uuid.UUID(int=0)

Validator = Callable[[object], List[ValidationFailure]]


# ── Rule helpers ──────────────────────────────────────────────────────────

def _not_empty_id(value: uuid.UUID, field: str, label: str) -> List[ValidationFailure]:
    if value == EMPTY_ID:
        return [
            ValidationFailure(
                field=field,
                message=f"'{label}' must not be equal to '{EMPTY_ID}'.",
            )
        ]
    return []


def _title_rules(value: Optional[str]) -> List[ValidationFailure]:
    if value is None or not value.strip():
        return [ValidationFailure(field="title", message="'Title' must not be empty.")]
    if len(value) > TITLE_MAX_LENGTH:
        return [
            ValidationFailure(
                field="title",
                message=(
                    f"The length of 'Title' must be {TITLE_MAX_LENGTH} characters "
                    f"or fewer. You entered {len(value)} characters."
                ),
            )
        ]
    return []


# ── Validators ────────────────────────────────────────────────────────────

def validate_user_id(request) -> List[ValidationFailure]:
    return _not_empty_id(request.user_id, "userId", "User Id")


def validate_note_id(request) -> List[ValidationFailure]:
    return _not_empty_id(request.id, "id", "Id")


def validate_title(request) -> List[ValidationFailure]:
    return _title_rules(request.title)


VALIDATORS: Dict[type, Sequence[Validator]] = {
    CreateNoteCommand: (validate_title, validate_user_id),
    UpdateNoteCommand: (validate_user_id, validate_note_id, validate_title),
    DeleteNoteCommand: (validate_note_id, validate_user_id),
    GetNoteDetailsQuery: (validate_user_id, validate_note_id),
    GetNoteListQuery: (validate_user_id,),
}
