"""
Notes API - Mapping Profiles
=============================

What:  One-directional field-copy rules between ORM rows, request bodies,
       request objects and view models.
How:   Each profile is a plain function registered for a
       (source type, destination type) pair with the @profile decorator.
       Registration happens at import time, so importing this module is
       enough to make every profile available.

Usage:
    command = map_to(CreateNoteCommand, dto, user_id=user_id)
    vm = map_to(NoteDetailsVm, note)
    items = list(project(rows, Note, NoteLookupDto))

`project` is a generator: it maps one row at a time, so a list endpoint can
feed it a narrow `SELECT id, title` result without building full entities.

Profiles only copy fields (and pass timestamps through). Anything computed
belongs in the service layer.
"""

from typing import Any, Callable, Dict, Iterable, Iterator, Tuple, Type, TypeVar

from notes_api.models.note import Note
from notes_api.schemas.commands import CreateNoteCommand, UpdateNoteCommand
from notes_api.schemas.note import (
    CreateNoteDto,
    NoteDetailsVm,
    NoteLookupDto,
    UpdateNoteDto,
)

T = TypeVar("T")

Profile = Callable[..., Any]

_profiles: Dict[Tuple[type, type], Profile] = {}


def profile(source: type, destination: type) -> Callable[[Profile], Profile]:
    """Register the decorated function as the copy rule from `source` to `destination`."""

    def register(func: Profile) -> Profile:
        key = (source, destination)
        if key in _profiles:
            raise ValueError(
                f"Duplicate mapping profile {source.__name__} -> {destination.__name__}"
            )
        _profiles[key] = func
        return func

    return register


def _resolve(source: type, destination: type) -> Profile:
    for candidate in source.__mro__:
        func = _profiles.get((candidate, destination))
        if func is not None:
            return func
    raise LookupError(
        f"No mapping profile from {source.__name__} to {destination.__name__}"
    )


def map_to(destination: Type[T], obj: Any, **extra: Any) -> T:
    """Materialize one `destination` object from `obj` using the registered profile."""
    return _resolve(type(obj), destination)(obj, **extra)


def project(rows: Iterable[Any], source: type, destination: Type[T]) -> Iterator[T]:
    """
    Apply the `source` -> `destination` profile to each row lazily.

    `rows` may be ORM instances or result rows exposing the same attribute
    names (e.g. `Row(id, title)` from a column-only select).
    """
    func = _resolve(source, destination)
    for row in rows:
        yield func(row)


# ══════════════════════════════════════════════════════════════════════════
# Profiles
# ══════════════════════════════════════════════════════════════════════════


@profile(CreateNoteDto, CreateNoteCommand)
def _create_dto_to_command(dto: CreateNoteDto, *, user_id) -> CreateNoteCommand:
    return CreateNoteCommand(user_id=user_id, title=dto.title, details=dto.details)


@profile(UpdateNoteDto, UpdateNoteCommand)
def _update_dto_to_command(dto: UpdateNoteDto, *, user_id) -> UpdateNoteCommand:
    return UpdateNoteCommand(
        user_id=user_id,
        id=dto.id,
        title=dto.title,
        details=dto.details,
    )


@profile(Note, NoteDetailsVm)
def _note_to_details(note: Note) -> NoteDetailsVm:
    return NoteDetailsVm(
        id=note.id,
        title=note.title,
        details=note.details,
        creation_date=note.creation_date,
        edit_date=note.edit_date,
    )


@profile(Note, NoteLookupDto)
def _note_to_lookup(note: Note) -> NoteLookupDto:
    return NoteLookupDto(id=note.id, title=note.title)
