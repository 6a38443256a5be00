"""
Notes API - Mapping Profile Tests
==================================

What:  Tests for the field-copy profiles and the map_to / project helpers.
"""

import uuid
from collections import namedtuple
from datetime import datetime, timezone

import pytest

from notes_api.mappings import map_to, profile, project
from notes_api.models.note import Note
from notes_api.schemas.commands import CreateNoteCommand, UpdateNoteCommand
from notes_api.schemas.note import CreateNoteDto, NoteDetailsVm, NoteLookupDto, UpdateNoteDto


@pytest.fixture
def sample_note():
    return Note(
        id=uuid.uuid4(),
        user_id=uuid.uuid4(),
        title="Groceries",
        details="milk, eggs",
        creation_date=datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc),
        edit_date=None,
    )


class TestProfiles:

    def test_note_to_details_copies_every_field(self, sample_note):
        vm = map_to(NoteDetailsVm, sample_note)

        assert vm.id == sample_note.id
        assert vm.title == "Groceries"
        assert vm.details == "milk, eggs"
        assert vm.creation_date == sample_note.creation_date
        assert vm.edit_date is None

    def test_details_serialize_with_camel_case_names(self, sample_note):
        payload = map_to(NoteDetailsVm, sample_note).model_dump(by_alias=True, mode="json")
        assert set(payload) == {"id", "title", "details", "creationDate", "editDate"}

    def test_note_to_lookup_keeps_only_id_and_title(self, sample_note):
        dto = map_to(NoteLookupDto, sample_note)
        assert dto.model_dump() == {"id": sample_note.id, "title": "Groceries"}

    def test_create_dto_to_command_takes_user_id_from_caller(self):
        user_id = uuid.uuid4()
        command = map_to(CreateNoteCommand, CreateNoteDto(title="t", details="d"), user_id=user_id)
        assert command == CreateNoteCommand(user_id=user_id, title="t", details="d")

    def test_update_dto_to_command(self):
        user_id, note_id = uuid.uuid4(), uuid.uuid4()
        dto = UpdateNoteDto.model_validate({"id": str(note_id), "title": "t"})

        command = map_to(UpdateNoteCommand, dto, user_id=user_id)

        assert command == UpdateNoteCommand(user_id=user_id, id=note_id, title="t", details=None)


class TestProjection:

    def test_project_maps_column_rows_lazily(self):
        Row = namedtuple("Row", ["id", "title"])
        rows = [Row(uuid.uuid4(), "a"), Row(uuid.uuid4(), "b")]

        items = project(rows, Note, NoteLookupDto)

        assert not isinstance(items, list)
        assert [i.title for i in items] == ["a", "b"]

    def test_project_of_nothing_is_empty(self):
        assert list(project([], Note, NoteLookupDto)) == []


class TestRegistry:

    def test_missing_profile_raises_lookup_error(self, sample_note):
        with pytest.raises(LookupError):
            map_to(CreateNoteCommand, sample_note)

    def test_duplicate_profile_is_rejected(self):
        class Source:
            pass

        class Destination:
            pass

        profile(Source, Destination)(lambda obj: Destination())
        with pytest.raises(ValueError):
            profile(Source, Destination)(lambda obj: Destination())
