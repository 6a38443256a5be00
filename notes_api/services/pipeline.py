"""
Notes API - Request Pipeline
=============================

What:  The single entry point routes use to run an operation.
How:   `send(db, request)` validates the request against every validator
       registered for its type, then awaits the handler registered for it.

Flow:
    ┌──────────┐    ┌──────────────────────┐    ┌───────────┐
    │  Route   │───▶│  validators (all)    │───▶│  handler  │
    └──────────┘    │  failures? → raise   │    └───────────┘
                    └──────────────────────┘

    - Failures from all validators are accumulated, never short-circuited.
    - On any failure a ValidationError is raised and the handler body never runs.
    - On success the handler's result is returned unchanged.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from notes_api.exceptions import ValidationError
from notes_api.schemas.commands import (
    CreateNoteCommand,
    DeleteNoteCommand,
    GetNoteDetailsQuery,
    GetNoteListQuery,
    UpdateNoteCommand,
)
from notes_api.schemas.note import ValidationFailure
from notes_api.services.note_service import note_service
from notes_api.services.validators import VALIDATORS, Validator

logger = logging.getLogger(__name__)

Handler = Callable[[AsyncSession, Any], Awaitable[Any]]


class RequestPipeline:
    """
    Dispatches request objects to their handlers behind validation.

    Both registries are keyed by the request's concrete type. A type without
    validators is passed straight through; a type without a handler is a
    programming error and raises LookupError.
    """

    def __init__(
        self,
        handlers: Mapping[type, Handler],
        validators: Mapping[type, Sequence[Validator]],
    ):
        self._handlers: Dict[type, Handler] = dict(handlers)
        self._validators: Dict[type, Sequence[Validator]] = dict(validators)

    def validate(self, request: Any) -> List[ValidationFailure]:
        """Run every validator registered for the request's type and collect failures."""
        failures: List[ValidationFailure] = []
        for validator in self._validators.get(type(request), ()):
            failures.extend(validator(request))
        return failures

    async def send(self, db: AsyncSession, request: Any) -> Any:
        request_type = type(request)
        handler = self._handlers.get(request_type)
        if handler is None:
            raise LookupError(f"No handler registered for {request_type.__name__}")

        failures = self.validate(request)
        if failures:
            logger.debug(
                "%s rejected with %d validation failure(s)",
                request_type.__name__,
                len(failures),
            )
            raise ValidationError(failures, context={"request": request_type.__name__})

        return await handler(db, request)


# ── Singleton Instance ────────────────────────────────────────────────────
pipeline = RequestPipeline(
    handlers={
        CreateNoteCommand: note_service.create_note,
        UpdateNoteCommand: note_service.update_note,
        DeleteNoteCommand: note_service.delete_note,
        GetNoteDetailsQuery: note_service.get_note_details,
        GetNoteListQuery: note_service.get_note_list,
    },
    validators=VALIDATORS,
)
