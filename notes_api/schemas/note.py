"""
Notes API - Pydantic Request/Response Schemas
==============================================

What:  Pydantic models defining the API contract between the browser client
       and the backend.
How:   FastAPI uses these to parse request bodies, serialize responses, and
       generate the OpenAPI document. Field names are snake_case in Python and
       camelCase on the wire (`creation_date` ↔ `creationDate`).

Design Decision:
    Body models here carry no length or emptiness constraints. Those rules
    belong to the validators, which run inside the request pipeline and report
    every failing field in one 400 response. Pydantic only enforces shape
    (types, UUID format).

    The caller's user id never appears in a body model; routes take it from
    the validated bearer token.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_wire_config = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    from_attributes=True,
)


# ══════════════════════════════════════════════════════════════════════════
# Request Bodies - What the client sends
# ══════════════════════════════════════════════════════════════════════════


class CreateNoteDto(BaseModel):
    """Body of POST /api/{version}/note."""
    title: Optional[str] = Field(default=None, description="Note title (1-250 characters)")
    details: Optional[str] = Field(default=None, description="Free-form note text")

    model_config = _wire_config


class UpdateNoteDto(BaseModel):
    """Body of PUT /api/{version}/note. Title and details replace the stored values."""
    id: uuid.UUID = Field(description="Identifier of the note to update")
    title: Optional[str] = Field(default=None, description="New title (1-250 characters)")
    details: Optional[str] = Field(default=None, description="New note text")

    model_config = _wire_config


# ══════════════════════════════════════════════════════════════════════════
# Response Models - What the API returns
# ══════════════════════════════════════════════════════════════════════════


class NoteLookupDto(BaseModel):
    """
    What:  Lightweight list item: id and title only.
    Why:   The list view shows titles; details are fetched per note on demand.
    """
    id: uuid.UUID = Field(description="Unique note identifier")
    title: str = Field(description="Note title")

    model_config = _wire_config


class NoteListVm(BaseModel):
    """Returned by GET /api/{version}/note. Empty `notes` when the user has none."""
    notes: List[NoteLookupDto] = Field(default_factory=list)

    model_config = _wire_config


class NoteDetailsVm(BaseModel):
    """
    What:  Full representation of a single note.
    Who:   Returned by GET /api/{version}/note/{id}.

    `edit_date` is null until the note has been updated at least once.
    """
    id: uuid.UUID = Field(description="Unique note identifier")
    title: str = Field(description="Note title")
    details: Optional[str] = Field(default=None, description="Note text")
    creation_date: datetime = Field(description="When the note was created (UTC)")
    edit_date: Optional[datetime] = Field(
        default=None,
        description="When the note was last updated (UTC); null if never edited",
    )

    model_config = _wire_config


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models
# ══════════════════════════════════════════════════════════════════════════


class ValidationFailure(BaseModel):
    """One failed rule. A 400 response body is a JSON array of these."""
    field: str = Field(description="Wire name of the offending field")
    message: str = Field(description="Human-readable reason")


class ErrorResponse(BaseModel):
    """
    Body of every non-2xx response other than 400 validation failures.

    The message is for humans; clients must not parse it or rely on its
    wording staying stable.
    """
    error: str = Field(description="Error description")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer probes."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
