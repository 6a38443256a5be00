"""
Notes API - Request Objects
============================

One model per operation. Routes build them (filling `user_id` from the bearer
token), the pipeline validates them, and NoteService handles them.

They are intentionally unconstrained: an empty title or an all-zero id is a
legal value here and is rejected by the validators, so every failing field is
reported together instead of Pydantic stopping at the first shape error.
"""

import uuid
from typing import Optional

from pydantic import BaseModel


class CreateNoteCommand(BaseModel):
    user_id: uuid.UUID
    title: Optional[str] = None
    details: Optional[str] = None


class UpdateNoteCommand(BaseModel):
    user_id: uuid.UUID
    id: uuid.UUID
    title: Optional[str] = None
    details: Optional[str] = None


class DeleteNoteCommand(BaseModel):
    user_id: uuid.UUID
    id: uuid.UUID


class GetNoteDetailsQuery(BaseModel):
    user_id: uuid.UUID
    id: uuid.UUID


class GetNoteListQuery(BaseModel):
    user_id: uuid.UUID
