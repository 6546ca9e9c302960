from __future__ import annotations

from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, Field

Phase = Literal["idle", "awaiting_translation", "preview", "executing"]
PendingPhase = Literal["awaiting_translation", "preview", "executing"]


class PendingCommand(BaseModel):
    id: str = Field(default_factory=lambda: uuid4().hex)
    original_query: str
    proposed_command_text: str | None = None
    is_destructive: bool = False
    matched_verbs: list[str] = Field(default_factory=list)
    phase: PendingPhase = "awaiting_translation"


class Classification(BaseModel):
    is_destructive: bool
    matched_verbs: list[str] = Field(default_factory=list)
