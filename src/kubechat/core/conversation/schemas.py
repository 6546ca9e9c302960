from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Sender = Literal["user", "system"]
MessageKind = Literal["plain", "command", "result", "error", "warning"]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Message(BaseModel):
    """One transcript entry. Frozen once built."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=1)
    content: str
    sender: Sender
    kind: MessageKind = "plain"
    created_at: datetime = Field(default_factory=_utc_now)
    command_text: str | None = None
