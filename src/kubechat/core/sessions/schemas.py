from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from kubechat.core.approvals.schemas import PendingCommand, Phase
from kubechat.core.conversation.schemas import Message


class SubmitRequest(BaseModel):
    query: str = Field(min_length=1, max_length=500)


class SessionView(BaseModel):
    session_id: str
    created_at: datetime
    phase: Phase
    pending: PendingCommand | None = None
    messages: list[Message] = Field(default_factory=list)
    last_message_id: int = 0


class ActionResponse(BaseModel):
    accepted: bool
    detail: str | None = None
    session: SessionView


class SuggestionsResponse(BaseModel):
    suggestions: list[str]


class SessionListResponse(BaseModel):
    sessions: list[str]
    count: int
