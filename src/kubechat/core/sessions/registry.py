from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4

from kubechat.core.approvals.controller import ApprovalController
from kubechat.core.backend.base import Executor, Translator
from kubechat.core.config.settings import KubeChatSettings
from kubechat.core.conversation.log import ConversationLog

from .schemas import SessionView


@dataclass
class ChatSession:
    session_id: str
    log: ConversationLog
    controller: ApprovalController
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def view(self, after_id: int | None = None) -> SessionView:
        return SessionView(
            session_id=self.session_id,
            created_at=self.created_at,
            phase=self.controller.phase,
            pending=self.controller.pending,
            messages=self.log.since(after_id),
            last_message_id=self.log.last_id,
        )


class SessionRegistry:
    """In-memory sessions sharing one translator and one executor."""

    def __init__(self, translator: Translator, executor: Executor, settings: KubeChatSettings | None = None) -> None:
        self.translator = translator
        self.executor = executor
        self.settings = settings or KubeChatSettings()
        self._sessions: dict[str, ChatSession] = {}
        self.logger = logging.getLogger("kubechat.sessions")

    def create(self) -> ChatSession:
        session_id = uuid4().hex
        log = ConversationLog()
        controller = ApprovalController(
            log,
            self.translator,
            self.executor,
            destructive_verbs=self.settings.approvals.destructive_verbs,
            dry_run_mode=self.settings.approvals.dry_run_mode,
            session_id=session_id,
        )
        welcome = self.settings.conversation.welcome_message
        if welcome:
            controller.announce(welcome)
        session = ChatSession(session_id=session_id, log=log, controller=controller)
        self._sessions[session_id] = session
        self.logger.info("session_created", extra={"extra_fields": {"session_id": session_id}})
        return session

    def get(self, session_id: str) -> ChatSession:
        return self._sessions[session_id]

    def list_ids(self) -> list[str]:
        return list(self._sessions)

    def __len__(self) -> int:
        return len(self._sessions)
