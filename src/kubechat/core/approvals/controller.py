from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Iterable
from typing import Literal

from kubechat.core.backend.base import Executor, Translation, Translator
from kubechat.core.backend.errors import ExecutionError, TranslationError
from kubechat.core.config.settings import DEFAULT_DESTRUCTIVE_VERBS
from kubechat.core.conversation.log import ConversationLog
from kubechat.core.logging.context import log_context
from kubechat.core.logging.redact import redact_string

from .destructive import classify_command
from .schemas import PendingCommand, Phase

NO_COMMAND_TEXT = "Sorry, I could not generate a kubectl command for that query."
TRANSLATION_FAILED_TEXT = "There was an error contacting the backend."
EXECUTION_FAILED_TEXT = "There was an error executing the command."
EXECUTION_FAILED_DETAIL_TEXT = "There was an error executing the command: {detail}"
DRY_RUN_PREFIX = "[DRY RUN] "
DRY_RUN_RESULT_TEXT = "This is a dry run. No changes were made to the cluster.\nValidation passed! Command would execute successfully."


class ApprovalController:
    """Drives one session's query -> preview -> resolution cycle.

    At most one ``PendingCommand`` exists at a time and the phase is read off
    it, ``idle`` meaning there is none. All state changes happen between
    awaits, so on a single event loop no two transitions interleave. The
    only suspension points are the translator and executor calls; whatever
    they return is applied only if the pending command that issued the call
    is still the current one.

    The controller is the only writer of its ``ConversationLog``.
    """

    def __init__(
        self,
        log: ConversationLog,
        translator: Translator,
        executor: Executor,
        *,
        destructive_verbs: Iterable[str] = DEFAULT_DESTRUCTIVE_VERBS,
        dry_run_mode: Literal["local", "remote"] = "local",
        session_id: str | None = None,
    ) -> None:
        self._log = log
        self._translator = translator
        self._executor = executor
        self._destructive_verbs = tuple(destructive_verbs)
        self._dry_run_mode = dry_run_mode
        self._pending: PendingCommand | None = None
        self.session_id = session_id
        self.logger = logging.getLogger("kubechat.approvals")

    @property
    def log(self) -> ConversationLog:
        return self._log

    @property
    def pending(self) -> PendingCommand | None:
        return self._pending

    @property
    def phase(self) -> Phase:
        if self._pending is None:
            return "idle"
        return self._pending.phase

    def announce(self, content: str) -> None:
        self._log.record(sender="system", content=content)

    async def submit(self, query: str) -> bool:
        """Start a new approval cycle; returns False when the submit is rejected."""
        query = query.strip()
        with log_context(session_id=self.session_id):
            if not query:
                self.logger.info("submit_rejected", extra={"extra_fields": {"reason": "empty_query"}})
                return False
            if self._pending is not None:
                self.logger.info(
                    "submit_rejected",
                    extra={"extra_fields": {"reason": "command_pending", "phase": self.phase}},
                )
                return False

            pending = PendingCommand(original_query=query)
            self._pending = pending
            self._log.record(sender="user", content=query)

        with log_context(session_id=self.session_id, command_id=pending.id):
            self.logger.info("submit_accepted")
            started_at = time.perf_counter()
            try:
                translation = await self._translator.translate(query)
            except asyncio.CancelledError:
                self._call_cancelled(pending, TRANSLATION_FAILED_TEXT, "translation")
                raise
            except TranslationError as exc:
                self._translation_failed(pending, exc)
                return True
            except Exception as exc:
                self.logger.exception("translation_failed", extra={"extra_fields": {"unexpected": True}})
                self._translation_failed(pending, exc, logged=True)
                return True

            duration_ms = int((time.perf_counter() - started_at) * 1000)
            if not self._is_current(pending):
                self._discard_stale("translation")
                return True
            self.logger.info("translation_completed", extra={"extra_fields": {"duration_ms": duration_ms}})
            self._apply_translation(pending, translation)
            return True

    def _apply_translation(self, pending: PendingCommand, translation: Translation | None) -> None:
        command_text = translation.usable_command if translation is not None else None
        if command_text is None:
            self._log.record(sender="system", content=NO_COMMAND_TEXT)
            self._pending = None
            return

        classification = classify_command(command_text, self._destructive_verbs)
        self._pending = pending.model_copy(
            update={
                "proposed_command_text": command_text,
                "is_destructive": classification.is_destructive,
                "matched_verbs": classification.matched_verbs,
                "phase": "preview",
            }
        )
        self.logger.info(
            "command_previewed",
            extra={
                "extra_fields": {
                    "command": redact_string(command_text),
                    "is_destructive": classification.is_destructive,
                    "matched_verbs": classification.matched_verbs,
                }
            },
        )

    def _translation_failed(self, pending: PendingCommand, exc: Exception, logged: bool = False) -> None:
        if not self._is_current(pending):
            self._discard_stale("translation")
            return
        if not logged:
            self.logger.warning("translation_failed", extra={"extra_fields": {"error": str(exc)}})
        self._log.record(sender="system", content=TRANSLATION_FAILED_TEXT, kind="error")
        self._pending = None

    async def execute(self) -> bool:
        return await self._resolve(dry_run=False)

    async def dry_run(self) -> bool:
        return await self._resolve(dry_run=True)

    async def _resolve(self, dry_run: bool) -> bool:
        action = "dry_run" if dry_run else "execute"
        pending = self._pending
        if pending is None or pending.phase != "preview" or pending.proposed_command_text is None:
            self._ignore(action)
            return False

        command_text = pending.proposed_command_text
        pending = pending.model_copy(update={"phase": "executing"})
        self._pending = pending
        content = f"{DRY_RUN_PREFIX}{command_text}" if dry_run else command_text
        self._log.record(sender="system", content=content, kind="command", command_text=command_text)

        with log_context(session_id=self.session_id, command_id=pending.id):
            self.logger.info(
                "command_execution_started",
                extra={"extra_fields": {"dry_run": dry_run, "command": redact_string(command_text)}},
            )
            if dry_run and self._dry_run_mode == "local":
                self._log.record(sender="system", content=DRY_RUN_RESULT_TEXT, kind="result")
                self._pending = None
                self.logger.info("command_execution_completed", extra={"extra_fields": {"status": "dry_run_local"}})
                return True

            started_at = time.perf_counter()
            try:
                outcome = await self._executor.execute(command_text, dry_run)
            except asyncio.CancelledError:
                self._call_cancelled(pending, EXECUTION_FAILED_TEXT, "execution")
                raise
            except ExecutionError as exc:
                self._execution_failed(pending, exc.detail)
                self.logger.warning("command_execution_completed", extra={"extra_fields": {"status": "failed", "error": str(exc)}})
                return True
            except Exception:
                self.logger.exception("command_execution_completed", extra={"extra_fields": {"status": "failed"}})
                self._execution_failed(pending, None)
                return True

            if not self._is_current(pending):
                self._discard_stale("execution")
                return True
            self._log.record(sender="system", content=outcome.result_text, kind="result")
            self._pending = None
            self.logger.info(
                "command_execution_completed",
                extra={
                    "extra_fields": {
                        "status": "ok",
                        "dry_run": dry_run,
                        "duration_ms": int((time.perf_counter() - started_at) * 1000),
                    }
                },
            )
            return True

    def _execution_failed(self, pending: PendingCommand, detail: str | None) -> None:
        if not self._is_current(pending):
            self._discard_stale("execution")
            return
        content = EXECUTION_FAILED_DETAIL_TEXT.format(detail=detail) if detail else EXECUTION_FAILED_TEXT
        self._log.record(sender="system", content=content, kind="error")
        self._pending = None

    def cancel(self) -> bool:
        pending = self._pending
        if pending is None or pending.phase == "executing":
            self._ignore("cancel")
            return False

        if pending.phase == "preview" and pending.proposed_command_text is not None:
            content = f"Command cancelled: {pending.proposed_command_text}"
        else:
            content = f"Request cancelled: {pending.original_query}"
        self._log.record(sender="system", content=content, kind="warning")
        self._pending = None
        with log_context(session_id=self.session_id, command_id=pending.id):
            self.logger.info("command_cancelled", extra={"extra_fields": {"phase": pending.phase}})
        return True

    def _call_cancelled(self, pending: PendingCommand, content: str, outcome: str) -> None:
        # the awaiting task was cancelled; leave the session usable before re-raising
        if not self._is_current(pending):
            self._discard_stale(outcome)
            return
        self.logger.warning("backend_call_cancelled", extra={"extra_fields": {"outcome": outcome}})
        self._log.record(sender="system", content=content, kind="error")
        self._pending = None

    def _is_current(self, pending: PendingCommand) -> bool:
        return self._pending is not None and self._pending.id == pending.id

    def _discard_stale(self, outcome: str) -> None:
        self.logger.info("stale_outcome_discarded", extra={"extra_fields": {"outcome": outcome}})

    def _ignore(self, action: str) -> None:
        with log_context(session_id=self.session_id):
            self.logger.info("event_ignored", extra={"extra_fields": {"action": action, "phase": self.phase}})
