from __future__ import annotations


class KubeChatBackendError(RuntimeError):
    """Base error for the translation and execution services."""

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(message)
        self.detail = detail


class TranslationError(KubeChatBackendError):
    """Translator unreachable or returned a malformed response."""


class ExecutionError(KubeChatBackendError):
    """Executor unreachable or the command itself failed."""
