from __future__ import annotations

import asyncio

import pytest

from kubechat.core.backend.base import ExecutionOutcome, Translation
from kubechat.core.backend.errors import ExecutionError, TranslationError


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KUBECHAT_LOG_TO_FILE", "off")
    for name in (
        "KUBECHAT_CONFIG",
        "KUBECHAT_BACKEND_URL",
        "KUBECHAT_DRY_RUN_MODE",
        "KUBECHAT_DESTRUCTIVE_VERBS",
        "KUBECHAT_HTTP_TIMEOUT_S",
        "KUBECHAT_HTTP_CONNECT_TIMEOUT_S",
    ):
        monkeypatch.delenv(name, raising=False)


class FakeTranslator:
    """Answers from a query -> command map; ``fail`` makes every call raise."""

    def __init__(self, commands: dict[str, str | None] | None = None, fail: bool = False) -> None:
        self.commands = commands or {}
        self.fail = fail
        self.queries: list[str] = []

    async def translate(self, query: str) -> Translation:
        self.queries.append(query)
        if self.fail:
            raise TranslationError("connection refused")
        return Translation(command_text=self.commands.get(query))


class GatedTranslator:
    """Blocks every call until ``release`` or ``reject`` is called."""

    def __init__(self) -> None:
        self.queries: list[str] = []
        self._gate = asyncio.Event()
        self._result: Translation | None = None
        self._error: Exception | None = None

    async def translate(self, query: str) -> Translation:
        self.queries.append(query)
        await self._gate.wait()
        if self._error is not None:
            raise self._error
        return self._result or Translation()

    def release(self, command_text: str | None) -> None:
        self._result = Translation(command_text=command_text)
        self._gate.set()

    def reject(self, error: Exception) -> None:
        self._error = error
        self._gate.set()


class FakeExecutor:
    def __init__(self, result_text: str = "Operation successful", error: ExecutionError | None = None) -> None:
        self.result_text = result_text
        self.error = error
        self.calls: list[tuple[str, bool]] = []

    async def execute(self, command_text: str, dry_run: bool) -> ExecutionOutcome:
        self.calls.append((command_text, dry_run))
        if self.error is not None:
            raise self.error
        return ExecutionOutcome(result_text=self.result_text)


class GatedExecutor(FakeExecutor):
    def __init__(self, result_text: str = "Operation successful") -> None:
        super().__init__(result_text=result_text)
        self.gate = asyncio.Event()

    async def execute(self, command_text: str, dry_run: bool) -> ExecutionOutcome:
        self.calls.append((command_text, dry_run))
        await self.gate.wait()
        return ExecutionOutcome(result_text=self.result_text)
