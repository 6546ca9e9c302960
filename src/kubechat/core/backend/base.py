from __future__ import annotations

from typing import Protocol

from pydantic import BaseModel


class Translation(BaseModel):
    command_text: str | None = None

    @property
    def usable_command(self) -> str | None:
        if self.command_text is None:
            return None
        cleaned = self.command_text.strip()
        return cleaned or None


class ExecutionOutcome(BaseModel):
    result_text: str


class Translator(Protocol):
    async def translate(self, query: str) -> Translation: ...


class Executor(Protocol):
    async def execute(self, command_text: str, dry_run: bool) -> ExecutionOutcome: ...
