from __future__ import annotations

import json
import logging

import httpx

from kubechat.core.config.settings import BackendSettings
from kubechat.core.http.client import build_timeout, request_json
from kubechat.core.http.errors import KubeChatHTTPError, KubeChatHTTPStatusError

from .base import ExecutionOutcome, Translation
from .errors import ExecutionError, TranslationError

logger = logging.getLogger("kubechat.backend")


def _backend_detail(exc: KubeChatHTTPError) -> str | None:
    if not isinstance(exc, KubeChatHTTPStatusError) or not isinstance(exc.body, dict):
        return None
    parts = [str(exc.body[key]) for key in ("error", "details") if exc.body.get(key)]
    return ": ".join(parts) or None


class HTTPTranslator:
    """Posts ``{"query": ...}`` to the translation endpoint."""

    def __init__(
        self,
        url: str,
        *,
        timeout: httpx.Timeout | None = None,
        client: httpx.AsyncClient | None = None,
        user_agent: str = "KubeChat/1.0",
    ) -> None:
        self.url = url
        self.timeout = timeout or build_timeout()
        self.client = client
        self.user_agent = user_agent

    @classmethod
    def from_settings(cls, settings: BackendSettings, client: httpx.AsyncClient | None = None) -> "HTTPTranslator":
        return cls(
            settings.translate_url,
            timeout=build_timeout(settings.timeout_s, settings.connect_timeout_s),
            client=client,
            user_agent=settings.user_agent,
        )

    async def translate(self, query: str) -> Translation:
        try:
            response = await request_json(
                "POST",
                self.url,
                json={"query": query},
                timeout=self.timeout,
                client=self.client,
                user_agent=self.user_agent,
            )
        except KubeChatHTTPError as exc:
            raise TranslationError(f"translation request failed: {exc}", detail=_backend_detail(exc)) from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise TranslationError("translation response is not JSON") from exc
        if not isinstance(body, dict):
            raise TranslationError("translation response is not an object")

        command = body.get("kubectl_command", body.get("commandText"))
        if command is not None and not isinstance(command, str):
            raise TranslationError("translation response has a non-string command")
        return Translation(command_text=command)


class HTTPExecutor:
    """Posts ``{"command": ..., "dry_run": ...}`` to the execution endpoint."""

    def __init__(
        self,
        url: str,
        *,
        timeout: httpx.Timeout | None = None,
        client: httpx.AsyncClient | None = None,
        user_agent: str = "KubeChat/1.0",
    ) -> None:
        self.url = url
        self.timeout = timeout or build_timeout()
        self.client = client
        self.user_agent = user_agent

    @classmethod
    def from_settings(cls, settings: BackendSettings, client: httpx.AsyncClient | None = None) -> "HTTPExecutor":
        return cls(
            settings.execute_url,
            timeout=build_timeout(settings.timeout_s, settings.connect_timeout_s),
            client=client,
            user_agent=settings.user_agent,
        )

    async def execute(self, command_text: str, dry_run: bool) -> ExecutionOutcome:
        try:
            response = await request_json(
                "POST",
                self.url,
                json={"command": command_text, "dry_run": dry_run},
                timeout=self.timeout,
                client=self.client,
                user_agent=self.user_agent,
            )
        except KubeChatHTTPError as exc:
            raise ExecutionError(f"execution request failed: {exc}", detail=_backend_detail(exc)) from exc

        try:
            body = response.json()
        except ValueError:
            logger.warning("execution_response_not_json", extra={"extra_fields": {"status": response.status_code}})
            return ExecutionOutcome(result_text=response.text)
        return ExecutionOutcome(result_text=result_text_from_body(body))


def result_text_from_body(body: object) -> str:
    if isinstance(body, dict):
        for key in ("result", "output"):
            value = body.get(key)
            if value:
                return value if isinstance(value, str) else json.dumps(value, indent=2)
    return json.dumps(body, indent=2)
