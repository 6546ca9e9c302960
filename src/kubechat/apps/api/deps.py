from __future__ import annotations

from functools import lru_cache

import httpx

from kubechat.core.backend.http_adapters import HTTPExecutor, HTTPTranslator
from kubechat.core.config.settings import KubeChatSettings, load_settings
from kubechat.core.http.client import build_timeout
from kubechat.core.sessions.registry import SessionRegistry


@lru_cache(maxsize=1)
def get_settings() -> KubeChatSettings:
    return load_settings()


@lru_cache(maxsize=1)
def get_http_client() -> httpx.AsyncClient:
    backend = get_settings().backend
    return httpx.AsyncClient(
        timeout=build_timeout(backend.timeout_s, backend.connect_timeout_s),
        headers={"User-Agent": backend.user_agent},
    )


async def close_http_client() -> None:
    if get_http_client.cache_info().currsize == 0:
        return
    client = get_http_client()
    get_http_client.cache_clear()
    await client.aclose()


@lru_cache(maxsize=1)
def get_session_registry() -> SessionRegistry:
    settings = get_settings()
    client = get_http_client()
    return SessionRegistry(
        translator=HTTPTranslator.from_settings(settings.backend, client=client),
        executor=HTTPExecutor.from_settings(settings.backend, client=client),
        settings=settings,
    )
