from __future__ import annotations

import json as jsonlib

import httpx

from .errors import KubeChatHTTPNetworkError, KubeChatHTTPStatusError

_DEFAULT_TIMEOUT_S = 30.0
_DEFAULT_CONNECT_TIMEOUT_S = 5.0
_DEFAULT_USER_AGENT = "KubeChat/1.0"


def build_timeout(total_s: float | None = None, connect_s: float | None = None) -> httpx.Timeout:
    read_total = max(0.1, total_s if total_s is not None else _DEFAULT_TIMEOUT_S)
    connect = max(0.1, connect_s if connect_s is not None else _DEFAULT_CONNECT_TIMEOUT_S)
    return httpx.Timeout(read_total, connect=min(connect, read_total))


def _safe_url(url: str, redact_url: bool) -> str:
    if redact_url:
        return "[redacted-url]"
    return url


def _decode_body(response: httpx.Response) -> object | None:
    try:
        return response.json()
    except (jsonlib.JSONDecodeError, UnicodeDecodeError):
        return None


async def request_json(
    method: str,
    url: str,
    *,
    json: object | None = None,
    headers: dict[str, str] | None = None,
    timeout: httpx.Timeout | None = None,
    client: httpx.AsyncClient | None = None,
    user_agent: str = _DEFAULT_USER_AGENT,
    redact_url: bool = False,
) -> httpx.Response:
    """Send a single request and return the 2xx response.

    There is no retry: a transport failure or timeout raises
    ``KubeChatHTTPNetworkError`` and a non-2xx status raises
    ``KubeChatHTTPStatusError`` carrying the decoded body, if any.
    """
    merged_headers = {"User-Agent": user_agent, **(headers or {})}
    safe_url = _safe_url(url, redact_url)
    request_timeout = timeout or build_timeout()

    try:
        if client is not None:
            response = await client.request(method, url, headers=merged_headers, json=json, timeout=request_timeout)
        else:
            async with httpx.AsyncClient(timeout=request_timeout) as owned_client:
                response = await owned_client.request(method, url, headers=merged_headers, json=json)
    except httpx.HTTPError as exc:
        raise KubeChatHTTPNetworkError(f"HTTP request error for {safe_url}: {exc.__class__.__name__}") from exc

    status = response.status_code
    if 200 <= status < 300:
        return response
    raise KubeChatHTTPStatusError(f"HTTP status {status} for {safe_url}", status_code=status, body=_decode_body(response))
