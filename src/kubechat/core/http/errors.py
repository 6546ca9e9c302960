from __future__ import annotations


class KubeChatHTTPError(RuntimeError):
    """Base error for shared HTTP client operations."""


class KubeChatHTTPStatusError(KubeChatHTTPError):
    def __init__(self, message: str, status_code: int | None = None, body: object | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class KubeChatHTTPNetworkError(KubeChatHTTPError):
    """Raised on transport failures, timeouts included."""
