from .client import build_timeout, request_json
from .errors import KubeChatHTTPError, KubeChatHTTPNetworkError, KubeChatHTTPStatusError

__all__ = [
    "build_timeout",
    "request_json",
    "KubeChatHTTPError",
    "KubeChatHTTPNetworkError",
    "KubeChatHTTPStatusError",
]
