from .base import ExecutionOutcome, Executor, Translation, Translator
from .errors import ExecutionError, KubeChatBackendError, TranslationError
from .http_adapters import HTTPExecutor, HTTPTranslator

__all__ = [
    "ExecutionError",
    "ExecutionOutcome",
    "Executor",
    "HTTPExecutor",
    "HTTPTranslator",
    "KubeChatBackendError",
    "Translation",
    "TranslationError",
    "Translator",
]
