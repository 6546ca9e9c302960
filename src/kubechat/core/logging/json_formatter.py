from __future__ import annotations

import json
import logging
import traceback
from datetime import datetime, timezone

from .context import get_log_context

_ROOT_LOGGER = "kubechat"


def _component(logger_name: str) -> str:
    if logger_name == _ROOT_LOGGER:
        return "root"
    return logger_name.removeprefix(f"{_ROOT_LOGGER}.")


class JSONFormatter(logging.Formatter):
    """One JSON object per line: event name, session/command context, extra fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "service": _ROOT_LOGGER,
            "component": _component(record.name),
            "event": record.getMessage(),
        }
        payload.update(get_log_context())

        extra_fields = getattr(record, "extra_fields", None)
        if isinstance(extra_fields, dict):
            payload.update({key: value for key, value in extra_fields.items() if key not in payload})

        if record.exc_info:
            exc_type, exc_value, exc_tb = record.exc_info
            payload["error"] = {
                "type": exc_type.__name__ if exc_type else "Exception",
                "message": str(exc_value) if exc_value else "",
                "stack": "".join(traceback.format_exception(exc_type, exc_value, exc_tb)),
            }

        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False, default=str)
