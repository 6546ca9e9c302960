from __future__ import annotations

import re

# kubectl flags such as --token=abc, --password abc, --client-key=/path
_SECRET_FLAG_RE = re.compile(r"(?i)(--[\w-]*(?:token|password|secret|key)[\w-]*)(=|\s+)([^\s]+)")
_SECRET_VALUE_RE = re.compile(r"(?i)\b(token|key|secret|password)(\s*[=:]\s*)([^\s,;]+)")
_BEARER_RE = re.compile(r"(?i)(bearer\s+)([^\s]+)")


def redact_string(s: str) -> str:
    redacted = _SECRET_FLAG_RE.sub(lambda m: f"{m.group(1)}{m.group(2)}***", s)
    redacted = _SECRET_VALUE_RE.sub(lambda m: f"{m.group(1)}{m.group(2)}***", redacted)
    redacted = _BEARER_RE.sub(lambda m: f"{m.group(1)}***", redacted)
    return redacted
