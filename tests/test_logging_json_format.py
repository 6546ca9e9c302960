from __future__ import annotations

import io
import json
import logging

from kubechat.core.logging.context import get_log_context, log_context
from kubechat.core.logging.json_formatter import JSONFormatter
from kubechat.core.logging.redact import redact_string


def test_logging_json_line_with_context() -> None:
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JSONFormatter())

    logger = logging.getLogger("kubechat.test.json")
    logger.handlers = []
    logger.setLevel(logging.INFO)
    logger.propagate = False
    logger.addHandler(handler)

    with log_context(correlation_id="c1", session_id="s1"):
        with log_context(command_id="cmd1"):
            logger.info("command_previewed", extra={"extra_fields": {"is_destructive": True}})

    payload = json.loads(stream.getvalue().strip())
    assert payload["event"] == "command_previewed"
    assert payload["level"] == "INFO"
    assert payload["service"] == "kubechat"
    assert payload["component"] == "test.json"
    assert payload["correlation_id"] == "c1"
    assert payload["session_id"] == "s1"
    assert payload["command_id"] == "cmd1"
    assert payload["is_destructive"] is True
    assert payload["ts"].endswith("Z")
    assert get_log_context() == {}


def test_redact_string_masks_secrets_in_commands() -> None:
    redacted = redact_string("kubectl get pods --token=abc123 --password s3cret -H 'Authorization: Bearer xyz'")

    assert "abc123" not in redacted
    assert "s3cret" not in redacted
    assert "xyz" not in redacted
    assert redacted.startswith("kubectl get pods --token=***")


def test_redact_string_leaves_plain_commands_alone() -> None:
    command = "kubectl scale deployment frontend --replicas=5"

    assert redact_string(command) == command


def test_exception_is_nested_and_extra_fields_cannot_shadow_core_keys() -> None:
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JSONFormatter())

    logger = logging.getLogger("kubechat.approvals")
    saved = (logger.handlers, logger.propagate)
    logger.handlers = [handler]
    logger.propagate = False
    try:
        try:
            raise RuntimeError("executor crashed")
        except RuntimeError:
            logger.exception("command_execution_completed", extra={"extra_fields": {"status": "failed", "event": "spoofed"}})
    finally:
        logger.handlers, logger.propagate = saved

    payload = json.loads(stream.getvalue().strip())
    assert payload["event"] == "command_execution_completed"
    assert payload["component"] == "approvals"
    assert payload["status"] == "failed"
    assert payload["error"]["type"] == "RuntimeError"
    assert payload["error"]["message"] == "executor crashed"
    assert "Traceback" in payload["error"]["stack"]
