from __future__ import annotations

"""Configuration loader for the KubeChat service."""

import os
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

DEFAULT_DESTRUCTIVE_VERBS = ("delete", "remove", "scale", "patch", "apply")

DEFAULT_SUGGESTIONS = [
    "Show all pods in the default namespace",
    "Scale the frontend deployment to 3 replicas",
    "Check for pods in CrashLoopBackOff state",
    "Show cluster resource usage",
]


class BackendSettings(BaseModel):
    base_url: str = "http://127.0.0.1:8080"
    translate_path: str = "/api/v1/llm-parse"
    execute_path: str = "/api/v1/execute"
    health_path: str = "/api/v1/health"
    timeout_s: float = Field(30.0, gt=0)
    connect_timeout_s: float = Field(5.0, gt=0)
    user_agent: str = "KubeChat/1.0"

    def url_for(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    @property
    def translate_url(self) -> str:
        return self.url_for(self.translate_path)

    @property
    def execute_url(self) -> str:
        return self.url_for(self.execute_path)

    @property
    def health_url(self) -> str:
        return self.url_for(self.health_path)


class ApprovalSettings(BaseModel):
    destructive_verbs: list[str] = Field(default_factory=lambda: list(DEFAULT_DESTRUCTIVE_VERBS))
    dry_run_mode: Literal["local", "remote"] = "local"

    @field_validator("destructive_verbs")
    @classmethod
    def _normalize_verbs(cls, value: list[str]) -> list[str]:
        verbs: list[str] = []
        for verb in value:
            normalized = verb.strip().casefold()
            if normalized and normalized not in verbs:
                verbs.append(normalized)
        return verbs


class ConversationSettings(BaseModel):
    welcome_message: Optional[str] = "Welcome to KubeChat! How can I help you manage your Kubernetes cluster today?"
    suggestions: list[str] = Field(default_factory=lambda: list(DEFAULT_SUGGESTIONS))


class LoggingSettings(BaseModel):
    level: str = "INFO"
    to_file: bool = False
    dir: str = str(Path.home() / ".kubechat" / "logs")
    max_bytes: int = 5_000_000
    backup_count: int = 5


class KubeChatSettings(BaseModel):
    backend: BackendSettings = Field(default_factory=BackendSettings)
    approvals: ApprovalSettings = Field(default_factory=ApprovalSettings)
    conversation: ConversationSettings = Field(default_factory=ConversationSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def _get_float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _is_on(raw: str) -> bool:
    return raw.strip().casefold() in {"on", "1", "true", "yes"}


def _apply_env_overrides(settings: KubeChatSettings) -> KubeChatSettings:
    backend = settings.backend
    approvals = settings.approvals
    logging_settings = settings.logging

    base_url = os.getenv("KUBECHAT_BACKEND_URL")
    if base_url:
        backend.base_url = base_url
    backend.timeout_s = _get_float_env("KUBECHAT_HTTP_TIMEOUT_S", backend.timeout_s)
    backend.connect_timeout_s = _get_float_env("KUBECHAT_HTTP_CONNECT_TIMEOUT_S", backend.connect_timeout_s)

    dry_run_mode = os.getenv("KUBECHAT_DRY_RUN_MODE", "").strip().casefold()
    if dry_run_mode in {"local", "remote"}:
        approvals.dry_run_mode = dry_run_mode
    verbs = os.getenv("KUBECHAT_DESTRUCTIVE_VERBS")
    if verbs:
        approvals.destructive_verbs = ApprovalSettings(destructive_verbs=verbs.split(",")).destructive_verbs

    level = os.getenv("KUBECHAT_LOG_LEVEL")
    if level:
        logging_settings.level = level
    to_file = os.getenv("KUBECHAT_LOG_TO_FILE")
    if to_file is not None:
        logging_settings.to_file = _is_on(to_file)
    log_dir = os.getenv("KUBECHAT_LOG_DIR")
    if log_dir:
        logging_settings.dir = log_dir
    return settings


def load_settings(path: Optional[str] = None) -> KubeChatSettings:
    """Load settings from YAML (when given or configured) and apply environment overrides."""
    configured = path or os.getenv("KUBECHAT_CONFIG")
    data: dict = {}
    if configured:
        cfg_path = Path(configured).expanduser()
        with cfg_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    return _apply_env_overrides(KubeChatSettings.model_validate(data))
