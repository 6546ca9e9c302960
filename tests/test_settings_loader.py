from __future__ import annotations

from kubechat.core.config.settings import KubeChatSettings, load_settings


def test_defaults_without_config_file() -> None:
    settings = load_settings()

    assert isinstance(settings, KubeChatSettings)
    assert settings.backend.translate_url == "http://127.0.0.1:8080/api/v1/llm-parse"
    assert settings.backend.execute_url == "http://127.0.0.1:8080/api/v1/execute"
    assert settings.approvals.destructive_verbs == ["delete", "remove", "scale", "patch", "apply"]
    assert settings.approvals.dry_run_mode == "local"
    assert settings.logging.to_file is False


def test_load_yaml_file(tmp_path) -> None:
    sample = tmp_path / "kubechat.yaml"
    sample.write_text(
        "backend:\n"
        "  base_url: http://kubechat-api:8080/\n"
        "  timeout_s: 12\n"
        "approvals:\n"
        "  destructive_verbs: [Delete, drain, delete]\n"
        "  dry_run_mode: remote\n"
        "conversation:\n"
        "  welcome_message: Hi\n"
    )

    settings = load_settings(str(sample))

    assert settings.backend.execute_url == "http://kubechat-api:8080/api/v1/execute"
    assert settings.backend.timeout_s == 12
    assert settings.approvals.destructive_verbs == ["delete", "drain"]
    assert settings.approvals.dry_run_mode == "remote"
    assert settings.conversation.welcome_message == "Hi"


def test_env_overrides_file_values(tmp_path, monkeypatch) -> None:
    sample = tmp_path / "kubechat.yaml"
    sample.write_text("backend:\n  timeout_s: 12\n")
    monkeypatch.setenv("KUBECHAT_CONFIG", str(sample))
    monkeypatch.setenv("KUBECHAT_BACKEND_URL", "http://other:9000")
    monkeypatch.setenv("KUBECHAT_HTTP_CONNECT_TIMEOUT_S", "2.5")
    monkeypatch.setenv("KUBECHAT_DRY_RUN_MODE", "REMOTE")
    monkeypatch.setenv("KUBECHAT_DESTRUCTIVE_VERBS", "delete, cordon")
    monkeypatch.setenv("KUBECHAT_LOG_TO_FILE", "on")

    settings = load_settings()

    assert settings.backend.base_url == "http://other:9000"
    assert settings.backend.timeout_s == 12
    assert settings.backend.connect_timeout_s == 2.5
    assert settings.approvals.dry_run_mode == "remote"
    assert settings.approvals.destructive_verbs == ["delete", "cordon"]
    assert settings.logging.to_file is True


def test_invalid_numeric_env_falls_back(monkeypatch) -> None:
    monkeypatch.setenv("KUBECHAT_HTTP_TIMEOUT_S", "soon")
    monkeypatch.setenv("KUBECHAT_DRY_RUN_MODE", "sometimes")

    settings = load_settings()

    assert settings.backend.timeout_s == 30.0
    assert settings.approvals.dry_run_mode == "local"
