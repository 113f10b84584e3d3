from __future__ import annotations

from pathlib import Path

import pytest

from services.shared.config import (
    DEFAULT_EMPTY_REPLY,
    DEFAULT_THRESHOLD,
    DEFAULT_UNCLEAR_REPLIES,
    ConfigStore,
    EngineSettings,
)
from services.shared.runtime import ensure_request_id, get_runtime_config


def test_missing_config_file_gives_defaults(tmp_path):
    store = ConfigStore(tmp_path / "absent.yaml")
    assert store.get() == {}
    s = store.engine_settings()
    assert s.confidence_threshold == DEFAULT_THRESHOLD
    assert s.unclear_replies == DEFAULT_UNCLEAR_REPLIES
    assert s.kb_path is None


def test_yaml_values_and_override(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text(
        "knowledge_base:\n"
        "  path: data/other.json\n"
        "matching:\n"
        "  confidence_threshold: 0.2\n"
        "suggestions:\n"
        "  limit: 2\n"
        "replies:\n"
        "  empty: Ask me.\n"
        "  unclear: Pardon?\n",
        encoding="utf-8",
    )
    store = ConfigStore(p)
    s = store.engine_settings()
    assert s.kb_path == "data/other.json"
    assert s.confidence_threshold == 0.2
    assert s.suggestion_limit == 2
    assert s.suggestion_min_chars == 2
    assert s.empty_reply == "Ask me."
    assert s.unclear_replies == ("Pardon?",)

    assert store.engine_settings(kb_path_override="kb.yaml").kb_path == "kb.yaml"


def test_config_path_from_env(tmp_path, monkeypatch):
    monkeypatch.setenv("FAQBOT_CONFIG_PATH", str(tmp_path / "c.yaml"))
    assert ConfigStore().path == tmp_path / "c.yaml"


@pytest.mark.parametrize("threshold", [-0.1, 1.5])
def test_threshold_out_of_range_is_rejected(threshold):
    with pytest.raises(ValueError):
        EngineSettings(confidence_threshold=threshold)


def test_runtime_config_from_env(monkeypatch):
    monkeypatch.setenv("FAQBOT_LOG_FORMAT", "TEXT")
    monkeypatch.setenv("FAQBOT_KB_PATH", "  ")
    monkeypatch.setenv("FAQBOT_OTEL_ENABLED", "yes")
    monkeypatch.delenv("OTEL_SERVICE_NAME", raising=False)
    cfg = get_runtime_config(service_name="svc")
    assert cfg.log_format == "text"
    assert cfg.kb_path is None
    assert cfg.otel_enabled is True
    assert cfg.otel_service_name == "svc"


def test_request_id_reuse_and_generation():
    assert ensure_request_id("  abc ") == "abc"
    assert len(ensure_request_id(None)) == 32


def test_otel_is_off_unless_enabled(monkeypatch):
    from services.shared.otel import instrument_fastapi

    monkeypatch.delenv("FAQBOT_OTEL_ENABLED", raising=False)
    assert instrument_fastapi(object(), service_name="svc") is False


def test_bundled_config_replies_match_defaults():
    store = ConfigStore(Path(__file__).resolve().parents[1] / "config" / "config.yaml")
    s = store.engine_settings()
    assert s.unclear_replies == DEFAULT_UNCLEAR_REPLIES
    assert s.empty_reply == DEFAULT_EMPTY_REPLY
