from __future__ import annotations

import json
import logging
import os
import sys
import time
import uuid
from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class RuntimeConfig:
    """Process-level switches, parsed once from the environment."""

    env: str
    log_level: str
    log_format: str
    request_id_header: str

    # Knowledge base override (wins over config.yaml)
    kb_path: str | None

    # Observability (optional)
    otel_enabled: bool
    otel_service_name: str
    otel_exporter_otlp_endpoint: str | None


def _env(name: str, default: str | None = None) -> str | None:
    v = os.environ.get(name)
    if v is None:
        return default
    v = str(v).strip()
    return v if v != "" else default


def _env_bool(name: str, default: bool = False) -> bool:
    v = _env(name)
    if v is None:
        return default
    return v.lower() in {"1", "true", "yes", "y", "on"}


def get_runtime_config(*, service_name: str) -> RuntimeConfig:
    env = (_env("FAQBOT_ENV", _env("ENV", "dev")) or "dev").lower()

    # Log format: json or text
    log_format = (_env("FAQBOT_LOG_FORMAT", "json") or "json").lower()
    log_level = (_env("FAQBOT_LOG_LEVEL", "INFO") or "INFO").upper()

    request_id_header = (_env("FAQBOT_REQUEST_ID_HEADER", "x-request-id") or "x-request-id").lower()

    return RuntimeConfig(
        env=env,
        log_level=log_level,
        log_format=log_format,
        request_id_header=request_id_header,
        kb_path=_env("FAQBOT_KB_PATH"),
        otel_enabled=_env_bool("FAQBOT_OTEL_ENABLED", default=False),
        otel_service_name=_env("OTEL_SERVICE_NAME", service_name) or service_name,
        otel_exporter_otlp_endpoint=_env("OTEL_EXPORTER_OTLP_ENDPOINT"),
    )


_EXTRA_KEYS = ("request_id", "path", "method", "status_code", "duration_ms", "source", "entries", "intent", "confidence")


def _json_log_record(level: str, msg: str, *, extra: Mapping[str, Any] | None = None) -> str:
    body: dict[str, Any] = {
        "ts": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
        "level": level,
        "msg": msg,
    }
    if extra:
        for k, v in extra.items():
            if v is None:
                continue
            body[k] = v
    return json.dumps(body, ensure_ascii=False)


class JsonFormatter(logging.Formatter):
    def __init__(self, service_name: str):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        extra: dict[str, Any] = {
            "logger": record.name,
            "service": self.service_name,
        }
        for key in _EXTRA_KEYS:
            if hasattr(record, key):
                extra[key] = getattr(record, key)
        if record.exc_info:
            extra["exc"] = self.formatException(record.exc_info)
        return _json_log_record(record.levelname, record.getMessage(), extra=extra)


def setup_logging(*, service_name: str) -> None:
    cfg = get_runtime_config(service_name=service_name)
    root = logging.getLogger()
    root.setLevel(getattr(logging, cfg.log_level, logging.INFO))

    # Clear default handlers (uvicorn adds its own; this keeps tests predictable)
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(stream=sys.stdout)
    if cfg.log_format == "json":
        handler.setFormatter(JsonFormatter(service_name))
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))

    root.addHandler(handler)


def ensure_request_id(incoming: str | None = None) -> str:
    """Return a request id; generate if missing."""
    v = (incoming or "").strip()
    if v:
        return v[:128]
    return uuid.uuid4().hex
