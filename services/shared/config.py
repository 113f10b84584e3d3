from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Tuple

import yaml


DEFAULT_THRESHOLD = 0.05

DEFAULT_EMPTY_REPLY = (
    "Please ask me something about the college! "
    "Try asking about fees, admissions, courses, placements, etc."
)

DEFAULT_UNCLEAR_REPLIES: Tuple[str, ...] = (
    "I'm not sure about that. Try asking: What are the fees? "
    "When does admission start? What courses are available?",
    "Hmm, that's outside my knowledge base. "
    "Ask me about admissions, courses, fees, facilities, or placements!",
    "I didn't quite understand. Try rephrasing your question. What would you like to know about the college?",
)


@dataclass(frozen=True)
class EngineSettings:
    kb_path: str | None = None
    confidence_threshold: float = DEFAULT_THRESHOLD
    suggestion_limit: int = 4
    suggestion_min_chars: int = 2
    empty_reply: str = DEFAULT_EMPTY_REPLY
    unclear_replies: Tuple[str, ...] = DEFAULT_UNCLEAR_REPLIES

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence_threshold <= 1.0:
            raise ValueError(f"confidence_threshold must be within [0, 1], got {self.confidence_threshold}")
        if not self.unclear_replies:
            raise ValueError("unclear_replies must not be empty")


class ConfigStore:
    """File-backed YAML config, re-read only when the file's mtime changes.

    A missing file is not an error: every setting has a default.
    """

    def __init__(self, config_path: str | Path | None = None):
        self._path = Path(config_path or os.environ.get("FAQBOT_CONFIG_PATH", "config/config.yaml"))
        self._last_mtime: float | None = None
        self._cache: dict[str, Any] = {}

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        with self._path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def get(self) -> dict[str, Any]:
        try:
            mtime = self._path.stat().st_mtime if self._path.exists() else None
        except OSError:
            mtime = None

        if mtime is None:
            self._cache = {}
        elif mtime != self._last_mtime:
            self._cache = self._read()
        self._last_mtime = mtime
        return self._cache

    def engine_settings(self, *, kb_path_override: str | None = None) -> EngineSettings:
        cfg = self.get()
        kb = cfg.get("knowledge_base") or {}
        matching = cfg.get("matching") or {}
        sugg = cfg.get("suggestions") or {}
        replies = cfg.get("replies") or {}

        unclear = replies.get("unclear")
        if isinstance(unclear, str):
            unclear = [unclear]

        return EngineSettings(
            kb_path=kb_path_override or kb.get("path"),
            confidence_threshold=float(matching.get("confidence_threshold", DEFAULT_THRESHOLD)),
            suggestion_limit=int(sugg.get("limit", 4)),
            suggestion_min_chars=int(sugg.get("min_chars", 2)),
            empty_reply=str(replies.get("empty") or DEFAULT_EMPTY_REPLY),
            unclear_replies=tuple(str(r) for r in unclear) if unclear else DEFAULT_UNCLEAR_REPLIES,
        )
