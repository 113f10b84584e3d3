from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, List

import httpx
import yaml

from services.shared.models import KnowledgeEntry


logger = logging.getLogger("faqbot.knowledge_base")

HTTP_TIMEOUT = 5.0


def _coerce_keywords(raw: Any, pos: int) -> tuple[str, ...] | None:
    """Normalise a record's keywords; None means the record must be rejected."""
    if raw is None:
        return ()
    if isinstance(raw, str) or not isinstance(raw, (list, tuple)):
        logger.warning("rejecting FAQ record %d: keywords must be a list, got %s", pos, type(raw).__name__)
        return None

    out = [k for k in raw if isinstance(k, str)]
    if len(out) != len(raw):
        logger.warning("FAQ record %d: dropped %d non-string keyword(s)", pos, len(raw) - len(out))
    return tuple(out)


def parse_records(records: Iterable[Any]) -> List[KnowledgeEntry]:
    """Validate raw records into entries, skipping the malformed ones."""

    entries: List[KnowledgeEntry] = []
    for pos, rec in enumerate(records):
        if not isinstance(rec, dict):
            logger.warning("rejecting FAQ record %d: expected a mapping, got %s", pos, type(rec).__name__)
            continue

        question = rec.get("question")
        answer = rec.get("answer")
        if not isinstance(question, str) or not isinstance(answer, str):
            logger.warning("rejecting FAQ record %d: question and answer must be strings", pos)
            continue

        keywords = _coerce_keywords(rec.get("keywords"), pos)
        if keywords is None:
            continue

        entries.append(KnowledgeEntry(question=question, answer=answer, keywords=keywords))
    return entries


def _unwrap(doc: Any) -> list:
    # Either a bare list of records or {"faqs": [...]}.
    if isinstance(doc, dict):
        doc = doc.get("faqs")
    if not isinstance(doc, list):
        raise ValueError("knowledge base must be a list of records or a mapping with a 'faqs' list")
    return doc


def _fetch(source: str) -> Any:
    if source.startswith(("http://", "https://")):
        resp = httpx.get(source, timeout=HTTP_TIMEOUT)
        resp.raise_for_status()
        return resp.json()

    path = Path(source)
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in {".yaml", ".yml"}:
        return yaml.safe_load(text)
    return json.loads(text)


def load_knowledge_base(source: str | Path | list | None) -> List[KnowledgeEntry]:
    """Load FAQ entries from a file path, an http(s) URL or an in-memory record list.

    Any failure to reach or parse the source is logged and yields an empty list.
    """

    if source is None:
        logger.warning("no knowledge base configured; serving empty replies only")
        return []

    if isinstance(source, list):
        entries = parse_records(source)
        logger.info("knowledge base loaded", extra={"source": "<memory>", "entries": len(entries)})
        return entries

    src = str(source)
    try:
        records = _unwrap(_fetch(src))
    except (OSError, ValueError, yaml.YAMLError, httpx.HTTPError, httpx.InvalidURL) as e:
        logger.error("failed to load knowledge base from %s: %s", src, e, extra={"source": src})
        return []

    entries = parse_records(records)
    logger.info("knowledge base loaded", extra={"source": src, "entries": len(entries)})
    return entries
