from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Tuple

import numpy as np

from services.shared.config import (
    DEFAULT_EMPTY_REPLY,
    DEFAULT_THRESHOLD,
    DEFAULT_UNCLEAR_REPLIES,
    EngineSettings,
)
from services.shared.knowledge_base import load_knowledge_base
from services.shared.models import KnowledgeEntry, MatchResult
from services.shared.similarity import score_entries
from services.shared.vocabulary import Vocabulary, build_vocabulary, encode_entries, encode_query


logger = logging.getLogger("faqbot.matcher")

INTENT_EMPTY = "empty"
INTENT_UNCLEAR = "unclear"


@dataclass(frozen=True, eq=False)
class RetrievalContext:
    """Everything a query needs, built once per knowledge base and never mutated."""

    entries: Tuple[KnowledgeEntry, ...]
    vocabulary: Vocabulary
    entry_vectors: np.ndarray


def build_context(entries: Sequence[KnowledgeEntry]) -> RetrievalContext:
    entries = tuple(entries)
    vocab = build_vocabulary(entries)
    vectors = encode_entries(entries, vocab)
    vectors.setflags(write=False)
    return RetrievalContext(entries=entries, vocabulary=vocab, entry_vectors=vectors)


EMPTY_CONTEXT = build_context(())


def get_best_answer(
    query: str,
    context: RetrievalContext,
    *,
    threshold: float = DEFAULT_THRESHOLD,
    empty_reply: str = DEFAULT_EMPTY_REPLY,
    unclear_replies: Sequence[str] = DEFAULT_UNCLEAR_REPLIES,
    rng: random.Random | None = None,
) -> MatchResult:
    if not (query or "").strip() or not context.entries:
        return MatchResult(reply=empty_reply, intent=INTENT_EMPTY, confidence=0.0)

    scores = score_entries(encode_query(query, context.vocabulary), context.entry_vectors)
    # argmax returns the first maximum, so earlier entries win ties.
    best_index = int(np.argmax(scores))
    best_score = float(scores[best_index])

    # A zero score never matches, even with a zero threshold.
    if best_score < threshold or best_score <= 0.0:
        reply = (rng or random).choice(list(unclear_replies) or list(DEFAULT_UNCLEAR_REPLIES))
        return MatchResult(reply=reply, intent=INTENT_UNCLEAR, confidence=best_score)

    entry = context.entries[best_index]
    return MatchResult(reply=entry.answer, intent=entry.question, confidence=best_score)


def suggest(text: str, entries: Sequence[KnowledgeEntry], *, limit: int = 4, min_chars: int = 2) -> List[str]:
    """Questions whose text or keywords contain the typed fragment, in knowledge-base order."""

    t = (text or "").strip().lower()
    if len(t) < min_chars:
        return []

    out: List[str] = []
    for e in entries:
        if len(out) >= limit:
            break
        if t in e.question.lower() or any(t in k for k in e.keywords):
            out.append(e.question)
    return out


class FaqEngine:
    """Query facade: serves the empty reply until a knowledge base has been loaded."""

    def __init__(self, settings: EngineSettings | None = None, *, rng: random.Random | None = None):
        self.settings = settings or EngineSettings()
        self._rng = rng
        self._context = EMPTY_CONTEXT
        self._ready = False

    @property
    def ready(self) -> bool:
        return self._ready

    @property
    def context(self) -> RetrievalContext:
        return self._context

    def load(self, source: str | Path | list | None = None) -> RetrievalContext:
        entries = load_knowledge_base(source if source is not None else self.settings.kb_path)
        self._context = build_context(entries)
        self._ready = True
        logger.info(
            "retrieval context built: %d entries, %d terms",
            len(self._context.entries),
            len(self._context.vocabulary),
            extra={"entries": len(self._context.entries)},
        )
        return self._context

    def submit_query(self, text: str) -> MatchResult:
        s = self.settings
        try:
            result = get_best_answer(
                text,
                self._context,
                threshold=s.confidence_threshold,
                empty_reply=s.empty_reply,
                unclear_replies=s.unclear_replies,
                rng=self._rng,
            )
        except Exception:
            logger.exception("query failed; answering with the empty reply")
            return MatchResult(reply=s.empty_reply, intent=INTENT_EMPTY, confidence=0.0)

        logger.debug("query answered", extra={"intent": result.intent, "confidence": result.confidence})
        return result

    def suggest(self, text: str) -> List[str]:
        return suggest(
            text,
            self._context.entries,
            limit=self.settings.suggestion_limit,
            min_chars=self.settings.suggestion_min_chars,
        )
