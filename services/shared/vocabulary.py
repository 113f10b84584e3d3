from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Sequence, Tuple

import numpy as np
from sklearn.feature_extraction.text import CountVectorizer

from services.shared.models import KnowledgeEntry
from services.shared.tokenizer import tokenize


@dataclass(frozen=True)
class Vocabulary:
    """Sorted keyword terms; a term's position is its vector coordinate."""

    terms: Tuple[str, ...]
    index: Dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "index", {t: i for i, t in enumerate(self.terms)})

    def __len__(self) -> int:
        return len(self.terms)

    def __contains__(self, term: object) -> bool:
        return term in self.index


def build_vocabulary(entries: Iterable[KnowledgeEntry]) -> Vocabulary:
    terms = set()
    for e in entries:
        terms.update(e.keywords)
    return Vocabulary(terms=tuple(sorted(terms)))


def _keyword_terms(keywords: Sequence[str]) -> List[str]:
    # Keywords are already terms: no lower-casing, no tokenizing.
    return list(keywords)


def _count(docs: list, analyzer: Callable[..., List[str]], vocabulary: Vocabulary) -> np.ndarray:
    if not docs:
        return np.zeros((0, len(vocabulary)), dtype=np.float64)
    if len(vocabulary) == 0:
        # CountVectorizer refuses an empty fixed vocabulary.
        return np.zeros((len(docs), 0), dtype=np.float64)
    vec = CountVectorizer(analyzer=analyzer, vocabulary=vocabulary.index, dtype=np.float64)
    return vec.transform(docs).toarray()


def encode_keywords(keywords: Sequence[str], vocabulary: Vocabulary) -> np.ndarray:
    """Term-count vector for a keyword list. Keywords outside the vocabulary are ignored."""
    return _count([list(keywords)], _keyword_terms, vocabulary)[0]


def encode_query(text: str, vocabulary: Vocabulary) -> np.ndarray:
    return _count([text or ""], tokenize, vocabulary)[0]


def encode_entries(entries: Sequence[KnowledgeEntry], vocabulary: Vocabulary) -> np.ndarray:
    """One row per entry, in knowledge-base order."""
    return _count([list(e.keywords) for e in entries], _keyword_terms, vocabulary)
