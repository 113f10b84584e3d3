from __future__ import annotations

import numpy as np
from sklearn.metrics.pairwise import cosine_similarity as _pairwise_cosine


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """Cosine of the angle between two term vectors.

    Both vectors must share one vocabulary. A zero vector scores 0.0 against anything.
    """

    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if a.shape != b.shape:
        raise ValueError(f"vector length mismatch: {a.shape} vs {b.shape}")

    denom = float(np.linalg.norm(a)) * float(np.linalg.norm(b))
    if denom == 0.0:
        return 0.0
    return float(min(1.0, max(0.0, float(np.dot(a, b)) / denom)))


def score_entries(query_vector: np.ndarray, entry_vectors: np.ndarray) -> np.ndarray:
    """Score one query vector against every row of the entry matrix."""

    q = np.asarray(query_vector, dtype=np.float64).reshape(1, -1)
    m = np.asarray(entry_vectors, dtype=np.float64)
    if m.ndim != 2 or m.shape[1] != q.shape[1]:
        raise ValueError(f"vector length mismatch: {q.shape[1]} vs {m.shape}")
    if m.shape[0] == 0 or m.shape[1] == 0:
        return np.zeros(m.shape[0], dtype=np.float64)

    # sklearn leaves zero rows at zero norm, so they score 0 rather than NaN.
    sims = _pairwise_cosine(q, m).flatten()
    return np.clip(sims, 0.0, 1.0)
