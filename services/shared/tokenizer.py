from __future__ import annotations

import re
from typing import List


# Word characters are ASCII only; anything else becomes a boundary.
_NON_WORD = re.compile(r"[^A-Za-z0-9_\s]")
_WHITESPACE = re.compile(r"\s+")


def tokenize(text: str) -> List[str]:
    """Split free text into lower-cased word tokens.

    Punctuation becomes a word boundary, and single-character tokens are dropped.
    """

    s = _NON_WORD.sub(" ", (text or "").lower())
    return [tok for tok in _WHITESPACE.split(s) if len(tok) > 1]
