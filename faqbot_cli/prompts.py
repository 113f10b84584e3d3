from __future__ import annotations

from typing import Optional


EXIT_WORDS = {"quit", "exit", ":q"}


def read_message(text: str = "You") -> Optional[str]:
    """Read one chat line; None when the user wants to leave (EOF, Ctrl-C or an exit word)."""
    try:
        s = input(f"{text}: ").strip()
    except (EOFError, KeyboardInterrupt):
        print()
        return None
    if s.lower() in EXIT_WORDS:
        return None
    return s


def format_meta(confidence: float, intent: str, width: int = 40) -> str:
    return f"Match: {confidence * 100:.1f}% | Q: {intent[:width]}..."
