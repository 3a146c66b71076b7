"""Hint derivation: the trailing words of a line shown to the next writer."""

from .enums import DEFAULT_HINT_WORDS


def compute_hint(text: str, word_count: int = DEFAULT_HINT_WORDS) -> str:
    """Return the last ``word_count`` words of ``text``.

    Runs of spaces collapse and surrounding whitespace is ignored, so the result
    is always the words joined by single spaces. Text with ``word_count`` words
    or fewer comes back whole. Never raises; empty text gives an empty hint.
    """
    if not text or word_count <= 0:
        return ""
    words = [w for w in text.strip().split(" ") if w]
    if len(words) <= word_count:
        return " ".join(words)
    return " ".join(words[-word_count:])
