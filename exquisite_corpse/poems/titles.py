"""
Surrealist title generation for revealed poems.

A title joins a word from the first line and a word from the last line with a
connector phrase, e.g. "Clocks beneath Harbor". Selection is random, so only
the shape of a title is predictable.
"""

import random
from typing import Iterable, List, Optional, Sequence, Union

FALLBACK_TITLE = "Untitled Dream"
FALLBACK_FIRST_WORD = "Dream"
FALLBACK_LAST_WORD = "Vision"
FALLBACK_CONNECTOR = "beneath"

CONNECTORS = (
    "of the",
    "beneath",
    "against",
    "within the",
    "and the",
    "beyond",
    "through the",
    "among the",
)

MIN_SIGNIFICANT_LENGTH = 3

_rng = random.Random()


def _line_text(line: Union[str, object]) -> str:
    if isinstance(line, str):
        return line
    return getattr(line, "full_text", "") or ""


def significant_words(text: str) -> List[str]:
    """Words of ``text`` that are at least three characters long."""
    words = (w.strip() for w in text.split(" "))
    return [w for w in words if len(w) >= MIN_SIGNIFICANT_LENGTH]


def capitalize_first(word: str) -> str:
    """Uppercase the first character, leaving the rest untouched."""
    if not word:
        return word
    return word[0].upper() + word[1:]


def _pick(rng: random.Random, options: Sequence[str], fallback: str) -> str:
    if not options:
        return fallback
    return rng.choice(options)


def build_title(
    first_words: Sequence[str],
    last_words: Sequence[str],
    rng: Optional[random.Random] = None,
    connectors: Sequence[str] = CONNECTORS,
) -> str:
    rng = rng or _rng
    first = _pick(rng, first_words, FALLBACK_FIRST_WORD)
    connector = _pick(rng, connectors, FALLBACK_CONNECTOR)
    last = _pick(rng, last_words, FALLBACK_LAST_WORD)
    return f"{capitalize_first(first)} {connector} {capitalize_first(last)}"


def generate_title(
    lines: Iterable[Union[str, object]], rng: Optional[random.Random] = None
) -> str:
    """Generate a title from the first and last lines of a poem.

    ``lines`` may hold plain strings or objects with a ``full_text``
    attribute, in poem order. Returns ``FALLBACK_TITLE`` when there is nothing
    significant to build from.
    """
    texts = [_line_text(line) for line in lines]
    if not texts:
        return FALLBACK_TITLE

    if len(texts) == 1:
        words = significant_words(texts[0])
        if len(words) < 2:
            return FALLBACK_TITLE
        return build_title(words, words, rng)

    first_words = significant_words(texts[0])
    last_words = significant_words(texts[-1])
    if not first_words or not last_words:
        return FALLBACK_TITLE
    return build_title(first_words, last_words, rng)
