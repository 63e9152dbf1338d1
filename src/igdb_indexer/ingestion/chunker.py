"""Sentence-bounded text chunking."""

from __future__ import annotations

import re

# A sentence is a run of non-terminators followed by one or more terminators.
_SENTENCE_RE = re.compile(r"[^.!?]+[.!?]+")


def split_sentences(text: str) -> list[str]:
    """Return the sentences detected in *text*, in document order.

    Trailing text with no terminal punctuation is not a sentence and is
    not returned.  Each sentence is stripped of surrounding whitespace so
    that joined sentences are separated by exactly one space.
    """
    return [sentence.strip() for sentence in _SENTENCE_RE.findall(text)]


def chunk_by_sentences(text: str, max_sentences: int = 3) -> list[str]:
    """Group the sentences of *text* into chunks of at most *max_sentences*.

    Parameters
    ----------
    text:
        Free-text field (summary, storyline, …).
    max_sentences:
        Maximum number of consecutive sentences per chunk.

    Returns
    -------
    list[str]
        Chunks in document order, each the space-joined sentences of one
        group with surrounding whitespace trimmed.  When no sentence is
        detected the original *text* is returned as the only chunk.
    """
    if max_sentences < 1:
        raise ValueError(f"max_sentences must be >= 1, got {max_sentences}")

    sentences = split_sentences(text)
    if not sentences:
        return [text]

    return [
        " ".join(sentences[start : start + max_sentences]).strip()
        for start in range(0, len(sentences), max_sentences)
    ]
