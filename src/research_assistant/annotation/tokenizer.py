"""Text preprocessing for message annotation."""

from __future__ import annotations

import re

from research_assistant.config.constants import STOPWORDS

_WORD_RE = re.compile(r"\w+(?:'\w+)*")
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_CODE_FENCE_RE = re.compile(r"```[\s\S]*?```")


def words(text: str) -> list[str]:
    """Lowercased word tokens, split on word boundaries."""
    return _WORD_RE.findall(text.lower())


def content_terms(text: str) -> list[str]:
    """Word tokens with stopwords, single characters and bare numbers removed."""
    return [t for t in words(text) if t not in STOPWORDS and len(t) > 1 and not t.isdigit()]


def sentences(text: str) -> list[str]:
    """Sentences delimited by ``.``, ``!`` or ``?`` that contain at least one word."""
    return [s for s in _SENTENCE_SPLIT_RE.split(text) if _WORD_RE.search(s)]


def has_code_block(text: str) -> bool:
    return _CODE_FENCE_RE.search(text) is not None
