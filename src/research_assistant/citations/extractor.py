"""Split a raw model completion into display text and citation records.

Completions mark sources inline as::

    [CITATION]{<title>}|{<url>}|{<text>}

Each field runs up to the next closing brace and may not contain the tag
itself; there is no escaping. Anything that does not match the full
three-group form is ordinary text. A marker that sits inside an open field of
an earlier, unterminated tag counts as nested and is left as text too, so the
cleaned output never contains a marker.
"""

from __future__ import annotations

import re

from research_assistant.config.constants import CITATION_PLACEHOLDER, CITATION_TAG
from research_assistant.models.domain import Citation, ExtractionResult
from research_assistant.observability.logger import get_logger

logger = get_logger("citations")

_TAG = re.escape(CITATION_TAG)
_FIELD = rf"\{{((?:(?!{_TAG})[^}}])*)\}}"

CITATION_PATTERN = re.compile(rf"{_TAG}{_FIELD}\|{_FIELD}\|{_FIELD}")

_TAG_RE = re.compile(_TAG)
# Text following a tag that is still inside one of its three fields.
_OPEN_FIELD_RE = re.compile(r"\{[^}]*(?:\}\|\{[^}]*){0,2}")


def _inline_reference(title: str) -> str:
    return f"({title})" if title.strip() else f"({CITATION_PLACEHOLDER})"


def find_markers(text: str) -> list[re.Match[str]]:
    """Well-formed, non-nested markers in left-to-right order."""
    markers: list[re.Match[str]] = []
    open_tag_ends: list[int] = []

    for tag in _TAG_RE.finditer(text):
        match = CITATION_PATTERN.match(text, tag.start())
        nested = any(
            _OPEN_FIELD_RE.fullmatch(text, end, tag.start()) for end in open_tag_ends
        )
        if match is None or nested:
            open_tag_ends.append(tag.end())
            continue
        markers.append(match)

    return markers


def extract_citations(text: str) -> ExtractionResult:
    """Replace every well-formed marker with ``(title)`` and collect its fields.

    Citations come back in order of appearance. Duplicates are kept, and an
    empty citation text is passed through for the persistence validator to
    reject.
    """
    citations: list[Citation] = []
    parts: list[str] = []
    last = 0

    for match in find_markers(text):
        title, url, body = match.groups()
        citations.append(Citation(text=body, title=title or None, url=url or None))
        parts.append(text[last : match.start()])
        parts.append(_inline_reference(title))
        last = match.end()
    parts.append(text[last:])

    if citations:
        logger.info("citations_extracted", count=len(citations), text_len=len(text))

    return ExtractionResult(clean_text="".join(parts), citations=citations)


def count_markers(text: str) -> int:
    """Number of well-formed markers in ``text``."""
    return len(find_markers(text))
