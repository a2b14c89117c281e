"""Checks applied to a citation before it is written."""

from __future__ import annotations

from research_assistant.exceptions import CitationValidationError
from research_assistant.models.domain import Citation


def validate_citation(citation: Citation) -> Citation:
    if not citation.text or not citation.text.strip():
        raise CitationValidationError("Citation text is required")
    return citation
