"""Message annotation endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from research_assistant.api.dependencies import get_annotator
from research_assistant.api.rate_limiter import rate_limit
from research_assistant.models.schemas import AnalyzeRequest, AnalyzeResponse
from research_assistant.protocols.annotator import TextAnnotator

router = APIRouter()


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze(
    request: AnalyzeRequest,
    annotator: TextAnnotator = Depends(get_annotator),
    _auth: dict = Depends(rate_limit),
) -> AnalyzeResponse:
    annotation = await annotator.annotate(request.content)
    return AnalyzeResponse(
        sentiment=annotation.sentiment,
        complexity=annotation.complexity,
        key_terms=annotation.key_terms,
    )
