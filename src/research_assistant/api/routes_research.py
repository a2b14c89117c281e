"""Research completion endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from research_assistant.api.dependencies import get_research_pipeline
from research_assistant.api.rate_limiter import rate_limit
from research_assistant.exceptions import (
    GenerationError,
    ResearchAssistantError,
    UnsupportedProviderError,
)
from research_assistant.models.schemas import CitationOut, ResearchRequest, ResearchResponse
from research_assistant.pipeline.research_pipeline import ResearchPipeline

router = APIRouter()


@router.post("/research", response_model=ResearchResponse)
async def research(
    request: ResearchRequest,
    pipeline: ResearchPipeline = Depends(get_research_pipeline),
    _auth: dict = Depends(rate_limit),
) -> ResearchResponse:
    try:
        outcome = await pipeline.run(request.prompt, request.config, request.conversation_id)
    except UnsupportedProviderError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except GenerationError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except ResearchAssistantError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return ResearchResponse(
        generated_text=outcome.generated_text,
        citations=[CitationOut.from_domain(c) for c in outcome.citations],
        message_id=outcome.message_id,
        rejected_citations=len(outcome.rejected_citations),
        failed_citations=len(outcome.failed_citations),
    )
