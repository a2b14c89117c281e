"""In-process and remote annotators sharing the ``TextAnnotator`` protocol."""

from __future__ import annotations

import httpx
from pydantic import ValidationError

from research_assistant.annotation.heuristics import HeuristicAnnotator
from research_assistant.config.settings import Settings
from research_assistant.models.domain import Annotation, neutral_annotation
from research_assistant.models.schemas import AnalyzeRequest, AnalyzeResponse
from research_assistant.observability.logger import get_logger

logger = get_logger("annotation")


class LocalAnnotator:
    def __init__(self, heuristics: HeuristicAnnotator) -> None:
        self._heuristics = heuristics

    async def annotate(self, content: str) -> Annotation:
        return self._heuristics.annotate(content)


class RemoteAnnotator:
    """Delegates scoring to an HTTP service with the ``/analyze`` contract.

    Any failure (bad URL, transport error or timeout, non-2xx status, malformed body) is logged
    and the neutral default annotation is returned instead.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._client = client

    async def annotate(self, content: str) -> Annotation:
        payload = AnalyzeRequest(content=content).model_dump()
        try:
            if self._client is not None:
                response = await self._client.post(self._url, json=payload, timeout=self._timeout)
            else:
                async with httpx.AsyncClient(timeout=httpx.Timeout(self._timeout)) as client:
                    response = await client.post(self._url, json=payload)
            response.raise_for_status()
            body = AnalyzeResponse.model_validate(response.json())
        except (httpx.HTTPError, httpx.InvalidURL, ValidationError, ValueError) as e:
            logger.warning("remote_annotation_failed", url=self._url, error=str(e))
            return neutral_annotation()

        return Annotation(
            sentiment=body.sentiment,
            complexity=body.complexity,
            key_terms=list(body.key_terms),
        )


def create_annotator(settings: Settings) -> LocalAnnotator | RemoteAnnotator:
    if settings.annotator_url:
        return RemoteAnnotator(settings.annotator_url, timeout=settings.annotator_timeout_s)
    return LocalAnnotator(HeuristicAnnotator(settings))
