"""Tests for the remote annotator and its neutral fallback."""

from __future__ import annotations

import json

import httpx

from research_assistant.annotation.annotators import (
    LocalAnnotator,
    RemoteAnnotator,
    create_annotator,
)
from research_assistant.config.settings import Settings
from research_assistant.models.domain import neutral_annotation

URL = "http://scorer.test/analyze"


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


async def test_remote_success():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200, json={"sentiment": 0.8, "complexity": 0.3, "keyTerms": ["alpha", "beta"]}
        )

    async with _client(handler) as client:
        result = await RemoteAnnotator(URL, client=client).annotate("alpha beta")

    assert seen["body"] == {"content": "alpha beta"}
    assert result.sentiment == 0.8
    assert result.complexity == 0.3
    assert result.key_terms == ["alpha", "beta"]


async def test_remote_non_2xx_falls_back():
    async with _client(lambda request: httpx.Response(500, json={"error": "boom"})) as client:
        result = await RemoteAnnotator(URL, client=client).annotate("text")
    assert result == neutral_annotation()
    assert (result.sentiment, result.complexity, result.key_terms) == (0.5, 0.5, [])


async def test_remote_transport_error_falls_back():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    async with _client(handler) as client:
        result = await RemoteAnnotator(URL, client=client).annotate("text")
    assert result == neutral_annotation()


async def test_remote_malformed_body_falls_back():
    async with _client(lambda request: httpx.Response(200, text="not json")) as client:
        result = await RemoteAnnotator(URL, client=client).annotate("text")
    assert result == neutral_annotation()


async def test_remote_out_of_range_body_falls_back():
    async with _client(
        lambda request: httpx.Response(200, json={"sentiment": 7, "complexity": 0.1, "keyTerms": []})
    ) as client:
        result = await RemoteAnnotator(URL, client=client).annotate("text")
    assert result == neutral_annotation()


async def test_local_annotator_used_without_url():
    annotator = create_annotator(Settings(annotator_url=""))
    assert isinstance(annotator, LocalAnnotator)
    result = await annotator.annotate("")
    assert result.complexity == 0.0


def test_remote_annotator_used_with_url():
    annotator = create_annotator(Settings(annotator_url=URL))
    assert isinstance(annotator, RemoteAnnotator)


async def test_remote_timeout_falls_back():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("scorer too slow", request=request)

    async with _client(handler) as client:
        result = await RemoteAnnotator(URL, timeout=0.5, client=client).annotate("text")
    assert result == neutral_annotation()


async def test_remote_timeout_applied_to_request():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["timeout"] = request.extensions["timeout"]
        return httpx.Response(200, json={"sentiment": 0.5, "complexity": 0.5, "keyTerms": []})

    async with _client(handler) as client:
        await RemoteAnnotator(URL, timeout=2.5, client=client).annotate("text")
    assert seen["timeout"] == httpx.Timeout(2.5).as_dict()


async def test_remote_invalid_url_falls_back():
    async with _client(lambda request: httpx.Response(200)) as client:
        result = await RemoteAnnotator("http://scorer.test/\x00analyze", client=client).annotate("x")
    assert result == neutral_annotation()


async def test_fallback_results_do_not_share_state():
    async with _client(lambda request: httpx.Response(503)) as client:
        annotator = RemoteAnnotator(URL, client=client)
        first = await annotator.annotate("a")
        first.key_terms.append("leaked")
        second = await annotator.annotate("b")
    assert second.key_terms == []
    assert neutral_annotation().key_terms == []
