"""Deliberation Backend Client: tests against an httpx MockTransport.

Tests cover:
    - Paths, api-key header and comment body on the wire
    - Response validation into domain / schema objects
    - Transport errors, non-2xx, non-JSON and wrong-shape bodies → BackendAPIError
"""

import json

import httpx
import pytest

from chatbot.core.errors import BackendAPIError
from chatbot.infrastructure.backend_client import DeliberationBackendClient

from tests.fakes import submission_payload


def _client(handler):
    return DeliberationBackendClient(
        base_url="http://backend.test/api",
        api_key="secret",
        transport=httpx.MockTransport(handler),
    )


async def test_get_project_questions():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={
            "_id": "p1", "questions": [{"id": "q1", "text": "Should X?"}],
        })

    client = _client(handler)
    questions = await client.get_project_questions("p1")
    await client.aclose()

    assert [q.text for q in questions] == ["Should X?"]
    assert seen[0].method == "GET"
    assert seen[0].url.path == "/api/projects/p1"
    assert seen[0].headers["x-api-key"] == "secret"


async def test_submit_comment_sends_fixed_source_fields():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(201, json=submission_payload(0.3, 0.8))

    client = _client(handler)
    submission = await client.submit_comment("p1", "my claim")
    await client.aclose()

    assert seen[0].method == "POST"
    assert seen[0].url.path == "/api/projects/p1/comments"
    assert json.loads(seen[0].content) == {
        "content": "my claim", "sourceType": "other", "sourceUrl": None,
    }
    assert submission.comment_id == "c-1"
    assert [q.confidence for q in submission.related_questions()] == [0.3, 0.8]


async def test_get_stance_analysis_returns_opaque_report():
    report = {"stances": [{"id": "pro", "count": 3}], "summary": "..."}

    def handler(request):
        assert request.url.path == "/api/projects/p1/questions/q9/stance-analysis"
        return httpx.Response(200, json=report)

    client = _client(handler)
    assert await client.get_stance_analysis("p1", "q9") == report
    await client.aclose()


async def test_path_segments_are_encoded():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"questions": []})

    client = _client(handler)
    await client.get_project_questions("a/b")
    await client.aclose()
    assert seen[0].url.raw_path == b"/api/projects/a%2Fb"


async def test_non_2xx_raises_backend_error():
    client = _client(lambda request: httpx.Response(500, json={"error": "x"}))
    with pytest.raises(BackendAPIError) as exc_info:
        await client.submit_comment("p1", "claim")
    await client.aclose()
    assert exc_info.value.status_code == 500
    assert exc_info.value.operation == "submit_comment"


async def test_transport_error_raises_backend_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    client = _client(handler)
    with pytest.raises(BackendAPIError) as exc_info:
        await client.get_stance_analysis("p1", "q1")
    await client.aclose()
    assert exc_info.value.status_code is None


async def test_non_json_body_raises_backend_error():
    client = _client(lambda request: httpx.Response(200, text="<html>"))
    with pytest.raises(BackendAPIError):
        await client.get_project_questions("p1")
    await client.aclose()


async def test_unexpected_shape_raises_backend_error():
    client = _client(lambda request: httpx.Response(200, json={"comment": {}}))
    with pytest.raises(BackendAPIError):
        await client.submit_comment("p1", "claim")
    await client.aclose()
