"""Deliberation Backend Client: httpx wrapper for the deliberation-platform REST API.

Invariants:
    - Every request carries the static x-api-key header
    - Exactly one attempt per call (no retry)
    - Transport errors, non-2xx statuses, non-JSON bodies and schema mismatches
      all raise BackendAPIError; nothing else escapes
    - Path segments are percent-encoded before interpolation
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from chatbot.core.domain_types import Question
from chatbot.core.errors import BackendAPIError
from chatbot.schemas.backend import CommentCreate, CommentSubmission, ProjectPayload

logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-api-key"


def _segment(value: str) -> str:
    return quote(value, safe="")


class DeliberationBackendClient:
    """Async client for projects, comments and stance-analysis reports."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout_seconds: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.client = httpx.AsyncClient(
            base_url=base_url,
            headers={API_KEY_HEADER: api_key},
            timeout=httpx.Timeout(timeout_seconds),
            transport=transport,
        )

    async def get_project_questions(self, project_id: str) -> list[Question]:
        data = await self._request(
            "GET", f"/projects/{_segment(project_id)}", operation="get_project",
        )
        return self._validate(ProjectPayload, data, "get_project").to_domain()

    async def submit_comment(
        self, project_id: str, content: str,
    ) -> CommentSubmission:
        body = CommentCreate(content=content).model_dump(by_alias=True)
        data = await self._request(
            "POST", f"/projects/{_segment(project_id)}/comments",
            operation="submit_comment", json=body,
        )
        return self._validate(CommentSubmission, data, "submit_comment")

    async def get_stance_analysis(
        self, project_id: str, question_id: str,
    ) -> Any:
        """Opaque report object; returned as decoded JSON."""
        return await self._request(
            "GET",
            f"/projects/{_segment(project_id)}/questions/"
            f"{_segment(question_id)}/stance-analysis",
            operation="get_stance_analysis",
        )

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _request(
        self, method: str, url: str, *, operation: str, json: Any = None,
    ) -> Any:
        try:
            response = await self.client.request(method, url, json=json)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise BackendAPIError(
                f"HTTP {e.response.status_code}", operation,
                status_code=e.response.status_code,
            )
        except httpx.HTTPError as e:
            raise BackendAPIError(
                f"{type(e).__name__}: {e}", operation,
            )
        try:
            return response.json()
        except ValueError:
            raise BackendAPIError("response is not JSON", operation)

    @staticmethod
    def _validate(model: type[BaseModel], data: Any, operation: str):
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.warning(
                f"Backend {operation} returned unexpected payload: {e.error_count()} error(s)",
            )
            raise BackendAPIError("unexpected response shape", operation)
