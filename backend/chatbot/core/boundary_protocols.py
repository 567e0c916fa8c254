"""Boundary Protocols: contracts between the services and external collaborators.

Invariants:
    - Services depend on these Protocols, never on a concrete client
    - Implementations raise ModelAPIError / BackendAPIError, nothing else
    - Implementations provided by main.py via dependency injection (fakes in tests)

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
"""

from collections.abc import Sequence
from typing import Any, Protocol

from chatbot.core.domain_types import (
    GenerationConfig, PromptTurn, Question, RelatedQuestion,
)


class CommentSubmissionLike(Protocol):
    """Validated response of a comment submission."""
    comment_id: str

    def related_questions(self) -> list[RelatedQuestion]: ...


class TextGenerator(Protocol):
    """Contract for the generative language model."""
    async def generate(
        self, turns: Sequence[PromptTurn], config: GenerationConfig,
    ) -> str: ...


class DeliberationBackend(Protocol):
    """Contract for the deliberation-platform REST backend."""
    async def get_project_questions(self, project_id: str) -> list[Question]: ...

    async def submit_comment(
        self, project_id: str, content: str,
    ) -> CommentSubmissionLike: ...

    async def get_stance_analysis(
        self, project_id: str, question_id: str,
    ) -> Any: ...
