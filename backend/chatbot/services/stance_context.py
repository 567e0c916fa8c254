"""Stance Context Resolver: fetch supporting analysis for the primary related question.

Invariants:
    - No related questions → OK with no context, no backend call
    - At most one stance-analysis fetch per turn
    - Fetch failure → DEGRADED with no context, never raised
"""

import logging
from collections.abc import Sequence

from chatbot.core.boundary_protocols import DeliberationBackend
from chatbot.core.domain_types import RelatedQuestion, StanceContext
from chatbot.core.errors import BackendAPIError
from chatbot.core.results import StepResult
from chatbot.core.stance_selection import build_stance_context, select_primary_question

logger = logging.getLogger(__name__)


class StanceContextResolver:
    def __init__(self, backend: DeliberationBackend):
        self._backend = backend

    async def resolve(
        self, project_id: str, related: Sequence[RelatedQuestion],
    ) -> StepResult[StanceContext | None]:
        primary = select_primary_question(related)
        if primary is None:
            return StepResult.ok(None)
        try:
            report = await self._backend.get_stance_analysis(project_id, primary.id)
        except BackendAPIError as e:
            return StepResult.degraded(None, e.message)
        logger.debug(
            "Stance context resolved",
            extra={"project_id": project_id, "question_id": primary.id},
        )
        return StepResult.ok(build_stance_context(primary, report))
