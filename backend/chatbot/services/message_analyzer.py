"""Message Analyzer: two-stage claim extraction and stance classification.

Invariants:
    - Stage 1 makes exactly one model call; its reply is schema-validated
    - Stage 2 runs only when Stage 1 produced a claim
    - Never raises ModelAPIError / BackendAPIError: failures become DEGRADED results
    - A DEGRADED result always carries an empty related_questions tuple

Design Decisions:
    - Stage 1 failure yields an empty MessageAnalysis (no claim) so no comment is
      ever submitted from an unparseable reply
    - Stage 2 failure keeps the extracted claim in the result for logging
"""

import logging
from collections.abc import Sequence

from chatbot.core.boundary_protocols import DeliberationBackend, TextGenerator
from chatbot.core.compose_prompt import build_claim_extraction_prompt
from chatbot.core.domain_types import (
    CLAIM_EXTRACTION_CONFIG,
    ChatMessage,
    MessageAnalysis,
    PromptTurn,
)
from chatbot.core.errors import BackendAPIError, ModelAPIError
from chatbot.core.language_strings import LocaleStrings
from chatbot.core.results import StepResult
from chatbot.schemas.model_replies import parse_claim_reply

logger = logging.getLogger(__name__)


class MessageAnalyzer:
    def __init__(
        self,
        generator: TextGenerator,
        backend: DeliberationBackend,
        strings: LocaleStrings,
    ):
        self._generator = generator
        self._backend = backend
        self._strings = strings

    async def analyze(
        self,
        project_id: str,
        message: str,
        history: Sequence[ChatMessage],
    ) -> StepResult[MessageAnalysis]:
        prompt = build_claim_extraction_prompt(history, message, self._strings)
        try:
            raw = await self._generator.generate(
                [PromptTurn.user(prompt)], CLAIM_EXTRACTION_CONFIG,
            )
        except ModelAPIError as e:
            return StepResult.degraded(
                MessageAnalysis.empty(), f"claim extraction failed: {e.message}",
            )

        parsed = parse_claim_reply(raw)
        if not parsed.well_formed:
            logger.debug("Unparseable claim reply: %r", raw)
            return StepResult.degraded(
                MessageAnalysis.empty(), f"invalid claim reply: {parsed.error}",
            )
        if not parsed.analysis.has_claim:
            return StepResult.ok(MessageAnalysis.empty())

        try:
            submission = await self._backend.submit_comment(
                project_id, parsed.analysis.content,
            )
        except BackendAPIError as e:
            return StepResult.degraded(
                MessageAnalysis(claim=parsed.analysis), e.message,
            )

        return StepResult.ok(MessageAnalysis(
            claim=parsed.analysis,
            comment_id=submission.comment_id,
            related_questions=tuple(submission.related_questions()),
        ))
