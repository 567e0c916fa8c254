"""Response Composer: assemble the reply conversation and invoke generation.

Invariants:
    - Exactly one model call per compose()
    - Model failure → FAILED result with value None; the caller picks the fallback text
    - Prompt assembly is delegated to core/compose_prompt (pure)
"""

from collections.abc import Sequence

from chatbot.core.boundary_protocols import TextGenerator
from chatbot.core.compose_prompt import build_conversation
from chatbot.core.domain_types import (
    REPLY_GENERATION_CONFIG,
    ChatMessage,
    Question,
    StanceContext,
)
from chatbot.core.errors import ModelAPIError
from chatbot.core.language_strings import LocaleStrings
from chatbot.core.results import StepResult


class ResponseComposer:
    def __init__(self, generator: TextGenerator, strings: LocaleStrings):
        self._generator = generator
        self._strings = strings

    async def compose(
        self,
        questions: Sequence[Question],
        context: StanceContext | None,
        history: Sequence[ChatMessage],
        message: str,
    ) -> StepResult[str | None]:
        turns = build_conversation(
            questions, context, history, message, self._strings,
        )
        try:
            text = await self._generator.generate(turns, REPLY_GENERATION_CONFIG)
        except ModelAPIError as e:
            return StepResult.failed(None, e.message)
        return StepResult.ok(text)
