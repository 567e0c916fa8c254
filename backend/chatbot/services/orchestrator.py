"""Conversation Orchestrator: one per connection; turns inbound frames into outbound frames.

Invariants:
    - handle_frame returns at most one outbound frame per inbound frame
    - The user message is stored before any external call; the bot reply after all of them
    - Only ProtocolError becomes an error frame; DEGRADED steps are logged and skipped,
      a FAILED generation is replaced by the apology text
    - The questions command never reaches the analyzer or the composer
    - Each external call is attempted at most once per turn

Design Decisions:
    - Turn serialization is the caller's job: the route awaits handle_frame
      before reading the next frame
    - Project questions are fetched every turn (no cache): the backend owns them
"""

import logging
from collections.abc import Sequence

from chatbot.core.boundary_protocols import DeliberationBackend
from chatbot.core.compose_prompt import format_questions_list, is_questions_command
from chatbot.core.domain_types import ChatMessage, Question, Sender
from chatbot.core.errors import (
    BackendAPIError, ErrorContext, InvalidFrameError, ProtocolError,
    SessionNotFoundError,
)
from chatbot.core.language_strings import LocaleStrings
from chatbot.core.results import StepResult
from chatbot.core.session_store import SessionStore
from chatbot.schemas.frames import message_frame, parse_inbound_frame
from chatbot.services.message_analyzer import MessageAnalyzer
from chatbot.services.response_composer import ResponseComposer
from chatbot.services.stance_context import StanceContextResolver

logger = logging.getLogger(__name__)


class ConversationOrchestrator:
    def __init__(
        self,
        session_id: str,
        project_id: str,
        *,
        store: SessionStore,
        backend: DeliberationBackend,
        analyzer: MessageAnalyzer,
        resolver: StanceContextResolver,
        composer: ResponseComposer,
        strings: LocaleStrings,
    ):
        self.session_id = session_id
        self.project_id = project_id
        self._store = store
        self._backend = backend
        self._analyzer = analyzer
        self._resolver = resolver
        self._composer = composer
        self._strings = strings

    async def handle_frame(self, raw: str | bytes) -> dict | None:
        """Process one inbound payload. None means no reply is due."""
        parsed = parse_inbound_frame(raw)
        if parsed.is_ignored:
            return None
        if parsed.is_error:
            return self._protocol_error_frame(
                InvalidFrameError(parsed.error, self._error_context()),
            )
        try:
            reply = await self.run_turn(parsed.frame.content)
        except ProtocolError as e:
            return self._protocol_error_frame(e)
        return message_frame(reply)

    async def run_turn(self, content: str) -> ChatMessage:
        """Store the user message, compute the reply, store and return it."""
        if self._store.add_message(self.session_id, content, Sender.USER) is None:
            raise SessionNotFoundError(self.session_id, self._error_context())
        session = self._store.get(self.session_id)
        if session is None:
            raise SessionNotFoundError(self.session_id, self._error_context())

        questions = await self._load_questions()
        if is_questions_command(content):
            reply_text = format_questions_list(questions, self._strings)
        else:
            reply_text = await self._generate_reply(
                content, questions, session.history,
            )

        bot_message = self._store.add_message(self.session_id, reply_text, Sender.BOT)
        if bot_message is None:
            raise SessionNotFoundError(self.session_id, self._error_context())
        return bot_message

    async def _load_questions(self) -> list[Question]:
        try:
            return await self._backend.get_project_questions(self.project_id)
        except BackendAPIError as e:
            self._log_step("questions", StepResult.degraded([], e.message))
            return []

    async def _generate_reply(
        self,
        content: str,
        questions: Sequence[Question],
        history: Sequence[ChatMessage],
    ) -> str:
        analysis = await self._analyzer.analyze(self.project_id, content, history)
        self._log_step("analysis", analysis)

        context = await self._resolver.resolve(
            self.project_id, analysis.value.related_questions,
        )
        self._log_step("stance_context", context)

        generation = await self._composer.compose(
            questions, context.value, history, content,
        )
        self._log_step("generation", generation)
        if not generation.is_ok or not generation.value:
            return self._strings.generation_apology
        return generation.value

    def _log_step(self, stage: str, result: StepResult) -> None:
        if result.is_ok:
            return
        logger.warning(
            f"{stage} {result.outcome.value}: {result.reason}",
            extra={
                "session_id": self.session_id,
                "project_id": self.project_id,
                "stage": stage,
                "outcome": result.outcome.value,
                "reason": result.reason,
            },
        )

    def _error_context(self) -> ErrorContext:
        return ErrorContext(session_id=self.session_id, project_id=self.project_id)

    def _protocol_error_frame(self, error: ProtocolError) -> dict:
        logger.warning(
            f"Protocol error: {error.message}",
            extra={"session_id": self.session_id, "error_code": error.code},
        )
        return error.to_frame()
