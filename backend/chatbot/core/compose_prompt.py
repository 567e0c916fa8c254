"""Prompt Assembly: pure functions from conversation state to model input.

Invariants:
    - All functions are pure (no IO, no async, no network)
    - History is always truncated to the last HISTORY_WINDOW entries before use
    - Reply conversation order: instruction turn, history turns, current message
    - The current user message is passed verbatim (never trimmed or rewritten)

Design Decisions:
    - Prompt text lives in language_strings; this module only selects and joins
    - build_conversation returns PromptTurn values, not SDK dicts: the model
      client owns the wire format
"""

from collections.abc import Sequence

from chatbot.core.domain_types import (
    HISTORY_WINDOW,
    QUESTIONS_COMMAND,
    ChatMessage,
    PromptTurn,
    Question,
    Sender,
    StanceContext,
)
from chatbot.core.language_strings import LocaleStrings


def trim_history(history: Sequence[ChatMessage]) -> list[ChatMessage]:
    """Return the most recent HISTORY_WINDOW messages, oldest first."""
    return list(history[-HISTORY_WINDOW:])


def format_chat_history(
    history: Sequence[ChatMessage], strings: LocaleStrings,
) -> str:
    """Render history as '<role label>: <content>' lines."""
    lines = []
    for msg in history:
        label = strings.user_label if msg.sender == Sender.USER else strings.assistant_label
        lines.append(f"{label}: {msg.content}")
    return "\n".join(lines)


def is_questions_command(content: str) -> bool:
    return content.strip().casefold() == QUESTIONS_COMMAND


def number_questions(questions: Sequence[Question]) -> str:
    return "\n".join(f"{i}. {q.text}" for i, q in enumerate(questions, start=1))


def format_questions_list(
    questions: Sequence[Question], strings: LocaleStrings,
) -> str:
    """Reply text for the questions command."""
    if not questions:
        return strings.no_questions
    return f"{strings.questions_header}\n{number_questions(questions)}"


def build_claim_extraction_prompt(
    history: Sequence[ChatMessage], message: str, strings: LocaleStrings,
) -> str:
    return strings.claim_extraction_prompt.format(
        history=format_chat_history(trim_history(history), strings),
        message=message,
    )


def render_context_block(context: StanceContext, strings: LocaleStrings) -> str:
    return strings.context_block.format(
        question_text=context.question_text,
        report_body=context.report_body,
        stance_id=context.asserted_stance_id,
        confidence_percent=context.confidence_percent,
    )


def build_instruction(
    questions: Sequence[Question],
    context: StanceContext | None,
    strings: LocaleStrings,
) -> str:
    """Leading instruction turn: question list, optional context, directives."""
    return strings.reply_instruction.format(
        questions=number_questions(questions),
        context=render_context_block(context, strings) if context else "",
    )


def history_turns(history: Sequence[ChatMessage]) -> list[PromptTurn]:
    return [
        PromptTurn.user(m.content) if m.sender == Sender.USER
        else PromptTurn.assistant(m.content)
        for m in trim_history(history)
    ]


def build_conversation(
    questions: Sequence[Question],
    context: StanceContext | None,
    history: Sequence[ChatMessage],
    message: str,
    strings: LocaleStrings,
) -> list[PromptTurn]:
    """Full ordered conversation for reply generation."""
    return [
        PromptTurn.user(build_instruction(questions, context, strings)),
        *history_turns(history),
        PromptTurn.user(message),
    ]
