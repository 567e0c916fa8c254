"""Prompt Assembly: pure tests for history trimming, question lists and conversations.

Tests cover:
    - History window capped at 5, most recent kept
    - Questions command detection (trim + case-fold)
    - Question list formatting (empty and numbered)
    - Reply conversation order, roles and context injection
    - Claim-extraction prompt content
"""

from chatbot.core.compose_prompt import (
    build_claim_extraction_prompt,
    build_conversation,
    build_instruction,
    format_chat_history,
    format_questions_list,
    is_questions_command,
    trim_history,
)
from chatbot.core.domain_types import (
    ChatMessage, Locale, Question, Sender, StanceContext, TurnRole,
)
from chatbot.core.language_strings import get_strings


def _history(n):
    return [
        ChatMessage(
            id=str(i),
            sender=Sender.USER if i % 2 == 0 else Sender.BOT,
            content=f"m{i}",
        )
        for i in range(n)
    ]


def _context():
    return StanceContext(
        question_text="Should X?",
        report_body='{\n  "summary": "ok"\n}',
        asserted_stance_id="against",
        confidence_percent="90.0",
    )


# --- History window ------------------------------------------------------------

def test_trim_history_keeps_last_five():
    trimmed = trim_history(_history(8))
    assert [m.content for m in trimmed] == ["m3", "m4", "m5", "m6", "m7"]


def test_trim_history_short_history_unchanged():
    assert [m.content for m in trim_history(_history(2))] == ["m0", "m1"]


def test_format_chat_history_uses_role_labels(strings):
    text = format_chat_history(_history(2), strings)
    assert text == "ユーザー: m0\nアシスタント: m1"


# --- Questions command -----------------------------------------------------------

def test_questions_command_is_case_insensitive_and_trimmed():
    assert is_questions_command("questions")
    assert is_questions_command("QUESTIONS")
    assert is_questions_command("  Questions \n")


def test_questions_command_requires_exact_token():
    assert not is_questions_command("questions?")
    assert not is_questions_command("show questions")
    assert not is_questions_command("")


def test_format_questions_list_empty(strings):
    assert format_questions_list([], strings) == "論点はまだ設定されていません。"


def test_format_questions_list_numbered_in_order(strings):
    questions = [Question("a", "Q1"), Question("b", "Q2")]
    assert format_questions_list(questions, strings) == "論点一覧:\n1. Q1\n2. Q2"


def test_format_questions_list_english():
    strings = get_strings(Locale.EN)
    questions = [Question("a", "Q1")]
    assert format_questions_list(questions, strings) == "Questions:\n1. Q1"


# --- Reply conversation ----------------------------------------------------------

def test_conversation_order_instruction_history_message(strings):
    turns = build_conversation(
        [Question("a", "Q1")], None, _history(3), "latest", strings,
    )
    assert len(turns) == 1 + 3 + 1
    assert turns[0].role == TurnRole.USER
    assert "1. Q1" in turns[0].text
    assert [t.text for t in turns[1:4]] == ["m0", "m1", "m2"]
    assert turns[-1].role == TurnRole.USER
    assert turns[-1].text == "latest"


def test_conversation_maps_bot_to_assistant_role(strings):
    turns = build_conversation([], None, _history(2), "x", strings)
    assert turns[1].role == TurnRole.USER
    assert turns[2].role == TurnRole.ASSISTANT


def test_conversation_caps_history_at_five(strings):
    turns = build_conversation([], None, _history(12), "x", strings)
    assert len(turns) == 1 + 5 + 1
    assert turns[1].text == "m7"


def test_current_message_passed_verbatim(strings):
    message = "  spaced {braces} message  "
    turns = build_conversation([], None, [], message, strings)
    assert turns[-1].text == message


def test_instruction_includes_context_block(strings):
    text = build_instruction([Question("a", "Should X?")], _context(), strings)
    assert "「Should X?」" in text
    assert '"summary": "ok"' in text
    assert "あなたの立場: against" in text
    assert "確信度: 90.0%" in text


def test_instruction_without_context_has_no_report(strings):
    text = build_instruction([Question("a", "Should X?")], None, strings)
    assert "分析レポート：" not in text
    assert "絵文字" in text


# --- Claim extraction prompt -----------------------------------------------------

def test_claim_prompt_embeds_window_and_message(strings):
    prompt = build_claim_extraction_prompt(_history(7), "I disagree", strings)
    assert "ユーザー: m2" in prompt
    assert "m1" not in prompt
    assert "I disagree" in prompt
    assert '{"hasContent":false}' in prompt
