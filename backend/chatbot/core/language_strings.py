"""Language Strings: centralized locale-specific text for replies and model prompts.

Invariants:
    - All strings are pure data (no IO, no computation beyond formatting)
    - Covers every locale in the Locale enum
    - Prompt templates use str.format placeholders only; literal braces are doubled

Design Decisions:
    - One frozen dataclass per locale: a missing field is a constructor error,
      not a silent KeyError at reply time
    - Japanese is the reference locale: the deliberation platform is Japanese-facing
"""

from dataclasses import dataclass

from chatbot.core.domain_types import Locale


@dataclass(frozen=True)
class LocaleStrings:
    questions_header: str
    no_questions: str
    generation_apology: str
    user_label: str
    assistant_label: str
    claim_extraction_prompt: str
    reply_instruction: str
    context_block: str


_JA = LocaleStrings(
    questions_header="論点一覧:",
    no_questions="論点はまだ設定されていません。",
    generation_apology=(
        "すみません、応答の生成中にエラーが発生しました。"
        "APIキーの設定や権限を確認してください。"
    ),
    user_label="ユーザー",
    assistant_label="アシスタント",
    claim_extraction_prompt="""
次の会話履歴とユーザーの最新の発言を読み、厳密なJSONだけを返してください。説明は一切不要です。

会話履歴：
{history}

最新の発言：
{message}

やること：
会話の流れを踏まえて最新の発言に含まれる主張を整理し、次のどちらかの形式で返してください。
主張がはっきりしている場合：{{"hasContent":true,"content":"文脈を踏まえて整理した主張"}}
主張がない・曖昧な場合（挨拶や相づちなど）：{{"hasContent":false}}

守ること：
- 返答は上記のJSON一行のみとし、説明文や改行を含めない
- JSON内の文字列はダブルクォートで囲む
- 分析の対象は最新の発言のみ。会話履歴は文脈の理解にだけ使う
""",
    reply_instruction="""
あなたはユーザーと議論を深めるための議論相手です。次の論点を踏まえてユーザーの発言を読み解き、
ふさわしい論点へ導きながら建設的な議論を進めてください。

【論点一覧】
{questions}

{context}

返答では次の点を意識してください：
1. 発言がいずれかの論点に関係している場合：
   - 分析レポートを参考に、ユーザーとは異なる立場から意見を示す
   - その立場の根拠や具体例を挙げながら議論を展開する
2. 発言が論点から外れている場合：
   - 最も関係の深い論点へ自然に誘導する
   - その論点を議論する意義を伝える
3. 常に建設的で具体的な議論になるよう導く
4. 一方的に主張せず、ユーザーの意見を引き出す

返答の長さや温度感は相手に合わせ、長くても2〜3文にしてください。

重要：初対面の相手との自然な会話のように、温かく親しみやすい口調で返答してください。気持ちのこもった表現は歓迎しますが、絵文字は使わないでください。
""",
    context_block="""
選択された論点「{question_text}」の分析レポート：
{report_body}

あなたの立場: {stance_id}
確信度: {confidence_percent}%
""",
)

_EN = LocaleStrings(
    questions_header="Questions:",
    no_questions="No questions have been configured yet.",
    generation_apology=(
        "Sorry, something went wrong while generating a reply. "
        "Please check the API key configuration and permissions."
    ),
    user_label="User",
    assistant_label="Assistant",
    claim_extraction_prompt="""
Read the conversation history and the user's latest message, then reply with strict JSON only. No explanation.

Conversation history:
{history}

Latest message:
{message}

Task:
Summarize the claim made in the latest message, taking the conversation into account, in one of these forms.
Clear claim: {{"hasContent":true,"content":"the claim, restated with its context"}}
No claim or unclear (greetings, backchannel, etc.): {{"hasContent":false}}

Rules:
- Reply with the JSON above on a single line, with no prose and no line breaks
- Strings inside the JSON must use double quotes
- Analyze only the latest message; use the history for context only
""",
    reply_instruction="""
You are a debate partner helping the user think a topic through. Using the questions below, read the user's message
and move the discussion forward constructively, guiding it toward the right question.

[Questions]
{questions}

{context}

When replying:
1. If the message relates to one of the questions:
   - use the analysis report to argue from a stance different from the user's
   - back that stance with reasons or concrete examples
2. If the message is off-topic:
   - steer naturally toward the most relevant question
   - explain why that question is worth discussing
3. Keep the discussion constructive and concrete
4. Avoid one-sided lecturing; draw out the user's own view

Match the user's length and tone, with at most 2-3 sentences.

Important: reply warmly and conversationally, as if talking to someone you just met. Emotion is welcome, but never use emoji.
""",
    context_block="""
Analysis report for the selected question "{question_text}":
{report_body}

Your stance: {stance_id}
Confidence: {confidence_percent}%
""",
)

_STRINGS: dict[Locale, LocaleStrings] = {
    Locale.JA: _JA,
    Locale.EN: _EN,
}


def get_strings(locale: Locale) -> LocaleStrings:
    """Return the string table for a locale (Japanese fallback)."""
    return _STRINGS.get(locale, _JA)
