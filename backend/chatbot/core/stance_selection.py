"""Stance Selection: choose the primary related question and shape its context.

Invariants:
    - select_primary_question scans in list order with strict '>' so the first
      occurrence of a tied maximum wins
    - Empty input yields None (no context), never an error
    - confidence_percent always has exactly one decimal place
"""

import json
from collections.abc import Sequence
from typing import Any

from chatbot.core.domain_types import RelatedQuestion, StanceContext


def select_primary_question(
    related: Sequence[RelatedQuestion],
) -> RelatedQuestion | None:
    if not related:
        return None
    primary = related[0]
    for candidate in related[1:]:
        if candidate.confidence > primary.confidence:
            primary = candidate
    return primary


def format_confidence(confidence: float) -> str:
    return f"{confidence * 100:.1f}"


def build_stance_context(question: RelatedQuestion, report: Any) -> StanceContext:
    """Context block data for one question and its opaque stance report."""
    return StanceContext(
        question_text=question.text,
        report_body=json.dumps(report, ensure_ascii=False, indent=2),
        asserted_stance_id=question.stance_id,
        confidence_percent=format_confidence(question.confidence),
    )
