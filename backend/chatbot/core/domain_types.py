"""Domain Types: identity types, enums, and value objects shared by every layer.

Invariants:
    - SessionId / MessageId wrap uuid4 hex strings: unique within the process
    - ChatMessage is immutable once created
    - RelatedQuestion.confidence is the backend's classifier score (0.0–1.0)
    - HISTORY_WINDOW is a hard cap, not a tunable default

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (outbound frames are JSON)
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, NewType


# ─── Identity Types ──────────────────────────────────────────────

SessionId = NewType("SessionId", str)
MessageId = NewType("MessageId", str)
ProjectId = NewType("ProjectId", str)


# ─── Constants ───────────────────────────────────────────────────

HISTORY_WINDOW = 5
QUESTIONS_COMMAND = "questions"
SOURCE_TYPE_OTHER = "other"


# ─── Enums ───────────────────────────────────────────────────────

class Sender(str, Enum):
    """Author of a chat message."""
    USER = "user"
    BOT = "bot"


class TurnRole(str, Enum):
    """Model-facing role of a prompt turn."""
    USER = "user"
    ASSISTANT = "assistant"


class Locale(str, Enum):
    """Language of fixed templates and model prompts."""
    JA = "ja"
    EN = "en"


# ─── Value Objects ───────────────────────────────────────────────

@dataclass(frozen=True)
class ChatMessage:
    """One entry of a session history."""
    id: MessageId
    sender: Sender
    content: str
    timestamp: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc),
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "sender": self.sender.value,
            "content": self.content,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class Question:
    """A deliberation question configured on the backend project."""
    id: str
    text: str


@dataclass(frozen=True)
class ClaimAnalysis:
    """Stage-1 output: whether the newest message carries a claim."""
    has_claim: bool = False
    content: str | None = None

    @classmethod
    def empty(cls) -> "ClaimAnalysis":
        return cls()


@dataclass(frozen=True)
class RelatedQuestion:
    """A question the backend classified the submitted claim against."""
    id: str
    text: str
    stance_id: str
    confidence: float


@dataclass(frozen=True)
class MessageAnalysis:
    """Full analyzer output for one turn (both stages)."""
    claim: ClaimAnalysis = field(default_factory=ClaimAnalysis.empty)
    comment_id: str | None = None
    related_questions: tuple[RelatedQuestion, ...] = ()

    @classmethod
    def empty(cls) -> "MessageAnalysis":
        return cls()


@dataclass(frozen=True)
class StanceContext:
    """Supporting analysis injected into one reply prompt."""
    question_text: str
    report_body: str
    asserted_stance_id: str
    confidence_percent: str


@dataclass(frozen=True)
class PromptTurn:
    """One role-tagged text turn sent to the generative model."""
    role: TurnRole
    text: str

    @classmethod
    def user(cls, text: str) -> "PromptTurn":
        return cls(TurnRole.USER, text)

    @classmethod
    def assistant(cls, text: str) -> "PromptTurn":
        return cls(TurnRole.ASSISTANT, text)


@dataclass(frozen=True)
class GenerationConfig:
    """Sampling parameters for one model call. None = provider default."""
    max_output_tokens: int
    temperature: float | None = None
    top_p: float | None = None
    top_k: int | None = None


CLAIM_EXTRACTION_CONFIG = GenerationConfig(
    max_output_tokens=1024, temperature=0.3,
)
REPLY_GENERATION_CONFIG = GenerationConfig(
    max_output_tokens=1024, temperature=0.7, top_p=0.95, top_k=40,
)
