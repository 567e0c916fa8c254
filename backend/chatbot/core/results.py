"""Step Results: typed outcome of one pipeline component.

Invariants:
    - Every component call yields exactly one StepResult
    - value is always usable: degraded/failed results carry the reduced value
    - reason is set whenever outcome is not OK

Design Decisions:
    - Result values over exceptions at component seams: the orchestrator reads
      outcome and alone decides between silent fallback and an error frame
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class Outcome(str, Enum):
    OK = "ok"
    DEGRADED = "degraded"
    FAILED = "failed"


@dataclass(frozen=True)
class StepResult(Generic[T]):
    outcome: Outcome
    value: T
    reason: str | None = None

    @classmethod
    def ok(cls, value: T) -> "StepResult[T]":
        return cls(Outcome.OK, value)

    @classmethod
    def degraded(cls, value: T, reason: str) -> "StepResult[T]":
        return cls(Outcome.DEGRADED, value, reason)

    @classmethod
    def failed(cls, value: T, reason: str) -> "StepResult[T]":
        return cls(Outcome.FAILED, value, reason)

    @property
    def is_ok(self) -> bool:
        return self.outcome == Outcome.OK
