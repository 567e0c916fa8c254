"""Model Reply Schemas: validation of the claim-extraction JSON reply.

Invariants:
    - hasContent must be a JSON boolean (no "true" strings, no 0/1)
    - hasContent=true requires content to be a JSON string
    - parse_claim_reply never raises; structural errors are returned, not thrown
    - Blank content is treated as no claim
"""

from dataclasses import dataclass
from typing import Any

from pydantic import (
    BaseModel, ConfigDict, Field, StrictBool, ValidationError, model_validator,
)

from chatbot.core.domain_types import ClaimAnalysis


class ClaimExtractionReply(BaseModel):
    model_config = ConfigDict(extra="ignore")

    has_content: StrictBool = Field(alias="hasContent")
    content: Any = None

    @model_validator(mode="after")
    def content_required_with_claim(self) -> "ClaimExtractionReply":
        if self.has_content and not isinstance(self.content, str):
            raise ValueError("content must be a string when hasContent is true")
        return self


@dataclass(frozen=True)
class ClaimParse:
    """Tagged result: well-formed analysis, or the structural error."""
    analysis: ClaimAnalysis
    error: str | None = None

    @property
    def well_formed(self) -> bool:
        return self.error is None


def parse_claim_reply(text: str) -> ClaimParse:
    try:
        reply = ClaimExtractionReply.model_validate_json(text.strip())
    except ValidationError as e:
        errors = e.errors()
        reason = errors[0]["msg"] if errors else str(e)
        return ClaimParse(ClaimAnalysis.empty(), error=reason)
    if not reply.has_content or not reply.content or not reply.content.strip():
        return ClaimParse(ClaimAnalysis.empty())
    return ClaimParse(ClaimAnalysis(has_claim=True, content=reply.content))
