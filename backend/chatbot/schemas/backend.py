"""Deliberation Backend Schemas: validation for backend REST payloads.

Invariants:
    - Unknown fields are ignored (the backend returns richer documents)
    - A missing or null question list means "no questions"
    - Only the first stance of each analyzed question is used; questions with
      no stance are dropped (the backend ranks stances by confidence)

Design Decisions:
    - camelCase wire names via aliases; snake_case in Python
"""

from pydantic import BaseModel, ConfigDict, Field

from chatbot.core.domain_types import SOURCE_TYPE_OTHER, Question, RelatedQuestion


class _BackendModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class QuestionPayload(_BackendModel):
    id: str
    text: str

    def to_domain(self) -> Question:
        return Question(id=self.id, text=self.text)


class ProjectPayload(_BackendModel):
    questions: list[QuestionPayload] | None = None

    def to_domain(self) -> list[Question]:
        return [q.to_domain() for q in self.questions or []]


class CommentCreate(_BackendModel):
    """Body of POST /projects/{id}/comments."""
    content: str
    source_type: str = Field(SOURCE_TYPE_OTHER, alias="sourceType")
    source_url: str | None = Field(None, alias="sourceUrl")


class StanceClassification(_BackendModel):
    question_id: str | None = Field(None, alias="questionId")
    stance_id: str = Field(alias="stanceId")
    confidence: float


class AnalyzedQuestion(_BackendModel):
    id: str
    text: str
    stances: list[StanceClassification] = Field(default_factory=list)


class CreatedComment(_BackendModel):
    id: str = Field(alias="_id")


class CommentSubmission(_BackendModel):
    """Response of POST /projects/{id}/comments."""
    comment: CreatedComment
    analyzed_questions: list[AnalyzedQuestion] = Field(
        default_factory=list, alias="analyzedQuestions",
    )

    @property
    def comment_id(self) -> str:
        return self.comment.id

    def related_questions(self) -> list[RelatedQuestion]:
        related = []
        for question in self.analyzed_questions:
            if not question.stances:
                continue
            top = question.stances[0]
            related.append(RelatedQuestion(
                id=question.id,
                text=question.text,
                stance_id=top.stance_id,
                confidence=top.confidence,
            ))
        return related
