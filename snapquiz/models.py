"""Pydantic models for generated quizzes and generation diagnostics."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

from snapquiz.config import TIME_LIMIT_SECONDS

OPTION_COUNT = 4


class Question(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # strict ints: booleans, numeric strings and floats are rejected, not coerced
    id: int = Field(..., strict=True, description="1-based position of the question in the quiz")
    question: str
    options: List[str] = Field(..., min_length=OPTION_COUNT, max_length=OPTION_COUNT)
    correct_answer: int = Field(..., alias="correctAnswer", strict=True, ge=0, le=OPTION_COUNT - 1)
    explanation: Optional[str] = None

    @field_validator("question")
    @classmethod
    def _question_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("question text is empty")
        return value

    @field_validator("options")
    @classmethod
    def _options_distinct(cls, value: List[str]) -> List[str]:
        cleaned = [opt.strip() for opt in value]
        if any(not opt for opt in cleaned):
            raise ValueError("options must not be blank")
        if len(set(cleaned)) != len(cleaned):
            raise ValueError("options must be distinct")
        return cleaned


class Quiz(BaseModel):
    model_config = ConfigDict(frozen=True)

    questions: List[Question] = Field(..., min_length=1)

    @model_validator(mode="after")
    def _sequential_ids(self) -> "Quiz":
        ids = [q.id for q in self.questions]
        if len(set(ids)) != len(ids):
            raise ValueError("question ids must be unique")
        if ids != list(range(1, len(ids) + 1)):
            raise ValueError("question ids must run 1..n in order")
        return self

    @computed_field(alias="totalQuestions")
    @property
    def total_questions(self) -> int:
        return len(self.questions)


class GeneratedQuiz(BaseModel):
    """A validated quiz together with the model that wrote it."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    quiz: Quiz
    model_used: str
    time_limit_seconds: int = TIME_LIMIT_SECONDS

    def to_payload(self) -> Dict[str, Any]:
        data = self.quiz.model_dump(by_alias=True, exclude_none=True)
        data["timeLimit"] = self.time_limit_seconds
        data["modelUsed"] = self.model_used
        return data


class GenerationAttempt(BaseModel):
    model: str
    ok: bool
    error: Optional[str] = None


class DiagnosticsReport(BaseModel):
    ok: bool
    working_model: Optional[str] = None
    tried: List[GenerationAttempt] = Field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "ok": self.ok,
            "tried": [a.model_dump(exclude_none=True) for a in self.tried],
        }
        if self.ok:
            payload["workingModel"] = self.working_model
        else:
            payload["error"] = "All models failed"
        return payload
