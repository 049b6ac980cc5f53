import json
import logging
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from api.v1.schemas.question import OPTION_COUNT, Question

logger = logging.getLogger(__name__)


class GeneratedQuestion(BaseModel):
    """One entry of the JSON array the AI provider is asked to return."""

    question: str
    options: List[str]
    correct_answer: str = Field(alias="correctAnswer")
    image_prompt: Optional[str] = Field(default=None, alias="imagePrompt")
    explanation: Optional[str] = None

    @field_validator("question", "correct_answer")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @model_validator(mode="after")
    def answer_among_options(self):
        if len(self.options) != OPTION_COUNT:
            raise ValueError(f"expected {OPTION_COUNT} options")
        if len(set(self.options)) != OPTION_COUNT:
            raise ValueError("options must be distinct")
        if self.correct_answer not in self.options:
            raise ValueError("correctAnswer is not one of the options")
        return self

    def to_question(self, level: int) -> Question:
        return Question(
            prompt=self.question,
            options=list(self.options),
            correct_answer=self.correct_answer,
            difficulty=level,
            topic="ai",
            source="ai",
            image_hint=self.image_prompt,
            explanation=self.explanation,
        )


class ParseResult(BaseModel):
    questions: List[Question] = []
    rejected: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.questions)


def extract_json_array(text: str) -> Optional[str]:
    """Return the substring from the first ``[`` to the last ``]``, if any."""
    start = text.find("[")
    end = text.rfind("]")
    if start == -1 or end <= start:
        return None
    return text[start : end + 1]


def parse_generated_questions(text: str, count: int, level: int) -> ParseResult:
    """
    Read questions out of free-form provider text.

    Entries that fail validation are dropped; the rest are truncated to
    ``count``. Never raises: failures are reported through ``error``.
    """
    raw = extract_json_array(text or "")
    if raw is None:
        return ParseResult(error="no JSON array found in response")

    try:
        entries = json.loads(raw)
    except json.JSONDecodeError as e:
        return ParseResult(error=f"invalid JSON: {e}")
    except RecursionError:
        return ParseResult(error="invalid JSON: nested too deeply")

    if not isinstance(entries, list):
        return ParseResult(error="response JSON is not an array")

    questions = []
    rejected = 0
    for entry in entries:
        if not isinstance(entry, dict):
            rejected += 1
            continue
        try:
            questions.append(GeneratedQuestion.model_validate(entry).to_question(level))
        except ValidationError as e:
            rejected += 1
            logger.debug("Discarding generated question: %s", e.errors()[0]["msg"])

    if not questions:
        return ParseResult(rejected=rejected, error="no valid questions in response")

    return ParseResult(questions=questions[:count], rejected=rejected)
