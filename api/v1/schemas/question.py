from pydantic import BaseModel, Field, model_validator
from typing import List, Optional, Literal

OPTION_COUNT = 4


def _check_options(options: List[str], correct: str) -> None:
    if len(options) != OPTION_COUNT:
        raise ValueError(f"expected {OPTION_COUNT} options, got {len(options)}")
    if len(set(options)) != len(options):
        raise ValueError("options must be distinct")
    if correct not in options:
        raise ValueError("correct answer must be one of the options")


# 🧠 1. Subject-agnostic quiz unit
class Question(BaseModel):
    model_config = {"frozen": True}

    prompt: str
    options: List[str]
    correct_answer: str
    difficulty: int = Field(ge=0)
    topic: str
    source: Literal["ai", "template"] = "template"
    image_hint: Optional[str] = None
    explanation: Optional[str] = None

    @model_validator(mode="after")
    def validate_options(self):
        _check_options(self.options, self.correct_answer)
        return self


# 🔢 2. Arithmetic question for the snake game
class MathQuestion(BaseModel):
    model_config = {"frozen": True}

    prompt: str
    answer_value: str
    options: List[str]
    difficulty: int = Field(ge=0)
    topic: Literal["addition", "subtraction", "multiplication", "division"]

    @model_validator(mode="after")
    def validate_options(self):
        _check_options(self.options, self.answer_value)
        return self


# 📚 3. Topic listing
class TopicList(BaseModel):
    subject: str
    level: int
    topics: List[str]


# 📩 4. Client-facing question (answer withheld)
class QuestionOut(BaseModel):
    index: int
    prompt: str
    options: List[str]
    difficulty: int
    image_hint: Optional[str] = None
