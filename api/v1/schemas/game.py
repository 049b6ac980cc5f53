from pydantic import BaseModel, Field, field_validator
from typing import Optional, Literal
from uuid import UUID

from api.utils.config import DEFAULT_PLAYER_NAME
from api.v1.schemas.question import QuestionOut

Avatar = Literal["student", "scientist", "explorer"]


# 🎮 1. Start Game Request
class StartGameRequest(BaseModel):
    player_name: Optional[str] = Field(default=DEFAULT_PLAYER_NAME, max_length=30)
    avatar: Avatar = "student"
    subject: Literal["math", "science", "social"]
    level: int = Field(default=0, ge=0, le=5)

    @field_validator("player_name")
    @classmethod
    def default_blank_name(cls, value):
        name = (value or "").strip()
        return name or DEFAULT_PLAYER_NAME


# 🎮 2. Game State
class GameState(BaseModel):
    session_id: UUID
    player_name: str
    avatar: Avatar
    subject: str
    level: int
    score: int
    correct: int
    answered: int
    total_questions: int
    status: Literal["in_progress", "completed"]
    time_limit: Optional[float] = None
    current_question: Optional[QuestionOut] = None


# ✅ 3. Answer Submission
class AnswerRequest(BaseModel):
    selected_answer: str
    elapsed_seconds: float = Field(default=0.0, ge=0)


# ✅ 4. Answer Result
class AnswerResult(BaseModel):
    is_correct: bool
    timed_out: bool
    correct_answer: str
    points_awarded: int
    score: int
    finished: bool


# ⏭️ 5. Skip Result
class SkipResult(BaseModel):
    score: int
    finished: bool
