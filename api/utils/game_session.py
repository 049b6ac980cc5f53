import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Optional, Union
from uuid import UUID, uuid4

from sqlalchemy.orm import Session

from api.utils.config import (
    POINTS_PER_CORRECT,
    SECONDS_PER_QUESTION,
    SESSION_TTL_SECONDS,
    SKIP_PENALTY,
)
from api.utils.leaderboard import save_score
from api.v1.schemas.game import AnswerResult
from api.v1.schemas.question import MathQuestion, Question

AnyQuestion = Union[Question, MathQuestion]

logger = logging.getLogger(__name__)


class SessionFinished(Exception):
    """Raised when a finished game receives another answer or skip."""


def correct_answer_of(question: AnyQuestion) -> str:
    if isinstance(question, MathQuestion):
        return question.answer_value
    return question.correct_answer


class GameSession:
    """
    One player's run through a fixed list of questions.

    Flashcard subjects are timed: an answer arriving after
    ``time_limit`` seconds scores nothing. The snake game (math) is not.
    Routes run in a threadpool, so every mutation holds ``lock``.
    """

    def __init__(
        self,
        player_name: str,
        subject: str,
        level: int,
        questions: list,
        time_limit: Optional[float] = SECONDS_PER_QUESTION,
        avatar: str = "student",
    ):
        self.session_id: UUID = uuid4()
        self.player_name = player_name
        self.avatar = avatar
        self.subject = subject
        self.level = level
        self.questions = list(questions)
        self.time_limit = time_limit

        self.index = 0
        self.score = 0
        self.correct = 0
        self.status = "in_progress"
        self.recorded = False
        self.lock = threading.RLock()
        self.last_active = datetime.now(timezone.utc)

    @property
    def finished(self) -> bool:
        return self.status == "completed"

    @property
    def current_question(self) -> Optional[AnyQuestion]:
        if self.finished:
            return None
        return self.questions[self.index]

    def _advance(self):
        self.index += 1
        self.last_active = datetime.now(timezone.utc)
        if self.index >= len(self.questions):
            self.status = "completed"

    def answer(self, selected_answer: str, elapsed_seconds: float = 0.0) -> AnswerResult:
        with self.lock:
            if self.finished:
                raise SessionFinished("This game is already over.")

            question = self.current_question
            correct_answer = correct_answer_of(question)
            timed_out = self.time_limit is not None and elapsed_seconds > self.time_limit
            is_correct = not timed_out and selected_answer == correct_answer

            points = POINTS_PER_CORRECT if is_correct else 0
            self.score += points
            if is_correct:
                self.correct += 1
            self._advance()

            return AnswerResult(
                is_correct=is_correct,
                timed_out=timed_out,
                correct_answer=correct_answer,
                points_awarded=points,
                score=self.score,
                finished=self.finished,
            )

    def skip(self) -> int:
        with self.lock:
            if self.finished:
                raise SessionFinished("This game is already over.")
            self.score = max(0, self.score - SKIP_PENALTY)
            self._advance()
            return self.score

    def end(self):
        with self.lock:
            self.status = "completed"
            self.last_active = datetime.now(timezone.utc)


def record_if_finished(session: GameSession, db: Session) -> bool:
    """Write the final score to the leaderboard once per game."""
    with session.lock:
        if not session.finished or session.recorded:
            return False
        save_score(db, session.player_name, session.score, session.subject, session.level)
        session.recorded = True
        return True


def prune_stale_sessions(sessions: dict, now: datetime = None) -> int:
    """Drop sessions idle for longer than ``SESSION_TTL_SECONDS``."""
    now = now or datetime.now(timezone.utc)
    ttl = timedelta(seconds=SESSION_TTL_SECONDS)

    stale = [sid for sid, session in list(sessions.items()) if now - session.last_active >= ttl]
    for sid in stale:
        sessions.pop(sid, None)
    if stale:
        logger.info("Pruned %d idle game sessions", len(stale))
    return len(stale)
