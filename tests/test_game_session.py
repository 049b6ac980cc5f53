"""Tests for game session scoring and timing."""

import threading
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest

from api.utils.config import SESSION_TTL_SECONDS
from api.utils.game_session import (
    GameSession,
    SessionFinished,
    correct_answer_of,
    prune_stale_sessions,
    record_if_finished,
)
from api.utils.maths_generators import generate_math_questions
from api.utils.question_bank import fallback_questions


@pytest.fixture
def flashcard_session(rng):
    questions = fallback_questions("science", 1, 3, rng=rng)
    return GameSession("Asha", "science", 1, questions, time_limit=15)


def wrong_answer(question):
    return next(o for o in question.options if o != correct_answer_of(question))


class TestGameSession:

    def test_correct_answer_scores_ten(self, flashcard_session):
        q = flashcard_session.current_question

        result = flashcard_session.answer(q.correct_answer, elapsed_seconds=3)

        assert result.is_correct
        assert result.points_awarded == 10
        assert flashcard_session.score == 10
        assert flashcard_session.index == 1

    def test_wrong_answer_reveals_correct(self, flashcard_session):
        q = flashcard_session.current_question

        result = flashcard_session.answer(wrong_answer(q))

        assert not result.is_correct
        assert result.correct_answer == q.correct_answer
        assert flashcard_session.score == 0

    def test_late_answer_times_out(self, flashcard_session):
        q = flashcard_session.current_question

        result = flashcard_session.answer(q.correct_answer, elapsed_seconds=15.5)

        assert result.timed_out
        assert not result.is_correct
        assert result.points_awarded == 0

    def test_skip_penalty_floored_at_zero(self, flashcard_session):
        assert flashcard_session.skip() == 0

        q = flashcard_session.current_question
        flashcard_session.answer(q.correct_answer)
        assert flashcard_session.score == 10

        assert flashcard_session.skip() == 5

    def test_finishes_after_last_question(self, flashcard_session):
        for _ in range(3):
            flashcard_session.answer(flashcard_session.current_question.correct_answer)

        assert flashcard_session.finished
        assert flashcard_session.current_question is None
        assert flashcard_session.score == 30
        with pytest.raises(SessionFinished):
            flashcard_session.answer("anything")
        with pytest.raises(SessionFinished):
            flashcard_session.skip()

    def test_math_session_untimed(self, rng):
        questions = generate_math_questions(2, 2, rng=rng)
        session = GameSession("Ravi", "math", 2, questions, time_limit=None)

        result = session.answer(questions[0].answer_value, elapsed_seconds=300)

        assert result.is_correct
        assert not result.timed_out

    def test_end_early(self, flashcard_session):
        flashcard_session.end()
        assert flashcard_session.finished

    def test_avatar_defaults_to_student(self, flashcard_session):
        assert flashcard_session.avatar == "student"


class TestRecordScore:
    """A finished game reaches the leaderboard exactly once."""

    def test_unfinished_game_not_recorded(self, flashcard_session):
        with patch("api.utils.game_session.save_score") as save:
            assert record_if_finished(flashcard_session, db=None) is False

        save.assert_not_called()

    def test_repeat_calls_record_once(self, flashcard_session):
        flashcard_session.end()

        with patch("api.utils.game_session.save_score") as save:
            assert record_if_finished(flashcard_session, db=None) is True
            assert record_if_finished(flashcard_session, db=None) is False

        save.assert_called_once_with(None, "Asha", 0, "science", 1)

    def test_concurrent_record_waits_for_first_save(self, flashcard_session):
        flashcard_session.end()
        outcomes = []

        def racing_record():
            outcomes.append(record_if_finished(flashcard_session, db=None))

        racer = threading.Thread(target=racing_record)

        def slow_save(*args):
            # A second request arrives while the first write is in flight
            racer.start()
            racer.join(timeout=0.2)

        with patch("api.utils.game_session.save_score", side_effect=slow_save) as save:
            assert record_if_finished(flashcard_session, db=None) is True
            racer.join()

        assert save.call_count == 1
        assert outcomes == [False]

    def test_failed_save_can_be_retried(self, flashcard_session):
        flashcard_session.end()

        with patch("api.utils.game_session.save_score", side_effect=RuntimeError("db down")):
            with pytest.raises(RuntimeError):
                record_if_finished(flashcard_session, db=None)

        assert flashcard_session.recorded is False


class TestPruneStaleSessions:

    def test_idle_sessions_removed(self, rng):
        now = datetime.now(timezone.utc)
        fresh = GameSession("Asha", "math", 1, generate_math_questions(1, 2, rng=rng), time_limit=None)
        stale = GameSession("Ravi", "math", 1, generate_math_questions(1, 2, rng=rng), time_limit=None)
        stale.last_active = now - timedelta(seconds=SESSION_TTL_SECONDS + 1)
        sessions = {fresh.session_id: fresh, stale.session_id: stale}

        assert prune_stale_sessions(sessions, now=now) == 1
        assert list(sessions) == [fresh.session_id]

    def test_activity_keeps_session_alive(self, flashcard_session):
        flashcard_session.last_active -= timedelta(seconds=SESSION_TTL_SECONDS - 10)
        flashcard_session.skip()
        sessions = {flashcard_session.session_id: flashcard_session}

        assert prune_stale_sessions(sessions) == 0
        assert flashcard_session.session_id in sessions
