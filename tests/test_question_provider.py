"""Tests for the AI-with-fallback question provider."""

import asyncio
import json
from unittest.mock import patch

import pytest

from api.utils.errors import InvalidRequest, ProviderCallFailed
from api.utils.gemini_client import GeminiClient, ProviderSettings
from api.utils.question_provider import (
    MathQuestionProvider,
    QuestionProvider,
    get_question_provider,
)
from api.v1.schemas.question import MathQuestion


class FakeClient:
    """Stand-in AI client returning canned text or raising."""

    def __init__(self, text=None, error=None, delay=0.0):
        self.text = text
        self.error = error
        self.delay = delay
        self.prompts = []

    async def generate_text(self, prompt):
        self.prompts.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.text


def ai_entry(question, options=("Red", "Blue", "Green", "Yellow"), correct="Blue"):
    return {"question": question, "options": list(options), "correctAnswer": correct}


def keyed(timeout=5.0):
    return ProviderSettings(api_key="test-key", timeout=timeout)


def run(provider, level, count):
    return asyncio.run(provider.generate(level, count))


def assert_valid(questions, count):
    assert len(questions) == count
    for q in questions:
        assert len(q.options) == 4
        assert len(set(q.options)) == 4
        assert q.correct_answer in q.options


class TestFallbackPath:
    """Every provider failure ends in template questions, never an exception."""

    @pytest.mark.parametrize("error", [
        ProviderCallFailed("HTTP 401"),
        RuntimeError("connection reset"),
        KeyError("candidates"),
    ])
    def test_failing_provider_falls_back(self, error, rng):
        client = FakeClient(error=error)
        provider = QuestionProvider("science", keyed(), client=client, rng=rng)

        questions = run(provider, 2, 15)

        assert_valid(questions, 15)
        assert all(q.source == "template" for q in questions)
        assert len(client.prompts) == 1

    def test_missing_credential_skips_network(self, rng):
        client = FakeClient(text=json.dumps([ai_entry("Never used?")]))
        provider = QuestionProvider("social", ProviderSettings(api_key=None), client=client, rng=rng)

        questions = run(provider, 1, 10)

        assert_valid(questions, 10)
        assert client.prompts == []
        assert all(q.source == "template" for q in questions)

    def test_timeout_is_an_ordinary_failure(self, rng):
        client = FakeClient(text="[]", delay=1.0)
        provider = QuestionProvider("science", keyed(timeout=0.01), client=client, rng=rng)

        questions = run(provider, 0, 5)

        assert_valid(questions, 5)
        assert all(q.source == "template" for q in questions)

    def test_unparsable_response_falls_back(self, rng):
        provider = QuestionProvider("social", keyed(), client=FakeClient(text="Sorry!"), rng=rng)

        questions = run(provider, 4, 8)

        assert_valid(questions, 8)
        assert all(q.source == "template" for q in questions)

    def test_deeply_nested_response_falls_back(self, rng):
        client = FakeClient(text="[" * 100000 + "]" * 100000)
        provider = QuestionProvider("science", keyed(), client=client, rng=rng)

        questions = run(provider, 1, 3)

        assert_valid(questions, 3)
        assert all(q.source == "template" for q in questions)

    def test_parser_crash_becomes_fallback(self, rng):
        provider = QuestionProvider("social", keyed(), client=FakeClient(text="[]"), rng=rng)

        with patch(
            "api.utils.question_provider.parse_generated_questions",
            side_effect=RuntimeError("parser bug"),
        ):
            questions = run(provider, 2, 4)

        assert_valid(questions, 4)
        assert all(q.source == "template" for q in questions)

    def test_failure_is_logged(self, rng, caplog):
        provider = QuestionProvider("science", keyed(), client=FakeClient(error=RuntimeError("boom")), rng=rng)

        with caplog.at_level("WARNING", logger="api.utils.question_provider"):
            run(provider, 1, 3)

        assert "using templates" in caplog.text
        assert "boom" in caplog.text


class TestAIPath:
    """Validated AI questions are returned, short batches are topped up."""

    def test_valid_response_used(self, rng):
        entries = [ai_entry(f"AI question {i}?") for i in range(6)]
        client = FakeClient(text="Sure! " + json.dumps(entries))
        provider = QuestionProvider("science", keyed(), client=client, rng=rng)

        questions = run(provider, 3, 4)

        assert [q.prompt for q in questions] == [f"AI question {i}?" for i in range(4)]
        assert all(q.source == "ai" for q in questions)
        assert "Class 3" in client.prompts[0]

    def test_invalid_entries_discarded_and_topped_up(self, rng):
        entries = [
            ai_entry("Good one?"),
            ai_entry("Three options?", options=("A", "B", "C"), correct="A"),
            ai_entry("Wrong answer?", correct="Purple"),
            ai_entry("Good two?"),
        ]
        provider = QuestionProvider("social", keyed(), client=FakeClient(text=json.dumps(entries)), rng=rng)

        questions = run(provider, 2, 5)

        assert_valid(questions, 5)
        prompts = [q.prompt for q in questions]
        assert prompts[:2] == ["Good one?", "Good two?"]
        assert "Three options?" not in prompts
        assert "Wrong answer?" not in prompts
        assert all(q.source == "template" for q in questions[2:])

    def test_invalid_request_still_raised(self):
        provider = QuestionProvider("science", keyed(), client=FakeClient(error=RuntimeError()))

        with pytest.raises(InvalidRequest):
            run(provider, 1, 0)
        with pytest.raises(InvalidRequest):
            run(provider, -1, 3)


class TestProviderFactory:

    def test_math_provider_returns_math_questions(self, rng):
        provider = get_question_provider("math", ProviderSettings(), rng=rng)

        questions = run(provider, 2, 15)

        assert isinstance(provider, MathQuestionProvider)
        assert len(questions) == 15
        assert all(isinstance(q, MathQuestion) for q in questions)

    def test_flashcard_subjects_use_gemini_client(self):
        provider = get_question_provider("science", keyed())

        assert isinstance(provider, QuestionProvider)
        assert isinstance(provider.client, GeminiClient)

    def test_unknown_subject(self):
        with pytest.raises(KeyError):
            QuestionProvider("music", keyed())

    def test_default_client_without_key_never_posts(self, rng):
        provider = QuestionProvider("science", ProviderSettings(api_key=None), rng=rng)

        with patch("httpx.AsyncClient.post") as post:
            questions = run(provider, 1, 3)

        post.assert_not_called()
        assert len(questions) == 3
