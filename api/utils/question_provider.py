import asyncio
import logging
import random

from api.utils.errors import (
    MalformedResponse,
    ProviderCallFailed,
    ProviderUnavailable,
    QuestionGenerationError,
    check_request,
)
from api.utils.gemini_client import GeminiClient, ProviderSettings
from api.utils.maths_generators import generate_math_questions
from api.utils.prompts import build_question_prompt
from api.utils.question_bank import SUBJECT_TOPICS, fallback_questions
from api.utils.response_parser import parse_generated_questions

logger = logging.getLogger(__name__)


class QuestionProvider:
    """
    Questions for one flashcard subject (``science`` or ``social``).

    The AI provider is tried once; any failure falls back to the template
    bank, and a short AI batch is topped up from it. Only precondition
    violations (``InvalidRequest``) reach the caller.
    """

    def __init__(self, subject: str, settings: ProviderSettings, client=None, rng=None):
        if subject not in SUBJECT_TOPICS:
            raise KeyError(f"No question bank for subject '{subject}'")
        self.subject = subject
        self.settings = settings
        self.client = client or GeminiClient(settings)
        self.rng = rng or random

    async def generate(self, level: int, count: int):
        check_request(level, count)

        try:
            questions = await self._generate_with_ai(level, count)
        except QuestionGenerationError as e:
            logger.warning(
                "AI generation failed for %s level %d (%s: %s); using templates",
                self.subject, level, type(e).__name__, e,
            )
            return fallback_questions(self.subject, level, count, self.rng)

        missing = count - len(questions)
        if missing > 0:
            logger.info(
                "AI returned %d of %d %s questions; topping up from templates",
                len(questions), count, self.subject,
            )
            questions += fallback_questions(self.subject, level, missing, self.rng)
        return questions

    async def _generate_with_ai(self, level: int, count: int):
        if not self.settings.configured:
            raise ProviderUnavailable("no API key configured")

        prompt = build_question_prompt(self.subject, level, count)
        try:
            text = await asyncio.wait_for(
                self.client.generate_text(prompt), timeout=self.settings.timeout
            )
        except asyncio.TimeoutError as e:
            raise ProviderCallFailed(
                f"provider timed out after {self.settings.timeout}s"
            ) from e
        except QuestionGenerationError:
            raise
        except Exception as e:
            raise ProviderCallFailed(str(e)) from e

        try:
            result = parse_generated_questions(text, count, level)
        except Exception as e:
            raise MalformedResponse(f"unreadable response: {type(e).__name__}") from e
        if not result.ok:
            raise MalformedResponse(result.error)
        if result.rejected:
            logger.info("Discarded %d invalid AI questions", result.rejected)
        return list(result.questions)


class MathQuestionProvider:
    """Same ``generate`` contract for math, backed by the arithmetic generator."""

    subject = "math"

    def __init__(self, rng=None):
        self.rng = rng or random

    async def generate(self, level: int, count: int):
        return generate_math_questions(level, count, self.rng)


def get_question_provider(subject: str, settings: ProviderSettings, rng=None):
    if subject == "math":
        return MathQuestionProvider(rng=rng)
    return QuestionProvider(subject, settings, rng=rng)
