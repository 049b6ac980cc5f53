from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List, Literal, Optional

from api.utils.gemini_client import ProviderSettings
from api.utils.maths_generators import TOPIC_GENERATORS
from api.utils.maths_generators import generate_math_questions
from api.utils.question_bank import SUBJECT_TOPICS, available_topics
from api.utils.question_provider import QuestionProvider
from api.v1.routes.provider import get_provider_settings
from api.v1.schemas.question import MathQuestion, Question, TopicList

questions = APIRouter(prefix="/questions", tags=["Questions"])


# --- 1. Get Available Topics ---
@questions.get("/topics", response_model=TopicList)
def get_available_topics(
    subject: Literal["math", "science", "social"],
    level: int = Query(default=0, ge=0, le=5),
):
    if subject == "math":
        topics = list(TOPIC_GENERATORS)
    else:
        topics = available_topics(subject, level)
    return TopicList(subject=subject, level=level, topics=topics)


# --- 2. Math Questions ---
@questions.get("/math", response_model=List[MathQuestion])
def get_math_questions(
    level: int = Query(default=0, ge=0, le=5),
    count: int = Query(default=15, ge=1, le=50),
    topic: Optional[str] = None,
):
    if topic is None:
        return generate_math_questions(level, count)

    generator_fn = TOPIC_GENERATORS.get(topic)
    if not generator_fn:
        raise HTTPException(status_code=404, detail="Invalid topic selected.")
    difficulty = max(1, level)
    return [generator_fn(difficulty) for _ in range(count)]


# --- 3. Flashcard Questions (AI with template fallback) ---
@questions.get("/{subject}", response_model=List[Question])
async def get_subject_questions(
    subject: str,
    level: int = Query(default=0, ge=0, le=5),
    count: int = Query(default=15, ge=1, le=50),
    settings: ProviderSettings = Depends(get_provider_settings),
):
    if subject not in SUBJECT_TOPICS:
        raise HTTPException(status_code=404, detail=f"Unknown subject '{subject}'.")

    provider = QuestionProvider(subject, settings)
    return await provider.generate(level, count)
