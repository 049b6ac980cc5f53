import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from api.db.database import get_db
from api.utils.config import QUESTIONS_PER_GAME, SECONDS_PER_QUESTION
from api.utils.game_session import (
    GameSession,
    SessionFinished,
    prune_stale_sessions,
    record_if_finished,
)
from api.utils.gemini_client import ProviderSettings
from api.utils.question_provider import get_question_provider
from api.v1.routes.provider import get_provider_settings
from api.v1.schemas import game as schemas
from api.v1.schemas.question import QuestionOut

game = APIRouter(prefix="/game", tags=["Game"])
logger = logging.getLogger(__name__)

# --- In-memory session store ---
game_sessions: dict[UUID, GameSession] = {}


def get_session(session_id: UUID) -> GameSession:
    session = game_sessions.get(session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Game session not found.")
    return session


def to_state(session: GameSession) -> schemas.GameState:
    current = session.current_question
    current_out = None
    if current is not None:
        current_out = QuestionOut(
            index=session.index,
            prompt=current.prompt,
            options=current.options,
            difficulty=current.difficulty,
            image_hint=getattr(current, "image_hint", None),
        )

    return schemas.GameState(
        session_id=session.session_id,
        player_name=session.player_name,
        avatar=session.avatar,
        subject=session.subject,
        level=session.level,
        score=session.score,
        correct=session.correct,
        answered=session.index,
        total_questions=len(session.questions),
        status=session.status,
        time_limit=session.time_limit,
        current_question=current_out,
    )


# --- 1. Start Game ---
@game.post("/start", response_model=schemas.GameState)
async def start_game(
    payload: schemas.StartGameRequest,
    settings: ProviderSettings = Depends(get_provider_settings),
):
    prune_stale_sessions(game_sessions)

    provider = get_question_provider(payload.subject, settings)
    questions = await provider.generate(payload.level, QUESTIONS_PER_GAME)

    # The snake game has no per-question timer
    time_limit = None if payload.subject == "math" else SECONDS_PER_QUESTION
    session = GameSession(
        payload.player_name,
        payload.subject,
        payload.level,
        questions,
        time_limit=time_limit,
        avatar=payload.avatar,
    )
    game_sessions[session.session_id] = session

    logger.info(
        "Started %s game for %s at level %d", payload.subject, session.player_name, payload.level
    )
    return to_state(session)


# --- 2. Current State ---
@game.get("/{session_id}", response_model=schemas.GameState)
def get_game_state(session_id: UUID):
    return to_state(get_session(session_id))


# --- 3. Answer Current Question ---
@game.post("/{session_id}/answer", response_model=schemas.AnswerResult)
def answer_question(
    session_id: UUID,
    payload: schemas.AnswerRequest,
    db: Session = Depends(get_db),
):
    session = get_session(session_id)
    try:
        result = session.answer(payload.selected_answer, payload.elapsed_seconds)
    except SessionFinished as e:
        raise HTTPException(status_code=409, detail=str(e))

    record_if_finished(session, db)
    return result


# --- 4. Skip Current Question ---
@game.post("/{session_id}/skip", response_model=schemas.SkipResult)
def skip_question(session_id: UUID, db: Session = Depends(get_db)):
    session = get_session(session_id)
    try:
        score = session.skip()
    except SessionFinished as e:
        raise HTTPException(status_code=409, detail=str(e))

    record_if_finished(session, db)
    return schemas.SkipResult(score=score, finished=session.finished)


# --- 5. End Game Early ---
@game.post("/{session_id}/end", response_model=schemas.GameState)
def end_game(session_id: UUID, db: Session = Depends(get_db)):
    session = get_session(session_id)
    session.end()
    record_if_finished(session, db)
    return to_state(session)
