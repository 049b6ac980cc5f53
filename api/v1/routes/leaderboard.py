from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Literal, Optional

from api.db.database import get_db
from api.utils.config import LEADERBOARD_LIMIT
from api.utils.leaderboard import clear_leaderboard, load_leaderboard
from api.v1.schemas import leaderboard as schemas

leaderboard = APIRouter(prefix="/leaderboard", tags=["Leaderboard"])


@leaderboard.get("", response_model=schemas.LeaderboardResponse)
def get_leaderboard(
    subject: Optional[Literal["math", "science", "social"]] = None,
    limit: int = Query(default=10, ge=1, le=LEADERBOARD_LIMIT),
    db: Session = Depends(get_db),
):
    entries = load_leaderboard(db)
    if subject:
        entries = [entry for entry in entries if entry.subject == subject]
    return schemas.LeaderboardResponse(entries=entries[:limit], total=len(entries))


@leaderboard.delete("")
def reset_leaderboard(db: Session = Depends(get_db)):
    clear_leaderboard(db)
    return {"message": "Leaderboard cleared."}
