import json
import logging
import threading
from datetime import datetime, timezone

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.orm import Session

from api.utils.config import LEADERBOARD_KEY, LEADERBOARD_LIMIT
from api.v1.models.kv_store import KeyValue
from api.v1.schemas.leaderboard import LeaderboardEntry

logger = logging.getLogger(__name__)

_entries_adapter = TypeAdapter(list[LeaderboardEntry])

# Serializes the load-append-store cycle in save_score
_leaderboard_lock = threading.Lock()


def load_leaderboard(db: Session) -> list[LeaderboardEntry]:
    """Stored entries, best score first. A corrupt blob reads as empty."""
    row = db.get(KeyValue, LEADERBOARD_KEY)
    if row is None:
        return []
    try:
        entries = _entries_adapter.validate_json(row.value)
    except ValidationError as e:
        logger.error("Error loading leaderboard, starting fresh: %s", e)
        return []
    return sorted(entries, key=lambda entry: entry.score, reverse=True)


def _store(db: Session, entries: list[LeaderboardEntry]) -> None:
    blob = json.dumps([entry.model_dump(mode="json") for entry in entries])
    row = db.get(KeyValue, LEADERBOARD_KEY)
    if row is None:
        db.add(KeyValue(key=LEADERBOARD_KEY, value=blob))
    else:
        row.value = blob
    db.commit()


def save_score(
    db: Session, name: str, score: int, subject: str, level: int, timestamp: datetime = None
) -> LeaderboardEntry:
    entry = LeaderboardEntry(
        name=name,
        score=score,
        timestamp=timestamp or datetime.now(timezone.utc),
        subject=subject,
        level=level,
    )

    with _leaderboard_lock:
        entries = load_leaderboard(db)
        entries.append(entry)
        entries.sort(key=lambda e: e.score, reverse=True)
        _store(db, entries[:LEADERBOARD_LIMIT])

    logger.info("Saved score %d for %s (%s, level %d)", score, name, subject, level)
    return entry


def clear_leaderboard(db: Session) -> None:
    row = db.get(KeyValue, LEADERBOARD_KEY)
    if row is not None:
        db.delete(row)
        db.commit()
