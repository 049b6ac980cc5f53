from __future__ import annotations

import os
import random
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Keep the app off the network and off the on-disk database
os.environ["GEMINI_API_KEY"] = ""
os.environ["DATABASE_URL"] = "sqlite://"

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from api.db.database import Base, get_db  # noqa: E402
from api.utils.gemini_client import ProviderSettings  # noqa: E402
from api.v1.models import kv_store  # noqa: E402,F401


class ScriptedRandom(random.Random):
    """Random source whose first ``randint`` calls return scripted values."""

    def __init__(self, ints=(), seed=0):
        super().__init__(seed)
        self.scripted = list(ints)

    def randint(self, a, b):
        if self.scripted:
            value = self.scripted.pop(0)
            assert a <= value <= b, f"scripted {value} outside [{a}, {b}]"
            return value
        return super().randint(a, b)


# ====================
# Random Fixtures
# ====================

@pytest.fixture
def rng():
    """Seeded random source for reproducible property checks."""
    return random.Random(1234)


@pytest.fixture
def scripted_rng():
    """Factory for random sources with fixed leading ``randint`` values."""
    return ScriptedRandom


# ====================
# Database Fixtures
# ====================

@pytest.fixture
def db_session():
    """Fresh in-memory SQLite session per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


# ====================
# API Fixtures
# ====================

@pytest.fixture
def client(db_session):
    """TestClient wired to the in-memory database and no AI credential."""
    from main import app
    from api.v1.routes.game import game_sessions

    app.dependency_overrides[get_db] = lambda: db_session
    app.state.provider_settings = ProviderSettings(api_key=None)
    game_sessions.clear()

    yield TestClient(app)

    app.dependency_overrides.clear()
    game_sessions.clear()
