import os
from dotenv import load_dotenv

load_dotenv(".env")

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or None
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")
GEMINI_ENDPOINT = os.getenv(
    "GEMINI_ENDPOINT", "https://generativelanguage.googleapis.com/v1beta"
)
PROVIDER_TIMEOUT = float(os.getenv("PROVIDER_TIMEOUT", "30"))

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./learnio.db")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# --- Game rules ---
SUBJECTS = ("math", "science", "social")
MAX_LEVEL = 5
QUESTIONS_PER_GAME = 15
SECONDS_PER_QUESTION = 15
POINTS_PER_CORRECT = 10
SKIP_PENALTY = 5

LEADERBOARD_KEY = "learnio_leaderboard"
LEADERBOARD_LIMIT = 50

DEFAULT_PLAYER_NAME = "Hero"
SESSION_TTL_SECONDS = 3600
