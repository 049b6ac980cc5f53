from fastapi import APIRouter
from api.v1.routes.game import game
from api.v1.routes.leaderboard import leaderboard
from api.v1.routes.provider import provider
from api.v1.routes.questions import questions
api_version_one = APIRouter(prefix="/api/v1")

api_version_one.include_router(questions)
api_version_one.include_router(game)
api_version_one.include_router(leaderboard)
api_version_one.include_router(provider)
