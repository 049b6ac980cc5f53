from pydantic import BaseModel, Field
from typing import List, Literal
from datetime import datetime


# 🏆 1. One completed game
class LeaderboardEntry(BaseModel):
    name: str
    score: int = Field(ge=0)
    timestamp: datetime
    subject: Literal["math", "science", "social"]
    level: int = Field(ge=0, le=5)


# 🏆 2. Ranked listing
class LeaderboardResponse(BaseModel):
    entries: List[LeaderboardEntry]
    total: int
