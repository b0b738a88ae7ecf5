from pydantic import BaseModel, ConfigDict
from typing import List, Literal, Optional, Union

class LeaderboardEntry(BaseModel):
    model_config = ConfigDict(extra='allow')

    name: str
    score: Union[int, float]
    timeUsed: Optional[Union[int, float]] = None
    allFlipped: Optional[bool] = None
    date: Optional[Union[str, int, float]] = None

class ScoreResponse(BaseModel):
    status: Literal["success", "rejected"] = "success"
    message: str
    accepted: bool
    reason: Optional[str] = None
    rank: Optional[int] = None
    leaderboard: List[LeaderboardEntry]

class ClearResponse(BaseModel):
    status: Literal["success"] = "success"
    message: str

class HealthResponse(BaseModel):
    status: Literal["healthy"] = "healthy"
    uptime: float
    backend: str
    entries: int

class ErrorResponse(BaseModel):
    error: str
    detail: Optional[str] = None
