from typing import List
from fastapi import APIRouter, HTTPException
from ..models.response import ClearResponse, LeaderboardEntry
from ..database import LeaderboardManager, PersistenceError, StoreError
from ..logger import get_logger

logger = get_logger()
router = APIRouter()

@router.get("/leaderboard/top10", response_model=List[LeaderboardEntry],
            response_model_exclude_unset=True)
@router.get("/leaderboard", response_model=List[LeaderboardEntry],
            response_model_exclude_unset=True)
async def get_leaderboard():
    """
    Get the current ranking, best first.
    """
    try:
        db = await LeaderboardManager.get_instance()
        entries = await db.top()
        logger.debug(f"Returning {len(entries)} leaderboard entries")
        return [entry.to_dict() for entry in entries]
    except StoreError as e:
        logger.error(f"Leaderboard store unavailable: {e}")
        raise HTTPException(status_code=503, detail="Service temporarily unavailable")
    except Exception as e:
        logger.error(f"Error getting leaderboard: {e}")
        raise HTTPException(status_code=500, detail="Failed to get leaderboard")

@router.delete("/leaderboard", response_model=ClearResponse)
async def clear_leaderboard():
    """
    Remove every entry from the leaderboard.
    """
    try:
        db = await LeaderboardManager.get_instance()
        await db.clear()
        return ClearResponse(message="Leaderboard cleared")
    except (PersistenceError, StoreError) as e:
        logger.error(f"Leaderboard store unavailable: {e}")
        raise HTTPException(status_code=503, detail="Service temporarily unavailable")
    except Exception as e:
        logger.error(f"Error clearing leaderboard: {e}")
        raise HTTPException(status_code=500, detail="Failed to clear leaderboard")
