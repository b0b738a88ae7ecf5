import time
from fastapi import APIRouter, HTTPException
from ..models.response import HealthResponse
from ..database import LeaderboardManager
from ..logger import get_logger

logger = get_logger()
router = APIRouter()

# Track application start time
start_time = time.time()

@router.get("/health", response_model=HealthResponse)
@router.head("/health")
async def health_check():
    """Health check endpoint"""
    try:
        db = await LeaderboardManager.get_instance()
        response = HealthResponse(
            uptime=time.time() - start_time,
            backend=db.backend,
            entries=len(db.entries)
        )
        logger.debug(f"Health check response: {response.model_dump()}")
        return response
    except Exception as e:
        logger.error(f"Health check error: {e}")
        raise HTTPException(status_code=500, detail="Health check failed")
