from fastapi import APIRouter, HTTPException, Response
from fastapi.responses import ORJSONResponse
from ..models.score import ScoreRequest
from ..models.response import ScoreResponse
from ..database import LeaderboardManager, PersistenceError, StoreError
from ..ranking import InvalidInput
from ..logger import get_logger

logger = get_logger()
router = APIRouter()

@router.post("/leaderboard", response_model=ScoreResponse, status_code=201,
             response_model_exclude_unset=True)
async def submit_score(data: ScoreRequest, response: Response):
    """
    Submit a new result to the leaderboard.

    - **name**: Participant name
    - **score**: Score, higher ranks first
    - **timeUsed**: Optional duration, lower ranks first on equal score
    - **allFlipped**: Optional flag, stored as-is
    - **date**: Submission date (ISO-8601); defaults to the server time
    """
    try:
        db = await LeaderboardManager.get_instance()
        result = await db.submit(data.to_entry_data())
        leaderboard = [entry.to_dict() for entry in result.entries]

        if not result.accepted:
            logger.warning(f"Rejected score for {data.name}: {result.reason.value}")
            response.status_code = 200
            return ScoreResponse(
                status="rejected",
                message="Score is not an improvement on the stored entry",
                accepted=False,
                reason=result.reason.value,
                rank=None,
                leaderboard=leaderboard
            )

        logger.info(f"Accepted score {data.score} for {data.name} at rank {result.rank}")
        return ScoreResponse(
            status="success",
            message="Score submitted successfully",
            accepted=True,
            reason=None,
            rank=result.rank,
            leaderboard=leaderboard
        )
    except HTTPException:
        raise
    except InvalidInput as e:
        logger.error(f"Validation error: {e}")
        return ORJSONResponse(
            status_code=400,
            content={"error": "Invalid score data", "detail": str(e)}
        )
    except (PersistenceError, StoreError) as e:
        logger.error(f"Leaderboard store unavailable: {e}")
        raise HTTPException(status_code=503, detail="Service temporarily unavailable")
    except Exception as e:
        logger.error(f"Error submitting score: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")
