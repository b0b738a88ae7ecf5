from ..database import LeaderboardManager
from ..logger import get_logger
import asyncio

logger = get_logger()

async def startup_event():
    """Open the leaderboard store and load the ranking"""
    try:
        db = await LeaderboardManager.get_instance()
        await db.initialize()
        logger.info("Leaderboard initialized")
    except Exception as e:
        logger.error(f"Failed to initialize leaderboard: {e}")
        raise

async def shutdown_event():
    """Close the leaderboard store"""
    db = LeaderboardManager._instance
    if db is None:
        return
    try:
        # Set a timeout for the shutdown process
        async with asyncio.timeout(5.0):
            await db.close()
            logger.info("Leaderboard store closed")
    except asyncio.TimeoutError:
        logger.warning("Shutdown timed out, dropping leaderboard manager")
        LeaderboardManager._instance = None
    except Exception as e:
        logger.error(f"Error during shutdown: {e}")
