import logging
from .config import server

logging.basicConfig(
    level=getattr(logging, server.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)

def get_logger(name: str = "leaderboard") -> logging.Logger:
    """Get the shared service logger"""
    return logging.getLogger(name)
