import pytest

from app.database import LeaderboardManager


@pytest.fixture(autouse=True)
def fresh_manager():
    """Each test starts without a leaderboard singleton"""
    LeaderboardManager._instance = None
    yield
    LeaderboardManager._instance = None
