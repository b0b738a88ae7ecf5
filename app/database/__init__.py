from .base import LeaderboardManager, PersistenceError
from .factory import create_store
from .store import LeaderboardStore, StoreError

__all__ = ["LeaderboardManager", "PersistenceError", "LeaderboardStore", "StoreError", "create_store"]
