import asyncio
from typing import List, Optional, Union

from ..config import leaderboard
from ..logger import get_logger
from ..models.data import Entry
from ..ranking import engine
from ..ranking.errors import RankingPolicy
from .factory import create_store
from .store import LeaderboardStore, StoreError

logger = get_logger()


class PersistenceError(Exception):
    """The ranking could not be written after all retries"""


class LeaderboardManager:
    """Owns the live ranking and serializes every change to it.

    A mutation holds ``_write_lock`` from load through persist. When a
    write fails the published ranking is left as it was and the manager is
    marked stale, so the next mutation starts from what the store holds.
    """
    _instance = None
    _lock = asyncio.Lock()

    def __new__(cls, store: Optional[LeaderboardStore] = None,
                policy: Union[RankingPolicy, str, None] = None,
                capacity: Optional[int] = None):
        if cls._instance is None:
            cls._instance = super(LeaderboardManager, cls).__new__(cls)
            cls._instance.store = store
            cls._instance.policy = RankingPolicy(policy or leaderboard.policy)
            cls._instance.capacity = capacity if capacity is not None else leaderboard.capacity
            cls._instance.entries = []
            cls._instance.max_retries = max(1, leaderboard.max_retries)
            cls._instance.retry_delay = leaderboard.retry_delay
            cls._instance._init_lock = asyncio.Lock()
            cls._instance._write_lock = asyncio.Lock()
            cls._instance._stale = False
            cls._instance._initialized = False
        return cls._instance

    @classmethod
    async def get_instance(cls):
        """Get the singleton instance of LeaderboardManager"""
        if cls._instance is None:
            async with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @property
    def backend(self) -> str:
        return self.store.name if self.store is not None else leaderboard.backend

    async def initialize(self):
        """Open the store and load the ranking from it"""
        if self._initialized:
            return

        async with self._init_lock:
            if self._initialized:  # Double check after acquiring lock
                return

            try:
                if self.store is None:
                    self.store = create_store()
                await self.store.initialize()
                await self._reload()
                self._initialized = True
                logger.info(f"Leaderboard manager initialized ({self.store.name} store, "
                            f"{self.policy.value} policy, capacity {self.capacity})")
            except Exception as e:
                logger.error(f"Failed to initialize leaderboard manager: {e}")
                await self.close()
                raise

    async def close(self):
        """Close the store and drop the singleton"""
        if self.store is not None:
            try:
                await self.store.close()
            except Exception as e:
                logger.error(f"Error closing {self.store.name} store: {e}")
        self._initialized = False
        LeaderboardManager._instance = None

    async def _reload(self):
        loaded = await self.store.load()
        self.entries = engine.normalize(loaded, self.policy, self.capacity)
        self._stale = False
        logger.info(f"Loaded {len(self.entries)} leaderboard entries from {self.store.name} store")

    async def _persist(self, entries: List[Entry]):
        retry_count = 0
        while retry_count < self.max_retries:
            try:
                await self.store.save(entries)
                return
            except StoreError as e:
                retry_count += 1
                logger.error(f"Store error (attempt {retry_count}/{self.max_retries}): {e}")
                if retry_count < self.max_retries:
                    await asyncio.sleep(self.retry_delay * retry_count)
                else:
                    self._stale = True
                    raise PersistenceError("Failed to persist leaderboard") from e

    async def submit(self, data: Union[Entry, dict]) -> engine.SubmitResult:
        """Apply a submission and persist the resulting ranking"""
        if not self._initialized:
            await self.initialize()

        async with self._write_lock:
            if self._stale:
                logger.warning("Previous write failed, reloading leaderboard before submit")
                await self._reload()
            result = engine.submit(self.entries, data, self.policy, self.capacity)
            await self._persist(result.entries)
            self.entries = result.entries
        return result

    async def top(self) -> List[Entry]:
        """Get the current ranking, best first"""
        if not self._initialized:
            await self.initialize()
        return engine.query(self.entries)

    async def clear(self):
        """Empty the ranking and persist the empty set"""
        if not self._initialized:
            await self.initialize()

        async with self._write_lock:
            entries = engine.reset(self.entries)
            await self._persist(entries)
            self.entries = entries
        logger.info("Leaderboard cleared")
