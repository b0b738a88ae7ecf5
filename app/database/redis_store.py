from typing import List, Optional

import redis
from redis.asyncio import Redis

from ..config import redis_config
from ..logger import get_logger
from ..models.data import Entry
from .store import LeaderboardStore, StoreError, decode_entries, encode_entries

logger = get_logger()


class RedisStore(LeaderboardStore):
    """Keeps the whole ranking as one JSON document under a single key"""
    name = "redis"

    def __init__(self, client: Optional[Redis] = None, key: str = redis_config.KEY):
        self.client = client
        self.key = key
        self._owns_client = client is None

    async def initialize(self):
        if self.client is None:
            self.client = Redis(
                host=redis_config.HOST,
                port=redis_config.PORT,
                db=redis_config.DB,
                socket_timeout=5,
                socket_connect_timeout=5,
                retry_on_timeout=True
            )
        try:
            await self.client.ping()
            logger.info(f"Connected to Redis at {redis_config.HOST}:{redis_config.PORT}")
        except redis.RedisError as e:
            raise StoreError(f"Redis is not reachable: {e}") from e

    async def close(self):
        if self.client is not None and self._owns_client:
            await self.client.aclose()
            self.client = None

    async def load(self) -> List[Entry]:
        try:
            payload = await self.client.get(self.key)
        except redis.RedisError as e:
            raise StoreError(f"Failed to read {self.key} from Redis: {e}") from e
        if payload is None:
            return []
        return decode_entries(payload)

    async def save(self, entries: List[Entry]) -> None:
        try:
            await self.client.set(self.key, encode_entries(entries))
        except redis.RedisError as e:
            raise StoreError(f"Failed to write {self.key} to Redis: {e}") from e
