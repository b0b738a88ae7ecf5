from typing import List, Optional

import asyncpg
import orjson

from ..logger import get_logger
from ..models.data import Entry
from .connection import DatabaseConnection
from .store import LeaderboardStore, StoreError, entries_from_items

logger = get_logger()


class PostgresStore(LeaderboardStore):
    """One row per ranked entry; the full wire entry lives in a JSONB column"""
    name = "postgres"

    def __init__(self, db_connection: Optional[DatabaseConnection] = None):
        self.db = db_connection or DatabaseConnection()

    async def initialize(self):
        await self.db.initialize()

    async def close(self):
        await self.db.close()

    async def load(self) -> List[Entry]:
        await self.db.acquire_connection_semaphore()
        try:
            async with self.db.pool.acquire() as conn:
                rows = await conn.fetch(f'''
                    SELECT payload
                    FROM {self.db.table}
                    ORDER BY position
                ''')
        except (asyncpg.PostgresError, OSError) as e:
            raise StoreError(f"Failed to read leaderboard from Postgres: {e}") from e
        finally:
            self.db.release_connection_semaphore()
        try:
            items = [orjson.loads(row['payload']) for row in rows]
        except orjson.JSONDecodeError as e:
            raise StoreError(f"Stored leaderboard row is not valid JSON: {e}") from e
        return entries_from_items(items)

    async def save(self, entries: List[Entry]) -> None:
        """Replace every stored row with ``entries`` in a single transaction"""
        try:
            rows = [
                (position, entry.name, float(entry.score), orjson.dumps(entry.to_dict()).decode())
                for position, entry in enumerate(entries, start=1)
            ]
        except orjson.JSONEncodeError as e:
            raise StoreError(f"Leaderboard can't be encoded as JSON: {e}") from e
        await self.db.acquire_connection_semaphore()
        try:
            async with self.db.pool.acquire() as conn:
                async with conn.transaction():
                    await conn.execute(f'DELETE FROM {self.db.table}')
                    if rows:
                        await conn.executemany(f'''
                            INSERT INTO {self.db.table} (position, name, score, payload)
                            VALUES ($1, $2, $3, $4::jsonb)
                        ''', rows)
        except (asyncpg.PostgresError, OSError) as e:
            raise StoreError(f"Failed to write leaderboard to Postgres: {e}") from e
        finally:
            self.db.release_connection_semaphore()
