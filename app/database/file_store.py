import os
from pathlib import Path
from typing import List

import aiofiles
import aiofiles.os

from ..logger import get_logger
from ..models.data import Entry
from .store import LeaderboardStore, StoreError, decode_entries, encode_entries

logger = get_logger()


class FileStore(LeaderboardStore):
    """Flat JSON file holding the ranking as an array of entries"""
    name = "file"

    def __init__(self, path):
        self.path = Path(path)
        self._tmp_path = self.path.with_name(self.path.name + '.tmp')

    async def initialize(self):
        if self.path.parent and not await aiofiles.os.path.exists(self.path.parent):
            await aiofiles.os.makedirs(self.path.parent, exist_ok=True)
            logger.info(f"Created leaderboard directory {self.path.parent}")

    async def load(self) -> List[Entry]:
        if not await aiofiles.os.path.exists(self.path):
            logger.info(f"No leaderboard file at {self.path}, starting empty")
            return []
        try:
            async with aiofiles.open(self.path, 'rb') as f:
                payload = await f.read()
        except OSError as e:
            raise StoreError(f"Failed to read {self.path}: {e}") from e
        if not payload.strip():
            return []
        return decode_entries(payload)

    async def save(self, entries: List[Entry]) -> None:
        payload = encode_entries(entries)
        try:
            async with aiofiles.open(self._tmp_path, 'wb') as f:
                await f.write(payload)
                await f.flush()
                os.fsync(f.fileno())
            await aiofiles.os.replace(self._tmp_path, self.path)
        except OSError as e:
            raise StoreError(f"Failed to write {self.path}: {e}") from e
