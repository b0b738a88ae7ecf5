from typing import List, Optional

from ..models.data import Entry
from .store import LeaderboardStore


class MemoryStore(LeaderboardStore):
    """Keeps the ranking in process memory; nothing survives a restart"""
    name = "memory"

    def __init__(self, entries: Optional[List[Entry]] = None):
        self._entries = list(entries or [])

    async def load(self) -> List[Entry]:
        return list(self._entries)

    async def save(self, entries: List[Entry]) -> None:
        self._entries = list(entries)
