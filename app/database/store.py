from abc import ABC, abstractmethod
from typing import List

import orjson

from ..models.data import Entry
from ..core.exceptions import InvalidInput


class StoreError(Exception):
    """Raised by a store when it can't read or write the ranking"""


class LeaderboardStore(ABC):
    """Persistence capability used by the leaderboard manager.

    ``save`` overwrites whatever was stored before; it never appends.
    """
    name = "abstract"

    async def initialize(self):
        """Open connections or create resources the store needs"""

    async def close(self):
        """Release connections held by the store"""

    @abstractmethod
    async def load(self) -> List[Entry]:
        raise NotImplementedError

    @abstractmethod
    async def save(self, entries: List[Entry]) -> None:
        raise NotImplementedError


def encode_entries(entries: List[Entry]) -> bytes:
    try:
        return orjson.dumps([entry.to_dict() for entry in entries])
    except orjson.JSONEncodeError as e:
        raise StoreError(f"Leaderboard can't be encoded as JSON: {e}") from e


def decode_entries(payload) -> List[Entry]:
    """Decode a stored JSON array of entries"""
    try:
        items = orjson.loads(payload)
    except orjson.JSONDecodeError as e:
        raise StoreError(f"Stored leaderboard is not valid JSON: {e}") from e
    return entries_from_items(items)


def entries_from_items(items) -> List[Entry]:
    if not isinstance(items, list):
        raise StoreError("Stored leaderboard must be a JSON array")
    try:
        return [Entry(item) for item in items]
    except InvalidInput as e:
        raise StoreError(f"Stored leaderboard holds an invalid entry: {e}") from e
