import math
from datetime import datetime, timezone
from numbers import Real
from typing import Any, Optional

import orjson

from ..core.exceptions import InvalidInput

RESERVED_FIELDS = ('name', 'score', 'timeUsed', 'allFlipped', 'date')

# orjson serializes integers within the signed 64-bit range only
INT_MIN = -2 ** 63
INT_MAX = 2 ** 63 - 1


def is_numeric(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def is_number(value: Any) -> bool:
    """A finite number that survives a JSON round trip"""
    if not is_numeric(value):
        return False
    if isinstance(value, int):
        return INT_MIN <= value <= INT_MAX
    return math.isfinite(value)


def parse_instant(value: Any) -> Optional[datetime]:
    """Parse a wire date into an aware UTC datetime, or None if it can't be read"""
    if value is None:
        return None
    if isinstance(value, datetime):
        dt = value
    elif is_number(value):
        # epoch milliseconds, as produced by browser clients
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        try:
            dt = datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
        except ValueError:
            return None
    else:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


class Entry:
    """A submitted result as held in the ranking.

    Wire values are kept verbatim so that persisting an entry reproduces
    exactly what the client sent; ``instant`` is the parsed form of ``date``.
    """
    __slots__ = ('name', 'score', 'time_used', 'all_flipped', 'date', 'instant', 'extras')

    def __init__(self, data: dict):
        if not isinstance(data, dict):
            raise InvalidInput('Entry must be a JSON object')
        name = data.get('name')
        if not isinstance(name, str) or not name.strip():
            raise InvalidInput('name must be a non-empty string')
        score = data.get('score')
        if not is_number(score):
            raise InvalidInput('score must be a finite number')
        time_used = data.get('timeUsed')
        if is_numeric(time_used) and not is_number(time_used):
            raise InvalidInput('timeUsed must be a finite number')

        self.name = name
        self.score = score
        self.time_used = time_used
        self.all_flipped = data.get('allFlipped')
        self.date = data.get('date')
        self.instant = parse_instant(self.date)
        self.extras = {k: v for k, v in data.items() if k not in RESERVED_FIELDS}
        try:
            orjson.dumps(self.to_dict())
        except orjson.JSONEncodeError as e:
            raise InvalidInput(f'entry is not JSON-serializable: {e}') from e

    @property
    def duration(self) -> Optional[float]:
        """timeUsed when it takes part in ranking: present, numeric and non-zero"""
        if is_number(self.time_used) and self.time_used:
            return self.time_used
        return None

    def to_dict(self) -> dict:
        data = {'name': self.name, 'score': self.score}
        if self.time_used is not None:
            data['timeUsed'] = self.time_used
        if self.all_flipped is not None:
            data['allFlipped'] = self.all_flipped
        if self.date is not None:
            data['date'] = self.date
        data.update(self.extras)
        return data

    def __eq__(self, other):
        if not isinstance(other, Entry):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"Entry(name={self.name!r}, score={self.score!r}, timeUsed={self.time_used!r}, date={self.date!r})"
