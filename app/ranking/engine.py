"""Ranking maintenance: ordering, update policies and bounded retention.

Every function here is pure. The ranking is a plain list of ``Entry``
objects that the caller loads, passes in, and persists afterwards.
"""
from functools import cmp_to_key
from typing import Iterable, List, Optional, Union

from ..models.data import Entry, is_number
from .errors import InvalidInput, RankingPolicy, RejectReason

DEFAULT_CAPACITY = 10


class SubmitResult:
    __slots__ = ('entries', 'accepted', 'reason', 'rank')

    def __init__(self, entries: List[Entry], accepted: bool,
                 reason: Optional[RejectReason] = None, rank: Optional[int] = None):
        self.entries = entries
        self.accepted = accepted
        self.reason = reason
        self.rank = rank

    def __repr__(self):
        return (f"SubmitResult(accepted={self.accepted}, reason={self.reason}, "
                f"rank={self.rank}, size={len(self.entries)})")


def compare(a: Entry, b: Entry) -> float:
    """Best-first ordering: negative when ``a`` ranks ahead of ``b``.

    1. higher score first
    2. when both carry a non-zero timeUsed, lower time first
    3. more recent date first; unreadable dates tie
    """
    if b.score != a.score:
        return b.score - a.score
    if a.duration is not None and b.duration is not None:
        return a.duration - b.duration
    if a.instant is None or b.instant is None:
        return 0
    return (b.instant - a.instant).total_seconds()


_rank_key = cmp_to_key(compare)


def is_better(candidate: Entry, existing: Entry) -> bool:
    return compare(candidate, existing) < 0


def _ordered(entries: Iterable[Entry]) -> List[Entry]:
    # sorted() is stable, so exact ties keep their input order
    return sorted(entries, key=_rank_key)


def _validate(candidate: Entry):
    if not isinstance(candidate.name, str) or not candidate.name.strip():
        raise InvalidInput('name must be a non-empty string')
    if not is_number(candidate.score):
        raise InvalidInput('score must be a number')


def submit(entries: List[Entry], candidate: Union[Entry, dict],
           policy: Union[RankingPolicy, str] = RankingPolicy.APPEND,
           capacity: int = DEFAULT_CAPACITY) -> SubmitResult:
    """Apply one submission and return the new ranking with its outcome.

    Raises ``InvalidInput`` before touching anything when the candidate has
    no name or a non-numeric score. Under the dedup policy a submission that
    does not beat the stored entry of the same name is rejected with
    ``NotAnImprovement`` and the ranking comes back unchanged.
    """
    if not isinstance(candidate, Entry):
        candidate = Entry(candidate)
    _validate(candidate)
    policy = RankingPolicy(policy)

    ranking = list(entries)
    replaced = False
    if policy is RankingPolicy.DEDUP:
        for index, existing in enumerate(ranking):
            if existing.name != candidate.name:
                continue
            if not is_better(candidate, existing):
                return SubmitResult(list(entries), False, RejectReason.NOT_AN_IMPROVEMENT)
            ranking[index] = candidate
            replaced = True
            break
    if not replaced:
        ranking.append(candidate)

    kept = _ordered(ranking)[:capacity]
    rank = next((pos for pos, entry in enumerate(kept, start=1) if entry is candidate), None)
    return SubmitResult(kept, True, rank=rank)


def normalize(entries: Iterable[Entry],
              policy: Union[RankingPolicy, str] = RankingPolicy.APPEND,
              capacity: int = DEFAULT_CAPACITY) -> List[Entry]:
    """Re-derive a valid ranking from loaded data that may be unsorted or oversized"""
    ranking = _ordered(entries)
    if RankingPolicy(policy) is RankingPolicy.DEDUP:
        seen = set()
        unique = []
        for entry in ranking:
            if entry.name in seen:
                continue
            seen.add(entry.name)
            unique.append(entry)
        ranking = unique
    return ranking[:capacity]


def query(entries: List[Entry]) -> List[Entry]:
    return list(entries)


def reset(entries: Optional[List[Entry]] = None) -> List[Entry]:
    return []
