from .errors import InvalidInput, RejectReason, RankingPolicy
from .engine import (
    DEFAULT_CAPACITY,
    SubmitResult,
    compare,
    is_better,
    normalize,
    query,
    reset,
    submit,
)

__all__ = [
    "DEFAULT_CAPACITY",
    "InvalidInput",
    "RankingPolicy",
    "RejectReason",
    "SubmitResult",
    "compare",
    "is_better",
    "normalize",
    "query",
    "reset",
    "submit",
]
