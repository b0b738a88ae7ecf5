from enum import Enum

from ..core.exceptions import InvalidInput


class RejectReason(str, Enum):
    NOT_AN_IMPROVEMENT = "NotAnImprovement"


class RankingPolicy(str, Enum):
    """How a submission is merged into the ranking.

    ``append`` keeps every submission and lets the ranking order decide;
    ``dedup`` keeps a single entry per name and only replaces it with a
    better result.
    """
    APPEND = "append"
    DEDUP = "dedup"


__all__ = ["InvalidInput", "RejectReason", "RankingPolicy"]
