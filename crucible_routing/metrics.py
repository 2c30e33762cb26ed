from typing import Any, Dict, Optional

from .ConstrainedRouter import SearchResult
from .utilities import longest_run, path_turns


def total_cost(result: Optional[SearchResult]) -> Optional[int]:
    return result.cost if result else None


def steps_taken(result: Optional[SearchResult]) -> int:
    if not result:
        return 0
    return max(0, len(result.path) - 1)


def total_turns(result: Optional[SearchResult]) -> int:
    if not result:
        return 0
    return path_turns(result.path)


def longest_straight(result: Optional[SearchResult]) -> int:
    if not result:
        return 0
    return longest_run(result.path)


def summarize(result: Optional[SearchResult]) -> Dict[str, Any]:
    """Flat metrics dictionary for one search; an unreachable search passes None."""
    return {
        "reachable": result is not None,
        "total_cost": total_cost(result),
        "steps": steps_taken(result),
        "turns": total_turns(result),
        "longest_run": longest_straight(result),
        "states_finalized": result.finalized if result else 0,
    }
