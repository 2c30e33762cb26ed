import heapq
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Tuple, Union

from .charmaps import CharMap
from .errors import UnreachableError
from .Objects import Coord, Direction, Grid, Path, SearchState
from .utilities import reconstruct_path

logger = logging.getLogger(__name__)

MAX_RUN = 3

HeapEntry = Tuple[int, Tuple[Coord, int, int], SearchState]


@dataclass
class SearchResult:
    """Outcome of a single constrained search."""

    cost: int
    path: Path
    states: List[SearchState]
    finalized: int
    max_run: int = MAX_RUN
    min_run: int = 1

    @property
    def start(self) -> Coord:
        return self.path[0]

    @property
    def goal(self) -> Coord:
        return self.path[-1]


class ConstrainedPathSearch:
    """Minimum-cost corner-to-corner search with a straight-run limit.

    Each search state carries the direction it was entered from and how many
    consecutive steps were taken in that direction. A path may never reverse,
    may not take more than `max_run` steps in one direction, and must take at
    least `min_run` steps before it turns or stops.
    """

    def __init__(self, grid: Grid, max_run: int = MAX_RUN, min_run: int = 1):
        max_run = int(max_run)
        min_run = int(min_run)
        if max_run < 1:
            raise ValueError("max_run must be at least 1")
        if min_run < 1:
            raise ValueError("min_run must be at least 1")
        if min_run > max_run:
            raise ValueError(f"min_run ({min_run}) cannot exceed max_run ({max_run})")
        self.grid = grid
        self.max_run = max_run
        self.min_run = min_run

    def _successors(self, state: SearchState) -> List[SearchState]:
        out: List[SearchState] = []
        for n in self.grid.neighbors4(state.coord):
            d = Direction.between(state.coord, n)
            if state.direction is None:
                out.append(SearchState(n, d, 1))
            elif d == state.direction:
                if state.run < self.max_run:
                    out.append(SearchState(n, d, state.run + 1))
            elif d != state.direction.opposite and state.run >= self.min_run:
                out.append(SearchState(n, d, 1))
        return out

    def _is_goal(self, state: SearchState, goal: Coord) -> bool:
        if state.coord != goal:
            return False
        return state.direction is None or state.run >= self.min_run

    def run(self, start: Optional[Coord] = None, goal: Optional[Coord] = None) -> SearchResult:
        """Find the cheapest path from `start` to `goal` (grid corners by default).

        Raises UnreachableError if no path satisfies the run-length limits.
        """
        start = self.grid.check(start) if start is not None else self.grid.start
        goal = self.grid.check(goal) if goal is not None else self.grid.goal
        logger.debug(
            "Searching %s -> %s on %sx%s grid (runs %s..%s).",
            start, goal, self.grid.width, self.grid.height, self.min_run, self.max_run,
        )

        origin = SearchState(start)
        dist: Dict[SearchState, int] = {origin: 0}
        prev: Dict[SearchState, SearchState] = {}
        finalized: Set[SearchState] = set()
        frontier: List[HeapEntry] = [(0, origin.sort_key(), origin)]

        while frontier:
            d, _, state = heapq.heappop(frontier)
            if state in finalized or d > dist[state]:
                continue
            finalized.add(state)

            if self._is_goal(state, goal):
                states = reconstruct_path(prev, state)
                result = SearchResult(
                    cost=d,
                    path=[s.coord for s in states],
                    states=states,
                    finalized=len(finalized),
                    max_run=self.max_run,
                    min_run=self.min_run,
                )
                logger.info(
                    "Reached %s with cost %s after finalizing %s states.", goal, d, len(finalized)
                )
                return result

            for nxt in self._successors(state):
                if nxt in finalized:
                    continue
                alt = d + self.grid.cost(nxt.coord)
                if alt < dist.get(nxt, alt + 1):
                    dist[nxt] = alt
                    prev[nxt] = state
                    heapq.heappush(frontier, (alt, nxt.sort_key(), nxt))

        logger.warning(
            "Goal %s unreachable from %s after finalizing %s states.", goal, start, len(finalized)
        )
        raise UnreachableError(start, goal, self.max_run, self.min_run)


def search(grid: Grid, max_run: int = MAX_RUN, min_run: int = 1) -> SearchResult:
    return ConstrainedPathSearch(grid, max_run=max_run, min_run=min_run).run()


def minimal_cost(
    text: str,
    max_run: int = MAX_RUN,
    min_run: int = 1,
    charmap: Union[str, CharMap] = "digit",
) -> int:
    """Parse `text` and return the minimal constrained cost from corner to corner."""
    return search(Grid.parse(text, charmap=charmap), max_run=max_run, min_run=min_run).cost
