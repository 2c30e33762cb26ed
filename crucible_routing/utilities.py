from typing import Dict, List, Sequence

from .Objects import Coord, Direction, Grid, Path, SearchState


def reconstruct_path(predecessors: Dict[SearchState, SearchState], state: SearchState) -> List[SearchState]:
    """Follow the predecessor chain back from `state` and return it start-first."""
    chain: List[SearchState] = [state]
    current = predecessors.get(state)
    while current is not None:
        chain.append(current)
        current = predecessors.get(current)
    chain.reverse()
    return chain


def path_cost(grid: Grid, path: Sequence[Coord]) -> int:
    """Sum of the costs of every cell entered; the first cell is free."""
    return sum(grid.cost(c) for c in path[1:])


def path_directions(path: Sequence[Coord]) -> List[Direction]:
    return [Direction.between(a, b) for a, b in zip(path, path[1:])]


def path_turns(path: Sequence[Coord]) -> int:
    """Count direction changes along a path."""
    moves = path_directions(path)
    return sum(1 for a, b in zip(moves, moves[1:]) if a != b)


def longest_run(path: Sequence[Coord]) -> int:
    """Length of the longest stretch of consecutive steps in one direction."""
    best = 0
    run = 0
    prev = None
    for d in path_directions(path):
        run = run + 1 if d == prev else 1
        prev = d
        best = max(best, run)
    return best


def has_reversal(path: Sequence[Coord]) -> bool:
    moves = path_directions(path)
    return any(b == a.opposite for a, b in zip(moves, moves[1:]))


def path_to_str(path: Path) -> str:
    """Convert a path to a human-readable string."""
    return "->".join(f"({x},{y})" for x, y in path)
