from typing import Optional, Tuple

Coord = Tuple[int, int]


class RoutingError(Exception):
    """Base class for errors raised by crucible_routing."""


class MalformedInputError(RoutingError, ValueError):
    """Grid text could not be turned into a rectangular cost matrix."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        if line is not None:
            where = f"line {line}" if column is None else f"line {line}, column {column}"
            message = f"{message} ({where})"
        super().__init__(message)
        self.line = line
        self.column = column


class OutOfBoundsError(RoutingError, IndexError):
    def __init__(self, coord: Coord, width: int, height: int):
        super().__init__(f"Coordinate {coord} outside grid of size {width}x{height}")
        self.coord = coord
        self.width = width
        self.height = height


class UnreachableError(RoutingError):
    """No path from start to goal satisfies the run-length constraint."""

    def __init__(self, start: Coord, goal: Coord, max_run: int, min_run: int = 1):
        super().__init__(
            f"No path from {start} to {goal} with runs between {min_run} and {max_run} steps"
        )
        self.start = start
        self.goal = goal
        self.max_run = max_run
        self.min_run = min_run
