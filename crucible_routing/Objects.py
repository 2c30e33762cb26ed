import numbers
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from .charmaps import CharMap, get_charmap
from .errors import MalformedInputError, OutOfBoundsError

Coord = Tuple[int, int]
Path = List[Coord]


class Direction(Enum):
    """Cardinal step directions; declaration order is the tie-break order."""

    LEFT = (-1, 0)
    UP = (0, -1)
    RIGHT = (1, 0)
    DOWN = (0, 1)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> "Direction":
        return Direction((-self.dx, -self.dy))

    @property
    def arrow(self) -> str:
        return _ARROWS[self]

    @property
    def order(self) -> int:
        return _ORDER[self]

    def step(self, coord: Coord) -> Coord:
        return (coord[0] + self.dx, coord[1] + self.dy)

    @classmethod
    def between(cls, a: Coord, b: Coord) -> "Direction":
        """Direction of the single step a -> b."""
        try:
            return cls((b[0] - a[0], b[1] - a[1]))
        except ValueError:
            raise ValueError(f"{a} and {b} are not cardinal neighbours") from None


_ARROWS = {
    Direction.LEFT: '←',
    Direction.UP: '↑',
    Direction.RIGHT: '→',
    Direction.DOWN: '↓',
}
_ORDER = {d: i for i, d in enumerate(Direction)}


@dataclass(frozen=True)
class SearchState:
    """A grid cell together with how the path arrived there.

    `direction` is None only for the start state, whose run is 0.
    """

    coord: Coord
    direction: Optional[Direction] = None
    run: int = 0

    def sort_key(self) -> Tuple[Coord, int, int]:
        return (self.coord, -1 if self.direction is None else self.direction.order, self.run)


@dataclass(frozen=True)
class Grid:
    rows: Tuple[Tuple[int, ...], ...]
    _width: int = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        rows = tuple(tuple(row) for row in self.rows)
        if not rows or not rows[0]:
            raise MalformedInputError("Grid must have at least one row and one column")
        width = len(rows[0])
        for y, row in enumerate(rows):
            if len(row) != width:
                raise MalformedInputError(
                    f"Row has {len(row)} cells, expected {width}", line=y + 1
                )
            for x, v in enumerate(row):
                if isinstance(v, bool) or not isinstance(v, numbers.Integral):
                    raise MalformedInputError(
                        f"Cost {v!r} is not an integer", line=y + 1, column=x + 1
                    )
                if v < 0:
                    raise MalformedInputError(f"Negative cost {v}", line=y + 1, column=x + 1)
        object.__setattr__(self, "rows", tuple(tuple(int(v) for v in row) for row in rows))
        object.__setattr__(self, "_width", width)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Grid":
        return cls(tuple(tuple(row) for row in rows))

    @classmethod
    def parse(cls, text: str, charmap: Union[str, CharMap] = "digit") -> "Grid":
        """Parse one row per line, mapping every character through `charmap`."""
        mapper = get_charmap(charmap) if isinstance(charmap, str) else charmap
        lines = text.split("\n")
        if lines[-1] == "":
            lines.pop()
        lines = [line[:-1] if line.endswith("\r") else line for line in lines]
        if not lines:
            raise MalformedInputError("Grid input is empty")

        rows = []
        for y, line in enumerate(lines, start=1):
            if not line:
                raise MalformedInputError("Blank line inside grid", line=y)
            row = []
            for x, ch in enumerate(line, start=1):
                try:
                    row.append(mapper.value(ch))
                except MalformedInputError as exc:
                    raise MalformedInputError(str(exc), line=y, column=x) from None
            rows.append(tuple(row))
        return cls(tuple(rows))

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def start(self) -> Coord:
        return (0, 0)

    @property
    def goal(self) -> Coord:
        return (self.width - 1, self.height - 1)

    def in_bounds(self, coord: Sequence[int]) -> bool:
        x, y = coord
        return 0 <= x < self.width and 0 <= y < self.height

    def check(self, coord: Sequence[int]) -> Coord:
        """Return `coord` as a tuple, raising OutOfBoundsError if it lies outside the grid."""
        x, y = coord
        if not self.in_bounds((x, y)):
            raise OutOfBoundsError((x, y), self.width, self.height)
        return (x, y)

    def cost(self, coord: Sequence[int]) -> int:
        x, y = self.check(coord)
        return self.rows[y][x]

    def neighbors4(self, coord: Sequence[int]) -> List[Coord]:
        """In-bounds cardinal neighbours, ordered left, up, right, down."""
        x, y = self.check(coord)
        neighbours: List[Coord] = []
        if x > 0:
            neighbours.append((x - 1, y))
        if y > 0:
            neighbours.append((x, y - 1))
        if x < self.width - 1:
            neighbours.append((x + 1, y))
        if y < self.height - 1:
            neighbours.append((x, y + 1))
        return neighbours

    def coords(self) -> Iterator[Coord]:
        for y in range(self.height):
            for x in range(self.width):
                yield (x, y)

    def __str__(self) -> str:
        return "\n".join("".join(str(v) for v in row) for row in self.rows)
