"""Board geometry for the Thud octagon.

The playing area is a 15x15 square with a triangle of 15 cells cut from each
corner, leaving 165 playable cells. Coordinates are zero-based ``(x, y)``
pairs where ``x`` grows to the right and ``y`` grows downward, so "Right" is
``(+1, 0)`` and "Down" is ``(0, +1)``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Iterator, List, Optional, Tuple

from .errors import InvalidDirection, OutOfBounds


BOARD_SIZE = 15
CORNER_CUT = 5
CENTRE = (7, 7)


class Direction(IntEnum):
    """Compass direction, numbered clockwise from ``RIGHT``."""

    RIGHT = 0
    DOWN_RIGHT = 1
    DOWN = 2
    DOWN_LEFT = 3
    LEFT = 4
    UP_LEFT = 5
    UP = 6
    UP_RIGHT = 7

    @classmethod
    def from_num(cls, value: object) -> "Direction":
        """Parse a direction ordinal, raising :class:`InvalidDirection` on bad input."""

        if isinstance(value, cls):
            return value
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidDirection(f"Direction must be an integer 0-7, got {value!r}")
        try:
            return cls(value)
        except ValueError as exc:
            raise InvalidDirection(f"Direction must be an integer 0-7, got {value!r}") from exc

    @property
    def delta(self) -> Tuple[int, int]:
        return _DELTAS[self]

    @property
    def opposite(self) -> "Direction":
        return Direction((self + 4) % 8)


# fmt: off
_DELTAS: Dict[Direction, Tuple[int, int]] = {
    Direction.RIGHT:      ( 1,  0),
    Direction.DOWN_RIGHT: ( 1,  1),
    Direction.DOWN:       ( 0,  1),
    Direction.DOWN_LEFT:  (-1,  1),
    Direction.LEFT:       (-1,  0),
    Direction.UP_LEFT:    (-1, -1),
    Direction.UP:         ( 0, -1),
    Direction.UP_RIGHT:   ( 1, -1),
}
# fmt: on

_UNIT_TO_DIRECTION = {delta: direction for direction, delta in _DELTAS.items()}


def on_board(x: int, y: int) -> bool:
    """Return ``True`` if ``(x, y)`` is one of the playable octagon cells."""

    if not (0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE):
        return False
    edge = BOARD_SIZE - 1
    return min(x, edge - x) + min(y, edge - y) >= CORNER_CUT


def _validate(x: object, y: object) -> None:
    if isinstance(x, bool) or isinstance(y, bool):
        raise OutOfBounds(f"({x!r}, {y!r}) is not a board position")
    if not isinstance(x, int) or not isinstance(y, int) or not on_board(x, y):
        raise OutOfBounds(f"({x!r}, {y!r}) is outside the octagon")


@dataclass(frozen=True, order=True)
class Coordinate:
    """A validated position on the octagon.

    Construction raises :class:`OutOfBounds` for any pair outside the
    octagon. :meth:`zero_based` returns the shared instance for a cell.
    """

    x: int
    y: int

    def __post_init__(self) -> None:
        _validate(self.x, self.y)

    @classmethod
    def zero_based(cls, x: int, y: int) -> "Coordinate":
        _validate(x, y)
        return _COORDS[y * BOARD_SIZE + x]

    @property
    def index(self) -> int:
        return self.y * BOARD_SIZE + self.x

    def step(self, direction: Direction) -> Optional["Coordinate"]:
        dx, dy = direction.delta
        x, y = self.x + dx, self.y + dy
        if not on_board(x, y):
            return None
        return _COORDS[y * BOARD_SIZE + x]

    def neighbours(self) -> Iterator[Tuple[Direction, "Coordinate"]]:
        """Yield ``(direction, coordinate)`` for every on-board neighbour, clockwise."""

        for direction in Direction:
            nb = self.step(direction)
            if nb is not None:
                yield direction, nb

    def line_to(self, other: "Coordinate") -> Optional[Tuple[Direction, int]]:
        """Return the compass direction and distance to ``other``.

        ``None`` if the two cells are identical or not on a shared straight or
        diagonal line.
        """

        dx = other.x - self.x
        dy = other.y - self.y
        if dx == 0 and dy == 0:
            return None
        if dx != 0 and dy != 0 and abs(dx) != abs(dy):
            return None
        distance = max(abs(dx), abs(dy))
        unit = (dx // distance, dy // distance)
        return _UNIT_TO_DIRECTION[unit], distance

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


_COORDS: List[Optional[Coordinate]] = [
    Coordinate(x, y) if on_board(x, y) else None
    for y in range(BOARD_SIZE)
    for x in range(BOARD_SIZE)
]


def all_coordinates() -> Iterator[Coordinate]:
    """Iterate over every playable coordinate in row-major order."""

    for coord in _COORDS:
        if coord is not None:
            yield coord
