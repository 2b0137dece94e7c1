# grid.py

from enum import IntEnum
from typing import NamedTuple


class Dimensions(NamedTuple):
    width: int
    height: int

    @property
    def area(self) -> int:
        return self.width * self.height


class Direction(IntEnum):
    """
    Movement / mining-aim directions, in counter-clockwise order so that
    rotations are plain modular arithmetic on the value.
    """
    RIGHT = 0
    UP = 1
    LEFT = 2
    DOWN = 3

    def opposite(self) -> "Direction":
        return Direction((self + 2) % 4)

    def clockwise(self) -> "Direction":
        return Direction((self + 3) % 4)

    def counter_clockwise(self) -> "Direction":
        return Direction((self + 1) % 4)


DIRECTIONS = (Direction.RIGHT, Direction.UP, Direction.LEFT, Direction.DOWN)

_OFFSETS = {
    Direction.RIGHT: (1, 0),
    Direction.UP: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.DOWN: (0, -1),
}


class Position(NamedTuple):
    """
    Signed (x, y) cell coordinate. Negative components are legal values; they
    are simply out of bounds.
    """
    x: int
    y: int

    def __add__(self, direction):
        dx, dy = _OFFSETS[Direction(direction)]
        return Position(self.x + dx, self.y + dy)

    def is_within_bounds(self, dimensions: Dimensions) -> bool:
        return 0 <= self.x < dimensions.width and 0 <= self.y < dimensions.height

    def to_linear(self, width: int) -> int:
        return self.y * width + self.x

    @classmethod
    def from_linear(cls, index: int, width: int) -> "Position":
        return cls(index % width, index // width)

    def manhattan_distance(self, other: "Position") -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)
