"""Core grid types shared by the world, town, and NPC generators."""

from enum import IntEnum

from pydantic import BaseModel


class Direction(IntEnum):
    """4-direction grid adjacency."""

    NORTH = 1
    EAST = 2
    SOUTH = 3
    WEST = 4


# Coordinate system: +X is East, +Y is South
CARDINAL_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.NORTH: (0, -1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, 1),
    Direction.WEST: (-1, 0),
}


class Position(BaseModel, frozen=True):
    """Immutable 2D tile coordinate."""

    x: int
    y: int

    @property
    def key(self) -> str:
        """Map key form, "x,y"."""
        return f"{self.x},{self.y}"

    def offset(self, direction: Direction) -> "Position":
        """Return new position offset by direction."""
        dx, dy = CARDINAL_DELTAS[direction]
        return Position(x=self.x + dx, y=self.y + dy)

    def manhattan(self, other: "Position") -> int:
        """Manhattan distance to another position."""
        return abs(self.x - other.x) + abs(self.y - other.y)

    def neighbors(self) -> list["Position"]:
        """4-directional neighbors, in N, E, S, W order (unbounded)."""
        return [self.offset(direction) for direction in Direction]

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"

    def __repr__(self) -> str:
        return f"Position(x={self.x}, y={self.y})"
