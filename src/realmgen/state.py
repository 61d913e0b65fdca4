"""Map state: world and town tiles stored in flat row-major arenas."""

from collections.abc import Callable, Iterator
from typing import Generic, TypeVar

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, model_validator

from .exceptions import InvalidGridError
from .tile_types import (
    Biome,
    BuildingType,
    PathDirection,
    TownPOI,
    TownSize,
    TownTileType,
    WorldPOI,
)
from .types import Position

# Movement costs for A* over the world map
COST_PLAINS = 1
COST_FOREST = 2
COST_MOUNTAIN = 5
COST_BEACH = 5
COST_WATER = 100

# Town tiles that block movement are still crossable at this cost
COST_TOWN_BLOCKED = 100


class WorldTile(BaseModel):
    """One cell of the world grid.

    Generation owns every field except ``is_explored``, which the game
    flips as the player uncovers the map.
    """

    x: int
    y: int
    biome: Biome = Biome.PLAINS
    poi: WorldPOI | None = None
    description_seed: str = "Open fields"
    is_explored: bool = False

    # Towns
    town_name: str | None = None
    town_size: TownSize | None = None
    is_starting_town: bool = False

    # Mountains
    mountain_name: str | None = None
    is_first_mountain_in_range: bool = False

    # Water features
    beach_direction: int | None = None  # Edge index of the water: 0=N, 1=E, 2=S, 3=W
    is_lake: bool = False
    has_river: bool = False
    river_connections: list[str] = []
    river_direction: PathDirection | None = None

    # Roads
    has_path: bool = False
    path_connections: list[str] = []
    path_direction: PathDirection | None = None

    @property
    def position(self) -> Position:
        return Position(x=self.x, y=self.y)

    @property
    def movement_cost(self) -> int:
        """A* cost of stepping onto this tile."""
        if self.biome == Biome.WATER:
            return COST_WATER
        if self.biome == Biome.BEACH:
            return COST_BEACH
        if self.poi == WorldPOI.FOREST:
            return COST_FOREST
        if self.poi == WorldPOI.MOUNTAIN:
            return COST_MOUNTAIN
        return COST_PLAINS


class TownTile(BaseModel):
    """One cell of a town interior grid."""

    x: int
    y: int
    type: TownTileType = TownTileType.GRASS
    poi: TownPOI | None = None
    walkable: bool = True
    is_explored: bool = False
    is_entry: bool = False
    building_type: BuildingType | None = None
    building_name: str | None = None

    @property
    def position(self) -> Position:
        return Position(x=self.x, y=self.y)

    @property
    def movement_cost(self) -> int:
        """A* cost of stepping onto this tile."""
        return 1 if self.walkable else COST_TOWN_BLOCKED

    def set_type(self, tile_type: TownTileType) -> None:
        """Change ground type, keeping walkability in step."""
        self.type = tile_type
        self.walkable = tile_type.walkable


TileT = TypeVar("TileT", bound=BaseModel)


class TileGrid(BaseModel, Generic[TileT]):
    """Rectangular grid of tiles stored row-major at index y * width + x."""

    width: int
    height: int
    tiles: list[TileT]

    @model_validator(mode="after")
    def _check_dimensions(self) -> "TileGrid[TileT]":
        if self.width <= 0 or self.height <= 0:
            raise InvalidGridError(
                f"Grid dimensions must be positive, got {self.width}x{self.height}"
            )
        if len(self.tiles) != self.width * self.height:
            raise InvalidGridError(
                f"Grid {self.width}x{self.height} needs {self.width * self.height} "
                f"tiles, got {len(self.tiles)}"
            )
        return self

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if coordinates are within the grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def tile(self, x: int, y: int) -> TileT:
        """Get the tile at (x, y).

        Raises:
            IndexError: If the coordinates are out of bounds.
        """
        if not self.in_bounds(x, y):
            raise IndexError(f"({x}, {y}) is outside {self.width}x{self.height} grid")
        return self.tiles[y * self.width + x]

    def get(self, x: int, y: int) -> TileT | None:
        """Get the tile at (x, y), or None if out of bounds."""
        if not self.in_bounds(x, y):
            return None
        return self.tiles[y * self.width + x]

    def at(self, position: Position) -> TileT:
        return self.tile(position.x, position.y)

    def rows(self) -> list[list[TileT]]:
        """Tiles as a list of rows (2D view; tiles are shared, not copied)."""
        return [
            self.tiles[y * self.width:(y + 1) * self.width] for y in range(self.height)
        ]

    def positions(self) -> Iterator[Position]:
        """All positions in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield Position(x=x, y=y)

    def find(self, predicate: Callable[[TileT], bool]) -> list[TileT]:
        """All tiles matching predicate, in row-major order."""
        return [tile for tile in self.tiles if predicate(tile)]

    def mask(self, predicate: Callable[[TileT], bool]) -> NDArray[np.bool_]:
        """Boolean mask of shape (height, width) where predicate holds."""
        flat = np.fromiter(
            (predicate(tile) for tile in self.tiles), dtype=bool, count=len(self.tiles)
        )
        return flat.reshape(self.height, self.width)

    def movement_costs(self) -> NDArray[np.int32]:
        """Cost grid of shape (height, width) for pathfinding."""
        flat = np.fromiter(
            (tile.movement_cost for tile in self.tiles),
            dtype=np.int32,
            count=len(self.tiles),
        )
        return flat.reshape(self.height, self.width)


class WorldMap(TileGrid[WorldTile]):
    """The overworld grid produced by world generation."""

    seed: int | None = None

    @classmethod
    def blank(cls, width: int, height: int, seed: int | None = None) -> "WorldMap":
        """Create a map of open plains."""
        tiles = [
            WorldTile(x=x, y=y) for y in range(height) for x in range(width)
        ]
        return cls(width=width, height=height, tiles=tiles, seed=seed)

    def towns(self) -> list[WorldTile]:
        """All town tiles in row-major order."""
        return self.find(lambda tile: tile.poi == WorldPOI.TOWN)


class TownMap(TileGrid[TownTile]):
    """A town interior grid plus its identity and landmarks."""

    town_name: str
    town_size: TownSize
    entry_point: Position
    center_point: Position

    @classmethod
    def blank(
        cls,
        width: int,
        height: int,
        town_name: str,
        town_size: TownSize,
        entry_point: Position,
    ) -> "TownMap":
        """Create a town of open grass centered on the grid midpoint."""
        tiles = [
            TownTile(x=x, y=y) for y in range(height) for x in range(width)
        ]
        return cls(
            width=width,
            height=height,
            tiles=tiles,
            town_name=town_name,
            town_size=town_size,
            entry_point=entry_point,
            center_point=Position(x=width // 2, y=height // 2),
        )

    def buildings(self) -> list[TownTile]:
        """All building tiles in row-major order."""
        return self.find(lambda tile: tile.type == TownTileType.BUILDING)
