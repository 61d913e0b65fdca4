"""Building placement: the city keep, civic buildings around the square, houses."""

from collections.abc import Callable

from structlog.typing import FilteringBoundLogger

from ..names import (
    generate_bank_name,
    generate_blacksmith_name,
    generate_guild_name,
    generate_manor_name,
    generate_shop_name,
    generate_tavern_name,
    generate_temple_name,
)
from ..rng import SeededRNG
from ..state import TownMap
from ..tile_types import BuildingType, TownTileType
from ..types import Position
from .layout import TownLayout

KEEP_ROW = 3

_NAMERS: dict[BuildingType, Callable[[SeededRNG], str]] = {
    BuildingType.TAVERN: generate_tavern_name,
    BuildingType.INN: generate_tavern_name,
    BuildingType.GUILD: generate_guild_name,
    BuildingType.BANK: generate_bank_name,
    BuildingType.SHOP: generate_shop_name,
    BuildingType.MARKET: generate_shop_name,
    BuildingType.BLACKSMITH: generate_blacksmith_name,
    BuildingType.MANOR: generate_manor_name,
    BuildingType.KEEP: generate_manor_name,
    BuildingType.TEMPLE: generate_temple_name,
}


def building_name(building_type: BuildingType, rng: SeededRNG) -> str | None:
    """Generated name for a building; houses and barns go unnamed."""
    namer = _NAMERS.get(building_type)
    return namer(rng) if namer is not None else None


def square_ring(center: Position, half: int) -> list[Position]:
    """Cells bordering the square, clockwise from its top-left corner."""
    cx, cy = center.x, center.y
    ring = [Position(x=cx + dx, y=cy - half - 1) for dx in range(-half - 1, half + 2)]
    ring += [Position(x=cx + half + 1, y=cy + dy) for dy in range(-half, half + 2)]
    ring += [Position(x=cx + dx, y=cy + half + 1) for dx in range(half, -half - 2, -1)]
    ring += [Position(x=cx - half - 1, y=cy + dy) for dy in range(half, -half - 1, -1)]
    return ring


class BuildingPlacer:
    """Claims grass tiles for buildings, remembering which cells are taken."""

    def __init__(self, town: TownMap, rng: SeededRNG):
        self.town = town
        self.rng = rng
        self.occupied: set[Position] = set()

    def is_free(self, x: int, y: int) -> bool:
        """A cell is free if it is in bounds, unclaimed, and still grass."""
        tile = self.town.get(x, y)
        if tile is None:
            return False
        if Position(x=x, y=y) in self.occupied:
            return False
        return tile.type == TownTileType.GRASS

    def place(self, position: Position, building_type: BuildingType, name: str | None = None) -> None:
        tile = self.town.at(position)
        tile.set_type(TownTileType.BUILDING)
        tile.building_type = building_type
        tile.building_name = name if name is not None else building_name(building_type, self.rng)
        tile.poi = None
        self.occupied.add(position)

    def place_keep(self, log: FilteringBoundLogger) -> Position | None:
        """Put the keep above the square inside a thin wall with a gate below it.

        A stone path runs from the gate down to the square. Nothing is placed
        if the keep cell is already taken (e.g. by a road from the north).
        """
        keep = Position(x=self.town.center_point.x, y=KEEP_ROW)
        if not self.is_free(keep.x, keep.y):
            log.debug("keep_skipped", x=keep.x, y=keep.y)
            return None

        self.place(keep, BuildingType.KEEP, generate_manor_name(self.rng))

        gate = Position(x=keep.x, y=keep.y + 1)
        for dy in (-1, 0, 1):
            for dx in (-1, 0, 1):
                x, y = keep.x + dx, keep.y + dy
                if (dx, dy) == (0, 0) or not self._inside_border(x, y):
                    continue
                tile = self.town.tile(x, y)
                if tile.type != TownTileType.GRASS:
                    continue
                if (x, y) == (gate.x, gate.y):
                    tile.set_type(TownTileType.STONE_PATH)
                else:
                    tile.set_type(TownTileType.KEEP_WALL)
                self.occupied.add(Position(x=x, y=y))

        for y in range(keep.y + 2, self.town.center_point.y):
            tile = self.town.tile(keep.x, y)
            if tile.type == TownTileType.GRASS:
                tile.set_type(TownTileType.STONE_PATH)

        log.debug("keep_placed", x=keep.x, y=keep.y)
        return keep

    def _inside_border(self, x: int, y: int) -> bool:
        return 1 <= x < self.town.width - 1 and 1 <= y < self.town.height - 1

    def _place_on_ring(
        self, building_type: BuildingType, ring: list[Position], start: int
    ) -> int | None:
        # Returns the ring index to resume from, leaving a gap after this building
        for i in range(len(ring)):
            position = ring[(start + i) % len(ring)]
            if self.is_free(position.x, position.y):
                self.place(position, building_type)
                return (start + i + 2) % len(ring)
        return None

    def _place_in_rings(self, building_type: BuildingType) -> bool:
        center = self.town.center_point
        for radius in range(2, 5):
            for dy in range(-radius, radius + 1):
                for dx in range(-radius, radius + 1):
                    if abs(dx) != radius and abs(dy) != radius:
                        continue
                    x, y = center.x + dx, center.y + dy
                    if self.is_free(x, y):
                        self.place(Position(x=x, y=y), building_type)
                        return True
        return False

    def place_important(self, layout: TownLayout) -> int:
        """Place civic buildings clockwise around the square.

        Starts at a random ring cell. When the ring is full, falls back to
        square rings of radius 2 to 4 around the center.

        Returns:
            Number of buildings placed.
        """
        ring = square_ring(self.town.center_point, layout.square_half)
        index = self.rng.range(0, len(ring) - 1)
        placed = 0
        for building_type in layout.important:
            resume = self._place_on_ring(building_type, ring, index)
            if resume is not None:
                index = resume
                placed += 1
            elif self._place_in_rings(building_type):
                placed += 1
        return placed

    def place_houses(self, layout: TownLayout) -> int:
        """Scatter houses over interior cells outside the central exclusion zone."""
        center = self.town.center_point
        candidates = [
            Position(x=x, y=y)
            for y in range(1, self.town.height - 1)
            for x in range(1, self.town.width - 1)
            if max(abs(x - center.x), abs(y - center.y)) > layout.house_exclusion
        ]
        self.rng.shuffle(candidates)

        placed = 0
        for position in candidates:
            if placed >= layout.houses:
                break
            if self.is_free(position.x, position.y):
                self.place(position, BuildingType.HOUSE)
                placed += 1
        return placed


def place_buildings(
    town: TownMap,
    layout: TownLayout,
    rng: SeededRNG,
    log: FilteringBoundLogger,
) -> int:
    """Keep (cities), civic buildings, then houses.

    Returns:
        Total number of buildings placed.
    """
    placer = BuildingPlacer(town, rng)
    keep = placer.place_keep(log) if layout.has_keep else None
    important = placer.place_important(layout)
    houses = placer.place_houses(layout)

    log.info(
        "buildings_placed",
        keep=keep is not None,
        important=important,
        houses=houses,
    )
    return important + houses + (keep is not None)
