"""Town interior generation orchestration."""

import math
from dataclasses import dataclass

import structlog
from structlog.typing import FilteringBoundLogger

from ..rng import SeededRNG
from ..state import TownMap
from ..tile_types import PathDirection, TownPOI, TownSize, TownTileType
from ..types import Position
from .buildings import place_buildings
from .layout import TownGenConfig, TownLayout, coerce_town_size, layout_for
from .paths import connect_houses, repair_connectivity

ENTRY_DIRECTIONS = ("north", "south", "east", "west")

# Drawn uniformly, so trees are much the likeliest
DECORATIONS: tuple[TownPOI, ...] = (
    TownPOI.TREE, TownPOI.TREE, TownPOI.TREE, TownPOI.TREE,
    TownPOI.BUSH, TownPOI.FLOWERS, TownPOI.TREE, TownPOI.TREE,
)


@dataclass
class RiverBand:
    """A straight band of water crossing the whole town."""

    horizontal: bool
    start: int
    width: int

    def contains(self, x: int, y: int) -> bool:
        along = y if self.horizontal else x
        return self.start <= along < self.start + self.width


def entry_position(width: int, height: int, direction: str) -> Position:
    """Midpoint of the edge the player enters from; unknown directions mean south."""
    if direction == "north":
        return Position(x=width // 2, y=0)
    if direction == "east":
        return Position(x=width - 1, y=height // 2)
    if direction == "west":
        return Position(x=0, y=height // 2)
    return Position(x=width // 2, y=height - 1)


def place_river(
    town: TownMap,
    river_direction: PathDirection | str,
    rng: SeededRNG,
    config: TownGenConfig,
) -> RiverBand:
    """Flood a band through the middle of town, nudged up to one tile off center."""
    horizontal = river_direction == PathDirection.EAST_WEST
    offset = rng.range(-1, 1)
    span = town.height if horizontal else town.width
    band = RiverBand(horizontal=horizontal, start=span // 2 + offset, width=config.river_width)

    for tile in town.tiles:
        if band.contains(tile.x, tile.y):
            tile.set_type(TownTileType.WATER)
    return band


def _pave(town: TownMap, x: int, y: int, surface: TownTileType, river: RiverBand | None) -> None:
    tile = town.get(x, y)
    if tile is None:
        return
    if river is not None and river.contains(x, y):
        tile.set_type(TownTileType.BRIDGE)
    else:
        tile.set_type(surface)


def place_main_road(
    town: TownMap,
    layout: TownLayout,
    direction: str,
    river: RiverBand | None,
) -> None:
    """Run the main road straight from the entry to the center.

    Wide roads get a second lane beside the first. Road cells on the river
    become bridges.
    """
    entry, center = town.entry_point, town.center_point
    wide = layout.road_width > 1

    if direction in ("north", "south"):
        for y in range(min(entry.y, center.y), max(entry.y, center.y) + 1):
            _pave(town, center.x, y, layout.road_surface, river)
            if wide and center.x < town.width - 1:
                _pave(town, center.x + 1, y, layout.road_surface, river)
    else:
        road_y = town.height // 2
        for x in range(min(entry.x, center.x), max(entry.x, center.x) + 1):
            _pave(town, x, road_y, layout.road_surface, river)
            if wide and road_y < town.height - 1:
                _pave(town, x, road_y + 1, layout.road_surface, river)


def place_square(town: TownMap, layout: TownLayout) -> None:
    """Pave the town square, with a fountain (cities) or well at its center."""
    center = town.center_point
    half = layout.square_half
    for dy in range(-half, half + 1):
        for dx in range(-half, half + 1):
            tile = town.get(center.x + dx, center.y + dy)
            if tile is None:
                continue
            tile.set_type(TownTileType.TOWN_SQUARE)
            if (dx, dy) == (0, 0):
                tile.poi = TownPOI.FOUNTAIN if layout.size == TownSize.CITY else TownPOI.WELL


def place_walls(town: TownMap) -> int:
    """Wall off the perimeter, leaving roads and other non-grass cells open."""
    walled = 0
    for tile in town.tiles:
        on_edge = tile.x in (0, town.width - 1) or tile.y in (0, town.height - 1)
        if on_edge and tile.type == TownTileType.GRASS:
            tile.set_type(TownTileType.WALL)
            walled += 1
    return walled


def _find_farm_start(town: TownMap, rng: SeededRNG, config: TownGenConfig) -> Position | None:
    for _ in range(config.farm_start_attempts):
        x = rng.range(0, town.width - 1)
        y = rng.range(0, town.height - 1)
        distance = math.hypot(x - town.width / 2, y - town.height / 2)
        if distance > town.width / 4 and town.tile(x, y).type == TownTileType.GRASS:
            return Position(x=x, y=y)
    return None


def place_farm_fields(
    town: TownMap,
    layout: TownLayout,
    rng: SeededRNG,
    config: TownGenConfig,
) -> int:
    """Stamp small rectangles of farmland away from the center.

    Returns:
        Number of tiles turned into fields.
    """
    fields = 0
    for _ in range(layout.farm_clusters):
        start = _find_farm_start(town, rng, config)
        if start is None:
            continue
        cluster_width = rng.range(2, 3)
        cluster_height = rng.range(2, 3)
        for dy in range(cluster_height):
            for dx in range(cluster_width):
                tile = town.get(start.x + dx, start.y + dy)
                if tile is not None and tile.type == TownTileType.GRASS and tile.poi is None:
                    tile.set_type(TownTileType.FARM_FIELD)
                    fields += 1
    return fields


def place_decorations(town: TownMap, layout: TownLayout, rng: SeededRNG) -> int:
    placed = 0
    for _ in range(layout.decorations):
        x = rng.range(0, town.width - 1)
        y = rng.range(0, town.height - 1)
        tile = town.tile(x, y)
        if tile.type == TownTileType.GRASS and tile.poi is None:
            tile.poi = rng.choice(DECORATIONS)
            placed += 1
    return placed


def generate_town_map(
    town_size: TownSize | str,
    town_name: str,
    entry_direction: str = "south",
    seed: int | str | None = None,
    has_river: bool = False,
    river_direction: PathDirection | str = PathDirection.NORTH_SOUTH,
    config: TownGenConfig | None = None,
    logger: FilteringBoundLogger | None = None,
) -> TownMap:
    """Generate a town interior.

    River, main road, square, walls (cities), buildings, footpaths,
    connectivity repair, farm fields, and decorations are laid down in that
    order; each later stage only claims cells earlier ones left as grass.

    Args:
        town_size: Size tier, which fixes the grid size and building roster.
        town_name: Name carried onto the map.
        entry_direction: Edge the player enters from: north, south, east, or west.
        seed: Integer seed. None draws one.
        has_river: Whether the world tile has a river running through it.
        river_direction: World river direction; EAST_WEST gives a horizontal band.
        config: Generation tunables.
        logger: Structured logger; defaults to ``structlog.get_logger()``.

    Raises:
        UnknownTownSizeError: If the size is not a known tier.
        InvalidSeedError: If the seed is not an integer.
    """
    size = coerce_town_size(town_size)
    layout = layout_for(size)
    config = config or TownGenConfig()
    rng = SeededRNG(seed)
    log = (logger or structlog.get_logger()).bind(town=town_name, seed=rng.seed)

    direction = entry_direction.lower() if isinstance(entry_direction, str) else ""
    if direction not in ENTRY_DIRECTIONS:
        log.debug("unknown_entry_direction", direction=entry_direction)
        direction = "south"

    entry = entry_position(layout.width, layout.height, direction)
    town = TownMap.blank(layout.width, layout.height, town_name, size, entry)
    log.info("town_generation_started", size=size.value, width=layout.width)

    river = place_river(town, river_direction, rng, config) if has_river else None
    place_main_road(town, layout, direction, river)
    place_square(town, layout)
    if layout.has_walls:
        place_walls(town)

    place_buildings(town, layout, rng, log)
    connect_houses(town, rng, config, log)
    if config.repair_connectivity:
        repair_connectivity(town, log)

    fields = place_farm_fields(town, layout, rng, config) if layout.farm_clusters else 0
    decorations = place_decorations(town, layout, rng)
    town.at(entry).is_entry = True

    log.info(
        "town_generation_complete",
        buildings=len(town.buildings()),
        farm_fields=fields,
        decorations=decorations,
    )
    return town
