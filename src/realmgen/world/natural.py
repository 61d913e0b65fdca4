"""Natural features: coast, lakes, forests, mountain ranges, rivers, caves.

Each placement stage only claims tiles that are still free, so stages can run
in a fixed order over one shared grid without overwriting each other.
"""

from structlog.typing import FilteringBoundLogger

from ..pathfinding import astar, mark_river_tiles
from ..rng import SeededRNG
from ..state import WorldMap
from ..tile_types import Biome, WorldPOI
from ..types import Position
from .config import WorldGenConfig

# Growth directions, in the order they are drawn from: E, W, S, N
GROWTH_DIRECTIONS: tuple[tuple[int, int], ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))

FOREST_DESCRIPTION = "Dense woods"
MOUNTAIN_DESCRIPTION = "Rocky peaks"


def is_valid_placement(world: WorldMap, x: int, y: int, allow_beach: bool = True) -> bool:
    """Whether a POI may be placed at (x, y): in bounds, unclaimed, dry land."""
    tile = world.get(x, y)
    if tile is None or tile.poi is not None:
        return False
    if tile.biome == Biome.WATER:
        return False
    if not allow_beach and tile.biome == Biome.BEACH:
        return False
    return True


def is_near_coast(world: WorldMap, x: int, y: int) -> bool:
    """Whether (x, y) or any of its 8 neighbours is water or beach."""
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            tile = world.get(x + dx, y + dy)
            if tile is not None and tile.biome in (Biome.WATER, Biome.BEACH):
                return True
    return False


def _coast_coords(edge: int, i: int, depth: int, width: int, height: int) -> tuple[int, int]:
    if edge == 0:
        return i, depth
    if edge == 1:
        return width - 1 - depth, i
    if edge == 2:
        return i, height - 1 - depth
    return depth, i


def place_coast(
    world: WorldMap,
    rng: SeededRNG,
    config: WorldGenConfig,
    log: FilteringBoundLogger,
) -> int:
    """Carve a water band along one random edge, with beach on its inner row.

    Returns:
        The edge index used (0=N, 1=E, 2=S, 3=W).
    """
    edge = rng.range(0, 3)
    depth = rng.range(config.coast_depth_min, config.coast_depth_max)
    strip = world.width if edge in (0, 2) else world.height

    for i in range(strip):
        for d in range(depth):
            tile = world.get(*_coast_coords(edge, i, d, world.width, world.height))
            if tile is None:
                continue
            if d == depth - 1:
                tile.biome = Biome.BEACH
                tile.beach_direction = edge
                tile.description_seed = "A sandy beach"
            else:
                tile.biome = Biome.WATER
                tile.description_seed = "The coastal sea"

    log.debug("coast_placed", edge=edge, depth=depth)
    return edge


def place_lake(
    world: WorldMap,
    rng: SeededRNG,
    config: WorldGenConfig,
    log: FilteringBoundLogger,
) -> Position | None:
    """Turn one inland plains tile into a lake, away from the coast."""
    for _ in range(config.lake_attempts):
        x = rng.range(2, world.width - 3)
        y = rng.range(2, world.height - 3)
        tile = world.get(x, y)
        if tile is None:
            continue
        if tile.biome == Biome.PLAINS and not is_near_coast(world, x, y):
            tile.biome = Biome.WATER
            tile.description_seed = "A clear lake"
            tile.is_lake = True
            return tile.position

    log.debug("lake_skipped", attempts=config.lake_attempts)
    return None


def _find_cluster_start(
    world: WorldMap,
    rng: SeededRNG,
    config: WorldGenConfig,
    avoid: tuple[Biome, ...],
) -> Position:
    # Falls back to the last candidate tried; marking rejects it if unusable
    x = y = 0
    for _ in range(config.cluster_start_attempts):
        x = rng.range(1, world.width - 2)
        y = rng.range(1, world.height - 2)
        tile = world.get(x, y)
        if tile is not None and tile.biome not in avoid:
            break
    return Position(x=x, y=y)


def _try_grow(
    world: WorldMap,
    rng: SeededRNG,
    config: WorldGenConfig,
    base: Position,
    allow_beach: bool,
) -> Position | None:
    for _ in range(config.growth_attempts):
        dx, dy = rng.choice(GROWTH_DIRECTIONS)
        x, y = base.x + dx, base.y + dy
        if is_valid_placement(world, x, y, allow_beach):
            return Position(x=x, y=y)
    return None


def _claim(world: WorldMap, tiles: list[Position], poi: WorldPOI, description: str) -> list[Position]:
    claimed = []
    for position in tiles:
        tile = world.get(position.x, position.y)
        if tile is None or tile.poi is not None or tile.biome == Biome.WATER:
            continue
        tile.poi = poi
        tile.description_seed = description
        claimed.append(position)
    return claimed


def place_forest_cluster(
    world: WorldMap,
    rng: SeededRNG,
    config: WorldGenConfig,
    log: FilteringBoundLogger,
) -> list[Position]:
    """Grow a forest blob outward from random existing members.

    Failed growth steps are skipped, so the forest may come out smaller than
    the size drawn for it.
    """
    size = rng.range(config.forest_size_min, config.forest_size_max)
    tiles = [_find_cluster_start(world, rng, config, (Biome.WATER,))]

    for _ in range(len(tiles), size):
        base = rng.choice(tiles)
        grown = _try_grow(world, rng, config, base, allow_beach=True)
        if grown is not None:
            tiles.append(grown)

    claimed = _claim(world, tiles, WorldPOI.FOREST, FOREST_DESCRIPTION)
    log.debug("forest_placed", size=len(claimed), target=size)
    return claimed


def place_mountain_range(
    world: WorldMap,
    rng: SeededRNG,
    config: WorldGenConfig,
    log: FilteringBoundLogger,
) -> list[Position]:
    """Grow a roughly linear mountain range, always extending from its last tile."""
    size = rng.range(config.mountain_size_min, config.mountain_size_max)
    tiles = [_find_cluster_start(world, rng, config, (Biome.WATER, Biome.BEACH))]

    for _ in range(1, size):
        grown = _try_grow(world, rng, config, tiles[-1], allow_beach=False)
        if grown is not None:
            tiles.append(grown)

    claimed = _claim(world, tiles, WorldPOI.MOUNTAIN, MOUNTAIN_DESCRIPTION)
    log.debug("mountain_range_placed", size=len(claimed), target=size)
    return claimed


def generate_rivers(
    world: WorldMap,
    mountains: list[Position],
    rng: SeededRNG,
    config: WorldGenConfig,
    log: FilteringBoundLogger,
) -> list[list[Position]]:
    """Run rivers from randomly chosen mountain tiles to their nearest water."""
    water = [tile.position for tile in world.find(lambda t: t.biome == Biome.WATER)]
    if not water or not mountains:
        return []

    count = min(len(mountains), rng.range(config.rivers_min, config.rivers_max))
    sources = list(mountains)
    rng.shuffle(sources)

    costs = world.movement_costs()
    rivers = []
    for source in sources[:count]:
        target = min(water, key=source.manhattan)
        path = astar(costs, source, target)
        if path is None:
            log.debug("river_skipped", source=source.key)
            continue
        rivers.append(path)

    if rivers:
        mark_river_tiles(world, rivers, log)
    log.info("rivers_generated", count=len(rivers))
    return rivers


def place_cave(world: WorldMap, rng: SeededRNG, log: FilteringBoundLogger) -> Position | None:
    """Open a cave entrance on a free non-beach tile beside a random mountain."""
    mountains = world.find(lambda t: t.poi == WorldPOI.MOUNTAIN)
    if not mountains:
        return None

    mountain = rng.choice(mountains)
    for dx, dy in GROWTH_DIRECTIONS:
        x, y = mountain.x + dx, mountain.y + dy
        if is_valid_placement(world, x, y, allow_beach=False):
            tile = world.tile(x, y)
            tile.poi = WorldPOI.CAVE_ENTRANCE
            tile.description_seed = "A dark cave entrance"
            return tile.position

    log.debug("cave_skipped", mountain=mountain.position.key)
    return None


def place_natural_features(
    world: WorldMap,
    rng: SeededRNG,
    config: WorldGenConfig,
    log: FilteringBoundLogger,
) -> list[Position]:
    """Coast, lakes, forests, mountain ranges, then rivers.

    Returns:
        Mountain tiles placed by the range stage.
    """
    place_coast(world, rng, config, log)

    lakes = [
        place_lake(world, rng, config, log)
        for _ in range(rng.range(config.lakes_min, config.lakes_max))
    ]

    forest_clusters = rng.range(config.forest_clusters_min, config.forest_clusters_max)
    for _ in range(forest_clusters):
        place_forest_cluster(world, rng, config, log)

    mountains: list[Position] = []
    for _ in range(rng.range(config.mountain_ranges_min, config.mountain_ranges_max)):
        mountains.extend(place_mountain_range(world, rng, config, log))

    generate_rivers(world, mountains, rng, config, log)

    log.info(
        "natural_features_placed",
        lakes=sum(lake is not None for lake in lakes),
        forest_clusters=forest_clusters,
        mountains=len(mountains),
    )
    return mountains
