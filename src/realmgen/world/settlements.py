"""Towns, quadrant balancing, naming, roads, and mountain-range naming."""

from structlog.typing import FilteringBoundLogger

from ..exceptions import GenerationError
from ..names import generate_mountain_name, generate_town_name
from ..pathfinding import find_clusters, generate_town_paths, mark_path_tiles
from ..rng import SeededRNG
from ..state import WorldMap, WorldTile
from ..tile_types import Biome, TownSize, WorldPOI
from ..types import Position
from .config import CustomNames, WorldGenConfig
from .natural import (
    FOREST_DESCRIPTION,
    MOUNTAIN_DESCRIPTION,
    is_valid_placement,
    place_cave,
)

TOWN_PLACEHOLDER_DESCRIPTIONS: tuple[str, ...] = (
    "A trading post",
    "A farming hamlet",
    "A riverside settlement",
    "A crossroads inn",
)

TOWN_SIZE_DESCRIPTIONS: dict[TownSize, str] = {
    TownSize.HAMLET: "A small hamlet",
    TownSize.VILLAGE: "A quiet village",
    TownSize.TOWN: "A bustling town",
    TownSize.CITY: "A grand city",
}

_BALANCING_FEATURES: tuple[WorldPOI, ...] = (WorldPOI.FOREST, WorldPOI.MOUNTAIN)


def _too_close(x: int, y: int, towns: list[Position], min_distance: int) -> bool:
    return any(abs(x - t.x) + abs(y - t.y) < min_distance for t in towns)


def place_town(
    world: WorldMap,
    rng: SeededRNG,
    config: WorldGenConfig,
    towns: list[Position],
    log: FilteringBoundLogger,
) -> Position | None:
    """Place one town on free dry land, keeping its distance from the others."""
    for _ in range(config.town_attempts):
        x = rng.range(1, world.width - 2)
        y = rng.range(1, world.height - 2)
        if not is_valid_placement(world, x, y):
            continue
        if _too_close(x, y, towns, config.min_town_distance):
            continue

        tile = world.tile(x, y)
        tile.poi = WorldPOI.TOWN
        tile.description_seed = rng.choice(TOWN_PLACEHOLDER_DESCRIPTIONS)
        log.debug("town_placed", x=x, y=y)
        return tile.position

    log.debug("town_skipped", attempts=config.town_attempts)
    return None


def place_towns(
    world: WorldMap,
    rng: SeededRNG,
    config: WorldGenConfig,
    log: FilteringBoundLogger,
) -> list[Position]:
    requested = rng.range(config.towns_min, config.towns_max)
    towns: list[Position] = []
    for _ in range(requested):
        position = place_town(world, rng, config, towns, log)
        if position is not None:
            towns.append(position)

    log.info("towns_placed", count=len(towns), requested=requested)
    return towns


def _quadrants(width: int, height: int) -> list[tuple[str, int, int, int, int]]:
    mid_x, mid_y = width // 2, height // 2
    return [
        ("top-left", 0, mid_x, 0, mid_y),
        ("top-right", mid_x, width, 0, mid_y),
        ("bottom-left", 0, mid_x, mid_y, height),
        ("bottom-right", mid_x, width, mid_y, height),
    ]


def balance_quadrants(
    world: WorldMap,
    rng: SeededRNG,
    config: WorldGenConfig,
    log: FilteringBoundLogger,
) -> int:
    """Top up any quadrant holding fewer POIs than the configured floor.

    New forests and mountains go on the quadrant's free plains tiles, in
    shuffled order, until the floor is met or the plains run out.

    Returns:
        Number of features added across all quadrants.
    """
    added = 0
    for name, x0, x1, y0, y1 in _quadrants(world.width, world.height):
        features = 0
        plains: list[Position] = []
        for y in range(y0, y1):
            for x in range(x0, x1):
                tile = world.tile(x, y)
                if tile.poi is not None:
                    features += 1
                elif tile.biome == Biome.PLAINS:
                    plains.append(tile.position)

        needed = config.min_features_per_quadrant - features
        if needed <= 0 or not plains:
            continue

        rng.shuffle(plains)
        for position in plains[:needed]:
            tile = world.at(position)
            tile.poi = rng.choice(_BALANCING_FEATURES)
            tile.description_seed = (
                FOREST_DESCRIPTION if tile.poi == WorldPOI.FOREST else MOUNTAIN_DESCRIPTION
            )
            added += 1
        log.debug("quadrant_balanced", quadrant=name, features=features, added=min(needed, len(plains)))

    return added


def select_starting_town(world: WorldMap, towns: list[Position], rng: SeededRNG) -> Position:
    """Flag one town, chosen uniformly, as the player's starting town."""
    start = towns[rng.range(0, len(towns) - 1)]
    world.at(start).is_starting_town = True
    return start


def assign_town_sizes_and_names(
    world: WorldMap,
    towns: list[Position],
    rng: SeededRNG,
    custom_towns: list[str],
    log: FilteringBoundLogger,
) -> None:
    """Give every town a size tier, then a name in order of importance.

    Sizes come from a shuffled hamlet/village/town/city deck so each tier is
    used about once. Custom names go to the most important towns first.
    """
    deck = [TownSize.HAMLET, TownSize.VILLAGE, TownSize.TOWN, TownSize.CITY]
    rng.shuffle(deck)
    for index, position in enumerate(towns):
        world.at(position).town_size = deck[index % len(deck)]

    ranked = sorted(towns, key=lambda p: world.at(p).town_size.importance)
    remaining = list(custom_towns)
    for position in ranked:
        tile = world.at(position)
        size = tile.town_size
        if remaining:
            tile.town_name = remaining.pop(0)
        else:
            tile.town_name = generate_town_name(rng, size, tile.biome.value)
        tile.description_seed = TOWN_SIZE_DESCRIPTIONS[size]
        log.debug("town_named", name=tile.town_name, size=size.value, x=tile.x, y=tile.y)


def build_roads(
    world: WorldMap,
    towns: list[Position],
    log: FilteringBoundLogger,
) -> list[list[Position]]:
    if len(towns) < 2:
        return []
    paths = generate_town_paths(world, towns, log)
    mark_path_tiles(world, paths, log)
    return paths


def _choose_range_name(
    cluster: list[WorldTile],
    custom_lookup: set[str],
    remaining: list[str],
    rng: SeededRNG,
) -> str:
    for tile in cluster:
        if tile.mountain_name and tile.mountain_name.lower() in custom_lookup:
            return tile.mountain_name
    if remaining:
        return remaining.pop(0)
    for tile in cluster:
        if tile.mountain_name:
            return tile.mountain_name
    return generate_mountain_name(rng)


def harmonize_mountain_names(
    world: WorldMap,
    rng: SeededRNG,
    custom_mountains: list[str],
    log: FilteringBoundLogger,
) -> int:
    """Give each connected mountain cluster a single range name.

    A custom name already present in the cluster wins, then the next unused
    custom name, then any name already in the cluster, then a fresh one. The
    first tile of each cluster in row-major order is flagged as the range's
    first tile.

    Returns:
        Number of clusters named.
    """
    clusters = find_clusters(world.mask(lambda t: t.poi == WorldPOI.MOUNTAIN))
    custom_lookup = {name.lower() for name in custom_mountains}
    remaining = list(custom_mountains)

    for positions in clusters:
        cluster = [world.at(p) for p in positions]
        name = _choose_range_name(cluster, custom_lookup, remaining, rng)
        for index, tile in enumerate(cluster):
            tile.mountain_name = name
            tile.description_seed = f"The {name}"
            tile.is_first_mountain_in_range = index == 0
        log.debug("mountain_range_named", name=name, tiles=len(cluster), x=cluster[0].x, y=cluster[0].y)

    log.info("mountain_ranges_named", count=len(clusters))
    return len(clusters)


def place_settlements(
    world: WorldMap,
    rng: SeededRNG,
    config: WorldGenConfig,
    custom_names: CustomNames,
    log: FilteringBoundLogger,
) -> list[Position]:
    """Stages that need natural features in place: towns through range names.

    Raises:
        GenerationError: If no town could be placed.
    """
    towns = place_towns(world, rng, config, log)
    if not towns:
        log.error("no_towns_placed")
        raise GenerationError("No towns could be placed on the map")

    balance_quadrants(world, rng, config, log)

    for _ in range(config.cave_count):
        place_cave(world, rng, log)

    start = select_starting_town(world, towns, rng)
    assign_town_sizes_and_names(world, towns, rng, custom_names.towns, log)
    build_roads(world, towns, log)
    harmonize_mountain_names(world, rng, custom_names.mountains, log)

    starting_tile = world.at(start)
    log.info(
        "starting_town_selected",
        name=starting_tile.town_name,
        size=starting_tile.town_size.value,
        x=start.x,
        y=start.y,
    )
    return towns
