"""World map generation orchestration."""

from collections.abc import Callable, Sequence

import structlog
from structlog.typing import FilteringBoundLogger

from ..exceptions import NoTownsError
from ..rng import SeededRNG
from ..state import WorldMap, WorldTile
from ..tile_types import WorldPOI
from ..types import Position
from .config import CustomNames, WorldGenConfig
from .natural import place_natural_features
from .settlements import place_settlements

DEFAULT_WIDTH = 10
DEFAULT_HEIGHT = 10

# Description carried by starting towns on maps saved before the flag existed
_LEGACY_STARTING_DESCRIPTION = "A small village"


def generate_world_map(
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
    seed: int | str | None = None,
    custom_names: CustomNames | Sequence[str] | dict | None = None,
    config: WorldGenConfig | None = None,
    logger: FilteringBoundLogger | None = None,
) -> WorldMap:
    """Generate a world map.

    The pipeline is coast, lakes, forests, mountain ranges, rivers, towns,
    quadrant balancing, starting town, town sizes and names, roads, and
    finally mountain-range naming. The result is a pure function of
    ``(width, height, seed, custom_names, config)``.

    Args:
        width: Map width in tiles.
        height: Map height in tiles.
        seed: Integer seed. None draws one; it is recorded on ``WorldMap.seed``.
        custom_names: Town and mountain names to use before generated ones.
            A bare list is read as town names.
        config: Stage counts and retry caps.
        logger: Structured logger; defaults to ``structlog.get_logger()``.

    Returns:
        The generated WorldMap.

    Raises:
        InvalidSeedError: If the seed is not an integer.
        InvalidGridError: If width or height is not positive.
        GenerationError: If no town could be placed.
    """
    names = CustomNames.model_validate(custom_names)
    config = config or WorldGenConfig()
    rng = SeededRNG(seed)
    log = (logger or structlog.get_logger()).bind(seed=rng.seed)

    world = WorldMap.blank(width, height, seed=rng.seed)
    log.info("world_generation_started", width=width, height=height)

    place_natural_features(world, rng, config, log)
    towns = place_settlements(world, rng, config, names, log)

    log.info("world_generation_complete", towns=len(towns))
    return world


def _first(world: WorldMap, predicate: Callable[[WorldTile], bool]) -> WorldTile | None:
    for tile in world.tiles:
        if predicate(tile):
            return tile
    return None


def find_starting_town(world: WorldMap, logger: FilteringBoundLogger | None = None) -> Position:
    """Locate the player's starting town.

    Falls back to the legacy "A small village" description and then to any
    town, so maps saved by older versions still load.

    Raises:
        NoTownsError: If the map holds no town at all.
    """
    log = logger or structlog.get_logger()

    tile = _first(world, lambda t: t.poi == WorldPOI.TOWN and t.is_starting_town)
    if tile is None:
        log.debug("starting_town_flag_missing")
        tile = _first(
            world,
            lambda t: t.poi == WorldPOI.TOWN
            and t.description_seed == _LEGACY_STARTING_DESCRIPTION,
        )
    if tile is None:
        tile = _first(world, lambda t: t.poi == WorldPOI.TOWN)
    if tile is None:
        log.error("no_towns_found")
        raise NoTownsError("No towns found on map - map generation failed")

    log.debug("starting_town_found", name=tile.town_name, x=tile.x, y=tile.y)
    return tile.position


def get_tile(
    world: WorldMap, x: int, y: int, logger: FilteringBoundLogger | None = None
) -> WorldTile | None:
    """The tile at (x, y), or None (with a warning) when out of bounds."""
    tile = world.get(x, y)
    if tile is None:
        (logger or structlog.get_logger()).warning("tile_out_of_bounds", x=x, y=y)
    return tile
