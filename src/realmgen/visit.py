"""Entering towns from the world map, with a per-world cache of visits."""

from dataclasses import dataclass, field

import structlog
from structlog.typing import FilteringBoundLogger

from .exceptions import NotATownError
from .npcs import NPC, populate_town
from .rng import coerce_seed, town_seed
from .state import TownMap, WorldMap
from .tile_types import PathDirection, TownSize, WorldPOI
from .town import TownGenConfig, generate_town_map

CacheKey = tuple[int, int, int]


@dataclass
class TownVisit:
    """A town interior together with the NPCs generated for it."""

    town_map: TownMap
    npcs: list[NPC]
    seed: int


@dataclass
class TownCache:
    """Visits keyed by (world seed, tile x, tile y)."""

    visits: dict[CacheKey, TownVisit] = field(default_factory=dict)

    def get(self, world_seed: int, x: int, y: int) -> TownVisit | None:
        return self.visits.get((world_seed, x, y))

    def put(self, world_seed: int, x: int, y: int, visit: TownVisit) -> None:
        self.visits[(world_seed, x, y)] = visit

    def __contains__(self, key: CacheKey) -> bool:
        return key in self.visits

    def __len__(self) -> int:
        return len(self.visits)

    def clear(self) -> None:
        self.visits.clear()


def enter_town(
    world: WorldMap,
    world_seed: int | str,
    x: int,
    y: int,
    entry_direction: str = "south",
    cache: TownCache | None = None,
    config: TownGenConfig | None = None,
    logger: FilteringBoundLogger | None = None,
) -> TownVisit:
    """Generate (or recall) the town at a world tile.

    The town's seed comes from the world seed and the tile position, so the
    same town is rebuilt identically on every visit even without a cache.
    With a cache, the first visit's map and NPCs are returned on later
    visits, whatever the entry direction.

    Raises:
        NotATownError: If the tile is out of bounds or holds no town.
        InvalidSeedError: If the world seed is not an integer.
    """
    world_seed = coerce_seed(world_seed)
    log = (logger or structlog.get_logger()).bind(x=x, y=y)

    if cache is not None:
        visit = cache.get(world_seed, x, y)
        if visit is not None:
            log.debug("town_cache_hit", town=visit.town_map.town_name)
            return visit

    tile = world.get(x, y)
    if tile is None or tile.poi != WorldPOI.TOWN:
        raise NotATownError(f"No town at ({x}, {y})")

    seed = town_seed(world_seed, x, y)
    town_map = generate_town_map(
        tile.town_size or TownSize.VILLAGE,
        tile.town_name or "Unnamed Town",
        entry_direction=entry_direction,
        seed=seed,
        has_river=tile.has_river,
        river_direction=tile.river_direction or PathDirection.NORTH_SOUTH,
        config=config,
        logger=log,
    )
    visit = TownVisit(town_map=town_map, npcs=populate_town(town_map, seed, logger=log), seed=seed)

    if cache is not None:
        cache.put(world_seed, x, y, visit)
    log.info("town_entered", town=town_map.town_name, npcs=len(visit.npcs))
    return visit
