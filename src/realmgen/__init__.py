"""Seeded procedural generation of world maps, town interiors, and townsfolk.

Every generator is a pure function of its seed and parameters: the same
inputs always produce the same map or population.
"""

from .config import GenerationConfig, load_config
from .exceptions import (
    GenerationError,
    InvalidGridError,
    InvalidSeedError,
    NoTownsError,
    NotATownError,
    RealmgenError,
    UnknownRoleError,
    UnknownTownSizeError,
)
from .npcs import NPC, NPCOptions, generate_name, generate_npc, populate_town
from .pathfinding import find_path
from .rng import SeededRNG, derive_seed, town_seed
from .state import TownMap, TownTile, WorldMap, WorldTile
from .tile_types import (
    Biome,
    BuildingType,
    PathDirection,
    TownPOI,
    TownSize,
    TownTileType,
    WorldPOI,
)
from .town import TownGenConfig, generate_town_map, validate_town
from .types import Direction, Position
from .visit import TownCache, TownVisit, enter_town
from .world import (
    CustomNames,
    WorldGenConfig,
    find_starting_town,
    generate_world_map,
    get_tile,
    validate_world,
)

__all__ = [
    "Biome",
    "BuildingType",
    "CustomNames",
    "Direction",
    "GenerationConfig",
    "GenerationError",
    "InvalidGridError",
    "InvalidSeedError",
    "NPC",
    "NPCOptions",
    "NoTownsError",
    "NotATownError",
    "PathDirection",
    "Position",
    "RealmgenError",
    "SeededRNG",
    "TownCache",
    "TownGenConfig",
    "TownMap",
    "TownPOI",
    "TownSize",
    "TownTile",
    "TownTileType",
    "TownVisit",
    "UnknownRoleError",
    "UnknownTownSizeError",
    "WorldGenConfig",
    "WorldMap",
    "WorldPOI",
    "WorldTile",
    "derive_seed",
    "enter_town",
    "find_path",
    "find_starting_town",
    "generate_name",
    "generate_npc",
    "generate_town_map",
    "get_tile",
    "load_config",
    "populate_town",
    "town_seed",
    "validate_town",
    "validate_world",
]
