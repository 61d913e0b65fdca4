"""World map generation: natural features, towns, roads, and named ranges."""

from .config import CustomNames, WorldGenConfig
from .generator import find_starting_town, generate_world_map, get_tile
from .validation import ValidationResult, validate_world

__all__ = [
    "CustomNames",
    "ValidationResult",
    "WorldGenConfig",
    "find_starting_town",
    "generate_world_map",
    "get_tile",
    "validate_world",
]
