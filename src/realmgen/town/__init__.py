"""Town interior generation: layouts, buildings, footpaths, and reachability."""

from .generator import entry_position, generate_town_map
from .layout import TownGenConfig, TownLayout, layout_for
from .validation import reachable_mask, unreachable_houses, validate_town

__all__ = [
    "TownGenConfig",
    "TownLayout",
    "entry_position",
    "generate_town_map",
    "layout_for",
    "reachable_mask",
    "unreachable_houses",
    "validate_town",
]
