"""Reachability and consistency checks on a town map."""

import numpy as np
import structlog
from numpy.typing import NDArray
from scipy import ndimage
from structlog.typing import FilteringBoundLogger

from ..state import TownMap
from ..tile_types import BuildingType, TownTileType
from ..types import Position
from ..world.validation import ValidationResult

_FOUR_CONNECTED = ndimage.generate_binary_structure(2, 1)


def reachable_mask(town: TownMap) -> NDArray[np.bool_]:
    """Walkable tiles connected to the entry point, as a (height, width) mask."""
    walkable = town.mask(lambda t: t.walkable)
    entry = town.entry_point
    if not walkable[entry.y, entry.x]:
        return np.zeros_like(walkable)
    labels, _ = ndimage.label(walkable, structure=_FOUR_CONNECTED)
    return labels == labels[entry.y, entry.x]


def is_connected(town: TownMap, position: Position, reachable: NDArray[np.bool_]) -> bool:
    """Whether ``position`` is reachable itself or borders a reachable tile."""
    if reachable[position.y, position.x]:
        return True
    for neighbor in position.neighbors():
        if town.in_bounds(neighbor.x, neighbor.y) and reachable[neighbor.y, neighbor.x]:
            return True
    return False


def unreachable_houses(town: TownMap) -> list[Position]:
    """Houses with no walkable neighbour connected to the entry."""
    reachable = reachable_mask(town)
    return [
        tile.position
        for tile in town.find(lambda t: t.building_type == BuildingType.HOUSE)
        if not is_connected(town, tile.position, reachable)
    ]


def validate_town(town: TownMap, logger: FilteringBoundLogger | None = None) -> ValidationResult:
    """Check a town map against its generation invariants.

    Checks that every house can be reached from the entry, that buildings
    block movement, that the entry tile is flagged, and that decorations
    only sit on grass.
    """
    result = ValidationResult()

    for position in unreachable_houses(town):
        result.add_error(f"House at {position} is unreachable from the entry")

    for tile in town.find(lambda t: t.type == TownTileType.BUILDING and t.walkable):
        result.add_error(f"Building at {tile.position} is walkable")

    entries = town.find(lambda t: t.is_entry)
    if len(entries) != 1 or entries[0].position != town.entry_point:
        result.add_error(f"Entry flag missing or misplaced at {town.entry_point}")

    decorated_ground = (TownTileType.GRASS, TownTileType.TOWN_SQUARE)
    for tile in town.find(lambda t: t.poi is not None and t.type not in decorated_ground):
        result.add_warning(f"{tile.poi.value} on {tile.type.value} at {tile.position}")

    result.log(logger or structlog.get_logger(), "town")
    return result
