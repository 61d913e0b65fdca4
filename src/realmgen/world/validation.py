"""Post-generation checks on a world map."""

import structlog
from structlog.typing import FilteringBoundLogger

from ..pathfinding import find_clusters
from ..state import WorldMap
from ..tile_types import Biome, WorldPOI


class ValidationResult:
    """Errors and warnings collected by a validation pass."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.passed = True

    def add_error(self, message: str) -> None:
        """Add validation error."""
        self.errors.append(message)
        self.passed = False

    def add_warning(self, message: str) -> None:
        """Add validation warning."""
        self.warnings.append(message)

    def log(self, log: FilteringBoundLogger, subject: str) -> None:
        if self.passed:
            log.info("validation_passed", subject=subject, warnings=len(self.warnings))
        else:
            log.warning("validation_failed", subject=subject, errors=self.errors)
        for warning in self.warnings:
            log.warning("validation_warning", subject=subject, message=warning)


def validate_world(world: WorldMap, logger: FilteringBoundLogger | None = None) -> ValidationResult:
    """Check a world map against its generation invariants.

    Checks that no POI sits on water, that exactly one town is the starting
    town, that every mountain cluster shares one name and has exactly one
    first tile, and that every town has a name and a size.
    """
    result = ValidationResult()

    _check_poi_on_water(world, result)
    _check_starting_town(world, result)
    _check_mountain_clusters(world, result)
    _check_towns_named(world, result)

    result.log(logger or structlog.get_logger(), "world")
    return result


def _check_poi_on_water(world: WorldMap, result: ValidationResult) -> None:
    for tile in world.find(lambda t: t.poi is not None and t.biome == Biome.WATER):
        result.add_error(f"{tile.poi.value} on water at {tile.position}")


def _check_starting_town(world: WorldMap, result: ValidationResult) -> None:
    starts = world.find(lambda t: t.poi == WorldPOI.TOWN and t.is_starting_town)
    if len(starts) != 1:
        result.add_error(f"Expected exactly one starting town, found {len(starts)}")

    stray = world.find(lambda t: t.is_starting_town and t.poi != WorldPOI.TOWN)
    if stray:
        result.add_error(f"{len(stray)} non-town tiles flagged as starting town")


def _check_mountain_clusters(world: WorldMap, result: ValidationResult) -> None:
    clusters = find_clusters(world.mask(lambda t: t.poi == WorldPOI.MOUNTAIN))
    for positions in clusters:
        tiles = [world.at(p) for p in positions]
        names = {tile.mountain_name for tile in tiles}
        if len(names) != 1 or None in names:
            result.add_error(f"Mountain cluster at {positions[0]} has names {sorted(map(str, names))}")
        firsts = sum(tile.is_first_mountain_in_range for tile in tiles)
        if firsts != 1:
            result.add_error(f"Mountain cluster at {positions[0]} has {firsts} first tiles")


def _check_towns_named(world: WorldMap, result: ValidationResult) -> None:
    for tile in world.towns():
        if not tile.town_name:
            result.add_error(f"Town at {tile.position} has no name")
        if tile.town_size is None:
            result.add_error(f"Town at {tile.position} has no size")

    if len(world.towns()) < 2:
        result.add_warning("Fewer than two towns; no roads were built")
