"""Organic footpaths linking houses to the road network, plus connectivity repair."""

import math

import numpy as np
from numpy.typing import NDArray
from structlog.typing import FilteringBoundLogger

from ..pathfinding import astar
from ..rng import SeededRNG
from ..state import TownMap
from ..tile_types import BuildingType, TownTileType
from ..types import Position
from .layout import TownGenConfig
from .validation import is_connected, reachable_mask

# Route cost for crossing water during repair; the crossing becomes a bridge
_REPAIR_WATER_COST = 5


def _houses(town: TownMap) -> list[Position]:
    return [tile.position for tile in town.find(lambda t: t.building_type == BuildingType.HOUSE)]


def _road_tiles(town: TownMap) -> list[Position]:
    return [tile.position for tile in town.find(lambda t: t.type.is_road)]


def carve_path(
    town: TownMap,
    start: Position,
    goal: Position,
    path_tiles: list[Position],
) -> None:
    """Walk from start to goal, vertical leg first, paving plain grass on the way.

    Tiles near the center get stone, the rest dirt. Paved tiles are appended
    to ``path_tiles`` so later links can attach to them.
    """
    center = town.center_point
    center_radius = max(town.width, town.height) // 4
    x, y = start.x, start.y

    while (x, y) != (goal.x, goal.y):
        if y < goal.y:
            y += 1
        elif y > goal.y:
            y -= 1
        elif x < goal.x:
            x += 1
        else:
            x -= 1

        tile = town.tile(x, y)
        if tile.type != TownTileType.GRASS or tile.poi is not None:
            continue
        near_center = abs(x - center.x) + abs(y - center.y) < center_radius
        tile.set_type(TownTileType.STONE_PATH if near_center else TownTileType.DIRT_PATH)
        path_tiles.append(tile.position)


def _nearest(house: Position, targets: list[Position]) -> tuple[Position | None, float]:
    best: Position | None = None
    best_distance = math.inf
    for target in targets:
        distance = house.manhattan(target)
        if 0 < distance < best_distance:
            best, best_distance = target, distance
    return best, best_distance


def connect_houses(
    town: TownMap,
    rng: SeededRNG,
    config: TownGenConfig,
    log: FilteringBoundLogger,
) -> int:
    """Grow the footpath network out from the main road.

    A share of the houses, in shuffled order, link straight to their nearest
    road tile. The rest link over several passes to the nearest path tile or
    already-linked house within range. A pass that links nothing ends the loop.

    Returns:
        Number of houses linked.
    """
    houses = _houses(town)
    path_tiles = _road_tiles(town)
    rng.shuffle(houses)

    direct = math.ceil(len(houses) * config.direct_connection_ratio)
    linked: list[Position] = []

    for house in houses[:direct]:
        target, distance = _nearest(house, path_tiles)
        if target is not None and distance > 1:
            carve_path(town, house, target, path_tiles)
            linked.append(house)

    pending = houses[direct:]
    for _ in range(config.connection_passes):
        if not pending:
            break
        still_pending = []
        for house in pending:
            target, distance = _nearest(house, path_tiles + linked)
            if target is not None and 1 < distance < config.max_connection_distance:
                carve_path(town, house, target, path_tiles)
                linked.append(house)
            else:
                still_pending.append(house)
        if len(still_pending) == len(pending):
            break
        pending = still_pending

    log.debug("footpaths_generated", direct=direct, linked=len(linked), houses=len(houses))
    return len(linked)


def _repair_costs(town: TownMap) -> NDArray[np.int32]:
    costs = np.zeros((town.height, town.width), dtype=np.int32)
    for tile in town.tiles:
        if tile.walkable:
            costs[tile.y, tile.x] = 1
        elif tile.type == TownTileType.WATER:
            costs[tile.y, tile.x] = _REPAIR_WATER_COST
    return costs


def _route_to_network(
    town: TownMap, building: Position, reachable: NDArray[np.bool_]
) -> list[Position] | None:
    # Reachable tiles form one connected walkable region, so the nearest one
    # is routable whenever any of them is
    ys, xs = np.nonzero(reachable)
    if len(xs) == 0:
        return None
    targets = [Position(x=x, y=y) for y, x in zip(ys.tolist(), xs.tolist())]
    target = min(targets, key=building.manhattan)
    return astar(_repair_costs(town), building, target)


def repair_connectivity(town: TownMap, log: FilteringBoundLogger) -> tuple[int, int]:
    """Make sure every building can be reached from the town entry.

    A building with no reachable neighbour is routed to the nearest reachable
    tile over grass and paths, bridging any water on the way. A house that
    still cannot be reached is torn down back to grass.

    Returns:
        (buildings routed, houses removed)
    """
    routed = removed = 0
    buildings = town.buildings()
    for tile in buildings:
        reachable = reachable_mask(town)
        if is_connected(town, tile.position, reachable):
            continue

        path = _route_to_network(town, tile.position, reachable)
        if path is not None:
            for position in path[1:]:
                step = town.at(position)
                if step.type == TownTileType.WATER:
                    step.set_type(TownTileType.BRIDGE)
                elif step.type == TownTileType.GRASS:
                    step.set_type(TownTileType.DIRT_PATH)
                    step.poi = None
            routed += 1
            continue

        if tile.building_type == BuildingType.HOUSE:
            tile.set_type(TownTileType.GRASS)
            tile.building_type = None
            tile.building_name = None
            removed += 1
        else:
            log.warning("building_unreachable", building=tile.building_type.value, x=tile.x, y=tile.y)

    if routed or removed:
        log.info("town_connectivity_repaired", routed=routed, removed=removed)
    return routed, removed
