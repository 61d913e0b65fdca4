"""Grid pathfinding: A*, path direction codes, clusters, and the town road network.

A* runs over a numpy cost grid so the same search serves world maps, town
maps, and ad-hoc masks. A cell's cost is paid on entering it; cells with a
cost of zero or less are impassable.
"""

import heapq
import itertools

import numpy as np
import structlog
from numpy.typing import NDArray
from scipy import ndimage
from structlog.typing import FilteringBoundLogger

from .state import TileGrid, WorldMap, WorldTile
from .tile_types import Biome, PathDirection, WorldPOI
from .types import Direction, Position

# 4-connectivity for cluster labelling
_FOUR_CONNECTED = ndimage.generate_binary_structure(2, 1)

# Sorted connection sides -> direction code (dead ends handled separately)
_TURN_CODES: dict[tuple[str, ...], PathDirection] = {
    ("north", "south"): PathDirection.NORTH_SOUTH,
    ("east", "west"): PathDirection.EAST_WEST,
    ("east", "north"): PathDirection.NORTH_EAST,
    ("north", "west"): PathDirection.NORTH_WEST,
    ("east", "south"): PathDirection.SOUTH_EAST,
    ("south", "west"): PathDirection.SOUTH_WEST,
}

# Checked in order when a river ends on a beach
_BEACH_END_CODES: tuple[tuple[Direction, PathDirection], ...] = (
    (Direction.NORTH, PathDirection.END_NORTH),
    (Direction.EAST, PathDirection.END_EAST),
    (Direction.SOUTH, PathDirection.END_SOUTH),
    (Direction.WEST, PathDirection.END_WEST),
)


def astar(
    costs: NDArray[np.integer],
    start: Position,
    goal: Position,
) -> list[Position] | None:
    """Find the cheapest 4-directional path across a cost grid.

    Args:
        costs: Cost grid of shape (height, width).
        start: Starting position.
        goal: Goal position.

    Returns:
        Positions from start to goal inclusive, or None if either end is
        outside the grid or the goal cannot be reached.
    """
    height, width = costs.shape
    if not (0 <= start.x < width and 0 <= start.y < height):
        return None
    if not (0 <= goal.x < width and 0 <= goal.y < height):
        return None

    start_cell = (start.x, start.y)
    goal_cell = (goal.x, goal.y)

    # Heap entries: (f_score, insertion order, cell)
    counter = itertools.count()
    open_heap: list[tuple[int, int, tuple[int, int]]] = [
        (start.manhattan(goal), next(counter), start_cell)
    ]
    came_from: dict[tuple[int, int], tuple[int, int]] = {}
    g_score: dict[tuple[int, int], int] = {start_cell: 0}
    closed: set[tuple[int, int]] = set()

    while open_heap:
        _, _, current = heapq.heappop(open_heap)
        if current == goal_cell:
            return _reconstruct(came_from, current)
        if current in closed:
            continue
        closed.add(current)

        cx, cy = current
        for dx, dy in ((0, -1), (1, 0), (0, 1), (-1, 0)):
            nx, ny = cx + dx, cy + dy
            if not (0 <= nx < width and 0 <= ny < height):
                continue
            step = int(costs[ny, nx])
            if step <= 0:
                continue
            neighbor = (nx, ny)
            tentative = g_score[current] + step
            if tentative < g_score.get(neighbor, tentative + 1):
                came_from[neighbor] = current
                g_score[neighbor] = tentative
                h = abs(nx - goal.x) + abs(ny - goal.y)
                heapq.heappush(open_heap, (tentative + h, next(counter), neighbor))

    return None


def _reconstruct(
    came_from: dict[tuple[int, int], tuple[int, int]],
    current: tuple[int, int],
) -> list[Position]:
    cells = [current]
    while current in came_from:
        current = came_from[current]
        cells.append(current)
    cells.reverse()
    return [Position(x=x, y=y) for x, y in cells]


def find_path(grid: TileGrid, start: Position, goal: Position) -> list[Position] | None:
    """A* between two positions on a world or town map, using tile movement costs."""
    return astar(grid.movement_costs(), start, goal)


def connection_side(neighbor: Position, tile: Position) -> str | None:
    """Which side of ``tile`` the adjacent ``neighbor`` sits on."""
    if neighbor.y < tile.y:
        return "north"
    if neighbor.y > tile.y:
        return "south"
    if neighbor.x < tile.x:
        return "west"
    if neighbor.x > tile.x:
        return "east"
    return None


def _path_neighbors(path: list[Position], index: int) -> list[Position]:
    neighbors = []
    if index > 0:
        neighbors.append(path[index - 1])
    if index < len(path) - 1:
        neighbors.append(path[index + 1])
    return neighbors


def calculate_path_direction(tile: Position, path: list[Position]) -> PathDirection:
    """Connector code for a tile given its previous and next tiles in the path.

    A tile with a single connection is a dead end: START_* on the first tile of
    the path, END_* elsewhere. Tiles outside the path get NONE.
    """
    try:
        index = path.index(tile)
    except ValueError:
        return PathDirection.NONE

    sides = []
    for neighbor in _path_neighbors(path, index):
        side = connection_side(neighbor, tile)
        if side is not None:
            sides.append(side)
    sides.sort()

    if len(sides) == 1:
        prefix = "START" if index == 0 else "END"
        return PathDirection(f"{prefix}_{sides[0].upper()}")
    return _TURN_CODES.get(tuple(sides), PathDirection.INTERSECTION)


def _add_connections(
    connections: list[str], tile: Position, path: list[Position], index: int
) -> None:
    for neighbor in _path_neighbors(path, index):
        side = connection_side(neighbor, tile)
        if side is not None and side not in connections:
            connections.append(side)


def find_nearest_towns(
    town: Position, towns: list[Position], count: int = 2
) -> list[Position]:
    """The ``count`` other towns closest to ``town`` by Manhattan distance."""
    others = [other for other in towns if other != town]
    others.sort(key=town.manhattan)
    return others[:count]


def generate_town_paths(
    world: WorldMap,
    towns: list[Position],
    logger: FilteringBoundLogger | None = None,
) -> list[list[Position]]:
    """Connect each town to its nearest neighbours with A* roads.

    Each town links to its single nearest town when there are at most two
    towns, otherwise to its two nearest. A pair is only pathed once. Pairs A*
    cannot connect are skipped.
    """
    log = logger or structlog.get_logger()
    nearest_count = 1 if len(towns) <= 2 else 2
    costs = world.movement_costs()

    paths: list[list[Position]] = []
    connected: set[tuple[str, str]] = set()
    for town in towns:
        for target in find_nearest_towns(town, towns, nearest_count):
            pair = tuple(sorted((town.key, target.key)))
            if pair in connected:
                continue
            path = astar(costs, town, target)
            if path is None:
                log.debug("road_skipped", start=town.key, goal=target.key)
                continue
            paths.append(path)
            connected.add(pair)
            log.debug("road_created", start=town.key, goal=target.key, length=len(path))

    log.info("roads_generated", count=len(paths))
    return paths


def mark_path_tiles(
    world: WorldMap,
    paths: list[list[Position]],
    logger: FilteringBoundLogger | None = None,
) -> int:
    """Mark road tiles on the world map, leaving POI tiles untouched.

    Returns:
        Number of tiles newly marked as road.
    """
    log = logger or structlog.get_logger()
    marked = 0
    for path in paths:
        for index, position in enumerate(path):
            tile = world.at(position)
            if tile.poi is not None:
                continue
            if not tile.has_path:
                tile.has_path = True
                tile.path_connections = []
                marked += 1
            tile.path_direction = calculate_path_direction(position, path)
            _add_connections(tile.path_connections, position, path, index)

    log.debug("path_tiles_marked", count=marked)
    return marked


def mark_river_tiles(
    world: WorldMap,
    rivers: list[list[Position]],
    logger: FilteringBoundLogger | None = None,
) -> int:
    """Mark river tiles on the world map.

    Rivers flow through forests and mountains but never over a town. A river
    that ends on a beach points its final tile at the adjacent water.

    Returns:
        Number of tiles newly marked as river.
    """
    log = logger or structlog.get_logger()
    marked = 0
    for river in rivers:
        for index, position in enumerate(river):
            tile = world.at(position)
            if tile.poi == WorldPOI.TOWN:
                continue
            if not tile.has_river:
                tile.has_river = True
                tile.river_connections = []
                marked += 1

            direction = calculate_path_direction(position, river)
            if tile.biome == Biome.BEACH and index == len(river) - 1:
                direction = _beach_end_direction(world, tile) or direction
            tile.river_direction = direction
            _add_connections(tile.river_connections, position, river, index)

    log.debug("river_tiles_marked", count=marked)
    return marked


def _beach_end_direction(world: WorldMap, tile: WorldTile) -> PathDirection | None:
    for direction, code in _BEACH_END_CODES:
        neighbor = world.get(*_offset(tile.position, direction))
        if neighbor is not None and neighbor.biome == Biome.WATER:
            return code
    return None


def _offset(position: Position, direction: Direction) -> tuple[int, int]:
    moved = position.offset(direction)
    return moved.x, moved.y


def find_clusters(mask: NDArray[np.bool_]) -> list[list[Position]]:
    """Group True cells of a mask into 4-connected clusters.

    Clusters are ordered by their first cell in row-major order, and each
    cluster lists its cells in row-major order.
    """
    labels, count = ndimage.label(mask, structure=_FOUR_CONNECTED)
    if count == 0:
        return []

    clusters: dict[int, list[Position]] = {}
    ys, xs = np.nonzero(labels)
    for y, x in zip(ys.tolist(), xs.tolist()):
        clusters.setdefault(int(labels[y, x]), []).append(Position(x=x, y=y))

    return sorted(clusters.values(), key=lambda cells: (cells[0].y, cells[0].x))
