"""Tile, feature, and settlement kinds and their properties."""

from enum import Enum


class Biome(str, Enum):
    """Base terrain of a world tile."""

    PLAINS = "plains"
    WATER = "water"
    BEACH = "beach"
    FOREST_ADJACENT = "forest-adjacent"
    MOUNTAIN_ADJACENT = "mountain-adjacent"


class WorldPOI(str, Enum):
    """Point of interest layered over a world tile's biome."""

    FOREST = "forest"
    MOUNTAIN = "mountain"
    TOWN = "town"
    CAVE_ENTRANCE = "cave_entrance"


class PathDirection(str, Enum):
    """Connector code for a tile on a road or river, used by renderers."""

    NONE = "NONE"
    NORTH_SOUTH = "NORTH_SOUTH"
    EAST_WEST = "EAST_WEST"
    NORTH_EAST = "NORTH_EAST"
    NORTH_WEST = "NORTH_WEST"
    SOUTH_EAST = "SOUTH_EAST"
    SOUTH_WEST = "SOUTH_WEST"
    INTERSECTION = "INTERSECTION"
    START_NORTH = "START_NORTH"
    START_SOUTH = "START_SOUTH"
    START_EAST = "START_EAST"
    START_WEST = "START_WEST"
    END_NORTH = "END_NORTH"
    END_SOUTH = "END_SOUTH"
    END_EAST = "END_EAST"
    END_WEST = "END_WEST"


class TownSize(str, Enum):
    """Settlement tier, ordered from smallest to largest."""

    HAMLET = "hamlet"
    VILLAGE = "village"
    TOWN = "town"
    CITY = "city"

    @property
    def importance(self) -> int:
        """Naming priority: 0 is the most important (city)."""
        return _IMPORTANCE[self]


_IMPORTANCE = {
    TownSize.CITY: 0,
    TownSize.TOWN: 1,
    TownSize.VILLAGE: 2,
    TownSize.HAMLET: 3,
}


class TownTileType(str, Enum):
    """Ground type of a town tile."""

    GRASS = "grass"
    DIRT_PATH = "dirt_path"
    STONE_PATH = "stone_path"
    TOWN_SQUARE = "town_square"
    BUILDING = "building"
    WATER = "water"
    BRIDGE = "bridge"
    WALL = "wall"
    KEEP_WALL = "keep_wall"
    FARM_FIELD = "farm_field"

    @property
    def walkable(self) -> bool:
        """Whether characters can walk on this ground type."""
        return self not in _BLOCKING_TOWN_TYPES

    @property
    def is_road(self) -> bool:
        """Whether this tile is part of the road network."""
        return self in _ROAD_TYPES


_BLOCKING_TOWN_TYPES = frozenset({
    TownTileType.BUILDING,
    TownTileType.WATER,
    TownTileType.WALL,
    TownTileType.KEEP_WALL,
})

_ROAD_TYPES = frozenset({
    TownTileType.DIRT_PATH,
    TownTileType.STONE_PATH,
})


class TownPOI(str, Enum):
    """Decoration or landmark on a town tile."""

    TREE = "tree"
    BUSH = "bush"
    FLOWERS = "flowers"
    WELL = "well"
    FOUNTAIN = "fountain"


class BuildingType(str, Enum):
    """Kinds of building a town tile can hold."""

    HOUSE = "house"
    INN = "inn"
    SHOP = "shop"
    TEMPLE = "temple"
    TAVERN = "tavern"
    GUILD = "guild"
    MARKET = "market"
    BANK = "bank"
    BLACKSMITH = "blacksmith"
    MANOR = "manor"
    KEEP = "keep"
    BARN = "barn"

    @property
    def residential(self) -> bool:
        """Whether people live here (houses and noble residences)."""
        return self in _RESIDENTIAL_TYPES

    @property
    def noble_seat(self) -> bool:
        """Whether this building houses the town's noble family."""
        return self in (BuildingType.MANOR, BuildingType.KEEP)


_RESIDENTIAL_TYPES = frozenset({
    BuildingType.HOUSE,
    BuildingType.MANOR,
    BuildingType.KEEP,
})
