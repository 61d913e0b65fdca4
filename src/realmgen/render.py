"""Tile-per-pixel images and tile statistics for generated maps."""

from collections import Counter

from PIL import Image

from .state import TownMap, WorldMap
from .tile_types import Biome, TownPOI, TownTileType, WorldPOI

MAGENTA = (255, 0, 255)  # Unknown tile

BIOME_COLORS: dict[Biome, tuple[int, int, int]] = {
    Biome.PLAINS: (120, 180, 80),
    Biome.WATER: (40, 90, 170),
    Biome.BEACH: (230, 210, 140),
    Biome.FOREST_ADJACENT: (95, 160, 70),
    Biome.MOUNTAIN_ADJACENT: (140, 150, 110),
}

WORLD_POI_COLORS: dict[WorldPOI, tuple[int, int, int]] = {
    WorldPOI.FOREST: (30, 100, 40),
    WorldPOI.MOUNTAIN: (110, 110, 110),
    WorldPOI.TOWN: (200, 60, 50),
    WorldPOI.CAVE_ENTRANCE: (40, 30, 30),
}

ROAD_COLOR = (150, 110, 70)
RIVER_COLOR = (70, 130, 200)

TOWN_TILE_COLORS: dict[TownTileType, tuple[int, int, int]] = {
    TownTileType.GRASS: (90, 160, 70),
    TownTileType.DIRT_PATH: (150, 110, 70),
    TownTileType.STONE_PATH: (160, 160, 160),
    TownTileType.TOWN_SQUARE: (190, 180, 150),
    TownTileType.BUILDING: (140, 70, 50),
    TownTileType.WATER: (40, 90, 170),
    TownTileType.BRIDGE: (120, 85, 50),
    TownTileType.WALL: (80, 80, 80),
    TownTileType.KEEP_WALL: (60, 60, 70),
    TownTileType.FARM_FIELD: (200, 180, 90),
}

TOWN_POI_COLORS: dict[TownPOI, tuple[int, int, int]] = {
    TownPOI.TREE: (30, 100, 40),
    TownPOI.BUSH: (70, 140, 70),
    TownPOI.FLOWERS: (220, 120, 180),
    TownPOI.WELL: (60, 110, 160),
    TownPOI.FOUNTAIN: (100, 170, 220),
}


def world_image(world: WorldMap, scale: int = 1) -> Image.Image:
    """Render a world map, one pixel (or ``scale`` pixels square) per tile.

    POIs draw over roads, roads over rivers, rivers over the biome.
    """
    img = Image.new("RGB", (world.width, world.height))
    pixels = img.load()
    for tile in world.tiles:
        if tile.poi is not None:
            color = WORLD_POI_COLORS.get(tile.poi, MAGENTA)
        elif tile.has_path:
            color = ROAD_COLOR
        elif tile.has_river:
            color = RIVER_COLOR
        else:
            color = BIOME_COLORS.get(tile.biome, MAGENTA)
        pixels[tile.x, tile.y] = color
    return _scaled(img, scale)


def town_image(town: TownMap, scale: int = 1, show_decorations: bool = True) -> Image.Image:
    """Render a town interior; decorations are drawn over the ground."""
    img = Image.new("RGB", (town.width, town.height))
    pixels = img.load()
    for tile in town.tiles:
        color = TOWN_TILE_COLORS.get(tile.type, MAGENTA)
        if show_decorations and tile.poi is not None:
            color = TOWN_POI_COLORS.get(tile.poi, MAGENTA)
        pixels[tile.x, tile.y] = color
    return _scaled(img, scale)


def _scaled(img: Image.Image, scale: int) -> Image.Image:
    if scale <= 1:
        return img
    return img.resize((img.width * scale, img.height * scale), Image.Resampling.NEAREST)


def compute_world_stats(world: WorldMap) -> dict:
    """Count biomes and POIs on a world map.

    Returns:
        Dict with dimensions, per-biome and per-POI counts, and the named
        towns and mountain ranges.
    """
    biomes = Counter(tile.biome.value for tile in world.tiles)
    pois = Counter(tile.poi.value for tile in world.tiles if tile.poi is not None)
    return {
        "dimensions": {"width": world.width, "height": world.height, "seed": world.seed},
        "biomes": dict(sorted(biomes.items())),
        "pois": dict(sorted(pois.items())),
        "towns": [
            {"name": t.town_name, "size": t.town_size.value if t.town_size else None, "x": t.x, "y": t.y}
            for t in world.towns()
        ],
        "ranges": sorted(
            t.mountain_name for t in world.tiles if t.is_first_mountain_in_range and t.mountain_name
        ),
        "road_tiles": sum(tile.has_path for tile in world.tiles),
        "river_tiles": sum(tile.has_river for tile in world.tiles),
    }


def compute_town_stats(town: TownMap) -> dict:
    """Count ground types, buildings, and decorations in a town."""
    ground = Counter(tile.type.value for tile in town.tiles)
    buildings = Counter(tile.building_type.value for tile in town.buildings() if tile.building_type)
    decorations = Counter(tile.poi.value for tile in town.tiles if tile.poi is not None)
    return {
        "dimensions": {"width": town.width, "height": town.height},
        "name": town.town_name,
        "size": town.town_size.value,
        "ground": dict(sorted(ground.items())),
        "buildings": dict(sorted(buildings.items())),
        "decorations": dict(sorted(decorations.items())),
    }
