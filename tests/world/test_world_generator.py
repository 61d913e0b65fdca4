"""Tests for the full world pipeline and starting-town lookup."""

import pytest
from structlog.testing import capture_logs

from conftest import PROPERTY_SEEDS, SAMPLE_SEED
from realmgen.exceptions import GenerationError, InvalidGridError, InvalidSeedError, NoTownsError
from realmgen.pathfinding import find_clusters
from realmgen.state import WorldMap
from realmgen.tile_types import Biome, WorldPOI
from realmgen.types import Position
from realmgen.world import (
    CustomNames,
    WorldGenConfig,
    find_starting_town,
    generate_world_map,
    get_tile,
    validate_world,
)


class TestGenerateWorldMap:
    def test_default_dimensions(self):
        world = generate_world_map(seed=SAMPLE_SEED)
        assert (world.width, world.height) == (10, 10)
        assert len(world.tiles) == 100

    def test_seed_recorded(self, sample_world):
        assert sample_world.seed == SAMPLE_SEED

    def test_random_seed_recorded(self):
        world = generate_world_map()
        assert isinstance(world.seed, int)
        assert generate_world_map(seed=world.seed).model_dump() == world.model_dump()

    def test_string_seed_accepted(self, sample_world):
        assert generate_world_map(seed=str(SAMPLE_SEED)).model_dump() == sample_world.model_dump()

    def test_same_seed_same_world(self, sample_world):
        assert generate_world_map(10, 10, SAMPLE_SEED).model_dump() == sample_world.model_dump()

    def test_different_seeds_differ(self, sample_world):
        assert generate_world_map(10, 10, SAMPLE_SEED + 1).model_dump() != sample_world.model_dump()

    def test_has_towns_and_mountains(self, sample_world):
        assert sample_world.towns()
        assert sample_world.find(lambda t: t.poi == WorldPOI.MOUNTAIN)

    def test_larger_world(self):
        world = generate_world_map(24, 16, seed=SAMPLE_SEED)
        assert len(world.tiles) == 24 * 16
        assert validate_world(world).passed

    def test_invalid_seed(self):
        with pytest.raises(InvalidSeedError):
            generate_world_map(seed="not-a-seed")

    def test_invalid_dimensions(self):
        with pytest.raises(InvalidGridError):
            generate_world_map(0, 10, seed=SAMPLE_SEED)

    def test_no_towns_requested(self):
        with pytest.raises(GenerationError):
            generate_world_map(seed=SAMPLE_SEED, config=WorldGenConfig(towns_min=0, towns_max=0))

    def test_logs_completion(self):
        with capture_logs() as logs:
            generate_world_map(seed=SAMPLE_SEED)
        events = [entry["event"] for entry in logs]
        assert "world_generation_started" in events
        assert "world_generation_complete" in events


class TestCustomNames:
    def test_bare_list_names_towns(self):
        world = generate_world_map(seed=SAMPLE_SEED, custom_names=["Alpha"])
        most_important = min(world.towns(), key=lambda t: t.town_size.importance)
        assert most_important.town_name == "Alpha"

    def test_custom_mountain_name_used(self):
        world = generate_world_map(
            seed=SAMPLE_SEED, custom_names=CustomNames(mountains=["Test Peaks"])
        )
        names = {t.mountain_name for t in world.find(lambda t: t.poi == WorldPOI.MOUNTAIN)}
        assert "Test Peaks" in names

    def test_dict_accepted(self):
        world = generate_world_map(seed=SAMPLE_SEED, custom_names={"towns": ["Alpha"]})
        assert "Alpha" in {t.town_name for t in world.towns()}


@pytest.mark.parametrize("seed", PROPERTY_SEEDS)
class TestWorldProperties:
    """Invariants that hold for every generated world."""

    def test_no_poi_on_water(self, seed):
        world = generate_world_map(seed=seed)
        assert not world.find(lambda t: t.poi is not None and t.biome == Biome.WATER)

    def test_one_starting_town(self, seed):
        world = generate_world_map(seed=seed)
        starts = [t for t in world.tiles if t.is_starting_town]
        assert len(starts) == 1
        assert starts[0].poi == WorldPOI.TOWN

    def test_towns_named_and_sized(self, seed):
        world = generate_world_map(seed=seed)
        for town in world.towns():
            assert town.town_name
            assert town.town_size is not None

    def test_mountain_clusters_share_a_name(self, seed):
        world = generate_world_map(seed=seed)
        for cluster in find_clusters(world.mask(lambda t: t.poi == WorldPOI.MOUNTAIN)):
            tiles = [world.at(p) for p in cluster]
            assert len({t.mountain_name for t in tiles}) == 1
            assert sum(t.is_first_mountain_in_range for t in tiles) == 1

    def test_quadrants_have_features(self, seed):
        world = generate_world_map(seed=seed)
        for x0, x1, y0, y1 in ((0, 5, 0, 5), (5, 10, 0, 5), (0, 5, 5, 10), (5, 10, 5, 10)):
            pois = sum(
                world.tile(x, y).poi is not None for y in range(y0, y1) for x in range(x0, x1)
            )
            free_plains = sum(
                world.tile(x, y).biome == Biome.PLAINS and world.tile(x, y).poi is None
                for y in range(y0, y1)
                for x in range(x0, x1)
            )
            assert pois >= 3 or free_plains == 0

    def test_validates(self, seed):
        assert validate_world(generate_world_map(seed=seed)).passed


class TestFindStartingTown:
    def test_finds_flagged_town(self, sample_world):
        position = find_starting_town(sample_world)
        tile = sample_world.at(position)
        assert tile.poi == WorldPOI.TOWN
        assert tile.is_starting_town

    def test_legacy_description_fallback(self, blank_world):
        blank_world.tile(2, 2).poi = WorldPOI.TOWN
        blank_world.tile(6, 6).poi = WorldPOI.TOWN
        blank_world.tile(6, 6).description_seed = "A small village"

        assert find_starting_town(blank_world) == Position(x=6, y=6)

    def test_any_town_fallback(self, blank_world):
        blank_world.tile(6, 6).poi = WorldPOI.TOWN
        assert find_starting_town(blank_world) == Position(x=6, y=6)

    def test_no_towns(self, blank_world):
        with pytest.raises(NoTownsError):
            find_starting_town(blank_world)

    def test_no_towns_is_a_generation_error(self):
        with pytest.raises(GenerationError):
            find_starting_town(WorldMap.blank(3, 3))


class TestGetTile:
    def test_in_bounds(self, sample_world):
        assert get_tile(sample_world, 3, 4).position == Position(x=3, y=4)

    def test_out_of_bounds_warns(self, sample_world):
        with capture_logs() as logs:
            assert get_tile(sample_world, 10, 0) is None
        assert logs[0]["event"] == "tile_out_of_bounds"
        assert logs[0]["log_level"] == "warning"
