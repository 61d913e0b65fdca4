"""Tests for town placement, quadrant balancing, naming, and range names."""

import pytest
import structlog

from realmgen.exceptions import GenerationError
from realmgen.rng import SeededRNG
from realmgen.state import WorldMap
from realmgen.tile_types import Biome, TownSize, WorldPOI
from realmgen.types import Position
from realmgen.world import CustomNames, WorldGenConfig
from realmgen.world.settlements import (
    assign_town_sizes_and_names,
    balance_quadrants,
    build_roads,
    harmonize_mountain_names,
    place_settlements,
    place_town,
    place_towns,
    select_starting_town,
)

log = structlog.get_logger()


def P(x: int, y: int) -> Position:
    return Position(x=x, y=y)


def _make_towns(world: WorldMap, positions: list[Position]) -> list[Position]:
    for position in positions:
        world.at(position).poi = WorldPOI.TOWN
    return positions


class TestPlaceTowns:
    def test_towns_keep_their_distance(self, blank_world):
        config = WorldGenConfig(towns_min=4, towns_max=4)
        towns = place_towns(blank_world, SeededRNG(3), config, log)

        assert 1 <= len(towns) <= 4
        for i, a in enumerate(towns):
            assert blank_world.at(a).poi == WorldPOI.TOWN
            for b in towns[i + 1:]:
                assert a.manhattan(b) >= config.min_town_distance

    def test_towns_stay_off_the_border(self, blank_world):
        towns = place_towns(blank_world, SeededRNG(3), WorldGenConfig(), log)
        for town in towns:
            assert 1 <= town.x <= 8
            assert 1 <= town.y <= 8

    def test_town_skipped_when_everything_is_too_close(self, blank_world):
        config = WorldGenConfig(min_town_distance=100)
        assert place_town(blank_world, SeededRNG(3), config, [P(5, 5)], log) is None

    def test_towns_never_on_water(self):
        world = WorldMap.blank(10, 10, seed=0)
        for tile in world.tiles:
            if tile.x < 5:
                tile.biome = Biome.WATER

        towns = place_towns(world, SeededRNG(9), WorldGenConfig(), log)
        assert all(world.at(t).biome != Biome.WATER for t in towns)


class TestBalanceQuadrants:
    def test_empty_world_gets_floor_in_every_quadrant(self, blank_world):
        added = balance_quadrants(blank_world, SeededRNG(1), WorldGenConfig(), log)

        assert added == 12
        for x0, y0 in ((0, 0), (5, 0), (0, 5), (5, 5)):
            count = sum(
                blank_world.tile(x, y).poi is not None
                for y in range(y0, y0 + 5)
                for x in range(x0, x0 + 5)
            )
            assert count == 3

    def test_only_forests_and_mountains_added(self, blank_world):
        balance_quadrants(blank_world, SeededRNG(1), WorldGenConfig(), log)
        pois = {tile.poi for tile in blank_world.tiles if tile.poi is not None}
        assert pois <= {WorldPOI.FOREST, WorldPOI.MOUNTAIN}

    def test_full_quadrant_untouched(self, blank_world):
        config = WorldGenConfig(min_features_per_quadrant=0)
        assert balance_quadrants(blank_world, SeededRNG(1), config, log) == 0

    def test_no_plains_no_features(self):
        world = WorldMap.blank(10, 10, seed=0)
        for tile in world.tiles:
            tile.biome = Biome.WATER
        assert balance_quadrants(world, SeededRNG(1), WorldGenConfig(), log) == 0


class TestStartingTown:
    def test_exactly_one_flagged(self, blank_world):
        towns = _make_towns(blank_world, [P(2, 2), P(7, 2), P(5, 7)])
        start = select_starting_town(blank_world, towns, SeededRNG(4))

        assert start in towns
        flagged = [t for t in blank_world.tiles if t.is_starting_town]
        assert [t.position for t in flagged] == [start]


class TestTownNaming:
    def test_four_towns_use_every_size(self, blank_world):
        towns = _make_towns(blank_world, [P(1, 1), P(8, 1), P(1, 8), P(8, 8)])
        assign_town_sizes_and_names(blank_world, towns, SeededRNG(4), [], log)

        assert {blank_world.at(t).town_size for t in towns} == set(TownSize)
        assert all(blank_world.at(t).town_name for t in towns)

    def test_sizes_wrap_after_four(self, blank_world):
        towns = _make_towns(blank_world, [P(1, 1), P(4, 1), P(7, 1), P(1, 5), P(5, 5)])
        assign_town_sizes_and_names(blank_world, towns, SeededRNG(4), [], log)

        assert blank_world.at(towns[4]).town_size == blank_world.at(towns[0]).town_size

    def test_custom_names_go_to_most_important(self, blank_world):
        towns = _make_towns(blank_world, [P(1, 1), P(8, 1), P(1, 8), P(8, 8)])
        assign_town_sizes_and_names(blank_world, towns, SeededRNG(4), ["Alpha", "Beta"], log)

        by_size = {blank_world.at(t).town_size: blank_world.at(t).town_name for t in towns}
        assert by_size[TownSize.CITY] == "Alpha"
        assert by_size[TownSize.TOWN] == "Beta"

    def test_description_follows_size(self, blank_world):
        towns = _make_towns(blank_world, [P(1, 1), P(8, 8)])
        assign_town_sizes_and_names(blank_world, towns, SeededRNG(4), [], log)

        for t in towns:
            tile = blank_world.at(t)
            assert tile.town_size.value in tile.description_seed


class TestRoads:
    def test_single_town_has_no_roads(self, blank_world):
        towns = _make_towns(blank_world, [P(5, 5)])
        assert build_roads(blank_world, towns, log) == []
        assert not any(tile.has_path for tile in blank_world.tiles)

    def test_two_towns_are_joined(self, blank_world):
        towns = _make_towns(blank_world, [P(1, 5), P(8, 5)])
        paths = build_roads(blank_world, towns, log)

        assert paths
        assert paths[0][0] in towns and paths[0][-1] in towns
        assert any(tile.has_path for tile in blank_world.tiles if tile.poi is None)


class TestMountainNames:
    def test_cluster_shares_a_name(self, blank_world):
        blank_world.tile(2, 2).poi = WorldPOI.MOUNTAIN
        blank_world.tile(3, 2).poi = WorldPOI.MOUNTAIN
        blank_world.tile(2, 2).mountain_name = "Old Crag"
        blank_world.tile(3, 2).mountain_name = "Grey Teeth"

        count = harmonize_mountain_names(blank_world, SeededRNG(1), [], log)

        assert count == 1
        assert blank_world.tile(2, 2).mountain_name == "Old Crag"
        assert blank_world.tile(3, 2).mountain_name == "Old Crag"

    def test_first_tile_flagged_once(self, blank_world):
        for x in (2, 3, 4):
            blank_world.tile(x, 2).poi = WorldPOI.MOUNTAIN

        harmonize_mountain_names(blank_world, SeededRNG(1), [], log)

        assert blank_world.tile(2, 2).is_first_mountain_in_range
        assert not blank_world.tile(3, 2).is_first_mountain_in_range
        assert not blank_world.tile(4, 2).is_first_mountain_in_range

    def test_custom_names_used_in_cluster_order(self, blank_world):
        blank_world.tile(1, 1).poi = WorldPOI.MOUNTAIN
        blank_world.tile(7, 7).poi = WorldPOI.MOUNTAIN

        count = harmonize_mountain_names(blank_world, SeededRNG(1), ["Misty Peaks"], log)

        assert count == 2
        assert blank_world.tile(1, 1).mountain_name == "Misty Peaks"
        assert blank_world.tile(7, 7).mountain_name not in (None, "Misty Peaks")

    def test_custom_name_in_cluster_wins(self, blank_world):
        blank_world.tile(2, 2).poi = WorldPOI.MOUNTAIN
        blank_world.tile(3, 2).poi = WorldPOI.MOUNTAIN
        blank_world.tile(2, 2).mountain_name = "Old Crag"
        blank_world.tile(3, 2).mountain_name = "Misty Peaks"

        harmonize_mountain_names(blank_world, SeededRNG(1), ["misty peaks"], log)

        assert blank_world.tile(2, 2).mountain_name == "Misty Peaks"

    def test_no_mountains(self, blank_world):
        assert harmonize_mountain_names(blank_world, SeededRNG(1), [], log) == 0


class TestPlaceSettlements:
    def test_all_water_raises(self):
        world = WorldMap.blank(10, 10, seed=0)
        for tile in world.tiles:
            tile.biome = Biome.WATER

        with pytest.raises(GenerationError):
            place_settlements(world, SeededRNG(1), WorldGenConfig(), CustomNames(), log)

    def test_no_towns_requested_raises(self, blank_world):
        config = WorldGenConfig(towns_min=0, towns_max=0)
        with pytest.raises(GenerationError):
            place_settlements(blank_world, SeededRNG(1), config, CustomNames(), log)

    def test_caves_placed_when_configured(self, blank_world):
        blank_world.tile(5, 5).poi = WorldPOI.MOUNTAIN
        config = WorldGenConfig(
            cave_count=1, towns_min=1, towns_max=1, min_features_per_quadrant=0
        )

        place_settlements(blank_world, SeededRNG(1), config, CustomNames(), log)

        caves = blank_world.find(lambda t: t.poi == WorldPOI.CAVE_ENTRANCE)
        assert len(caves) == 1
