"""Tests for town reachability and validation."""

from realmgen.tile_types import BuildingType, TownPOI, TownTileType
from realmgen.town import reachable_mask, unreachable_houses, validate_town
from realmgen.town.validation import is_connected
from realmgen.types import Position


def P(x: int, y: int) -> Position:
    return Position(x=x, y=y)


def _house(town, x, y):
    tile = town.tile(x, y)
    tile.set_type(TownTileType.BUILDING)
    tile.building_type = BuildingType.HOUSE
    return tile


def _wall_off(town, x, y):
    for neighbor in P(x, y).neighbors():
        if town.in_bounds(neighbor.x, neighbor.y):
            town.at(neighbor).set_type(TownTileType.WALL)


class TestReachableMask:
    def test_open_grass_all_reachable(self, blank_town):
        assert reachable_mask(blank_town).all()

    def test_blocked_entry_reaches_nothing(self, blank_town):
        blank_town.tile(6, 11).set_type(TownTileType.WATER)
        assert not reachable_mask(blank_town).any()

    def test_enclosed_pocket(self, blank_town):
        _wall_off(blank_town, 2, 2)
        mask = reachable_mask(blank_town)
        assert not mask[2, 2]
        assert mask[0, 0]


class TestIsConnected:
    def test_building_beside_reachable_tile(self, blank_town):
        _house(blank_town, 3, 3)
        assert is_connected(blank_town, P(3, 3), reachable_mask(blank_town))

    def test_walled_in_building(self, blank_town):
        _house(blank_town, 3, 3)
        _wall_off(blank_town, 3, 3)
        assert not is_connected(blank_town, P(3, 3), reachable_mask(blank_town))

    def test_edge_building(self, blank_town):
        _house(blank_town, 0, 0)
        assert is_connected(blank_town, P(0, 0), reachable_mask(blank_town))


class TestValidateTown:
    def test_generated_town_passes(self, town_of_each_size):
        assert validate_town(town_of_each_size).passed

    def test_unreachable_house(self, blank_town):
        blank_town.tile(6, 11).is_entry = True
        _house(blank_town, 3, 3)
        _wall_off(blank_town, 3, 3)

        result = validate_town(blank_town)

        assert unreachable_houses(blank_town) == [P(3, 3)]
        assert not result.passed
        assert any("unreachable" in error for error in result.errors)

    def test_walkable_building(self, blank_town):
        blank_town.tile(6, 11).is_entry = True
        tile = blank_town.tile(3, 3)
        tile.type = TownTileType.BUILDING
        tile.building_type = BuildingType.SHOP

        result = validate_town(blank_town)

        assert any("walkable" in error for error in result.errors)

    def test_missing_entry_flag(self, blank_town):
        result = validate_town(blank_town)
        assert any("Entry" in error for error in result.errors)

    def test_misplaced_entry_flag(self, blank_town):
        blank_town.tile(0, 0).is_entry = True
        assert not validate_town(blank_town).passed

    def test_decoration_on_path_warns(self, blank_town):
        blank_town.tile(6, 11).is_entry = True
        tile = blank_town.tile(4, 4)
        tile.set_type(TownTileType.DIRT_PATH)
        tile.poi = TownPOI.TREE

        result = validate_town(blank_town)

        assert result.passed
        assert len(result.warnings) == 1
