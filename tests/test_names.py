"""Tests for name tables and name assembly."""

import pytest

from realmgen.names import (
    BLACKSMITH_NAMES,
    HUMAN_LAST_NAMES,
    HUMAN_NAMES_FEMALE,
    HUMAN_NAMES_MALE,
    NOBLE_LAST_NAMES,
    generate_bank_name,
    generate_blacksmith_name,
    generate_guild_name,
    generate_manor_name,
    generate_mountain_name,
    generate_shop_name,
    generate_tavern_name,
    generate_temple_name,
    generate_town_name,
    generate_unique_town_names,
)
from realmgen.rng import SeededRNG
from realmgen.tile_types import TownSize


class TestNameTables:
    """Tests for the fixed name tables."""

    def test_tables_non_empty(self):
        """Every table has entries."""
        assert HUMAN_NAMES_MALE
        assert HUMAN_NAMES_FEMALE
        assert NOBLE_LAST_NAMES

    def test_last_names_include_nobles(self):
        """The full surname table contains the noble surnames."""
        assert set(NOBLE_LAST_NAMES) <= set(HUMAN_LAST_NAMES)


class TestTownNames:
    """Tests for town name generation."""

    @pytest.mark.parametrize("size", list(TownSize))
    def test_non_empty_for_every_size(self, size):
        """Every size tier yields a name."""
        rng = SeededRNG(1)
        for _ in range(20):
            name = generate_town_name(rng, size)
            assert name
            assert name[0].isupper()

    def test_deterministic(self):
        """Same seed, same name."""
        assert generate_town_name(SeededRNG(4), TownSize.TOWN) == generate_town_name(
            SeededRNG(4), TownSize.TOWN
        )

    def test_accepts_size_string(self):
        """Size may be passed by value."""
        assert generate_town_name(SeededRNG(4), "city") == generate_town_name(
            SeededRNG(4), TownSize.CITY
        )

    def test_unique_names(self):
        """generate_unique_town_names returns distinct names."""
        names = generate_unique_town_names(SeededRNG(3), 5)
        assert len(names) == len(set(names))
        assert len(names) <= 5


class TestBuildingNames:
    """Tests for building and landmark names."""

    @pytest.mark.parametrize(
        "generator",
        [
            generate_tavern_name,
            generate_guild_name,
            generate_temple_name,
            generate_bank_name,
            generate_shop_name,
            generate_manor_name,
            generate_mountain_name,
        ],
    )
    def test_generators_produce_names(self, generator):
        """Each generator produces a non-empty, reproducible name."""
        first = generator(SeededRNG(10))
        assert first
        assert generator(SeededRNG(10)) == first

    def test_blacksmith_from_table(self):
        """Blacksmith names come from the fixed table."""
        rng = SeededRNG(2)
        assert all(generate_blacksmith_name(rng) in BLACKSMITH_NAMES for _ in range(20))

    def test_shop_owner_form(self):
        """Some shops are named after an owner with a known first name."""
        rng = SeededRNG(1)
        owners = [
            name.split("'s ")[0]
            for name in (generate_shop_name(rng) for _ in range(100))
            if "'s " in name
        ]
        assert owners
        assert all(owner in HUMAN_NAMES_MALE + HUMAN_NAMES_FEMALE for owner in owners)

    def test_manor_has_two_words(self):
        """Manor names are surname plus residence type."""
        name = generate_manor_name(SeededRNG(6))
        surname, _ = name.split(" ", 1)
        assert surname in NOBLE_LAST_NAMES
