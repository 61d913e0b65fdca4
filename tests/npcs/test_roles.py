"""Tests for NPC role definitions."""

import pytest

from realmgen.exceptions import UnknownRoleError
from realmgen.npcs import Gender, Role, role_definition
from realmgen.npcs.roles import ALL_ROLES, STAT_NAMES, coerce_role


class TestGender:
    def test_opposite(self):
        assert Gender.MALE.opposite is Gender.FEMALE
        assert Gender.FEMALE.opposite is Gender.MALE

    def test_values(self):
        assert Gender("Male") is Gender.MALE


class TestRoles:
    def test_every_role_defined(self):
        assert len(ALL_ROLES) == 14
        for role in ALL_ROLES:
            definition = role_definition(role)
            assert definition.titles_for(Gender.MALE)
            assert definition.titles_for(Gender.FEMALE)
            assert definition.hp_range[0] <= definition.hp_range[1]

    def test_display_name_lookup(self):
        assert role_definition("Tavern Keeper") is role_definition(Role.TAVERN_KEEPER)
        assert coerce_role("Noble Child") is Role.NOBLE_CHILD

    def test_unknown_role(self):
        with pytest.raises(UnknownRoleError):
            role_definition("Astronaut")

    def test_unknown_role_is_key_error(self):
        with pytest.raises(KeyError):
            coerce_role("Astronaut")

    def test_stats_named(self):
        stats = role_definition(Role.GUARD).stats()
        assert tuple(stats) == STAT_NAMES
        assert stats["Strength"] == 14

    def test_gendered_titles_line_up(self):
        noble = role_definition(Role.NOBLE)
        male, female = noble.titles_for(Gender.MALE), noble.titles_for(Gender.FEMALE)
        assert len(male) == len(female)
        assert male.index("Baron") == female.index("Baroness")

    def test_shared_titles(self):
        smith = role_definition(Role.BLACKSMITH)
        assert smith.titles_for(Gender.MALE) == smith.titles_for(Gender.FEMALE)

    def test_classes(self):
        assert role_definition(Role.NOBLE).default_class == "Aristocrat"
        assert role_definition(Role.CRIMINAL).default_class == "Rogue"
        assert role_definition(Role.VILLAGER).default_class == "Commoner"
