"""Tests for TOML configuration loading."""

import pytest
from pydantic import ValidationError

from realmgen.config import CONFIGS_DIR, GenerationConfig, find_config, list_configs, load_config


class TestLoadConfig:
    def test_default_config(self):
        config = load_config(CONFIGS_DIR / "default.toml")
        assert config.world.towns_min == 2
        assert config.town.river_width == 2
        assert config.town.repair_connectivity

    def test_partial_file_keeps_defaults(self, tmp_path):
        path = tmp_path / "caves.toml"
        path.write_text("[world]\ncave_count = 2\n")

        config = load_config(path)

        assert config.world.cave_count == 2
        assert config.world.towns_max == 4
        assert config.town == GenerationConfig().town

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.toml"
        path.write_text("")
        assert load_config(path) == GenerationConfig()

    def test_wrong_type(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text('[town]\nriver_width = "wide"\n')
        with pytest.raises(ValidationError):
            load_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.toml")


class TestFindConfig:
    def test_by_name(self):
        assert find_config("default") == CONFIGS_DIR / "default.toml"

    def test_by_path(self, tmp_path):
        path = tmp_path / "mine.toml"
        path.write_text("")
        assert find_config(str(path)) == path

    def test_unknown_name(self):
        with pytest.raises(FileNotFoundError, match="Available configs"):
            find_config("no-such-config")

    def test_missing_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            find_config(str(tmp_path / "nope.toml"))

    def test_list_configs(self):
        assert "default" in list_configs()
