"""Shared test fixtures."""

import numpy as np
import pytest
import structlog

from realmgen.state import TownMap, WorldMap
from realmgen.tile_types import TownSize
from realmgen.town import generate_town_map
from realmgen.types import Position
from realmgen.world import generate_world_map

SAMPLE_SEED = 12345

# Seeds used for property checks across many generations
PROPERTY_SEEDS = (1, 7, 42, 99, 2024, 12345, 31337, 65535)


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any structlog configuration a test (or the CLI) installs."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def flat_costs() -> np.ndarray:
    """5x5 cost grid where every step costs 1."""
    return np.ones((5, 5), dtype=np.int32)


@pytest.fixture
def blank_world() -> WorldMap:
    """10x10 world of open plains."""
    return WorldMap.blank(10, 10, seed=0)


@pytest.fixture
def blank_town() -> TownMap:
    """12x12 village of open grass entered from the south."""
    return TownMap.blank(12, 12, "Testford", TownSize.VILLAGE, Position(x=6, y=11))


@pytest.fixture
def sample_world() -> WorldMap:
    """The standard 10x10 world for seed 12345."""
    return generate_world_map(10, 10, SAMPLE_SEED)


@pytest.fixture(params=list(TownSize), ids=lambda size: size.value)
def town_of_each_size(request) -> TownMap:
    """One generated town per size tier."""
    return generate_town_map(request.param, "Testford", seed=SAMPLE_SEED)
