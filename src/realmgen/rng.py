"""Deterministic random number generation.

Every generator draws all of its randomness from a single SeededRNG instance,
so a world, a town, or a town's population is a pure function of its seed.
The generator is a small linear congruential generator; it has no dependency on
wall-clock time or external entropy once seeded.
"""

import math
import secrets
from collections.abc import MutableSequence, Sequence
from typing import TypeVar

from .exceptions import InvalidSeedError

T = TypeVar("T")

# LCG constants
_MULTIPLIER = 9301
_INCREMENT = 49297
_MODULUS = 233280

_MAX_RANDOM_SEED = 2_147_483_647


def coerce_seed(seed: object) -> int:
    """Normalize a seed to an int.

    Accepts ints and strings of decimal digits (seeds read back from save
    files). Floats are accepted only when integral.

    Raises:
        InvalidSeedError: If the seed cannot be used.
    """
    if isinstance(seed, bool):
        raise InvalidSeedError(f"Seed must be an integer, got {seed!r}")
    if isinstance(seed, int):
        return seed
    if isinstance(seed, float):
        if math.isfinite(seed) and seed.is_integer():
            return int(seed)
        raise InvalidSeedError(f"Seed must be an integer, got {seed!r}")
    if isinstance(seed, str):
        try:
            return int(seed.strip(), 10)
        except ValueError:
            raise InvalidSeedError(f"Seed string is not an integer: {seed!r}") from None
    raise InvalidSeedError(f"Seed must be an integer, got {type(seed).__name__}")


class SeededRNG:
    """Linear congruential generator producing a [0, 1) stream."""

    def __init__(self, seed: int | str | None = None):
        """Initialize the generator.

        Args:
            seed: Integer seed. None draws a random seed, which is then
                available as ``self.seed`` for reproduction.
        """
        if seed is None:
            seed = secrets.randbelow(_MAX_RANDOM_SEED)
        self.seed = coerce_seed(seed)
        self._state = self.seed

    def random(self) -> float:
        """Return a float in [0.0, 1.0)."""
        self._state = (self._state * _MULTIPLIER + _INCREMENT) % _MODULUS
        return self._state / _MODULUS

    def range(self, low: int, high: int) -> int:
        """Return an integer N such that low <= N <= high."""
        return math.floor(self.random() * (high - low + 1)) + low

    def pick(self, items: Sequence[T]) -> T | None:
        """Pick a random element, or None for an empty sequence."""
        if not items:
            return None
        return items[self.range(0, len(items) - 1)]

    def choice(self, items: Sequence[T]) -> T:
        """Pick a random element from a non-empty sequence."""
        if not items:
            raise IndexError("Cannot choose from an empty sequence")
        return items[math.floor(self.random() * len(items))]

    def shuffle(self, items: MutableSequence[T]) -> None:
        """Shuffle in place (Fisher-Yates)."""
        for i in range(len(items) - 1, 0, -1):
            j = math.floor(self.random() * (i + 1))
            items[i], items[j] = items[j], items[i]


def town_seed(world_seed: int | str, x: int, y: int) -> int:
    """Seed for the town interior at world tile (x, y)."""
    return coerce_seed(world_seed) + x * 1000 + y * 10_000


def derive_seed(seed: int, x: int, y: int, rng: SeededRNG) -> int:
    """Per-NPC seed from the town seed, the building position, and a fresh draw."""
    return seed + x * 1000 + y * 100 + rng.range(0, 9999)
