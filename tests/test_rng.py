"""Tests for the seeded random number generator."""

import pytest

from realmgen.exceptions import InvalidSeedError
from realmgen.rng import SeededRNG, coerce_seed, derive_seed, town_seed


class TestCoerceSeed:
    """Tests for seed normalization."""

    def test_int_passes_through(self):
        """Integers are used as-is."""
        assert coerce_seed(42) == 42
        assert coerce_seed(-7) == -7

    def test_digit_string(self):
        """Strings of digits are parsed."""
        assert coerce_seed("12345") == 12345
        assert coerce_seed(" 99 ") == 99

    def test_integral_float(self):
        """Integral floats are accepted."""
        assert coerce_seed(3.0) == 3

    @pytest.mark.parametrize("bad", ["abc", "1.5", 2.5, float("nan"), True, None, [1]])
    def test_rejects_non_integers(self, bad):
        """Anything that is not an integer raises InvalidSeedError."""
        with pytest.raises(InvalidSeedError):
            coerce_seed(bad)

    def test_invalid_seed_is_value_error(self):
        """InvalidSeedError can be caught as ValueError."""
        with pytest.raises(ValueError):
            coerce_seed("not a number")


class TestSeededRNG:
    """Tests for SeededRNG."""

    def test_first_value_matches_lcg(self):
        """The stream follows (state * 9301 + 49297) % 233280."""
        rng = SeededRNG(1)
        expected_state = (1 * 9301 + 49297) % 233280
        assert rng.random() == expected_state / 233280

    def test_same_seed_same_stream(self):
        """Two generators with one seed produce identical streams."""
        a = SeededRNG(12345)
        b = SeededRNG(12345)
        assert [a.random() for _ in range(50)] == [b.random() for _ in range(50)]

    def test_different_seeds_differ(self):
        """Different seeds produce different streams."""
        a = SeededRNG(1)
        b = SeededRNG(2)
        assert [a.random() for _ in range(5)] != [b.random() for _ in range(5)]

    def test_random_in_unit_interval(self):
        """random() stays in [0, 1)."""
        rng = SeededRNG(7)
        for _ in range(1000):
            value = rng.random()
            assert 0.0 <= value < 1.0

    def test_range_inclusive(self):
        """range(lo, hi) covers both ends and nothing outside."""
        rng = SeededRNG(99)
        values = {rng.range(2, 5) for _ in range(500)}
        assert values == {2, 3, 4, 5}

    def test_range_single_value(self):
        """range(n, n) is always n."""
        rng = SeededRNG(3)
        assert all(rng.range(4, 4) == 4 for _ in range(20))

    def test_pick_empty_is_none(self):
        """pick() on an empty sequence returns None."""
        assert SeededRNG(1).pick([]) is None

    def test_pick_returns_member(self):
        """pick() returns one of the items."""
        rng = SeededRNG(5)
        items = ["a", "b", "c"]
        assert all(rng.pick(items) in items for _ in range(50))

    def test_choice_empty_raises(self):
        """choice() on an empty sequence raises IndexError."""
        with pytest.raises(IndexError):
            SeededRNG(1).choice([])

    def test_shuffle_is_permutation(self):
        """shuffle() keeps every element."""
        rng = SeededRNG(11)
        items = list(range(20))
        rng.shuffle(items)
        assert sorted(items) == list(range(20))

    def test_shuffle_deterministic(self):
        """Same seed gives the same shuffle."""
        a, b = list(range(10)), list(range(10))
        SeededRNG(8).shuffle(a)
        SeededRNG(8).shuffle(b)
        assert a == b

    def test_none_seed_is_recorded(self):
        """A drawn seed is exposed and reproduces the stream."""
        rng = SeededRNG()
        replay = SeededRNG(rng.seed)
        assert [rng.random() for _ in range(5)] == [replay.random() for _ in range(5)]

    def test_string_seed(self):
        """A digit-string seed behaves like the integer."""
        assert SeededRNG("42").random() == SeededRNG(42).random()


class TestDerivedSeeds:
    """Tests for town and NPC seed derivation."""

    def test_town_seed(self):
        """Town seed is world seed + x * 1000 + y * 10000."""
        assert town_seed(12345, 3, 4) == 12345 + 3000 + 40000

    def test_town_seed_accepts_string(self):
        """World seeds read back as strings still work."""
        assert town_seed("100", 1, 1) == 100 + 1000 + 10000

    def test_derive_seed_range(self):
        """NPC seeds add the building offset and a draw in [0, 9999]."""
        rng = SeededRNG(1)
        seed = derive_seed(500, 2, 3, rng)
        assert 500 + 2000 + 300 <= seed <= 500 + 2000 + 300 + 9999

    def test_derive_seed_deterministic(self):
        """Same RNG state gives the same derived seed."""
        assert derive_seed(1, 1, 1, SeededRNG(9)) == derive_seed(1, 1, 1, SeededRNG(9))
