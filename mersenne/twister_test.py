"""Tests for the MT19937 generator."""

from __future__ import annotations

import random

import pytest

from .reference import EXPECTED_SEED1
from .twister import MT19937, _to_f32


class CountingMT19937(MT19937):
    """MT19937 that counts how many times the state was twisted."""

    def __init__(self, seed: int = MT19937.DEFAULT_SEED) -> None:
        self.twists = 0
        super().__init__(seed)

    def twist(self) -> None:
        self.twists += 1
        super().twist()


def _fixed(rng: MT19937, value: int) -> MT19937:
    """Make every 32-bit draw of ``rng`` return ``value``."""
    rng.next_u32 = lambda: value  # type: ignore[method-assign]
    return rng


def _cpython_key(seed: int) -> list[int]:
    """32-bit words of abs(seed), least significant first."""
    seed = abs(seed)
    words = []
    while True:
        words.append(seed & 0xFFFFFFFF)
        seed >>= 32
        if not seed:
            return words


# -- Seeding --------------------------------------------------------


class TestSeed:
    def test_seed1_first_outputs(self):
        rng = MT19937(1)
        assert [rng.next_u32() for _ in range(5)] == [
            1791095845,
            4282876139,
            3093770124,
            4005303368,
            491263,
        ]

    def test_default_seed(self):
        """Default seed is 5489, matching std::mt19937's default."""
        rng = MT19937()
        assert rng.next_u32() == 3499211612

    def test_default_seed_10000th(self):
        """The 10000th output of the default-seeded generator."""
        rng = MT19937()
        rng.discard(9999)
        assert rng.next_u32() == 4123659995

    def test_first_state_word_is_seed(self):
        for seed in (0, 1, 5489, 0xFFFFFFFF):
            key, _ = MT19937(seed).getstate()
            assert key[0] == seed

    def test_seed_recurrence(self):
        key, _ = MT19937(1).getstate()
        for i in range(1, MT19937.N):
            prev = key[i - 1]
            assert key[i] == (1812433253 * (prev ^ (prev >> 30)) + i) % 2**32

    def test_seed_leaves_state_exhausted(self):
        """The first twist is deferred until the first draw."""
        rng = CountingMT19937(1)
        assert rng.index == MT19937.N
        assert rng.twists == 0
        rng.next_u32()
        assert rng.twists == 1
        assert rng.index == 1

    def test_seed_zero_is_not_degenerate(self):
        rng = MT19937(0)
        key, _ = rng.getstate()
        assert any(key)
        values = [rng.next_u32() for _ in range(1000)]
        assert values[0] == 2357136044
        assert len(set(values)) > 990

    def test_seed_max(self):
        rng = MT19937(0xFFFFFFFF)
        values = [rng.next_u32() for _ in range(100)]
        assert len(set(values)) == 100

    def test_seed_reduced_to_32_bits(self):
        a = MT19937(2**32 + 1)
        b = MT19937(1)
        assert a.getstate() == b.getstate()

    def test_negative_seed_wraps(self):
        assert MT19937(-1).getstate() == MT19937(0xFFFFFFFF).getstate()

    def test_non_integer_seed_rejected(self):
        with pytest.raises(TypeError):
            MT19937(1.5)

    def test_reseed_overwrites_state(self):
        rng = MT19937(7)
        for _ in range(1000):
            rng.next_u32()
        rng.seed(1)
        assert [rng.next_u32() for _ in range(200)] == list(EXPECTED_SEED1)


class TestSeedByArray:
    def test_reference_output(self):
        """init_by_array({0x123, 0x234, 0x345, 0x456}) from mt19937ar.out."""
        rng = MT19937.from_array([0x123, 0x234, 0x345, 0x456])
        assert [rng.next_u32() for _ in range(5)] == [
            1067595299,
            955945823,
            477289528,
            4107218783,
            4228976476,
        ]

    @pytest.mark.parametrize("seed", [0, 12345, 2**40 + 5, 2**64 + 7])
    def test_matches_cpython_seeding(self, seed):
        """random.Random(n) seeds with the 32-bit words of abs(n)."""
        version, internal, _ = random.Random(seed).getstate()
        assert version == 3
        rng = MT19937.from_array(_cpython_key(seed))
        assert rng.getstate() == (internal[:-1], internal[-1])

    def test_first_word_has_msb_set(self):
        key, _ = MT19937.from_array([1, 2, 3]).getstate()
        assert key[0] == 0x80000000

    def test_empty_key_rejected(self):
        with pytest.raises(ValueError):
            MT19937.from_array([])

    def test_long_key(self):
        """Keys longer than N words are fully mixed in."""
        a = MT19937.from_array(list(range(700)))
        b = MT19937.from_array(list(range(699)) + [0])
        assert a.next_u32() != b.next_u32()


# -- Drawing --------------------------------------------------------


class TestNextU32:
    def test_reference_200(self):
        rng = MT19937(1)
        assert [rng.next_u32() for _ in range(200)] == list(EXPECTED_SEED1)

    def test_deterministic(self):
        for seed in (0, 1, 42, 0xDEADBEEF):
            a = MT19937(seed)
            b = MT19937(seed)
            assert [a.next_u32() for _ in range(1500)] == [
                b.next_u32() for _ in range(1500)
            ]

    def test_range(self):
        rng = MT19937(3)
        for _ in range(2000):
            v = rng.next_u32()
            assert 0 <= v <= 0xFFFFFFFF

    def test_index_advances_by_one(self):
        rng = MT19937(1)
        rng.next_u32()
        for expected in range(2, 50):
            rng.next_u32()
            assert rng.index == expected

    def test_matches_cpython_getrandbits(self):
        ours = MT19937.from_array([2024])
        theirs = random.Random(2024)
        for _ in range(1300):
            assert ours.next_u32() == theirs.getrandbits(32)


class TestTwist:
    def test_one_twist_per_624_draws(self):
        rng = CountingMT19937(1)
        for _ in range(MT19937.N):
            rng.next_u32()
        assert rng.twists == 1
        assert rng.index == MT19937.N

        rng.next_u32()
        assert rng.twists == 2
        assert rng.index == 1

        for _ in range(MT19937.N * 3 - 1):
            rng.next_u32()
        assert rng.twists == 4

    def test_output_does_not_cycle_with_state_size(self):
        rng = MT19937(1)
        first = [rng.next_u32() for _ in range(MT19937.N)]
        second = [rng.next_u32() for _ in range(MT19937.N)]
        assert first != second

    def test_twist_resets_index(self):
        rng = MT19937(1)
        rng.next_u32()
        rng.twist()
        assert rng.index == 0

    def test_twist_recurrence(self):
        """Each regenerated word follows the recurrence, reading words
        rewritten earlier in the same pass for the i + M term and for the
        final wrap-around."""
        rng = MT19937(99)
        old, _ = rng.getstate()
        rng.twist()
        new, _ = rng.getstate()
        n, m = MT19937.N, MT19937.M
        for i in range(n):
            nxt = new[0] if i == n - 1 else old[i + 1]
            far = old[i + m] if i + m < n else new[i + m - n]
            y = (old[i] & 0x80000000) | (nxt & 0x7FFFFFFF)
            expected = far ^ (y >> 1) ^ (0x9908B0DF if y & 1 else 0)
            assert new[i] == expected


class TestNextU64:
    def test_high_word_first(self):
        rng = MT19937(1)
        assert rng.next_u64() == (1791095845 << 32) | 4282876139

    def test_composition_matches_two_u32_draws(self):
        a = MT19937(77)
        b = MT19937(77)
        for _ in range(700):
            hi = b.next_u32()
            lo = b.next_u32()
            assert a.next_u64() == (hi << 32) | lo

    def test_range(self):
        rng = MT19937(5)
        for _ in range(1000):
            assert 0 <= rng.next_u64() < 2**64


# -- Floats ---------------------------------------------------------


class TestClosedFloats:
    """next_f32_closed and next_f64_closed cover [0, 1], not [0, 1)."""

    def test_f64_endpoints_reachable(self):
        assert _fixed(MT19937(), 0).next_f64_closed() == 0.0
        assert _fixed(MT19937(), 0xFFFFFFFF).next_f64_closed() == 1.0

    def test_f32_endpoints_reachable(self):
        assert _fixed(MT19937(), 0).next_f32_closed() == 0.0
        assert _fixed(MT19937(), 0xFFFFFFFF).next_f32_closed() == 1.0

    def test_f32_rounds_up_to_one(self):
        """Values that round to 2^32 in single precision give 1.0."""
        assert _fixed(MT19937(), 0xFFFFFF80).next_f32_closed() == 1.0
        assert (
            _fixed(MT19937(), 0xFFFFFF7F).next_f32_closed() == 1.0 - 2.0**-24
        )

    def test_f64_range(self):
        rng = MT19937(1)
        values = [rng.next_f64_closed() for _ in range(20000)]
        assert all(0.0 <= v <= 1.0 for v in values)
        assert min(values) < 0.001
        assert max(values) > 0.999

    def test_f32_range(self):
        rng = MT19937(1)
        values = [rng.next_f32_closed() for _ in range(20000)]
        assert all(0.0 <= v <= 1.0 for v in values)
        assert min(values) < 0.001
        assert max(values) > 0.999

    def test_f32_is_single_precision(self):
        rng = MT19937(11)
        for _ in range(1000):
            v = rng.next_f32_closed()
            assert _to_f32(v) == v

    def test_f64_matches_u32(self):
        a = MT19937(1)
        b = MT19937(1)
        for _ in range(100):
            assert a.next_f64_closed() == b.next_u32() / 4294967295.0

    def test_one_draw_each(self):
        a = MT19937(8)
        b = MT19937(8)
        a.next_f32_closed()
        a.next_f64_closed()
        b.discard(2)
        assert a.next_u32() == b.next_u32()


class TestOtherFloats:
    def test_half_open_never_one(self):
        top = 0xFFFFFFFF
        assert _fixed(MT19937(), top).next_f32_half_open() < 1.0
        assert _fixed(MT19937(), top).next_f64_half_open() < 1.0
        assert _fixed(MT19937(), 0).next_f32_half_open() == 0.0
        assert _fixed(MT19937(), 0).next_f64_half_open() == 0.0

    def test_open_excludes_endpoints(self):
        for value in (0, 0xFFFFFFFF):
            assert 0.0 < _fixed(MT19937(), value).next_f32_open() < 1.0
            assert 0.0 < _fixed(MT19937(), value).next_f64_open() < 1.0

    def test_f32_variants_are_single_precision(self):
        rng = MT19937(12)
        for _ in range(500):
            for v in (rng.next_f32_half_open(), rng.next_f32_open()):
                assert _to_f32(v) == v

    def test_res53_matches_cpython_random(self):
        ours = MT19937.from_array([99])
        theirs = random.Random(99)
        for _ in range(1000):
            assert ours.next_f64_res53() == theirs.random()

    def test_res53_never_one(self):
        assert _fixed(MT19937(), 0xFFFFFFFF).next_f64_res53() < 1.0


# -- State ----------------------------------------------------------


class TestState:
    def test_getstate_setstate_resumes_stream(self):
        rng = MT19937(21)
        for _ in range(1000):
            rng.next_u32()
        saved = rng.getstate()
        expected = [rng.next_u32() for _ in range(700)]
        other = MT19937(0)
        other.setstate(saved)
        assert [other.next_u32() for _ in range(700)] == expected

    def test_setstate_wrong_length(self):
        with pytest.raises(ValueError, match="624 words"):
            MT19937().setstate(([0] * 623, 0))

    def test_setstate_word_out_of_range(self):
        key = [0] * 624
        key[5] = 2**32
        with pytest.raises(ValueError):
            MT19937().setstate((key, 0))

    def test_setstate_index_out_of_range(self):
        key, _ = MT19937().getstate()
        with pytest.raises(ValueError):
            MT19937().setstate((key, 625))
        with pytest.raises(ValueError):
            MT19937().setstate((key, -1))

    def test_setstate_does_not_alias_input(self):
        key = list(MT19937(1).getstate()[0])
        rng = MT19937()
        rng.setstate((key, 624))
        key[0] ^= 1
        assert rng.next_u32() == EXPECTED_SEED1[0]

    def test_clone_is_independent(self):
        rng = MT19937(4)
        rng.next_u32()
        copy = rng.clone()
        assert copy.next_u32() == rng.next_u32()
        copy.next_u32()
        assert copy.index == rng.index + 1


class TestDiscard:
    @pytest.mark.parametrize("count", [0, 1, 623, 624, 625, 2000])
    def test_matches_drawing(self, count):
        a = MT19937(1)
        b = MT19937(1)
        a.discard(count)
        for _ in range(count):
            b.next_u32()
        assert a.getstate() == b.getstate()
        assert a.next_u32() == b.next_u32()

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            MT19937().discard(-1)
