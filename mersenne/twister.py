"""MT19937 Mersenne Twister pseudorandom number generator.

32-bit Mersenne Twister with period 2^19937 - 1, bit-compatible with the
reference ``mt19937ar.c`` by Matsumoto and Nishimura.
Reference: http://www.math.sci.hiroshima-u.ac.jp/~m-mat/MT/emt.html

A generator is always seeded at construction, so there is no way to draw
from an uninitialized state. Instances are not thread-safe; give each
thread its own generator or serialize access externally.

Float variants and their ranges:

    next_f32_closed / next_f64_closed        [0, 1]  both endpoints reachable
    next_f32_half_open / next_f64_half_open  [0, 1)
    next_f32_open / next_f64_open            (0, 1)
    next_f64_res53                           [0, 1)  53-bit resolution
"""

from __future__ import annotations

import operator
import struct
from typing import Iterable

_F32 = struct.Struct("<f")


def _to_f32(x: float) -> float:
    """Round a double to the nearest single-precision value."""
    return _F32.unpack(_F32.pack(x))[0]


class MT19937:
    N = 624
    M = 397
    MATRIX_A = 0x9908B0DF
    UPPER_MASK = 0x80000000
    LOWER_MASK = 0x7FFFFFFF
    _MASK32 = 0xFFFFFFFF
    _INIT_MUL = 1812433253
    DEFAULT_SEED = 5489

    def __init__(self, seed: int = DEFAULT_SEED) -> None:
        self._mt: list[int] = [0] * self.N
        self._index: int = self.N
        self.seed(seed)

    @classmethod
    def from_array(cls, key: Iterable[int]) -> MT19937:
        """Create a generator seeded with ``seed_by_array(key)``."""
        rng = cls()
        rng.seed_by_array(key)
        return rng

    # -- Seeding ----------------------------------------------------

    def seed(self, value: int) -> None:
        """Reinitialize the state from the low 32 bits of ``value``.

        Any integer is accepted, including 0 and negative values (which
        wrap as two's complement). The first twist is deferred to the
        next draw.
        """
        value = operator.index(value) & self._MASK32
        mt = self._mt
        mt[0] = value
        for i in range(1, self.N):
            prev = mt[i - 1]
            mt[i] = (self._INIT_MUL * (prev ^ (prev >> 30)) + i) & self._MASK32
        self._index = self.N

    def seed_by_array(self, key: Iterable[int]) -> None:
        """Reinitialize the state from a sequence of 32-bit words.

        This is ``init_by_array`` from mt19937ar. CPython's
        ``random.seed(n)`` uses it with the 32-bit words of ``abs(n)``,
        least significant first.
        """
        words = [operator.index(k) & self._MASK32 for k in key]
        if not words:
            raise ValueError("seed_by_array requires at least one key word")

        n = self.N
        self.seed(19650218)
        mt = self._mt
        i, j = 1, 0
        for _ in range(max(n, len(words))):
            prev = mt[i - 1]
            mt[i] = (
                (mt[i] ^ ((prev ^ (prev >> 30)) * 1664525)) + words[j] + j
            ) & self._MASK32
            i += 1
            j += 1
            if i >= n:
                mt[0] = mt[n - 1]
                i = 1
            if j >= len(words):
                j = 0
        for _ in range(n - 1):
            prev = mt[i - 1]
            mt[i] = (
                (mt[i] ^ ((prev ^ (prev >> 30)) * 1566083941)) - i
            ) & self._MASK32
            i += 1
            if i >= n:
                mt[0] = mt[n - 1]
                i = 1
        # MSB is 1, so the initial array is never all zero.
        mt[0] = 0x80000000
        self._index = n

    # -- State ------------------------------------------------------

    def twist(self) -> None:
        """Regenerate all N words in place and reset the cursor.

        Indices are processed in increasing order. The ``i + M`` term reads
        words already rewritten in this pass once ``i >= N - M``, and the
        final word wraps around to the freshly rewritten ``mt[0]``, exactly
        as the reference does.
        """
        mt = self._mt
        n, m = self.N, self.M
        for i in range(n):
            y = (mt[i] & self.UPPER_MASK) | (mt[(i + 1) % n] & self.LOWER_MASK)
            v = mt[(i + m) % n] ^ (y >> 1)
            if y & 1:
                v ^= self.MATRIX_A
            mt[i] = v
        self._index = 0

    @property
    def index(self) -> int:
        """Number of words consumed since the last twist (N = exhausted)."""
        return self._index

    def getstate(self) -> tuple[tuple[int, ...], int]:
        return tuple(self._mt), self._index

    def setstate(self, state: tuple[Iterable[int], int]) -> None:
        """Restore a state produced by ``getstate``.

        Raises ValueError if the word count, a word value or the index is
        out of range.
        """
        key, index = state
        words = [operator.index(w) for w in key]
        if len(words) != self.N:
            raise ValueError(
                f"state must have {self.N} words, got {len(words)}"
            )
        if any(w < 0 or w > self._MASK32 for w in words):
            raise ValueError("state words must be unsigned 32-bit integers")
        index = operator.index(index)
        if not 0 <= index <= self.N:
            raise ValueError(f"index must be in [0, {self.N}], got {index}")
        self._mt = words
        self._index = index

    def clone(self) -> MT19937:
        """Independent copy positioned at the same point in the stream."""
        other = type(self).__new__(type(self))
        other._mt = list(self._mt)
        other._index = self._index
        return other

    def discard(self, count: int) -> None:
        """Advance the stream by ``count`` draws without tempering."""
        count = operator.index(count)
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        while count > 0:
            if self._index >= self.N:
                self.twist()
            step = min(count, self.N - self._index)
            self._index += step
            count -= step

    # -- Integer output ---------------------------------------------

    def next_u32(self) -> int:
        if self._index >= self.N:
            self.twist()
        y = self._mt[self._index]
        self._index += 1

        y ^= y >> 11
        y ^= (y << 7) & 0x9D2C5680
        y ^= (y << 15) & 0xEFC60000
        y ^= y >> 18
        return y

    def next_u64(self) -> int:
        """Two consecutive 32-bit draws, the first forming the high word."""
        high = self.next_u32()
        return (high << 32) | self.next_u32()

    # -- Float output -----------------------------------------------

    def next_f32_closed(self) -> float:
        """Single-precision float in the closed interval [0, 1].

        Both 0.0 and 1.0 are reachable. The division by UINT32_MAX is done
        in single precision, where UINT32_MAX rounds to 2^32.
        """
        return _to_f32(_to_f32(self.next_u32()) / 4294967296.0)

    def next_f64_closed(self) -> float:
        """Float in the closed interval [0, 1]; both endpoints reachable."""
        return self.next_u32() / 4294967295.0

    def next_f32_half_open(self) -> float:
        """Single-precision float in [0, 1), from the top 24 bits."""
        return (self.next_u32() >> 8) * (1.0 / 16777216.0)

    def next_f64_half_open(self) -> float:
        """Float in [0, 1)."""
        return self.next_u32() * (1.0 / 4294967296.0)

    def next_f32_open(self) -> float:
        """Single-precision float in (0, 1), from the top 23 bits."""
        return ((self.next_u32() >> 9) + 0.5) * (1.0 / 8388608.0)

    def next_f64_open(self) -> float:
        """Float in (0, 1)."""
        return (self.next_u32() + 0.5) * (1.0 / 4294967296.0)

    def next_f64_res53(self) -> float:
        """Float in [0, 1) with 53-bit resolution, consuming two draws."""
        a = self.next_u32() >> 5
        b = self.next_u32() >> 6
        return (a * 67108864.0 + b) * (1.0 / 9007199254740992.0)
