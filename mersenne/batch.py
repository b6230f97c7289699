"""Vectorised MT19937 operations on numpy arrays.

Bulk draws and fast skip-ahead for ``MT19937``. These functions read the
generator's state, work on a ``uint32`` copy, and write the state back, so
a generator can be mixed freely between scalar and batch calls and always
produces the same stream.

The twist is vectorised in blocks. Word ``i`` depends on ``mt[i]``,
``mt[i + 1]`` (both still untouched when ``i`` is reached) and
``mt[(i + M) % N]``, which is an original word for ``i < N - M`` and a word
rewritten earlier in the same pass after that. Splitting at multiples of
``N - M`` keeps every block's ``i + M`` reads on one side of that line:

    [0, 227)    reads mt[397:624]  (original)
    [227, 454)  reads mt[0:227]    (rewritten by block 1)
    [454, 623)  reads mt[227:396]  (rewritten by block 2)
    623         reads mt[396] and the rewritten mt[0]

Also converts to and from ``numpy.random.MT19937``, which stores the same
624-word key and position.
"""

from __future__ import annotations

import numpy as np

from .twister import MT19937

N = MT19937.N
M = MT19937.M
_D = N - M

_UPPER = np.uint32(MT19937.UPPER_MASK)
_LOWER = np.uint32(MT19937.LOWER_MASK)
_MATRIX_A = np.uint32(MT19937.MATRIX_A)
_ONE = np.uint32(1)


def _mix(upper: np.ndarray, lower: np.ndarray, far: np.ndarray) -> np.ndarray:
    y = (upper & _UPPER) | (lower & _LOWER)
    return far ^ (y >> _ONE) ^ ((y & _ONE) * _MATRIX_A)


def twist_array(mt: np.ndarray) -> None:
    """Twist a ``uint32[624]`` state array in place."""
    if mt.shape != (N,) or mt.dtype != np.uint32:
        raise ValueError(f"expected a uint32 array of shape ({N},)")
    mt[:_D] = _mix(mt[:_D], mt[1 : _D + 1], mt[M:])
    mt[_D : 2 * _D] = _mix(mt[_D : 2 * _D], mt[_D + 1 : 2 * _D + 1], mt[:_D])
    mt[2 * _D : N - 1] = _mix(
        mt[2 * _D : N - 1], mt[2 * _D + 1 : N], mt[_D : M - 1]
    )
    mt[N - 1 :] = _mix(mt[N - 1 :], mt[:1], mt[M - 1 : M])


def temper_array(words: np.ndarray) -> np.ndarray:
    """Apply the MT19937 tempering transform elementwise."""
    y = words.astype(np.uint32, copy=True)
    y ^= y >> np.uint32(11)
    y ^= (y << np.uint32(7)) & np.uint32(0x9D2C5680)
    y ^= (y << np.uint32(15)) & np.uint32(0xEFC60000)
    y ^= y >> np.uint32(18)
    return y


def _load(rng: MT19937) -> tuple[np.ndarray, int]:
    key, index = rng.getstate()
    return np.array(key, dtype=np.uint32), index


def _store(rng: MT19937, mt: np.ndarray, index: int) -> None:
    rng.setstate((mt.tolist(), index))


def random_raw(rng: MT19937, size: int) -> np.ndarray:
    """Next ``size`` outputs of ``rng`` as a ``uint32`` array.

    Leaves ``rng`` exactly where ``size`` calls to ``next_u32`` would.
    """
    if size < 0:
        raise ValueError(f"size must be non-negative, got {size}")
    mt, index = _load(rng)
    out = np.empty(size, dtype=np.uint32)
    filled = 0
    while filled < size:
        if index >= N:
            twist_array(mt)
            index = 0
        take = min(N - index, size - filled)
        out[filled : filled + take] = mt[index : index + take]
        index += take
        filled += take
    _store(rng, mt, index)
    return temper_array(out)


def discard(rng: MT19937, count: int) -> None:
    """Advance ``rng`` by ``count`` draws without tempering anything."""
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    mt, index = _load(rng)
    available = N - index
    if count <= available:
        index += count
    else:
        twists, rem = divmod(count - available, N)
        if rem:
            twists += 1
        else:
            rem = N
        for _ in range(twists):
            twist_array(mt)
        index = rem
    _store(rng, mt, index)


def to_numpy(rng: MT19937) -> np.random.MT19937:
    """A ``numpy.random.MT19937`` positioned at the same point as ``rng``.

    The result can back a ``numpy.random.Generator``. The two generators
    are independent afterwards.
    """
    mt, index = _load(rng)
    bit_generator = np.random.MT19937()
    bit_generator.state = {
        "bit_generator": "MT19937",
        "state": {"key": mt, "pos": index},
    }
    return bit_generator


def from_numpy(bit_generator: np.random.MT19937) -> MT19937:
    """An ``MT19937`` positioned at the same point as ``bit_generator``."""
    state = bit_generator.state
    if state.get("bit_generator") != "MT19937":
        raise ValueError(
            f"expected an MT19937 bit generator, got {state.get('bit_generator')!r}"
        )
    rng = MT19937()
    rng.setstate(
        (np.asarray(state["state"]["key"]).tolist(), int(state["state"]["pos"]))
    )
    return rng
