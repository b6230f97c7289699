"""Module-level convenience functions backed by one shared ``MT19937``.

For scripts that don't want to pass a generator around. The shared
generator starts from the mt19937ar default seed (5489) until ``seed`` is
called. It has no locking: code that needs independent or concurrent
streams should create its own ``MT19937`` instead.

    from mersenne import default

    default.seed(1)
    default.rand_u32()  # 1791095845
"""

from __future__ import annotations

from typing import Iterable

from .twister import MT19937

_rng = MT19937()


def instance() -> MT19937:
    """The shared generator."""
    return _rng


def seed(value: int) -> None:
    _rng.seed(value)


def seed_by_array(key: Iterable[int]) -> None:
    _rng.seed_by_array(key)


def getstate() -> tuple[tuple[int, ...], int]:
    return _rng.getstate()


def setstate(state: tuple[Iterable[int], int]) -> None:
    _rng.setstate(state)


def rand_u32() -> int:
    return _rng.next_u32()


def rand_u64() -> int:
    return _rng.next_u64()


def randf_cc() -> float:
    """Single-precision float in [0, 1]."""
    return _rng.next_f32_closed()


def randf_co() -> float:
    """Single-precision float in [0, 1)."""
    return _rng.next_f32_half_open()


def randf_oo() -> float:
    """Single-precision float in (0, 1)."""
    return _rng.next_f32_open()


def randd_cc() -> float:
    """Float in [0, 1]."""
    return _rng.next_f64_closed()


def randd_co() -> float:
    """Float in [0, 1)."""
    return _rng.next_f64_half_open()


def randd_oo() -> float:
    """Float in (0, 1)."""
    return _rng.next_f64_open()
