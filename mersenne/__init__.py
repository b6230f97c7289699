"""MT19937 Mersenne Twister pseudorandom number generator.

Modules:
- twister: the generator (``MT19937``), pure Python
- default: module-level functions backed by one shared generator
- batch: numpy bulk draws, fast skip-ahead, numpy.random interop
- reference: seed-1 reference tables and validation helpers
- noise: render a stream to a PNG for visual inspection

Example:
    >>> from mersenne import MT19937
    >>> rng = MT19937(1)
    >>> rng.next_u32()
    1791095845
"""

from .twister import MT19937

__version__ = "0.1.0"
__all__ = ["MT19937"]
