"""Seedable pseudo-random bit source used by generators.

The source is a thin wrapper over :class:`random.Random` (Mersenne Twister)
that hands out 63-bit integers. It is fast and reproducible, and must not be
used where cryptographic randomness is required.
"""

import operator
import random
import time

INT63_SCALE = 1 << 63

# Captured once at import; shared by every generator that is never reseeded.
_DEFAULT_SEED = time.time_ns()


def _fold(seed: int) -> int:
    # random.Random seeds with abs(seed); interleave signs so s and -s differ.
    return 2 * seed if seed >= 0 else -2 * seed - 1


def default_seed() -> int:
    """Return the process-wide default seed.

    The value is unspecified but fixed for the lifetime of the process.
    """
    return _DEFAULT_SEED


class RandomSource:
    """A deterministic stream of 63-bit non-negative integers.

    Any integer is a valid seed; distinct seeds never share a Mersenne Twister key.
    Non-integer seeds such as floats raise ``TypeError``.
    """

    __slots__ = ("_rng", "_seed")

    def __init__(self, seed: int | None = None) -> None:
        if seed is None:
            seed = _DEFAULT_SEED
        self._seed = operator.index(seed)
        self._rng = random.Random(_fold(self._seed))

    @property
    def seed(self) -> int:
        return self._seed

    def int63(self) -> int:
        """Return a uniformly distributed integer in ``[0, 2**63)``."""
        return self._rng.getrandbits(63)

    def fraction(self) -> float:
        """Return ``int63() / 2**63``.

        Nominally in ``[0, 1)``; the largest draws round up to ``1.0``.
        """
        return self.int63() / INT63_SCALE

    def __repr__(self) -> str:
        return f"RandomSource(seed={self._seed})"
