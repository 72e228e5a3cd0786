"""Package initialization for discrete-probability.

Weighted random selection from a fixed set of values, with O(log N)
draws and reproducible, seedable output.
"""

from discrete_probability.conformance import ChiSquaredResult, check_distribution
from discrete_probability.errors import (
    DiscreteProbabilityError,
    InvalidWeightError,
    LengthMismatchError,
    NotSequenceError,
    TypeMismatchError,
    WeightSumError,
)
from discrete_probability.generator import (
    WEIGHT_SUM_TOLERANCE,
    Generator,
    build,
    draw_checked,
    draw_raw,
    reseed,
)
from discrete_probability.source import RandomSource, default_seed

__version__ = "0.1.0"
__all__ = [
    "WEIGHT_SUM_TOLERANCE",
    "ChiSquaredResult",
    "DiscreteProbabilityError",
    "Generator",
    "InvalidWeightError",
    "LengthMismatchError",
    "NotSequenceError",
    "RandomSource",
    "TypeMismatchError",
    "WeightSumError",
    "build",
    "check_distribution",
    "default_seed",
    "draw_checked",
    "draw_raw",
    "reseed",
]
