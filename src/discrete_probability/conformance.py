"""Chi-squared goodness-of-fit check for generators.

Draws a batch of values from a generator and compares how often each table
entry came up with how often its weight says it should. Intended for tests
and sanity checks, not for the draw path.
"""

import math
from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from discrete_probability.generator import Generator

_MAX_ITERATIONS = 500
_EPSILON = 1e-15
_TINY = 1e-300


@dataclass(frozen=True)
class ChiSquaredResult:
    chi_squared: float
    degrees_of_freedom: int
    p_value: float
    num_samples: int

    def passes(self, alpha: float = 0.01) -> bool:
        """True when the observed counts are consistent at level ``alpha``."""
        return self.p_value >= alpha


def _lower_gamma_series(a: float, x: float) -> float:
    # Regularized lower incomplete gamma P(a, x), valid for x < a + 1.
    term = 1.0 / a
    total = term
    n = a
    for _ in range(_MAX_ITERATIONS):
        n += 1.0
        term *= x / n
        total += term
        if abs(term) < abs(total) * _EPSILON:
            break
    return total * math.exp(-x + a * math.log(x) - math.lgamma(a))


def _upper_gamma_fraction(a: float, x: float) -> float:
    # Regularized upper incomplete gamma Q(a, x) by Lentz's continued
    # fraction, valid for x >= a + 1.
    b = x + 1.0 - a
    c = 1.0 / _TINY
    d = 1.0 / b
    h = d
    for i in range(1, _MAX_ITERATIONS + 1):
        an = -i * (i - a)
        b += 2.0
        d = an * d + b
        if abs(d) < _TINY:
            d = _TINY
        c = b + an / c
        if abs(c) < _TINY:
            c = _TINY
        d = 1.0 / d
        delta = d * c
        h *= delta
        if abs(delta - 1.0) < _EPSILON:
            break
    return h * math.exp(-x + a * math.log(x) - math.lgamma(a))


def chi_squared_survival(statistic: float, degrees_of_freedom: int) -> float:
    """Probability that a chi-squared variable exceeds ``statistic``."""
    if degrees_of_freedom < 1 or statistic <= 0.0:
        return 1.0
    a = degrees_of_freedom / 2.0
    x = statistic / 2.0
    if x < a + 1.0:
        return max(0.0, 1.0 - _lower_gamma_series(a, x))
    return min(1.0, _upper_gamma_fraction(a, x))


def check_distribution(generator: "Generator[Any]", num_samples: int) -> ChiSquaredResult:
    """Draw ``num_samples`` values and test them against the weights.

    Entries with zero probability are left out of the statistic.
    """
    if num_samples < 1:
        raise ValueError(f"num_samples must be positive, got {num_samples}")

    counts: Counter[int] = Counter(
        generator.draw_index() for _ in range(num_samples)
    )

    chi_squared = 0.0
    categories = 0
    for i, p in enumerate(generator.probabilities):
        if p <= 0.0:
            continue
        categories += 1
        expected = p * num_samples
        chi_squared += (counts[i] - expected) ** 2 / expected

    degrees_of_freedom = max(categories - 1, 0)
    return ChiSquaredResult(
        chi_squared=chi_squared,
        degrees_of_freedom=degrees_of_freedom,
        p_value=chi_squared_survival(chi_squared, degrees_of_freedom),
        num_samples=num_samples,
    )
