"""Weighted random selection from a fixed set of values.

A :class:`Generator` is built once from parallel sequences of values and
weights. Construction sorts the pairs by weight and replaces the weights with
their running sum, giving a monotonic cumulative table. Each draw maps a
uniform fraction onto that table with a binary search (inverse-CDF sampling),
so drawing costs O(log n).

Example::

    generator = build([1, 2, 3], [0.25, 0.5, 0.25])
    generator.reseed(7)
    value = generator.random_int()

``2`` comes up about half the time, ``1`` and ``3`` a quarter each.

Generators are not thread-safe. Either guard draws on a shared generator with
a lock, or give each thread its own generator via :meth:`Generator.spawn`,
which shares the cumulative table and owns a separate random source.
"""

import logging
import math
from bisect import bisect_left
from collections.abc import Sequence
from itertools import accumulate
from typing import Any, Generic, TypeVar, cast

from discrete_probability.conformance import ChiSquaredResult, check_distribution
from discrete_probability.errors import (
    InvalidWeightError,
    LengthMismatchError,
    NotSequenceError,
    TypeMismatchError,
    WeightSumError,
)
from discrete_probability.source import RandomSource

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")

WEIGHT_SUM_TOLERANCE = 1e-4

_TEXT_TYPES = (str, bytes, bytearray)


def _matches(value: Any, expected_type: type) -> bool:
    # bool is an int subclass but never a valid int draw
    if isinstance(value, bool) and expected_type is not bool:
        return False
    return isinstance(value, expected_type)


def _as_weight(index: int, weight: Any) -> float:
    message = f"weight {weight!r} at index {index} is not a number"
    # float() would happily parse "0.5"
    if isinstance(weight, _TEXT_TYPES):
        raise InvalidWeightError(message)
    try:
        return float(weight)
    except (TypeError, ValueError) as e:
        raise InvalidWeightError(message) from e


def _raw_value(value: Any, expected_type: type) -> Any:
    # Raised explicitly so the check survives python -O.
    if not _matches(value, expected_type):
        raise AssertionError(
            f"drew {type(value).__name__} value {value!r} from a generator "
            f"used as {expected_type.__name__}"
        )
    return value


class Generator(Generic[T]):
    """An immutable discrete distribution over ``values``.

    Args:
        values: Indexable sequence of values to draw from.
        weights: One probability per value. Must be finite, non-negative and
            sum to one within ``WEIGHT_SUM_TOLERANCE``.
        seed: Optional seed; defaults to the process-wide default seed.

    Raises:
        NotSequenceError: ``values`` is not a sequence.
        LengthMismatchError: ``values`` and ``weights`` differ in length.
        InvalidWeightError: A weight is not a number, negative or not finite.
        WeightSumError: The weights do not sum to one.
    """

    __slots__ = ("_values", "_cumulative", "_source")

    def __init__(
        self,
        values: Sequence[T],
        weights: Sequence[float],
        seed: int | None = None,
    ) -> None:
        if not isinstance(values, Sequence) or isinstance(values, _TEXT_TYPES):
            raise NotSequenceError(
                f"values must be a sequence, got {type(values).__name__}"
            )

        try:
            weights = [_as_weight(i, w) for i, w in enumerate(weights)]
        except TypeError as e:
            raise InvalidWeightError(
                f"weights must be a sequence of numbers, got {type(weights).__name__}"
            ) from e
        if len(values) != len(weights):
            raise LengthMismatchError(
                f"length of values ({len(values)}) does not match "
                f"length of weights ({len(weights)})"
            )

        for i, w in enumerate(weights):
            if not math.isfinite(w) or w < 0:
                raise InvalidWeightError(f"invalid weight {w!r} at index {i}")

        # Ties keep their input order, but callers must not rely on it.
        order = sorted(range(len(values)), key=weights.__getitem__)
        cumulative = tuple(accumulate(weights[i] for i in order))

        total = cumulative[-1] if cumulative else 0.0
        if not abs(total - 1.0) <= WEIGHT_SUM_TOLERANCE:
            raise WeightSumError(
                f"weights sum to {total!r}, expected 1.0 "
                f"within {WEIGHT_SUM_TOLERANCE}"
            )

        self._values: tuple[T, ...] = tuple(values[i] for i in order)
        self._cumulative: tuple[float, ...] = cumulative
        self._source = RandomSource(seed)
        logger.debug(
            "Built generator with %d entries, seed=%d", len(order), self._source.seed
        )

    @classmethod
    def _from_table(
        cls,
        values: tuple[T, ...],
        cumulative: tuple[float, ...],
        seed: int | None,
    ) -> "Generator[T]":
        generator = cls.__new__(cls)
        generator._values = values
        generator._cumulative = cumulative
        generator._source = RandomSource(seed)
        return generator

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._values)

    @property
    def size(self) -> int:
        return len(self._values)

    @property
    def values(self) -> tuple[T, ...]:
        """Values in table order (ascending by weight)."""
        return self._values

    @property
    def cumulative_weights(self) -> tuple[float, ...]:
        return self._cumulative

    @property
    def entries(self) -> tuple[tuple[T, float], ...]:
        """``(value, cumulative_weight)`` pairs in table order."""
        return tuple(zip(self._values, self._cumulative))

    @property
    def probabilities(self) -> tuple[float, ...]:
        """The weight of each entry, recovered from the cumulative table."""
        previous = 0.0
        result = []
        for c in self._cumulative:
            result.append(c - previous)
            previous = c
        return tuple(result)

    @property
    def source(self) -> RandomSource:
        return self._source

    @property
    def seed(self) -> int:
        return self._source.seed

    def __repr__(self) -> str:
        return f"Generator(size={len(self)}, seed={self._source.seed})"

    # -------------------------------------------------------------------------
    # Seeding
    # -------------------------------------------------------------------------

    def reseed(self, seed: int) -> None:
        """Replace the random source with one seeded by ``seed``.

        The cumulative table is untouched; only future draws change.
        """
        self._source = RandomSource(seed)
        logger.debug("Reseeded generator with seed=%d", seed)

    set_seed = reseed

    def spawn(self, seed: int | None = None) -> "Generator[T]":
        """Return a generator sharing this table with its own random source."""
        return self._from_table(self._values, self._cumulative, seed)

    # -------------------------------------------------------------------------
    # Drawing
    # -------------------------------------------------------------------------

    def draw_index(self) -> int:
        """Return the table index selected by one draw."""
        f = self._source.fraction()
        i = bisect_left(self._cumulative, f)
        # The table may end a little below 1.0, which a fraction can exceed.
        return min(i, len(self._cumulative) - 1)

    def draw(self) -> T:
        """Return one weighted random value without any type check."""
        return self._values[self.draw_index()]

    def draw_checked(self, expected_type: type[U]) -> U:
        """Return one weighted random value, verifying its type.

        Raises:
            TypeMismatchError: The drawn value is not an ``expected_type``.
        """
        value = self.draw()
        if not _matches(value, expected_type):
            raise TypeMismatchError(
                f"expected {expected_type.__name__}, drew "
                f"{type(value).__name__} value {value!r}"
            )
        return cast(U, value)

    def sample(self, k: int) -> list[T]:
        """Return ``k`` independent draws."""
        if k < 0:
            raise ValueError(f"sample size must be non-negative, got {k}")
        return [self.draw() for _ in range(k)]

    # Unchecked typed draws. Asking for the wrong type is a programmer error and
    # raises AssertionError rather than a catchable package error.

    def random_int(self) -> int:
        return _raw_value(self.draw(), int)

    def random_float(self) -> float:
        return _raw_value(self.draw(), float)

    def random_string(self) -> str:
        return _raw_value(self.draw(), str)

    # Checked typed draws.

    def random_int_safe(self) -> int:
        return self.draw_checked(int)

    def random_float_safe(self) -> float:
        return self.draw_checked(float)

    def random_string_safe(self) -> str:
        return self.draw_checked(str)

    def test_distribution(self, num_samples: int) -> ChiSquaredResult:
        """Run a chi-squared goodness-of-fit check over fresh draws."""
        return check_distribution(self, num_samples)


def build(
    values: Sequence[T], weights: Sequence[float], seed: int | None = None
) -> Generator[T]:
    """Build a :class:`Generator` from parallel values and weights."""
    return Generator(values, weights, seed=seed)


def reseed(generator: Generator[Any], seed: int) -> None:
    generator.reseed(seed)


def draw_raw(generator: Generator[T]) -> T:
    return generator.draw()


def draw_checked(generator: Generator[Any], expected_type: type[U]) -> U:
    return generator.draw_checked(expected_type)
