"""Exceptions raised by discrete-probability.

Every error derives from :class:`DiscreteProbabilityError` and from the
builtin exception that best describes it, so callers may catch either.
"""


class DiscreteProbabilityError(Exception):
    """Base class for all errors raised by this package."""


class NotSequenceError(DiscreteProbabilityError, TypeError):
    """The supplied values are not an indexable sequence."""


class LengthMismatchError(DiscreteProbabilityError, ValueError):
    """Values and weights have different lengths."""


class InvalidWeightError(DiscreteProbabilityError, ValueError):
    """A weight is negative, NaN or infinite."""


class WeightSumError(DiscreteProbabilityError, ValueError):
    """The weights do not sum to one within tolerance."""


class TypeMismatchError(DiscreteProbabilityError, TypeError):
    """A checked draw produced a value of an unexpected type."""
