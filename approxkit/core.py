"""
Core accumulators.

This module contains the Kahan-Babuska-Neumaier compensated sum and the
Welford online mean/variance accumulator built on top of it.
"""

from typing import Callable, Generic, Iterable

from .errors import EmptyAccumulatorError, InsufficientSamplesError
from .traits import A, T, sqrt, to_scalar, where, zeros_like


class CompensatedSum(Generic[T]):
    """
    Kahan-Babuska-Neumaier (KBN) compensated sum.

    Tracks a running sum ``s`` together with a compensation term ``c`` holding
    the low-order bits lost by each addition. The represented value is
    ``s + c`` and its error is bounded by the precision of ``T`` independently
    of the number of terms, whereas the worst-case error of naive summation
    grows linearly with the number of terms.

    ``T`` must support ``+``, ``-``, ``<`` and ``abs``. NumPy arrays and torch
    tensors are accumulated element-wise.

    Equality and ordering compare materialized values only, never the
    internal ``(s, c)`` pair.

    Attributes:
        s: The running sum
        c: The compensation term
    """

    __hash__ = None

    def __init__(self, initial=0.0):
        """
        Initialize the accumulator.

        Args:
            initial: Starting value; also fixes the type of the compensation
        """
        self.s = initial
        self.c = zeros_like(initial)

    def add(self, x) -> "CompensatedSum[T]":
        """
        Add a value, or merge another CompensatedSum, with compensation.

        The branch compares the magnitude of the increment with the magnitude
        of the running sum; the smaller operand is the one whose low-order
        bits are recovered.

        Args:
            x: Value of type T, or another CompensatedSum

        Returns:
            self
        """
        if isinstance(x, CompensatedSum):
            return self.merge(x)

        s = self.s
        t = s + x
        self.c = self.c + where(abs(x) < abs(s), (s - t) + x, (x - t) + s)
        self.s = t
        return self

    def merge(self, other: "CompensatedSum[T]") -> "CompensatedSum[T]":
        """
        Fold another accumulator into this one.

        The other sum's ``s`` is added first, then its ``c``, so partial
        results of disjoint blocks can be combined without losing their
        compensation.
        """
        self.add(other.s)
        self.add(other.c)
        return self

    def reduce(self, values: Iterable) -> "CompensatedSum[T]":
        """Left-fold :meth:`add` over ``values``; returns self for chaining."""
        for x in values:
            self.add(x)
        return self

    def value(self):
        """Materialized sum ``s + c``."""
        return self.s + self.c

    eval = value

    def reset(self, initial=0.0):
        """Re-seed the accumulator and clear the compensation."""
        self.s = initial
        self.c = zeros_like(initial)

    def copy(self) -> "CompensatedSum[T]":
        clone = CompensatedSum(self.s)
        clone.c = self.c
        return clone

    def __iadd__(self, x):
        return self.add(x)

    def __add__(self, x):
        return self.copy().add(x)

    __radd__ = __add__

    def __neg__(self):
        negated = CompensatedSum(-self.s)
        negated.c = -self.c
        return negated

    def __sub__(self, other):
        return self.value() - to_scalar(other)

    def __rsub__(self, other):
        return other - self.value()

    def __mul__(self, other):
        return self.value() * to_scalar(other)

    __rmul__ = __mul__

    def __truediv__(self, other):
        return self.value() / to_scalar(other)

    def __abs__(self):
        # Component-wise, as an infinity norm over (s, c).
        result = CompensatedSum(abs(self.s))
        result.c = abs(self.c)
        return result

    def __float__(self):
        return float(self.value())

    def __eq__(self, other):
        return self.value() == to_scalar(other)

    def __ne__(self, other):
        return self.value() != to_scalar(other)

    def __lt__(self, other):
        return self.value() < to_scalar(other)

    def __le__(self, other):
        return self.value() <= to_scalar(other)

    def __gt__(self, other):
        return self.value() > to_scalar(other)

    def __ge__(self, other):
        return self.value() >= to_scalar(other)

    def __repr__(self):
        return f"CompensatedSum(s={self.s!r}, c={self.c!r})"


class OnlineMoments(Generic[A]):
    """
    Welford's single-pass mean and variance accumulator.

    Generic over the accumulator type ``A`` used for the running mean ``mu``
    and the running sum of squared deviations ``m2``. With the default
    :class:`CompensatedSum` both quantities also benefit from compensated
    summation; passing ``accumulator=float`` gives the textbook algorithm.

    Space is O(1) regardless of stream length. There is no removal: the
    accumulator only grows.

    Attributes:
        count: Number of observations inserted
        mu: Running mean (type A)
        m2: Running sum of squared deviations from the mean (type A)
    """

    def __init__(self, first=None, accumulator: Callable[[], A] = CompensatedSum):
        """
        Initialize the accumulator.

        Args:
            first: Optional first observation
            accumulator: Zero-argument factory returning the identity of A
        """
        self.count = 0
        self.mu = accumulator()
        self.m2 = accumulator()
        if first is not None:
            self.insert(first)

    def insert(self, x) -> "OnlineMoments[A]":
        """
        Insert one observation.

        The second deviation is taken against the updated mean; this is what
        keeps the update numerically stable.
        """
        self.count += 1
        delta = x - to_scalar(self.mu)
        self.mu += delta / self.count
        delta2 = x - to_scalar(self.mu)
        self.m2 += delta * delta2
        return self

    def extend(self, values: Iterable) -> "OnlineMoments[A]":
        for x in values:
            self.insert(x)
        return self

    def _require(self, required: int):
        if self.count == 0:
            raise EmptyAccumulatorError("no observations have been inserted")
        if self.count < required:
            raise InsufficientSamplesError(required, self.count)

    def mean(self):
        """Arithmetic mean of the observations."""
        self._require(1)
        return to_scalar(self.mu)

    def variance(self):
        """Population variance ``m2 / count``."""
        self._require(1)
        return to_scalar(self.m2) / self.count

    def sample_variance(self):
        """
        Unbiased sample variance ``m2 / (count - 1)``.

        Raises:
            EmptyAccumulatorError: If no observations were inserted
            InsufficientSamplesError: If only one observation was inserted
        """
        self._require(2)
        return to_scalar(self.m2) / (self.count - 1)

    def std(self):
        return sqrt(self.variance())

    def sample_std(self):
        return sqrt(self.sample_variance())

    def sum(self):
        """Total of the observations, ``mean * count``; zero when empty."""
        return to_scalar(self.mu) * self.count

    def size(self) -> int:
        return self.count

    def __len__(self):
        return self.count

    def __iadd__(self, x):
        return self.insert(x)

    def __float__(self):
        return float(self.sum())

    def __repr__(self):
        return (
            f"OnlineMoments(count={self.count}, mu={self.mu!r}, m2={self.m2!r})"
        )


def kbn_welford(first=None) -> OnlineMoments:
    """Welford accumulator whose moments use compensated summation."""
    return OnlineMoments(first, accumulator=CompensatedSum)


def mean(acc: OnlineMoments):
    return acc.mean()


def variance(acc: OnlineMoments):
    return acc.variance()


def sample_variance(acc: OnlineMoments):
    return acc.sample_variance()


def size(acc: OnlineMoments) -> int:
    return acc.size()


def total(acc: OnlineMoments):
    return acc.sum()
