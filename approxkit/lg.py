"""
Log-domain numbers.

A :class:`LogDomainNumber` represents a strictly positive real ``x`` by its
natural logarithm ``k = ln(x)``. Multiplication, division, inversion and
powers reduce to addition, subtraction, negation and scaling of ``k``, so a
product of many factors accumulates additive error in log space instead of
multiplicative error in linear space. The representable range grows from
``(0, max(T)]`` to ``(0, e**max(T)]``, but the type is only closed under the
multiplicative operations: ``+`` and ``-`` are not part of its computational
basis.

Intermediate values may exceed the range of ``T`` while the final result does
not. Before converting back with :meth:`LogDomainNumber.value` callers should
consult :func:`would_overflow` / :func:`would_underflow` (or
:func:`range_status`); these predicates never raise.
"""

import enum
import logging
import math
from typing import Generic, Iterable, Optional

from .core import CompensatedSum
from .errors import DomainError, UnsupportedOperation
from .traits import L, any_true, is_elementwise, limits, logical_not
from . import traits

logger = logging.getLogger(__name__)

_HALF_LOG_TWO_PI = 0.5 * math.log(2.0 * math.pi)


class RangeStatus(enum.Enum):
    """Whether a log-domain value can be materialized in its scalar type."""

    OK = "ok"
    OVERFLOW = "overflow"
    UNDERFLOW = "underflow"


class LogDomainNumber(Generic[L]):
    """
    Positive number stored as its natural logarithm.

    ``LogDomainNumber()`` is the multiplicative identity (``k = 0``);
    ``LogDomainNumber(x)`` stores ``ln(x)`` and requires ``x > 0``.

    Attributes:
        k: Natural logarithm of the represented value
    """

    __slots__ = ("_k",)

    def __init__(self, x: Optional[L] = None):
        """
        Args:
            x: Positive value to represent; omitted for the identity

        Raises:
            DomainError: If ``x`` is not strictly positive (including NaN)
        """
        if x is None:
            self._k = 0.0
            return
        if any_true(logical_not(x > 0)):
            logger.debug("Rejected non-positive log-domain input %r", x)
            raise DomainError(f"log-domain numbers must be positive, got {x!r}")
        self._k = traits.log(x)

    @classmethod
    def from_log(cls, k: L) -> "LogDomainNumber[L]":
        """Build directly from a stored logarithm."""
        obj = cls.__new__(cls)
        obj._k = k
        return obj

    @classmethod
    def max_for(cls, like=0.0) -> "LogDomainNumber":
        """Largest log-domain value over the floating type of ``like``."""
        return cls.from_log(limits(like).max)

    @classmethod
    def min_for(cls, like=0.0) -> "LogDomainNumber":
        """
        Log-domain value whose stored logarithm is the smallest positive
        normal value of the floating type of ``like``.

        This is not the smallest representable log-domain number: it stands
        for ``exp(tiny)``, roughly 1. The smallest value is ``inverse(max_for())``.
        """
        return cls.from_log(limits(like).min)

    @property
    def k(self):
        return self._k

    def value(self):
        """
        Convert back to the linear domain, ``exp(k)``.

        Never raises on range exhaustion: an overflow yields ``inf`` and an
        underflow a subnormal or zero. Check :meth:`would_overflow` first.
        """
        return traits.exp(self._k)

    def would_overflow(self) -> bool:
        return any_true(self._k > traits.log(limits(self._k).max))

    def would_underflow(self) -> bool:
        return any_true(self._k < traits.log(limits(self._k).min))

    def range_status(self) -> RangeStatus:
        if self.would_overflow():
            return RangeStatus.OVERFLOW
        if self.would_underflow():
            return RangeStatus.UNDERFLOW
        return RangeStatus.OK

    def value_or_none(self):
        """:meth:`value` when it fits in ``T``, otherwise ``None``."""
        status = self.range_status()
        if status is not RangeStatus.OK:
            logger.debug("Log-domain value k=%r not materialized: %s", self._k, status.value)
            return None
        return self.value()

    def inverse(self) -> "LogDomainNumber[L]":
        return LogDomainNumber.from_log(-self._k)

    def __float__(self):
        return float(self.value())

    def __mul__(self, other):
        if not isinstance(other, LogDomainNumber):
            return NotImplemented
        return LogDomainNumber.from_log(self._k + other._k)

    def __truediv__(self, other):
        if not isinstance(other, LogDomainNumber):
            return NotImplemented
        return LogDomainNumber.from_log(self._k - other._k)

    def __pow__(self, e):
        return power(self, e)

    def __abs__(self):
        return self

    def __eq__(self, other):
        if not isinstance(other, LogDomainNumber):
            return NotImplemented
        return self._k == other._k

    def __ne__(self, other):
        if not isinstance(other, LogDomainNumber):
            return NotImplemented
        return self._k != other._k

    def __lt__(self, other):
        if not isinstance(other, LogDomainNumber):
            return NotImplemented
        return self._k < other._k

    def __le__(self, other):
        if not isinstance(other, LogDomainNumber):
            return NotImplemented
        return self._k <= other._k

    def __gt__(self, other):
        if not isinstance(other, LogDomainNumber):
            return NotImplemented
        return self._k > other._k

    def __ge__(self, other):
        if not isinstance(other, LogDomainNumber):
            return NotImplemented
        return self._k >= other._k

    def __hash__(self):
        if is_elementwise(self._k):
            raise TypeError("unhashable type: element-wise LogDomainNumber")
        return hash(float(self._k))

    def __repr__(self):
        return f"LogDomainNumber.from_log({self._k!r})"


def multiply(a: LogDomainNumber, b: LogDomainNumber) -> LogDomainNumber:
    return a * b


def divide(a: LogDomainNumber, b: LogDomainNumber) -> LogDomainNumber:
    return a / b


def inverse(x: LogDomainNumber) -> LogDomainNumber:
    return x.inverse()


def power(x: LogDomainNumber, e) -> LogDomainNumber:
    """``x ** e``: the stored logarithm scaled by ``e``."""
    return LogDomainNumber.from_log(e * x.k)


def sqrt(x: LogDomainNumber) -> LogDomainNumber:
    return power(x, 0.5)


def nth_root(x: LogDomainNumber, r) -> LogDomainNumber:
    return power(x, 1.0 / r)


def log(x: LogDomainNumber, base=None):
    """
    Logarithm of ``x`` as a plain scalar, O(1).

    Args:
        x: Log-domain value
        base: Optional base; natural logarithm when omitted
    """
    if base is None:
        return x.k
    return x.k / traits.log(base)


def exp(x: LogDomainNumber) -> LogDomainNumber:
    """
    ``e ** x`` in the log domain.

    The stored logarithm of the result is the linear value of ``x``, so ``x``
    is materialized first; when that overflows ``T`` the result has an
    infinite logarithm.
    """
    return LogDomainNumber.from_log(x.value())


def sign(x: LogDomainNumber) -> int:
    return 1


def gamma(x: LogDomainNumber) -> LogDomainNumber:
    """
    Stirling's approximation of the gamma function.

        ln Gamma(y) ~ ln(sqrt(2 pi)) - ln(y) / 2 + y ln(y) - y

    The relative error of the logarithm shrinks like ``1 / (12 y)``; intended
    for large arguments whose gamma would overflow ``T``.
    """
    y = x.value()
    return LogDomainNumber.from_log(_HALF_LOG_TWO_PI - 0.5 * x.k + y * (x.k - 1.0))


def factorial(n: int) -> LogDomainNumber:
    """``n!`` computed as a compensated sum of ``ln(i)`` for ``i = 2..n``."""
    if n < 0:
        raise DomainError(f"factorial is undefined for negative n, got {n}")
    # Ascending order adds the smallest terms first.
    acc = CompensatedSum().reduce(math.log(i) for i in range(2, n + 1))
    return LogDomainNumber.from_log(acc.value())


def product(values: Iterable) -> LogDomainNumber:
    """
    Product of positive values (or log-domain values) in the log domain.

    The logarithms are accumulated with a :class:`CompensatedSum`, so the
    rounding error of the product does not grow with the number of factors.

    Raises:
        DomainError: If any plain value is not positive
    """
    acc = CompensatedSum()
    for v in values:
        if not isinstance(v, LogDomainNumber):
            v = LogDomainNumber(v)
        acc.add(v.k)
    return LogDomainNumber.from_log(acc.value())


def would_overflow(x: LogDomainNumber) -> bool:
    """True if ``x.value()`` exceeds the largest finite value of ``T``."""
    return x.would_overflow()


def would_underflow(x: LogDomainNumber) -> bool:
    """True if ``x.value()`` falls below the smallest normal value of ``T``."""
    return x.would_underflow()


def range_status(x: LogDomainNumber) -> RangeStatus:
    return x.range_status()


def floor(x: LogDomainNumber):
    # floor(e**t) has Laplace transform zeta(s) / s; no overflow-free
    # inversion in terms of T's operations is known.
    raise UnsupportedOperation("floor is not in the computational basis of LogDomainNumber")


def sin(x: LogDomainNumber):
    raise UnsupportedOperation("sin is not in the computational basis of LogDomainNumber")


def cos(x: LogDomainNumber):
    raise UnsupportedOperation("cos is not in the computational basis of LogDomainNumber")
