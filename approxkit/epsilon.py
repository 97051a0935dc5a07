"""
Tolerance-aware comparison of approximate values.

Computed values often differ from mathematical truth because of memory, time
or measurement constraints. When two values are close we suspect they are the
same quantity and differ only because of those constraints. A
:class:`ToleranceValue` carries that suspicion explicitly as a radius ``eps``
around its central ``value``.

Even if ``T`` is totally ordered, tolerance values are only partially ordered:
any two values with

    distance(a.value, b.value) <= max(a.eps, b.eps)

are equivalent, i.e. potentially the same value. The relation is also not
transitive: ``a == b`` and ``b == c`` do not imply ``a == c``, and likewise for
the other predicates.

The six relational operators are overloaded with these semantics. Because
they do not satisfy the usual total-order contract, named predicates and a
tri-state :func:`compare` are provided as well; prefer those in code that
hands values to sorting or other order-based machinery.
"""

import enum
from typing import Generic, Optional, Union

from .config import DEFAULT_COMPARISON_MODE, ComparisonMode, resolve_comparison_mode
from .errors import DomainError
from .traits import (
    E,
    any_true,
    is_elementwise,
    logical_and,
    logical_or,
    maximum,
    zeros_like,
)


class Ordering(enum.Enum):
    """Result of :func:`compare`."""

    LESS = -1
    EQUIVALENT = 0
    GREATER = 1


class ToleranceValue(Generic[E]):
    """
    A value together with a non-negative tolerance radius.

    Immutable; unhashable because equivalence is not transitive.
    NumPy arrays and torch tensors are compared element-wise: every relation
    returns a boolean array of the broadcast shape.

    Attributes:
        value: Central value
        eps: Tolerance radius
        mode: How ``>=`` is evaluated when this value is the left operand
    """

    __slots__ = ("value", "eps", "mode")
    __hash__ = None

    def __init__(self, value: E, eps: E,
                 mode: Optional[Union[str, ComparisonMode]] = None):
        if any_true(eps < 0):
            raise DomainError(f"tolerance must be non-negative, got {eps!r}")
        mode = DEFAULT_COMPARISON_MODE if mode is None else resolve_comparison_mode(mode)
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "eps", eps)
        object.__setattr__(self, "mode", mode)

    def __setattr__(self, name, value):
        raise AttributeError("ToleranceValue is immutable")

    def __delattr__(self, name):
        raise AttributeError("ToleranceValue is immutable")

    def _coerce(self, other) -> "ToleranceValue[E]":
        if isinstance(other, ToleranceValue):
            return other
        return ToleranceValue(other, zeros_like(self.eps), self.mode)

    def __float__(self):
        return float(self.value)

    def __eq__(self, other):
        return equivalent(self, self._coerce(other))

    def __ne__(self, other):
        return distinguishable(self, self._coerce(other))

    def __lt__(self, other):
        return less(self, self._coerce(other))

    def __gt__(self, other):
        return greater(self, self._coerce(other))

    def __le__(self, other):
        return less_equal(self, self._coerce(other))

    def __ge__(self, other):
        return greater_equal(self, self._coerce(other))

    def __repr__(self):
        return f"ToleranceValue(value={self.value!r}, eps={self.eps!r})"


def distance(a, b):
    """
    Distance between two values.

    For plain values this is ``abs(a - b)``. For two tolerance values the
    distance is itself a tolerance value whose radius is the larger of the two
    radii, so distances can in turn be compared approximately.
    """
    if isinstance(a, ToleranceValue) and isinstance(b, ToleranceValue):
        return ToleranceValue(distance(a.value, b.value), _radius(a, b), a.mode)
    return abs(a - b)


def _radius(a: ToleranceValue, b: ToleranceValue):
    return maximum(a.eps, b.eps)


def equivalent(a: ToleranceValue, b: ToleranceValue) -> bool:
    """``a == b``: the values lie within the larger of the two radii."""
    return distance(a.value, b.value) <= _radius(a, b)


def distinguishable(a: ToleranceValue, b: ToleranceValue) -> bool:
    """``a != b``: the complement of :func:`equivalent`."""
    return _radius(a, b) < distance(a.value, b.value)


def less(a: ToleranceValue, b: ToleranceValue) -> bool:
    return logical_and(distinguishable(a, b), a.value < b.value)


def greater(a: ToleranceValue, b: ToleranceValue) -> bool:
    return logical_and(distinguishable(a, b), b.value < a.value)


def less_equal(a: ToleranceValue, b: ToleranceValue) -> bool:
    return logical_or(equivalent(a, b), a.value < b.value)


def greater_equal(a: ToleranceValue, b: ToleranceValue,
                  mode: Optional[Union[str, ComparisonMode]] = None) -> bool:
    """
    ``a >= b``.

    In LITERAL mode this is ``a == b and b.value > a.value``, which is neither
    the negation of ``<`` nor the mirror of ``<=``. CORRECTED mode evaluates
    ``a == b or a > b``.

    Args:
        a: Left operand
        b: Right operand
        mode: Overrides ``a.mode`` when given
    """
    mode = a.mode if mode is None else resolve_comparison_mode(mode)
    if mode is ComparisonMode.LITERAL:
        return logical_and(equivalent(a, b), b.value > a.value)
    return logical_or(equivalent(a, b), greater(a, b))


def compare(a: ToleranceValue, b: ToleranceValue) -> Ordering:
    """
    Tri-state comparison: EQUIVALENT when indistinguishable, else by value.

    Defined for scalar tolerance values only; the relational predicates
    handle arrays and tensors element-wise.

    Raises:
        DomainError: If either operand holds an array or tensor
    """
    if any(is_elementwise(x) for x in (a.value, a.eps, b.value, b.eps)):
        raise DomainError("compare is defined for scalar tolerance values only")
    if equivalent(a, b):
        return Ordering.EQUIVALENT
    if a.value < b.value:
        return Ordering.LESS
    return Ordering.GREATER
