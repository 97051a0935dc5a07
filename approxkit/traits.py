"""
Capability contracts and backend dispatch.

Each numeric component is generic over a scalar type ``T``. The protocols below
name the operations a component needs from ``T``; they are used as ``TypeVar``
bounds so a static checker rejects types lacking a required capability.

The helper functions dispatch the few operations that differ between Python
scalars, NumPy values and PyTorch tensors (element-wise selection, logarithms,
type limits), so the components themselves stay backend-agnostic.
"""

import math
from typing import Any, NamedTuple, Protocol, TypeVar, runtime_checkable

import numpy as np
import torch


@runtime_checkable
class SupportsCompensatedSum(Protocol):
    """``+``, ``-``, ``<`` and an infinity-norm-like ``abs``."""

    def __add__(self, other: Any) -> Any: ...
    def __sub__(self, other: Any) -> Any: ...
    def __lt__(self, other: Any) -> Any: ...
    def __abs__(self) -> Any: ...


@runtime_checkable
class SupportsAccumulate(Protocol):
    """
    In-place accumulation, subtraction and division by a count.

    ``+=`` falls back to ``__add__`` for immutable scalars, so ``__add__`` is
    the required method; scalar conversion is performed by :func:`to_scalar`.
    """

    def __add__(self, other: Any) -> Any: ...
    def __sub__(self, other: Any) -> Any: ...
    def __truediv__(self, other: Any) -> Any: ...


@runtime_checkable
class SupportsTolerance(Protocol):
    """``-`` for distance, ``<`` for ordering and ``max``."""

    def __sub__(self, other: Any) -> Any: ...
    def __lt__(self, other: Any) -> Any: ...


@runtime_checkable
class SupportsLogDomain(Protocol):
    """Ordered, multiplicative and convertible to float; log/exp via dispatch."""

    def __lt__(self, other: Any) -> Any: ...
    def __mul__(self, other: Any) -> Any: ...
    def __neg__(self) -> Any: ...
    def __float__(self) -> float: ...


T = TypeVar("T", bound=SupportsCompensatedSum)
A = TypeVar("A", bound=SupportsAccumulate)
E = TypeVar("E", bound=SupportsTolerance)
L = TypeVar("L", bound=SupportsLogDomain)


class Limits(NamedTuple):
    """Largest finite value and smallest positive normal value of a type."""

    max: Any
    min: Any


def zeros_like(x):
    """Additive identity of the same kind (and dtype/device) as ``x``."""
    if isinstance(x, torch.Tensor):
        return torch.zeros_like(x)
    if isinstance(x, np.ndarray):
        return np.zeros_like(x)
    return type(x)(0)


def where(cond, a, b):
    """Element-wise ``a if cond else b``."""
    if isinstance(cond, torch.Tensor):
        return torch.where(cond, a, b)
    if isinstance(cond, np.ndarray):
        return np.where(cond, a, b)
    return a if cond else b


def any_true(cond) -> bool:
    """Reduce a (possibly element-wise) predicate with ``any``."""
    if isinstance(cond, torch.Tensor):
        return bool(cond.any())
    if isinstance(cond, np.ndarray):
        return bool(cond.any())
    return bool(cond)


def logical_and(a, b):
    """Element-wise ``a and b``."""
    if isinstance(a, torch.Tensor) or isinstance(b, torch.Tensor):
        return torch.logical_and(torch.as_tensor(a), torch.as_tensor(b))
    if isinstance(a, (np.ndarray, np.generic)) or isinstance(b, (np.ndarray, np.generic)):
        return np.logical_and(a, b)
    return bool(a) and bool(b)


def logical_or(a, b):
    """Element-wise ``a or b``."""
    if isinstance(a, torch.Tensor) or isinstance(b, torch.Tensor):
        return torch.logical_or(torch.as_tensor(a), torch.as_tensor(b))
    if isinstance(a, (np.ndarray, np.generic)) or isinstance(b, (np.ndarray, np.generic)):
        return np.logical_or(a, b)
    return bool(a) or bool(b)


def logical_not(a):
    if isinstance(a, torch.Tensor):
        return torch.logical_not(a)
    if isinstance(a, (np.ndarray, np.generic)):
        return np.logical_not(a)
    return not a


def is_elementwise(x) -> bool:
    """True for arrays and tensors with at least one dimension."""
    return isinstance(x, (torch.Tensor, np.ndarray)) and x.ndim > 0


def maximum(a, b):
    if isinstance(a, torch.Tensor) or isinstance(b, torch.Tensor):
        return torch.maximum(torch.as_tensor(a), torch.as_tensor(b))
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        return np.maximum(a, b)
    return max(a, b)


def to_scalar(acc):
    """Materialize an accumulator (anything exposing ``value()``) to its scalar."""
    value = getattr(acc, "value", None)
    if callable(value):
        return value()
    return acc


def log(x):
    if isinstance(x, torch.Tensor):
        return torch.log(x)
    if isinstance(x, (np.ndarray, np.generic)):
        return np.log(x)
    return math.log(x)


def exp(x):
    """
    Exponential of ``x``.

    Follows IEEE semantics for every backend: results beyond the largest
    finite value are ``inf`` rather than an ``OverflowError``.
    """
    if isinstance(x, torch.Tensor):
        return torch.exp(x)
    if isinstance(x, (np.ndarray, np.generic)):
        return np.exp(x)
    try:
        return math.exp(x)
    except OverflowError:
        return math.inf


def sqrt(x):
    if isinstance(x, torch.Tensor):
        return torch.sqrt(x)
    if isinstance(x, (np.ndarray, np.generic)):
        return np.sqrt(x)
    return math.sqrt(x)


def limits(like) -> Limits:
    """
    Representable range of the floating type of ``like``.

    Builtin floats and ints are treated as IEEE double precision.
    """
    if isinstance(like, torch.Tensor):
        info = torch.finfo(like.dtype)
        return Limits(
            torch.tensor(info.max, dtype=like.dtype, device=like.device),
            torch.tensor(info.tiny, dtype=like.dtype, device=like.device),
        )
    if isinstance(like, (np.ndarray, np.generic)):
        info = np.finfo(like.dtype)
        return Limits(info.max, info.tiny)
    info = np.finfo(np.float64)
    return Limits(float(info.max), float(info.tiny))
