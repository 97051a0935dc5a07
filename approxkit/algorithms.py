"""
High-level reductions.

This module applies the core accumulators to whole sequences: plain lists and
tuples, NumPy arrays and PyTorch tensors. Floating-point inputs are
accumulated in their own dtype, so a float32 array is summed in float32 with
float32 compensation; everything else is accumulated as float64.
"""

import logging
from typing import Iterable, List, Optional, Tuple, Union

import numpy as np
import torch

from . import config
from .core import CompensatedSum, OnlineMoments
from .lg import LogDomainNumber, product

logger = logging.getLogger(__name__)

Values = Union[List[float], Tuple[float, ...], np.ndarray, torch.Tensor, Iterable[float]]


def _as_array(values: Values) -> np.ndarray:
    if isinstance(values, torch.Tensor):
        values = values.detach().cpu().numpy()
    elif not isinstance(values, np.ndarray):
        values = np.asarray(list(values))

    values = values.ravel()
    if not np.issubdtype(values.dtype, np.floating):
        values = values.astype(np.float64)
    return values


def _zero(values: np.ndarray):
    return values.dtype.type(0)


def naive_sum(values: Values) -> float:
    """
    Left-to-right summation without compensation.

    Serves as the baseline whose error grows with the number of terms.
    """
    values = _as_array(values)
    total = _zero(values)
    for v in values:
        total = total + v
    return float(total)


def kbn_sum(values: Values) -> float:
    """
    Compute sum using Kahan-Babuska-Neumaier compensated summation.

    Args:
        values: Sequence of values to sum

    Returns:
        Compensated sum with reduced floating-point error
    """
    values = _as_array(values)
    return float(CompensatedSum(_zero(values)).reduce(values).value())


def tree_reduce_kbn(values: Values) -> Tuple[float, float]:
    """
    Pairwise (tree) reduction of compensated partial sums.

    Each leaf is a single-element accumulator; siblings are combined with
    :meth:`CompensatedSum.merge`, so the compensation of every subtree is
    carried up to the root.

    Args:
        values: Sequence of values to sum

    Returns:
        Tuple of (sum, compensation term of the root accumulator)
    """
    values = _as_array(values)
    if len(values) == 0:
        return 0.0, 0.0

    zero = _zero(values)

    def reduce_range(lo: int, hi: int) -> CompensatedSum:
        if hi - lo == 1:
            return CompensatedSum(zero).add(values[lo])
        mid = (lo + hi) // 2
        return reduce_range(lo, mid).merge(reduce_range(mid, hi))

    root = reduce_range(0, len(values))
    return float(root.value()), float(root.c)


def parallel_kbn_sum(values: Values,
                     num_partitions: Optional[int] = None) -> Tuple[float, float]:
    """
    Partitioned compensated summation.

    Splits the input into contiguous blocks, reduces each block with its own
    accumulator (no shared state, so blocks may be reduced concurrently) and
    merges the partial results left to right. The merge order is fixed, which
    makes the result bit-for-bit reproducible for a given partition count.

    Args:
        values: Sequence of values to sum
        num_partitions: Number of blocks (default: config.DEFAULT_PARTITIONS)

    Returns:
        Tuple of (sum, compensation term of the merged accumulator)
    """
    if num_partitions is None:
        num_partitions = config.DEFAULT_PARTITIONS
    if num_partitions < 1:
        raise ValueError(f"num_partitions must be positive, got {num_partitions}")

    values = _as_array(values)
    if len(values) == 0:
        return 0.0, 0.0

    zero = _zero(values)
    blocks = np.array_split(values, min(num_partitions, len(values)))
    logger.debug("Reducing %d values in %d partitions", len(values), len(blocks))

    # Would be parallel in a multi-worker setting
    partials = [CompensatedSum(zero).reduce(block) for block in blocks]

    total = CompensatedSum(zero)
    for partial in partials:
        total.merge(partial)
    return float(total.value()), float(total.c)


def welford_moments(values: Values) -> OnlineMoments:
    """
    Single-pass mean and variance with compensated moments.

    Args:
        values: Sequence of observations

    Returns:
        OnlineMoments accumulator holding every observation
    """
    values = _as_array(values)
    zero = _zero(values)
    return OnlineMoments(accumulator=lambda: CompensatedSum(zero)).extend(values)


def log_product(values: Values) -> LogDomainNumber:
    """
    Product of positive values computed in the log domain.

    Raises:
        DomainError: If any value is not positive
    """
    return product(_as_array(values))
