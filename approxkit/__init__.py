"""
approxkit

Error-aware reduction and comparison primitives for approximate scalar types.

This library provides:
- Kahan-Babuska-Neumaier compensated summation
- Welford online mean/variance over compensated accumulators
- Tolerance-aware (epsilon) comparison of approximate values
- Log-domain numbers for products with extended dynamic range
- Partitioned and tree reductions over lists, NumPy arrays and torch tensors
"""

import logging

from .core import CompensatedSum, OnlineMoments, kbn_welford
from .epsilon import ToleranceValue, Ordering, compare, distance
from .config import ComparisonMode
from .lg import LogDomainNumber, RangeStatus, would_overflow, would_underflow
from .errors import (
    ApproxkitError,
    DomainError,
    EmptyAccumulatorError,
    InsufficientSamplesError,
    UnsupportedOperation,
    ConfigurationError,
)
from .algorithms import (
    naive_sum,
    kbn_sum,
    tree_reduce_kbn,
    parallel_kbn_sum,
    welford_moments,
    log_product,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"
__author__ = "approxkit contributors"

__all__ = [
    "CompensatedSum",
    "OnlineMoments",
    "kbn_welford",
    "ToleranceValue",
    "Ordering",
    "ComparisonMode",
    "compare",
    "distance",
    "LogDomainNumber",
    "RangeStatus",
    "would_overflow",
    "would_underflow",
    "ApproxkitError",
    "DomainError",
    "EmptyAccumulatorError",
    "InsufficientSamplesError",
    "UnsupportedOperation",
    "ConfigurationError",
    "naive_sum",
    "kbn_sum",
    "tree_reduce_kbn",
    "parallel_kbn_sum",
    "welford_moments",
    "log_product",
]
