#!/usr/bin/env python3
"""
Basic usage examples for approxkit.

This script demonstrates compensated summation, online moments, tolerance
comparison and log-domain products.
"""

import logging
import math

import numpy as np

# Import the library
import sys
sys.path.append('..')

from approxkit import (
    CompensatedSum,
    LogDomainNumber,
    ToleranceValue,
    compare,
    kbn_sum,
    log_product,
    naive_sum,
    parallel_kbn_sum,
    welford_moments,
    would_overflow,
)

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger("basic_usage")


def demonstrate_precision_loss():
    """Show how standard summation loses precision."""
    logger.info("=" * 60)
    logger.info("DEMONSTRATION: Precision Loss in Standard Summation")
    logger.info("=" * 60)

    data = np.array([1e8, 1.0, -1e8], dtype=np.float32)

    logger.info("Test data: %s (float32)", data.tolist())
    logger.info("Expected result: 1.0")
    logger.info("Naive sum result:     %s", naive_sum(data))
    logger.info("KBN sum result:       %s", kbn_sum(data))

    values = [1.0, 1e100, 1.0, -1e100]
    logger.info("Test data: %s (float64)", values)
    logger.info("Naive sum result:     %s", naive_sum(values))
    logger.info("KBN sum result:       %s", kbn_sum(values))


def demonstrate_incremental_summation():
    """Accumulate values one at a time and merge partial sums."""
    logger.info("=" * 60)
    logger.info("DEMONSTRATION: Incremental and Partitioned Summation")
    logger.info("=" * 60)

    rng = np.random.default_rng(42)
    data = rng.normal(0, 1, 100000)

    acc = CompensatedSum()
    for value in data[:50000]:
        acc += value
    rest = CompensatedSum().reduce(data[50000:])
    acc.merge(rest)

    reference = math.fsum(data)
    partitioned, _ = parallel_kbn_sum(data, 8)

    logger.info("Exact (fsum):        %.17g", reference)
    logger.info("Incremental + merge: %.17g", acc.value())
    logger.info("8 partitions:        %.17g", partitioned)
    logger.info("Naive:               %.17g", naive_sum(data))


def demonstrate_statistical_functions():
    """Single-pass mean and variance."""
    logger.info("=" * 60)
    logger.info("DEMONSTRATION: Online Moments")
    logger.info("=" * 60)

    rng = np.random.default_rng(0)
    data = 1e9 + rng.normal(0, 1, 10000)

    moments = welford_moments(data)
    logger.info("Mean:            %.6f (numpy %.6f)", moments.mean(), np.mean(data))
    logger.info("Sample variance: %.6f (numpy %.6f)", moments.sample_variance(), np.var(data, ddof=1))


def demonstrate_tolerance_comparison():
    """Compare measurements with different error budgets."""
    logger.info("=" * 60)
    logger.info("DEMONSTRATION: Tolerance Comparison")
    logger.info("=" * 60)

    a = ToleranceValue(0.0, 1.0)
    b = ToleranceValue(1.0, 1.0)
    c = ToleranceValue(2.0, 1.0)

    logger.info("a == b: %s, b == c: %s, a == c: %s", a == b, b == c, a == c)
    logger.info("compare(a, c): %s", compare(a, c).name)


def demonstrate_log_domain():
    """Products beyond the range of float."""
    logger.info("=" * 60)
    logger.info("DEMONSTRATION: Log-Domain Products")
    logger.info("=" * 60)

    big = log_product([1e200, 1e200, 1e200])
    logger.info("ln(1e600) = %.6f, overflows float: %s", big.k, would_overflow(big))

    back = big / LogDomainNumber(1e300) / LogDomainNumber(1e250)
    logger.info("After dividing by 1e550: %.6g", back.value())


def main():
    """Run all demonstrations."""
    demonstrate_precision_loss()
    demonstrate_incremental_summation()
    demonstrate_statistical_functions()
    demonstrate_tolerance_comparison()
    demonstrate_log_domain()


if __name__ == "__main__":
    main()
