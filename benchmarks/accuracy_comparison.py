#!/usr/bin/env python3
"""
Accuracy comparison benchmarks for approxkit summation.

This script measures the error of naive, compensated, tree and partitioned
summation against a correctly rounded reference across challenging inputs
and sizes.
"""

import logging
import math
import time
from typing import Callable, Dict, List, Tuple

import numpy as np

import sys
sys.path.append('..')

from approxkit import (
    kbn_sum,
    naive_sum,
    parallel_kbn_sum,
    tree_reduce_kbn,
)

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger("accuracy_comparison")


class AccuracyBenchmark:
    """
    Accuracy benchmark suite for summation algorithms.
    """

    def __init__(self):
        self.algorithms: Dict[str, Callable[[np.ndarray], float]] = {
            'naive': naive_sum,
            'kbn': kbn_sum,
            'tree': lambda x: tree_reduce_kbn(x)[0],
            'parallel': lambda x: parallel_kbn_sum(x)[0],
        }

        self.results: List[Dict] = []

    def generate_test_case(self, case_type: str, size: int, dtype=np.float32) -> Tuple[np.ndarray, float]:
        """
        Generate test cases together with their correctly rounded sum.

        Args:
            case_type: Type of test case
            size: Array size
            dtype: Data type

        Returns:
            Tuple of (test_array, exact_result)
        """
        rng = np.random.default_rng(42)

        if case_type == 'alternating_large':
            data = np.zeros(size, dtype=dtype)
            data[::2] = 1e8
            data[1::2] = 1.0
        elif case_type == 'harmonic_series':
            data = (1.0 / np.arange(1, size + 1, dtype=np.float64)).astype(dtype)
        elif case_type == 'cancellation_triples':
            data = np.empty(size - size % 3, dtype=dtype)
            big = 1e16 if dtype == np.float64 else 1e8
            data[0::3] = big
            data[1::3] = rng.normal(0, 1, len(data) // 3)
            data[2::3] = -big
        elif case_type == 'ill_conditioned':
            exponents = rng.uniform(-10, 10, size)
            signs = rng.choice([-1, 1], size)
            data = (signs * 10.0 ** exponents).astype(dtype)
        elif case_type == 'random_normal':
            data = rng.normal(0, 1, size).astype(dtype)
        else:
            raise ValueError(f"Unknown test case type: {case_type}")

        exact = math.fsum(data.astype(np.float64).tolist())
        return data, exact

    def run_single_benchmark(self, test_name: str, data: np.ndarray, exact: float) -> Dict:
        """
        Run every algorithm on a single test case.

        Returns:
            Dictionary with per-algorithm error and timing
        """
        results = {
            'test_name': test_name,
            'size': len(data),
            'exact_result': exact,
        }

        for alg_name, algorithm in self.algorithms.items():
            start_time = time.perf_counter()
            result = algorithm(data)
            elapsed_time = time.perf_counter() - start_time

            absolute_error = abs(result - exact)
            results[f'{alg_name}_abs_error'] = absolute_error
            results[f'{alg_name}_rel_error'] = absolute_error / abs(exact) if exact else absolute_error
            results[f'{alg_name}_time'] = elapsed_time

        return results

    def run_comprehensive_benchmark(self) -> List[Dict]:
        test_cases = [
            'alternating_large',
            'harmonic_series',
            'cancellation_triples',
            'ill_conditioned',
            'random_normal',
        ]
        sizes = [99, 999, 9999]
        dtypes = [np.float32, np.float64]

        total_tests = len(test_cases) * len(sizes) * len(dtypes)
        logger.info("Running %d accuracy benchmarks", total_tests)

        for case_type in test_cases:
            for size in sizes:
                for dtype in dtypes:
                    test_name = f"{case_type}_{dtype.__name__}_{size}"
                    data, exact = self.generate_test_case(case_type, size, dtype)
                    self.results.append(self.run_single_benchmark(test_name, data, exact))

        return self.results

    def analyze_results(self) -> None:
        header = f"{'test':<36}" + "".join(f"{name:>14}" for name in self.algorithms)
        logger.info(header)
        logger.info("-" * len(header))
        for row in self.results:
            errors = "".join(f"{row[f'{name}_rel_error']:>14.2e}" for name in self.algorithms)
            logger.info(f"{row['test_name']:<36}{errors}")


def main():
    """Run the accuracy benchmark suite."""
    benchmark = AccuracyBenchmark()
    benchmark.run_comprehensive_benchmark()
    benchmark.analyze_results()


if __name__ == "__main__":
    main()
