#!/usr/bin/env python3
"""
Pytest configuration and fixtures for approxkit tests.

This file contains shared test fixtures, configuration, and utilities
used across the test suite.
"""

import math
import os
import sys

import numpy as np
import pytest
import torch

# Add parent directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))


@pytest.fixture(scope="session")
def random_seed():
    """Set random seed for reproducible tests."""
    seed = 42
    np.random.seed(seed)
    torch.manual_seed(seed)
    return seed


@pytest.fixture
def simple_data():
    """Simple test data for basic functionality tests."""
    return [1.0, 2.0, 3.0, 4.0, 5.0]


@pytest.fixture
def challenging_float32():
    """Float32 data whose middle term is lost by naive summation."""
    return np.array([1e8, 1.0, -1e8], dtype=np.float32)


@pytest.fixture
def large_mixed_data():
    """Large dataset with mixed magnitudes for stress testing."""
    rng = np.random.default_rng(42)
    n = 10000

    large_positive = rng.normal(1e6, 1e5, n // 4)
    large_negative = rng.normal(-1e6, 1e5, n // 4)
    small_positive = rng.normal(0, 1, n // 4)
    small_negative = rng.normal(0, 1, n // 4)

    data = np.concatenate([large_positive, large_negative, small_positive, small_negative])
    rng.shuffle(data)

    return data.astype(np.float32)


@pytest.fixture
def cancellation_triples():
    """
    Small values each wrapped between +1e16 and -1e16.

    Naive float64 summation rounds every small value to the spacing at 1e16
    (which is 2) before the large terms cancel.
    """
    rng = np.random.default_rng(7)
    small = rng.normal(0, 1, 1000)
    data = np.empty(3 * len(small), dtype=np.float64)
    data[0::3] = 1e16
    data[1::3] = small
    data[2::3] = -1e16
    return data


@pytest.fixture
def random_normal_data():
    """Random normal distribution data."""
    rng = np.random.default_rng(42)
    return rng.normal(10.0, 2.0, 1000)


@pytest.fixture(params=[np.float32, np.float64])
def dtype(request):
    """Parameterized fixture for different data types."""
    return request.param


class AccuracyChecker:
    """Utility class for checking numerical accuracy."""

    @staticmethod
    def relative_error(computed: float, reference: float) -> float:
        """Calculate relative error."""
        if reference == 0:
            return abs(computed)
        return abs(computed - reference) / abs(reference)

    @staticmethod
    def exact_sum(values) -> float:
        """Correctly rounded sum (every float32/float64 is exact in float64)."""
        return math.fsum(np.asarray(values, dtype=np.float64).tolist())

    @staticmethod
    def abs_sum(values) -> float:
        return math.fsum(np.abs(np.asarray(values, dtype=np.float64)).tolist())


@pytest.fixture
def accuracy_checker():
    """Fixture providing accuracy checking utilities."""
    return AccuracyChecker()


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "torch: marks tests exercising the torch backend"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers automatically."""
    for item in items:
        if "large" in item.name or "stress" in item.name:
            item.add_marker(pytest.mark.slow)

        if "tensor" in item.name or "torch" in item.name:
            item.add_marker(pytest.mark.torch)
