"""
Test suite for approxkit.

Test Structure:
- test_core.py: CompensatedSum and OnlineMoments
- test_epsilon.py: ToleranceValue comparisons
- test_lg.py: LogDomainNumber arithmetic and range checks
- test_algorithms.py: High-level reductions
- test_config.py: Environment-driven defaults
- conftest.py: Shared fixtures and configuration

Usage:
    # Run all tests
    pytest

    # Run tests with coverage
    pytest --cov=approxkit

    # Run only fast tests
    pytest -m "not slow"
"""
