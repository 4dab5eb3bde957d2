"""
Test suite for exactfloat.

This package contains tests for all components of the exactfloat
library.

Test Structure:
- test_core.py: Tests for scale extraction and the aligned integer operation
- test_algorithms.py: Tests for folds, array operations and the chained builder
- conftest.py: Shared fixtures and configuration

Usage:
    # Run all tests
    pytest

    # Run specific test file
    pytest tests/test_core.py

    # Run tests with coverage
    pytest --cov=exactfloat

    # Run only fast tests
    pytest -m "not slow"
"""

__version__ = "1.0.0"
