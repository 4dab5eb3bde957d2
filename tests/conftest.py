#!/usr/bin/env python3
"""
Pytest configuration and fixtures for exactfloat tests.

This file contains shared test fixtures, configuration, and utilities
used across the test suite.
"""

import pytest
import numpy as np
from fractions import Fraction
from typing import List, Tuple
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))


@pytest.fixture
def classic_artifacts():
    """Decimal inputs whose naive float results carry trailing-digit artifacts."""
    return [
        # (a, b, op, exact result, naive float result)
        (0.1, 0.2, "add", 0.3, 0.1 + 0.2),
        (0.2, 0.4, "add", 0.6, 0.2 + 0.4),
        (0.7, 0.1, "add", 0.8, 0.7 + 0.1),
        (0.3, 0.1, "subtract", 0.2, 0.3 - 0.1),
        (19.9, 100, "multiply", 1990.0, 19.9 * 100),
        (1.1, 1.1, "multiply", 1.21, 1.1 * 1.1),
        (0.3, 0.1, "divide", 3.0, 0.3 / 0.1),
    ]


@pytest.fixture
def random_decimal_pairs() -> List[Tuple[float, float]]:
    """Random decimal pairs with at most 15 significant digits."""
    rng = np.random.RandomState(42)
    pairs = []

    for _ in range(500):
        pair = []
        for _ in range(2):
            significand = int(rng.randint(-10**9, 10**9))
            places = int(rng.randint(0, 7))
            pair.append(significand / 10**places)
        pairs.append(tuple(pair))

    return pairs


@pytest.fixture(params=[np.float32, np.float64])
def dtype(request):
    """Parameterized fixture for different floating-point types."""
    return request.param


class ExactReference:
    """Reference results computed with rational arithmetic."""

    @staticmethod
    def decimal_of(value: float) -> Fraction:
        """The decimal a float prints as, held exactly."""
        return Fraction(repr(float(value)))

    @classmethod
    def compute(cls, a: float, b: float, op: str) -> float:
        """Exact result of ``a op b`` rounded once to the nearest float."""
        x = cls.decimal_of(a)
        y = cls.decimal_of(b)

        if op == "add":
            return float(x + y)
        elif op == "subtract":
            return float(x - y)
        elif op == "multiply":
            return float(x * y)
        elif op == "divide":
            return float(x / y)
        raise ValueError(f"Unknown op: {op}")


@pytest.fixture
def exact_reference():
    """Fixture providing exact reference results."""
    return ExactReference()


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "torch: marks tests that exercise torch tensor operands"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers automatically."""
    for item in items:
        if "random" in item.name or "stress" in item.name:
            item.add_marker(pytest.mark.slow)

        if "tensor" in item.name or "torch" in item.name:
            item.add_marker(pytest.mark.torch)
