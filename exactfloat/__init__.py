"""
exactfloat

Exact decimal arithmetic for binary floating-point values.

Floats are magnified to integers by a power of ten, the operation runs on
exact integers, and the result is scaled back once, so 0.1 + 0.2 gives 0.3
and 19.9 * 100 gives 1990.

This library provides:
- Scale extraction from floats, numpy scalars and torch tensors
- Exact add, subtract, multiply and divide
- Left folds and element-wise array operations
- A chainable builder: float_obj(0.1, 0.2).add()
"""

from .core import (
    ExactFloatError,
    InvalidOperandError,
    InvalidOperationError,
    Operation,
    ScaledInteger,
    combine,
    operation,
    to_scaled_integer,
)
from .algorithms import (
    ChainResult,
    FloatChain,
    add,
    array_operation,
    divide,
    float_obj,
    fold,
    multiply,
    subtract,
)

__version__ = "1.0.0"
__author__ = "exactfloat Contributors"

__all__ = [
    "ExactFloatError",
    "InvalidOperandError",
    "InvalidOperationError",
    "Operation",
    "ScaledInteger",
    "combine",
    "operation",
    "to_scaled_integer",
    "ChainResult",
    "FloatChain",
    "add",
    "array_operation",
    "divide",
    "float_obj",
    "fold",
    "multiply",
    "subtract",
]
