"""
High-level exact arithmetic.

This module provides the binary shorthands, left folds over sequences,
element-wise array operations and the chained arithmetic builder built on
the aligned integer operation in exactfloat.core.
"""

import math
from typing import Any, Iterator, List, Sequence, Tuple, Union

import numpy as np
import torch

from .core import (
    Operation,
    ScaledInteger,
    _tensor_to_numpy,
    combine,
    operation,
    to_scaled_integer,
)

Values = Union[Sequence[Any], np.ndarray, torch.Tensor]


def add(a: Any, b: Any, strict: bool = False) -> float:
    """Exact decimal a + b."""
    return operation(a, b, Operation.ADD, strict)


def subtract(a: Any, b: Any, strict: bool = False) -> float:
    """Exact decimal a - b."""
    return operation(a, b, Operation.SUBTRACT, strict)


def multiply(a: Any, b: Any, strict: bool = False) -> float:
    """Exact decimal a * b."""
    return operation(a, b, Operation.MULTIPLY, strict)


def divide(a: Any, b: Any, strict: bool = False) -> float:
    """Exact decimal a / b. Division by zero gives inf or nan."""
    return operation(a, b, Operation.DIVIDE, strict)


def _as_list(values: Values) -> List[Any]:
    if isinstance(values, torch.Tensor):
        values = _tensor_to_numpy(values)
    if isinstance(values, np.ndarray):
        # Keep numpy scalars so float32 inputs use float32 digits
        return list(values.flatten())
    return list(values)


def _as_array(values: Any) -> np.ndarray:
    if isinstance(values, torch.Tensor):
        return _tensor_to_numpy(values)
    array = np.asarray(values)
    if array.dtype.kind not in "biuf":
        array = np.asarray(values, dtype=object)
    return array


def _rescale(result: float) -> ScaledInteger:
    # Intermediate nan is a result, not an invalid operand
    if math.isnan(result):
        return ScaledInteger(result, 1)
    return to_scaled_integer(result)


def fold(values: Values, op: Union[Operation, str], strict: bool = False) -> float:
    """
    Left-fold an operation across a sequence of operands.

    ``fold([a, b, c], 'add')`` computes ``add(add(a, b), c)``.

    Args:
        values: List, tuple, numpy array or torch tensor of operands
        op: Operation or its name
        strict: Raise on invalid operands instead of treating them as 0

    Returns:
        Folded result, 0.0 for empty input
    """
    op = Operation.coerce(op)
    values = _as_list(values)

    if len(values) == 0:
        return 0.0

    return _fold_from(to_scaled_integer(values[0], strict), values[1:], op, strict)


def _fold_from(accumulator: ScaledInteger, values: List[Any],
               op: Operation, strict: bool) -> float:
    result = accumulator.to_float()

    for value in values:
        result = combine(accumulator, to_scaled_integer(value, strict), op)
        accumulator = _rescale(result)

    return result


def array_operation(a: Any, b: Any, op: Union[Operation, str],
                    strict: bool = False) -> np.ndarray:
    """
    Element-wise exact operation over two broadcastable array-likes.

    Args:
        a: First operand array, list, tensor or scalar
        b: Second operand array, list, tensor or scalar
        op: Operation or its name
        strict: Raise on invalid operands instead of treating them as 0

    Returns:
        float64 array with the broadcast shape of a and b
    """
    op = Operation.coerce(op)
    left, right = np.broadcast_arrays(_as_array(a), _as_array(b))

    result = np.empty(left.shape, dtype=np.float64)
    for index in np.ndindex(left.shape):
        result[index] = operation(left[index], right[index], op, strict)

    return result


class ChainResult(float):
    """
    Float result of a finalized chain.

    Behaves as a plain float and can continue the chain, so
    ``float_obj(1).multiply(2).multiply(3)`` evaluates to 6.
    """

    def __new__(cls, value: float, strict: bool = False):
        result = super().__new__(cls, value)
        result.strict = strict
        return result

    def _continue(self, op: Operation, values: Tuple[Any, ...]) -> "ChainResult":
        # self is a previous result, so a nan here propagates
        result = _fold_from(_rescale(float(self)), list(values), op, self.strict)
        return ChainResult(result, self.strict)

    def add(self, *values: Any) -> "ChainResult":
        return self._continue(Operation.ADD, values)

    def subtract(self, *values: Any) -> "ChainResult":
        return self._continue(Operation.SUBTRACT, values)

    def multiply(self, *values: Any) -> "ChainResult":
        return self._continue(Operation.MULTIPLY, values)

    def divide(self, *values: Any) -> "ChainResult":
        return self._continue(Operation.DIVIDE, values)


class FloatChain:
    """
    Chained arithmetic builder.

    Collects an ordered sequence of operands and left-folds one of the four
    operations across it on demand. Finalizing does not consume the sequence,
    so the same chain can be finalized repeatedly with different operations.
    Not thread-safe.

    Example:
        >>> chain = FloatChain(0.1, 0.2)
        >>> chain.add()
        0.3
        >>> chain(0.3).multiply()
        0.006
    """

    def __init__(self, *values: Any, strict: bool = False):
        """
        Initialize the chain.

        Args:
            *values: Initial operands
            strict: Raise on invalid operands instead of treating them as 0
        """
        self._values = list(values)
        self.strict = strict

    def __call__(self, *values: Any) -> "FloatChain":
        return self.append(*values)

    def append(self, *values: Any) -> "FloatChain":
        """Append operands and return this chain."""
        self._values.extend(values)
        return self

    @property
    def values(self) -> Tuple[Any, ...]:
        """Snapshot of the accumulated operands."""
        return tuple(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.values)

    def __repr__(self) -> str:
        args = ", ".join(repr(value) for value in self._values)
        if self.strict:
            args = f"{args}, strict=True" if args else "strict=True"
        return f"FloatChain({args})"

    def finalize(self, op: Union[Operation, str], *values: Any) -> ChainResult:
        """
        Fold the accumulated operands, followed by ``values``, with ``op``.

        The extra values are used for this result only and are not appended.

        Args:
            op: Operation or its name
            *values: Operands folded after the accumulated sequence

        Returns:
            ChainResult holding the folded value
        """
        op = Operation.coerce(op)
        return ChainResult(fold(self._values + list(values), op, self.strict), self.strict)

    def add(self, *values: Any) -> ChainResult:
        return self.finalize(Operation.ADD, *values)

    def subtract(self, *values: Any) -> ChainResult:
        return self.finalize(Operation.SUBTRACT, *values)

    def multiply(self, *values: Any) -> ChainResult:
        return self.finalize(Operation.MULTIPLY, *values)

    def divide(self, *values: Any) -> ChainResult:
        return self.finalize(Operation.DIVIDE, *values)


def float_obj(*values: Any, strict: bool = False) -> FloatChain:
    """
    Create a chain over the given operands.

    Example:
        >>> float_obj(0.1, 0.2).add()
        0.3
        >>> float_obj(19.9).multiply(100)
        1990.0
    """
    return FloatChain(*values, strict=strict)
