"""
Core exact decimal arithmetic.

This module contains the scale extraction that turns a binary floating-point
value into an integer significand and a power-of-ten scale, and the aligned
integer operation that performs add, subtract, multiply and divide on those
pairs before rescaling back to a float.
"""

import decimal
import enum
import logging
import math
import numbers
from typing import Any, NamedTuple, Optional, Union

import numpy as np
import torch

logger = logging.getLogger(__name__)

Number = Union[int, float]


class ExactFloatError(ValueError):
    """Base class for errors raised by exactfloat."""


class InvalidOperandError(ExactFloatError):
    """Raised in strict mode when an operand is not a usable number."""


class InvalidOperationError(ExactFloatError):
    """Raised when the requested operation kind is not supported."""


class Operation(enum.Enum):
    """The four supported arithmetic operations."""

    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"

    @classmethod
    def coerce(cls, op: Union["Operation", str]) -> "Operation":
        """
        Resolve an operation member from a member or its string value.

        Args:
            op: An Operation or one of 'add', 'subtract', 'multiply', 'divide'

        Returns:
            The matching Operation member

        Raises:
            InvalidOperationError: If op names no supported operation
        """
        if isinstance(op, cls):
            return op
        try:
            return cls(op)
        except ValueError:
            raise InvalidOperationError(f"Unknown operation: {op!r}") from None


class ScaledInteger(NamedTuple):
    """
    A decimal value held as ``significand / scale``.

    Attributes:
        significand: Integer numerator (a float only for infinite inputs)
        scale: Power of ten the original value was magnified by, always >= 1
    """

    significand: Number
    scale: int = 1

    def to_float(self) -> float:
        """Rescale back to a float."""
        return _true_divide(self.significand, self.scale)


def _tensor_to_numpy(tensor: torch.Tensor) -> np.ndarray:
    """Move a tensor to host memory as a numpy array of the same precision."""
    tensor = tensor.detach().cpu()
    if tensor.dtype == torch.bfloat16:
        # numpy has no bfloat16
        tensor = tensor.float()
    return tensor.numpy()


def _normalize_operand(value: Any) -> Optional[Number]:
    """
    Reduce an operand to a plain int or a floating scalar.

    Numpy floating scalars are returned as-is so their own precision decides
    the decimal digits used later. Returns None for anything that is not a
    usable number: bools, strings, containers, NaN and multi-element arrays.
    Decimals are accepted through their nearest float.
    """
    if isinstance(value, torch.Tensor):
        if value.numel() != 1 or value.dtype == torch.bool or value.is_complex():
            return None
        value = _tensor_to_numpy(value).reshape(-1)[0]
    elif isinstance(value, np.ndarray):
        if value.ndim != 0:
            return None
        value = value[()]

    if isinstance(value, (bool, np.bool_)):
        return None
    if isinstance(value, (int, np.integer)):
        return int(value)
    if isinstance(value, np.floating):
        return None if np.isnan(value) else value
    if isinstance(value, decimal.Decimal):
        # Read through the float it rounds to
        return None if value.is_nan() else float(value)
    if isinstance(value, numbers.Real):
        value = float(value)
        return None if math.isnan(value) else value
    return None


def to_scaled_integer(value: Any, strict: bool = False) -> ScaledInteger:
    """
    Convert a number into an integer significand and a power-of-ten scale.

    3.14 becomes ScaledInteger(314, 100). Whole numbers are returned unscaled.
    Fractional values are rendered in positional notation using the shortest
    digits that round-trip to the same float, so 1e-07 is read as 0.0000001
    rather than through its exponent.

    Args:
        value: Number to convert
        strict: Raise on invalid operands instead of treating them as 0

    Returns:
        ScaledInteger whose significand / scale equals the input's decimal form

    Raises:
        InvalidOperandError: If strict is set and value is not a usable number
    """
    number = _normalize_operand(value)
    if number is None:
        if strict:
            raise InvalidOperandError(f"Operand is not a number: {value!r}")
        logger.debug("Treating invalid operand %r as 0", value)
        return ScaledInteger(0, 1)

    if isinstance(number, int):
        return ScaledInteger(number, 1)

    if math.isinf(number):
        return ScaledInteger(float(number), 1)

    if math.floor(number) == number:
        return ScaledInteger(int(number), 1)

    digits = np.format_float_positional(abs(number), unique=True, trim="-")
    whole, _, fraction = digits.partition(".")
    significand = int(whole + fraction)
    if number < 0:
        significand = -significand

    return ScaledInteger(significand, 10 ** len(fraction))


def _true_divide(numerator: Number, denominator: Number) -> float:
    """
    Divide with IEEE-754 outcomes instead of Python exceptions.

    Integer quotients are correctly rounded. Division by zero gives +-inf
    (or nan for 0/0) and quotients beyond the float range give +-inf.
    """
    if denominator == 0:
        if numerator == 0 or (isinstance(numerator, float) and math.isnan(numerator)):
            return math.nan
        return math.copysign(math.inf, numerator)

    try:
        return numerator / denominator
    except OverflowError:
        if isinstance(numerator, float) and math.isnan(numerator):
            return math.nan
        negative = (numerator < 0) != (denominator < 0)
        return -math.inf if negative else math.inf


def _combine_nonfinite(x: float, y: float, op: Operation) -> float:
    # inf and nan significands cannot be aligned with integer scales
    if op is Operation.ADD:
        return x + y
    if op is Operation.SUBTRACT:
        return x - y
    if op is Operation.MULTIPLY:
        return x * y
    return _true_divide(x, y)


def combine(left: ScaledInteger, right: ScaledInteger,
            op: Union[Operation, str]) -> float:
    """
    Apply an operation to two scaled integers and rescale the result.

    Args:
        left: First operand
        right: Second operand
        op: Operation to perform

    Returns:
        Float result of ``left op right``
    """
    op = Operation.coerce(op)
    n1, t1 = left
    n2, t2 = right

    if isinstance(n1, float) or isinstance(n2, float):
        return _combine_nonfinite(n1 / t1, n2 / t2, op)

    if op is Operation.ADD or op is Operation.SUBTRACT:
        # Scales are powers of ten, so the ratio is an exact integer
        if t1 > t2:
            n2 = n2 * (t1 // t2)
        elif t2 > t1:
            n1 = n1 * (t2 // t1)
        result = n1 + n2 if op is Operation.ADD else n1 - n2
        return _true_divide(result, max(t1, t2))

    if op is Operation.MULTIPLY:
        return _true_divide(n1 * n2, t1 * t2)

    # (n1 / n2) * (t2 / t1) as one rounding
    return _true_divide(n1 * t2, n2 * t1)


def operation(a: Any, b: Any, op: Union[Operation, str],
              strict: bool = False) -> float:
    """
    Exact decimal arithmetic on two operands.

    Both operands are magnified to integers, the operation runs in the
    integer domain, and the result is divided back down once. Division by
    zero is not trapped and follows IEEE semantics.

    Args:
        a: First operand
        b: Second operand
        op: Operation or its name ('add', 'subtract', 'multiply', 'divide')
        strict: Raise on invalid operands instead of treating them as 0

    Returns:
        Float result free of binary representation error for decimal inputs

    Raises:
        InvalidOperationError: If op is not a supported operation
        InvalidOperandError: If strict is set and an operand is not a number
    """
    op = Operation.coerce(op)
    return combine(to_scaled_integer(a, strict), to_scaled_integer(b, strict), op)
