#!/usr/bin/env python3
"""
Basic usage examples for exactfloat.

This script demonstrates where plain binary floating-point arithmetic leaves
trailing-digit artifacts in decimal results and how exactfloat avoids them.
"""

import numpy as np
import torch

# Import the exactfloat library
import sys
sys.path.append('..')

from exactfloat import (
    add,
    subtract,
    multiply,
    divide,
    fold,
    array_operation,
    float_obj,
    to_scaled_integer,
    InvalidOperandError,
)


def demonstrate_float_artifacts():
    """Show the artifacts of naive float arithmetic."""
    print("=" * 60)
    print("DEMONSTRATION: Binary Floating-Point Artifacts")
    print("=" * 60)

    cases = [
        ("0.1 + 0.2", 0.1 + 0.2, add(0.1, 0.2)),
        ("0.2 + 0.4", 0.2 + 0.4, add(0.2, 0.4)),
        ("0.3 - 0.1", 0.3 - 0.1, subtract(0.3, 0.1)),
        ("19.9 * 100", 19.9 * 100, multiply(19.9, 100)),
        ("0.3 / 0.1", 0.3 / 0.1, divide(0.3, 0.1)),
    ]

    print(f"{'Expression':<15} {'Naive float':<25} {'exactfloat':<15}")
    print("-" * 55)

    for expression, naive, exact in cases:
        print(f"{expression:<15} {naive!r:<25} {exact!r:<15}")

    print()


def demonstrate_scale_extraction():
    """Show how values are magnified to integers."""
    print("=" * 60)
    print("DEMONSTRATION: Scale Extraction")
    print("=" * 60)

    print(f"{'Value':<15} {'Significand':<15} {'Scale':<15}")
    print("-" * 45)

    for value in [3.14, -0.001, 19.9, 42, 1e-7]:
        significand, scale = to_scaled_integer(value)
        print(f"{value!r:<15} {significand:<15} {scale:<15}")

    print()


def demonstrate_chaining():
    """Show the chained builder."""
    print("=" * 60)
    print("DEMONSTRATION: Chained Arithmetic")
    print("=" * 60)

    chain = float_obj(0.1, 0.2)
    print(f"float_obj(0.1, 0.2).add()          = {chain.add()!r}")

    chain(0.3)
    print(f"after chain(0.3), values           = {chain.values}")
    print(f"add()                              = {chain.add()!r}")
    print(f"multiply()                         = {chain.multiply()!r}")
    print(f"float_obj(19.9).multiply(100)      = {float_obj(19.9).multiply(100)!r}")
    print(f"float_obj(1).multiply(2).divide(3) = {float_obj(1).multiply(2).divide(3)!r}")
    print()


def demonstrate_arrays():
    """Show folds and element-wise operations over arrays and tensors."""
    print("=" * 60)
    print("DEMONSTRATION: Arrays and Tensors")
    print("=" * 60)

    prices = np.array([19.9, 0.7, 4.35, 12.1])
    quantities = np.array([3, 10, 2, 7])

    naive_totals = prices * quantities
    exact_totals = array_operation(prices, quantities, "multiply")

    print(f"Naive line totals: {naive_totals.tolist()}")
    print(f"Exact line totals: {exact_totals.tolist()}")
    print(f"Naive order total: {float(np.sum(naive_totals))!r}")
    print(f"Exact order total: {fold(exact_totals, 'add')!r}")
    print()

    tensor = torch.tensor([0.1, 0.2, 0.3], dtype=torch.float32)
    print(f"torch.sum(float32 tensor): {torch.sum(tensor).item()!r}")
    print(f"fold(float32 tensor):      {fold(tensor, 'add')!r}")
    print()


def demonstrate_operand_policy():
    """Show lenient and strict handling of invalid operands."""
    print("=" * 60)
    print("DEMONSTRATION: Invalid Operands")
    print("=" * 60)

    print(f"add(nan, 5)              = {add(float('nan'), 5)!r}")
    print(f"add('abc', 0.5)          = {add('abc', 0.5)!r}")

    try:
        add(float("nan"), 5, strict=True)
    except InvalidOperandError as e:
        print(f"add(nan, 5, strict=True) -> {type(e).__name__}: {e}")

    print(f"divide(1, 0)             = {divide(1, 0)!r}")
    print()


def main():
    """Run all demonstrations."""
    print("exactfloat - Basic Usage Examples")
    print("=" * 60)
    print()

    demonstrate_float_artifacts()
    demonstrate_scale_extraction()
    demonstrate_chaining()
    demonstrate_arrays()
    demonstrate_operand_policy()


if __name__ == "__main__":
    main()
