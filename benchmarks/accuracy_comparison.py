#!/usr/bin/env python3
"""
Accuracy comparison benchmarks for exactfloat.

This script measures how often naive float arithmetic, exactfloat and
decimal.Decimal return the correctly rounded result for random decimal
operands, across operations and numbers of decimal places.
"""

import numpy as np
import time
import pandas as pd
from decimal import Decimal
from fractions import Fraction
from typing import Callable, Dict, List, Tuple
import sys
sys.path.append('..')

from exactfloat import operation


NAIVE_OPS = {
    'add': lambda a, b: a + b,
    'subtract': lambda a, b: a - b,
    'multiply': lambda a, b: a * b,
    'divide': lambda a, b: a / b,
}

DECIMAL_OPS = {
    'add': lambda a, b: float(Decimal(repr(a)) + Decimal(repr(b))),
    'subtract': lambda a, b: float(Decimal(repr(a)) - Decimal(repr(b))),
    'multiply': lambda a, b: float(Decimal(repr(a)) * Decimal(repr(b))),
    'divide': lambda a, b: float(Decimal(repr(a)) / Decimal(repr(b))),
}


class AccuracyBenchmark:
    """
    Accuracy benchmark suite for decimal arithmetic on floats.
    """

    def __init__(self, pairs_per_case: int = 2000):
        self.pairs_per_case = pairs_per_case
        self.algorithms: Dict[str, Callable[[float, float, str], float]] = {
            'naive': lambda a, b, op: NAIVE_OPS[op](a, b),
            'exactfloat': operation,
            'decimal': lambda a, b, op: DECIMAL_OPS[op](a, b),
        }

        self.results = []

    def generate_test_case(self, places: int, size: int) -> List[Tuple[float, float]]:
        """
        Generate random non-zero decimal operand pairs.

        Args:
            places: Number of digits after the decimal point
            size: Number of pairs

        Returns:
            List of (a, b) pairs
        """
        rng = np.random.RandomState(42 + places)  # Reproducible results
        significands = rng.randint(1, 10**7, size=(size, 2))
        signs = rng.choice([-1, 1], size=(size, 2))

        return [
            (int(s1 * n1) / 10**places, int(s2 * n2) / 10**places)
            for (n1, n2), (s1, s2) in zip(significands, signs)
        ]

    @staticmethod
    def exact_result(a: float, b: float, op: str) -> float:
        """Exact result rounded once to the nearest float."""
        x, y = Fraction(repr(a)), Fraction(repr(b))
        return float({
            'add': x + y,
            'subtract': x - y,
            'multiply': x * y,
            'divide': x / y,
        }[op])

    def run_single_benchmark(self, op: str, places: int,
                             pairs: List[Tuple[float, float]]) -> Dict:
        """
        Run every algorithm over one set of pairs.

        Args:
            op: Operation name
            places: Decimal places of the operands
            pairs: Operand pairs

        Returns:
            Dictionary with benchmark results
        """
        expected = [self.exact_result(a, b, op) for a, b in pairs]
        results = {'op': op, 'places': places, 'size': len(pairs)}

        for alg_name, algorithm in self.algorithms.items():
            start_time = time.perf_counter()
            computed = [algorithm(a, b, op) for a, b in pairs]
            elapsed_time = time.perf_counter() - start_time

            mismatches = sum(1 for c, e in zip(computed, expected) if c != e)

            results[f'{alg_name}_correct_rate'] = 1.0 - mismatches / len(pairs)
            results[f'{alg_name}_time'] = elapsed_time

        return results

    def run_comprehensive_benchmark(self) -> pd.DataFrame:
        """
        Run the benchmark across all operations and decimal places.

        Returns:
            DataFrame with all benchmark results
        """
        ops = list(NAIVE_OPS)
        places_range = range(1, 8)

        print("Running accuracy benchmark...")
        print(f"Operations: {ops}")
        print(f"Decimal places: {list(places_range)}")
        print(f"Pairs per case: {self.pairs_per_case}")
        print()

        for places in places_range:
            pairs = self.generate_test_case(places, self.pairs_per_case)
            for op in ops:
                self.results.append(self.run_single_benchmark(op, places, pairs))

        return pd.DataFrame(self.results)

    def analyze_results(self, df: pd.DataFrame) -> None:
        """
        Display benchmark results.

        Args:
            df: DataFrame with benchmark results
        """
        print("\n" + "=" * 70)
        print("ACCURACY BENCHMARK ANALYSIS")
        print("=" * 70)

        print("\nCORRECTLY ROUNDED RESULTS BY OPERATION:")
        print("-" * 55)
        print(f"{'Operation':<12} " + " ".join(f"{alg:<14}" for alg in self.algorithms))
        print("-" * 55)

        for op, op_df in df.groupby('op'):
            rates = [op_df[f'{alg}_correct_rate'].mean() for alg in self.algorithms]
            print(f"{op:<12} " + " ".join(f"{rate:<14.2%}" for rate in rates))

        print("\nPERFORMANCE COMPARISON:")
        print("-" * 45)
        print(f"{'Algorithm':<12} {'Mean Time (ms)':<15} {'Relative Speed':<15}")
        print("-" * 45)

        naive_time = df['naive_time'].mean()
        for alg in self.algorithms:
            mean_time = df[f'{alg}_time'].mean()
            print(f"{alg:<12} {mean_time * 1000:<15.3f} {naive_time / mean_time:<15.2f}x")

    def plot_results(self, df: pd.DataFrame, save_plots: bool = True) -> None:
        """
        Plot correctness rate against decimal places.

        Args:
            df: DataFrame with benchmark results
            save_plots: Whether to save plots to files
        """
        import matplotlib.pyplot as plt

        plt.figure(figsize=(10, 6))
        for alg in self.algorithms:
            rates = df.groupby('places')[f'{alg}_correct_rate'].mean()
            plt.plot(rates.index, rates.values, 'o-', label=alg, markersize=6)

        plt.xlabel('Decimal Places')
        plt.ylabel('Correctly Rounded Results')
        plt.title('Accuracy vs Decimal Places')
        plt.legend()
        plt.grid(True, alpha=0.3)

        if save_plots:
            plt.savefig('accuracy_vs_places.png', dpi=300, bbox_inches='tight')
        plt.show()


def main():
    """Run the complete accuracy benchmark suite."""
    print("EXACTFLOAT - ACCURACY BENCHMARK")
    print("=" * 60)

    benchmark = AccuracyBenchmark()
    results_df = benchmark.run_comprehensive_benchmark()

    results_df.to_csv('accuracy_benchmark_results.csv', index=False)
    print("\nResults saved to accuracy_benchmark_results.csv")

    benchmark.analyze_results(results_df)

    try:
        benchmark.plot_results(results_df)
    except ImportError:
        print("\nMatplotlib not available, skipping plots")

    print("\n" + "=" * 60)
    print("Accuracy benchmark completed!")
    print("=" * 60)


if __name__ == "__main__":
    main()
