#!/usr/bin/env python3
"""
Variance Reduction Comparison Demo.

Prices one European call with every estimator and compares each against
Black-Scholes, reporting standard errors and the variance reduction
relative to the plain estimator.

Usage:
    python examples/01_variance_reduction.py
    python examples/01_variance_reduction.py --paths 500000 --seed 7
"""

import argparse

from mc_option_pricing import (
    EuropeanMonteCarlo,
    OptionContract,
    OptionType,
    VarianceReduction,
)
from mc_option_pricing.options.pricing.black_scholes import contract_price


def compare_estimators(contract: OptionContract, n_paths: int, seed: int) -> None:
    """Print a table of estimator results for a call on the contract."""
    engine = EuropeanMonteCarlo(contract)
    benchmark = contract_price(contract, OptionType.CALL)

    print("\n" + "=" * 68)
    print("ESTIMATOR COMPARISON")
    print("=" * 68)
    print(f"\nBlack-Scholes call: {benchmark:.6f}")
    print("\n  Method                           Price       SE      Error   VR")
    print("  " + "-" * 64)

    baseline = None
    for method in VarianceReduction:
        result = engine.price_result(n_paths, OptionType.CALL, method, seed=seed)
        variance = result.standard_error**2
        if baseline is None:
            baseline = variance
        ratio = baseline / variance if variance > 0 else float("inf")
        print(
            f"  {method.value:<30} {result.price:9.5f} {result.standard_error:8.5f} "
            f"{result.price - benchmark:+8.5f} {ratio:5.1f}x"
        )

    print("\n★ Insight: the control variate removes most of the terminal-price noise")


def main() -> None:
    """Run the comparison demo."""
    parser = argparse.ArgumentParser(description="Variance Reduction Demo")
    parser.add_argument("--paths", type=int, default=100_000, help="Number of paths")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    args = parser.parse_args()

    contract = OptionContract(
        spot=41.0, strike=42.0, time_to_expiry=0.75, volatility=0.25, rate=0.03, dividend=0.01
    )
    compare_estimators(contract, args.paths, args.seed)


if __name__ == "__main__":
    main()
