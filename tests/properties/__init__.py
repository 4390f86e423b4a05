"""
Property-based testing using Hypothesis.

This package contains property tests that verify mathematical invariants
hold across randomly generated inputs.

Modules:
    test_mc_properties: Monte Carlo estimator invariants (bounds, determinism, pooling)
    test_payoff_properties: Barrier partition and payoff bounds on random paths
    test_schedule_properties: Dividend grid and regression invariants
"""
