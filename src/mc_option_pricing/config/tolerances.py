"""
Centralized tolerance framework for Monte Carlo pricing tests and checks.

Tolerance Tiers:
    Tier 1 (Analytical): Deterministic identities, machine precision
    Tier 2 (Stochastic): CLT-derived Monte Carlo error bounds

References:
    [T1] Higham (2002) "Accuracy and Stability of Numerical Algorithms"
    [T1] Glasserman (2003) Ch. 3-4 - Monte Carlo error bounds
"""

from typing import Final

import numpy as np

# =============================================================================
# Tier 1: Analytical Tolerances (Deterministic)
# =============================================================================

#: No-arbitrage bounds and pathwise identities
ANTI_PATTERN_TOLERANCE: Final[float] = 1e-10

#: Put-call parity on closed-form prices: C - P = S*exp(-qT) - K*exp(-rT)
PUT_CALL_PARITY_TOLERANCE: Final[float] = 1e-8

#: Knock-in + knock-out == vanilla, per path and for closed forms
BARRIER_PARITY_TOLERANCE: Final[float] = 1e-10

#: Dividend grid boundaries (sums of fractions like 1/12)
SCHEDULE_TOLERANCE: Final[float] = 1e-12


# =============================================================================
# Tier 2: Stochastic Tolerances (CLT-Derived)
# =============================================================================


def mc_tolerance(n_paths: int, sigma: float = 0.20, confidence: float = 3.0) -> float:
    """
    Calculate CLT-derived Monte Carlo tolerance.

    [T1] Standard error of MC estimate is σ/√N.
    3σ gives 99.7% confidence interval.

    Parameters
    ----------
    n_paths : int
        Number of Monte Carlo paths
    sigma : float
        Estimated standard deviation of the payoff
    confidence : float
        Number of standard deviations (default 3 for 99.7% CI)

    Returns
    -------
    float
        Tolerance for MC vs analytical comparison
    """
    return confidence * sigma / np.sqrt(n_paths)


#: Number of standard errors allowed between MC and closed form
MC_STANDARD_ERRORS: Final[float] = 3.0

#: Relative tolerance for MC vs Black-Scholes at 100k paths
BS_MC_CONVERGENCE_TOLERANCE: Final[float] = 0.01


TOLERANCE_REGISTRY: dict[str, float] = {
    "anti_pattern": ANTI_PATTERN_TOLERANCE,
    "put_call_parity": PUT_CALL_PARITY_TOLERANCE,
    "barrier_parity": BARRIER_PARITY_TOLERANCE,
    "schedule": SCHEDULE_TOLERANCE,
    "mc_standard_errors": MC_STANDARD_ERRORS,
    "bs_mc_convergence": BS_MC_CONVERGENCE_TOLERANCE,
}


def get_tolerance(name: str) -> float:
    """
    Get tolerance by name from registry.

    Raises
    ------
    KeyError
        If tolerance name not found
    """
    if name not in TOLERANCE_REGISTRY:
        available = ", ".join(sorted(TOLERANCE_REGISTRY.keys()))
        raise KeyError(f"Unknown tolerance '{name}'. Available: {available}")
    return TOLERANCE_REGISTRY[name]
