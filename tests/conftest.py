"""
Centralized pytest fixtures for the mc-option-pricing test suite.

Fixture Categories:
1. Contracts - Standard market conditions for option pricing
2. Dividend Schedules - Proportional/fixed schedules used across tests
3. Paths - Small hand-built path sets for payoff tests
"""

from dataclasses import dataclass

import numpy as np
import pytest

from mc_option_pricing.options.contract import OptionContract
from mc_option_pricing.options.simulation.dividends import DividendSchedule

# =============================================================================
# TOLERANCE TIERS
# =============================================================================

@dataclass(frozen=True)
class ToleranceTiers:
    """
    Tiered tolerance framework for different test types.

    See: mc_option_pricing/config/tolerances.py
    """

    # Anti-pattern tests: pathwise identities
    anti_pattern: float = 1e-10

    # Closed-form identities
    analytical: float = 1e-8

    # Monte Carlo vs analytical, in standard errors
    mc_standard_errors: float = 3.0


TOLERANCES = ToleranceTiers()


@pytest.fixture(scope="session")
def tolerances() -> ToleranceTiers:
    """Provide tiered tolerance settings for all tests."""
    return TOLERANCES


# =============================================================================
# CONTRACTS
# =============================================================================

@pytest.fixture
def standard_contract() -> OptionContract:
    """Standard ATM contract: S=K=100, r=5%, q=2%, σ=20%, T=1."""
    return OptionContract(
        spot=100.0,
        strike=100.0,
        time_to_expiry=1.0,
        volatility=0.20,
        rate=0.05,
        dividend=0.02,
    )


@pytest.fixture
def reference_contract() -> OptionContract:
    """End-to-end reference contract: S=41, K=42, T=0.75, σ=25%, r=3%, q=1%."""
    return OptionContract(
        spot=41.0,
        strike=42.0,
        time_to_expiry=0.75,
        volatility=0.25,
        rate=0.03,
        dividend=0.01,
    )


@pytest.fixture
def dividend_contract() -> OptionContract:
    """Seven-month contract used with discrete dividend schedules."""
    return OptionContract(
        spot=50.0,
        strike=55.55,
        time_to_expiry=7 / 12,
        volatility=0.20,
        rate=0.02,
    )


@pytest.fixture
def barrier_contract() -> OptionContract:
    """One-year contract for barrier tests: S=K=50, σ=30%, r=5%."""
    return OptionContract(
        spot=50.0,
        strike=50.0,
        time_to_expiry=1.0,
        volatility=0.30,
        rate=0.05,
    )


# =============================================================================
# DIVIDEND SCHEDULES
# =============================================================================

@pytest.fixture
def mixed_schedule() -> DividendSchedule:
    """Proportional dividend at 4/12, cash dividends at 2/12 and 6/12."""
    return DividendSchedule(
        proportional=((4 / 12, 0.02),),
        fixed=((2 / 12, 0.5), (6 / 12, 0.5)),
    )


@pytest.fixture
def proportional_schedule() -> DividendSchedule:
    """Two proportional dividends, no cash dividends."""
    return DividendSchedule(proportional=((2 / 12, 0.01), (5 / 12, 0.015)))


# =============================================================================
# PATHS
# =============================================================================

@pytest.fixture
def sample_paths() -> np.ndarray:
    """
    Hand-built paths, column 0 is the spot (50).

    Row 0: dips to 44 then finishes at 56
    Row 1: never below 48, finishes at 53
    Row 2: touches 45 exactly, finishes at 40
    Row 3: rises through 60, finishes at 58
    """
    return np.array(
        [
            [50.0, 47.0, 44.0, 52.0, 56.0],
            [50.0, 48.0, 51.0, 52.0, 53.0],
            [50.0, 45.0, 46.0, 42.0, 40.0],
            [50.0, 55.0, 61.0, 59.0, 58.0],
        ]
    )
