"""
Frozen configuration settings for Monte Carlo pricing.

All configuration is immutable (frozen dataclasses) to ensure reproducibility.
"""

import os
from dataclasses import dataclass

from mc_option_pricing.config.tolerances import (
    ANTI_PATTERN_TOLERANCE,
    BS_MC_CONVERGENCE_TOLERANCE,
    PUT_CALL_PARITY_TOLERANCE,
)


def _resolve_default_seed() -> int:
    """
    Resolve the default seed with environment variable override.

    Priority:
    1. MC_PRICING_SEED environment variable (if set)
    2. Default: 1
    """
    env_seed = os.environ.get("MC_PRICING_SEED")
    if env_seed:
        return int(env_seed)
    return 1


@dataclass(frozen=True)
class SimulationConfig:
    """
    Immutable simulation configuration.

    Attributes
    ----------
    n_paths : int
        Default number of Monte Carlo paths
    seed : int
        Default seed. Override with MC_PRICING_SEED environment variable.
    path_length : int
        Default number of monitoring steps for path-dependent payoffs
    confidence_z : float
        z-score for the reported confidence interval (95%)
    """

    n_paths: int = 100_000
    seed: int = None  # type: ignore[assignment]  # Set in __post_init__
    path_length: int = 252
    confidence_z: float = 1.96

    def __post_init__(self) -> None:
        """Initialize seed using resolver function."""
        # Frozen dataclass workaround: use object.__setattr__
        if self.seed is None:
            object.__setattr__(self, "seed", _resolve_default_seed())


@dataclass(frozen=True)
class ValidationConfig:
    """
    Immutable validation configuration.

    Tolerances live in config/tolerances.py; these are kept here so
    callers can reach everything through SETTINGS.
    """

    bs_mc_tolerance: float = BS_MC_CONVERGENCE_TOLERANCE
    arbitrage_tolerance: float = ANTI_PATTERN_TOLERANCE
    put_call_parity_tolerance: float = PUT_CALL_PARITY_TOLERANCE


@dataclass(frozen=True)
class Settings:
    """
    Master frozen configuration combining all sub-configs.

    Usage
    -----
    >>> from mc_option_pricing.config.settings import SETTINGS
    >>> SETTINGS.simulation.n_paths
    100000
    """

    simulation: SimulationConfig = SimulationConfig()
    validation: ValidationConfig = ValidationConfig()


# Singleton instance - import this
SETTINGS = Settings()
