"""
Option contract value type.

The contract is immutable. Closed-form prices and Greeks are pure
functions in options/pricing/ that take the contract as an argument.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from mc_option_pricing.errors import InvalidContractError

if TYPE_CHECKING:
    from mc_option_pricing.options.simulation.gbm import GBMParams


@dataclass(frozen=True)
class OptionContract:
    """
    European option contract on a single lognormal underlying.

    Attributes
    ----------
    spot : float
        Current spot price S
    strike : float
        Strike price K
    time_to_expiry : float
        Maturity T in years
    volatility : float
        Volatility σ (annualized, decimal)
    rate : float
        Risk-free rate r (continuous, decimal)
    dividend : float
        Continuous dividend yield q (decimal)
    """

    spot: float
    strike: float
    time_to_expiry: float
    volatility: float
    rate: float = 0.0
    dividend: float = 0.0

    def __post_init__(self) -> None:
        """Validate contract terms."""
        if self.spot <= 0:
            raise InvalidContractError(f"CRITICAL: spot must be > 0, got {self.spot}")
        if self.strike <= 0:
            raise InvalidContractError(f"CRITICAL: strike must be > 0, got {self.strike}")
        if self.volatility <= 0:
            raise InvalidContractError(
                f"CRITICAL: volatility must be > 0, got {self.volatility}"
            )
        if self.time_to_expiry <= 0:
            raise InvalidContractError(
                f"CRITICAL: time_to_expiry must be > 0, got {self.time_to_expiry}"
            )

    @property
    def discount_factor(self) -> float:
        """Discount factor: exp(-rT)."""
        return float(np.exp(-self.rate * self.time_to_expiry))

    @property
    def forward(self) -> float:
        """Forward price E[S(T)] = S * exp((r-q)*T)."""
        return float(self.spot * np.exp((self.rate - self.dividend) * self.time_to_expiry))

    @property
    def gbm_params(self) -> "GBMParams":
        """Diffusion parameters for path generation."""
        from mc_option_pricing.options.simulation.gbm import GBMParams

        return GBMParams(
            spot=self.spot,
            rate=self.rate,
            dividend=self.dividend,
            volatility=self.volatility,
            time_to_expiry=self.time_to_expiry,
        )
