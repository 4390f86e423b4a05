"""
mc-option-pricing: Monte Carlo pricing of equity options.

Quick Start
-----------
>>> from mc_option_pricing import EuropeanMonteCarlo, OptionContract, OptionType, VarianceReduction
>>> contract = OptionContract(spot=41, strike=42, time_to_expiry=0.75,
...                           volatility=0.25, rate=0.03, dividend=0.01)
>>> engine = EuropeanMonteCarlo(contract)
>>> call = engine.price(100_000, OptionType.CALL, VarianceReduction.ANTITHETIC, seed=1)

Version: 0.1.0
"""

__version__ = "0.1.0"

# =============================================================================
# Contract and Payoffs
# =============================================================================
from mc_option_pricing.options.contract import OptionContract
from mc_option_pricing.options.payoffs import (
    AsianPayoff,
    BarrierDirection,
    BarrierKnock,
    BarrierPayoff,
    OptionType,
    PathPayoff,
    VanillaPayoff,
    create_payoff,
)

# =============================================================================
# Closed-Form Pricing
# =============================================================================
from mc_option_pricing.options.pricing import (
    BSResult,
    barrier_closed_form,
    black_scholes_call,
    black_scholes_greeks,
    black_scholes_put,
)

# =============================================================================
# Simulation
# =============================================================================
from mc_option_pricing.options.simulation import (
    NO_DIVIDENDS,
    DividendPricingResult,
    DividendSchedule,
    EuropeanAnalysis,
    EuropeanMonteCarlo,
    GBMParams,
    MCResult,
    PathDependentMonteCarlo,
    VarianceReduction,
    monte_carlo_price,
    price_parallel,
)

# =============================================================================
# Errors and Configuration
# =============================================================================
from mc_option_pricing.config import SETTINGS
from mc_option_pricing.errors import (
    DimensionMismatchError,
    InvalidContractError,
    InvalidSampleSizeError,
    NumericalDegeneracyError,
    PricingPreconditionError,
    SingularRegressionError,
)

__all__ = [
    "__version__",
    # Contract and payoffs
    "OptionContract",
    "AsianPayoff",
    "BarrierDirection",
    "BarrierKnock",
    "BarrierPayoff",
    "OptionType",
    "PathPayoff",
    "VanillaPayoff",
    "create_payoff",
    # Closed form
    "BSResult",
    "barrier_closed_form",
    "black_scholes_call",
    "black_scholes_greeks",
    "black_scholes_put",
    # Simulation
    "NO_DIVIDENDS",
    "DividendPricingResult",
    "DividendSchedule",
    "EuropeanAnalysis",
    "EuropeanMonteCarlo",
    "GBMParams",
    "MCResult",
    "PathDependentMonteCarlo",
    "VarianceReduction",
    "monte_carlo_price",
    "price_parallel",
    # Errors and config
    "SETTINGS",
    "DimensionMismatchError",
    "InvalidContractError",
    "InvalidSampleSizeError",
    "NumericalDegeneracyError",
    "PricingPreconditionError",
    "SingularRegressionError",
]
