"""
Monte Carlo simulation for option pricing.

Provides:
- Normal draw generation and per-worker streams
- GBM path generation, including discrete dividend grids
- Control-variate regression and sample statistics
- Monte Carlo pricing engines and convergence analysis
"""

from mc_option_pricing.options.simulation.dividends import (
    NO_DIVIDENDS,
    DividendEvent,
    DividendKind,
    DividendSchedule,
)
from mc_option_pricing.options.simulation.gbm import (
    GBMParams,
    PathResult,
    dividend_paths_from_normals,
    generate_dividend_paths,
    generate_gbm_paths,
    generate_terminal_values,
    no_dividend_terminal_from_normals,
    paths_from_normals,
    terminal_values_from_normals,
    validate_gbm_simulation,
)
from mc_option_pricing.options.simulation.monte_carlo import (
    DividendPricingResult,
    EuropeanAnalysis,
    EuropeanMonteCarlo,
    MCResult,
    PathDependentMonteCarlo,
    VarianceReduction,
    convergence_analysis,
    monte_carlo_price,
    price_parallel,
    price_vanilla_mc,
)
from mc_option_pricing.options.simulation.normals import (
    make_generator,
    spawn_generators,
    split_paths,
    standard_normal_matrix,
)
from mc_option_pricing.options.simulation.regression import (
    SampleStatistics,
    control_variate_coefficient,
    control_variate_estimate,
    control_variate_residuals,
    discount_and_average,
    sample_statistics,
)

__all__ = [
    # Dividends
    "NO_DIVIDENDS",
    "DividendEvent",
    "DividendKind",
    "DividendSchedule",
    # GBM
    "GBMParams",
    "PathResult",
    "dividend_paths_from_normals",
    "generate_dividend_paths",
    "generate_gbm_paths",
    "generate_terminal_values",
    "no_dividend_terminal_from_normals",
    "paths_from_normals",
    "terminal_values_from_normals",
    "validate_gbm_simulation",
    # Monte Carlo
    "DividendPricingResult",
    "EuropeanAnalysis",
    "EuropeanMonteCarlo",
    "MCResult",
    "PathDependentMonteCarlo",
    "VarianceReduction",
    "convergence_analysis",
    "monte_carlo_price",
    "price_parallel",
    "price_vanilla_mc",
    # Normals
    "make_generator",
    "spawn_generators",
    "split_paths",
    "standard_normal_matrix",
    # Regression
    "SampleStatistics",
    "control_variate_coefficient",
    "control_variate_estimate",
    "control_variate_residuals",
    "discount_and_average",
    "sample_statistics",
]
