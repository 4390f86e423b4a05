"""
Asian (average-price) option payoffs.

[T1] Call: max(A - K, 0)
[T1] Put:  max(K - A, 0)

where A is the arithmetic mean of the monitored prices. Generated paths
carry the initial spot in column 0; include_initial controls whether it
enters the average.
"""

import numpy as np

from mc_option_pricing.errors import InvalidSampleSizeError
from mc_option_pricing.options.payoffs.base import (
    OptionType,
    PathPayoff,
    _as_path_matrix,
    intrinsic_value,
)


class AsianPayoff(PathPayoff):
    """
    Arithmetic average-price option.

    Parameters
    ----------
    strike : float
        Strike price
    option_type : OptionType
        Call or put
    include_initial : bool, default False
        Average over column 0 (the spot) as well as the simulated nodes
    """

    def __init__(self, strike: float, option_type: OptionType, include_initial: bool = False):
        super().__init__(strike, option_type)
        self.include_initial = include_initial

    def average(self, paths: np.ndarray) -> np.ndarray:
        """Arithmetic average of each path over the monitored nodes."""
        paths = _as_path_matrix(paths)
        nodes = paths if self.include_initial else paths[:, 1:]
        if nodes.shape[1] == 0:
            raise InvalidSampleSizeError(
                "CRITICAL: Asian payoff needs at least one node after the initial spot"
            )
        return nodes.mean(axis=1)

    def evaluate_paths(self, paths: np.ndarray) -> np.ndarray:
        """Average-price payoffs for a path set."""
        return intrinsic_value(self.average(paths), self.strike, self.option_type)

    def __repr__(self) -> str:
        return (
            f"AsianPayoff(strike={self.strike}, option_type={self.option_type.value}, "
            f"include_initial={self.include_initial})"
        )
