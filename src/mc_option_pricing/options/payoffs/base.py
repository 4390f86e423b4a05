"""
Base classes for option payoffs.

Every payoff maps one simulated path (or a matrix of paths) to realized,
undiscounted payoffs. Paths are arrays of asset prices at each monitoring
node; the last column is the terminal price and, for generated paths,
column 0 is the initial spot.
"""

from abc import ABC, abstractmethod
from enum import Enum

import numpy as np

from mc_option_pricing.errors import InvalidContractError, InvalidSampleSizeError


class OptionType(Enum):
    """Option type enumeration."""

    CALL = "call"
    PUT = "put"


def intrinsic_value(prices: np.ndarray, strike: float, option_type: OptionType) -> np.ndarray:
    """
    Vanilla exercise value, vectorized.

    [T1] Call: max(S - K, 0)
    [T1] Put: max(K - S, 0)
    """
    prices = np.asarray(prices, dtype=float)
    if option_type == OptionType.CALL:
        return np.maximum(prices - strike, 0.0)
    return np.maximum(strike - prices, 0.0)


def _as_path_matrix(paths: np.ndarray) -> np.ndarray:
    paths = np.asarray(paths, dtype=float)
    if paths.ndim == 1:
        paths = paths[np.newaxis, :]
    if paths.shape[0] == 0:
        raise InvalidSampleSizeError("CRITICAL: path set is empty")
    if paths.shape[1] == 0:
        raise InvalidSampleSizeError("CRITICAL: paths have no nodes")
    return paths


class PathPayoff(ABC):
    """
    Abstract payoff over a simulated price path.

    Subclasses implement evaluate_paths(); evaluate() and price() are
    derived from it.

    Parameters
    ----------
    strike : float
        Strike price
    option_type : OptionType
        Call or put
    """

    def __init__(self, strike: float, option_type: OptionType):
        if strike <= 0:
            raise InvalidContractError(f"CRITICAL: strike must be > 0, got {strike}")

        self.strike = strike
        self.option_type = option_type

    @property
    def is_path_dependent(self) -> bool:
        """True when the payoff reads nodes other than the terminal one."""
        return True

    @abstractmethod
    def evaluate_paths(self, paths: np.ndarray) -> np.ndarray:
        """
        Calculate payoffs for a set of paths.

        Parameters
        ----------
        paths : np.ndarray
            Asset prices, shape (n_paths, n_nodes)

        Returns
        -------
        np.ndarray
            Undiscounted payoffs, shape (n_paths,)
        """
        pass

    def evaluate(self, path: np.ndarray) -> float:
        """Realized payoff of a single path."""
        return float(self.evaluate_paths(_as_path_matrix(path))[0])

    def price(self, paths: np.ndarray, discount_factor: float) -> float:
        """
        Discounted sample mean over a path set.

        [T1] V = e^(-rT) * (1/N) Σ payoff(path_i)

        Raises
        ------
        InvalidSampleSizeError
            If the path set is empty
        """
        payoffs = self.evaluate_paths(_as_path_matrix(paths))
        return float(payoffs.mean() * discount_factor)

    def __call__(self, path: np.ndarray) -> float:
        return self.evaluate(path)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(strike={self.strike}, option_type={self.option_type.value})"


class VanillaPayoff(PathPayoff):
    """
    Vanilla European option payoff.

    [T1] Call payoff: max(S(T) - K, 0)
    [T1] Put payoff: max(K - S(T), 0)

    Only the terminal node of a path is read.
    """

    @property
    def is_path_dependent(self) -> bool:
        """Vanilla payoffs read only the terminal price."""
        return False

    def terminal_payoff(self, terminal: np.ndarray) -> np.ndarray:
        """Payoffs from terminal prices (endpoint mode)."""
        return intrinsic_value(terminal, self.strike, self.option_type)

    def evaluate_paths(self, paths: np.ndarray) -> np.ndarray:
        """Payoffs from the last column of each path."""
        paths = _as_path_matrix(paths)
        return self.terminal_payoff(paths[:, -1])
