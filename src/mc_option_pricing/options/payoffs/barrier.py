"""
Barrier option payoffs.

A barrier is crossed when any monitored node touches or passes it:
- Up:   S(t_i) >= B
- Down: S(t_i) <= B

[T1] Knock-out: vanilla payoff on S(T) if never crossed, else 0
[T1] Knock-in:  vanilla payoff on S(T) if crossed, else 0

Once knocked in, a European barrier pays on the terminal price no matter
when the crossing happened, so knock-in and knock-out partition the
vanilla payoff exactly: In + Out == Vanilla on every path.

Monitoring is discrete (at the simulated nodes); discrete monitoring
misses crossings between nodes, so MC prices of knock-out options sit
above the continuously monitored closed form.
"""

from enum import Enum

import numpy as np

from mc_option_pricing.errors import InvalidContractError
from mc_option_pricing.options.payoffs.base import (
    OptionType,
    PathPayoff,
    VanillaPayoff,
    _as_path_matrix,
    intrinsic_value,
)


class BarrierDirection(Enum):
    """Side from which the barrier is approached."""

    UP = "up"
    DOWN = "down"


class BarrierKnock(Enum):
    """Whether crossing activates or extinguishes the option."""

    IN = "in"
    OUT = "out"


class BarrierPayoff(PathPayoff):
    """
    European barrier option with discrete monitoring.

    Parameters
    ----------
    strike : float
        Strike price
    barrier : float
        Barrier level B
    option_type : OptionType
        Call or put
    direction : BarrierDirection
        UP or DOWN
    knock : BarrierKnock
        IN or OUT

    Examples
    --------
    >>> payoff = BarrierPayoff(50.0, 45.0, OptionType.CALL, BarrierDirection.DOWN, BarrierKnock.OUT)
    >>> payoff.evaluate(np.array([50.0, 48.0, 55.0]))
    5.0
    """

    def __init__(
        self,
        strike: float,
        barrier: float,
        option_type: OptionType,
        direction: BarrierDirection,
        knock: BarrierKnock,
    ):
        super().__init__(strike, option_type)
        if barrier <= 0:
            raise InvalidContractError(f"CRITICAL: barrier must be > 0, got {barrier}")

        self.barrier = barrier
        self.direction = direction
        self.knock = knock

    @property
    def name(self) -> str:
        """Conventional name, e.g. 'down-and-out call'."""
        return f"{self.direction.value}-and-{self.knock.value} {self.option_type.value}"

    def crossed(self, paths: np.ndarray) -> np.ndarray:
        """
        Boolean mask of paths that touch the barrier at any node.

        Returns
        -------
        np.ndarray
            Shape (n_paths,)
        """
        paths = _as_path_matrix(paths)
        if self.direction == BarrierDirection.UP:
            return np.any(paths >= self.barrier, axis=1)
        return np.any(paths <= self.barrier, axis=1)

    def vanilla_counterpart(self) -> VanillaPayoff:
        """Vanilla payoff with the same strike and type."""
        return VanillaPayoff(self.strike, self.option_type)

    def evaluate_paths(self, paths: np.ndarray) -> np.ndarray:
        """Barrier payoffs for a path set."""
        paths = _as_path_matrix(paths)
        terminal_payoff = intrinsic_value(paths[:, -1], self.strike, self.option_type)
        hit = self.crossed(paths)

        if self.knock == BarrierKnock.OUT:
            return np.where(hit, 0.0, terminal_payoff)
        return np.where(hit, terminal_payoff, 0.0)

    def __repr__(self) -> str:
        return (
            f"BarrierPayoff(strike={self.strike}, barrier={self.barrier}, "
            f"{self.name})"
        )


def down_and_out_call(strike: float, barrier: float) -> BarrierPayoff:
    """Down-and-out call payoff."""
    return BarrierPayoff(strike, barrier, OptionType.CALL, BarrierDirection.DOWN, BarrierKnock.OUT)


def down_and_in_call(strike: float, barrier: float) -> BarrierPayoff:
    """Down-and-in call payoff."""
    return BarrierPayoff(strike, barrier, OptionType.CALL, BarrierDirection.DOWN, BarrierKnock.IN)
