"""Payoff factory keyed by name."""

from typing import Optional

from mc_option_pricing.options.payoffs.asian import AsianPayoff
from mc_option_pricing.options.payoffs.barrier import BarrierDirection, BarrierKnock, BarrierPayoff
from mc_option_pricing.options.payoffs.base import OptionType, PathPayoff, VanillaPayoff

_BARRIER_KINDS = {
    "up_and_in": (BarrierDirection.UP, BarrierKnock.IN),
    "up_and_out": (BarrierDirection.UP, BarrierKnock.OUT),
    "down_and_in": (BarrierDirection.DOWN, BarrierKnock.IN),
    "down_and_out": (BarrierDirection.DOWN, BarrierKnock.OUT),
}


def create_payoff(
    kind: str,
    strike: float,
    option_type: OptionType | str = OptionType.CALL,
    barrier: Optional[float] = None,
    include_initial: bool = False,
) -> PathPayoff:
    """
    Factory function to create a payoff from parameters.

    Parameters
    ----------
    kind : str
        'vanilla', 'asian', 'up_and_in', 'up_and_out', 'down_and_in', 'down_and_out'
    strike : float
        Strike price
    option_type : OptionType or str, default CALL
        Call or put
    barrier : float, optional
        Barrier level (required for barrier kinds)
    include_initial : bool, default False
        Asian only: include the spot in the average

    Returns
    -------
    PathPayoff
        Configured payoff object

    Raises
    ------
    ValueError
        If the kind is unknown or a barrier kind has no barrier
    """
    if isinstance(option_type, str):
        option_type = OptionType(option_type.lower())

    kind = kind.lower().replace("-", "_")

    if kind == "vanilla":
        return VanillaPayoff(strike, option_type)

    elif kind == "asian":
        return AsianPayoff(strike, option_type, include_initial=include_initial)

    elif kind in _BARRIER_KINDS:
        if barrier is None:
            raise ValueError(f"CRITICAL: barrier required for '{kind}' payoff")
        direction, knock = _BARRIER_KINDS[kind]
        return BarrierPayoff(strike, barrier, option_type, direction, knock)

    else:
        raise ValueError(
            f"CRITICAL: Unknown payoff kind '{kind}'. "
            f"Valid kinds: vanilla, asian, {', '.join(_BARRIER_KINDS)}"
        )
