"""
Option payoffs over simulated paths.

Provides:
- VanillaPayoff: European call/put on the terminal price
- BarrierPayoff: up/down, in/out with discrete monitoring
- AsianPayoff: arithmetic average-price call/put
- create_payoff: factory by name
"""

from mc_option_pricing.options.payoffs.asian import AsianPayoff
from mc_option_pricing.options.payoffs.barrier import (
    BarrierDirection,
    BarrierKnock,
    BarrierPayoff,
    down_and_in_call,
    down_and_out_call,
)
from mc_option_pricing.options.payoffs.base import (
    OptionType,
    PathPayoff,
    VanillaPayoff,
    intrinsic_value,
)
from mc_option_pricing.options.payoffs.factory import create_payoff

__all__ = [
    "AsianPayoff",
    "BarrierDirection",
    "BarrierKnock",
    "BarrierPayoff",
    "OptionType",
    "PathPayoff",
    "VanillaPayoff",
    "create_payoff",
    "down_and_in_call",
    "down_and_out_call",
    "intrinsic_value",
]
