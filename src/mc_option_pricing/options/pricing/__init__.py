"""
Closed-form option pricing.

Benchmarks and control-variate targets for the simulation engine:
- Black-Scholes European prices and Greeks
- Down-and-out / down-and-in call barrier formulas
"""

from mc_option_pricing.options.pricing.barrier import (
    barrier_closed_form,
    down_and_in_call,
    down_and_out_call,
)
from mc_option_pricing.options.pricing.black_scholes import (
    BSResult,
    black_scholes_call,
    black_scholes_greeks,
    black_scholes_price,
    black_scholes_put,
    contract_greeks,
    contract_price,
    put_call_parity_check,
)

__all__ = [
    # Black-Scholes
    "BSResult",
    "black_scholes_call",
    "black_scholes_greeks",
    "black_scholes_price",
    "black_scholes_put",
    "contract_greeks",
    "contract_price",
    "put_call_parity_check",
    # Barrier
    "barrier_closed_form",
    "down_and_in_call",
    "down_and_out_call",
]
