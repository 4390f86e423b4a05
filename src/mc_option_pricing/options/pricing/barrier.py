"""
Closed-form barrier option prices (continuous monitoring).

Only the down-and-out and down-and-in calls have a closed form here.
Every other barrier combination reports None ("benchmark unavailable"),
which callers must not read as a price of zero.

[T1] λ = (r - q + σ²/2) / σ²
[T1] H <= K:
     c_di = S e^(-qT) (H/S)^(2λ) N(y) - K e^(-rT) (H/S)^(2λ-2) N(y - σ√T)
     c_do = c - c_di
[T1] H >= K:
     c_do = S e^(-qT) N(x1) - K e^(-rT) N(x1 - σ√T)
            - S e^(-qT) (H/S)^(2λ) N(y1) + K e^(-rT) (H/S)^(2λ-2) N(y1 - σ√T)
     c_di = c - c_do

See: Hull (2021) Ch. 26.9 - Barrier options
"""

from typing import Optional

import numpy as np
from scipy import stats

from mc_option_pricing.errors import InvalidContractError
from mc_option_pricing.options.contract import OptionContract
from mc_option_pricing.options.payoffs.barrier import BarrierDirection, BarrierKnock, BarrierPayoff
from mc_option_pricing.options.payoffs.base import OptionType
from mc_option_pricing.options.pricing.black_scholes import black_scholes_call


def _down_and_out_call_value(
    spot: float,
    strike: float,
    barrier: float,
    rate: float,
    dividend: float,
    volatility: float,
    time_to_expiry: float,
) -> float:
    vanilla = black_scholes_call(spot, strike, rate, dividend, volatility, time_to_expiry)

    # Already knocked out at inception
    if spot <= barrier:
        return 0.0

    vol_sqrt_t = volatility * np.sqrt(time_to_expiry)
    lam = (rate - dividend + 0.5 * volatility**2) / volatility**2
    exp_div = np.exp(-dividend * time_to_expiry)
    exp_rate = np.exp(-rate * time_to_expiry)
    h_over_s = barrier / spot

    if barrier <= strike:
        y = np.log(barrier**2 / (spot * strike)) / vol_sqrt_t + lam * vol_sqrt_t
        down_in = (
            spot * exp_div * h_over_s ** (2 * lam) * stats.norm.cdf(y)
            - strike * exp_rate * h_over_s ** (2 * lam - 2) * stats.norm.cdf(y - vol_sqrt_t)
        )
        return float(vanilla - down_in)

    x1 = np.log(spot / barrier) / vol_sqrt_t + lam * vol_sqrt_t
    y1 = np.log(barrier / spot) / vol_sqrt_t + lam * vol_sqrt_t
    down_out = (
        spot * exp_div * stats.norm.cdf(x1)
        - strike * exp_rate * stats.norm.cdf(x1 - vol_sqrt_t)
        - spot * exp_div * h_over_s ** (2 * lam) * stats.norm.cdf(y1)
        + strike * exp_rate * h_over_s ** (2 * lam - 2) * stats.norm.cdf(y1 - vol_sqrt_t)
    )
    return float(down_out)


def down_and_out_call(contract: OptionContract, barrier: float) -> float:
    """
    Closed-form down-and-out call on a contract.

    Parameters
    ----------
    contract : OptionContract
        Underlying contract terms
    barrier : float
        Barrier level H

    Returns
    -------
    float
        Down-and-out call price
    """
    if barrier <= 0:
        raise InvalidContractError(f"CRITICAL: barrier must be > 0, got {barrier}")

    return _down_and_out_call_value(
        contract.spot,
        contract.strike,
        barrier,
        contract.rate,
        contract.dividend,
        contract.volatility,
        contract.time_to_expiry,
    )


def down_and_in_call(contract: OptionContract, barrier: float) -> float:
    """
    Closed-form down-and-in call on a contract.

    [T1] c_di = c - c_do (in-out parity)
    """
    vanilla = black_scholes_call(
        contract.spot,
        contract.strike,
        contract.rate,
        contract.dividend,
        contract.volatility,
        contract.time_to_expiry,
    )
    return vanilla - down_and_out_call(contract, barrier)


def barrier_closed_form(contract: OptionContract, payoff: BarrierPayoff) -> Optional[float]:
    """
    Closed-form benchmark for a barrier payoff, when one is available.

    The payoff's strike overrides the contract strike.

    Returns
    -------
    float or None
        Price for down-and-out / down-and-in calls, None otherwise
    """
    if payoff.direction != BarrierDirection.DOWN or payoff.option_type != OptionType.CALL:
        return None

    terms = OptionContract(
        spot=contract.spot,
        strike=payoff.strike,
        time_to_expiry=contract.time_to_expiry,
        volatility=contract.volatility,
        rate=contract.rate,
        dividend=contract.dividend,
    )

    if payoff.knock == BarrierKnock.OUT:
        return down_and_out_call(terms, payoff.barrier)
    return down_and_in_call(terms, payoff.barrier)
