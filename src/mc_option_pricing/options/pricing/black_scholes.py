"""
Black-Scholes closed-form pricing with Greeks.

Used as accuracy benchmarks for the simulation engine and as the known
expectations of control variates. Greeks are raw partial derivatives
(vega per unit σ, theta per year, rho per unit r), matching the pathwise
Monte Carlo estimators.

References
----------
[T1] Black, F., & Scholes, M. (1973). The pricing of options and corporate liabilities.
[T1] Hull, J. C. (2018). Options, Futures, and Other Derivatives (10th ed.).
"""

from dataclasses import dataclass

import numpy as np
from scipy import stats

from mc_option_pricing.config.tolerances import PUT_CALL_PARITY_TOLERANCE
from mc_option_pricing.errors import InvalidContractError
from mc_option_pricing.options.contract import OptionContract
from mc_option_pricing.options.payoffs.base import OptionType


@dataclass(frozen=True)
class BSResult:
    """
    Immutable Black-Scholes pricing result.

    Attributes
    ----------
    price : float
        Option price
    delta : float
        Delta (dV/dS)
    gamma : float
        Gamma (d²V/dS²)
    vega : float
        Vega (dV/dσ)
    theta : float
        Theta (dV/dt), per year
    rho : float
        Rho (dV/dr)
    d1 : float
        d1 parameter
    d2 : float
        d2 parameter
    """

    price: float
    delta: float
    gamma: float
    vega: float
    theta: float
    rho: float
    d1: float
    d2: float


def _calculate_d1_d2(
    spot: float,
    strike: float,
    rate: float,
    dividend: float,
    volatility: float,
    time_to_expiry: float,
) -> tuple[float, float]:
    """
    Calculate d1 and d2 parameters.

    [T1] d1 = (ln(S/K) + (r - q + σ²/2)T) / (σ√T)
    [T1] d2 = d1 - σ√T
    """
    vol_sqrt_t = volatility * np.sqrt(time_to_expiry)

    d1 = (
        np.log(spot / strike) + (rate - dividend + 0.5 * volatility**2) * time_to_expiry
    ) / vol_sqrt_t

    return d1, d1 - vol_sqrt_t


def black_scholes_call(
    spot: float,
    strike: float,
    rate: float,
    dividend: float,
    volatility: float,
    time_to_expiry: float,
) -> float:
    """
    Price European call option using Black-Scholes.

    [T1] C = S*e^(-qT)*N(d1) - K*e^(-rT)*N(d2)

    Examples
    --------
    >>> price = black_scholes_call(100, 100, 0.05, 0.02, 0.20, 1.0)
    >>> round(price, 2)
    9.23
    """
    _validate_inputs(spot, strike, volatility, time_to_expiry)

    d1, d2 = _calculate_d1_d2(spot, strike, rate, dividend, volatility, time_to_expiry)

    call_price = (
        spot * np.exp(-dividend * time_to_expiry) * stats.norm.cdf(d1)
        - strike * np.exp(-rate * time_to_expiry) * stats.norm.cdf(d2)
    )

    return float(call_price)


def black_scholes_put(
    spot: float,
    strike: float,
    rate: float,
    dividend: float,
    volatility: float,
    time_to_expiry: float,
) -> float:
    """
    Price European put option using Black-Scholes.

    [T1] P = K*e^(-rT)*N(-d2) - S*e^(-qT)*N(-d1)
    """
    _validate_inputs(spot, strike, volatility, time_to_expiry)

    d1, d2 = _calculate_d1_d2(spot, strike, rate, dividend, volatility, time_to_expiry)

    put_price = (
        strike * np.exp(-rate * time_to_expiry) * stats.norm.cdf(-d2)
        - spot * np.exp(-dividend * time_to_expiry) * stats.norm.cdf(-d1)
    )

    return float(put_price)


def black_scholes_price(
    spot: float,
    strike: float,
    rate: float,
    dividend: float,
    volatility: float,
    time_to_expiry: float,
    option_type: OptionType,
) -> float:
    """Price European option using Black-Scholes."""
    if option_type == OptionType.CALL:
        return black_scholes_call(spot, strike, rate, dividend, volatility, time_to_expiry)
    else:
        return black_scholes_put(spot, strike, rate, dividend, volatility, time_to_expiry)


def black_scholes_greeks(
    spot: float,
    strike: float,
    rate: float,
    dividend: float,
    volatility: float,
    time_to_expiry: float,
    option_type: OptionType,
) -> BSResult:
    """
    Calculate Black-Scholes price and all Greeks.

    [T1] Delta (call) = e^(-qT) * N(d1)
    [T1] Delta (put) = -e^(-qT) * N(-d1)
    [T1] Gamma = e^(-qT) * n(d1) / (S * σ * √T)
    [T1] Vega = S * e^(-qT) * n(d1) * √T
    [T1] Theta (call) = -S*e^(-qT)*n(d1)*σ/(2√T) - r*K*e^(-rT)*N(d2) + q*S*e^(-qT)*N(d1)
    [T1] Rho (call) = K * T * e^(-rT) * N(d2)
    """
    _validate_inputs(spot, strike, volatility, time_to_expiry)

    d1, d2 = _calculate_d1_d2(spot, strike, rate, dividend, volatility, time_to_expiry)

    sqrt_t = np.sqrt(time_to_expiry)
    exp_div = np.exp(-dividend * time_to_expiry)
    exp_rate = np.exp(-rate * time_to_expiry)

    n_d1 = stats.norm.pdf(d1)
    N_d1 = stats.norm.cdf(d1)
    N_d2 = stats.norm.cdf(d2)
    N_neg_d1 = stats.norm.cdf(-d1)
    N_neg_d2 = stats.norm.cdf(-d2)

    if option_type == OptionType.CALL:
        price = spot * exp_div * N_d1 - strike * exp_rate * N_d2
        delta = exp_div * N_d1
        theta = (
            -spot * exp_div * n_d1 * volatility / (2 * sqrt_t)
            - rate * strike * exp_rate * N_d2
            + dividend * spot * exp_div * N_d1
        )
        rho = strike * time_to_expiry * exp_rate * N_d2
    else:
        price = strike * exp_rate * N_neg_d2 - spot * exp_div * N_neg_d1
        delta = -exp_div * N_neg_d1
        theta = (
            -spot * exp_div * n_d1 * volatility / (2 * sqrt_t)
            + rate * strike * exp_rate * N_neg_d2
            - dividend * spot * exp_div * N_neg_d1
        )
        rho = -strike * time_to_expiry * exp_rate * N_neg_d2

    # Gamma and vega are the same for call and put
    gamma = exp_div * n_d1 / (spot * volatility * sqrt_t)
    vega = spot * exp_div * n_d1 * sqrt_t

    return BSResult(
        price=float(price),
        delta=float(delta),
        gamma=float(gamma),
        vega=float(vega),
        theta=float(theta),
        rho=float(rho),
        d1=float(d1),
        d2=float(d2),
    )


def contract_price(contract: OptionContract, option_type: OptionType) -> float:
    """Black-Scholes price of a contract."""
    return black_scholes_price(
        contract.spot,
        contract.strike,
        contract.rate,
        contract.dividend,
        contract.volatility,
        contract.time_to_expiry,
        option_type,
    )


def contract_greeks(contract: OptionContract, option_type: OptionType) -> BSResult:
    """Black-Scholes price and Greeks of a contract."""
    return black_scholes_greeks(
        contract.spot,
        contract.strike,
        contract.rate,
        contract.dividend,
        contract.volatility,
        contract.time_to_expiry,
        option_type,
    )


def put_call_parity_check(
    call_price: float,
    put_price: float,
    spot: float,
    strike: float,
    rate: float,
    dividend: float,
    time_to_expiry: float,
    tolerance: float = PUT_CALL_PARITY_TOLERANCE,
) -> tuple[bool, float]:
    """
    Verify put-call parity holds.

    [T1] Put-Call Parity: C - P = S*e^(-qT) - K*e^(-rT)

    Returns
    -------
    tuple[bool, float]
        (parity_holds, error)
    """
    actual_diff = call_price - put_price
    expected_diff = (
        spot * np.exp(-dividend * time_to_expiry)
        - strike * np.exp(-rate * time_to_expiry)
    )

    error = abs(actual_diff - expected_diff)
    return error < tolerance, error


def _validate_inputs(
    spot: float,
    strike: float,
    volatility: float,
    time_to_expiry: float,
) -> None:
    """Validate Black-Scholes inputs."""
    if spot <= 0:
        raise InvalidContractError(f"CRITICAL: spot must be > 0, got {spot}")
    if strike <= 0:
        raise InvalidContractError(f"CRITICAL: strike must be > 0, got {strike}")
    if volatility <= 0:
        raise InvalidContractError(f"CRITICAL: volatility must be > 0, got {volatility}")
    if time_to_expiry <= 0:
        raise InvalidContractError(
            f"CRITICAL: time_to_expiry must be > 0, got {time_to_expiry}"
        )
