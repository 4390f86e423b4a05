"""
Black-Scholes known-answer tests.

[T1] The closed forms are the accuracy benchmarks and control-variate
targets of the simulation engine. If these fail, every validation of the
Monte Carlo estimators is meaningless.

See: Hull, "Options, Futures, and Other Derivatives" (10th ed.)
"""

import numpy as np
import pytest

from mc_option_pricing.options.payoffs import OptionType
from mc_option_pricing.options.pricing.black_scholes import (
    black_scholes_call,
    black_scholes_greeks,
    black_scholes_put,
)


@pytest.mark.validation
class TestHullExamples:
    """Textbook prices."""

    def test_non_dividend_call(self):
        """Hull Example 15.6: S=42, K=40, r=10%, σ=20%, T=0.5, C ≈ 4.76."""
        assert black_scholes_call(42.0, 40.0, 0.10, 0.0, 0.20, 0.5) == pytest.approx(4.76, abs=0.01)

    def test_non_dividend_put(self):
        """Same inputs, P ≈ 0.81."""
        assert black_scholes_put(42.0, 40.0, 0.10, 0.0, 0.20, 0.5) == pytest.approx(0.81, abs=0.01)

    def test_dividend_yield_call(self):
        """Hull Example 17.1: index at 930, K=900, r=8%, q=3%, σ=20%, T=2/12, C ≈ 51.83."""
        price = black_scholes_call(930.0, 900.0, 0.08, 0.03, 0.20, 2 / 12)
        assert price == pytest.approx(51.83, abs=0.02)


@pytest.mark.validation
class TestLimits:
    """Deep moneyness limits."""

    def test_deep_itm_call_near_forward_intrinsic(self):
        S, K, r, q, sigma, T = 150.0, 100.0, 0.05, 0.0, 0.20, 1.0
        price = black_scholes_call(S, K, r, q, sigma, T)
        intrinsic = S - K * np.exp(-r * T)

        assert intrinsic <= price < intrinsic + 0.5

    def test_deep_otm_call_negligible(self):
        assert black_scholes_call(100.0, 200.0, 0.05, 0.0, 0.20, 1.0) < 0.01

    def test_deep_itm_put_delta(self):
        greeks = black_scholes_greeks(50.0, 100.0, 0.05, 0.02, 0.20, 1.0, OptionType.PUT)
        assert greeks.delta == pytest.approx(-np.exp(-0.02), abs=1e-3)


@pytest.mark.validation
class TestGreekRelationships:
    """Relationships shared by puts and calls."""

    @pytest.fixture
    def pair(self):
        args = (100.0, 100.0, 0.05, 0.02, 0.20, 1.0)
        return (
            black_scholes_greeks(*args, OptionType.CALL),
            black_scholes_greeks(*args, OptionType.PUT),
        )

    def test_atm_call_delta(self, pair):
        call, _ = pair
        assert 0.5 < call.delta < 0.7

    def test_gamma_and_vega_shared(self, pair):
        call, put = pair
        assert call.gamma == pytest.approx(put.gamma)
        assert call.vega == pytest.approx(put.vega)

    def test_vega_formula(self, pair):
        """[T1] Vega = S e^(-qT) φ(d1) √T."""
        call, _ = pair
        density = np.exp(-0.5 * call.d1**2) / np.sqrt(2 * np.pi)
        assert call.vega == pytest.approx(100.0 * np.exp(-0.02) * density)
