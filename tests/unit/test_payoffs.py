"""
Tests for option payoffs over simulated paths.

Uses the hand-built path set from conftest.sample_paths:
    Row 0: dips to 44 then finishes at 56
    Row 1: never below 48, finishes at 53
    Row 2: touches 45 exactly, finishes at 40
    Row 3: rises through 60, finishes at 58
"""

import numpy as np
import pytest

from mc_option_pricing.errors import InvalidContractError, InvalidSampleSizeError
from mc_option_pricing.options.payoffs import (
    AsianPayoff,
    BarrierDirection,
    BarrierKnock,
    BarrierPayoff,
    OptionType,
    VanillaPayoff,
    create_payoff,
    down_and_in_call,
    down_and_out_call,
    intrinsic_value,
)


class TestVanillaPayoff:
    """Terminal-only payoffs."""

    def test_call(self, sample_paths):
        payoff = VanillaPayoff(50.0, OptionType.CALL)
        np.testing.assert_allclose(payoff.evaluate_paths(sample_paths), [6.0, 3.0, 0.0, 8.0])

    def test_put(self, sample_paths):
        payoff = VanillaPayoff(50.0, OptionType.PUT)
        np.testing.assert_allclose(payoff.evaluate_paths(sample_paths), [0.0, 0.0, 10.0, 0.0])

    def test_single_path(self):
        payoff = VanillaPayoff(100.0, OptionType.CALL)
        assert payoff.evaluate(np.array([100.0, 80.0, 112.5])) == pytest.approx(12.5)
        assert payoff(np.array([100.0, 80.0, 112.5])) == pytest.approx(12.5)

    def test_terminal_payoff(self):
        payoff = VanillaPayoff(10.0, OptionType.PUT)
        np.testing.assert_allclose(payoff.terminal_payoff(np.array([7.0, 12.0])), [3.0, 0.0])

    def test_not_path_dependent(self):
        assert not VanillaPayoff(10.0, OptionType.CALL).is_path_dependent

    def test_price_discounts_mean(self, sample_paths):
        payoff = VanillaPayoff(50.0, OptionType.CALL)
        assert payoff.price(sample_paths, 0.9) == pytest.approx(0.9 * 17.0 / 4)

    def test_price_empty(self):
        payoff = VanillaPayoff(50.0, OptionType.CALL)
        with pytest.raises(InvalidSampleSizeError, match="empty"):
            payoff.price(np.empty((0, 3)), 0.9)

    def test_invalid_strike(self):
        with pytest.raises(InvalidContractError, match="strike must be > 0"):
            VanillaPayoff(0.0, OptionType.CALL)


class TestBarrierPayoff:
    """Discretely monitored barrier payoffs."""

    def test_down_and_out_call(self, sample_paths):
        payoff = down_and_out_call(50.0, 45.0)
        # Rows 0 and 2 touch 45 or below
        np.testing.assert_allclose(payoff.evaluate_paths(sample_paths), [0.0, 3.0, 0.0, 8.0])

    def test_down_and_in_call(self, sample_paths):
        payoff = down_and_in_call(50.0, 45.0)
        np.testing.assert_allclose(payoff.evaluate_paths(sample_paths), [6.0, 0.0, 0.0, 0.0])

    def test_touching_counts_as_crossing(self, sample_paths):
        """Row 2 touches 45 exactly: crossing uses <= for down barriers."""
        payoff = down_and_out_call(50.0, 45.0)
        assert payoff.crossed(sample_paths)[2]

    def test_up_and_out_put(self, sample_paths):
        payoff = BarrierPayoff(55.0, 60.0, OptionType.PUT, BarrierDirection.UP, BarrierKnock.OUT)
        np.testing.assert_allclose(payoff.evaluate_paths(sample_paths), [0.0, 2.0, 15.0, 0.0])

    def test_up_and_in_call(self, sample_paths):
        payoff = BarrierPayoff(50.0, 60.0, OptionType.CALL, BarrierDirection.UP, BarrierKnock.IN)
        np.testing.assert_allclose(payoff.evaluate_paths(sample_paths), [0.0, 0.0, 0.0, 8.0])

    def test_spot_at_barrier_counts(self):
        """Column 0 is monitored: a path starting on the barrier is crossed."""
        payoff = down_and_out_call(40.0, 50.0)
        assert payoff.evaluate(np.array([50.0, 60.0, 70.0])) == 0.0

    def test_name(self):
        assert down_and_in_call(50.0, 45.0).name == "down-and-in call"

    def test_vanilla_counterpart(self):
        counterpart = down_and_out_call(50.0, 45.0).vanilla_counterpart()
        assert isinstance(counterpart, VanillaPayoff)
        assert counterpart.strike == 50.0

    def test_invalid_barrier(self):
        with pytest.raises(InvalidContractError, match="barrier must be > 0"):
            down_and_out_call(50.0, 0.0)

    def test_path_dependent(self):
        assert down_and_out_call(50.0, 45.0).is_path_dependent


class TestAsianPayoff:
    """Arithmetic average-price payoffs."""

    def test_call_excludes_initial_by_default(self, sample_paths):
        payoff = AsianPayoff(50.0, OptionType.CALL)
        averages = sample_paths[:, 1:].mean(axis=1)
        np.testing.assert_allclose(payoff.average(sample_paths), averages)
        np.testing.assert_allclose(
            payoff.evaluate_paths(sample_paths), np.maximum(averages - 50.0, 0.0)
        )

    def test_include_initial(self, sample_paths):
        payoff = AsianPayoff(50.0, OptionType.PUT, include_initial=True)
        averages = sample_paths.mean(axis=1)
        np.testing.assert_allclose(
            payoff.evaluate_paths(sample_paths), np.maximum(50.0 - averages, 0.0)
        )

    def test_single_node_path_rejected(self):
        payoff = AsianPayoff(50.0, OptionType.CALL)
        with pytest.raises(InvalidSampleSizeError, match="at least one node"):
            payoff.evaluate(np.array([50.0]))

    def test_average_below_terminal_for_rising_path(self):
        path = np.array([100.0, 110.0, 120.0, 130.0])
        asian = AsianPayoff(100.0, OptionType.CALL).evaluate(path)
        vanilla = VanillaPayoff(100.0, OptionType.CALL).evaluate(path)
        assert asian == pytest.approx(20.0)
        assert asian < vanilla


class TestFactory:
    """create_payoff by name."""

    @pytest.mark.parametrize(
        "kind,direction,knock",
        [
            ("up_and_in", BarrierDirection.UP, BarrierKnock.IN),
            ("up-and-out", BarrierDirection.UP, BarrierKnock.OUT),
            ("down_and_in", BarrierDirection.DOWN, BarrierKnock.IN),
            ("DOWN_AND_OUT", BarrierDirection.DOWN, BarrierKnock.OUT),
        ],
    )
    def test_barrier_kinds(self, kind, direction, knock):
        payoff = create_payoff(kind, 50.0, "put", barrier=40.0)
        assert isinstance(payoff, BarrierPayoff)
        assert payoff.direction == direction
        assert payoff.knock == knock
        assert payoff.option_type == OptionType.PUT

    def test_vanilla_and_asian(self):
        assert isinstance(create_payoff("vanilla", 10.0), VanillaPayoff)
        asian = create_payoff("asian", 10.0, include_initial=True)
        assert isinstance(asian, AsianPayoff)
        assert asian.include_initial

    def test_barrier_required(self):
        with pytest.raises(ValueError, match="barrier required"):
            create_payoff("down_and_out", 50.0)

    def test_unknown_kind(self):
        with pytest.raises(ValueError, match="Unknown payoff kind"):
            create_payoff("lookback", 50.0)


def test_intrinsic_value_vectorized():
    prices = np.array([90.0, 100.0, 110.0])
    np.testing.assert_allclose(intrinsic_value(prices, 100.0, OptionType.CALL), [0.0, 0.0, 10.0])
    np.testing.assert_allclose(intrinsic_value(prices, 100.0, OptionType.PUT), [10.0, 0.0, 0.0])
