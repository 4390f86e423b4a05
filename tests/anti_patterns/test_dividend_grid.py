"""
Anti-pattern test: dividend dates drive the simulation grid.

[T1] Proportional {4/12}, fixed {2/12, 6/12}, T = 7/12:
     boundaries [2/12, 4/12, 6/12, 7/12], steps [2/12, 2/12, 2/12, 1/12],
     and the final step receives no dividend adjustment.

Dividend timing is date driven; no calendar fraction is special-cased.
"""

import numpy as np
import pytest

from mc_option_pricing.config.tolerances import SCHEDULE_TOLERANCE
from mc_option_pricing.errors import DimensionMismatchError
from mc_option_pricing.options.payoffs import OptionType
from mc_option_pricing.options.pricing.black_scholes import contract_greeks
from mc_option_pricing.options.simulation.dividends import DividendSchedule
from mc_option_pricing.options.simulation.gbm import GBMParams, dividend_paths_from_normals
from mc_option_pricing.options.simulation.monte_carlo import EuropeanMonteCarlo


@pytest.fixture
def flat_params() -> GBMParams:
    """Zero log drift: r - q - σ²/2 = 0."""
    return GBMParams(spot=50.0, rate=0.02, dividend=0.0, volatility=0.20, time_to_expiry=7 / 12)


@pytest.mark.anti_pattern
class TestDividendGrid:
    """Merged grid and dividend placement."""

    def test_merge_example(self, mixed_schedule) -> None:
        np.testing.assert_allclose(
            mixed_schedule.step_times(7 / 12), [2 / 12, 4 / 12, 6 / 12, 7 / 12],
            atol=SCHEDULE_TOLERANCE,
        )
        np.testing.assert_allclose(
            mixed_schedule.step_sizes(7 / 12), [2 / 12, 2 / 12, 2 / 12, 1 / 12],
            atol=SCHEDULE_TOLERANCE,
        )

    def test_last_step_unadjusted(self, flat_params, mixed_schedule) -> None:
        paths = dividend_paths_from_normals(flat_params, np.zeros((1, 4)), mixed_schedule)
        assert paths[0, -1] == pytest.approx(paths[0, -2])

    @pytest.mark.parametrize(
        "proportional,fixed",
        [
            (((1 / 12, 0.02),), ((5 / 12, 0.3),)),
            (((3 / 12, 0.02),), ((5 / 12, 0.3),)),
            (((0.1, 0.02), (0.2, 0.01)), ()),
        ],
    )
    def test_any_dates_accepted(self, flat_params, proportional, fixed) -> None:
        """Schedules at arbitrary dates price without special cases."""
        schedule = DividendSchedule(proportional=proportional, fixed=fixed)
        paths = dividend_paths_from_normals(
            flat_params, np.zeros((1, schedule.n_steps)), schedule
        )

        factor = schedule.proportional_factor
        assert paths.shape == (1, schedule.n_steps + 1)
        assert paths[0, -1] <= 50.0 * factor + 1e-9

    def test_wrong_column_count_halts(self, flat_params, mixed_schedule) -> None:
        with pytest.raises(DimensionMismatchError):
            dividend_paths_from_normals(flat_params, np.zeros((10, 5)), mixed_schedule)


@pytest.mark.anti_pattern
class TestMaturityDividend:
    """[T1] A dividend dated exactly at T never reduces S(T)."""

    @pytest.mark.parametrize(
        "schedule",
        [
            DividendSchedule(fixed=((7 / 12, 5.0),)),
            DividendSchedule(proportional=((7 / 12, 0.10),)),
            DividendSchedule(proportional=((7 / 12, 0.10),), fixed=((7 / 12, 5.0),)),
        ],
    )
    def test_terminal_unadjusted(self, flat_params, schedule) -> None:
        paths = dividend_paths_from_normals(
            flat_params, np.zeros((1, schedule.n_steps)), schedule
        )
        np.testing.assert_allclose(paths[0], 50.0)

    def test_earlier_dividends_still_applied(self, flat_params) -> None:
        schedule = DividendSchedule(fixed=((2 / 12, 1.0), (7 / 12, 5.0)))
        paths = dividend_paths_from_normals(flat_params, np.zeros((1, 3)), schedule)
        np.testing.assert_allclose(paths[0], [50.0, 49.0, 49.0, 49.0])

    def test_dividend_pricing_matches_no_dividend_benchmark(self, dividend_contract) -> None:
        """With every dividend at T the dividend and no-dividend terminals coincide."""
        schedule = DividendSchedule(
            proportional=((dividend_contract.time_to_expiry, 0.05),),
            fixed=((dividend_contract.time_to_expiry, 1.0),),
        )
        result = EuropeanMonteCarlo(dividend_contract).price_with_dividends(
            5000, OptionType.PUT, schedule, seed=6
        )
        closed_form = contract_greeks(dividend_contract, OptionType.PUT)

        assert result.cv_value == pytest.approx(closed_form.price, abs=1e-8)
        assert result.cv_delta == pytest.approx(closed_form.delta, abs=1e-8)
