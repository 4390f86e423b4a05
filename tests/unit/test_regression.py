"""
Tests for the control-variate regression utility.

[T1] b̂ = Σ(x - x̄)(y - ȳ) / Σ(x - x̄)²
"""

import numpy as np
import pytest

from mc_option_pricing.errors import (
    DimensionMismatchError,
    InvalidSampleSizeError,
    NumericalDegeneracyError,
    SingularRegressionError,
)
from mc_option_pricing.options.simulation.regression import (
    control_variate_coefficient,
    control_variate_estimate,
    control_variate_residuals,
    discount_and_average,
    sample_statistics,
)


class TestCoefficient:
    """OLS slope."""

    def test_exact_line(self):
        x = np.array([1.0, 2.0, 3.0, 4.0])
        assert control_variate_coefficient(3.0 * x + 7.0, x) == pytest.approx(3.0)

    def test_matches_covariance_ratio(self):
        rng = np.random.default_rng(0)
        x = rng.standard_normal(1000)
        y = 0.5 * x + rng.standard_normal(1000)

        expected = np.cov(x, y)[0, 1] / np.var(x, ddof=1)
        assert control_variate_coefficient(y, x) == pytest.approx(expected)

    def test_stable_with_large_offset(self):
        """Two-pass centring keeps precision when x̄ dwarfs the spread."""
        x = 1e8 + np.array([0.0, 1.0, 2.0, 3.0])
        y = 2.0 * (x - 1e8)
        assert control_variate_coefficient(y, x) == pytest.approx(2.0, rel=1e-9)

    def test_length_mismatch(self):
        with pytest.raises(DimensionMismatchError, match="differ in length"):
            control_variate_coefficient(np.ones(3), np.arange(4.0))

    def test_empty(self):
        with pytest.raises(InvalidSampleSizeError, match="empty"):
            control_variate_coefficient(np.array([]), np.array([]))

    def test_constant_control(self):
        with pytest.raises(SingularRegressionError, match="zero sample variance"):
            control_variate_coefficient(np.arange(5.0), np.full(5, 2.0))

    def test_singular_is_numerical_degeneracy(self):
        """Callers can fall back to the plain estimator on NumericalDegeneracyError."""
        with pytest.raises(NumericalDegeneracyError):
            control_variate_coefficient(np.arange(3.0), np.ones(3))


class TestEstimate:
    """Control-variate corrected mean."""

    def test_correction_formula(self):
        x = np.array([1.0, 2.0, 3.0, 6.0])
        y = np.array([2.0, 3.0, 7.0, 12.0])
        estimate, b_hat = control_variate_estimate(y, x, control_mean=2.5)

        assert estimate == pytest.approx(y.mean() - b_hat * (x.mean() - 2.5))

    def test_no_correction_when_control_mean_matches(self):
        x = np.array([1.0, 2.0, 3.0])
        y = np.array([5.0, 1.0, 4.0])
        estimate, _ = control_variate_estimate(y, x, control_mean=x.mean())
        assert estimate == pytest.approx(y.mean())

    def test_residuals_average_to_estimate(self):
        rng = np.random.default_rng(4)
        x = rng.standard_normal(50)
        y = x**2 + x
        estimate, b_hat = control_variate_estimate(y, x, control_mean=0.0)

        residuals = control_variate_residuals(y, x, 0.0, b_hat)
        assert residuals.mean() == pytest.approx(estimate)

    def test_perfect_control_removes_noise(self):
        rng = np.random.default_rng(9)
        x = rng.standard_normal(100)
        estimate, _ = control_variate_estimate(4.0 * x + 1.0, x, control_mean=0.0)
        assert estimate == pytest.approx(1.0)


class TestAveraging:
    """Discounting and sample statistics."""

    def test_discount_and_average(self):
        assert discount_and_average(np.array([1.0, 2.0, 3.0]), 0.5) == pytest.approx(1.0)

    def test_discount_empty(self):
        with pytest.raises(InvalidSampleSizeError):
            discount_and_average(np.array([]), 0.9)

    def test_sample_statistics(self):
        values = np.array([1.0, 2.0, 3.0, 4.0])
        stats = sample_statistics(values)

        assert stats.mean == pytest.approx(2.5)
        assert stats.standard_error == pytest.approx(values.std(ddof=1) / 2.0)
        assert stats.n_samples == 4

    def test_single_sample_has_zero_error(self):
        stats = sample_statistics(np.array([3.0]))
        assert stats.standard_error == 0.0
        assert stats.mean == 3.0
