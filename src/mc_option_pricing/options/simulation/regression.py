"""
Regression and sample statistics for Monte Carlo estimators.

[T1] Optimal control-variate coefficient: b* = Cov(X, Y) / Var(X)
[T1] Control-variate estimator: Ȳ(b) = Ȳ - b (X̄ - E[X])

The slope is computed with the two-pass (mean-centred) formula, which
bounds cancellation error when the sums of products are large.

See: Glasserman (2003) Section 4.1 - Control variates
"""

from dataclasses import dataclass

import numpy as np

from mc_option_pricing.errors import (
    DimensionMismatchError,
    InvalidSampleSizeError,
    SingularRegressionError,
)


@dataclass(frozen=True)
class SampleStatistics:
    """
    Mean and standard error of a sample.

    Attributes
    ----------
    mean : float
        Sample mean
    standard_error : float
        Sample standard deviation (ddof=1) / √N; 0 for a single sample
    n_samples : int
        Sample size
    """

    mean: float
    standard_error: float
    n_samples: int


def _as_sample(values: np.ndarray, name: str) -> np.ndarray:
    values = np.asarray(values, dtype=float).ravel()
    if values.size == 0:
        raise InvalidSampleSizeError(f"CRITICAL: {name} sample is empty")
    return values


def control_variate_coefficient(dependent: np.ndarray, independent: np.ndarray) -> float:
    """
    OLS slope of dependent on independent.

    [T1] b̂ = Σ(x - x̄)(y - ȳ) / Σ(x - x̄)²

    Parameters
    ----------
    dependent : np.ndarray
        Target sample Y (e.g. payoffs)
    independent : np.ndarray
        Control sample X (e.g. terminal prices)

    Returns
    -------
    float
        Regression coefficient b̂

    Raises
    ------
    DimensionMismatchError
        If the samples differ in length
    InvalidSampleSizeError
        If the samples are empty
    SingularRegressionError
        If the control sample has zero variance
    """
    y = _as_sample(dependent, "dependent")
    x = _as_sample(independent, "independent")

    if x.size != y.size:
        raise DimensionMismatchError(
            f"CRITICAL: regression samples differ in length: {y.size} vs {x.size}"
        )

    x_centred = x - x.mean()
    y_centred = y - y.mean()

    sxx = float(np.dot(x_centred, x_centred))
    if sxx == 0.0:
        raise SingularRegressionError(
            "CRITICAL: control variate has zero sample variance, "
            "regression coefficient is undefined"
        )

    return float(np.dot(x_centred, y_centred)) / sxx


def control_variate_estimate(
    target: np.ndarray,
    control: np.ndarray,
    control_mean: float,
) -> tuple[float, float]:
    """
    Control-variate corrected sample mean.

    [T1] Ŵ = mean(V) - b̂ (mean(X) - E[X])

    Parameters
    ----------
    target : np.ndarray
        Target sample V
    control : np.ndarray
        Control sample X
    control_mean : float
        Known expectation E[X]

    Returns
    -------
    tuple[float, float]
        (estimate, b_hat)
    """
    b_hat = control_variate_coefficient(target, control)
    estimate = float(np.mean(target)) - b_hat * (float(np.mean(control)) - control_mean)
    return estimate, b_hat


def control_variate_residuals(
    target: np.ndarray,
    control: np.ndarray,
    control_mean: float,
    b_hat: float,
) -> np.ndarray:
    """Per-path corrected samples V_i - b̂ (X_i - E[X]); their mean is the CV estimate."""
    target = np.asarray(target, dtype=float)
    control = np.asarray(control, dtype=float)
    return target - b_hat * (control - control_mean)


def discount_and_average(values: np.ndarray, discount_factor: float) -> float:
    """
    Discounted sample mean.

    [T1] (Σ v_i / N) * e^(-rT)

    Raises
    ------
    InvalidSampleSizeError
        If the sample is empty
    """
    values = _as_sample(values, "payoff")
    return float(values.mean() * discount_factor)


def sample_statistics(values: np.ndarray) -> SampleStatistics:
    """
    Compute sample mean and standard error.

    Raises
    ------
    InvalidSampleSizeError
        If the sample is empty
    """
    values = _as_sample(values, "payoff")
    n = values.size

    if n == 1:
        return SampleStatistics(mean=float(values[0]), standard_error=0.0, n_samples=1)

    se = values.std(ddof=1) / np.sqrt(n)
    return SampleStatistics(mean=float(values.mean()), standard_error=float(se), n_samples=n)
