"""
Exception taxonomy for Monte Carlo pricing.

Precondition violations are caller errors and subclass ValueError.
Numerical degeneracies subclass ArithmeticError so callers can catch
them separately and fall back to the plain estimator.

Unavailable closed-form benchmarks are not errors: they return None.
"""


class PricingPreconditionError(ValueError):
    """Raised when a pricing call is given inputs it cannot accept."""

    pass


class InvalidContractError(PricingPreconditionError):
    """Raised for non-positive spot/strike/volatility/maturity or bad schedules."""

    pass


class InvalidSampleSizeError(PricingPreconditionError):
    """Raised when a sample or path count is zero or negative."""

    pass


class DimensionMismatchError(PricingPreconditionError):
    """Raised when array shapes disagree with the simulation grid."""

    pass


class NumericalDegeneracyError(ArithmeticError):
    """Raised when an estimator cannot be formed from the sample."""

    pass


class SingularRegressionError(NumericalDegeneracyError):
    """Raised when the control variate has zero sample variance."""

    pass
