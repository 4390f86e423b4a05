"""
Geometric Brownian Motion (GBM) path generation.

Implements exact log-normal simulation for Monte Carlo pricing:
- Endpoint-only sampling for European payoffs
- Full paths on a uniform grid for path-dependent payoffs
- Full paths on a dividend-date grid with discrete dividend drops
- NumPy vectorized operations across paths

[T1] GBM SDE: dS = (r - q)S dt + σS dW
[T1] Exact transition: S(t+dt) = S(t) * exp((r - q - σ²/2)dt + σ√dt * Z)

Functions named *_from_normals are pure transforms of a draw matrix; the
generate_* helpers draw their own normals from a seed.

See: Glasserman (2003) "Monte Carlo Methods in Financial Engineering"
"""

from dataclasses import dataclass

import numpy as np

from mc_option_pricing.errors import DimensionMismatchError, InvalidContractError, InvalidSampleSizeError
from mc_option_pricing.options.simulation.dividends import DividendSchedule
from mc_option_pricing.options.simulation.normals import make_generator, standard_normal_matrix


@dataclass(frozen=True)
class GBMParams:
    """
    Parameters for GBM simulation.

    Attributes
    ----------
    spot : float
        Initial spot price
    rate : float
        Risk-free rate (annualized, decimal)
    dividend : float
        Continuous dividend yield (annualized, decimal)
    volatility : float
        Volatility (annualized, decimal)
    time_to_expiry : float
        Time to expiry in years
    """

    spot: float
    rate: float
    dividend: float
    volatility: float
    time_to_expiry: float

    def __post_init__(self) -> None:
        """Validate parameters."""
        if self.spot <= 0:
            raise InvalidContractError(f"CRITICAL: spot must be > 0, got {self.spot}")
        if self.volatility <= 0:
            raise InvalidContractError(
                f"CRITICAL: volatility must be > 0, got {self.volatility}"
            )
        if self.time_to_expiry <= 0:
            raise InvalidContractError(
                f"CRITICAL: time_to_expiry must be > 0, got {self.time_to_expiry}"
            )

    @property
    def drift(self) -> float:
        """Risk-neutral log drift: r - q - σ²/2."""
        return self.rate - self.dividend - 0.5 * self.volatility**2

    @property
    def forward(self) -> float:
        """Forward price: S * exp((r-q)*T)."""
        return self.spot * np.exp((self.rate - self.dividend) * self.time_to_expiry)


@dataclass(frozen=True)
class PathResult:
    """
    Result of GBM path generation.

    Attributes
    ----------
    paths : np.ndarray
        Simulated paths, shape (n_paths, n_steps + 1); column 0 is the spot
    times : np.ndarray
        Time points, shape (n_steps + 1,)
    params : GBMParams
        Parameters used for simulation
    seed : int, optional
        Random seed used
    antithetic : bool
        Whether the second half of the paths mirrors the first
    """

    paths: np.ndarray
    times: np.ndarray
    params: GBMParams
    seed: int | None = None
    antithetic: bool = False

    @property
    def n_paths(self) -> int:
        """Number of paths."""
        return self.paths.shape[0]

    @property
    def n_steps(self) -> int:
        """Number of time steps."""
        return self.paths.shape[1] - 1

    @property
    def terminal_values(self) -> np.ndarray:
        """Terminal values of all paths."""
        return self.paths[:, -1]


def _as_matrix(z: np.ndarray) -> np.ndarray:
    z = np.asarray(z, dtype=float)
    if z.ndim == 1:
        z = z[:, np.newaxis]
    if z.ndim != 2:
        raise DimensionMismatchError(
            f"CRITICAL: draw matrix must be 1-D or 2-D, got {z.ndim} dimensions"
        )
    if z.shape[0] == 0:
        raise InvalidSampleSizeError("CRITICAL: draw matrix has no rows")
    return z


def terminal_values_from_normals(params: GBMParams, z: np.ndarray) -> np.ndarray:
    """
    Map standard normal draws to terminal prices (endpoint mode).

    [T1] S(T) = S(0) * exp((r - q - σ²/2)T + σ√T * Z)

    Parameters
    ----------
    params : GBMParams
        GBM parameters
    z : np.ndarray
        Draws, shape (n_paths,) or (n_paths, 1)

    Returns
    -------
    np.ndarray
        Terminal values, shape (n_paths,)
    """
    z = _as_matrix(z)
    if z.shape[1] != 1:
        raise DimensionMismatchError(
            f"CRITICAL: endpoint mode needs one draw per path, got {z.shape[1]} columns"
        )

    T = params.time_to_expiry
    log_returns = params.drift * T + params.volatility * np.sqrt(T) * z[:, 0]
    return params.spot * np.exp(log_returns)


def paths_from_normals(params: GBMParams, z: np.ndarray) -> np.ndarray:
    """
    Build full paths on a uniform grid of T / n_steps.

    The discretisation uses the exact GBM transition density, so there is
    no discretisation bias at the grid points.

    Parameters
    ----------
    params : GBMParams
        GBM parameters
    z : np.ndarray
        Draws, shape (n_paths, n_steps)

    Returns
    -------
    np.ndarray
        Paths, shape (n_paths, n_steps + 1), column 0 equal to spot
    """
    z = _as_matrix(z)
    n_paths, n_steps = z.shape

    dt = params.time_to_expiry / n_steps
    log_returns = params.drift * dt + params.volatility * np.sqrt(dt) * z

    paths = np.empty((n_paths, n_steps + 1))
    paths[:, 0] = params.spot
    paths[:, 1:] = params.spot * np.exp(np.cumsum(log_returns, axis=1))
    return paths


def dividend_paths_from_normals(
    params: GBMParams,
    z: np.ndarray,
    schedule: DividendSchedule,
) -> np.ndarray:
    """
    Build full paths on the merged dividend-date grid.

    Steps are the partition of [0, T] by the dividend dates. After the GBM
    update to each grid point the dividend paid there is applied, except at
    the final point (maturity), which never receives an adjustment. A
    dividend dated exactly at T adds a zero-length step and is not deducted.

    [T1] Proportional: S ← S * (1 - δ)
    [T1] Fixed:        S ← S - D

    Parameters
    ----------
    params : GBMParams
        GBM parameters
    z : np.ndarray
        Draws, shape (n_paths, schedule.n_steps)
    schedule : DividendSchedule
        Proportional and fixed dividends

    Returns
    -------
    np.ndarray
        Paths, shape (n_paths, schedule.n_steps + 1), column 0 equal to spot

    Raises
    ------
    DimensionMismatchError
        If the draw matrix column count differs from the schedule step count
    """
    z = _as_matrix(z)
    if z.shape[1] != schedule.n_steps:
        raise DimensionMismatchError(
            f"CRITICAL: draw matrix has {z.shape[1]} columns but the dividend "
            f"schedule partitions [0, T] into {schedule.n_steps} steps"
        )

    # A dividend dated at maturity keeps its grid point but is not deducted
    events = schedule.adjustments(params.time_to_expiry)
    step_sizes = schedule.step_sizes(params.time_to_expiry)

    paths = np.empty((z.shape[0], schedule.n_steps + 1))
    paths[:, 0] = params.spot

    current = np.full(z.shape[0], params.spot, dtype=float)
    for i, dt in enumerate(step_sizes):
        current = current * np.exp(
            params.drift * dt + params.volatility * np.sqrt(dt) * z[:, i]
        )
        if i < len(events):
            current = events[i].apply(current)
        paths[:, i + 1] = current

    return paths


def no_dividend_terminal_from_normals(
    params: GBMParams,
    z: np.ndarray,
    schedule: DividendSchedule,
) -> np.ndarray:
    """
    Terminal prices from the same draws with the discrete dividends omitted.

    Shares its randomness with dividend_paths_from_normals, which makes it
    a paired control for the dividend-paying payoff.

    [T1] S(T) = S(0) * exp((r - q - σ²/2)T + σ Σ √Δt_i Z_i)
    """
    z = _as_matrix(z)
    if z.shape[1] != schedule.n_steps:
        raise DimensionMismatchError(
            f"CRITICAL: draw matrix has {z.shape[1]} columns but the dividend "
            f"schedule partitions [0, T] into {schedule.n_steps} steps"
        )

    sqrt_steps = np.sqrt(schedule.step_sizes(params.time_to_expiry))
    diffusion = params.volatility * (z @ sqrt_steps)
    return params.spot * np.exp(params.drift * params.time_to_expiry + diffusion)


def generate_gbm_paths(
    params: GBMParams,
    n_paths: int,
    n_steps: int,
    seed: int | None = None,
    antithetic: bool = False,
) -> PathResult:
    """
    Generate GBM paths on a uniform grid.

    Parameters
    ----------
    params : GBMParams
        GBM parameters (spot, rate, dividend, volatility, time)
    n_paths : int
        Number of paths to simulate
    n_steps : int
        Number of time steps per path
    seed : int, optional
        Random seed for reproducibility
    antithetic : bool, default False
        Use antithetic variates; n_paths must then be even

    Returns
    -------
    PathResult
        Simulated paths and metadata

    Examples
    --------
    >>> params = GBMParams(spot=100, rate=0.05, dividend=0.02, volatility=0.20, time_to_expiry=1.0)
    >>> result = generate_gbm_paths(params, n_paths=10000, n_steps=252, seed=42)
    >>> bool(abs(result.terminal_values.mean() - params.forward) < 1.0)
    True
    """
    if n_paths <= 0:
        raise InvalidSampleSizeError(f"CRITICAL: n_paths must be > 0, got {n_paths}")
    if n_steps <= 0:
        raise InvalidSampleSizeError(f"CRITICAL: n_steps must be > 0, got {n_steps}")
    if antithetic and n_paths % 2 != 0:
        raise InvalidSampleSizeError(
            f"CRITICAL: n_paths must be even for antithetic, got {n_paths}"
        )

    rng = make_generator(seed)

    if antithetic:
        z = standard_normal_matrix(rng, n_paths // 2, n_steps)
        z = np.vstack([z, -z])
    else:
        z = standard_normal_matrix(rng, n_paths, n_steps)

    return PathResult(
        paths=paths_from_normals(params, z),
        times=np.linspace(0, params.time_to_expiry, n_steps + 1),
        params=params,
        seed=seed,
        antithetic=antithetic,
    )


def generate_dividend_paths(
    params: GBMParams,
    schedule: DividendSchedule,
    n_paths: int,
    seed: int | None = None,
) -> PathResult:
    """Generate paths on the dividend-date grid of a schedule."""
    z = standard_normal_matrix(make_generator(seed), n_paths, schedule.n_steps)

    return PathResult(
        paths=dividend_paths_from_normals(params, z, schedule),
        times=np.concatenate([[0.0], schedule.step_times(params.time_to_expiry)]),
        params=params,
        seed=seed,
    )


def generate_terminal_values(
    params: GBMParams,
    n_paths: int,
    seed: int | None = None,
    antithetic: bool = False,
) -> np.ndarray:
    """
    Generate only terminal values (faster for European options).

    Returns
    -------
    np.ndarray
        Terminal values, shape (n_paths,)
    """
    if n_paths <= 0:
        raise InvalidSampleSizeError(f"CRITICAL: n_paths must be > 0, got {n_paths}")
    if antithetic and n_paths % 2 != 0:
        raise InvalidSampleSizeError(
            f"CRITICAL: n_paths must be even for antithetic, got {n_paths}"
        )

    rng = make_generator(seed)

    if antithetic:
        z = standard_normal_matrix(rng, n_paths // 2)
        z = np.vstack([z, -z])
    else:
        z = standard_normal_matrix(rng, n_paths)

    return terminal_values_from_normals(params, z)


def validate_gbm_simulation(
    params: GBMParams,
    n_paths: int = 100000,
    seed: int = 42,
) -> dict:
    """
    Validate GBM simulation against theoretical moments.

    [T1] Under risk-neutral measure:
    - E[S(T)] = S(0) * exp((r-q)*T) (forward price)
    - Var[log(S(T)/S(0))] = σ²T

    Returns
    -------
    dict
        Validation results with theoretical vs simulated values
    """
    terminal = generate_terminal_values(params, n_paths, seed, antithetic=True)

    expected_mean = params.forward
    expected_log_var = params.volatility**2 * params.time_to_expiry

    simulated_mean = terminal.mean()
    simulated_log_var = np.log(terminal / params.spot).var()
    se_mean = terminal.std() / np.sqrt(n_paths)

    return {
        "n_paths": n_paths,
        "theoretical_mean": expected_mean,
        "simulated_mean": simulated_mean,
        "mean_error": abs(simulated_mean - expected_mean),
        "mean_se": se_mean,
        "mean_z_score": (simulated_mean - expected_mean) / se_mean,
        "theoretical_log_variance": expected_log_var,
        "simulated_log_variance": simulated_log_var,
        "variance_error_pct": abs(simulated_log_var - expected_log_var) / expected_log_var * 100,
        "validation_passed": abs(simulated_mean - expected_mean) / expected_mean < 0.01,
    }
