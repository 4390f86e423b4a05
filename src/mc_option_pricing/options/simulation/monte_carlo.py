"""
Monte Carlo option pricing engine.

Implements Monte Carlo estimators under Black-Scholes dynamics:
- European calls/puts with five variance-reduction modes
- Pathwise price/delta/vega analysis of European options
- European options on assets paying discrete dividends, with the
  no-dividend path as a paired control variate
- Path-dependent payoffs (barrier, Asian) on full simulated paths

Every pricing call builds its own generator from the seed, so identical
seed, parameters and mode give bit-identical results.

[T1] MC converges to analytical price at rate 1/√N

See: Glasserman (2003) "Monte Carlo Methods in Financial Engineering", Ch. 4
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from functools import reduce
from typing import Optional

import numpy as np

from mc_option_pricing.config.settings import SETTINGS
from mc_option_pricing.errors import DimensionMismatchError, InvalidSampleSizeError
from mc_option_pricing.options.contract import OptionContract
from mc_option_pricing.options.payoffs.barrier import BarrierPayoff
from mc_option_pricing.options.payoffs.base import OptionType, PathPayoff, VanillaPayoff
from mc_option_pricing.options.pricing.barrier import barrier_closed_form
from mc_option_pricing.options.pricing.black_scholes import contract_greeks, contract_price
from mc_option_pricing.options.simulation.dividends import NO_DIVIDENDS, DividendSchedule
from mc_option_pricing.options.simulation.gbm import (
    dividend_paths_from_normals,
    no_dividend_terminal_from_normals,
    paths_from_normals,
    terminal_values_from_normals,
)
from mc_option_pricing.options.simulation.normals import (
    make_generator,
    spawn_generators,
    split_paths,
    standard_normal_matrix,
)
from mc_option_pricing.options.simulation.regression import (
    control_variate_coefficient,
    control_variate_residuals,
    discount_and_average,
)

logger = logging.getLogger(__name__)


class VarianceReduction(Enum):
    """Estimator used by EuropeanMonteCarlo.price."""

    VANILLA = "vanilla"
    ANTITHETIC = "antithetic"
    CONTROL_VARIATE = "control_variate"
    MOMENT_MATCHING = "moment_matching"
    MOMENT_MATCHING_CONTROL_VARIATE = "moment_matching_control_variate"


@dataclass(frozen=True)
class MCResult:
    """
    Monte Carlo pricing result.

    Attributes
    ----------
    price : float
        Option price (discounted estimate)
    standard_error : float
        Standard error of the estimate
    confidence_interval : tuple[float, float]
        95% confidence interval
    n_paths : int
        Number of draws requested
    payoffs : np.ndarray
        Individual path payoffs (undiscounted); 2 * n_paths for antithetic
    discount_factor : float
        Discount factor used
    method : VarianceReduction
        Estimator used
    control_coefficient : float, optional
        Regression coefficient b̂ for control-variate estimators
    """

    price: float
    standard_error: float
    confidence_interval: tuple[float, float]
    n_paths: int
    payoffs: np.ndarray
    discount_factor: float
    method: VarianceReduction = VarianceReduction.VANILLA
    control_coefficient: Optional[float] = None

    @property
    def n_samples(self) -> int:
        """Number of payoff samples pooled into the estimate."""
        return len(self.payoffs)

    @property
    def relative_error(self) -> float:
        """Relative standard error (SE / price)."""
        if abs(self.price) < 1e-10:
            return float("inf")
        return self.standard_error / abs(self.price)

    @property
    def ci_width(self) -> float:
        """Width of 95% confidence interval."""
        return self.confidence_interval[1] - self.confidence_interval[0]


@dataclass(frozen=True)
class EuropeanAnalysis:
    """
    Pathwise price and sensitivity estimates for a European call and put.

    [T1] Call delta sample: 1{S_T > K} S_T / S
    [T1] Call vega sample:  1{S_T > K} S_T (-σT + √T Z)
    Put samples are the negated sensitivities on 1{S_T <= K}.
    """

    call: float
    delta_call: float
    vega_call: float
    put: float
    delta_put: float
    vega_put: float

    def as_dict(self) -> dict[str, float]:
        """Estimates keyed by name."""
        return {
            "call": self.call,
            "delta_call": self.delta_call,
            "vega_call": self.vega_call,
            "put": self.put,
            "delta_put": self.delta_put,
            "vega_put": self.vega_put,
        }


@dataclass(frozen=True)
class DividendPricingResult:
    """
    Estimates for a European option on a dividend-paying asset.

    Attributes
    ----------
    value : float
        Plain Monte Carlo price
    delta : float
        Pathwise delta
    cv_value : float
        Price corrected with the no-dividend payoff as control
    cv_delta : float
        Delta corrected with the no-dividend pathwise delta as control
    value_coefficient : float
        b̂ used for cv_value
    delta_coefficient : float
        b̂ used for cv_delta
    """

    value: float
    delta: float
    cv_value: float
    cv_delta: float
    value_coefficient: float
    delta_coefficient: float

    def as_list(self) -> list[float]:
        """[value, delta, cv_value, cv_delta]."""
        return [self.value, self.delta, self.cv_value, self.cv_delta]


def _resolve_seed(seed: Optional[int]) -> int:
    return SETTINGS.simulation.seed if seed is None else seed


def _check_n_paths(n_paths: int) -> None:
    if n_paths <= 0:
        raise InvalidSampleSizeError(f"CRITICAL: n_paths must be > 0, got {n_paths}")


def _compute_result(
    samples: np.ndarray,
    payoffs: np.ndarray,
    discount_factor: float,
    n_paths: int,
    method: VarianceReduction,
    control_coefficient: Optional[float] = None,
) -> MCResult:
    """
    Build an MCResult from per-sample discounted estimator contributions.

    Parameters
    ----------
    samples : np.ndarray
        Discounted, independent estimator samples whose mean is the price
    payoffs : np.ndarray
        Undiscounted payoffs kept for inspection
    """
    price = float(samples.mean())
    if len(samples) > 1:
        se = float(samples.std(ddof=1) / np.sqrt(len(samples)))
    else:
        se = 0.0

    z = SETTINGS.simulation.confidence_z
    return MCResult(
        price=price,
        standard_error=se,
        confidence_interval=(price - z * se, price + z * se),
        n_paths=n_paths,
        payoffs=payoffs,
        discount_factor=discount_factor,
        method=method,
        control_coefficient=control_coefficient,
    )


class EuropeanMonteCarlo:
    """
    Monte Carlo estimators for a European option contract.

    Parameters
    ----------
    contract : OptionContract
        Contract terms and market parameters

    Examples
    --------
    >>> contract = OptionContract(spot=41, strike=42, time_to_expiry=0.75,
    ...                           volatility=0.25, rate=0.03, dividend=0.01)
    >>> engine = EuropeanMonteCarlo(contract)
    >>> put = engine.price(100_000, OptionType.PUT, VarianceReduction.CONTROL_VARIATE, seed=1)
    """

    def __init__(self, contract: OptionContract):
        self.contract = contract
        self.params = contract.gbm_params

    @property
    def discount_factor(self) -> float:
        """Discount factor: exp(-rT)."""
        return self.contract.discount_factor

    def _payoff(self, option_type: OptionType) -> VanillaPayoff:
        return VanillaPayoff(self.contract.strike, option_type)

    def _draw_terminal(self, rng: np.random.Generator, n_paths: int) -> tuple[np.ndarray, np.ndarray]:
        z = standard_normal_matrix(rng, n_paths, 1)[:, 0]
        return z, terminal_values_from_normals(self.params, z)

    def price(
        self,
        n_paths: int,
        option_type: OptionType,
        method: VarianceReduction = VarianceReduction.VANILLA,
        seed: Optional[int] = None,
    ) -> float:
        """
        Price the option with the selected estimator.

        Parameters
        ----------
        n_paths : int
            Number of normal draws N
        option_type : OptionType
            Call or put
        method : VarianceReduction, default VANILLA
            Estimator
        seed : int, optional
            Seed; defaults to SETTINGS.simulation.seed

        Returns
        -------
        float
            Price estimate
        """
        return self.price_result(n_paths, option_type, method, seed).price

    def price_result(
        self,
        n_paths: int,
        option_type: OptionType,
        method: VarianceReduction = VarianceReduction.VANILLA,
        seed: Optional[int] = None,
    ) -> MCResult:
        """
        Price the option and report standard error and confidence interval.

        Raises
        ------
        InvalidSampleSizeError
            If n_paths <= 0
        SingularRegressionError
            If a control-variate mode sees zero variance in S(T)
        """
        _check_n_paths(n_paths)
        seed = _resolve_seed(seed)
        rng = make_generator(seed)
        payoff = self._payoff(option_type)

        if method == VarianceReduction.VANILLA:
            result = self._price_vanilla(rng, n_paths, payoff)
        elif method == VarianceReduction.ANTITHETIC:
            result = self._price_antithetic(rng, n_paths, payoff)
        elif method == VarianceReduction.CONTROL_VARIATE:
            result = self._price_control_variate(rng, n_paths, payoff)
        elif method == VarianceReduction.MOMENT_MATCHING:
            result = self._price_moment_matching(rng, n_paths, payoff)
        elif method == VarianceReduction.MOMENT_MATCHING_CONTROL_VARIATE:
            result = self._price_moment_matching_control_variate(rng, n_paths, payoff)
        else:
            raise ValueError(f"CRITICAL: Unknown variance reduction method {method!r}")

        logger.debug(
            f"{option_type.value} {method.value}: N={n_paths} seed={seed} "
            f"price={result.price:.6f} se={result.standard_error:.6f}"
        )
        return result

    def _price_vanilla(
        self, rng: np.random.Generator, n_paths: int, payoff: VanillaPayoff
    ) -> MCResult:
        """[T1] V = e^(-rT) mean(payoff(S_T))."""
        _, terminal = self._draw_terminal(rng, n_paths)
        payoffs = payoff.terminal_payoff(terminal)
        df = self.discount_factor

        return _compute_result(payoffs * df, payoffs, df, n_paths, VarianceReduction.VANILLA)

    def _price_antithetic(
        self, rng: np.random.Generator, n_paths: int, payoff: VanillaPayoff
    ) -> MCResult:
        """
        Pool payoffs of Z and -Z.

        The estimate is the mean of all 2N payoffs; the standard error is
        taken over the N pair averages, which are independent.
        """
        z, terminal = self._draw_terminal(rng, n_paths)
        mirrored = terminal_values_from_normals(self.params, -z)

        payoffs = np.concatenate(
            [payoff.terminal_payoff(terminal), payoff.terminal_payoff(mirrored)]
        )
        df = self.discount_factor
        pair_averages = 0.5 * (payoffs[:n_paths] + payoffs[n_paths:]) * df

        return _compute_result(pair_averages, payoffs, df, n_paths, VarianceReduction.ANTITHETIC)

    def _control_variate_result(
        self,
        terminal: np.ndarray,
        payoff: VanillaPayoff,
        n_paths: int,
        method: VarianceReduction,
    ) -> MCResult:
        """
        Regress discounted payoffs on S(T), whose mean is the forward.

        [T1] Ŵ = mean(e^(-rT) V) - b̂ (mean(S_T) - S e^((r-q)T))
        """
        payoffs = payoff.terminal_payoff(terminal)
        df = self.discount_factor
        discounted = payoffs * df

        b_hat = control_variate_coefficient(discounted, terminal)
        samples = control_variate_residuals(discounted, terminal, self.contract.forward, b_hat)

        return _compute_result(samples, payoffs, df, n_paths, method, control_coefficient=b_hat)

    def _price_control_variate(
        self, rng: np.random.Generator, n_paths: int, payoff: VanillaPayoff
    ) -> MCResult:
        _, terminal = self._draw_terminal(rng, n_paths)
        return self._control_variate_result(
            terminal, payoff, n_paths, VarianceReduction.CONTROL_VARIATE
        )

    def _moment_matched_terminal(self, rng: np.random.Generator, n_paths: int) -> np.ndarray:
        """[T1] S'_i = S_i * F / mean(S), so mean(S') equals the forward F."""
        _, terminal = self._draw_terminal(rng, n_paths)
        return terminal * (self.contract.forward / terminal.mean())

    def _price_moment_matching(
        self, rng: np.random.Generator, n_paths: int, payoff: VanillaPayoff
    ) -> MCResult:
        terminal = self._moment_matched_terminal(rng, n_paths)
        payoffs = payoff.terminal_payoff(terminal)
        df = self.discount_factor

        return _compute_result(
            payoffs * df, payoffs, df, n_paths, VarianceReduction.MOMENT_MATCHING
        )

    def _price_moment_matching_control_variate(
        self, rng: np.random.Generator, n_paths: int, payoff: VanillaPayoff
    ) -> MCResult:
        terminal = self._moment_matched_terminal(rng, n_paths)
        return self._control_variate_result(
            terminal, payoff, n_paths, VarianceReduction.MOMENT_MATCHING_CONTROL_VARIATE
        )

    def analyze(self, n_paths: int, seed: Optional[int] = None) -> EuropeanAnalysis:
        """
        Estimate call/put prices, deltas and vegas from one set of draws.

        Uses pathwise derivatives of S(T) = S exp((r-q-σ²/2)T + σ√T Z):
        dS(T)/dS = S(T)/S and dS(T)/dσ = S(T)(-σT + √T Z).

        Returns
        -------
        EuropeanAnalysis
            Discounted sample means of each estimator
        """
        _check_n_paths(n_paths)
        seed = _resolve_seed(seed)
        rng = make_generator(seed)

        z, terminal = self._draw_terminal(rng, n_paths)
        K = self.contract.strike
        S = self.contract.spot
        T = self.contract.time_to_expiry
        sigma = self.contract.volatility
        df = self.discount_factor

        call_itm = terminal > K
        d_sigma = terminal * (-sigma * T + np.sqrt(T) * z)

        analysis = EuropeanAnalysis(
            call=discount_and_average(np.where(call_itm, terminal - K, 0.0), df),
            delta_call=discount_and_average(np.where(call_itm, terminal / S, 0.0), df),
            vega_call=discount_and_average(np.where(call_itm, d_sigma, 0.0), df),
            put=discount_and_average(np.where(call_itm, 0.0, K - terminal), df),
            delta_put=discount_and_average(np.where(call_itm, 0.0, -terminal / S), df),
            vega_put=discount_and_average(np.where(call_itm, 0.0, -d_sigma), df),
        )

        logger.debug(f"analyze: N={n_paths} seed={seed} {analysis.as_dict()}")
        return analysis

    def _pathwise_delta_samples(
        self,
        option_type: OptionType,
        exercise_prices: np.ndarray,
        sensitivity_prices: np.ndarray,
    ) -> np.ndarray:
        """
        Pathwise delta samples, undiscounted.

        [T1] Put:  1{S_T < K} (-S̃_T / S)
        [T1] Call: 1{S_T > K} ( S̃_T / S)

        exercise_prices decide the indicator; sensitivity_prices give S̃_T.
        """
        K = self.contract.strike
        ratio = sensitivity_prices / self.contract.spot
        if option_type == OptionType.PUT:
            return np.where(exercise_prices < K, -ratio, 0.0)
        return np.where(exercise_prices > K, ratio, 0.0)

    def price_with_dividends(
        self,
        n_paths: int,
        option_type: OptionType,
        schedule: DividendSchedule = NO_DIVIDENDS,
        seed: Optional[int] = None,
        control_variate: bool = True,
    ) -> DividendPricingResult:
        """
        Price a European option on an asset paying discrete dividends.

        The draws (N, |proportional| + |fixed| + 1) drive both the dividend
        path and a no-dividend counterfactual S̃_T. Shared randomness makes
        the no-dividend payoff and delta strongly correlated controls whose
        expectations are the Black-Scholes price and delta.

        [T1] Pathwise delta: dS_T/dS = (S̃_T / S) Π(1 - δ_i) over dividends paid before T;
             fixed dividends are additive and do not change the derivative.
        [T1] Ŵ = V̂ - b̂ (V̂_nodiv - V_BS)

        Parameters
        ----------
        n_paths : int
            Number of paths N
        option_type : OptionType
            Call or put
        schedule : DividendSchedule
            Proportional and fixed dividends
        seed : int, optional
            Seed; defaults to SETTINGS.simulation.seed
        control_variate : bool, default True
            When False the regression step is skipped: b̂ = 0 and the
            corrected estimates equal the plain ones

        Returns
        -------
        DividendPricingResult
            value, delta, cv_value, cv_delta

        Raises
        ------
        SingularRegressionError
            If a control has zero sample variance (e.g. no no-dividend path
            finishes in the money); retry with control_variate=False
        """
        _check_n_paths(n_paths)
        seed = _resolve_seed(seed)
        rng = make_generator(seed)
        payoff = self._payoff(option_type)
        df = self.discount_factor

        z = standard_normal_matrix(rng, n_paths, schedule.n_steps)
        terminal = dividend_paths_from_normals(self.params, z, schedule)[:, -1]
        terminal_nodiv = no_dividend_terminal_from_normals(self.params, z, schedule)

        payoffs = payoff.terminal_payoff(terminal)
        value = discount_and_average(payoffs, df)

        factor = schedule.adjustment_factor(self.contract.time_to_expiry)
        delta_samples = factor * self._pathwise_delta_samples(option_type, terminal, terminal_nodiv)
        delta = discount_and_average(delta_samples, df)

        if control_variate:
            closed_form = contract_greeks(self.contract, option_type)

            payoffs_nodiv = payoff.terminal_payoff(terminal_nodiv)
            b_value = control_variate_coefficient(payoffs, payoffs_nodiv)
            cv_value = value - b_value * (
                discount_and_average(payoffs_nodiv, df) - closed_form.price
            )

            delta_nodiv = self._pathwise_delta_samples(option_type, terminal_nodiv, terminal_nodiv)
            b_delta = control_variate_coefficient(delta_samples, delta_nodiv)
            cv_delta = delta - b_delta * (
                discount_and_average(delta_nodiv, df) - closed_form.delta
            )
        else:
            b_value = b_delta = 0.0
            cv_value, cv_delta = value, delta

        result = DividendPricingResult(
            value=value,
            delta=delta,
            cv_value=cv_value,
            cv_delta=cv_delta,
            value_coefficient=b_value,
            delta_coefficient=b_delta,
        )
        logger.debug(
            f"dividend {option_type.value}: N={n_paths} seed={seed} "
            f"dividends={schedule.n_dividends} {result.as_list()}"
        )
        return result


class PathDependentMonteCarlo:
    """
    Monte Carlo pricing of a payoff over full simulated paths.

    Parameters
    ----------
    contract : OptionContract
        Market parameters (spot, rate, dividend yield, volatility, maturity)
    payoff : PathPayoff
        Barrier, Asian or vanilla payoff

    Examples
    --------
    >>> contract = OptionContract(spot=50, strike=50, time_to_expiry=1.0, volatility=0.3, rate=0.05)
    >>> engine = PathDependentMonteCarlo(contract, down_and_out_call(50, 40))
    >>> price = engine.price(path_length=252, n_paths=50_000, seed=1)
    """

    def __init__(self, contract: OptionContract, payoff: PathPayoff):
        self.contract = contract
        self.payoff = payoff
        self.params = contract.gbm_params

    def simulate(
        self,
        path_length: int,
        n_paths: int,
        seed: Optional[int] = None,
        schedule: Optional[DividendSchedule] = None,
    ) -> np.ndarray:
        """
        Simulate the path set used by price().

        Without a schedule the grid is uniform with path_length steps. With
        a schedule the grid is the dividend partition, and path_length must
        equal schedule.n_steps.

        Returns
        -------
        np.ndarray
            Paths, shape (n_paths, path_length + 1)
        """
        _check_n_paths(n_paths)
        if path_length <= 0:
            raise InvalidSampleSizeError(f"CRITICAL: path_length must be > 0, got {path_length}")
        if schedule is not None and path_length != schedule.n_steps:
            raise DimensionMismatchError(
                f"CRITICAL: path_length {path_length} does not match the "
                f"{schedule.n_steps} steps of the dividend schedule"
            )

        rng = make_generator(_resolve_seed(seed))
        z = standard_normal_matrix(rng, n_paths, path_length)

        if schedule is None:
            return paths_from_normals(self.params, z)
        return dividend_paths_from_normals(self.params, z, schedule)

    def price(
        self,
        path_length: int,
        n_paths: int,
        seed: Optional[int] = None,
        schedule: Optional[DividendSchedule] = None,
    ) -> float:
        """
        Discounted average payoff over simulated paths.

        Parameters
        ----------
        path_length : int
            Number of simulation steps per path
        n_paths : int
            Number of paths
        seed : int, optional
            Seed; defaults to SETTINGS.simulation.seed
        schedule : DividendSchedule, optional
            Discrete dividends; fixes the grid to the dividend partition

        Returns
        -------
        float
            Price estimate
        """
        return self.price_result(path_length, n_paths, seed, schedule).price

    def price_result(
        self,
        path_length: int,
        n_paths: int,
        seed: Optional[int] = None,
        schedule: Optional[DividendSchedule] = None,
    ) -> MCResult:
        """Price over simulated paths with standard error."""
        paths = self.simulate(path_length, n_paths, seed, schedule)
        payoffs = self.payoff.evaluate_paths(paths)
        df = self.contract.discount_factor

        result = _compute_result(payoffs * df, payoffs, df, n_paths, VarianceReduction.VANILLA)
        logger.debug(
            f"{self.payoff!r}: steps={path_length} N={n_paths} "
            f"price={result.price:.6f} se={result.standard_error:.6f}"
        )
        return result

    def closed_form(self) -> Optional[float]:
        """
        Continuous-monitoring closed-form benchmark, if one exists.

        Returns
        -------
        float or None
            None when no closed form is available for this payoff
        """
        if isinstance(self.payoff, BarrierPayoff):
            return barrier_closed_form(self.contract, self.payoff)
        if isinstance(self.payoff, VanillaPayoff):
            terms = OptionContract(
                spot=self.contract.spot,
                strike=self.payoff.strike,
                time_to_expiry=self.contract.time_to_expiry,
                volatility=self.contract.volatility,
                rate=self.contract.rate,
                dividend=self.contract.dividend,
            )
            return contract_price(terms, self.payoff.option_type)
        return None


def price_vanilla_mc(
    spot: float,
    strike: float,
    rate: float,
    dividend: float,
    volatility: float,
    time_to_expiry: float,
    option_type: OptionType,
    n_paths: Optional[int] = None,
    seed: Optional[int] = None,
    method: VarianceReduction = VarianceReduction.VANILLA,
) -> MCResult:
    """
    Convenience function to price vanilla option via MC.

    n_paths defaults to SETTINGS.simulation.n_paths.

    Returns
    -------
    MCResult
        Monte Carlo pricing result
    """
    contract = OptionContract(
        spot=spot,
        strike=strike,
        time_to_expiry=time_to_expiry,
        volatility=volatility,
        rate=rate,
        dividend=dividend,
    )
    if n_paths is None:
        n_paths = SETTINGS.simulation.n_paths
    return EuropeanMonteCarlo(contract).price_result(n_paths, option_type, method, seed)


def monte_carlo_price(
    spot: float,
    strike: float,
    rate: float,
    dividend: float,
    volatility: float,
    time_to_expiry: float,
    n_paths: int = 100000,
    option_type: str = "call",
    seed: Optional[int] = None,
    method: str = "vanilla",
) -> float:
    """
    Price a vanilla option via Monte Carlo, returning just the price.

    Examples
    --------
    >>> price = monte_carlo_price(100, 100, 0.05, 0.02, 0.20, 1.0, seed=42)
    """
    opt_type = OptionType.CALL if option_type.lower() == "call" else OptionType.PUT

    result = price_vanilla_mc(
        spot=spot,
        strike=strike,
        rate=rate,
        dividend=dividend,
        volatility=volatility,
        time_to_expiry=time_to_expiry,
        option_type=opt_type,
        n_paths=n_paths,
        seed=seed,
        method=VarianceReduction(method.lower()),
    )
    return result.price


def _partial_moments(
    params_and_payoff: tuple[OptionContract, VanillaPayoff],
    rng: np.random.Generator,
    n_paths: int,
) -> tuple[int, float, float]:
    """Worker summary (n, mean, M2) with M2 = Σ(x - x̄)² from two passes."""
    contract, payoff = params_and_payoff
    z = standard_normal_matrix(rng, n_paths, 1)
    payoffs = payoff.terminal_payoff(terminal_values_from_normals(contract.gbm_params, z))
    mean = float(payoffs.mean())
    return n_paths, mean, float(np.sum((payoffs - mean) ** 2))


def _merge_moments(
    left: tuple[int, float, float], right: tuple[int, float, float]
) -> tuple[int, float, float]:
    """
    Combine two (n, mean, M2) summaries.

    [T1] Chan et al. (1979): δ = x̄_b - x̄_a,
         M2 = M2_a + M2_b + δ² n_a n_b / (n_a + n_b)
    """
    n_a, mean_a, m2_a = left
    n_b, mean_b, m2_b = right
    n = n_a + n_b
    delta = mean_b - mean_a
    mean = mean_a + delta * n_b / n
    return n, mean, m2_a + m2_b + delta**2 * n_a * n_b / n


def price_parallel(
    contract: OptionContract,
    option_type: OptionType,
    n_paths: int,
    seed: Optional[int] = None,
    n_workers: int = 4,
) -> MCResult:
    """
    Plain Monte Carlo price with paths partitioned across workers.

    Each worker owns an independent stream spawned from the seed and returns
    its count, mean and centred sum of squares; the summaries are merged in
    worker order. Results depend on (seed, n_workers) only.

    Returns
    -------
    MCResult
        Result with empty payoffs array (payoffs stay in the workers)
    """
    _check_n_paths(n_paths)
    seed = _resolve_seed(seed)
    n_workers = min(n_workers, n_paths)

    generators = spawn_generators(seed, n_workers)
    chunks = split_paths(n_paths, n_workers)
    job = (contract, VanillaPayoff(contract.strike, option_type))

    with ThreadPoolExecutor(max_workers=n_workers) as executor:
        partials = list(
            executor.map(lambda args: _partial_moments(job, *args), zip(generators, chunks))
        )

    n, mean, m2 = reduce(_merge_moments, partials)

    df = contract.discount_factor
    variance = m2 / (n - 1) if n > 1 else 0.0
    se = df * np.sqrt(variance / n)
    price = df * mean

    z = SETTINGS.simulation.confidence_z
    logger.debug(f"parallel {option_type.value}: N={n} workers={n_workers} price={price:.6f}")
    return MCResult(
        price=price,
        standard_error=float(se),
        confidence_interval=(price - z * se, price + z * se),
        n_paths=n,
        payoffs=np.empty(0),
        discount_factor=df,
    )


def convergence_analysis(
    contract: OptionContract,
    option_type: OptionType,
    path_counts: tuple[int, ...] = (1000, 5000, 10000, 50000, 100000),
    method: VarianceReduction = VarianceReduction.VANILLA,
    seed: int = 42,
) -> dict:
    """
    Analyze MC convergence to the Black-Scholes price.

    [T1] MC error should converge at rate 1/√N.

    Returns
    -------
    dict
        Per-N results and the fitted convergence rate
    """
    analytical_price = contract_price(contract, option_type)
    engine = EuropeanMonteCarlo(contract)
    results = []

    for n in path_counts:
        mc_result = engine.price_result(n, option_type, method, seed)
        lower, upper = mc_result.confidence_interval
        within_ci = lower <= analytical_price <= upper
        if not within_ci:
            logger.warning(
                f"N={n}: closed form {analytical_price:.6f} outside [{lower:.6f}, {upper:.6f}]"
            )

        error = abs(mc_result.price - analytical_price)
        rel_error = error / analytical_price if analytical_price > 0 else float("inf")

        results.append(
            {
                "n_paths": n,
                "mc_price": mc_result.price,
                "analytical_price": analytical_price,
                "absolute_error": error,
                "relative_error": rel_error,
                "standard_error": mc_result.standard_error,
                "within_ci": within_ci,
            }
        )

    rate = _estimate_convergence_rate(results)
    logger.info(f"convergence {method.value}: fitted SE rate {rate:.3f} over {len(results)} sizes")
    return {
        "results": results,
        "convergence_rate": rate,
    }


def _estimate_convergence_rate(results: list[dict]) -> float:
    """
    Estimate convergence rate from the standard errors.

    [T1] Theory predicts rate = -0.5 (error ~ 1/√N).
    """
    log_n = np.log([r["n_paths"] for r in results])
    log_se = np.log([r["standard_error"] + 1e-12 for r in results])

    return control_variate_coefficient(log_se, log_n)
