"""
Discrete dividend schedules.

A schedule holds two independent date-ordered sequences:
- proportional dividends multiply the asset by (1 - amount) on the date
- fixed (cash) dividends subtract amount from the asset on the date

Merged together with maturity, the dividend dates partition [0, T] into
|proportional| + |fixed| + 1 simulation steps. Ties are broken by applying
the proportional dividend first.

[T1] S(t+) = S(t-) * (1 - δ)   (proportional)
[T1] S(t+) = S(t-) - D         (fixed)

See: Hull (2021) Ch. 17 - Options on stocks paying known dividends
"""

from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from mc_option_pricing.errors import InvalidContractError


class DividendKind(Enum):
    """Dividend adjustment type. Declaration order is the tie-break order."""

    PROPORTIONAL = "proportional"
    FIXED = "fixed"


_TIE_ORDER = {DividendKind.PROPORTIONAL: 0, DividendKind.FIXED: 1}


@dataclass(frozen=True)
class DividendEvent:
    """
    Single dividend payment.

    Attributes
    ----------
    time : float
        Payment time in years from valuation
    amount : float
        Proportion (for PROPORTIONAL) or cash amount (for FIXED)
    kind : DividendKind
        Adjustment type
    """

    time: float
    amount: float
    kind: DividendKind

    def apply(self, prices: np.ndarray) -> np.ndarray:
        """Apply the dividend drop to an array of asset prices."""
        if self.kind == DividendKind.PROPORTIONAL:
            return prices * (1.0 - self.amount)
        return prices - self.amount


def _validate_sequence(name: str, entries: tuple[tuple[float, float], ...]) -> None:
    previous = 0.0
    for time, amount in entries:
        if time <= previous:
            raise InvalidContractError(
                f"CRITICAL: {name} dividend times must be > 0 and strictly increasing, "
                f"got {time} after {previous}"
            )
        if amount < 0:
            raise InvalidContractError(
                f"CRITICAL: {name} dividend amount must be >= 0, got {amount}"
            )
        previous = time


@dataclass(frozen=True)
class DividendSchedule:
    """
    Proportional and fixed dividend schedules for one underlying.

    Attributes
    ----------
    proportional : tuple[tuple[float, float], ...]
        (time, proportion) pairs, proportion in [0, 1)
    fixed : tuple[tuple[float, float], ...]
        (time, cash amount) pairs

    Examples
    --------
    >>> schedule = DividendSchedule(proportional=((4 / 12, 0.02),),
    ...                             fixed=((2 / 12, 0.5), (6 / 12, 0.5)))
    >>> schedule.step_sizes(7 / 12).round(4).tolist()
    [0.1667, 0.1667, 0.1667, 0.0833]
    """

    proportional: tuple[tuple[float, float], ...] = field(default_factory=tuple)
    fixed: tuple[tuple[float, float], ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Normalise to tuples and validate ordering."""
        object.__setattr__(
            self, "proportional", tuple((float(t), float(a)) for t, a in self.proportional)
        )
        object.__setattr__(self, "fixed", tuple((float(t), float(a)) for t, a in self.fixed))

        _validate_sequence("proportional", self.proportional)
        _validate_sequence("fixed", self.fixed)

        for time, amount in self.proportional:
            if amount >= 1.0:
                raise InvalidContractError(
                    f"CRITICAL: proportional dividend must be < 1, got {amount} at t={time}"
                )

    @classmethod
    def from_lists(
        cls,
        proportional_times: list[float] | None = None,
        proportional_amounts: list[float] | None = None,
        fixed_times: list[float] | None = None,
        fixed_amounts: list[float] | None = None,
    ) -> "DividendSchedule":
        """Build a schedule from parallel date/amount lists."""
        proportional_times = proportional_times or []
        proportional_amounts = proportional_amounts or []
        fixed_times = fixed_times or []
        fixed_amounts = fixed_amounts or []

        if len(proportional_times) != len(proportional_amounts):
            raise InvalidContractError(
                f"CRITICAL: proportional times and amounts differ in length: "
                f"{len(proportional_times)} vs {len(proportional_amounts)}"
            )
        if len(fixed_times) != len(fixed_amounts):
            raise InvalidContractError(
                f"CRITICAL: fixed times and amounts differ in length: "
                f"{len(fixed_times)} vs {len(fixed_amounts)}"
            )

        return cls(
            proportional=tuple(zip(proportional_times, proportional_amounts)),
            fixed=tuple(zip(fixed_times, fixed_amounts)),
        )

    @property
    def n_dividends(self) -> int:
        """Total number of dividend payments."""
        return len(self.proportional) + len(self.fixed)

    @property
    def n_steps(self) -> int:
        """Number of simulation steps: one per dividend plus the final step."""
        return self.n_dividends + 1

    @property
    def is_empty(self) -> bool:
        """True when there are no dividends."""
        return self.n_dividends == 0

    @property
    def proportional_factor(self) -> float:
        """Product of (1 - δ) over all proportional dividends."""
        factor = 1.0
        for _, amount in self.proportional:
            factor *= 1.0 - amount
        return factor

    def merged_events(self, time_to_expiry: float | None = None) -> list[DividendEvent]:
        """
        Merge both schedules into a single time-ordered event list.

        Proportional dividends precede fixed dividends paid at the same time.

        Parameters
        ----------
        time_to_expiry : float, optional
            If given, every dividend must fall in (0, T]

        Returns
        -------
        list[DividendEvent]
            Events sorted by (time, kind)
        """
        events = [DividendEvent(t, a, DividendKind.PROPORTIONAL) for t, a in self.proportional]
        events += [DividendEvent(t, a, DividendKind.FIXED) for t, a in self.fixed]

        if time_to_expiry is not None:
            for event in events:
                if event.time > time_to_expiry:
                    raise InvalidContractError(
                        f"CRITICAL: {event.kind.value} dividend at t={event.time} "
                        f"is after maturity T={time_to_expiry}"
                    )

        return sorted(events, key=lambda e: (e.time, _TIE_ORDER[e.kind]))

    def adjustments(self, time_to_expiry: float) -> list[DividendEvent]:
        """
        Events applied to simulated prices.

        A dividend dated at maturity keeps its grid point but is not
        deducted: the terminal price is never adjusted.
        """
        return [e for e in self.merged_events(time_to_expiry) if e.time < time_to_expiry]

    def adjustment_factor(self, time_to_expiry: float) -> float:
        """Product of (1 - δ) over the proportional dividends paid before maturity."""
        factor = 1.0
        for event in self.adjustments(time_to_expiry):
            if event.kind == DividendKind.PROPORTIONAL:
                factor *= 1.0 - event.amount
        return factor

    def step_times(self, time_to_expiry: float) -> np.ndarray:
        """
        Right-hand boundaries of each simulation step.

        Returns
        -------
        np.ndarray
            Merged dividend times followed by maturity, shape (n_steps,)
        """
        times = [event.time for event in self.merged_events(time_to_expiry)]
        times.append(time_to_expiry)
        return np.asarray(times, dtype=float)

    def step_sizes(self, time_to_expiry: float) -> np.ndarray:
        """
        Length of each simulation step.

        [T1] Δt_i = t_i - t_{i-1}, with t_0 = 0 and t_n = T

        Returns
        -------
        np.ndarray
            Step lengths, shape (n_steps,), summing to T
        """
        return np.diff(self.step_times(time_to_expiry), prepend=0.0)


NO_DIVIDENDS = DividendSchedule()
