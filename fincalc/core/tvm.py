"""Five-variable time-value-of-money solver.

Sign convention: money leaving the caller's pocket is negative. A deposit of
1,000 today that grows to 2,000 is ``pv=-1000, fv=2000``; a loan of 10,000
repaid monthly is ``pv=10000, pmt=-188.71, fv=0``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple, Union

from fincalc.core.rates import compound_growth
from fincalc.domain.errors import (
    IncompleteParameters,
    InvalidHorizon,
    InvalidRate,
    NoRealSolution,
    NotSupported,
)

logger = logging.getLogger(__name__)


class SolveFor(str, Enum):
    PV = "pv"
    FV = "fv"
    PMT = "pmt"
    NPER = "nper"
    RATE = "rate"


class PaymentTiming(str, Enum):
    END = "end"  # ordinary annuity
    BEGIN = "begin"  # annuity due


@dataclass(frozen=True)
class TVMParameters:
    """The unknown named by ``solve_for`` is ignored; the other four are required."""

    solve_for: Union[SolveFor, str]
    pv: Optional[float] = None
    fv: Optional[float] = None
    pmt: Optional[float] = None
    nper: Optional[float] = None
    rate: Optional[float] = None  # per period, as a fraction
    timing: PaymentTiming = PaymentTiming.END


@dataclass(frozen=True)
class SolveResult:
    solved_for: SolveFor
    value: float
    pv: float
    fv: float
    pmt: float
    nper: float
    rate: float
    timing: PaymentTiming
    starting_balance: float
    ending_balance: float
    total_contributions: float
    total_interest: float


VARIABLES = ("pv", "fv", "pmt", "nper", "rate")

# Rate search brackets out from zero in doubling steps.
_RATE_CEILING = 10.0
_RATE_FLOOR = -0.99
_BISECTION_STEPS = 200


def _due(rate: float, timing: PaymentTiming) -> float:
    return 1.0 + rate if PaymentTiming(timing) is PaymentTiming.BEGIN else 1.0


def future_value(rate: float, nper: float, pmt: float, pv: float, timing: PaymentTiming = PaymentTiming.END) -> float:
    growth, accrued = compound_growth(rate, nper)
    if accrued == 0:
        return -(pv + pmt * nper)
    return -(pv * growth + pmt * _due(rate, timing) * accrued / rate)


def payment(rate: float, nper: float, pv: float, fv: float, timing: PaymentTiming = PaymentTiming.END) -> float:
    growth, accrued = compound_growth(rate, nper)
    if accrued == 0:
        return -(pv + fv) / nper
    return -(fv + pv * growth) * rate / (_due(rate, timing) * accrued)


def present_value(rate: float, nper: float, pmt: float, fv: float, timing: PaymentTiming = PaymentTiming.END) -> float:
    growth, accrued = compound_growth(rate, nper)
    if accrued == 0:
        return -(fv + pmt * nper)
    return -((pmt * _due(rate, timing) * accrued / rate + fv) / growth)


def number_of_periods(rate: float, pmt: float, pv: float, fv: float, timing: PaymentTiming = PaymentTiming.END) -> float:
    if rate == 0:
        if pmt == 0:
            raise NoRealSolution("these values are not achievable: no payment and no interest")
        return -(pv + fv) / pmt

    scaled_pmt = pmt * _due(rate, timing)
    numerator = scaled_pmt - fv * rate
    denominator = scaled_pmt + pv * rate
    if denominator == 0 or numerator / denominator <= 0:
        raise NoRealSolution("these values are not achievable: no period count reaches the target")
    # numerator - denominator == -(fv + pv) * rate
    return math.log1p(-(fv + pv) * rate / denominator) / math.log1p(rate)


def _residual(rate: float, nper: float, pmt: float, pv: float, fv: float, timing: PaymentTiming) -> float:
    """How far the cash flows are from balancing at ``rate``; zero at the solution."""
    return fv - future_value(rate, nper, pmt, pv, timing)


def _bracket(points: List[float], f: Callable[[float], float]) -> Optional[Tuple[float, float]]:
    previous = None
    for point in points:
        try:
            value = f(point)
        except OverflowError:
            return None
        if not math.isfinite(value):
            return None
        if value == 0:
            return point, point
        if previous is not None and (previous[1] < 0) != (value < 0):
            return previous[0], point
        previous = (point, value)
    return None


def interest_rate(nper: float, pmt: float, pv: float, fv: float, timing: PaymentTiming = PaymentTiming.END) -> float:
    """
    Per-period rate that balances the cash flows.

    There is no closed form, so the residual is scanned outward from zero
    (positive rates first) for a sign change which is then bisected.
    """

    def f(rate: float) -> float:
        return _residual(rate, nper, pmt, pv, fv, timing)

    upward = [0.0]
    step = 1e-6
    while step < _RATE_CEILING:
        upward.append(step)
        step *= 2
    upward.append(_RATE_CEILING)
    downward = [0.0] + [-point for point in upward[1:] if point < -_RATE_FLOOR] + [_RATE_FLOOR]

    bracket = _bracket(upward, f) or _bracket(downward, f)
    if bracket is None:
        raise NoRealSolution("these values are not achievable at any interest rate")

    lo, hi = sorted(bracket)
    f_lo = f(lo)
    if lo == hi or f_lo == 0:
        return lo
    for _ in range(_BISECTION_STEPS):
        mid = (lo + hi) / 2.0
        f_mid = f(mid)
        if f_mid == 0 or hi - lo < 1e-15:
            return mid
        if (f_mid < 0) == (f_lo < 0):
            lo, f_lo = mid, f_mid
        else:
            hi = mid
    return (lo + hi) / 2.0


_SOLVERS: Dict[SolveFor, Callable[[Dict[str, float], PaymentTiming], float]] = {
    SolveFor.FV: lambda v, t: future_value(v["rate"], v["nper"], v["pmt"], v["pv"], t),
    SolveFor.PMT: lambda v, t: payment(v["rate"], v["nper"], v["pv"], v["fv"], t),
    SolveFor.PV: lambda v, t: present_value(v["rate"], v["nper"], v["pmt"], v["fv"], t),
    SolveFor.NPER: lambda v, t: number_of_periods(v["rate"], v["pmt"], v["pv"], v["fv"], t),
    SolveFor.RATE: lambda v, t: interest_rate(v["nper"], v["pmt"], v["pv"], v["fv"], t),
}


def _known_values(params: TVMParameters, target: SolveFor) -> Dict[str, float]:
    known = {name: getattr(params, name) for name in VARIABLES if name != target.value}
    missing = [name for name, value in known.items() if value is None]
    if missing:
        raise IncompleteParameters(missing)

    values = {name: float(value) for name, value in known.items()}
    if "nper" in values and not values["nper"] > 0:
        raise InvalidHorizon(f"number of periods must be positive, got {params.nper!r}")
    if "rate" in values and not values["rate"] > -1:
        raise InvalidRate(f"period rate must be greater than -100%, got {params.rate!r}")
    for name, value in values.items():
        if not math.isfinite(value):
            raise IncompleteParameters([name])
    return values


def solve(params: TVMParameters) -> SolveResult:
    """Solve for the variable named by ``params.solve_for`` from the other four."""
    try:
        target = SolveFor(params.solve_for)
    except ValueError:
        raise NotSupported(f"cannot solve for {params.solve_for!r}") from None
    try:
        timing = PaymentTiming(params.timing)
    except ValueError:
        raise NotSupported(f"unknown payment timing {params.timing!r}") from None

    values = _known_values(params, target)
    try:
        value = _SOLVERS[target](values, timing)
    except (OverflowError, ZeroDivisionError):
        raise NoRealSolution(f"{target.value} is out of range for these values") from None

    if not math.isfinite(value):
        raise NoRealSolution(f"{target.value} is not finite for these values")
    if target is SolveFor.NPER and value < 0:
        raise NoRealSolution("these values are not achievable: the period count would be negative")

    values[target.value] = value
    logger.debug("solved %s=%.10f from %s", target.value, value, values)

    pv, fv, pmt, nper = values["pv"], values["fv"], values["pmt"], values["nper"]
    return SolveResult(
        solved_for=target,
        value=value,
        pv=pv,
        fv=fv,
        pmt=pmt,
        nper=nper,
        rate=values["rate"],
        timing=timing,
        starting_balance=abs(pv),
        ending_balance=abs(fv),
        total_contributions=abs(pmt) * nper,
        total_interest=abs(pv + pmt * nper + fv),
    )
