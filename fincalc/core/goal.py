"""Savings-goal and drawdown questions answered with the TVM solver."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from fincalc.core.tvm import PaymentTiming, SolveFor, TVMParameters, future_value, solve
from fincalc.domain.errors import InvalidGoal, InvalidHorizon, InvalidRate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Goal:
    target_value: float
    current_balance: float
    horizon_periods: int
    period_rate: float


@dataclass(frozen=True)
class GoalOutcome:
    required_contribution: float
    projected_balance: float
    gap: float
    already_met: bool = False


def _check_goal(goal: Goal) -> None:
    if not goal.target_value > 0:
        raise InvalidGoal(f"target value must be positive, got {goal.target_value!r}")
    if not goal.horizon_periods > 0:
        raise InvalidGoal(f"time to reach the goal must be positive, got {goal.horizon_periods!r}")
    if not math.isfinite(goal.period_rate) or goal.period_rate < 0:
        raise InvalidRate(f"period rate must be non-negative, got {goal.period_rate!r}")


def plan_goal(goal: Goal, timing: PaymentTiming = PaymentTiming.END) -> GoalOutcome:
    """
    Work out the level contribution that closes the gap between where the
    current balance is heading on its own and the target.

    A goal the current balance already reaches is not an error: the outcome
    is flagged ``already_met`` with a zero contribution.
    """
    _check_goal(goal)

    projected = future_value(goal.period_rate, goal.horizon_periods, 0.0, -goal.current_balance)
    gap = goal.target_value - projected
    if gap <= 0:
        logger.debug("goal %.2f already met by projected balance %.2f", goal.target_value, projected)
        return GoalOutcome(required_contribution=0.0, projected_balance=projected, gap=gap, already_met=True)

    result = solve(
        TVMParameters(
            solve_for=SolveFor.PMT,
            pv=-goal.current_balance,
            fv=goal.target_value,
            nper=goal.horizon_periods,
            rate=goal.period_rate,
            timing=timing,
        )
    )
    return GoalOutcome(required_contribution=abs(result.value), projected_balance=projected, gap=gap)


def required_contribution(goal: Goal) -> float:
    return plan_goal(goal).required_contribution


def required_nest_egg(withdrawal: float, period_rate: float, periods: int) -> float:
    """Balance needed today to fund ``periods`` level withdrawals down to zero."""
    if not periods > 0:
        raise InvalidHorizon(f"drawdown length must be positive, got {periods!r}")
    if not math.isfinite(period_rate) or period_rate < 0:
        raise InvalidRate(f"period rate must be non-negative, got {period_rate!r}")

    result = solve(
        TVMParameters(solve_for=SolveFor.PV, fv=0.0, pmt=withdrawal, nper=periods, rate=period_rate)
    )
    return abs(result.value)
