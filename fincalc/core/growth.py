"""Projection of a balance fed by (possibly escalating) periodic contributions."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List

from fincalc.core.rates import RateSpec, rate_fraction
from fincalc.domain.errors import InvalidHorizon, InvalidRate
from fincalc.domain.frequency import Frequency, periods_per_year

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContributionSchedule:
    """
    amount:           deposit made at the start of every period
    escalation_rate:  annual percent increase applied after each full year
    periods_per_year: contribution cadence (12 for monthly deposits)
    """

    amount: float = 0.0
    escalation_rate: float = 0.0
    periods_per_year: Frequency = 12


@dataclass(frozen=True)
class GrowthPlan:
    starting_balance: float
    contributions: ContributionSchedule
    rate: RateSpec
    horizon_periods: int
    tax_rate: float = 0.0  # share of each interest credit withheld


@dataclass(frozen=True)
class GrowthRow:
    period: int
    contribution: float
    interest: float
    tax: float
    balance: float


@dataclass(frozen=True)
class GrowthProjection:
    ending_balance: float
    total_contributions: float
    total_interest: float
    total_tax: float = 0.0
    starting_balance: float = 0.0
    rows: List[GrowthRow] = field(default_factory=list)


def _compounding_window(rate: RateSpec, cadence: int) -> tuple[int, float]:
    """Return (periods per interest credit, rate applied at each credit)."""
    compounding = rate.periods_per_year
    if (
        not math.isinf(compounding)
        and compounding <= cadence
        and compounding == int(compounding)
        and cadence % int(compounding) == 0
    ):
        return cadence // int(compounding), rate.period_rate
    # compounding faster than deposits (or an uneven pair): credit every period
    return 1, rate.rate_per(cadence)


def _contribution_cadence(schedule: ContributionSchedule) -> int:
    cadence = periods_per_year(schedule.periods_per_year)
    if math.isinf(cadence) or cadence != int(cadence):
        raise InvalidHorizon(
            f"contributions need a whole number of periods per year, got {schedule.periods_per_year!r}"
        )
    return int(cadence)


def project(plan: GrowthPlan) -> GrowthProjection:
    """
    Walk the plan period by period.

    Order of operations (per period):
      1) Deposit this period's contribution (escalated once per full year).
      2) If the period closes a compounding window, credit interest on the
         whole balance, withholding ``tax_rate`` of it.
    """
    horizon = plan.horizon_periods
    if not math.isfinite(horizon) or int(horizon) != horizon or horizon <= 0:
        raise InvalidHorizon(f"horizon must be a positive number of periods, got {plan.horizon_periods!r}")
    if not 0.0 <= plan.tax_rate <= 1.0:
        raise InvalidRate(f"tax rate must be between 0 and 1, got {plan.tax_rate!r}")

    schedule = plan.contributions
    escalation = rate_fraction(schedule.escalation_rate)
    cadence = _contribution_cadence(schedule)
    window, window_rate = _compounding_window(plan.rate, cadence)

    balance = float(plan.starting_balance)
    contribution = float(schedule.amount)
    total_contributions = 0.0
    total_interest = 0.0
    total_tax = 0.0
    rows: List[GrowthRow] = []

    for period in range(1, int(plan.horizon_periods) + 1):
        if period > 1 and (period - 1) % cadence == 0:
            contribution *= 1.0 + escalation

        balance += contribution
        total_contributions += contribution

        interest = tax = 0.0
        if period % window == 0:
            gross = balance * window_rate
            tax = gross * plan.tax_rate
            interest = gross - tax
            balance += interest
            total_interest += interest
            total_tax += tax

        rows.append(
            GrowthRow(
                period=period,
                contribution=contribution,
                interest=interest,
                tax=tax,
                balance=balance,
            )
        )

    logger.debug(
        "projected %d periods (window %d at %.8f): ending %.2f, contributions %.2f, interest %.2f",
        plan.horizon_periods,
        window,
        window_rate,
        balance,
        total_contributions,
        total_interest,
    )
    return GrowthProjection(
        ending_balance=balance,
        total_contributions=total_contributions,
        total_interest=total_interest,
        total_tax=total_tax,
        starting_balance=float(plan.starting_balance),
        rows=rows,
    )


def compound_amount(principal: float, rate: RateSpec, years: float) -> float:
    """Balance after ``years`` of compounding with no deposits."""
    # (1 + r/n) ** (n * years) == (1 + EAR) ** years, continuous included
    return principal * (1.0 + rate.effective_annual_rate) ** years


def simple_interest(principal: float, nominal_rate_percent: float, years: float) -> float:
    return principal * rate_fraction(nominal_rate_percent) * years
