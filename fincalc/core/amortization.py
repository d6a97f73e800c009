"""Fixed-payment loan amortization."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from fincalc.core.growth import compound_amount
from fincalc.core.rates import RateSpec, compound_growth
from fincalc.domain.errors import DegenerateLoan, InvalidHorizon

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoanTerms:
    principal: float
    period_rate: float
    number_of_payments: int


@dataclass(frozen=True)
class AmortizationRow:
    period: int
    payment: float
    interest: float
    principal: float
    balance: float


@dataclass(frozen=True)
class AmortizationResult:
    payment: float
    schedule: List[AmortizationRow] = field(default_factory=list)
    total_paid: float = 0.0
    total_interest: float = 0.0


@dataclass(frozen=True)
class AmortizationYear:
    year: int
    principal: float
    interest: float
    balance: float


def _check_terms(loan: LoanTerms) -> None:
    if not math.isfinite(loan.principal) or loan.principal <= 0:
        raise DegenerateLoan(
            f"loan amount must be positive, got {loan.principal!r}; "
            "check price, down payment and trade-in"
        )
    n = loan.number_of_payments
    if not math.isfinite(n) or int(n) != n or n <= 0:
        raise DegenerateLoan(f"number of payments must be a positive integer, got {loan.number_of_payments!r}")
    if not math.isfinite(loan.period_rate) or loan.period_rate < 0:
        raise DegenerateLoan(f"period rate must be non-negative, got {loan.period_rate!r}")


def payment_for(principal: float, period_rate: float, number_of_payments: int) -> float:
    """Level payment that retires ``principal`` over ``number_of_payments``."""
    n = int(number_of_payments)
    growth, accrued = compound_growth(period_rate, n)
    if accrued == 0:
        return principal / n
    return principal * (period_rate * growth) / accrued


def amortize(loan: LoanTerms) -> AmortizationResult:
    """
    Build the payment schedule for a fixed-payment loan.

    Each period charges interest on the remaining balance; the rest of the
    payment reduces principal. Balances never go below zero and the last
    row is snapped to exactly zero so float drift never reaches the caller.
    """
    _check_terms(loan)
    n = int(loan.number_of_payments)
    r = loan.period_rate

    try:
        payment = payment_for(loan.principal, r, n)
    except OverflowError:
        payment = math.inf
    if not math.isfinite(payment) or payment <= 0:
        raise DegenerateLoan("could not calculate a periodic payment; check the rate and term")

    schedule: List[AmortizationRow] = []
    total_interest = 0.0
    remaining = float(loan.principal)

    for period in range(1, n + 1):
        interest = remaining * r
        principal_part = payment - interest
        remaining -= principal_part
        total_interest += interest

        balance = 0.0 if period == n else max(0.0, remaining)
        schedule.append(
            AmortizationRow(
                period=period,
                payment=payment,
                interest=interest,
                principal=principal_part,
                balance=balance,
            )
        )

    logger.debug(
        "amortized %.2f over %d periods at %.8f: payment %.6f, interest %.6f",
        loan.principal,
        n,
        r,
        payment,
        total_interest,
    )
    return AmortizationResult(
        payment=payment,
        schedule=schedule,
        total_paid=payment * n,
        total_interest=total_interest,
    )


def yearly_summary(schedule: Sequence[AmortizationRow], periods_per_year: int = 12) -> List[AmortizationYear]:
    """Roll a per-period schedule up into calendar-free loan years."""
    if periods_per_year <= 0:
        raise InvalidHorizon(f"periods per year must be positive, got {periods_per_year!r}")

    years: Dict[int, Dict[str, float]] = {}
    for row in schedule:
        year = (row.period - 1) // periods_per_year + 1
        bucket = years.setdefault(year, {"principal": 0.0, "interest": 0.0, "balance": 0.0})
        bucket["principal"] += row.principal
        bucket["interest"] += row.interest
        bucket["balance"] = row.balance

    return [
        AmortizationYear(year=year, principal=b["principal"], interest=b["interest"], balance=b["balance"])
        for year, b in sorted(years.items())
    ]


def lump_sum_due(principal: float, rate: RateSpec, years: float) -> float:
    """Amount owed at maturity on a deferred loan with no interim payments."""
    if not math.isfinite(principal) or principal <= 0:
        raise DegenerateLoan(f"loan amount must be positive, got {principal!r}")
    if years <= 0:
        raise InvalidHorizon(f"loan term must be positive, got {years!r}")

    return compound_amount(principal, rate, years)
