"""Nominal/effective rate conversions.

All conversions between two compounding conventions go through the effective
annual rate (EAR, the APY of a nominal APR). Rates coming in are annual
percentages (``5`` for 5%); rates going out of ``normalize`` are per-period
fractions.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Tuple

from fincalc.domain.errors import InvalidRate
from fincalc.domain.frequency import Compounding, Frequency, periods_per_year

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateSpec:
    """Nominal annual rate (percent) plus its compounding convention."""

    nominal_rate: float
    compounding: Frequency = Compounding.MONTHLY

    @property
    def periods_per_year(self) -> float:
        return periods_per_year(self.compounding)

    @property
    def is_continuous(self) -> bool:
        return math.isinf(self.periods_per_year)

    @property
    def period_rate(self) -> float:
        return normalize(self.nominal_rate, self.compounding)

    @property
    def effective_annual_rate(self) -> float:
        return effective_annual_rate(self.nominal_rate, self.compounding)

    def rate_per(self, payments_per_year: Frequency) -> float:
        return equivalent_period_rate(self.nominal_rate, self.compounding, payments_per_year)


def rate_fraction(nominal_rate_percent: float) -> float:
    rate = float(nominal_rate_percent)
    if not math.isfinite(rate) or rate < 0:
        raise InvalidRate(f"nominal rate must be a non-negative percentage, got {nominal_rate_percent!r}")
    return rate / 100.0


def _check_effective(ear: float) -> float:
    ear = float(ear)
    if not math.isfinite(ear) or ear <= -1:
        raise InvalidRate(f"effective annual rate must be greater than -100%, got {ear!r}")
    return ear


def compound_growth(rate: float, periods: float) -> Tuple[float, float]:
    """
    ``(1 + rate) ** periods`` and the same factor less one.

    The second value stays exact for rates too small to survive ``1 + rate``.
    """
    exponent = periods * math.log1p(rate)
    return math.exp(exponent), math.expm1(exponent)


def normalize(nominal_rate_percent: float, frequency: Frequency) -> float:
    """Per-period rate for a nominal annual percentage.

    Continuous compounding has no discrete period, so a "period" is one year
    and the result is ``exp(r) - 1``.
    """
    rate = rate_fraction(nominal_rate_percent)
    n = periods_per_year(frequency)
    if math.isinf(n):
        return math.expm1(rate)
    return rate / n


def effective_annual_rate(nominal_rate_percent: float, frequency: Frequency) -> float:
    rate = rate_fraction(nominal_rate_percent)
    n = periods_per_year(frequency)
    if math.isinf(n):
        return math.expm1(rate)
    return math.expm1(n * math.log1p(rate / n))


def nominal_rate_from_effective(ear: float, frequency: Frequency) -> float:
    """Inverse of ``effective_annual_rate``; returns an annual percentage."""
    ear = _check_effective(ear)
    n = periods_per_year(frequency)
    if math.isinf(n):
        return math.log1p(ear) * 100.0
    return n * math.expm1(math.log1p(ear) / n) * 100.0


def period_rate_from_effective(ear: float, frequency: Frequency) -> float:
    ear = _check_effective(ear)
    n = periods_per_year(frequency)
    if math.isinf(n):
        # instantaneous force of interest
        return math.log1p(ear)
    return math.expm1(math.log1p(ear) / n)


def convert_rate(nominal_rate_percent: float, from_frequency: Frequency, to_frequency: Frequency) -> float:
    """Re-express a nominal percentage under another compounding convention."""
    ear = effective_annual_rate(nominal_rate_percent, from_frequency)
    converted = nominal_rate_from_effective(ear, to_frequency)
    logger.debug(
        "converted %s%% (%s) -> %s%% (%s) via EAR %.10f",
        nominal_rate_percent,
        from_frequency,
        converted,
        to_frequency,
        ear,
    )
    return converted


def equivalent_period_rate(
    nominal_rate_percent: float,
    compounding: Frequency,
    payments_per_year: Frequency,
) -> float:
    """Rate per payment period when payments and compounding run on different cadences."""
    compounding_n = periods_per_year(compounding)
    payment_n = periods_per_year(payments_per_year)
    if math.isinf(payment_n):
        raise InvalidRate("payments cannot be made continuously")
    if compounding_n == payment_n:
        return normalize(nominal_rate_percent, compounding)
    ear = effective_annual_rate(nominal_rate_percent, compounding)
    return period_rate_from_effective(ear, payment_n)
