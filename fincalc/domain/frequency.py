from __future__ import annotations

import math
from enum import Enum
from typing import Union

from fincalc.domain.errors import InvalidRate


class Compounding(str, Enum):
    ANNUALLY = "annually"
    SEMIANNUALLY = "semiannually"
    QUARTERLY = "quarterly"
    MONTHLY = "monthly"
    SEMIMONTHLY = "semimonthly"
    BIWEEKLY = "biweekly"
    WEEKLY = "weekly"
    DAILY = "daily"
    CONTINUOUSLY = "continuously"

    @property
    def periods_per_year(self) -> float:
        return _PERIODS_PER_YEAR[self]

    @property
    def is_continuous(self) -> bool:
        return self is Compounding.CONTINUOUSLY


_PERIODS_PER_YEAR = {
    Compounding.ANNUALLY: 1,
    Compounding.SEMIANNUALLY: 2,
    Compounding.QUARTERLY: 4,
    Compounding.MONTHLY: 12,
    Compounding.SEMIMONTHLY: 24,
    Compounding.BIWEEKLY: 26,
    Compounding.WEEKLY: 52,
    Compounding.DAILY: 365,
    Compounding.CONTINUOUSLY: math.inf,
}

Frequency = Union[Compounding, int, float]


def periods_per_year(frequency: Frequency) -> float:
    """Resolve a compounding enum or a raw count to periods per year.

    ``math.inf`` stands for continuous compounding.
    """
    if isinstance(frequency, str):
        try:
            return Compounding(frequency).periods_per_year
        except ValueError:
            raise InvalidRate(f"unknown compounding frequency {frequency!r}") from None
    value = float(frequency)
    if math.isnan(value) or value <= 0:
        raise InvalidRate(f"compounding frequency must be positive, got {frequency!r}")
    return value
