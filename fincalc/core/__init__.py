"""Pure calculation functions over the records in ``fincalc.domain``."""

from fincalc.core.amortization import amortize, lump_sum_due, payment_for, yearly_summary
from fincalc.core.goal import plan_goal, required_contribution, required_nest_egg
from fincalc.core.growth import compound_amount, project, simple_interest
from fincalc.core.rates import (
    convert_rate,
    effective_annual_rate,
    equivalent_period_rate,
    nominal_rate_from_effective,
    normalize,
    period_rate_from_effective,
)
from fincalc.core.tvm import solve

__all__ = [
    "amortize",
    "compound_amount",
    "convert_rate",
    "effective_annual_rate",
    "equivalent_period_rate",
    "lump_sum_due",
    "nominal_rate_from_effective",
    "normalize",
    "payment_for",
    "period_rate_from_effective",
    "plan_goal",
    "project",
    "required_contribution",
    "required_nest_egg",
    "simple_interest",
    "solve",
    "yearly_summary",
]
