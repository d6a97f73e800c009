"""Glue between the API contracts and the engine.

Each function takes a validated request, builds the engine records, runs one
calculation and packs the result into its response model. Engine failures
propagate as ``CalculationError``.
"""

from __future__ import annotations

import logging
from typing import Optional

from fincalc.core.amortization import LoanTerms, amortize, lump_sum_due, yearly_summary
from fincalc.core.goal import Goal, plan_goal, required_nest_egg
from fincalc.core.growth import ContributionSchedule, GrowthPlan, project
from fincalc.core.rates import (
    RateSpec,
    convert_rate,
    effective_annual_rate,
    equivalent_period_rate,
    nominal_rate_from_effective,
    normalize,
)
from fincalc.core.tvm import SolveFor, TVMParameters, solve
from fincalc.domain.errors import InvalidHorizon
from fincalc.schemas.common import resolve_horizon
from fincalc.schemas.goals import GoalRequest, GoalResponse, NestEggRequest, NestEggResponse
from fincalc.schemas.growth import GrowthRequest, GrowthResponse, GrowthRowSchema
from fincalc.schemas.loans import (
    AmortizationRequest,
    AmortizationResponse,
    AmortizationRowSchema,
    AmortizationYearSchema,
    LumpSumRequest,
    LumpSumResponse,
)
from fincalc.schemas.rates import RateConversionRequest, RateConversionResponse
from fincalc.schemas.tvm import TVMRequest, TVMResponse

logger = logging.getLogger(__name__)


def _check_length(periods: int, max_periods: Optional[int]) -> None:
    if max_periods is not None and periods > max_periods:
        raise InvalidHorizon(f"{periods} periods is longer than the supported {max_periods}")


def calculate_rate_conversion(request: RateConversionRequest) -> RateConversionResponse:
    if request.nominal_rate is not None:
        nominal = request.nominal_rate
    else:
        nominal = nominal_rate_from_effective(request.effective_rate / 100.0, request.compounding)

    converted = None
    if request.target_compounding is not None:
        converted = convert_rate(nominal, request.compounding, request.target_compounding)

    return RateConversionResponse(
        nominal_rate=nominal,
        effective_rate=effective_annual_rate(nominal, request.compounding) * 100.0,
        period_rate=normalize(nominal, request.compounding),
        compounding=request.compounding,
        target_compounding=request.target_compounding,
        converted_rate=converted,
    )


def calculate_amortization(
    request: AmortizationRequest,
    max_periods: Optional[int] = None,
) -> AmortizationResponse:
    """Level-payment loan; payments follow ``payments_per_year`` whatever the compounding."""
    n = resolve_horizon(request.term_years, request.number_of_payments, request.payments_per_year)
    _check_length(n, max_periods)

    compounding = request.compounding or request.payments_per_year
    period_rate = equivalent_period_rate(request.annual_rate, compounding, request.payments_per_year)

    result = amortize(LoanTerms(principal=request.loan_amount, period_rate=period_rate, number_of_payments=n))
    schedule = result.schedule if request.include_schedule else []
    yearly = yearly_summary(result.schedule, request.payments_per_year) if request.include_schedule else []

    return AmortizationResponse(
        loan_amount=request.loan_amount,
        number_of_payments=n,
        period_rate=period_rate,
        payment=result.payment,
        total_paid=result.total_paid,
        total_interest=result.total_interest,
        schedule=[AmortizationRowSchema.model_validate(row) for row in schedule],
        yearly=[AmortizationYearSchema.model_validate(year) for year in yearly],
    )


def calculate_lump_sum(request: LumpSumRequest) -> LumpSumResponse:
    due = lump_sum_due(
        request.principal,
        RateSpec(nominal_rate=request.annual_rate, compounding=request.compounding),
        request.term_years,
    )
    return LumpSumResponse(amount_due=due, total_interest=due - request.principal)


def calculate_growth(request: GrowthRequest, max_periods: Optional[int] = None) -> GrowthResponse:
    horizon = resolve_horizon(request.years, request.horizon_periods, request.contribution_frequency)
    _check_length(horizon, max_periods)

    projection = project(
        GrowthPlan(
            starting_balance=request.starting_balance,
            contributions=ContributionSchedule(
                amount=request.contribution,
                escalation_rate=request.escalation_rate,
                periods_per_year=request.contribution_frequency,
            ),
            rate=RateSpec(nominal_rate=request.annual_rate, compounding=request.compounding),
            horizon_periods=horizon,
            tax_rate=request.tax_rate,
        )
    )
    rows = projection.rows if request.include_rows else []
    return GrowthResponse(
        horizon_periods=horizon,
        starting_balance=projection.starting_balance,
        ending_balance=projection.ending_balance,
        total_contributions=projection.total_contributions,
        total_interest=projection.total_interest,
        total_tax=projection.total_tax,
        rows=[GrowthRowSchema.model_validate(row) for row in rows],
    )


def calculate_tvm(request: TVMRequest) -> TVMResponse:
    period_rate = None if request.rate is None else request.rate / 100.0 / request.periods_per_year
    result = solve(
        TVMParameters(
            solve_for=request.solve_for,
            pv=request.pv,
            fv=request.fv,
            pmt=request.pmt,
            nper=request.nper,
            rate=period_rate,
            timing=request.timing,
        )
    )
    display = abs(result.value)
    if result.solved_for is SolveFor.RATE:
        display = abs(result.rate * request.periods_per_year * 100.0)

    return TVMResponse(
        solved_for=result.solved_for,
        value=result.value,
        display_value=display,
        pv=result.pv,
        fv=result.fv,
        pmt=result.pmt,
        nper=result.nper,
        rate=result.rate * request.periods_per_year * 100.0,
        period_rate=result.rate,
        timing=result.timing,
        starting_balance=result.starting_balance,
        ending_balance=result.ending_balance,
        total_contributions=result.total_contributions,
        total_interest=result.total_interest,
    )


def calculate_goal(request: GoalRequest) -> GoalResponse:
    horizon = resolve_horizon(request.years, request.horizon_periods, request.periods_per_year)
    compounding = request.compounding or request.periods_per_year
    period_rate = equivalent_period_rate(request.annual_rate, compounding, request.periods_per_year)

    outcome = plan_goal(
        Goal(
            target_value=request.target_value,
            current_balance=request.current_balance,
            horizon_periods=horizon,
            period_rate=period_rate,
        )
    )
    if outcome.already_met:
        logger.info("savings goal of %.2f is already met by current savings", request.target_value)

    return GoalResponse(
        required_contribution=outcome.required_contribution,
        projected_balance=outcome.projected_balance,
        gap=outcome.gap,
        already_met=outcome.already_met,
        horizon_periods=horizon,
        period_rate=period_rate,
        total_contributions=outcome.required_contribution * horizon,
    )


def calculate_nest_egg(request: NestEggRequest) -> NestEggResponse:
    periods = resolve_horizon(request.years, None, request.periods_per_year)
    period_rate = normalize(request.annual_rate, request.periods_per_year)
    required = required_nest_egg(request.withdrawal, period_rate, periods)
    return NestEggResponse(
        required_balance=required,
        number_of_withdrawals=periods,
        total_withdrawn=request.withdrawal * periods,
    )
