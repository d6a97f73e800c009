from __future__ import annotations

import math
from math import isclose

import pytest

from fincalc.core.amortization import LoanTerms, amortize, lump_sum_due, payment_for, yearly_summary
from fincalc.core.rates import RateSpec
from fincalc.domain.errors import DegenerateLoan, InvalidHorizon
from fincalc.domain.frequency import Compounding


def test_five_year_car_loan_payment():
    result = amortize(LoanTerms(principal=10000, period_rate=0.05 / 12, number_of_payments=60))

    assert result.payment == pytest.approx(188.71, abs=0.01)
    assert len(result.schedule) == 60
    assert [row.period for row in result.schedule] == list(range(1, 61))
    assert isclose(result.total_paid, result.payment * 60)
    assert result.total_interest == pytest.approx(result.total_paid - 10000, abs=1e-6)


@pytest.mark.parametrize(
    "principal, rate, payments",
    [
        (10000, 0.05 / 12, 60),
        (350000, 0.065 / 12, 360),
        (1234.56, 0.18 / 12, 7),
        (25000, 0.002, 1),
    ],
)
def test_schedule_closes_to_exactly_zero(principal, rate, payments):
    schedule = amortize(LoanTerms(principal, rate, payments)).schedule

    assert schedule[-1].balance == 0.0
    assert all(row.balance >= 0 for row in schedule)
    balances = [row.balance for row in schedule]
    assert balances == sorted(balances, reverse=True)


def test_zero_rate_splits_principal_evenly():
    result = amortize(LoanTerms(principal=12000, period_rate=0, number_of_payments=12))

    assert result.payment == 1000
    assert all(row.interest == 0 for row in result.schedule)
    assert result.total_interest == 0
    assert result.schedule[5].balance == pytest.approx(6000)


def test_first_row_charges_interest_on_full_principal():
    first = amortize(LoanTerms(principal=10000, period_rate=0.01, number_of_payments=12)).schedule[0]

    assert isclose(first.interest, 100.0)
    assert isclose(first.principal, first.payment - 100.0)
    assert isclose(first.balance, 10000 - first.principal)


def test_payment_for_matches_closed_form():
    r, n = 0.004, 48
    expected = 20000 * (r * (1 + r) ** n) / ((1 + r) ** n - 1)
    assert isclose(payment_for(20000, r, n), expected)


def test_rate_too_small_to_register_amortizes_like_zero_rate():
    result = amortize(LoanTerms(principal=12000, period_rate=1e-17, number_of_payments=12))

    assert result.payment == pytest.approx(1000)
    assert result.schedule[-1].balance == 0.0
    assert result.total_interest == pytest.approx(0, abs=1e-9)


def test_payment_for_keeps_precision_at_small_rates():
    r, n = 1e-12, 360
    # first-order expansion of the level payment; the next term is ~1e-20
    expected = 100000 / n * (1 + r * (n + 1) / 2)
    assert payment_for(100000, r, n) == pytest.approx(expected, rel=1e-12)


@pytest.mark.parametrize(
    "terms",
    [
        LoanTerms(principal=0, period_rate=0.01, number_of_payments=12),
        LoanTerms(principal=-2500, period_rate=0.01, number_of_payments=12),
        LoanTerms(principal=1000, period_rate=0.01, number_of_payments=0),
        LoanTerms(principal=1000, period_rate=-0.01, number_of_payments=12),
        LoanTerms(principal=1000, period_rate=math.nan, number_of_payments=12),
        LoanTerms(principal=1000, period_rate=0.01, number_of_payments=2.5),
        LoanTerms(principal=1000, period_rate=0.01, number_of_payments=math.inf),
        LoanTerms(principal=1000, period_rate=0.01, number_of_payments=math.nan),
    ],
)
def test_degenerate_loans_are_reported(terms):
    with pytest.raises(DegenerateLoan):
        amortize(terms)


def test_yearly_summary_groups_twelve_payments():
    result = amortize(LoanTerms(principal=10000, period_rate=0.05 / 12, number_of_payments=60))
    years = yearly_summary(result.schedule)

    assert [year.year for year in years] == [1, 2, 3, 4, 5]
    assert years[-1].balance == 0.0
    assert sum(year.principal for year in years) == pytest.approx(10000, abs=1e-6)
    assert sum(year.interest for year in years) == pytest.approx(result.total_interest)
    assert years[0].balance == result.schedule[11].balance


def test_yearly_summary_keeps_partial_final_year():
    result = amortize(LoanTerms(principal=5000, period_rate=0.01, number_of_payments=18))
    years = yearly_summary(result.schedule, periods_per_year=12)

    assert len(years) == 2
    assert years[1].balance == 0.0


def test_yearly_summary_rejects_bad_cadence():
    with pytest.raises(InvalidHorizon):
        yearly_summary([], periods_per_year=0)


def test_lump_sum_due_compounds_to_maturity():
    due = lump_sum_due(100000, RateSpec(6, Compounding.ANNUALLY), 10)
    assert due == pytest.approx(100000 * 1.06**10)

    monthly = lump_sum_due(100000, RateSpec(6, Compounding.MONTHLY), 10)
    assert monthly == pytest.approx(100000 * (1 + 0.06 / 12) ** 120)


def test_lump_sum_due_validates_inputs():
    with pytest.raises(DegenerateLoan):
        lump_sum_due(0, RateSpec(6), 10)
    with pytest.raises(InvalidHorizon):
        lump_sum_due(1000, RateSpec(6), 0)
