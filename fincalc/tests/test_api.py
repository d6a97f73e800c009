from __future__ import annotations

import pytest
from flask.testing import FlaskClient


def loan_payload() -> dict:
    return {
        "principal": 10000,
        "annual_rate": 5,
        "number_of_payments": 60,
    }


def test_amortization_endpoint_returns_schedule(client: FlaskClient):
    resp = client.post("/api/calc/amortization", json=loan_payload())

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["payment"] == pytest.approx(188.71, abs=0.01)
    assert body["number_of_payments"] == 60
    assert len(body["schedule"]) == 60
    assert body["schedule"][-1]["balance"] == 0.0
    assert [year["year"] for year in body["yearly"]] == [1, 2, 3, 4, 5]


def test_amortization_term_in_years_without_schedule(client: FlaskClient):
    payload = {"principal": 200000, "annual_rate": 6, "term_years": 30, "include_schedule": False}
    resp = client.post("/api/calc/amortization", json=payload)

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["number_of_payments"] == 360
    assert body["payment"] == pytest.approx(1199.10, abs=0.01)
    assert body["schedule"] == []
    assert body["yearly"] == []


def test_car_loan_offset_by_down_payment_is_a_business_error(client: FlaskClient):
    payload = loan_payload() | {"down_payment": 8000, "trade_in_value": 2000}
    resp = client.post("/api/calc/amortization", json=payload)

    assert resp.status_code == 422
    body = resp.get_json()
    assert body["error"] == "DegenerateLoan"
    assert body["message"]


def test_schedule_longer_than_configured_limit_is_rejected(client: FlaskClient):
    payload = {"principal": 10000, "annual_rate": 5, "number_of_payments": 601}
    resp = client.post("/api/calc/amortization", json=payload)

    assert resp.status_code == 422
    assert resp.get_json()["error"] == "InvalidHorizon"


def test_amortization_at_a_near_zero_rate(client: FlaskClient):
    payload = {"principal": 12000, "annual_rate": 1e-15, "number_of_payments": 12}
    resp = client.post("/api/calc/amortization", json=payload)

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["payment"] == pytest.approx(1000)
    assert body["schedule"][-1]["balance"] == 0.0


def test_invalid_payload_returns_422(client: FlaskClient):
    resp = client.post("/api/calc/amortization", json={"principal": 10000})

    assert resp.status_code == 422
    body = resp.get_json()
    assert "detail" in body


def test_missing_term_is_a_validation_error(client: FlaskClient):
    resp = client.post("/api/calc/amortization", json={"principal": 10000, "annual_rate": 5})

    assert resp.status_code == 422
    assert any("term" in entry["msg"] for entry in resp.get_json()["detail"])


def test_unknown_fields_are_rejected(client: FlaskClient):
    resp = client.post("/api/calc/amortization", json=loan_payload() | {"currency": "USD"})

    assert resp.status_code == 422


def test_lump_sum_endpoint(client: FlaskClient):
    payload = {"principal": 100000, "annual_rate": 6, "term_years": 10}
    resp = client.post("/api/calc/lump-sum", json=payload)

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["amount_due"] == pytest.approx(100000 * 1.06**10)
    assert body["total_interest"] == pytest.approx(body["amount_due"] - 100000)


def test_growth_endpoint_breakdown(client: FlaskClient):
    payload = {
        "starting_balance": 1000,
        "contribution": 100,
        "annual_rate": 0,
        "years": 1,
        "include_rows": True,
    }
    resp = client.post("/api/calc/growth", json=payload)

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["horizon_periods"] == 12
    assert body["ending_balance"] == pytest.approx(2200)
    assert body["total_contributions"] == pytest.approx(1200)
    assert body["total_interest"] == 0
    assert len(body["rows"]) == 12


def test_growth_with_escalation_and_tax(client: FlaskClient):
    base = {"starting_balance": 5000, "contribution": 200, "annual_rate": 7, "years": 10}
    plain = client.post("/api/calc/growth", json=base).get_json()
    escalated = client.post("/api/calc/growth", json=base | {"escalation_rate": 3}).get_json()
    taxed = client.post("/api/calc/growth", json=base | {"tax_rate": 0.25}).get_json()

    assert escalated["ending_balance"] > plain["ending_balance"]
    assert taxed["ending_balance"] < plain["ending_balance"]
    assert taxed["total_tax"] > 0
    assert plain["rows"] == []


def test_tvm_endpoint_solves_future_value(client: FlaskClient):
    payload = {"solve_for": "fv", "pv": -1000, "pmt": 0, "nper": 120, "rate": 7}
    resp = client.post("/api/calc/tvm", json=payload)

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["solved_for"] == "fv"
    assert body["value"] == pytest.approx(2009.66, abs=0.05)
    assert body["period_rate"] == pytest.approx(0.07 / 12)


def test_tvm_endpoint_reports_rate_as_annual_percent(client: FlaskClient):
    payload = {"solve_for": "rate", "pv": 10000, "pmt": -188.7123, "fv": 0, "nper": 60}
    resp = client.post("/api/calc/tvm", json=payload)

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["rate"] == pytest.approx(5.0, abs=1e-3)
    assert body["display_value"] == pytest.approx(5.0, abs=1e-3)


def test_tvm_endpoint_no_solution(client: FlaskClient):
    payload = {"solve_for": "nper", "pv": 1000, "fv": 1000, "pmt": 0, "rate": 60, "periods_per_year": 12}
    resp = client.post("/api/calc/tvm", json=payload)

    assert resp.status_code == 422
    assert resp.get_json()["error"] == "NoRealSolution"


def test_tvm_endpoint_missing_inputs(client: FlaskClient):
    resp = client.post("/api/calc/tvm", json={"solve_for": "pmt", "pv": 0, "nper": 60})

    assert resp.status_code == 422
    body = resp.get_json()
    assert body["error"] == "IncompleteParameters"
    assert "fv" in body["message"]


def test_tvm_endpoint_rejects_unknown_target(client: FlaskClient):
    resp = client.post("/api/calc/tvm", json={"solve_for": "irr", "pv": 0, "nper": 60})

    assert resp.status_code == 422
    assert "detail" in resp.get_json()


def test_goal_endpoint(client: FlaskClient):
    payload = {"target_value": 25000, "current_balance": 0, "annual_rate": 5, "years": 5}
    resp = client.post("/api/calc/goal", json=payload)

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["required_contribution"] == pytest.approx(367.61, abs=0.05)
    assert body["horizon_periods"] == 60
    assert body["already_met"] is False


def test_goal_endpoint_already_met(client: FlaskClient):
    payload = {"target_value": 1000, "current_balance": 5000, "annual_rate": 5, "years": 5}
    resp = client.post("/api/calc/goal", json=payload)

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["already_met"] is True
    assert body["required_contribution"] == 0


def test_goal_endpoint_invalid_goal(client: FlaskClient):
    payload = {"target_value": 0, "annual_rate": 5, "years": 5}
    resp = client.post("/api/calc/goal", json=payload)

    assert resp.status_code == 422
    assert resp.get_json()["error"] == "InvalidGoal"


def test_nest_egg_endpoint(client: FlaskClient):
    payload = {"withdrawal": 1000, "annual_rate": 0, "years": 2}
    resp = client.post("/api/calc/nest-egg", json=payload)

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["required_balance"] == pytest.approx(24000)
    assert body["number_of_withdrawals"] == 24


def test_rate_conversion_apr_to_apy(client: FlaskClient):
    resp = client.post(
        "/api/calc/rates",
        json={"nominal_rate": 12, "compounding": "monthly", "target_compounding": "annually"},
    )

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["effective_rate"] == pytest.approx((1.01**12 - 1) * 100)
    assert body["converted_rate"] == pytest.approx(body["effective_rate"])
    assert body["period_rate"] == pytest.approx(0.01)


def test_rate_conversion_apy_to_apr(client: FlaskClient):
    resp = client.post("/api/calc/rates", json={"effective_rate": 5, "compounding": "daily"})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["nominal_rate"] == pytest.approx(365 * (1.05 ** (1 / 365) - 1) * 100)
    assert body["effective_rate"] == pytest.approx(5)


def test_rate_conversion_needs_exactly_one_rate(client: FlaskClient):
    resp = client.post("/api/calc/rates", json={"nominal_rate": 5, "effective_rate": 5})

    assert resp.status_code == 422
