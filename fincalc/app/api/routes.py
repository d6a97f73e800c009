"""HTTP routes for the Flask API."""

import logging
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from fincalc import __version__
from fincalc.core.calculators import (
    calculate_amortization,
    calculate_goal,
    calculate_growth,
    calculate_lump_sum,
    calculate_nest_egg,
    calculate_rate_conversion,
    calculate_tvm,
)
from fincalc.domain.errors import CalculationError
from fincalc.schemas.common import ErrorResponse, PingResponse
from fincalc.schemas.goals import GoalRequest, NestEggRequest
from fincalc.schemas.growth import GrowthRequest
from fincalc.schemas.loans import AmortizationRequest, LumpSumRequest
from fincalc.schemas.rates import RateConversionRequest
from fincalc.schemas.tvm import TVMRequest

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return jsonify({"detail": exc.errors(include_url=False, include_context=False)}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(CalculationError)
def _handle_calculation_error(exc: CalculationError):
    """Business-rule failures are shown next to the form, not treated as crashes."""
    logger.warning("%s on %s: %s", exc.kind, request.path, exc.message)
    body = ErrorResponse(error=exc.kind, message=exc.message)
    return jsonify(body.model_dump()), HTTPStatus.UNPROCESSABLE_ENTITY


def _payload() -> Dict[str, Any]:
    return request.get_json(force=True, silent=False)


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = PingResponse(message="pong", version=__version__)
    return jsonify(response.model_dump())


@api_bp.post("/calc/rates")
def rates() -> Any:
    payload = RateConversionRequest.model_validate(_payload())
    return jsonify(calculate_rate_conversion(payload).model_dump(mode="json"))


@api_bp.post("/calc/amortization")
def amortization() -> Any:
    payload = AmortizationRequest.model_validate(_payload())
    result = calculate_amortization(payload, max_periods=current_app.config["MAX_PERIODS"])
    return jsonify(result.model_dump(mode="json"))


@api_bp.post("/calc/lump-sum")
def lump_sum() -> Any:
    payload = LumpSumRequest.model_validate(_payload())
    return jsonify(calculate_lump_sum(payload).model_dump(mode="json"))


@api_bp.post("/calc/growth")
def growth() -> Any:
    payload = GrowthRequest.model_validate(_payload())
    result = calculate_growth(payload, max_periods=current_app.config["MAX_PERIODS"])
    return jsonify(result.model_dump(mode="json"))


@api_bp.post("/calc/tvm")
def tvm() -> Any:
    payload = TVMRequest.model_validate(_payload())
    return jsonify(calculate_tvm(payload).model_dump(mode="json"))


@api_bp.post("/calc/goal")
def goal() -> Any:
    payload = GoalRequest.model_validate(_payload())
    return jsonify(calculate_goal(payload).model_dump(mode="json"))


@api_bp.post("/calc/nest-egg")
def nest_egg() -> Any:
    payload = NestEggRequest.model_validate(_payload())
    return jsonify(calculate_nest_egg(payload).model_dump(mode="json"))
