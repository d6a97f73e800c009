"""Shared pieces of the API contracts."""

from typing import Optional

from pydantic import BaseModel

from fincalc.domain.errors import InvalidHorizon


class PingResponse(BaseModel):
    message: str
    version: str


class ErrorResponse(BaseModel):
    error: str
    message: str


def resolve_horizon(years: Optional[float], periods: Optional[int], periods_per_year: int) -> int:
    """Number of periods from an explicit count or a term in years."""
    if periods is not None:
        return periods
    if years is None:
        raise InvalidHorizon("either a term in years or a number of periods is required")
    return int(round(years * periods_per_year))
