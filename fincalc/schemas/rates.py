"""Data contracts for APR/APY and compounding conversions."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from fincalc.domain.frequency import Compounding


class RateConversionRequest(BaseModel):
    """Give either a nominal rate (APR) or an effective rate (APY), not both."""

    model_config = ConfigDict(extra="forbid")

    nominal_rate: Optional[float] = Field(
        None,
        ge=0,
        description="Nominal annual rate in percent (e.g. 5 for 5%).",
    )
    effective_rate: Optional[float] = Field(
        None,
        gt=-100,
        description="Effective annual rate (APY) in percent.",
    )
    compounding: Compounding = Compounding.MONTHLY
    target_compounding: Optional[Compounding] = Field(
        None,
        description="Re-express the nominal rate under this compounding convention.",
    )

    @model_validator(mode="after")
    def ensure_single_rate(self) -> "RateConversionRequest":
        if (self.nominal_rate is None) == (self.effective_rate is None):
            raise ValueError("provide exactly one of nominal_rate or effective_rate")
        return self


class RateConversionResponse(BaseModel):
    nominal_rate: float
    effective_rate: float
    period_rate: float
    compounding: Compounding
    target_compounding: Optional[Compounding] = None
    converted_rate: Optional[float] = None

