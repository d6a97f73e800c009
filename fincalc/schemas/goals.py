"""Data contracts for savings goals and retirement drawdown."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from fincalc.domain.frequency import Compounding


class GoalRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    target_value: float = Field(..., description="Balance wanted at the end of the horizon.")
    current_balance: float = Field(0.0, ge=0)
    annual_rate: float = Field(..., ge=0, description="Nominal annual return in percent.")
    years: Optional[float] = Field(None, gt=0)
    horizon_periods: Optional[int] = Field(None, ge=1)
    periods_per_year: int = Field(12, ge=1, le=365, description="Contributions per year.")
    compounding: Optional[Compounding] = Field(
        None,
        description="Defaults to compounding once per contribution.",
    )

    @model_validator(mode="after")
    def ensure_horizon(self) -> "GoalRequest":
        if self.years is None and self.horizon_periods is None:
            raise ValueError("provide years or horizon_periods")
        return self


class GoalResponse(BaseModel):
    required_contribution: float = Field(..., ge=0)
    projected_balance: float
    gap: float
    already_met: bool
    horizon_periods: int
    period_rate: float
    total_contributions: float = Field(..., ge=0)


class NestEggRequest(BaseModel):
    """Withdrawals taken at the end of each period until the balance is spent."""

    model_config = ConfigDict(extra="forbid")

    withdrawal: float = Field(..., gt=0, description="Amount withdrawn per period.")
    annual_rate: float = Field(..., ge=0)
    years: float = Field(..., gt=0)
    periods_per_year: int = Field(12, ge=1, le=365)


class NestEggResponse(BaseModel):
    required_balance: float = Field(..., ge=0)
    number_of_withdrawals: int
    total_withdrawn: float
