"""Data contracts for savings and investment growth projections."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from fincalc.domain.frequency import Compounding


class GrowthRequest(BaseModel):
    """Inputs for the savings, investment, compound-interest and college calculators."""

    model_config = ConfigDict(extra="forbid")

    starting_balance: float = Field(0.0, ge=0, description="Balance before the first period.")
    contribution: float = Field(0.0, ge=0, description="Deposit at the start of each period.")
    escalation_rate: float = Field(
        0.0,
        ge=0,
        description="Annual percent increase of the deposit, applied after each full year.",
    )
    contribution_frequency: int = Field(12, ge=1, le=365, description="Deposits per year.")
    annual_rate: float = Field(..., ge=0, description="Nominal annual return in percent.")
    compounding: Compounding = Compounding.MONTHLY
    years: Optional[float] = Field(None, gt=0)
    horizon_periods: Optional[int] = Field(None, ge=1)
    tax_rate: float = Field(0.0, ge=0, le=1, description="Share of each interest credit withheld.")
    include_rows: bool = False

    @model_validator(mode="after")
    def ensure_horizon(self) -> "GrowthRequest":
        if self.years is None and self.horizon_periods is None:
            raise ValueError("provide years or horizon_periods")
        return self


class GrowthRowSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    period: int = Field(..., ge=1)
    contribution: float
    interest: float
    tax: float
    balance: float


class GrowthResponse(BaseModel):
    horizon_periods: int
    starting_balance: float
    ending_balance: float
    total_contributions: float
    total_interest: float
    total_tax: float
    rows: List[GrowthRowSchema] = []
