"""Data contracts for fixed-payment and deferred loans."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from fincalc.domain.frequency import Compounding


class AmortizationRequest(BaseModel):
    """Inputs for the loan, car-loan and amortization calculators."""

    model_config = ConfigDict(extra="forbid")

    principal: float = Field(..., description="Price or amount borrowed before any offsets.")
    down_payment: float = Field(0.0, ge=0)
    trade_in_value: float = Field(0.0, ge=0, description="Trade-in equity applied against the price.")
    annual_rate: float = Field(..., ge=0, description="Nominal annual rate in percent.")
    term_years: Optional[float] = Field(None, gt=0)
    number_of_payments: Optional[int] = Field(None, ge=1)
    payments_per_year: int = Field(12, ge=1, le=365)
    compounding: Optional[Compounding] = Field(
        None,
        description="Defaults to compounding once per payment.",
    )
    include_schedule: bool = True

    @model_validator(mode="after")
    def ensure_term(self) -> "AmortizationRequest":
        if self.term_years is None and self.number_of_payments is None:
            raise ValueError("provide term_years or number_of_payments")
        return self

    @property
    def loan_amount(self) -> float:
        return self.principal - self.down_payment - self.trade_in_value


class AmortizationRowSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    period: int = Field(..., ge=1)
    payment: float
    interest: float
    principal: float
    balance: float = Field(..., ge=0)


class AmortizationYearSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    year: int = Field(..., ge=1)
    principal: float
    interest: float
    balance: float = Field(..., ge=0)


class AmortizationResponse(BaseModel):
    loan_amount: float
    number_of_payments: int
    period_rate: float
    payment: float
    total_paid: float
    total_interest: float
    schedule: List[AmortizationRowSchema] = []
    yearly: List[AmortizationYearSchema] = []


class LumpSumRequest(BaseModel):
    """A deferred loan repaid in one amount at maturity."""

    model_config = ConfigDict(extra="forbid")

    principal: float
    annual_rate: float = Field(..., ge=0)
    term_years: float = Field(..., gt=0)
    compounding: Compounding = Compounding.ANNUALLY


class LumpSumResponse(BaseModel):
    amount_due: float
    total_interest: float
