"""Data contracts for the five-variable TVM calculator."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from fincalc.core.tvm import PaymentTiming, SolveFor


class TVMRequest(BaseModel):
    """
    The field named by ``solve_for`` is ignored. ``rate`` is an annual
    percentage split evenly across ``periods_per_year``; ``nper`` counts periods.
    """

    model_config = ConfigDict(extra="forbid")

    solve_for: SolveFor
    pv: Optional[float] = Field(None, description="Present value (negative when paid out).")
    fv: Optional[float] = Field(None, description="Future value.")
    pmt: Optional[float] = Field(None, description="Payment per period.")
    nper: Optional[float] = Field(None, description="Number of periods.")
    rate: Optional[float] = Field(None, description="Annual rate in percent.")
    periods_per_year: int = Field(12, ge=1, le=365)
    timing: PaymentTiming = PaymentTiming.END


class TVMResponse(BaseModel):
    solved_for: SolveFor
    value: float
    display_value: float = Field(..., ge=0, description="Magnitude shown to the user.")
    pv: float
    fv: float
    pmt: float
    nper: float
    rate: float = Field(..., description="Annual rate in percent.")
    period_rate: float
    timing: PaymentTiming
    starting_balance: float
    ending_balance: float
    total_contributions: float
    total_interest: float
