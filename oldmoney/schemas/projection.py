"""Data contracts for savings projections."""

from __future__ import annotations

from enum import Enum
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_core import PydanticCustomError

MAX_AMOUNT = 999_999_999
MAX_PERCENT = 100


class GrowthModel(str, Enum):
    COMPOUND_CONTRIBUTION = "compound_contribution"
    ANNUAL_COMPOUNDING = "annual_compounding"


# The input each growth model has no use for; it must be left at zero.
UNUSED_FIELD = {
    GrowthModel.COMPOUND_CONTRIBUTION: "savings_percent",
    GrowthModel.ANNUAL_COMPOUNDING: "contribution",
}


class FieldError(BaseModel):
    """One rejected input field."""

    model_config = ConfigDict(frozen=True)

    field: str
    reason: str


class ProjectionInputs(BaseModel):
    """Inputs for one 40-year projection run.

    ``principal`` is the start amount for the interest calculator and the
    first year's annual income for the church tax calculator. ``rate`` is the
    interest rate or the yearly salary increase, both in percent.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    model: GrowthModel = GrowthModel.COMPOUND_CONTRIBUTION
    principal: float = Field(..., ge=0, le=MAX_AMOUNT, description="Start amount or annual income.")
    rate: float = Field(..., ge=0, le=MAX_PERCENT, description="Interest or salary increase, in percent.")
    contribution: float = Field(0.0, ge=0, le=MAX_AMOUNT, description="Savings added every month.")
    savings_percent: float = Field(
        0.0,
        ge=0,
        le=MAX_PERCENT,
        description="Share of each year's income put aside, in percent.",
    )

    @field_validator("contribution", "savings_percent", mode="before")
    @classmethod
    def blank_means_zero(cls, value: Any) -> Any:
        # an empty optional box on the form counts as no savings
        if value is None or (isinstance(value, str) and not value.strip()):
            return 0.0
        return value

    @field_validator("principal", "rate", "contribution", "savings_percent", mode="before")
    @classmethod
    def reject_booleans(cls, value: Any) -> Any:
        # JSON true/false would otherwise pass as 1.0/0.0
        if isinstance(value, bool):
            raise ValueError("Input should be a number")
        return value

    @model_validator(mode="after")
    def unused_field_is_zero(self) -> "ProjectionInputs":
        unused = UNUSED_FIELD[self.model]
        if getattr(self, unused):
            raise PydanticCustomError(
                "unused_for_model",
                "Not used by the {model} model, leave it at 0",
                {"field": unused, "model": self.model.value},
            )
        return self


class YearRecord(BaseModel):
    """Single row of a projection."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int = Field(..., ge=1)
    start_value: float
    delta: float
    end_value: float
    monthly_equivalent: float
    period_increase: float
    annual_savings: float = 0.0
    total_accumulated: float = 0.0


class Summary(BaseModel):
    """Checkpoint values and totals derived from a full projection."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    initial_value: float
    value_at_10: float
    value_at_30: float
    value_at_40: float
    total_delta: float
    final_value: float
    total_growth: float
    growth_percent: float


class ProjectionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    model: GrowthModel
    inputs: ProjectionInputs
    records: List[YearRecord]
    summary: Summary
