"""Year-by-year savings projection.

Two growth rules share the same 40-row output:

  - COMPOUND_CONTRIBUTION (interest on interest calculator):
        every month the monthly savings are paid in first, then a twelfth of
        the yearly rate is credited on the updated balance.
  - ANNUAL_COMPOUNDING (church tax calculator):
        the value grows once a year by ``rate`` percent. When a savings
        percentage is given, that share of the income earned during the year
        is put aside and accumulated.

Years are numbered 1..40 and each year's start value is the previous year's
end value. Nothing is rounded here; rounding happens on export.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List

from oldmoney.core.summary import summarize
from oldmoney.schemas.projection import (
    GrowthModel,
    ProjectionInputs,
    ProjectionResult,
    YearRecord,
)

logger = logging.getLogger(__name__)

HORIZON_YEARS = 40
MONTHS_PER_YEAR = 12


def _project_compound_contribution(inputs: ProjectionInputs) -> List[YearRecord]:
    monthly_rate = (inputs.rate / 100) / MONTHS_PER_YEAR
    monthly_savings = inputs.contribution

    records: List[YearRecord] = []
    balance = float(inputs.principal)
    paid_in = 0.0

    for year in range(1, HORIZON_YEARS + 1):
        start = balance
        interest_total = 0.0

        for _ in range(MONTHS_PER_YEAR):
            balance += monthly_savings
            interest = balance * monthly_rate
            interest_total += interest
            balance += interest

        annual_savings = monthly_savings * MONTHS_PER_YEAR
        paid_in += annual_savings

        records.append(
            YearRecord(
                year=year,
                start_value=start,
                delta=interest_total,
                end_value=balance,
                monthly_equivalent=balance / MONTHS_PER_YEAR,
                period_increase=balance - start,
                annual_savings=annual_savings,
                total_accumulated=paid_in,
            )
        )

    return records


def _project_annual_compounding(inputs: ProjectionInputs) -> List[YearRecord]:
    growth = inputs.rate / 100
    saved_share = inputs.savings_percent / 100

    records: List[YearRecord] = []
    value = float(inputs.principal)
    accumulated = 0.0

    for year in range(1, HORIZON_YEARS + 1):
        start = value
        increase = start * growth
        value = start + increase

        # savings come out of the income earned during this year
        annual_savings = start * saved_share
        accumulated += annual_savings

        records.append(
            YearRecord(
                year=year,
                start_value=start,
                delta=increase,
                end_value=value,
                monthly_equivalent=annual_savings / MONTHS_PER_YEAR,
                period_increase=value - start,
                annual_savings=annual_savings,
                total_accumulated=accumulated,
            )
        )

    return records


_MODELS: Dict[GrowthModel, Callable[[ProjectionInputs], List[YearRecord]]] = {
    GrowthModel.COMPOUND_CONTRIBUTION: _project_compound_contribution,
    GrowthModel.ANNUAL_COMPOUNDING: _project_annual_compounding,
}


def project(inputs: ProjectionInputs) -> List[YearRecord]:
    """Return the 40 yearly records for ``inputs`` under ``inputs.model``."""
    return _MODELS[inputs.model](inputs)


def calculate(inputs: ProjectionInputs) -> ProjectionResult:
    """Project and summarize in one go."""
    logger.debug(
        "Projecting %s: principal=%s rate=%s contribution=%s savings_percent=%s",
        inputs.model.value,
        inputs.principal,
        inputs.rate,
        inputs.contribution,
        inputs.savings_percent,
    )
    records = project(inputs)
    return ProjectionResult(
        model=inputs.model,
        inputs=inputs,
        records=records,
        summary=summarize(records, inputs.model),
    )


__all__ = [
    "HORIZON_YEARS",
    "MONTHS_PER_YEAR",
    "project",
    "calculate",
]
