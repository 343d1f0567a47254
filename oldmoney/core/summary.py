"""Checkpoint values and totals for a finished projection."""

from __future__ import annotations

from typing import Sequence

from oldmoney.core.errors import ProjectionPreconditionError
from oldmoney.schemas.projection import GrowthModel, Summary, YearRecord

CHECKPOINT_YEARS = (10, 30, 40)


def checkpoint_value(record: YearRecord, model: GrowthModel) -> float:
    """Balance for the interest calculator, saved total for the income one."""
    if model == GrowthModel.ANNUAL_COMPOUNDING:
        return record.total_accumulated
    return record.end_value


def summarize(records: Sequence[YearRecord], model: GrowthModel) -> Summary:
    """
    Derive the summary box values from a complete projection.

    Growth percentage is measured against the first year's start value and is
    reported as 0.0 when that value is zero.
    """
    required = max(CHECKPOINT_YEARS)
    if len(records) < required:
        raise ProjectionPreconditionError(
            f"summary needs {required} yearly records, got {len(records)}"
        )
    for expected_year, record in enumerate(records, start=1):
        if record.year != expected_year:
            raise ProjectionPreconditionError(
                f"records out of order: expected year {expected_year}, got {record.year}"
            )

    by_year = {record.year: record for record in records}
    value_at_10, value_at_30, value_at_40 = (
        checkpoint_value(by_year[year], model) for year in CHECKPOINT_YEARS
    )

    initial_value = records[0].start_value
    final_value = records[-1].end_value
    total_growth = final_value - initial_value
    growth_percent = (total_growth / initial_value) * 100 if initial_value else 0.0

    return Summary(
        initial_value=initial_value,
        value_at_10=value_at_10,
        value_at_30=value_at_30,
        value_at_40=value_at_40,
        total_delta=sum(record.delta for record in records),
        final_value=final_value,
        total_growth=total_growth,
        growth_percent=growth_percent,
    )
