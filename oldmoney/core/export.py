"""CSV / tab-separated export and human-readable text for a projection."""

from __future__ import annotations

import csv
import io
from datetime import date, datetime
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from oldmoney.schemas.projection import (
    GrowthModel,
    ProjectionInputs,
    ProjectionResult,
    Summary,
    YearRecord,
)


class ExportFormat(str, Enum):
    CSV = "csv"
    TSV = "tsv"

    @property
    def delimiter(self) -> str:
        return "\t" if self is ExportFormat.TSV else ","

    @property
    def mimetype(self) -> str:
        return "text/tab-separated-values" if self is ExportFormat.TSV else "text/csv"


HEADERS = {
    GrowthModel.COMPOUND_CONTRIBUTION: (
        "Year",
        "Start Amount",
        "Interest",
        "End Amount",
        "Monthly Equiv.",
        "Yearly Increase",
    ),
    GrowthModel.ANNUAL_COMPOUNDING: (
        "Year",
        "Income",
        "Salary Increase",
        "Annual Savings",
        "Monthly Savings",
        "Total Accumulated",
    ),
}

TITLES = {
    GrowthModel.COMPOUND_CONTRIBUTION: "Interest Calculation",
    GrowthModel.ANNUAL_COMPOUNDING: "Church Tax Calculation",
}


def _number(value: float) -> str:
    return f"{value:.2f}"


def _row(record: YearRecord, model: GrowthModel) -> List[str]:
    if model == GrowthModel.ANNUAL_COMPOUNDING:
        values = (
            record.start_value,
            record.delta,
            record.annual_savings,
            record.monthly_equivalent,
            record.total_accumulated,
        )
    else:
        values = (
            record.start_value,
            record.delta,
            record.end_value,
            record.monthly_equivalent,
            record.period_increase,
        )
    return [str(record.year), *(_number(value) for value in values)]


def summary_rows(summary: Summary, model: GrowthModel) -> List[Tuple[str, float]]:
    """Label/value pairs shown in the summary box and under the export table."""
    if model == GrowthModel.ANNUAL_COMPOUNDING:
        return [
            ("Total Savings after 10 years", summary.value_at_10),
            ("Total Savings after 30 years", summary.value_at_30),
            ("Total Savings after 40 years", summary.value_at_40),
            ("Total Salary Increase", summary.total_delta),
            ("Final Annual Income", summary.final_value),
        ]
    return [
        ("Start Amount", summary.initial_value),
        ("Amount after 10 years", summary.value_at_10),
        ("Amount after 30 years", summary.value_at_30),
        ("Amount after 40 years", summary.value_at_40),
        ("Total Interest", summary.total_delta),
        ("Total Growth", summary.total_growth),
        ("Growth %", summary.growth_percent),
    ]


def settings_rows(inputs: ProjectionInputs) -> List[Tuple[str, float]]:
    if inputs.model == GrowthModel.ANNUAL_COMPOUNDING:
        return [
            ("Annual Income", inputs.principal),
            ("Salary Increase %", inputs.rate),
            ("Savings %", inputs.savings_percent),
        ]
    return [
        ("Start Amount", inputs.principal),
        ("Interest Rate %", inputs.rate),
        ("Monthly Savings", inputs.contribution),
    ]


def _writer(buffer: io.StringIO, fmt: ExportFormat):
    return csv.writer(buffer, delimiter=fmt.delimiter, lineterminator="\n")


def serialize_table(
    records: Sequence[YearRecord],
    fmt: ExportFormat = ExportFormat.CSV,
    model: GrowthModel = GrowthModel.COMPOUND_CONTRIBUTION,
) -> str:
    """Header row plus one row per year, two decimals, ``.`` as separator."""
    buffer = io.StringIO()
    writer = _writer(buffer, fmt)
    writer.writerow(HEADERS[model])
    for record in records:
        writer.writerow(_row(record, model))
    return buffer.getvalue()


def serialize(
    records: Sequence[YearRecord],
    summary: Summary,
    fmt: ExportFormat = ExportFormat.CSV,
    model: GrowthModel = GrowthModel.COMPOUND_CONTRIBUTION,
    generated_at: Optional[datetime] = None,
    inputs: Optional[ProjectionInputs] = None,
) -> str:
    """
    Full export document.

    Layout:
      # Generated: <timestamp>      (only when ``generated_at`` is given)
      <header row>
      <40 data rows>
      <blank line>
      Summary
      <label, value rows>
      <blank line, Initial Settings block>   (only when ``inputs`` is given)
    """
    buffer = io.StringIO()
    if generated_at is not None:
        buffer.write(f"# Generated: {generated_at.isoformat(timespec='seconds')}\n")
    buffer.write(serialize_table(records, fmt, model))

    writer = _writer(buffer, fmt)
    buffer.write("\n")
    writer.writerow(["Summary"])
    for label, value in summary_rows(summary, model):
        writer.writerow([label, _number(value)])

    if inputs is not None:
        buffer.write("\n")
        writer.writerow(["Initial Settings"])
        for label, value in settings_rows(inputs):
            writer.writerow([label, _number(value)])

    return buffer.getvalue()


def serialize_result(
    result: ProjectionResult,
    fmt: ExportFormat = ExportFormat.CSV,
    generated_at: Optional[datetime] = None,
) -> str:
    return serialize(
        result.records,
        result.summary,
        fmt=fmt,
        model=result.model,
        generated_at=generated_at,
        inputs=result.inputs,
    )


def export_filename(model: GrowthModel, day: date, fmt: ExportFormat = ExportFormat.CSV) -> str:
    if model == GrowthModel.ANNUAL_COMPOUNDING:
        return f"church-tax-calculation-{day.isoformat()}.{fmt.value}"
    return f"interest_calculator_{day.isoformat()}.{fmt.value}"


# ---------------------------------------------------------------------------
# Display formatting (not used in the machine-readable export)
# ---------------------------------------------------------------------------

_NBSP = "\u00a0"
_MINUS = "\u2212"


def format_currency(value: float, decimals: int = 2) -> str:
    """Swedish kronor the way sv-SE renders them, e.g. ``1 234,56 kr``."""
    rounded = round(value, decimals)
    text = f"{abs(rounded):,.{decimals}f}".replace(",", _NBSP).replace(".", ",")
    sign = _MINUS if rounded < 0 else ""
    return f"{sign}{text}{_NBSP}kr"


def _plain(value: float) -> str:
    """Input echo without trailing zeros: 300000, 1.2, 2.75."""
    return f"{value:.2f}".rstrip("0").rstrip(".")


def format_percent(value: float) -> str:
    return f"{_plain(value)}%"


def build_email_subject(inputs: ProjectionInputs) -> str:
    title = TITLES[inputs.model]
    if inputs.model == GrowthModel.ANNUAL_COMPOUNDING:
        return f"{title} - Income: {_plain(inputs.principal)} kr"
    return f"{title} - Start Amount: {_plain(inputs.principal)} kr"


def _bullets(rows: Iterable[Tuple[str, str]]) -> str:
    return "".join(f"- {label}: {value}\n" for label, value in rows)


def build_email_body(result: ProjectionResult, generated_at: datetime) -> str:
    """Plain-text message that accompanies an emailed CSV export."""
    inputs = result.inputs
    title = f"{TITLES[result.model]} Results"

    if result.model == GrowthModel.ANNUAL_COMPOUNDING:
        parameters = [
            ("Annual Income", format_currency(inputs.principal)),
            ("Salary Increase (%)", format_percent(inputs.rate)),
            ("Savings Percentage (%)", format_percent(inputs.savings_percent)),
        ]
    else:
        parameters = [
            ("Start Amount", format_currency(inputs.principal)),
            ("Interest Rate (%)", format_percent(inputs.rate)),
            ("Monthly Savings", format_currency(inputs.contribution)),
        ]

    results = [
        (label, f"{value:.2f}%" if label.endswith("%") else format_currency(value))
        for label, value in summary_rows(result.summary, result.model)
    ]

    body = f"{title}\n"
    body += "=" * len(title) + "\n\n"
    body += f"Generated: {generated_at.strftime('%Y-%m-%d %H:%M:%S')}\n\n"
    body += "Input Parameters:\n"
    body += _bullets(parameters) + "\n"
    body += "Summary Results:\n"
    body += _bullets(results) + "\n"
    body += "Full data table is attached as CSV.\n"
    body += "\nBest regards,\nOld Money Calculator"
    return body
