"""Input checks that run before any projection work."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

from pydantic import ValidationError

from oldmoney.core.errors import InputValidationError
from oldmoney.schemas.projection import MAX_AMOUNT, MAX_PERCENT, FieldError, ProjectionInputs

# Reasons shown next to the form fields when a bound is violated.
_RANGE_REASONS = {
    "principal": f"Please enter a valid amount (0-{MAX_AMOUNT:,})",
    "rate": f"Please enter a valid percentage (0-{MAX_PERCENT})",
    "contribution": f"Please enter a valid monthly savings amount (0-{MAX_AMOUNT:,})",
    "savings_percent": f"Please enter a valid percentage (0-{MAX_PERCENT})",
}


@dataclass
class ValidationResult:
    inputs: Optional[ProjectionInputs]
    errors: List[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.inputs is not None and not self.errors


def _field_errors(exc: ValidationError) -> List[FieldError]:
    errors: List[FieldError] = []
    seen = set()
    for error in exc.errors():
        # cross-field checks carry their field name in the error context
        name = (
            ".".join(str(part) for part in error["loc"])
            or error.get("ctx", {}).get("field")
            or "input"
        )
        # one entry per field even if pydantic reports several problems
        if name in seen:
            continue
        seen.add(name)

        kind = error["type"]
        if kind in ("greater_than_equal", "less_than_equal") and name in _RANGE_REASONS:
            reason = _RANGE_REASONS[name]
        elif kind == "extra_forbidden":
            reason = "Unknown field"
        else:
            reason = error["msg"]
        errors.append(FieldError(field=name, reason=reason))
    return errors


def validate(raw: Mapping[str, Any]) -> ValidationResult:
    """Check every field of ``raw`` and collect all problems at once."""
    try:
        inputs = ProjectionInputs.model_validate(dict(raw))
    except ValidationError as exc:
        return ValidationResult(inputs=None, errors=_field_errors(exc))
    return ValidationResult(inputs=inputs)


def require_valid(raw: Mapping[str, Any]) -> ProjectionInputs:
    result = validate(raw)
    if not result.ok:
        raise InputValidationError(result.errors)
    return result.inputs
