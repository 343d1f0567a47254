"""Error types raised by the calculator core and the email relay."""

from __future__ import annotations

from typing import List, Optional

from oldmoney.schemas.projection import FieldError


class OldMoneyError(Exception):
    """Base class for all calculator errors."""


class InputValidationError(OldMoneyError, ValueError):
    def __init__(self, errors: List[FieldError]):
        super().__init__("; ".join(f"{error.field}: {error.reason}" for error in errors))
        self.errors = errors


class ProjectionPreconditionError(OldMoneyError, RuntimeError):
    """Raised when the engine is handed records it could never have produced."""


class EmailConfigurationError(OldMoneyError):
    pass


class ExternalServiceError(OldMoneyError):
    """The email provider rejected the message or could not be reached."""

    def __init__(self, reason: str, status_code: Optional[int] = None):
        super().__init__(reason)
        self.reason = reason
        self.status_code = status_code
