"""Data contracts for the email relay."""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class EmailRequest(BaseModel):
    """Message forwarded as-is to the email provider."""

    model_config = ConfigDict(str_strip_whitespace=True)

    to: str = ""
    subject: str = ""
    text: str = ""
    csv: str = ""


class CalculationEmailRequest(BaseModel):
    """Compute a projection and mail the export to ``to``."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    to: str = ""
    inputs: Dict[str, Any] = Field(default_factory=dict)


class EmailResponse(BaseModel):
    message: str
