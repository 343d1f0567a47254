"""
Email relay for calculation results.

Messages go out through the SendGrid v3 mail-send API as a single
``text/plain`` part; an attached CSV is appended to the body rather than sent
as a MIME attachment.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Optional, Protocol

import requests

from oldmoney.config import SENDGRID_API_URL, Settings
from oldmoney.core.errors import EmailConfigurationError, ExternalServiceError

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
DEFAULT_SUBJECT = "Interest Calculator Results"


def is_valid_email(address: str) -> bool:
    return bool(address) and EMAIL_PATTERN.match(address) is not None


def compose_text(text: str, csv: str = "") -> str:
    """Message body with the CSV export appended when there is one."""
    return f"{text}\n\nCSV Data:\n{csv}" if csv else text


class Mailer(Protocol):
    @property
    def configured(self) -> bool:
        """False when the relay has no credentials to send with."""
        ...

    def send(self, to: str, subject: str, text: str, csv: str = "") -> None:
        """Deliver one message or raise ``ExternalServiceError``."""
        ...


class SendGridMailer:
    def __init__(
        self,
        api_key: Optional[str],
        from_email: Optional[str],
        api_url: str = SENDGRID_API_URL,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.from_email = from_email
        self.api_url = api_url
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: Settings) -> "SendGridMailer":
        return cls(
            api_key=settings.sendgrid_api_key,
            from_email=settings.sendgrid_from,
            api_url=settings.sendgrid_api_url,
            timeout=settings.email_timeout,
        )

    @property
    def configured(self) -> bool:
        return bool(self.api_key and self.from_email)

    def build_payload(self, to: str, subject: str, text: str, csv: str = "") -> Dict[str, Any]:
        return {
            "personalizations": [{"to": [{"email": to}]}],
            "from": {"email": self.from_email},
            "subject": subject,
            "content": [{"type": "text/plain", "value": compose_text(text, csv)}],
        }

    def send(self, to: str, subject: str, text: str, csv: str = "") -> None:
        if not self.configured:
            raise EmailConfigurationError("Email service not configured")

        payload = self.build_payload(to, subject, text, csv)
        try:
            response = self.session.post(
                self.api_url,
                json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.exception("SendGrid request to %s failed", self.api_url)
            raise ExternalServiceError("Email send error") from exc

        if not response.ok:
            logger.warning("SendGrid rejected message to %s: HTTP %s", to, response.status_code)
            raise ExternalServiceError(
                response.text or "SendGrid request failed",
                status_code=response.status_code,
            )

        logger.info("Email sent to %s (subject=%r)", to, subject)
