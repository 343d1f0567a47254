from __future__ import annotations

from typing import List, Optional

import pytest
from flask.testing import FlaskClient

from oldmoney.app import create_app
from oldmoney.config import Settings


class RecordingMailer:
    """Stands in for SendGrid; keeps every message it is asked to send."""

    def __init__(self, error: Optional[Exception] = None, configured: bool = True):
        self.sent: List[dict] = []
        self.error = error
        self.configured = configured

    def send(self, to: str, subject: str, text: str, csv: str = "") -> None:
        if self.error is not None:
            raise self.error
        self.sent.append({"to": to, "subject": subject, "text": text, "csv": csv})


@pytest.fixture()
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture()
def app(mailer):
    settings = Settings(sendgrid_api_key="test-key", sendgrid_from="calc@example.com")
    flask_app = create_app(settings=settings, mailer=mailer)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture()
def client(app) -> FlaskClient:
    with app.test_client() as test_client:
        yield test_client
