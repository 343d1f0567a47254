from __future__ import annotations

from flask.testing import FlaskClient

from conftest import RecordingMailer
from oldmoney.app import create_app
from oldmoney.config import Settings
from oldmoney.core.errors import EmailConfigurationError, ExternalServiceError


def email_payload() -> dict:
    return {
        "to": "  anna@example.se ",
        "subject": "Church Tax Calculation",
        "text": "Results attached",
        "csv": "Year,Income\n1,300000.00",
    }


def client_with(mailer: RecordingMailer) -> FlaskClient:
    app = create_app(settings=Settings(), mailer=mailer)
    return app.test_client()


def test_send_email_forwards_trimmed_message(client: FlaskClient, mailer: RecordingMailer):
    resp = client.post("/api/send-email", json=email_payload())

    assert resp.status_code == 200
    assert resp.get_json() == {"message": "Email sent"}
    assert mailer.sent == [
        {
            "to": "anna@example.se",
            "subject": "Church Tax Calculation",
            "text": "Results attached",
            "csv": "Year,Income\n1,300000.00",
        }
    ]


def test_send_email_default_subject(client: FlaskClient, mailer: RecordingMailer):
    payload = email_payload()
    del payload["subject"]

    resp = client.post("/api/send-email", json=payload)

    assert resp.status_code == 200
    assert mailer.sent[0]["subject"] == "Interest Calculator Results"


def test_send_email_requires_recipient_and_text(client: FlaskClient, mailer: RecordingMailer):
    resp = client.post("/api/send-email", json={"to": "anna@example.se", "text": "   "})

    assert resp.status_code == 400
    assert resp.get_json()["detail"] == "Missing required fields"
    assert mailer.sent == []


def test_send_email_rejects_bad_address(client: FlaskClient, mailer: RecordingMailer):
    payload = email_payload()
    payload["to"] = "anna.example.se"

    resp = client.post("/api/send-email", json=payload)

    assert resp.status_code == 400
    assert resp.get_json()["detail"] == "Please enter a valid email address"
    assert mailer.sent == []


def test_send_email_rejects_invalid_json(client: FlaskClient):
    resp = client.post("/api/send-email", data="{not json", content_type="application/json")

    assert resp.status_code == 400
    assert resp.get_json()["detail"] == "Invalid JSON payload"


def test_provider_rejection_is_passed_through():
    client = client_with(RecordingMailer(error=ExternalServiceError("Forbidden", status_code=403)))

    resp = client.post("/api/send-email", json=email_payload())

    assert resp.status_code == 403
    assert resp.get_json()["detail"] == "Forbidden"


def test_unreachable_provider_is_a_bad_gateway():
    client = client_with(RecordingMailer(error=ExternalServiceError("Email send error")))

    resp = client.post("/api/send-email", json=email_payload())

    assert resp.status_code == 502
    assert resp.get_json()["detail"] == "Email send error"


def test_missing_configuration_is_a_server_error():
    client = client_with(RecordingMailer(error=EmailConfigurationError("Email service not configured")))

    resp = client.post("/api/send-email", json=email_payload())

    assert resp.status_code == 500
    assert resp.get_json()["detail"] == "Email service not configured"


def test_configuration_is_checked_before_the_payload():
    mailer = RecordingMailer(configured=False)
    client = client_with(mailer)

    bad_json = client.post("/api/send-email", data="{not json", content_type="application/json")
    bad_address = client.post("/api/calc/email", json={"to": "nobody", "inputs": {}})

    for resp in (bad_json, bad_address):
        assert resp.status_code == 500
        assert resp.get_json()["detail"] == "Email service not configured"
    assert mailer.sent == []


def test_calculation_email_sends_summary_and_csv(client: FlaskClient, mailer: RecordingMailer):
    resp = client.post(
        "/api/calc/email",
        json={
            "to": "anna@example.se",
            "inputs": {
                "model": "annual_compounding",
                "principal": 300000,
                "rate": 2,
                "savings_percent": 1.2,
            },
        },
    )

    assert resp.status_code == 200
    assert len(mailer.sent) == 1
    message = mailer.sent[0]
    assert message["subject"] == "Church Tax Calculation - Income: 300000 kr"
    assert message["text"].startswith("Church Tax Calculation Results")
    csv_lines = message["csv"].splitlines()
    assert csv_lines[0].startswith("# Generated: ")
    assert csv_lines[1] == "Year,Income,Salary Increase,Annual Savings,Monthly Savings,Total Accumulated"


def test_calculation_email_reports_address_and_inputs_together(client: FlaskClient, mailer: RecordingMailer):
    resp = client.post(
        "/api/calc/email",
        json={"to": "nobody", "inputs": {"principal": 100, "rate": -1}},
    )

    assert resp.status_code == 422
    assert sorted(error["field"] for error in resp.get_json()["detail"]) == ["rate", "to"]
    assert mailer.sent == []
