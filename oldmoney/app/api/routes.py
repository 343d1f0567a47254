"""HTTP routes for the Flask API."""

import logging
from datetime import date, datetime
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, Response, current_app, jsonify, request
from pydantic import ValidationError

from oldmoney.core.errors import (
    EmailConfigurationError,
    ExternalServiceError,
    InputValidationError,
)
from oldmoney.core.export import (
    ExportFormat,
    build_email_body,
    build_email_subject,
    export_filename,
    serialize_result,
)
from oldmoney.core.mailer import DEFAULT_SUBJECT, Mailer, is_valid_email
from oldmoney.core.projection import calculate
from oldmoney.core.validation import require_valid, validate
from oldmoney.schemas.email import CalculationEmailRequest, EmailRequest, EmailResponse
from oldmoney.schemas.ping import PingResponse
from oldmoney.schemas.projection import FieldError

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)

SETTINGS_KEY = "OLDMONEY_SETTINGS"
MAILER_KEY = "oldmoney.mailer"

INVALID_EMAIL = "Please enter a valid email address"


def _mailer() -> Mailer:
    # checked before the payload so a misconfigured relay always reports itself
    mailer = current_app.extensions[MAILER_KEY]
    if not mailer.configured:
        raise EmailConfigurationError("Email service not configured")
    return mailer


def _json_object() -> Dict[str, Any]:
    payload = request.get_json(force=True, silent=True)
    if not isinstance(payload, dict):
        raise InputValidationError([FieldError(field="input", reason="Expected a JSON object")])
    return payload


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return jsonify({"detail": exc.errors(include_url=False)}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(InputValidationError)
def _handle_input_error(exc: InputValidationError):
    logger.info("Rejected calculator input: %s", exc)
    return (
        jsonify({"detail": [error.model_dump() for error in exc.errors]}),
        HTTPStatus.UNPROCESSABLE_ENTITY,
    )


@api_bp.errorhandler(EmailConfigurationError)
def _handle_email_configuration(exc: EmailConfigurationError):
    logger.error("Email relay called without SendGrid settings")
    return jsonify({"detail": str(exc)}), HTTPStatus.INTERNAL_SERVER_ERROR


@api_bp.errorhandler(ExternalServiceError)
def _handle_external_service(exc: ExternalServiceError):
    status = exc.status_code or HTTPStatus.BAD_GATEWAY
    return jsonify({"detail": exc.reason}), status


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    settings = current_app.config[SETTINGS_KEY]
    response = PingResponse(message="pong", email_enabled=settings.email_enabled)
    return jsonify(response.model_dump())


@api_bp.post("/calc/projection")
def projection() -> Any:
    """Return the 40-year table and the summary box values."""
    inputs = require_valid(_json_object())
    result = calculate(inputs)
    return jsonify(
        {
            "model": result.model.value,
            "records": [record.model_dump() for record in result.records],
            "summary": result.summary.model_dump(),
        }
    )


@api_bp.post("/calc/export")
def export() -> Any:
    """Download the projection as CSV, or as tab-separated text for the clipboard."""
    requested = request.args.get("format", ExportFormat.CSV.value).lower()
    try:
        fmt = ExportFormat(requested)
    except ValueError:
        return jsonify({"detail": f"Unknown export format: {requested}"}), HTTPStatus.BAD_REQUEST

    inputs = require_valid(_json_object())
    result = calculate(inputs)
    body = serialize_result(result, fmt, generated_at=datetime.now())

    filename = export_filename(result.model, date.today(), fmt)
    return Response(
        body,
        mimetype=fmt.mimetype,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@api_bp.post("/send-email")
def send_email() -> Any:
    """Forward a ready-made message to the email provider."""
    mailer = _mailer()
    raw_payload = request.get_json(force=True, silent=True)
    if not isinstance(raw_payload, dict):
        return jsonify({"detail": "Invalid JSON payload"}), HTTPStatus.BAD_REQUEST

    payload = EmailRequest.model_validate(raw_payload)
    if not payload.to or not payload.text:
        return jsonify({"detail": "Missing required fields"}), HTTPStatus.BAD_REQUEST
    if not is_valid_email(payload.to):
        return jsonify({"detail": INVALID_EMAIL}), HTTPStatus.BAD_REQUEST

    mailer.send(
        to=payload.to,
        subject=payload.subject or DEFAULT_SUBJECT,
        text=payload.text,
        csv=payload.csv,
    )
    return jsonify(EmailResponse(message="Email sent").model_dump())


@api_bp.post("/calc/email")
def email_calculation() -> Any:
    """Calculate, export as CSV and mail the result in one request."""
    mailer = _mailer()
    payload = CalculationEmailRequest.model_validate(_json_object())

    # report a bad address together with any bad calculator fields
    checked = validate(payload.inputs)
    errors = list(checked.errors)
    if not is_valid_email(payload.to):
        errors.append(FieldError(field="to", reason=INVALID_EMAIL))
    if errors:
        raise InputValidationError(errors)

    generated_at = datetime.now()
    result = calculate(checked.inputs)
    mailer.send(
        to=payload.to,
        subject=build_email_subject(result.inputs),
        text=build_email_body(result, generated_at),
        csv=serialize_result(result, ExportFormat.CSV, generated_at=generated_at),
    )
    return jsonify(EmailResponse(message="Email sent").model_dump())
