"""Application factory and app-wide configuration."""

import logging
from typing import Optional

from flask import Flask
from flask_cors import CORS

from oldmoney.app.api.routes import MAILER_KEY, SETTINGS_KEY, api_bp
from oldmoney.config import Settings
from oldmoney.core.mailer import Mailer, SendGridMailer

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def create_app(settings: Optional[Settings] = None, mailer: Optional[Mailer] = None) -> Flask:
    """Build the Flask app instance.

    ``settings`` defaults to the environment; ``mailer`` defaults to a
    SendGrid client built from those settings.
    """
    settings = settings or Settings.from_env()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

    app = Flask(__name__)
    app.config[SETTINGS_KEY] = settings
    app.extensions[MAILER_KEY] = mailer or SendGridMailer.from_settings(settings)

    CORS(
        app,
        resources={r"/api/*": {"origins": settings.cors_origins}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    return app
