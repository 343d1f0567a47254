"""Runtime configuration read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

SENDGRID_API_URL = "https://api.sendgrid.com/v3/mail/send"

DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]


@dataclass(frozen=True)
class Settings:
    sendgrid_api_key: Optional[str] = None
    sendgrid_from: Optional[str] = None
    sendgrid_api_url: str = SENDGRID_API_URL
    email_timeout: float = 10.0
    cors_origins: List[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    log_level: str = "INFO"

    @property
    def email_enabled(self) -> bool:
        return bool(self.sendgrid_api_key and self.sendgrid_from)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        origins = env.get("OLDMONEY_CORS_ORIGINS")
        return cls(
            sendgrid_api_key=env.get("SENDGRID_API_KEY") or None,
            sendgrid_from=env.get("SENDGRID_FROM") or None,
            sendgrid_api_url=env.get("SENDGRID_API_URL", SENDGRID_API_URL),
            email_timeout=float(env.get("OLDMONEY_EMAIL_TIMEOUT", "10")),
            cors_origins=(
                [origin.strip() for origin in origins.split(",") if origin.strip()]
                if origins
                else list(DEFAULT_CORS_ORIGINS)
            ),
            log_level=env.get("OLDMONEY_LOG_LEVEL", "INFO").upper(),
        )
