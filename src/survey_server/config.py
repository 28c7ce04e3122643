"""Server configuration — reads settings from environment variables.

All settings have sensible defaults for local development.  Secrets default
to ``None``; endpoints depending on a missing secret fail with 500 rather
than silently opening up.
"""

import os
from dataclasses import dataclass

# --- Pagination defaults ---
# Module-level constants read at import time so FastAPI Query() defaults
# can reference them (Query defaults must be static at decoration time).
DEFAULT_PAGE_LIMIT = int(os.getenv("DEFAULT_PAGE_LIMIT", "100"))
MAX_PAGE_LIMIT = int(os.getenv("MAX_PAGE_LIMIT", "500"))

SEVEN_DAYS = 60 * 60 * 24 * 7


@dataclass(frozen=True)
class ServerSettings:
    """Immutable server configuration read from environment at startup."""

    # Network
    host: str = "0.0.0.0"
    port: int = 8080

    # CORS — comma-separated literal origins and/or ``*`` wildcard patterns.
    # Empty rejects every cross-origin request.
    allowed_origins: str = ""

    # Logging
    log_level: str = "INFO"

    # Shared secret for the /data API (None = not configured -> 500)
    data_api_key: str | None = None

    # Response-copy e-mail (Resend)
    resend_api_key: str | None = None
    mail_from: str | None = None

    # Admin session cookie
    session_cookie_name: str = "session"
    session_max_age_seconds: int = SEVEN_DAYS


def load_settings() -> ServerSettings:
    """Build settings from environment variables."""
    return ServerSettings(
        host=os.getenv("SERVER_HOST", "0.0.0.0"),
        port=int(os.getenv("SERVER_PORT", "8080")),
        allowed_origins=os.getenv("ALLOWED_ORIGINS", ""),
        log_level=os.getenv("SERVER_LOG_LEVEL", "INFO").upper(),
        data_api_key=os.getenv("SURVEY_API_KEY") or None,
        resend_api_key=os.getenv("RESEND_API_KEY") or None,
        mail_from=os.getenv("RESEND_FROM_EMAIL") or None,
        session_cookie_name=os.getenv("SESSION_COOKIE_NAME", "session"),
        session_max_age_seconds=int(os.getenv("SESSION_MAX_AGE", str(SEVEN_DAYS))),
    )
