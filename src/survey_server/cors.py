"""Origin allowlist matching for CORS.

The allowlist is one comma-separated string.  Each entry is either a literal
origin or a pattern where ``*`` stands for any run of characters other than
``.``, e.g. ``https://survey-*.vercel.app`` matches preview deployments but
not ``https://survey-a.b.vercel.app``.
"""

from __future__ import annotations

import re

from starlette.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp


def _pattern_to_regex(pattern: str) -> re.Pattern[str]:
    escaped = re.escape(pattern).replace(r"\*", "[^.]*")
    return re.compile(f"^{escaped}$")


def is_allowed_origin(origin: str, allowed_origins: str) -> bool:
    """True if ``origin`` matches an entry of the ``allowed_origins`` list."""
    if not allowed_origins:
        return False
    for entry in allowed_origins.split(","):
        pattern = entry.strip()
        if not pattern:
            continue
        if "*" not in pattern:
            if origin == pattern:
                return True
        elif _pattern_to_regex(pattern).match(origin):
            return True
    return False


class AllowlistCORSMiddleware(CORSMiddleware):
    """Starlette CORS middleware driven by ``is_allowed_origin``.

    Credentials are allowed, so the matched origin is echoed back instead of
    ``*``.
    """

    def __init__(self, app: ASGIApp, allowed_origins: str = "") -> None:
        super().__init__(
            app,
            allow_origins=(),
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
            allow_headers=["Content-Type", "X-API-Key"],
            max_age=86_400,
        )
        self.allowed_origins = allowed_origins

    def is_allowed_origin(self, origin: str) -> bool:
        return is_allowed_origin(origin, self.allowed_origins)
