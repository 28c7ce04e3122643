"""Database connection settings.

``DATABASE_URL`` wins when set.  Otherwise the URL is assembled from
``PG_HOST`` / ``PG_PORT`` / ``PG_USER`` / ``PG_PASSWORD`` / ``PG_DATABASE``
(docker-compose style), with credentials escaped by SQLAlchemy.

Alembic runs synchronously over psycopg2 (``get_sync_url``); the server uses
asyncpg (``get_async_url``).
"""

import os

from sqlalchemy.engine import URL, make_url

SYNC_DRIVER = "postgresql"
ASYNC_DRIVER = "postgresql+asyncpg"


def _configured_url() -> URL:
    raw = os.getenv("DATABASE_URL")
    if raw:
        return make_url(raw)
    return URL.create(
        drivername=SYNC_DRIVER,
        username=os.getenv("PG_USER", "survey"),
        password=os.getenv("PG_PASSWORD", "survey"),
        host=os.getenv("PG_HOST", "localhost"),
        port=int(os.getenv("PG_PORT", "5432")),
        database=os.getenv("PG_DATABASE", "survey"),
    )


def get_sync_url() -> str:
    """Connection URL for Alembic (plain libpq driver)."""
    url = _configured_url().set(drivername=SYNC_DRIVER)
    return url.render_as_string(hide_password=False)


def get_async_url() -> str:
    """Connection URL for the runtime async engine."""
    url = _configured_url().set(drivername=ASYNC_DRIVER)
    return url.render_as_string(hide_password=False)
