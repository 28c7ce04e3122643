"""Alembic environment for the survey schema.

Migrations run synchronously over ``get_sync_url()``; the URL placeholder in
``alembic.ini`` is ignored.
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

from survey_db.config import get_sync_url
from survey_db.models.base import Base

# Registers every table on Base.metadata
import survey_db.models.survey  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

_MIGRATION_OPTIONS = {
    "target_metadata": Base.metadata,
    # JSONB/TIMESTAMP changes should show up in autogenerate diffs
    "compare_type": True,
}


def run_offline() -> None:
    """Print the migration SQL instead of executing it."""
    context.configure(
        url=get_sync_url(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_MIGRATION_OPTIONS,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_online() -> None:
    engine = create_engine(get_sync_url(), poolclass=pool.NullPool)
    try:
        with engine.connect() as connection:
            context.configure(connection=connection, **_MIGRATION_OPTIONS)
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_offline()
else:
    run_online()
