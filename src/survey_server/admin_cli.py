"""Admin provisioning CLI — ``survey-admin``.

Creates admin accounts for the ``/admin`` API, or resets the password of an
existing one.  Intended for first deployment and password recovery.

Examples::

    # Prompt for the password
    uv run survey-admin create-user --email admin@example.com

    # Non-interactive (e.g. from a provisioning script)
    uv run survey-admin create-user --email admin@example.com --password "$PW"
"""

from __future__ import annotations

import argparse
import asyncio
import getpass
import logging
import sys

logger = logging.getLogger(__name__)


async def create_admin_user(*, email: str, password: str) -> str:
    """Upsert an admin account and return its id.

    Builds its own engine, commits, and disposes the pool on exit.
    """
    # Lazy imports to avoid loading DB machinery at module import time
    from survey_db.engine import build_engine, build_session_factory
    from survey_db.repository import AdminRepository
    from survey_engine.passwords import hash_password

    engine = build_engine()
    factory = build_session_factory(engine)
    repo = AdminRepository()

    try:
        async with factory() as db:
            user = await repo.upsert_user(
                db, email=email, password_hash=hash_password(password),
            )
            user_id = user.id
            await db.commit()
        logger.info("Admin account ready: %s (%s)", email, user_id)
        return user_id
    finally:
        await engine.dispose()


def cli() -> None:
    """Console-script entry point: ``survey-admin``."""
    parser = argparse.ArgumentParser(
        prog="survey-admin",
        description="Manage admin accounts for the survey API.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    create = sub.add_parser(
        "create-user",
        help="Create an admin, or reset the password of an existing one",
    )
    create.add_argument("--email", required=True, help="Admin e-mail address")
    create.add_argument(
        "--password",
        default=None,
        help="Password (prompted for when omitted)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: INFO)",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    password = args.password or getpass.getpass("Password: ")
    if not password:
        print("Password must not be empty", file=sys.stderr)
        sys.exit(1)

    user_id = asyncio.run(create_admin_user(email=args.email, password=password))
    print(f"Admin account ready: {args.email} ({user_id})")
    sys.exit(0)
