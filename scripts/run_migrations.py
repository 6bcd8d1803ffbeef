#!/usr/bin/env python3
"""Apply alembic migrations before the API starts.

Usage: run_migrations.py [REVISION]   (defaults to ``head``)
"""

import sys

import logfire
from alembic import command
from alembic.config import Config

from cleartrack.config import Settings
from cleartrack.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    settings = Settings()
    configure_logfire(settings)
    revision = argv[1] if len(argv) > 1 else "head"

    with logfire.span(
        "run_migrations", revision=revision, environment=settings.environment
    ):
        try:
            command.upgrade(Config("alembic.ini"), revision)
        except Exception:
            # A deploy must not start on a half-migrated schema
            logfire.exception("Database migration failed", revision=revision)
            raise
    logfire.info("Database migrated", revision=revision)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
