#!/usr/bin/env python3
"""Upgrade the database schema to the latest Alembic revision."""

import sys

import logfire
from alembic import command
from alembic.config import Config

from rally.config import Settings
from rally.util.observability import configure_logfire


def main() -> int:
    settings = Settings()
    configure_logfire(settings)

    alembic_cfg = Config("alembic.ini")
    alembic_cfg.set_main_option("sqlalchemy.url", settings.database.url)

    with logfire.span("run_migrations", environment=settings.environment):
        try:
            command.upgrade(alembic_cfg, "head")
        except Exception as e:
            logfire.error(
                "Database migration failed",
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            raise

    logfire.info("Database migrations completed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
