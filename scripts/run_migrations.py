#!/usr/bin/env python3
"""Apply Alembic migrations to the configured database."""

import sys
from pathlib import Path

import logfire
from alembic import command
from alembic.config import Config

from passage.config import Settings
from passage.util.observability import configure_logfire

ROOT = Path(__file__).resolve().parent.parent


def build_alembic_config(settings: Settings) -> Config:
    """Point Alembic at the migrations directory and configured database."""
    alembic_cfg = Config(str(ROOT / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(ROOT / "migrations"))
    alembic_cfg.set_main_option("sqlalchemy.url", settings.database.url)
    return alembic_cfg


def main() -> int:
    """Upgrade the schema to head, logging failures to Logfire."""
    settings = Settings()
    configure_logfire(settings)

    try:
        with logfire.span("run_migrations", environment=settings.environment):
            command.upgrade(build_alembic_config(settings), "head")
        logfire.info("Database migrations completed successfully")
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # The service must not start against a broken schema
        raise


if __name__ == "__main__":
    sys.exit(main())
