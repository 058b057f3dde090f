"""Startup helpers: schema creation and optional Alembic migrations."""

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

from .config import APPLY_DB_MIGRATIONS_ON_STARTUP
from .db import ensure_schema, get_current_db_url

logger = logging.getLogger(__name__)

__all__ = ["init_db", "run_db_migrations_if_configured"]


def init_db() -> None:
    """Create any missing tables. Safe to call multiple times."""
    ensure_schema()


def run_db_migrations_if_configured() -> None:
    """Upgrade the database to head when APPLY_DB_MIGRATIONS_ON_STARTUP is set."""
    if not APPLY_DB_MIGRATIONS_ON_STARTUP:
        logger.info("DB migrations skipped (APPLY_DB_MIGRATIONS_ON_STARTUP=false)")
        return

    alembic_ini_path = Path(__file__).parent.parent / "alembic.ini"
    if not alembic_ini_path.exists():
        raise FileNotFoundError(f"Alembic config not found at {alembic_ini_path}")

    alembic_cfg = Config(str(alembic_ini_path))
    alembic_cfg.set_main_option("sqlalchemy.url", get_current_db_url())

    logger.info("Applying DB migrations...")
    command.upgrade(alembic_cfg, "head")
    logger.info("DB migrations applied successfully.")
