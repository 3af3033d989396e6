#!/usr/bin/env python3
"""
Seed data script for the workshop backend.
This script applies every migration and then makes sure the fixed role
catalog and the default service type exist.
"""

import logging
import subprocess
import sys
from pathlib import Path

from sqlmodel import Session

from workshop.core.db import engine, init_db

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def run_migrations():
    """Run alembic upgrade head."""
    try:
        logger.info("Running migrations...")

        result = subprocess.run(
            ["alembic", "upgrade", "head"],
            cwd=Path(__file__).parent.parent,
            capture_output=True,
            text=True,
            check=True
        )

        logger.info("Migration completed successfully")
        logger.info(f"Migration output: {result.stdout}")

        return True

    except subprocess.CalledProcessError as e:
        logger.error(f"Migration failed: {e}")
        logger.error(f"Error output: {e.stderr}")
        return False


def seed_catalog():
    """Insert any missing roles and the default service type."""
    with Session(engine) as session:
        init_db(session)
    logger.info("Role catalog seeded")


def main():
    """Main function."""
    logger.info("Starting seed data script...")

    if not run_migrations():
        logger.error("Seed data script failed")
        sys.exit(1)

    seed_catalog()
    logger.info("Seed data script completed successfully")
    sys.exit(0)


if __name__ == "__main__":
    main()
