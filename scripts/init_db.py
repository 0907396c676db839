#!/usr/bin/env python3
"""
Standalone database initialization script
Creates the client, courier, order and meal tables in the configured database
"""

import argparse
import logging
import sys
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from app.config import settings
from domain.models import create_db_engine, drop_database, init_database

logging.basicConfig(level=logging.INFO, format=settings.log_format)
logger = logging.getLogger("fooddelivery.init_db")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Create the delivery tables")
    parser.add_argument("--database-url", default=settings.database_url)
    parser.add_argument(
        "--drop", action="store_true", help="drop existing tables first (destroys data)"
    )
    args = parser.parse_args(argv)

    engine = create_db_engine(args.database_url, echo=settings.db_echo)
    try:
        if args.drop:
            drop_database(engine)
        init_database(engine)
        tables = inspect(engine).get_table_names()
        logger.info(f"✓ {len(tables)} tables ready: {', '.join(sorted(tables))}")
        return 0
    except SQLAlchemyError as e:
        logger.error(f"✗ Failed to initialize the database: {e}")
        return 1
    finally:
        engine.dispose()


if __name__ == "__main__":
    sys.exit(main())
