"""
FoodDelivery console application
Entry point: configuration, logging, database wiring and the interactive session loop
"""

import argparse
import logging
import sys
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from app.config import settings
from app.exceptions import ConfigurationError, StoreFailureError
from console import Controller, View
from domain.enums import PersistenceBackend
from domain.models import create_db_engine, init_database
from repositories import create_repositories
from services import AnalyticsService, GeneratorService, RecordService

_logger = logging.getLogger("fooddelivery.main")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="fooddelivery",
        description="Manage clients, couriers, meals and orders of a delivery service.",
    )
    parser.add_argument(
        "--backend",
        choices=[b.value for b in PersistenceBackend],
        default=None,
        help=f"persistence backend (default: {settings.persistence_backend.value})",
    )
    parser.add_argument(
        "--database-url",
        default=None,
        help="SQLAlchemy database URL (default: DATABASE_URL setting)",
    )
    parser.add_argument(
        "--init-db",
        action="store_true",
        help="create missing tables before starting",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help=f"logging level (default: {settings.log_level})",
    )
    return parser.parse_args(argv)


def build_controller(engine, backend: PersistenceBackend, view: Optional[View] = None) -> Controller:
    """Wire repositories, services and the view around one engine"""
    repositories = create_repositories(engine, backend)
    records = RecordService(repositories)
    return Controller(
        records=records,
        analytics=AnalyticsService(repositories.analytics),
        generator=GeneratorService(records),
        view=view,
        top_couriers_default=settings.top_couriers_default,
    )


def main(argv: Optional[List[str]] = None, view: Optional[View] = None) -> int:
    args = parse_args(argv)

    log_level = (args.log_level or settings.log_level).upper()
    logging.basicConfig(level=getattr(logging, log_level, logging.INFO), format=settings.log_format)

    backend = PersistenceBackend(args.backend) if args.backend else settings.persistence_backend
    database_url = args.database_url or settings.database_url

    _logger.info(
        f"Starting {settings.app_name} v{settings.app_version} "
        f"in {settings.environment.value} mode"
    )

    engine = create_db_engine(database_url, echo=settings.db_echo)
    try:
        if args.init_db:
            init_database(engine)
        controller = build_controller(engine, backend, view)
        controller.run()
    except StoreFailureError as e:
        _logger.exception(f"Session terminated: {e}")
        return 1
    except SQLAlchemyError as e:
        _logger.exception(f"Database unavailable: {e}")
        return 1
    except ConfigurationError as e:
        _logger.error(f"Configuration error: {e}")
        return 2
    finally:
        engine.dispose()

    _logger.info("Session finished")
    return 0


if __name__ == "__main__":
    sys.exit(main())
