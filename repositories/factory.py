"""
Repository factory - builds the repository set for the configured persistence backend.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.engine import Engine

from app.exceptions import ConfigurationError
from domain.enums import PersistenceBackend
from domain.models import make_session_factory
from repositories.base import AnalyticsRepository, BaseRepository
from repositories.orm import (
    ClientRepository,
    CourierRepository,
    MealRepository,
    OrderRepository,
    OrmAnalyticsRepository,
)
from repositories.sql import (
    ClientSqlRepository,
    CourierSqlRepository,
    MealSqlRepository,
    OrderSqlRepository,
    SqlAnalyticsRepository,
)

logger = logging.getLogger("fooddelivery.repositories")


@dataclass(frozen=True)
class RepositorySet:
    """One repository per record kind plus the analytics queries"""

    clients: BaseRepository
    couriers: BaseRepository
    meals: BaseRepository
    orders: BaseRepository
    analytics: AnalyticsRepository


def create_repositories(engine: Engine, backend: PersistenceBackend) -> RepositorySet:
    """
    Create repositories for the given backend.

    Args:
        engine: SQLAlchemy engine bound to the delivery database
        backend: 'orm' for mapped models, 'sql' for hand-written statements

    Returns:
        RepositorySet sharing the engine

    Raises:
        ConfigurationError: If the backend is unknown
    """
    try:
        backend = PersistenceBackend(backend)
    except ValueError as e:
        raise ConfigurationError(
            f"Unknown persistence backend: {backend}",
            details={"allowed": [b.value for b in PersistenceBackend]},
        ) from e

    logger.info(f"Using '{backend.value}' persistence backend")

    if backend == PersistenceBackend.ORM:
        session_factory = make_session_factory(engine)
        return RepositorySet(
            clients=ClientRepository(session_factory),
            couriers=CourierRepository(session_factory),
            meals=MealRepository(session_factory),
            orders=OrderRepository(session_factory),
            analytics=OrmAnalyticsRepository(session_factory),
        )

    return RepositorySet(
        clients=ClientSqlRepository(engine),
        couriers=CourierSqlRepository(engine),
        meals=MealSqlRepository(engine),
        orders=OrderSqlRepository(engine),
        analytics=SqlAnalyticsRepository(engine),
    )
