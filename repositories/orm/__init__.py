"""
ORM repositories - SQLAlchemy-mapped implementation of the repository contract.
"""

from repositories.orm.record_repositories import (
    OrmRepository,
    ClientRepository,
    CourierRepository,
    MealRepository,
    OrderRepository,
)
from repositories.orm.analytics_repository import OrmAnalyticsRepository

__all__ = [
    "OrmRepository",
    "ClientRepository",
    "CourierRepository",
    "MealRepository",
    "OrderRepository",
    "OrmAnalyticsRepository",
]
