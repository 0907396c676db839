"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository, AnalyticsRepository
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
from repositories.factory import RepositorySet, create_repositories

__all__ = [
    "BaseRepository",
    "AnalyticsRepository",
    "ClientRepository",
    "CourierRepository",
    "MealRepository",
    "OrderRepository",
    "OrmAnalyticsRepository",
    "ClientSqlRepository",
    "CourierSqlRepository",
    "MealSqlRepository",
    "OrderSqlRepository",
    "SqlAnalyticsRepository",
    "RepositorySet",
    "create_repositories",
]
