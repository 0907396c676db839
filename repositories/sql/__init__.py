"""
SQL repositories - hand-written parameterized SQL implementation of the repository contract.
"""

from repositories.sql.record_repositories import (
    SqlRepository,
    ClientSqlRepository,
    CourierSqlRepository,
    MealSqlRepository,
    OrderSqlRepository,
)
from repositories.sql.analytics_repository import SqlAnalyticsRepository

__all__ = [
    "SqlRepository",
    "ClientSqlRepository",
    "CourierSqlRepository",
    "MealSqlRepository",
    "OrderSqlRepository",
    "SqlAnalyticsRepository",
]
