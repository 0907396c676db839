"""
Domain schemas package - Pydantic models for record input, output and analytics.
"""

from domain.schemas.record_schemas import (
    ClientDTO,
    CourierDTO,
    MealDTO,
    OrderDTO,
    ClientRecord,
    CourierRecord,
    MealRecord,
    OrderRecord,
)
from domain.schemas.analytics_schemas import (
    ClientFilterParameters,
    CourierFilterParameters,
    ClientAnalytics,
    CourierAnalytics,
    ClientOrderCount,
    CourierOrderCount,
)

__all__ = [
    # Record schemas
    "ClientDTO",
    "CourierDTO",
    "MealDTO",
    "OrderDTO",
    "ClientRecord",
    "CourierRecord",
    "MealRecord",
    "OrderRecord",
    # Analytics schemas
    "ClientFilterParameters",
    "CourierFilterParameters",
    "ClientAnalytics",
    "CourierAnalytics",
    "ClientOrderCount",
    "CourierOrderCount",
]
