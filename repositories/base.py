"""
Base repository interfaces for the data access layer.
This follows the Repository pattern to separate business logic from data access.

Repositories do store access only: no validation, no business rules. Any
unexpected store failure surfaces as StoreFailureError.
"""

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime
from typing import Generic, Iterator, List, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from app.exceptions import StoreFailureError
from domain.schemas import (
    ClientOrderCount,
    CourierOrderCount,
    ClientAnalytics,
    CourierAnalytics,
)

RecordType = TypeVar("RecordType")
KeyType = TypeVar("KeyType")


class BaseRepository(Generic[RecordType, KeyType], ABC):
    """
    Base repository providing the CRUD contract shared by both backends.
    All record repositories should inherit from this class.
    """

    #: Table name used in log and error messages
    table: str = ""

    @abstractmethod
    def find(self, key: KeyType) -> Optional[RecordType]:
        """Get record by key, or None"""

    @abstractmethod
    def list_all(self) -> List[RecordType]:
        """Get all records, ordered by key"""

    @abstractmethod
    def insert(self, record: RecordType) -> bool:
        """Insert a new record; returns False when the store reports no inserted row"""

    @abstractmethod
    def update(self, record: RecordType) -> bool:
        """Overwrite the non-key fields; returns False if the key is absent"""

    @abstractmethod
    def delete(self, key: KeyType) -> bool:
        """Delete record by key; returns False if the key is absent"""

    def exists(self, key: KeyType) -> bool:
        """Check if record exists"""
        return self.find(key) is not None


class AnalyticsRepository(ABC):
    """Read-only aggregate queries over the joined tables"""

    @abstractmethod
    def client_with_most_orders(self) -> Optional[ClientOrderCount]:
        """Client with the highest distinct order count; ties go to the lowest email"""

    @abstractmethod
    def couriers_with_most_orders(self, limit: int) -> List[CourierOrderCount]:
        """Couriers (including those without orders) by order count desc, then phone"""

    @abstractmethod
    def client_analytics(
        self, start_order_date: datetime, max_meal_price: int, email_pattern: str
    ) -> Optional[ClientAnalytics]:
        """Top client by summed price of qualifying meals"""

    @abstractmethod
    def courier_analytics(
        self, start_delivery_date: datetime, min_rating: int
    ) -> List[CourierAnalytics]:
        """Per-courier rating summary by average rating desc, then phone"""


@contextmanager
def store_errors(logger: logging.Logger, action: str, **details) -> Iterator[None]:
    """Translate SQLAlchemy failures into StoreFailureError"""
    try:
        yield
    except SQLAlchemyError as e:
        logger.error(f"store_failure action='{action}' details={details}: {e}")
        raise StoreFailureError(
            f"An unexpected error occurred while {action}.",
            details=details or None,
            code="store_failure",
        ) from e
