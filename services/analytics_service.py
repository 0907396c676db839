"""
Analytics service - filter validation and timed aggregate queries.

Every query is bracketed by its own QueryTimer, so the elapsed time travels
with the result. When a filter is rejected no query runs and the elapsed
time is 0.0.
"""

import logging
from typing import List, Optional

from domain.errors import RecordNotFound, ValidationError
from domain.result import Failure, Result, Success, Timed
from domain.schemas import (
    ClientAnalytics,
    ClientFilterParameters,
    ClientOrderCount,
    CourierAnalytics,
    CourierFilterParameters,
    CourierOrderCount,
)
from domain.validators import is_valid_rating, parse_start_date, parse_timestamp
from repositories.base import AnalyticsRepository
from services.query_timer import measure

logger = logging.getLogger("fooddelivery.analytics")


def _rejected(query: str, error: ValidationError) -> Timed[Result]:
    logger.warning(f"{query}_rejected message={error.message!r}")
    return Timed(value=Failure(error), elapsed_ms=0.0)


class AnalyticsService:
    def __init__(self, analytics: AnalyticsRepository):
        self.analytics = analytics

    def client_with_most_orders(self) -> Timed[Optional[ClientOrderCount]]:
        """Client with the most distinct orders, or None when there are no orders"""
        timed = measure(self.analytics.client_with_most_orders)
        logger.debug(
            f"client_with_most_orders found={timed.value is not None} "
            f"elapsed_ms={timed.elapsed_ms:.2f}"
        )
        return timed

    def couriers_with_most_orders(self, n: int) -> Timed[Result[List[CourierOrderCount]]]:
        """
        Top ``n`` couriers by order count.

        Couriers without any orders are ranked too, with a count of 0. Ties
        are ordered by phone so the result is stable.

        Args:
            n: Number of couriers to return, at least 1

        Returns:
            Timed Success with up to ``n`` entries, or Failure(ValidationError)
        """
        if n is None or n < 1:
            return _rejected("couriers_with_most_orders", ValidationError("Wrong number of records."))

        timed = measure(self.analytics.couriers_with_most_orders, n)
        logger.debug(
            f"couriers_with_most_orders n={n} count={len(timed.value)} "
            f"elapsed_ms={timed.elapsed_ms:.2f}"
        )
        return Timed(value=Success(timed.value), elapsed_ms=timed.elapsed_ms)

    def client_analytics(self, params: ClientFilterParameters) -> Timed[Result[ClientAnalytics]]:
        """
        Top client by the summed price of meals priced at or below
        ``max_meal_price``, in orders placed on or after ``start_order_date``,
        for clients whose email matches the LIKE pattern ``email``.

        Returns:
            Timed Success(ClientAnalytics), Failure(ValidationError) for a bad
            date, or Failure(RecordNotFound) when nothing qualifies
        """
        start = parse_timestamp(params.start_order_date)
        if start is None:
            return _rejected("client_analytics", ValidationError("Wrong date format."))

        timed = measure(
            self.analytics.client_analytics, start, params.max_meal_price, params.email
        )
        logger.debug(
            f"client_analytics start={start} max_meal_price={params.max_meal_price} "
            f"email={params.email!r} elapsed_ms={timed.elapsed_ms:.2f}"
        )
        if timed.value is None:
            return Timed(value=Failure(RecordNotFound("")), elapsed_ms=timed.elapsed_ms)
        return Timed(value=Success(timed.value), elapsed_ms=timed.elapsed_ms)

    def courier_analytics(
        self, params: CourierFilterParameters
    ) -> Timed[Result[List[CourierAnalytics]]]:
        """Rating summary per courier for deliveries since the start date, rating >= min_rating"""
        start = parse_start_date(params.start_delivery_date)
        if start is None:
            return _rejected("courier_analytics", ValidationError("Wrong date format."))
        if not is_valid_rating(params.min_rating):
            return _rejected("courier_analytics", ValidationError("Wrong rating."))

        timed = measure(self.analytics.courier_analytics, start, params.min_rating)
        logger.debug(
            f"courier_analytics start={start} min_rating={params.min_rating} "
            f"count={len(timed.value)} elapsed_ms={timed.elapsed_ms:.2f}"
        )
        return Timed(value=Success(timed.value), elapsed_ms=timed.elapsed_ms)
