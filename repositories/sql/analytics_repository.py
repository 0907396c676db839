"""
SQL analytics repository - aggregate queries as hand-written parameterized SQL
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import DateTime, Float, bindparam, text
from sqlalchemy.engine import Engine

from domain.models import connection_scope
from domain.schemas import (
    ClientAnalytics,
    ClientOrderCount,
    ClientRecord,
    CourierAnalytics,
    CourierOrderCount,
    CourierRecord,
)
from repositories.base import AnalyticsRepository, store_errors

logger = logging.getLogger("fooddelivery.repositories.sql")


CLIENT_WITH_MOST_ORDERS_SQL = text(
    """
    SELECT c.email, c.name, c.phone, COUNT(DISTINCT o.order_id) AS order_count
    FROM client c
    JOIN "order" o ON o.client_email = c.email
    GROUP BY c.email, c.name, c.phone
    ORDER BY order_count DESC, c.email ASC
    LIMIT 1
    """
)

COURIERS_WITH_MOST_ORDERS_SQL = text(
    """
    SELECT co.phone, co.name, co.transport, COUNT(o.order_id) AS order_count
    FROM courier co
    LEFT JOIN "order" o ON o.courier_phone = co.phone
    GROUP BY co.phone, co.name, co.transport
    ORDER BY order_count DESC, co.phone ASC
    LIMIT :limit
    """
)

CLIENT_ANALYTICS_SQL = text(
    """
    SELECT
        c.name AS name,
        COUNT(DISTINCT o.order_id) AS order_count,
        SUM(m.price) AS total_spent
    FROM client c
    JOIN "order" o ON o.client_email = c.email
    JOIN meal m ON m.order_id = o.order_id
    WHERE o.order_date >= :start_order_date
      AND m.price <= :max_meal_price
      AND c.email LIKE :email_pattern
    GROUP BY c.email, c.name
    ORDER BY total_spent DESC, c.email ASC
    LIMIT 1
    """
).bindparams(bindparam("start_order_date", type_=DateTime))

COURIER_ANALYTICS_SQL = (
    text(
        """
        SELECT
            co.name AS name,
            co.phone AS phone,
            AVG(o.rating) AS average_rating,
            MAX(o.delivery_date) AS last_delivery_date,
            MIN(o.order_date) AS first_order_date
        FROM courier co
        JOIN "order" o ON o.courier_phone = co.phone
        WHERE o.delivery_date >= :start_delivery_date
          AND o.rating >= :min_rating
        GROUP BY co.phone, co.name
        ORDER BY average_rating DESC, co.phone ASC
        """
    )
    .bindparams(bindparam("start_delivery_date", type_=DateTime))
    .columns(
        average_rating=Float,
        last_delivery_date=DateTime,
        first_order_date=DateTime,
    )
)


class SqlAnalyticsRepository(AnalyticsRepository):
    """Repository for read-only aggregates over clients, couriers, orders and meals"""

    def __init__(self, engine: Engine):
        self.engine = engine

    def client_with_most_orders(self) -> Optional[ClientOrderCount]:
        with store_errors(logger, "fetching a client with most orders from the database"):
            with connection_scope(self.engine) as conn:
                row = conn.execute(CLIENT_WITH_MOST_ORDERS_SQL).mappings().first()

        if row is None:
            return None
        return ClientOrderCount(
            client=ClientRecord(email=row["email"], name=row["name"], phone=row["phone"]),
            order_count=row["order_count"],
        )

    def couriers_with_most_orders(self, limit: int) -> List[CourierOrderCount]:
        with store_errors(logger, "fetching couriers with most orders from the database", limit=limit):
            with connection_scope(self.engine) as conn:
                rows = (
                    conn.execute(COURIERS_WITH_MOST_ORDERS_SQL, {"limit": limit})
                    .mappings()
                    .all()
                )

        return [
            CourierOrderCount(
                courier=CourierRecord(
                    phone=r["phone"], name=r["name"], transport=r["transport"]
                ),
                order_count=r["order_count"],
            )
            for r in rows
        ]

    def client_analytics(
        self, start_order_date: datetime, max_meal_price: int, email_pattern: str
    ) -> Optional[ClientAnalytics]:
        params = {
            "start_order_date": start_order_date,
            "max_meal_price": max_meal_price,
            "email_pattern": email_pattern,
        }
        with store_errors(logger, "fetching client analytics from the database"):
            with connection_scope(self.engine) as conn:
                row = conn.execute(CLIENT_ANALYTICS_SQL, params).mappings().first()

        if row is None:
            return None
        return ClientAnalytics(
            name=row["name"],
            order_count=row["order_count"],
            total_spent=int(row["total_spent"]),
        )

    def courier_analytics(
        self, start_delivery_date: datetime, min_rating: int
    ) -> List[CourierAnalytics]:
        params = {"start_delivery_date": start_delivery_date, "min_rating": min_rating}
        with store_errors(logger, "fetching courier analytics from the database"):
            with connection_scope(self.engine) as conn:
                rows = conn.execute(COURIER_ANALYTICS_SQL, params).mappings().all()

        return [
            CourierAnalytics(
                name=r["name"],
                phone=r["phone"],
                average_rating=float(r["average_rating"]),
                last_delivery_date=r["last_delivery_date"],
                first_order_date=r["first_order_date"],
            )
            for r in rows
        ]
