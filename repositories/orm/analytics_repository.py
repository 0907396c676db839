"""
ORM analytics repository - aggregate queries built with the SQLAlchemy query API
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import sessionmaker

from domain.models import Client, Courier, Meal, Order, session_scope
from domain.schemas import (
    ClientAnalytics,
    ClientOrderCount,
    ClientRecord,
    CourierAnalytics,
    CourierOrderCount,
    CourierRecord,
)
from repositories.base import AnalyticsRepository, store_errors

logger = logging.getLogger("fooddelivery.repositories.orm")


class OrmAnalyticsRepository(AnalyticsRepository):
    """Repository for read-only aggregates over clients, couriers, orders and meals"""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def client_with_most_orders(self) -> Optional[ClientOrderCount]:
        """Get the client with the most orders (ties: lowest email)"""
        order_count = func.count(func.distinct(Order.order_id)).label("order_count")

        with store_errors(logger, "fetching a client with most orders from the database"):
            with session_scope(self.session_factory) as db:
                row = (
                    db.query(Client, order_count)
                    .join(Order, Order.client_email == Client.email)
                    .group_by(Client.email, Client.name, Client.phone)
                    .order_by(order_count.desc(), Client.email.asc())
                    .first()
                )
                if row is None:
                    return None
                return ClientOrderCount(
                    client=ClientRecord.model_validate(row[0]),
                    order_count=row.order_count,
                )

    def couriers_with_most_orders(self, limit: int) -> List[CourierOrderCount]:
        """Get couriers ranked by order count, couriers without orders included"""
        order_count = func.count(Order.order_id).label("order_count")

        with store_errors(logger, "fetching couriers with most orders from the database", limit=limit):
            with session_scope(self.session_factory) as db:
                rows = (
                    db.query(Courier, order_count)
                    .outerjoin(Order, Order.courier_phone == Courier.phone)
                    .group_by(Courier.phone, Courier.name, Courier.transport)
                    .order_by(order_count.desc(), Courier.phone.asc())
                    .limit(limit)
                    .all()
                )
                return [
                    CourierOrderCount(
                        courier=CourierRecord.model_validate(r[0]),
                        order_count=r.order_count,
                    )
                    for r in rows
                ]

    def client_analytics(
        self, start_order_date: datetime, max_meal_price: int, email_pattern: str
    ) -> Optional[ClientAnalytics]:
        """Get the client with the highest spend on qualifying meals"""
        order_count = func.count(func.distinct(Order.order_id)).label("order_count")
        total_spent = func.sum(Meal.price).label("total_spent")

        with store_errors(logger, "fetching client analytics from the database"):
            with session_scope(self.session_factory) as db:
                row = (
                    db.query(Client.name, order_count, total_spent)
                    .join(Order, Order.client_email == Client.email)
                    .join(Meal, Meal.order_id == Order.order_id)
                    .filter(
                        Order.order_date >= start_order_date,
                        Meal.price <= max_meal_price,
                        Client.email.like(email_pattern),
                    )
                    .group_by(Client.email, Client.name)
                    .order_by(total_spent.desc(), Client.email.asc())
                    .first()
                )

        if row is None:
            return None
        return ClientAnalytics(
            name=row.name,
            order_count=row.order_count,
            total_spent=int(row.total_spent),
        )

    def courier_analytics(
        self, start_delivery_date: datetime, min_rating: int
    ) -> List[CourierAnalytics]:
        """Get rating and delivery summary per courier"""
        average_rating = func.avg(Order.rating).label("average_rating")

        with store_errors(logger, "fetching courier analytics from the database"):
            with session_scope(self.session_factory) as db:
                rows = (
                    db.query(
                        Courier.name,
                        Courier.phone,
                        average_rating,
                        func.max(Order.delivery_date).label("last_delivery_date"),
                        func.min(Order.order_date).label("first_order_date"),
                    )
                    .join(Order, Order.courier_phone == Courier.phone)
                    .filter(
                        Order.delivery_date >= start_delivery_date,
                        Order.rating >= min_rating,
                    )
                    .group_by(Courier.phone, Courier.name)
                    .order_by(average_rating.desc(), Courier.phone.asc())
                    .all()
                )

        return [
            CourierAnalytics(
                name=r.name,
                phone=r.phone,
                average_rating=float(r.average_rating),
                last_delivery_date=r.last_delivery_date,
                first_order_date=r.first_order_date,
            )
            for r in rows
        ]
