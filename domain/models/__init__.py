"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    create_db_engine,
    make_session_factory,
    init_database,
    drop_database,
    session_scope,
    connection_scope,
)
from domain.models.delivery import Client, Courier, Order, Meal

__all__ = [
    # Database
    "Base",
    "create_db_engine",
    "make_session_factory",
    "init_database",
    "drop_database",
    "session_scope",
    "connection_scope",
    # Delivery models
    "Client",
    "Courier",
    "Order",
    "Meal",
]
