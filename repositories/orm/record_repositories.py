"""
ORM repositories - SQLAlchemy-mapped data access for clients, couriers, meals and orders
"""

import logging
from typing import List, Optional, Type

from pydantic import BaseModel
from sqlalchemy.orm import sessionmaker

from domain.models import Client, Courier, Meal, Order, session_scope
from domain.schemas import ClientRecord, CourierRecord, MealRecord, OrderRecord
from repositories.base import BaseRepository, RecordType, KeyType, store_errors

logger = logging.getLogger("fooddelivery.repositories.orm")


class OrmRepository(BaseRepository[RecordType, KeyType]):
    """
    CRUD over one mapped model. Every call runs in its own session scope,
    committed on success and always closed.
    """

    model: Type = None
    record_schema: Type[BaseModel] = None
    key_field: str = ""
    #: Fields overwritten by update(); the key is never among them
    mutable_fields: tuple = ()

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def _to_record(self, entity) -> RecordType:
        return self.record_schema.model_validate(entity)

    def _key_column(self):
        return getattr(self.model, self.key_field)

    def find(self, key: KeyType) -> Optional[RecordType]:
        with store_errors(logger, f"collecting {self.table} from the database", key=key):
            with session_scope(self.session_factory) as db:
                entity = db.get(self.model, key)
                if entity is None:
                    logger.debug(f"{self.table}_not_found key={key}")
                    return None
                return self._to_record(entity)

    def list_all(self) -> List[RecordType]:
        with store_errors(logger, f"collecting {self.table} records from the database"):
            with session_scope(self.session_factory) as db:
                entities = db.query(self.model).order_by(self._key_column()).all()
                logger.debug(f"{self.table}_listed count={len(entities)}")
                return [self._to_record(entity) for entity in entities]

    def insert(self, record: RecordType) -> bool:
        key = getattr(record, self.key_field)
        with store_errors(logger, f"adding {self.table} to the database", key=key):
            with session_scope(self.session_factory) as db:
                db.add(self.model(**record.model_dump()))
                db.flush()
        return True

    def update(self, record: RecordType) -> bool:
        key = getattr(record, self.key_field)
        with store_errors(logger, f"updating {self.table} in the database", key=key):
            with session_scope(self.session_factory) as db:
                entity = db.get(self.model, key)
                if entity is None:
                    return False
                for field in self.mutable_fields:
                    setattr(entity, field, getattr(record, field))
        return True

    def delete(self, key: KeyType) -> bool:
        with store_errors(logger, f"deleting {self.table} from the database", key=key):
            with session_scope(self.session_factory) as db:
                entity = db.get(self.model, key)
                if entity is None:
                    return False
                db.delete(entity)
        return True


class ClientRepository(OrmRepository[ClientRecord, str]):
    """Repository for client data access"""

    table = "client"
    model = Client
    record_schema = ClientRecord
    key_field = "email"
    mutable_fields = ("name", "phone")


class CourierRepository(OrmRepository[CourierRecord, str]):
    """Repository for courier data access"""

    table = "courier"
    model = Courier
    record_schema = CourierRecord
    key_field = "phone"
    mutable_fields = ("name", "transport")


class MealRepository(OrmRepository[MealRecord, int]):
    """Repository for meal data access"""

    table = "meal"
    model = Meal
    record_schema = MealRecord
    key_field = "meal_id"
    mutable_fields = ("name", "price", "weight", "serving_size")


class OrderRepository(OrmRepository[OrderRecord, int]):
    """Repository for order data access"""

    table = "order"
    model = Order
    record_schema = OrderRecord
    key_field = "order_id"
    mutable_fields = ("order_date", "delivery_date", "rating", "delivery_address")
