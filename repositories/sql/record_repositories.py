"""
SQL repositories - hand-written parameterized statements for clients, couriers, meals and orders
"""

import logging
from typing import List, Optional, Type

from pydantic import BaseModel
from sqlalchemy import DateTime, bindparam, text
from sqlalchemy.engine import Engine
from sqlalchemy.sql.elements import TextClause

from domain.models import connection_scope
from domain.schemas import ClientRecord, CourierRecord, MealRecord, OrderRecord
from repositories.base import BaseRepository, RecordType, KeyType, store_errors

logger = logging.getLogger("fooddelivery.repositories.sql")


class SqlRepository(BaseRepository[RecordType, KeyType]):
    """
    CRUD through raw SQL. Statements bind every value as a named parameter;
    each call runs in its own connection and transaction.
    """

    record_schema: Type[BaseModel] = None
    key_field: str = ""

    find_sql: TextClause = None
    list_sql: TextClause = None
    insert_sql: TextClause = None
    update_sql: TextClause = None
    delete_sql: TextClause = None

    def __init__(self, engine: Engine):
        self.engine = engine

    def _to_record(self, row) -> RecordType:
        return self.record_schema.model_validate(dict(row))

    def find(self, key: KeyType) -> Optional[RecordType]:
        with store_errors(logger, f"collecting {self.table} from the database", key=key):
            with connection_scope(self.engine) as conn:
                row = conn.execute(self.find_sql, {"key": key}).mappings().first()
        if row is None:
            logger.debug(f"{self.table}_not_found key={key}")
            return None
        return self._to_record(row)

    def list_all(self) -> List[RecordType]:
        with store_errors(logger, f"collecting {self.table} records from the database"):
            with connection_scope(self.engine) as conn:
                rows = conn.execute(self.list_sql).mappings().all()
        logger.debug(f"{self.table}_listed count={len(rows)}")
        return [self._to_record(row) for row in rows]

    def insert(self, record: RecordType) -> bool:
        key = getattr(record, self.key_field)
        with store_errors(logger, f"adding {self.table} to the database", key=key):
            with connection_scope(self.engine) as conn:
                result = conn.execute(self.insert_sql, record.model_dump())
        return result.rowcount == 1

    def update(self, record: RecordType) -> bool:
        key = getattr(record, self.key_field)
        with store_errors(logger, f"updating {self.table} in the database", key=key):
            with connection_scope(self.engine) as conn:
                result = conn.execute(self.update_sql, record.model_dump())
        return result.rowcount > 0

    def delete(self, key: KeyType) -> bool:
        with store_errors(logger, f"deleting {self.table} from the database", key=key):
            with connection_scope(self.engine) as conn:
                result = conn.execute(self.delete_sql, {"key": key})
        return result.rowcount > 0


class ClientSqlRepository(SqlRepository[ClientRecord, str]):
    """Repository for client data access"""

    table = "client"
    record_schema = ClientRecord
    key_field = "email"

    find_sql = text("SELECT email, name, phone FROM client WHERE email = :key")
    list_sql = text("SELECT email, name, phone FROM client ORDER BY email")
    insert_sql = text(
        "INSERT INTO client (email, name, phone) VALUES (:email, :name, :phone)"
    )
    update_sql = text("UPDATE client SET name = :name, phone = :phone WHERE email = :email")
    delete_sql = text("DELETE FROM client WHERE email = :key")


class CourierSqlRepository(SqlRepository[CourierRecord, str]):
    """Repository for courier data access"""

    table = "courier"
    record_schema = CourierRecord
    key_field = "phone"

    find_sql = text("SELECT phone, name, transport FROM courier WHERE phone = :key")
    list_sql = text("SELECT phone, name, transport FROM courier ORDER BY phone")
    insert_sql = text(
        "INSERT INTO courier (phone, name, transport) VALUES (:phone, :name, :transport)"
    )
    update_sql = text(
        "UPDATE courier SET name = :name, transport = :transport WHERE phone = :phone"
    )
    delete_sql = text("DELETE FROM courier WHERE phone = :key")


class MealSqlRepository(SqlRepository[MealRecord, int]):
    """Repository for meal data access"""

    table = "meal"
    record_schema = MealRecord
    key_field = "meal_id"

    find_sql = text(
        "SELECT meal_id, order_id, name, price, weight, serving_size "
        "FROM meal WHERE meal_id = :key"
    )
    list_sql = text(
        "SELECT meal_id, order_id, name, price, weight, serving_size "
        "FROM meal ORDER BY meal_id"
    )
    insert_sql = text(
        "INSERT INTO meal (meal_id, order_id, name, price, weight, serving_size) "
        "VALUES (:meal_id, :order_id, :name, :price, :weight, :serving_size)"
    )
    update_sql = text(
        "UPDATE meal SET name = :name, price = :price, weight = :weight, "
        "serving_size = :serving_size WHERE meal_id = :meal_id"
    )
    delete_sql = text("DELETE FROM meal WHERE meal_id = :key")


# Dates go through the DateTime type on the way in and out so both backends
# store and read timestamps identically
_ORDER_COLUMNS = (
    'SELECT order_id, order_date, delivery_date, rating, delivery_address, '
    'courier_phone, client_email FROM "order"'
)


def _order_date_params():
    return (
        bindparam("order_date", type_=DateTime),
        bindparam("delivery_date", type_=DateTime),
    )


class OrderSqlRepository(SqlRepository[OrderRecord, int]):
    """Repository for order data access"""

    table = "order"
    record_schema = OrderRecord
    key_field = "order_id"

    find_sql = text(f"{_ORDER_COLUMNS} WHERE order_id = :key").columns(
        order_date=DateTime, delivery_date=DateTime
    )
    list_sql = text(f"{_ORDER_COLUMNS} ORDER BY order_id").columns(
        order_date=DateTime, delivery_date=DateTime
    )
    insert_sql = text(
        'INSERT INTO "order" (order_id, order_date, delivery_date, rating, '
        "delivery_address, courier_phone, client_email) "
        "VALUES (:order_id, :order_date, :delivery_date, :rating, "
        ":delivery_address, :courier_phone, :client_email)"
    ).bindparams(*_order_date_params())
    update_sql = text(
        'UPDATE "order" SET order_date = :order_date, delivery_date = :delivery_date, '
        "rating = :rating, delivery_address = :delivery_address "
        "WHERE order_id = :order_id"
    ).bindparams(*_order_date_params())
    delete_sql = text('DELETE FROM "order" WHERE order_id = :key')
