"""
Record service - validation, reference checks and CRUD for clients, couriers,
meals and orders.

Every mutation returns ``None`` on success or one typed error; lookups return
``Success``/``Failure``. Checks run in a fixed order per entity and stop at the
first failure, so the reported error is deterministic:

    client   name, email, phone, duplicate email
    courier  phone, name, transport, duplicate phone
    meal     name, order reference, duplicate meal id
    order    order date, delivery date, rating, address, duplicate order id,
             courier reference, client reference

Updates validate the same fields, then require the key to exist and
overwrite only the non-key fields. Store failures are not errors in this
sense: they propagate as ``StoreFailureError``.
"""

import logging
from typing import List, Optional, Union

from domain.errors import (
    DuplicateKeyError,
    Error,
    ForeignKeyConstraintError,
    InsertError,
    RecordNotFound,
    ValidationError,
)
from domain.result import Failure, Result, Success
from domain.schemas import (
    ClientDTO,
    ClientRecord,
    CourierDTO,
    CourierRecord,
    MealDTO,
    MealRecord,
    OrderDTO,
    OrderRecord,
)
from domain.validators import (
    ValidationRule,
    address_validator,
    email_validator,
    first_violation,
    is_valid_rating,
    meal_name_validator,
    name_validator,
    parse_timestamp,
    phone_validator,
    transport_validator,
)
from repositories.base import BaseRepository
from repositories.factory import RepositorySet

logger = logging.getLogger("fooddelivery.records")


def _exists(repository: BaseRepository, key) -> bool:
    return key is not None and repository.find(key) is not None


class RecordService:
    def __init__(self, repositories: RepositorySet):
        self.repositories = repositories

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    @staticmethod
    def validate_client(dto: ClientDTO) -> Optional[ValidationError]:
        return first_violation(
            [
                ValidationRule("Name", dto.name, name_validator),
                ValidationRule("Email", dto.email, email_validator),
                ValidationRule("Phone", dto.phone, phone_validator),
            ]
        )

    @staticmethod
    def validate_courier(dto: CourierDTO) -> Optional[ValidationError]:
        return first_violation(
            [
                ValidationRule("Phone", dto.phone, phone_validator),
                ValidationRule("Name", dto.name, name_validator),
                ValidationRule("Transport", dto.transport, transport_validator),
            ]
        )

    @staticmethod
    def validate_meal(dto: MealDTO) -> Optional[ValidationError]:
        return first_violation([ValidationRule("Name", dto.name, meal_name_validator)])

    @staticmethod
    def parse_order(dto: OrderDTO) -> Union[OrderRecord, ValidationError]:
        """
        Validate order fields and build the record to store.

        Dates must be 'YYYY-MM-DD HH:MM' or 'YYYY-MM-DD HH:MM:SS', the rating
        must be 1..5 and the address must look like 'Main Street 42'.
        Reference fields are not checked here.

        Returns:
            The parsed OrderRecord, or the first ValidationError found
        """
        order_date = parse_timestamp(dto.order_date)
        delivery_date = parse_timestamp(dto.delivery_date)
        if order_date is None or delivery_date is None:
            return ValidationError("Wrong date format.")
        if not is_valid_rating(dto.rating):
            return ValidationError("Wrong rating.")
        violation = first_violation(
            [ValidationRule("Delivery address", dto.delivery_address, address_validator)]
        )
        if violation is not None:
            return violation

        return OrderRecord(
            order_id=dto.order_id,
            order_date=order_date,
            delivery_date=delivery_date,
            rating=dto.rating,
            delivery_address=dto.delivery_address,
            courier_phone=dto.courier_phone or "",
            client_email=dto.client_email or "",
        )

    # ------------------------------------------------------------------
    # Shared CRUD steps
    # ------------------------------------------------------------------

    @staticmethod
    def _insert(repository: BaseRepository, record, key) -> Optional[Error]:
        if not repository.insert(record):
            logger.warning(f"{repository.table}_insert_failed key={key}")
            return InsertError(repository.table)
        logger.info(f"{repository.table}_added key={key}")
        return None

    @staticmethod
    def _get(repository: BaseRepository, key) -> Result:
        record = repository.find(key)
        if record is None:
            logger.debug(f"{repository.table}_lookup_missed key={key}")
            return Failure(RecordNotFound(str(key)))
        return Success(record)

    @staticmethod
    def _update(repository: BaseRepository, key, **changes) -> Optional[Error]:
        existing = repository.find(key)
        if existing is None:
            logger.warning(f"{repository.table}_update_missing key={key}")
            return RecordNotFound(str(key))
        if not repository.update(existing.model_copy(update=changes)):
            logger.warning(f"{repository.table}_update_missing key={key}")
            return RecordNotFound(str(key))
        logger.info(f"{repository.table}_updated key={key} fields={sorted(changes)}")
        return None

    @staticmethod
    def _delete(repository: BaseRepository, key) -> Optional[Error]:
        if not repository.delete(key):
            logger.warning(f"{repository.table}_delete_missing key={key}")
            return RecordNotFound(str(key))
        logger.info(f"{repository.table}_deleted key={key}")
        return None

    @staticmethod
    def _rejected(table: str, action: str, error: Error) -> Error:
        logger.warning(f"{table}_{action}_rejected reason={type(error).__name__} message={error.message!r}")
        return error

    # ------------------------------------------------------------------
    # Clients
    # ------------------------------------------------------------------

    def add_client(self, dto: ClientDTO) -> Optional[Error]:
        repo = self.repositories.clients
        error = self.validate_client(dto)
        if error is not None:
            return self._rejected(repo.table, "add", error)
        if repo.exists(dto.email):
            return self._rejected(repo.table, "add", DuplicateKeyError(dto.email))

        record = ClientRecord(email=dto.email, name=dto.name, phone=dto.phone)
        return self._insert(repo, record, dto.email)

    def get_all_clients(self) -> List[ClientRecord]:
        return self.repositories.clients.list_all()

    def get_client(self, email: str) -> Result[ClientRecord]:
        return self._get(self.repositories.clients, email)

    def update_client(self, dto: ClientDTO) -> Optional[Error]:
        repo = self.repositories.clients
        error = self.validate_client(dto)
        if error is not None:
            return self._rejected(repo.table, "update", error)
        return self._update(repo, dto.email, name=dto.name, phone=dto.phone)

    def delete_client(self, email: str) -> Optional[Error]:
        return self._delete(self.repositories.clients, email)

    # ------------------------------------------------------------------
    # Couriers
    # ------------------------------------------------------------------

    def add_courier(self, dto: CourierDTO) -> Optional[Error]:
        repo = self.repositories.couriers
        error = self.validate_courier(dto)
        if error is not None:
            return self._rejected(repo.table, "add", error)
        if repo.exists(dto.phone):
            return self._rejected(repo.table, "add", DuplicateKeyError(dto.phone))

        record = CourierRecord(phone=dto.phone, name=dto.name, transport=dto.transport)
        return self._insert(repo, record, dto.phone)

    def get_all_couriers(self) -> List[CourierRecord]:
        return self.repositories.couriers.list_all()

    def get_courier(self, phone: str) -> Result[CourierRecord]:
        return self._get(self.repositories.couriers, phone)

    def update_courier(self, dto: CourierDTO) -> Optional[Error]:
        repo = self.repositories.couriers
        error = self.validate_courier(dto)
        if error is not None:
            return self._rejected(repo.table, "update", error)
        return self._update(repo, dto.phone, name=dto.name, transport=dto.transport)

    def delete_courier(self, phone: str) -> Optional[Error]:
        return self._delete(self.repositories.couriers, phone)

    # ------------------------------------------------------------------
    # Meals
    # ------------------------------------------------------------------

    def add_meal(self, dto: MealDTO) -> Optional[Error]:
        repo = self.repositories.meals
        error = self.validate_meal(dto)
        if error is not None:
            return self._rejected(repo.table, "add", error)
        if not _exists(self.repositories.orders, dto.order_id):
            return self._rejected(
                repo.table, "add", ForeignKeyConstraintError("Order ID", str(dto.order_id))
            )
        if repo.exists(dto.meal_id):
            return self._rejected(repo.table, "add", DuplicateKeyError(str(dto.meal_id)))

        record = MealRecord(
            meal_id=dto.meal_id,
            order_id=dto.order_id,
            name=dto.name,
            price=dto.price,
            weight=dto.weight,
            serving_size=dto.serving_size,
        )
        return self._insert(repo, record, dto.meal_id)

    def get_all_meals(self) -> List[MealRecord]:
        return self.repositories.meals.list_all()

    def get_meal(self, meal_id: int) -> Result[MealRecord]:
        return self._get(self.repositories.meals, meal_id)

    def update_meal(self, dto: MealDTO) -> Optional[Error]:
        """Overwrite name, price, weight and serving size; the owning order is kept"""
        repo = self.repositories.meals
        error = self.validate_meal(dto)
        if error is not None:
            return self._rejected(repo.table, "update", error)
        return self._update(
            repo,
            dto.meal_id,
            name=dto.name,
            price=dto.price,
            weight=dto.weight,
            serving_size=dto.serving_size,
        )

    def delete_meal(self, meal_id: int) -> Optional[Error]:
        return self._delete(self.repositories.meals, meal_id)

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------

    def add_order(self, dto: OrderDTO) -> Optional[Error]:
        repo = self.repositories.orders
        parsed = self.parse_order(dto)
        if isinstance(parsed, ValidationError):
            return self._rejected(repo.table, "add", parsed)
        if repo.exists(dto.order_id):
            return self._rejected(repo.table, "add", DuplicateKeyError(str(dto.order_id)))
        if not _exists(self.repositories.couriers, dto.courier_phone):
            return self._rejected(
                repo.table, "add", ForeignKeyConstraintError("Courier Phone", str(dto.courier_phone))
            )
        if not _exists(self.repositories.clients, dto.client_email):
            return self._rejected(
                repo.table, "add", ForeignKeyConstraintError("Client Email", str(dto.client_email))
            )

        return self._insert(repo, parsed, dto.order_id)

    def get_all_orders(self) -> List[OrderRecord]:
        return self.repositories.orders.list_all()

    def get_order(self, order_id: int) -> Result[OrderRecord]:
        return self._get(self.repositories.orders, order_id)

    def update_order(self, dto: OrderDTO) -> Optional[Error]:
        """Overwrite dates, rating and address; courier and client references are kept"""
        repo = self.repositories.orders
        parsed = self.parse_order(dto)
        if isinstance(parsed, ValidationError):
            return self._rejected(repo.table, "update", parsed)
        return self._update(
            repo,
            dto.order_id,
            order_date=parsed.order_date,
            delivery_date=parsed.delivery_date,
            rating=parsed.rating,
            delivery_address=parsed.delivery_address,
        )

    def delete_order(self, order_id: int) -> Optional[Error]:
        return self._delete(self.repositories.orders, order_id)
