"""
Tests for the repository layer, run against both persistence backends.

This test suite validates the data access layer with direct repository testing:
- Client/Courier/Meal/Order repositories: find, list_all, insert, update, delete
- Timestamps survive a write/read round trip unchanged
- Foreign keys are enforced by the store and surface as StoreFailureError
- The factory rejects unknown backends

Every test uses a fresh in-memory SQLite database (via test_fixtures).
"""

from datetime import datetime

import pytest

from app.exceptions import ConfigurationError, StoreFailureError
from domain.schemas import ClientRecord, CourierRecord, MealRecord, OrderRecord
from repositories import create_repositories
from test_fixtures import backend, engine, repositories  # noqa: F401


def _client(email="john.smith@example.com", name="John Smith", phone="1234567890"):
    return ClientRecord(email=email, name=name, phone=phone)


def _courier(phone="0987654321", name="Alice Johnson", transport="Bicycle"):
    return CourierRecord(phone=phone, name=name, transport=transport)


def _order(order_id=1, **overrides):
    fields = dict(
        order_id=order_id,
        order_date=datetime(2024, 2, 1, 12, 0),
        delivery_date=datetime(2024, 2, 1, 12, 45, 30),
        rating=4,
        delivery_address="Main Street 42",
        courier_phone="0987654321",
        client_email="john.smith@example.com",
    )
    fields.update(overrides)
    return OrderRecord(**fields)


def _meal(meal_id=1, order_id=1, **overrides):
    fields = dict(
        meal_id=meal_id, order_id=order_id, name="Caesar Salad", price=15, weight=350, serving_size=1
    )
    fields.update(overrides)
    return MealRecord(**fields)


# =============================================================================
# CLIENT REPOSITORY TESTS
# =============================================================================


def test_client_repository_insert_and_find(repositories):
    """
    Verifies:
    - insert() reports one inserted row
    - find() returns the stored record unchanged
    - find() returns None for an unknown key
    """
    repo = repositories.clients

    assert repo.insert(_client()) is True
    assert repo.find("john.smith@example.com") == _client()
    assert repo.find("nobody@example.com") is None
    assert repo.exists("john.smith@example.com")
    assert not repo.exists("nobody@example.com")


def test_client_repository_list_all_ordered_by_key(repositories):
    repo = repositories.clients
    repo.insert(_client(email="zoe@example.com", name="Zoe Lee"))
    repo.insert(_client(email="ava@example.com", name="Ava Doe"))

    assert [c.email for c in repo.list_all()] == ["ava@example.com", "zoe@example.com"]


def test_client_repository_update_and_delete(repositories):
    """
    Verifies:
    - update() overwrites non-key fields and reports True
    - update()/delete() report False for a missing key
    - delete() removes the row
    """
    repo = repositories.clients
    repo.insert(_client())

    assert repo.update(_client(name="Johnny Smith", phone="5555555555")) is True
    assert repo.find("john.smith@example.com") == _client(name="Johnny Smith", phone="5555555555")

    assert repo.update(_client(email="ghost@example.com")) is False
    assert repo.delete("ghost@example.com") is False

    assert repo.delete("john.smith@example.com") is True
    assert repo.find("john.smith@example.com") is None


# =============================================================================
# COURIER / ORDER / MEAL REPOSITORY TESTS
# =============================================================================


def test_courier_repository_crud(repositories):
    repo = repositories.couriers

    assert repo.insert(_courier()) is True
    assert repo.find("0987654321") == _courier()

    assert repo.update(_courier(name="Alice Brown", transport="Van")) is True
    assert repo.find("0987654321").transport == "Van"

    assert repo.delete("0987654321") is True
    assert repo.list_all() == []


def test_order_repository_round_trips_timestamps(repositories):
    """
    Verifies:
    - Order dates come back as the same datetime values
    - update() overwrites dates, rating and address but keeps references
    """
    repositories.clients.insert(_client())
    repositories.couriers.insert(_courier())
    repo = repositories.orders

    assert repo.insert(_order()) is True
    assert repo.find(1) == _order()

    changed = _order(
        order_date=datetime(2024, 3, 1, 9, 0),
        delivery_date=datetime(2024, 3, 1, 9, 30),
        rating=2,
        delivery_address="Baker Street 221",
    )
    assert repo.update(changed) is True
    stored = repo.find(1)
    assert stored == changed
    assert stored.courier_phone == "0987654321"


def test_meal_repository_crud(repositories):
    repositories.clients.insert(_client())
    repositories.couriers.insert(_courier())
    repositories.orders.insert(_order())
    repo = repositories.meals

    assert repo.insert(_meal(1)) is True
    assert repo.insert(_meal(2, name="Tomato Soup", price=7)) is True
    assert [m.meal_id for m in repo.list_all()] == [1, 2]

    assert repo.update(_meal(2, name="Onion Soup", price=8, weight=400, serving_size=2)) is True
    assert repo.find(2) == _meal(2, name="Onion Soup", price=8, weight=400, serving_size=2)

    assert repo.delete(1) is True
    assert repo.find(1) is None


# =============================================================================
# STORE FAILURES
# =============================================================================


def test_deleting_referenced_client_raises_store_failure(repositories):
    """
    Verifies:
    - The store's foreign key rejects deleting a client that has orders
    - The failure surfaces as StoreFailureError, chained to the SQLAlchemy error
    - The client row is left intact
    """
    repositories.clients.insert(_client())
    repositories.couriers.insert(_courier())
    repositories.orders.insert(_order())

    with pytest.raises(StoreFailureError) as exc_info:
        repositories.clients.delete("john.smith@example.com")

    assert exc_info.value.code == "store_failure"
    assert exc_info.value.__cause__ is not None
    assert repositories.clients.find("john.smith@example.com") is not None


def test_inserting_duplicate_key_raises_store_failure(repositories):
    repositories.couriers.insert(_courier())

    with pytest.raises(StoreFailureError):
        repositories.couriers.insert(_courier(name="Bob Smith"))

    assert repositories.couriers.find("0987654321").name == "Alice Johnson"


def test_factory_rejects_unknown_backend(engine):
    with pytest.raises(ConfigurationError) as exc_info:
        create_repositories(engine, "nosql")

    assert exc_info.value.details == {"allowed": ["orm", "sql"]}
