"""
Shared test fixtures and utilities for the FoodDelivery test suite.

Every test gets its own in-memory SQLite database with the full schema, so
tests never see each other's rows. Fixtures that depend on ``backend`` run
once per persistence backend ('orm' and 'sql'), which checks that both
implementations honour the same contract.

Test modules import the fixtures they use explicitly, e.g.
``from test_fixtures import backend, engine, repositories, record_service``.
"""

import random

import pytest

from domain.enums import PersistenceBackend
from domain.models import create_db_engine, drop_database, init_database
from domain.schemas import ClientDTO, CourierDTO, MealDTO, OrderDTO
from repositories import create_repositories
from services import AnalyticsService, GeneratorService, RecordService

TEST_DATABASE_URL = "sqlite://"

BACKENDS = [PersistenceBackend.ORM, PersistenceBackend.SQL]


# Realistic default records
DEFAULT_CLIENT = {
    "email": "john.smith@example.com",
    "name": "John Smith",
    "phone": "1234567890",
}
DEFAULT_COURIER = {"phone": "0987654321", "name": "Alice Johnson", "transport": "Bicycle"}


def make_client(**overrides) -> ClientDTO:
    """Client DTO with valid defaults; pass keyword overrides for the fields under test"""
    return ClientDTO(**{**DEFAULT_CLIENT, **overrides})


def make_courier(**overrides) -> CourierDTO:
    return CourierDTO(**{**DEFAULT_COURIER, **overrides})


def make_order(order_id: int = 1, **overrides) -> OrderDTO:
    """
    Order DTO with valid defaults referencing DEFAULT_CLIENT and DEFAULT_COURIER.

    Example:
        >>> make_order(7, rating=3).delivery_address
        'Main Street 42'
    """
    fields = {
        "order_id": order_id,
        "order_date": "2024-02-01 12:00:00",
        "delivery_date": "2024-02-01 12:45:00",
        "rating": 5,
        "delivery_address": "Main Street 42",
        "courier_phone": DEFAULT_COURIER["phone"],
        "client_email": DEFAULT_CLIENT["email"],
    }
    fields.update(overrides)
    return OrderDTO(**fields)


def make_meal(meal_id: int = 1, order_id: int = 1, **overrides) -> MealDTO:
    fields = {
        "meal_id": meal_id,
        "order_id": order_id,
        "name": "Caesar Salad",
        "price": 15,
        "weight": 350,
        "serving_size": 1,
    }
    fields.update(overrides)
    return MealDTO(**fields)


@pytest.fixture
def engine():
    """
    Fresh in-memory SQLite database with all tables created.

    Foreign keys are enforced (PRAGMA foreign_keys=ON), as on PostgreSQL.
    """
    db_engine = create_db_engine(TEST_DATABASE_URL)
    init_database(db_engine)
    yield db_engine
    drop_database(db_engine)
    db_engine.dispose()


@pytest.fixture(params=BACKENDS, ids=lambda b: b.value)
def backend(request) -> PersistenceBackend:
    return request.param


@pytest.fixture
def repositories(engine, backend):
    return create_repositories(engine, backend)


@pytest.fixture
def record_service(repositories) -> RecordService:
    return RecordService(repositories)


@pytest.fixture
def analytics_service(repositories) -> AnalyticsService:
    return AnalyticsService(repositories.analytics)


@pytest.fixture
def generator_service(record_service) -> GeneratorService:
    return GeneratorService(record_service, rng=random.Random(1234))


@pytest.fixture
def seeded_service(record_service) -> RecordService:
    """Record service with DEFAULT_CLIENT, DEFAULT_COURIER and order 1 already stored"""
    assert record_service.add_client(make_client()) is None
    assert record_service.add_courier(make_courier()) is None
    assert record_service.add_order(make_order(1)) is None
    return record_service
