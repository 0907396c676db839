"""
Tests for GeneratorService, run against both persistence backends.

Verifies:
- Generated clients and couriers pass the same validation as manual input
- The requested number of rows is inserted
- Existing keys are skipped, not overwritten
- n < 1 is rejected
"""

import random

import pytest

from domain.enums import Transport
from domain.errors import ValidationError
from domain.result import Failure, Success
from domain.validators import email_validator, name_validator, phone_validator
from services import GeneratorService
from test_fixtures import (  # noqa: F401
    backend,
    engine,
    generator_service,
    record_service,
    repositories,
)


def test_generate_clients_inserts_valid_records(generator_service, record_service):
    outcome = generator_service.generate_clients(25)

    assert outcome == Success(25)
    clients = record_service.get_all_clients()
    assert len(clients) == 25
    for client in clients:
        assert email_validator.is_valid(client.email)
        assert name_validator.is_valid(client.name)
        assert phone_validator.is_valid(client.phone)


def test_generate_couriers_inserts_valid_records(generator_service, record_service):
    outcome = generator_service.generate_couriers(10)

    assert outcome == Success(10)
    couriers = record_service.get_all_couriers()
    assert len(couriers) == 10
    transports = {t.value for t in Transport}
    assert all(c.transport in transports for c in couriers)
    assert all(phone_validator.is_valid(c.phone) for c in couriers)


def test_generator_skips_existing_keys(record_service):
    """
    Two generators with the same seed produce the same candidates; the second
    run must skip every key the first one stored and leave those rows alone.
    """
    first = GeneratorService(record_service, rng=random.Random(7))
    assert first.generate_couriers(3) == Success(3)
    before = {c.phone: c for c in record_service.get_all_couriers()}

    second = GeneratorService(record_service, rng=random.Random(7))
    outcome = second.generate_couriers(2)

    assert outcome == Success(2)
    after = {c.phone: c for c in record_service.get_all_couriers()}
    assert len(after) == 5
    for phone, courier in before.items():
        assert after[phone] == courier


@pytest.mark.parametrize("n", [0, -3])
def test_generate_rejects_non_positive_count(generator_service, n):
    expected = Failure(ValidationError("Wrong number of records."))

    assert generator_service.generate_clients(n) == expected
    assert generator_service.generate_couriers(n) == expected
