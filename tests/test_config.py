"""
Tests for Settings loading from the environment.
"""

import pytest
from pydantic import ValidationError

from app.config import Environment, Settings
from domain.enums import PersistenceBackend


def test_defaults(monkeypatch):
    for name in ("PERSISTENCE_BACKEND", "ENVIRONMENT", "TOP_COURIERS_DEFAULT", "DATABASE_URL"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.app_name == "FoodDelivery"
    assert settings.persistence_backend == PersistenceBackend.ORM
    assert settings.database_url.startswith("postgresql+psycopg2://")
    assert settings.top_couriers_default == 3
    assert settings.is_development()


def test_environment_values_are_case_insensitive(monkeypatch):
    monkeypatch.setenv("PERSISTENCE_BACKEND", "SQL")
    monkeypatch.setenv("ENVIRONMENT", "Testing")

    settings = Settings(_env_file=None)

    assert settings.persistence_backend == PersistenceBackend.SQL
    assert settings.environment == Environment.TESTING
    assert settings.is_testing()
    assert not settings.is_production()


def test_top_couriers_default_must_be_positive(monkeypatch):
    monkeypatch.setenv("TOP_COURIERS_DEFAULT", "0")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)
