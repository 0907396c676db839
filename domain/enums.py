"""
Domain enums for the food-delivery record manager.
Contains all enumeration types used across the domain models.
"""

import enum


class PersistenceBackend(str, enum.Enum):
    """Repository implementation used by the services"""

    ORM = "orm"
    SQL = "sql"


class Transport(str, enum.Enum):
    """Transport kinds offered by the random courier generator"""

    BICYCLE = "Bicycle"
    MOTORBIKE = "Motorbike"
    VAN = "Van"
    TRUCK = "Truck"
    SCOOTER = "Scooter"


class EntityKind(str, enum.Enum):
    """Record kinds handled by the record service"""

    CLIENT = "Client"
    COURIER = "Courier"
    MEAL = "Meal"
    ORDER = "Order"
