"""
Random client and courier generation for filling a demo database.

Records go through RecordService, so each one is validated and checked for a
duplicate key like any manually entered record.
"""

import logging
import random
from typing import Callable, Optional

from domain.enums import Transport
from domain.errors import DuplicateKeyError, ValidationError
from domain.result import Failure, Result, Success
from domain.schemas import ClientDTO, CourierDTO
from services.record_service import RecordService

logger = logging.getLogger("fooddelivery.generator")

CLIENT_FIRST_NAMES = (
    "Ava", "Ben", "Cal", "Dan", "Eli", "Fin", "Gus", "Hal", "Ivy", "Jax",
    "Kai", "Leo", "Mia", "Nia", "Oli", "Pax", "Ray", "Sky", "Tia", "Zoe",
)
CLIENT_LAST_NAMES = (
    "Doe", "Lee", "Kim", "Zhu", "Wang", "Liu", "Gar", "Ali", "Bai", "Hsu",
    "Roy", "Joy", "Lin", "Tan", "Yin",
)
MAIL_DOMAINS = (
    "ex.com", "tm.com", "sm.com", "dm.com", "rnd.com",
    "ml.com", "d.com", "svc.com", "w.com", "u.com",
)
COURIER_FIRST_NAMES = ("Alice", "Bob", "Charlie", "David", "Eve", "Frank", "Grace")
COURIER_LAST_NAMES = ("Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller")

# Attempts per requested record before giving up on key collisions
MAX_ATTEMPTS_PER_RECORD = 10


class GeneratorService:
    def __init__(self, records: RecordService, rng: Optional[random.Random] = None):
        self.records = records
        self.rng = rng or random.Random()

    def _phone(self) -> str:
        return f"{self.rng.randrange(10 ** 10):010d}"

    def random_client(self) -> ClientDTO:
        first = self.rng.choice(CLIENT_FIRST_NAMES)
        last = self.rng.choice(CLIENT_LAST_NAMES)
        suffix = self.rng.randrange(10 ** 7)
        domain = self.rng.choice(MAIL_DOMAINS)
        return ClientDTO(
            email=f"{first}.{last}{suffix}@{domain}".lower(),
            name=f"{first} {last}",
            phone=self._phone(),
        )

    def random_courier(self) -> CourierDTO:
        return CourierDTO(
            phone=self._phone(),
            name=f"{self.rng.choice(COURIER_FIRST_NAMES)} {self.rng.choice(COURIER_LAST_NAMES)}",
            transport=self.rng.choice(list(Transport)).value,
        )

    def _generate(self, kind: str, n: int, make: Callable, add: Callable) -> Result[int]:
        if n is None or n < 1:
            logger.warning(f"generate_{kind}_rejected n={n}")
            return Failure(ValidationError("Wrong number of records."))

        inserted = 0
        attempts = 0
        while inserted < n and attempts < n * MAX_ATTEMPTS_PER_RECORD:
            attempts += 1
            error = add(make())
            if error is None:
                inserted += 1
            elif not isinstance(error, DuplicateKeyError):
                logger.warning(f"generate_{kind}_skipped message={error.message!r}")

        logger.info(f"generated_{kind} requested={n} inserted={inserted} attempts={attempts}")
        return Success(inserted)

    def generate_clients(self, n: int) -> Result[int]:
        """Insert ``n`` random clients; returns how many were inserted"""
        return self._generate("clients", n, self.random_client, self.records.add_client)

    def generate_couriers(self, n: int) -> Result[int]:
        """Insert ``n`` random couriers; returns how many were inserted"""
        return self._generate("couriers", n, self.random_courier, self.records.add_courier)
