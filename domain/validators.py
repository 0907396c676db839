"""
Field validators for client, courier, meal and order records.

Validators check the raw string as given: no trimming, no case folding.
``None`` is always invalid.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from domain.errors import ValidationError

TIMESTAMP_FORMATS = ("%Y-%m-%d %H:%M:%S", "%Y-%m-%d %H:%M")
DATE_FORMAT = "%Y-%m-%d"

# strptime takes one-digit fields and any run of spaces, so the shape is checked first
_TIMESTAMP_SHAPE = re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}(?::\d{2})?", re.ASCII)
_DATE_SHAPE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)

MIN_RATING = 1
MAX_RATING = 5


class Validator:
    """Base class for regex validators"""

    pattern: re.Pattern
    # Column width of the field in the schema
    max_length: Optional[int] = None

    def is_valid(self, value: Optional[str]) -> bool:
        if value is None:
            return False
        if self.max_length is not None and len(value) > self.max_length:
            return False
        return self.pattern.fullmatch(value) is not None


class NameValidator(Validator):
    """Two capitalized words, each optionally hyphen-compounded: 'Jane Doe', 'Mary-Jane Watson'"""

    pattern = re.compile(r"[A-Z][a-z]+(?:-[A-Z][a-z]+)? [A-Z][a-z]+(?:-[A-Z][a-z]+)?")
    max_length = 50


class EmailValidator(Validator):
    pattern = re.compile(r"[\w.\-]+@[a-zA-Z\d\-]+\.[a-zA-Z]{2,}(?:\.[a-zA-Z]{2,})?", re.ASCII)
    max_length = 32


class PhoneNumberValidator(Validator):
    pattern = re.compile(r"\d{10}", re.ASCII)


class MealNameValidator(Validator):
    """Letters, optionally joined by single spaces or hyphens: 'Caesar Salad', 'Stir-Fry'"""

    pattern = re.compile(r"[A-Za-z]+(?:[- ][A-Za-z]+)*")
    max_length = 25


class TransportValidator(Validator):
    """Transport kind: one or more alphabetic words, e.g. 'Bicycle', 'Cargo Bike'"""

    pattern = re.compile(r"[A-Za-z]+(?: [A-Za-z]+)*")
    max_length = 25


class AddressValidator(Validator):
    """Alphabetic words followed by a street number: 'Main Street 42'"""

    pattern = re.compile(r"[A-Za-z]+(?: [A-Za-z]+)* \d+", re.ASCII)
    max_length = 50


# Shared instances; validators are stateless
name_validator = NameValidator()
email_validator = EmailValidator()
phone_validator = PhoneNumberValidator()
meal_name_validator = MealNameValidator()
transport_validator = TransportValidator()
address_validator = AddressValidator()


@dataclass(frozen=True)
class ValidationRule:
    """Pairs a field value with the validator it must pass"""

    field_name: str
    value: Optional[str]
    validator: Validator

    def is_valid(self) -> bool:
        return self.validator.is_valid(self.value)

    def error(self) -> ValidationError:
        return ValidationError(f"Wrong {self.field_name.lower()}.")


def first_violation(rules: Iterable[ValidationRule]) -> Optional[ValidationError]:
    """Return the error of the first failing rule, in the given order"""
    for rule in rules:
        if not rule.is_valid():
            return rule.error()
    return None


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse 'YYYY-MM-DD HH:MM[:SS]'; returns None when the value does not match"""
    if value is None or not _TIMESTAMP_SHAPE.fullmatch(value):
        return None
    for fmt in TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    return None


def parse_start_date(value: Optional[str]) -> Optional[datetime]:
    """Like parse_timestamp, but a bare 'YYYY-MM-DD' means the start of that day"""
    parsed = parse_timestamp(value)
    if parsed is not None or value is None or not _DATE_SHAPE.fullmatch(value):
        return parsed
    try:
        return datetime.strptime(value, DATE_FORMAT)
    except ValueError:
        return None


def is_valid_rating(rating: Optional[int]) -> bool:
    return rating is not None and MIN_RATING <= rating <= MAX_RATING
