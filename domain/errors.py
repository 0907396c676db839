"""
Typed error taxonomy returned by the record and analytics services.

Errors are values, not exceptions: mutations return ``Optional[Error]`` and
lookups return a ``Failure`` carrying one of these. Unexpected store failures
are a separate concern (see ``app.exceptions.StoreFailureError``).
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class ValidationError:
    """A field value failed its syntax check"""

    description: str

    @property
    def message(self) -> str:
        return self.description


@dataclass(frozen=True)
class DuplicateKeyError:
    """Insert attempted with a key that already exists"""

    key: str

    @property
    def message(self) -> str:
        return f"Record with key '{self.key}' already exists."


@dataclass(frozen=True)
class RecordNotFound:
    """No record exists for the given identifier"""

    identifier: str

    @property
    def message(self) -> str:
        if not self.identifier:
            return "No matching records found."
        return f"Record not found: '{self.identifier}'."


@dataclass(frozen=True)
class ForeignKeyConstraintError:
    """A reference field names a record that does not exist"""

    field: str
    value: str

    @property
    def message(self) -> str:
        return f"{self.field} '{self.value}' does not reference an existing record."


@dataclass(frozen=True)
class InsertError:
    """The store accepted an insert but reported no affected row"""

    table: str

    @property
    def message(self) -> str:
        return f"Failed to insert a record into {self.table}."


@dataclass(frozen=True)
class UnknownError:
    """Reserved for outcomes the services cannot classify"""

    @property
    def message(self) -> str:
        return "Unknown error."


Error = Union[
    ValidationError,
    DuplicateKeyError,
    RecordNotFound,
    ForeignKeyConstraintError,
    InsertError,
    UnknownError,
]
