"""
Two-case outcome for lookups and analytics, plus the measured-duration wrapper
returned by timed queries.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from domain.errors import Error

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Lookup produced a value"""

    value: T


@dataclass(frozen=True)
class Failure:
    """Lookup produced an error"""

    error: Error


Result = Union[Success[T], Failure]


@dataclass(frozen=True)
class Timed(Generic[T]):
    """Value produced by a query together with its wall-clock duration"""

    value: T
    elapsed_ms: float
