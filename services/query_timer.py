"""
Wall-clock timing for individual queries.

Each measurement is its own value: nothing is shared between calls.
"""

import time
from typing import Callable, Optional, TypeVar

from domain.result import Timed

T = TypeVar("T")


class QueryTimer:
    """Begin/end bracket around a query.

    A second begin() before end() restarts the measurement. Also usable as a
    context manager.
    """

    def __init__(self):
        self._started: Optional[float] = None
        self._ended: Optional[float] = None

    def begin(self) -> "QueryTimer":
        self._started = time.perf_counter()
        self._ended = None
        return self

    def end(self) -> float:
        if self._started is None:
            raise RuntimeError("QueryTimer.end() called before begin()")
        self._ended = time.perf_counter()
        return self.elapsed_ms

    @property
    def elapsed_ms(self) -> float:
        """Elapsed milliseconds; 0.0 before begin(), running total before end()"""
        if self._started is None:
            return 0.0
        ended = self._ended if self._ended is not None else time.perf_counter()
        return (ended - self._started) * 1000.0

    def __enter__(self) -> "QueryTimer":
        return self.begin()

    def __exit__(self, exc_type, exc, tb):
        self.end()
        return False


def measure(query: Callable[..., T], *args, **kwargs) -> Timed[T]:
    """Run query(*args, **kwargs) and return its value with the elapsed time"""
    with QueryTimer() as timer:
        value = query(*args, **kwargs)
    return Timed(value=value, elapsed_ms=timer.elapsed_ms)
