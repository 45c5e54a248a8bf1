"""Elapsed-time logging for searches and individual source calls."""

import time
from contextlib import contextmanager
from typing import Iterator

from app.logging import get_logger

logger = get_logger(__name__)

# Grep-friendly prefix on every timing line
_TIMING_PREFIX = "[TIMING]"


def _format_duration(ms: int) -> str:
    """12500 -> '12.5s', 750 -> '750ms'."""
    if ms >= 1000:
        return f"{ms / 1000:.1f}s"
    return f"{ms}ms"


class Span:
    """Elapsed-time handle yielded by time_span; readable while the block runs."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._start = time.perf_counter()
        self._end: float | None = None

    def close(self) -> int:
        self._end = time.perf_counter()
        return self.elapsed_ms

    @property
    def elapsed_ms(self) -> int:
        end = self._end if self._end is not None else time.perf_counter()
        return int((end - self._start) * 1000)


@contextmanager
def time_span(name: str, **extra: object) -> Iterator[Span]:
    """Log how long the enclosed block took, with extra key=value fields.

    Works around awaits too: the span measures wall-clock time, so an
    ``async`` body that suspends is timed end to end.
    """
    span = Span(name)
    try:
        yield span
    finally:
        elapsed = span.close()
        fields = [f"elapsed_ms={elapsed}", f"({_format_duration(elapsed)})"]
        fields += [f"{k}={v}" for k, v in extra.items()]
        logger.info("%s %s %s", _TIMING_PREFIX, name, " ".join(fields))
