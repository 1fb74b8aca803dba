"""Clock port and adapters supplying the "now" reading for measurements.

Provides ClockPort (Protocol), SystemClock and FixedClock.

Readings are **milliseconds relative to a time origin**, the unit
every :class:`~usertiming._entry.PerformanceMeasure` carries.  The
origin is the moment the clock was created; only differences between
readings and mark timestamps taken from the same origin are
meaningful.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal, Protocol, runtime_checkable

type ClockSource = Literal["perf_counter", "monotonic"]

_SOURCES: dict[str, Callable[[], float]] = {
    "perf_counter": time.perf_counter,
    "monotonic": time.monotonic,
}


@runtime_checkable
class ClockPort(Protocol):
    """Source of the current instant for open-ended measurements.

    The resolver reads it exactly when a measurement has no explicit
    end.  Tests inject a deterministic fake clock.
    """

    def now(self) -> float:
        """Return the current instant in milliseconds since the time origin."""
        ...


class SystemClock:
    """Production clock backed by a monotonic ``time`` function.

    Satisfies :class:`ClockPort` via structural subtyping (PEP 544).

    Args:
        source: ``"perf_counter"`` (default, highest resolution) or
            ``"monotonic"``.

    Usage::

        clock = SystemClock()
        started = clock.now()
        # ... some work ...
        elapsed_ms = clock.now() - started
    """

    def __init__(self, source: ClockSource = "perf_counter") -> None:
        try:
            self._read = _SOURCES[source]
        except KeyError:
            msg = f"Unknown clock source {source!r}, expected one of {sorted(_SOURCES)}"
            raise ValueError(msg) from None
        self._source = source
        self._origin = self._read()

    @property
    def source(self) -> str:
        """Name of the underlying ``time`` function."""
        return self._source

    def now(self) -> float:
        """Return milliseconds elapsed since this clock was created."""
        return (self._read() - self._origin) * 1000.0


@dataclass(frozen=True, slots=True)
class FixedClock:
    """Clock pinned to a single reading.

    Used by the command line when the caller supplies ``--now`` so
    open-ended measurements are reproducible.
    """

    reading: float

    def now(self) -> float:
        return self.reading
