"""Deterministic fake clock for testing.

Satisfies ClockPort (PEP 544 structural subtyping) with a manually
controllable reading and no real time dependency.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class FakeClock:
    """Test double for ClockPort.

    Example::

        clock = FakeClock(42.0)
        assert clock.now() == 42.0
        clock.advance(8.0)
        assert clock.now() == 50.0
    """

    _time: float = 0.0
    reads: int = 0

    def now(self) -> float:
        """Return the current reading and count the read."""
        self.reads += 1
        return self._time

    def set(self, reading: float) -> None:
        self._time = reading

    def advance(self, milliseconds: float) -> None:
        self._time += milliseconds
