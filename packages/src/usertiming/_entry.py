"""The measurement entry produced by a resolution.

Wire projection (the only externally visible data contract)::

    {
        "name": "load",
        "entryType": "measure",
        "startTime": 12.5,
        "duration": 27.5,
        "detail": null
    }

``duration`` is ``end time - start time`` and is never clamped; a
negative value means the end precedes the start.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Final

MEASURE_ENTRY_TYPE: Final = "measure"


@dataclass(frozen=True, slots=True)
class PerformanceMeasure:
    """Immutable record of the interval between two resolved timestamps."""

    name: str
    start_time: float
    duration: float
    detail: object = None
    entry_type: str = field(default=MEASURE_ENTRY_TYPE, init=False)

    @classmethod
    def between(
        cls,
        name: str,
        *,
        start_time: float,
        end_time: float,
        detail: object = None,
    ) -> PerformanceMeasure:
        """Build the entry spanning *start_time* to *end_time*."""
        return cls(
            name=name,
            start_time=start_time,
            duration=end_time - start_time,
            detail=detail,
        )

    @property
    def end_time(self) -> float:
        """``start_time + duration``."""
        return self.start_time + self.duration

    def to_dict(self) -> dict[str, Any]:
        """Return the five-field serialisation projection."""
        return {
            "name": self.name,
            "entryType": self.entry_type,
            "startTime": self.start_time,
            "duration": self.duration,
            "detail": self.detail,
        }

    def to_json(self) -> str:
        """Serialise the projection to a JSON string."""
        return json.dumps(self.to_dict(), default=str)
