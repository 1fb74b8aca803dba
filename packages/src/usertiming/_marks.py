"""Mark registry port, mark value object and a read-only adapter.

The resolver never records marks.  It only asks a registry for the
marks recorded under a name, in recording order, and uses the last
one.  How and when marks are recorded is the registry's business.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Final, Protocol, runtime_checkable

MARK_ENTRY_TYPE: Final = "mark"


@dataclass(frozen=True, slots=True)
class PerformanceMark:
    """A named, previously recorded point in time."""

    name: str
    start_time: float
    detail: object = None
    entry_type: str = field(default=MARK_ENTRY_TYPE, init=False)


@runtime_checkable
class MarkRegistryPort(Protocol):
    """Read-only lookup of recorded marks by name."""

    def get_marks_by_name(self, name: str) -> Sequence[PerformanceMark]:
        """Return every mark recorded as *name*, oldest first.

        An empty sequence means no such mark exists.
        """
        ...


class MarkTable:
    """Immutable in-memory :class:`MarkRegistryPort` adapter.

    Built once from marks given in recording order.  Later marks with
    the same name shadow earlier ones for lookups that take the last
    element, exactly as a live registry would.

    Usage::

        table = MarkTable.from_pairs([("start", 12.5), ("end", 40.0)])
        table.get_marks_by_name("start")
    """

    def __init__(self, marks: Iterable[PerformanceMark] = ()) -> None:
        by_name: defaultdict[str, list[PerformanceMark]] = defaultdict(list)
        for mark in marks:
            by_name[mark.name].append(mark)
        self._by_name = {name: tuple(found) for name, found in by_name.items()}

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, float]]) -> MarkTable:
        """Build a table from ``(name, start_time)`` pairs."""
        return cls(PerformanceMark(name, start_time) for name, start_time in pairs)

    def get_marks_by_name(self, name: str) -> tuple[PerformanceMark, ...]:
        return self._by_name.get(name, ())

    def __len__(self) -> int:
        return sum(len(found) for found in self._by_name.values())

    def __repr__(self) -> str:
        return f"MarkTable(names={sorted(self._by_name)!r})"
