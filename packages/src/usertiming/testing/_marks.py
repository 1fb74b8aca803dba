"""Factory for read-only mark tables in tests."""

from __future__ import annotations

from collections.abc import Iterable

from usertiming._marks import MarkTable


def make_marks(
    pairs: Iterable[tuple[str, float]] = (),
    /,
    **named: float,
) -> MarkTable:
    """Build a :class:`MarkTable` from pairs and/or keyword arguments.

    *pairs* come first, in order, followed by keyword marks.  Use
    pairs to record the same name more than once::

        make_marks([("tick", 1.0), ("tick", 2.0)], start=0.5)
    """
    return MarkTable.from_pairs([*pairs, *named.items()])
