"""Measurement resolution: from two time references to one entry.

Control flow of a single resolution::

    coerce input → validate shape → end time → start time → entry

End and start time are computed by two independent decision tables,
each evaluated top to bottom, first match wins.  Both read the same
input snapshot; neither consumes the other's result.

End time:

1. bare start mark name with an ``end_mark`` → convert ``end_mark``
2. options with ``end`` → convert ``end``
3. options with ``start`` and ``duration`` → ``start + duration``
4. otherwise → ``clock.now()``

Start time:

1. options with ``start`` → convert ``start``
2. options with ``duration`` and ``end`` → ``end - duration``
3. bare start mark name → convert the name
4. otherwise → ``0``

Resolution is synchronous and stateless.  The mark registry and the
clock are read, never written.

See Also:
    https://w3c.github.io/user-timing/#dom-performance-measure
"""

from __future__ import annotations

import logging

from usertiming._clock import ClockPort
from usertiming._entry import PerformanceMeasure
from usertiming._errors import InvalidArgumentError, NotFoundError
from usertiming._marks import MarkRegistryPort
from usertiming._options import (
    Absent,
    MarkName,
    MarkReference,
    MeasureInput,
    MeasureOptions,
    coerce_measure_input,
    is_real_number,
    validate_measure_input,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Mark reference conversion
# ---------------------------------------------------------------------------


def convert_mark_to_timestamp(mark: MarkReference, marks: MarkRegistryPort) -> float:
    """Turn a mark name or a raw timestamp into an absolute timestamp.

    A name resolves to the most recently recorded mark with that name.
    A number is returned unchanged.

    Raises:
        NotFoundError: If no mark named *mark* exists.
        InvalidArgumentError: If *mark* is a negative number, or neither
            a string nor a number.
    """
    if isinstance(mark, str):
        found = marks.get_marks_by_name(mark)
        if not found:
            raise NotFoundError(mark)
        return found[-1].start_time
    if not is_real_number(mark):
        msg = f"Mark must be a mark name or a number, not {type(mark).__name__}."
        raise InvalidArgumentError(msg, mark=mark)
    if mark < 0:
        msg = "Mark cannot be negative."
        raise InvalidArgumentError(msg, mark=mark)
    return mark


def convert_duration(duration: float) -> float:
    """Validate an elapsed amount; it is never looked up as a mark.

    Raises:
        InvalidArgumentError: If *duration* is not a number or is negative.
    """
    if not is_real_number(duration):
        msg = f"Duration must be a number, not {type(duration).__name__}."
        raise InvalidArgumentError(msg, duration=duration)
    if duration < 0:
        msg = "Duration cannot be negative."
        raise InvalidArgumentError(msg, duration=duration)
    return duration


# ---------------------------------------------------------------------------
# Time computation
# ---------------------------------------------------------------------------


def compute_end_time(
    measure_input: MeasureInput,
    end_mark: str | None,
    *,
    marks: MarkRegistryPort,
    clock: ClockPort,
) -> float | None:
    """Derive the end time of a measurement.

    Returns ``None`` only for inputs outside the three variants.
    """
    match measure_input:
        case MarkName() if end_mark is not None:
            return convert_mark_to_timestamp(end_mark, marks)
        case MeasureOptions(end=end) if end is not None:
            return convert_mark_to_timestamp(end, marks)
        case MeasureOptions(start=start, duration=duration) if (
            start is not None and duration is not None
        ):
            start_time = convert_mark_to_timestamp(start, marks)
            elapsed = convert_duration(duration)
            return start_time + elapsed
        case MeasureOptions() | MarkName() | Absent():
            return clock.now()
    return None


def compute_start_time(
    measure_input: MeasureInput,
    *,
    marks: MarkRegistryPort,
) -> float | None:
    """Derive the start time of a measurement.

    Returns ``None`` only for inputs outside the three variants.
    """
    match measure_input:
        case MeasureOptions(start=start) if start is not None:
            return convert_mark_to_timestamp(start, marks)
        case MeasureOptions(duration=duration, end=end) if (
            duration is not None and end is not None
        ):
            elapsed = convert_duration(duration)
            end_time = convert_mark_to_timestamp(end, marks)
            return end_time - elapsed
        case MarkName(name=name):
            return convert_mark_to_timestamp(name, marks)
        case MeasureOptions() | Absent():
            return 0.0
    return None


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


def resolve_measurement(
    name: str,
    start_or_options: object = None,
    end_mark: str | None = None,
    *,
    marks: MarkRegistryPort,
    clock: ClockPort,
) -> PerformanceMeasure:
    """Resolve a named measurement between two time references.

    Args:
        name: Name given to the resulting entry.
        start_or_options: ``None``, a start mark name, a
            :class:`MeasureOptions` or a mapping of option members.
        end_mark: End mark name; only honoured together with a bare
            start mark name and forbidden together with options.
        marks: Registry that named references are looked up in.
        clock: Source of "now" for open-ended measurements.

    Returns:
        A fresh, immutable :class:`PerformanceMeasure`.

    Raises:
        InvalidArgumentError: On malformed input or negative numbers.
        NotFoundError: If a referenced mark name was never recorded.
    """
    if not isinstance(name, str):
        msg = f"Measure name must be a string, not {type(name).__name__}."
        raise InvalidArgumentError(msg, name=name)

    measure_input = coerce_measure_input(start_or_options)
    validate_measure_input(measure_input, end_mark)

    end_time = compute_end_time(measure_input, end_mark, marks=marks, clock=clock)
    start_time = compute_start_time(measure_input, marks=marks)
    if start_time is None or end_time is None:
        msg = "Invalid start_time or end_time."
        raise InvalidArgumentError(msg, start_time=start_time, end_time=end_time)

    detail = (
        measure_input.detail if isinstance(measure_input, MeasureOptions) else None
    )
    entry = PerformanceMeasure.between(
        name,
        start_time=start_time,
        end_time=end_time,
        detail=detail,
    )
    logger.debug(
        "Resolved measure %r: start_time=%s duration=%s",
        entry.name,
        entry.start_time,
        entry.duration,
        extra={"entry": entry},
    )
    return entry


class MeasurementResolver:
    """Resolver bound to one mark registry and one clock.

    Usage::

        resolver = MeasurementResolver(marks=table, clock=SystemClock())
        entry = resolver.measure("load", {"start": "fetch", "end": "render"})
    """

    def __init__(self, *, marks: MarkRegistryPort, clock: ClockPort) -> None:
        self._marks = marks
        self._clock = clock

    @property
    def marks(self) -> MarkRegistryPort:
        return self._marks

    @property
    def clock(self) -> ClockPort:
        return self._clock

    def measure(
        self,
        name: str,
        start_or_options: object = None,
        end_mark: str | None = None,
    ) -> PerformanceMeasure:
        """Resolve a measurement; see :func:`resolve_measurement`."""
        return resolve_measurement(
            name,
            start_or_options,
            end_mark,
            marks=self._marks,
            clock=self._clock,
        )
