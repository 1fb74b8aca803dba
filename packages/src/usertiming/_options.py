"""Measure input variants and the options shape check.

The second argument of a measurement is one of three shapes:

- :class:`Absent` — nothing given; the measurement spans from the
  time origin to now.
- :class:`MarkName` — a bare start mark name.
- :class:`MeasureOptions` — a structure with optional ``start``,
  ``end``, ``duration`` and ``detail`` members.

:func:`coerce_measure_input` maps loosely typed caller values onto
these variants once, so the time computation can ``match`` on an
exhaustive set of cases.  :func:`validate_measure_input` enforces the
cross-member rules before any arithmetic runs.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from numbers import Real

from usertiming._errors import InvalidArgumentError

type MarkReference = str | float


@dataclass(frozen=True, slots=True)
class Absent:
    """No start mark or options were supplied."""


@dataclass(frozen=True, slots=True)
class MarkName:
    """A bare start mark name."""

    name: str


@dataclass(frozen=True, slots=True)
class MeasureOptions:
    """Structured measurement options.

    Every member is optional.  ``None`` means the member is omitted;
    use :data:`None` for ``detail`` to attach no payload.

    Attributes:
        start: Start mark name or timestamp.
        end: End mark name or timestamp.
        duration: Elapsed milliseconds, combined with ``start`` or ``end``.
        detail: Opaque caller payload copied onto the entry.

    Raises:
        InvalidArgumentError: If ``start`` or ``end`` is neither a
            string nor a number, or ``duration`` is not a number.
    """

    start: MarkReference | None = None
    end: MarkReference | None = None
    duration: float | None = None
    detail: object = None

    def __post_init__(self) -> None:
        for key in ("start", "end"):
            value = getattr(self, key)
            if value is not None and not _is_mark_reference(value):
                msg = f"Measure option {key!r} must be a mark name or a number."
                raise InvalidArgumentError(msg, option=key, value=value)
        if self.duration is not None and not is_real_number(self.duration):
            msg = "Measure option 'duration' must be a number."
            raise InvalidArgumentError(msg, option="duration", value=self.duration)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, object]) -> MeasureOptions:
        """Build options from a mapping with a subset of the member keys.

        Raises:
            InvalidArgumentError: On unknown keys or mistyped members.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(str(key) for key in raw if key not in known)
        if unknown:
            msg = f"Unknown measure option(s): {', '.join(unknown)}."
            raise InvalidArgumentError(msg, options=unknown)
        return cls(**raw)  # type: ignore[arg-type]


type MeasureInput = Absent | MarkName | MeasureOptions

ABSENT = Absent()


def is_real_number(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _is_mark_reference(value: object) -> bool:
    return isinstance(value, str) or is_real_number(value)


def coerce_measure_input(value: object) -> MeasureInput:
    """Map a caller's ``start_or_options`` value onto a variant.

    ``None`` becomes :class:`Absent`, a ``str`` becomes
    :class:`MarkName`, a mapping becomes :class:`MeasureOptions`.
    Variants pass through unchanged.

    Raises:
        InvalidArgumentError: If *value* has none of these shapes.
    """
    match value:
        case None:
            return ABSENT
        case Absent() | MarkName() | MeasureOptions():
            return value
        case str():
            return MarkName(value)
        case Mapping():
            return MeasureOptions.from_mapping(value)
        case _:
            msg = (
                "start_or_options must be a mark name, measure options or None, "
                f"not {type(value).__name__}."
            )
            raise InvalidArgumentError(msg, value=value)


def validate_measure_input(measure_input: MeasureInput, end_mark: str | None) -> None:
    """Reject structurally invalid option combinations.

    Only the options form is checked; bare mark names and absent input
    always pass.

    Raises:
        InvalidArgumentError: If *end_mark* accompanies options, if both
            ``start`` and ``end`` are omitted, or if ``start``,
            ``duration`` and ``end`` are all present.
    """
    if not isinstance(measure_input, MeasureOptions):
        return
    if end_mark:
        msg = "If start_or_options is measure options, end_mark cannot be provided."
        raise InvalidArgumentError(msg, end_mark=end_mark)
    has_start = measure_input.start is not None
    has_end = measure_input.end is not None
    has_duration = measure_input.duration is not None
    if not has_start and not has_end:
        msg = "Invalid start_or_options: start and end are both omitted."
        raise InvalidArgumentError(msg)
    if has_start and has_end and has_duration:
        msg = "Invalid start_or_options: start, duration and end cannot all be given."
        raise InvalidArgumentError(msg)
