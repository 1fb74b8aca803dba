"""Error taxonomy for measurement resolution.

Two kinds of failure exist:

- **Invalid argument** — malformed options (mutually exclusive
  members, under- or over-determined member sets), negative numeric
  mark references or durations, unresolved start/end times.
- **Not found** — a named mark reference has no recorded mark.

Every failure is raised synchronously where it is detected.  The
resolver never retries, never returns a partial entry and never logs
or swallows an error; handling belongs to the caller.

The exception classes also derive from the matching built-in
(``TypeError`` / ``LookupError``) so generic handlers keep working.

For outer boundaries that report failures as data (the command line,
a transport wrapper), :func:`build_error_payload` converts an
exception into an immutable :class:`ErrorPayload`::

    {
        "error_type": "not_found",
        "message": "Cannot find mark: \\"start\\".",
        "measure": "load" | null,
        "details": {"mark": "start"}
    }
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from enum import StrEnum

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ErrorKind(StrEnum):
    """Machine-readable failure kind."""

    INVALID_ARGUMENT = "invalid_argument"
    NOT_FOUND = "not_found"


class MeasureError(Exception):
    """Base class for every measurement resolution failure.

    Attributes:
        kind: The :class:`ErrorKind` of this failure.
        details: Extra context (offending mark name, value, ...).
    """

    kind: ErrorKind

    def __init__(self, message: str, **details: object) -> None:
        super().__init__(message)
        self.details: dict[str, object] = details


class InvalidArgumentError(MeasureError, TypeError):
    """The caller's input is structurally or numerically invalid."""

    kind = ErrorKind.INVALID_ARGUMENT


class NotFoundError(MeasureError, LookupError):
    """A named mark reference does not exist in the mark registry."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, mark: str) -> None:
        super().__init__(f'Cannot find mark: "{mark}".', mark=mark)
        self.mark = mark


# ---------------------------------------------------------------------------
# Error values
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ErrorPayload:
    """Immutable structured description of a failed resolution."""

    error_type: str
    message: str
    measure: str | None = None
    details: dict[str, object] = field(default_factory=dict)

    def to_json(self) -> str:
        """Serialise to a JSON string."""
        return json.dumps(asdict(self), default=str)


def build_error_payload(
    error: Exception,
    *,
    measure: str | None = None,
) -> ErrorPayload:
    """Convert an exception into an :class:`ErrorPayload`.

    :class:`MeasureError` subclasses report their :class:`ErrorKind`
    and details; any other exception falls back to the generic
    ``"error"`` type with empty details.

    Args:
        error: The exception to convert.
        measure: Name of the measurement being resolved, if known.
    """
    if isinstance(error, MeasureError):
        return ErrorPayload(
            error_type=error.kind.value,
            message=str(error),
            measure=measure,
            details=dict(error.details),
        )
    return ErrorPayload(error_type="error", message=str(error), measure=measure)
