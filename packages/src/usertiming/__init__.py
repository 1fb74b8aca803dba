"""usertiming.

Resolve User Timing "measure" entries from marks, raw timestamps and
durations against an injected mark registry and clock.
"""

from importlib.metadata import PackageNotFoundError, version

from usertiming._clock import ClockPort, FixedClock, SystemClock
from usertiming._entry import MEASURE_ENTRY_TYPE, PerformanceMeasure
from usertiming._errors import (
    ErrorKind,
    ErrorPayload,
    InvalidArgumentError,
    MeasureError,
    NotFoundError,
    build_error_payload,
)
from usertiming._logging import JsonFormatter, configure_logging
from usertiming._marks import MarkRegistryPort, MarkTable, PerformanceMark
from usertiming._options import (
    Absent,
    MarkName,
    MarkReference,
    MeasureInput,
    MeasureOptions,
    coerce_measure_input,
    validate_measure_input,
)
from usertiming._resolver import (
    MeasurementResolver,
    compute_end_time,
    compute_start_time,
    convert_duration,
    convert_mark_to_timestamp,
    resolve_measurement,
)
from usertiming._settings import ClockSettings, LoggingSettings, Settings

try:
    __version__ = version("usertiming")
except PackageNotFoundError:
    # Source checkout without installed metadata
    __version__ = "0.0.0+unknown"

__all__ = [
    # Version
    "__version__",
    # Resolution
    "MeasurementResolver",
    "compute_end_time",
    "compute_start_time",
    "convert_duration",
    "convert_mark_to_timestamp",
    "resolve_measurement",
    # Input
    "Absent",
    "MarkName",
    "MarkReference",
    "MeasureInput",
    "MeasureOptions",
    "coerce_measure_input",
    "validate_measure_input",
    # Entries
    "MEASURE_ENTRY_TYPE",
    "PerformanceMark",
    "PerformanceMeasure",
    # Ports
    "ClockPort",
    "FixedClock",
    "MarkRegistryPort",
    "MarkTable",
    "SystemClock",
    # Errors
    "ErrorKind",
    "ErrorPayload",
    "InvalidArgumentError",
    "MeasureError",
    "NotFoundError",
    "build_error_payload",
    # Logging
    "JsonFormatter",
    "configure_logging",
    # Settings
    "ClockSettings",
    "LoggingSettings",
    "Settings",
]
