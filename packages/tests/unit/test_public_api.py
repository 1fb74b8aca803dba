"""Unit tests for the usertiming top-level public API surface.

Test Techniques Used:
    - Specification-based Testing: ``__all__`` completeness against the
      documented public API contract.
    - Importability: Every name in ``__all__`` resolves to a real object
      via ``getattr``.
"""

from __future__ import annotations

import usertiming


class TestUsertimingPublicAPI:
    """All expected symbols are importable and listed in ``__all__``."""

    EXPECTED_NAMES = {
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
    }

    def test_all_contains_expected_symbols(self) -> None:
        """``__all__`` matches the documented public API exactly."""
        assert set(usertiming.__all__) == self.EXPECTED_NAMES

    def test_all_symbols_importable(self) -> None:
        """Every name in ``__all__`` resolves to an attribute on the module."""
        for name in usertiming.__all__:
            obj = getattr(usertiming, name, None)
            assert obj is not None, f"{name!r} listed in __all__ but not importable"

    def test_version_is_string(self) -> None:
        assert isinstance(usertiming.__version__, str)
        assert usertiming.__version__
