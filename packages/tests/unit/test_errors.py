"""Tests for usertiming._errors — error taxonomy and error payloads.

Test Techniques Used:
    - Specification-based Testing: ErrorKind per exception class
    - Hierarchy Testing: built-in base classes for generic handlers
    - State-based Testing: ErrorPayload construction and serialisation
"""

from __future__ import annotations

import json
from dataclasses import FrozenInstanceError

import pytest

from usertiming._errors import (
    ErrorKind,
    ErrorPayload,
    InvalidArgumentError,
    MeasureError,
    NotFoundError,
    build_error_payload,
)

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class TestExceptionHierarchy:
    """Exception classes and their kinds.

    Technique: Hierarchy Testing.
    """

    def test_invalid_argument_kind(self) -> None:
        error = InvalidArgumentError("bad", option="start")
        assert error.kind is ErrorKind.INVALID_ARGUMENT
        assert error.details == {"option": "start"}
        assert str(error) == "bad"

    def test_invalid_argument_is_type_error(self) -> None:
        assert isinstance(InvalidArgumentError("bad"), TypeError)
        assert isinstance(InvalidArgumentError("bad"), MeasureError)

    def test_not_found_kind_and_message(self) -> None:
        error = NotFoundError("fetch")
        assert error.kind is ErrorKind.NOT_FOUND
        assert error.mark == "fetch"
        assert str(error) == 'Cannot find mark: "fetch".'
        assert error.details == {"mark": "fetch"}

    def test_not_found_is_lookup_error(self) -> None:
        assert isinstance(NotFoundError("x"), LookupError)
        assert isinstance(NotFoundError("x"), MeasureError)

    def test_error_kind_values(self) -> None:
        assert {kind.value for kind in ErrorKind} == {"invalid_argument", "not_found"}


# ---------------------------------------------------------------------------
# ErrorPayload
# ---------------------------------------------------------------------------


class TestErrorPayload:
    """ErrorPayload value object tests.

    Technique: Specification-based Testing — verifying immutability,
    defaults, and JSON serialisation.
    """

    def test_default_details_is_empty_dict(self) -> None:
        payload = ErrorPayload(error_type="error", message="boom")
        assert payload.details == {}
        assert payload.measure is None

    def test_to_json_produces_expected_keys(self) -> None:
        payload = ErrorPayload(
            error_type="not_found",
            message="missing",
            measure="load",
            details={"mark": "fetch"},
        )
        assert json.loads(payload.to_json()) == {
            "error_type": "not_found",
            "message": "missing",
            "measure": "load",
            "details": {"mark": "fetch"},
        }

    def test_frozen_immutable(self) -> None:
        payload = ErrorPayload(error_type="error", message="boom")
        with pytest.raises(FrozenInstanceError):
            payload.error_type = "changed"  # type: ignore[misc]


class TestBuildErrorPayload:
    """Exception → payload conversion.

    Technique: Specification-based Testing.
    """

    def test_not_found_payload(self) -> None:
        payload = build_error_payload(NotFoundError("fetch"), measure="load")
        assert payload.error_type == "not_found"
        assert payload.measure == "load"
        assert payload.details == {"mark": "fetch"}

    def test_invalid_argument_payload(self) -> None:
        payload = build_error_payload(InvalidArgumentError("negative", mark=-1))
        assert payload.error_type == "invalid_argument"
        assert payload.message == "negative"
        assert payload.details == {"mark": -1}

    def test_details_are_copied(self) -> None:
        error = InvalidArgumentError("bad", option="end")
        payload = build_error_payload(error)
        error.details["extra"] = True
        assert payload.details == {"option": "end"}

    def test_unknown_exception_falls_back_to_generic_type(self) -> None:
        payload = build_error_payload(RuntimeError("boom"))
        assert payload.error_type == "error"
        assert payload.message == "boom"
        assert payload.details == {}
