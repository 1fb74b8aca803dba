"""Pytest configuration and shared fixtures."""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

# The usertiming testing plugin is registered via a ``pytest11`` entry
# point (pyproject.toml) for external consumers.  In our own test
# suite we disable it (``-p no:usertiming``) and load explicitly here
# instead, so the usertiming import chain is measured by pytest-cov.
pytest_plugins = ["usertiming.testing._plugin"]


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (exercise the installed CLI)"
    )


@pytest.fixture
def _restore_root_logger() -> Iterator[None]:
    """Save and restore root logger handlers and level.

    Ensures tests that call ``configure_logging()`` don't leak
    state across subsequent tests.
    """
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    for h in root.handlers:
        if h not in original_handlers:
            h.close()
    root.handlers = original_handlers
    root.setLevel(original_level)


@pytest.fixture
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty directory with no ``USERTIMING_*`` variables."""
    import os

    for key in list(os.environ):
        if key.startswith("USERTIMING_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
