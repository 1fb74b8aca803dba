"""Command line for resolving a single measurement (Typer-based).

Marks are supplied as ``--mark NAME=MS`` pairs (repeatable, in
recording order) and become a read-only :class:`MarkTable`.  The
entry is printed as its JSON wire projection.

Examples::

    usertiming measure load --mark fetch=12.5 --mark render=40 \\
        --start fetch --end render
    usertiming measure boot fetch --now 100 --mark fetch=12.5
    usertiming measure since-origin --now 250

Mark references given to ``--start``/``--end`` that parse as numbers
are raw timestamps; anything else is a mark name.  Non-finite numbers
(``nan``, ``inf``) are usage errors.

Without ``--now`` the clock origin is the moment the command starts,
so ``--mark`` timestamps bear no relation to "now".  Open-ended
measurements (a bare START_MARK, ``--start`` alone, or no second
argument) should pin the current instant with ``--now``.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Annotated, get_args

import typer
from pydantic import ValidationError

from usertiming._clock import ClockPort, FixedClock, SystemClock
from usertiming._errors import MeasureError, build_error_payload
from usertiming._logging import configure_logging
from usertiming._marks import MarkTable
from usertiming._options import MarkReference
from usertiming._resolver import MeasurementResolver
from usertiming._settings import LoggingSettings, Settings

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_MEASURE_ERROR = 3

_VALID_LOG_LEVELS: tuple[str, ...] = get_args(
    LoggingSettings.model_fields["level"].annotation,
)

# ---------------------------------------------------------------------------
# Argument parsing helpers
# ---------------------------------------------------------------------------


def _require_finite(value: float | None, param_hint: str) -> None:
    if value is not None and not math.isfinite(value):
        raise typer.BadParameter(
            f"Expected a finite number of milliseconds, got '{value}'.",
            param_hint=param_hint,
        )


def _parse_reference(raw: str, param_hint: str) -> MarkReference:
    try:
        value = float(raw)
    except ValueError:
        return raw
    _require_finite(value, param_hint)
    return value


def _parse_mark(raw: str) -> tuple[str, float]:
    name, sep, value = raw.rpartition("=")
    if not sep or not name:
        raise typer.BadParameter(
            f"Expected NAME=MS, got '{raw}'.",
            param_hint="'--mark'",
        )
    try:
        start_time = float(value)
    except ValueError:
        raise typer.BadParameter(
            f"Mark timestamp must be a number, got '{value}'.",
            param_hint="'--mark'",
        ) from None
    _require_finite(start_time, "'--mark'")
    return name, start_time


def _parse_detail(raw: str) -> object:
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(
            f"Detail must be valid JSON: {exc.msg}.",
            param_hint="'--detail'",
        ) from exc


def _build_start_or_options(
    start_mark: str | None,
    *,
    start: str | None,
    end: str | None,
    duration: float | None,
    detail: str | None,
) -> object:
    if start is None and end is None and duration is None and detail is None:
        return start_mark
    if start_mark is not None:
        raise typer.BadParameter(
            "A positional START_MARK cannot be combined with "
            "--start/--end/--duration/--detail.",
            param_hint="'START_MARK'",
        )
    options: dict[str, object] = {}
    if start is not None:
        options["start"] = _parse_reference(start, "'--start'")
    if end is not None:
        options["end"] = _parse_reference(end, "'--end'")
    if duration is not None:
        _require_finite(duration, "'--duration'")
        options["duration"] = duration
    if detail is not None:
        options["detail"] = _parse_detail(detail)
    return options


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def build_cli() -> typer.Typer:
    """Construct the ``usertiming`` Typer application."""
    from usertiming import __version__

    cli = typer.Typer(
        help="Resolve User Timing measurements from marks, timestamps and durations.",
        no_args_is_help=True,
    )

    @cli.callback()
    def main(
        version_flag: Annotated[
            bool | None,
            typer.Option(
                "--version",
                is_eager=True,
                help="Show version and exit.",
            ),
        ] = None,
    ) -> None:
        if version_flag:
            typer.echo(f"usertiming v{__version__}")
            raise typer.Exit()

    @cli.command("measure")
    def measure(
        name: Annotated[str, typer.Argument(help="Name of the measurement.")],
        start_mark: Annotated[
            str | None,
            typer.Argument(help="Bare start mark name.", show_default=False),
        ] = None,
        start: Annotated[
            str | None,
            typer.Option("--start", help="Start mark name or timestamp (ms)."),
        ] = None,
        end: Annotated[
            str | None,
            typer.Option("--end", help="End mark name or timestamp (ms)."),
        ] = None,
        duration: Annotated[
            float | None,
            typer.Option("--duration", help="Elapsed milliseconds."),
        ] = None,
        detail: Annotated[
            str | None,
            typer.Option("--detail", help="Detail payload as JSON."),
        ] = None,
        end_mark: Annotated[
            str | None,
            typer.Option("--end-mark", help="End mark name for START_MARK."),
        ] = None,
        mark: Annotated[
            list[str] | None,
            typer.Option("--mark", help="Recorded mark as NAME=MS (repeatable)."),
        ] = None,
        now: Annotated[
            float | None,
            typer.Option(
                "--now",
                help=(
                    "Pin the current instant (ms). Open-ended measurements "
                    "need this to relate to --mark timestamps."
                ),
            ),
        ] = None,
        log_level: Annotated[
            str | None,
            typer.Option("--log-level", help="Override log level."),
        ] = None,
        env_file: Annotated[
            str,
            typer.Option("--env-file", help="Path to .env file."),
        ] = ".env",
    ) -> None:
        """Resolve one measurement and print it as JSON."""
        if log_level is not None and log_level.upper() not in _VALID_LOG_LEVELS:
            raise typer.BadParameter(
                f"Invalid log level '{log_level}'. "
                f"Choose from: {', '.join(_VALID_LOG_LEVELS)}",
                param_hint="'--log-level'",
            )
        _require_finite(now, "'--now'")

        try:
            settings = Settings(_env_file=env_file)  # type: ignore[call-arg]
        except ValidationError as exc:
            typer.echo(f"Configuration error: {exc}", err=True)
            raise typer.Exit(EXIT_CONFIG_ERROR) from exc

        if log_level is not None:
            settings.logging = settings.logging.model_copy(
                update={"level": log_level.upper()},
            )
        configure_logging(settings.logging)

        marks = MarkTable.from_pairs(_parse_mark(raw) for raw in mark or [])
        start_or_options = _build_start_or_options(
            start_mark,
            start=start,
            end=end,
            duration=duration,
            detail=detail,
        )
        clock: ClockPort = (
            FixedClock(now) if now is not None else SystemClock(settings.clock.source)
        )
        logger.debug("Resolving %r against %d mark(s)", name, len(marks))

        resolver = MeasurementResolver(marks=marks, clock=clock)
        try:
            entry = resolver.measure(name, start_or_options, end_mark)
        except MeasureError as exc:
            typer.echo(build_error_payload(exc, measure=name).to_json(), err=True)
            raise typer.Exit(EXIT_MEASURE_ERROR) from exc

        typer.echo(entry.to_json())

    return cli


def main() -> None:
    """Console-script entry point."""
    build_cli()()
