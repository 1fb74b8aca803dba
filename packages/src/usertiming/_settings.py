"""Library configuration via pydantic-settings.

Configuration is loaded from ``USERTIMING_``-prefixed environment
variables and/or a ``.env`` file.  Nested models use ``__`` as the
delimiter, e.g. ``USERTIMING_LOGGING__LEVEL=DEBUG``.

Two concerns are configurable:

* **Clock** — which monotonic ``time`` function backs "now".
* **Logging** — level, format, optional file sink, rotation.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# -------------------------------------------------------------------
# Sub-models (BaseModel, NOT BaseSettings — nested via composition)
# -------------------------------------------------------------------


class ClockSettings(BaseModel):
    """Clock source selection.

    Environment variables::

        USERTIMING_CLOCK__SOURCE=monotonic
    """

    source: Literal["perf_counter", "monotonic"] = Field(
        default="perf_counter",
        description=(
            "Monotonic time function backing SystemClock. "
            "'perf_counter' has the highest available resolution."
        ),
    )


class LoggingSettings(BaseModel):
    """Logging configuration.

    When ``file`` is set, logs are also written to a rotating file.
    ``format`` selects structured JSON lines (default) or plain text.
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Root log level.",
    )
    format: Literal["json", "text"] = Field(
        default="json",
        description="Log output format: 'json' lines or human-readable 'text'.",
    )
    file: str | None = Field(
        default=None,
        description="Optional log file path. ``None`` means stderr only.",
    )
    max_file_size_mb: Annotated[int, Field(ge=1)] = Field(
        default=10,
        description="Maximum log file size in megabytes before rotation.",
    )
    backup_count: Annotated[int, Field(ge=0)] = Field(
        default=3,
        description="Number of rotated log files to keep.",
    )


# -------------------------------------------------------------------
# Root settings
# -------------------------------------------------------------------


class Settings(BaseSettings):
    """Root settings for usertiming.

    Example ``.env``::

        USERTIMING_CLOCK__SOURCE=monotonic
        USERTIMING_LOGGING__LEVEL=DEBUG
        USERTIMING_LOGGING__FORMAT=text
    """

    model_config = SettingsConfigDict(
        env_prefix="USERTIMING_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    clock: ClockSettings = Field(
        default_factory=ClockSettings,
        description="Clock source settings.",
    )
    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration.",
    )
