"""Public test-support utilities for usertiming.

Provided symbols:

- :class:`FakeClock` — deterministic, settable clock.
- :func:`make_marks` — build a :class:`~usertiming.MarkTable` from
  keyword or pair arguments.
- :func:`make_settings` — ``Settings`` isolated from ``.env`` files and
  environment variables.
"""

from usertiming.testing._clock import FakeClock
from usertiming.testing._marks import make_marks
from usertiming.testing._settings import make_settings

__all__ = [
    "FakeClock",
    "make_marks",
    "make_settings",
]
