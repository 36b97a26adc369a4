"""Recoverable failures reported by the date/time API.

Nothing in the public API raises these. A failing call builds one, hands it
to the diagnostic channel of the embedding runtime and returns a
deterministic default value instead. Interpreters must keep running on
malformed input, so a warning is the strongest signal the library gives.

Local-time construction inside a DST transition is ambiguous, but the result
is resolved deterministically and never reported.
"""

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class DateTimeWarning(UserWarning):
    """Base class for recoverable date/time failures."""


class HostClockFailure(DateTimeWarning):
    """The wall clock could not be read; epoch zero was substituted."""


class InvalidFactor(DateTimeWarning):
    """A scaling operation got a non-positive factor; zero was returned."""


WarningHandler = Callable[[DateTimeWarning], None]


def log_warning(warning: DateTimeWarning) -> None:
    """Default diagnostic channel: log the warning and carry on."""
    logger.warning("%s: %s", type(warning).__name__, warning)
