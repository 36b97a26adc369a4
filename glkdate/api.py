"""Date and time entry points for embedding interpreters.

Every call returns a value. Bad input from the game (a zero scaling factor)
or a failed clock read is reported through the ``on_warning`` channel and
replaced by a deterministic default, because an interpreter must not crash
on what a story file hands it.

Calls are not thread-safe as a whole: the embedding runtime is expected to
serialize them, as a single-threaded interpreter loop does.

Example:
    >>> from glkdate import GlkDateTime, CalendarDate
    >>> glk = GlkDateTime(tz="US/Pacific")
    >>> stamp = glk.to_absolute_time(
    ...     CalendarDate(year=2025, month=1, day=6, hour=9), "local"
    ... )
    >>> glk.to_date(stamp, "utc").hour
    17
"""

from collections.abc import Callable
from time import time_ns

from glkdate.codec import NATIVE_TIME_BITS, encode
from glkdate.convert import from_calendar, from_calendar_seconds, to_calendar
from glkdate.errors import (
    DateTimeWarning,
    HostClockFailure,
    InvalidFactor,
    WarningHandler,
    log_warning,
)
from glkdate.host import HostCalendar, UtcCalendar, ZoneCalendar
from glkdate.scaling import expand, simplify
from glkdate.util import to_signed32
from glkdate.values import AbsoluteTime, CalendarDate, Zone

_NANOS_PER_SECOND = 1_000_000_000
_NANOS_PER_MICROSECOND = 1_000


class GlkDateTime:
    """The date/time API bound to one local zone and one diagnostic channel."""

    def __init__(
        self,
        tz: str | None = None,
        *,
        clock: Callable[[], int] = time_ns,
        time_bits: int = NATIVE_TIME_BITS,
        on_warning: WarningHandler = log_warning,
    ):
        """
        Initialize the API.

        Args:
            tz: IANA timezone name used for "local" conversions, or None
                for the host's local zone
            clock: Wall clock returning integer nanoseconds since the epoch
            time_bits: Native time width (32 or 64); defaults to the
                process-wide setting
            on_warning: Diagnostic channel receiving recoverable failures
        """
        if time_bits not in (32, 64):
            raise ValueError(f"time_bits must be 32 or 64, got {time_bits}")
        self.utc: HostCalendar = UtcCalendar()
        self.local: HostCalendar = ZoneCalendar(tz)
        self.time_bits: int = time_bits
        self._clock: Callable[[], int] = clock
        self._on_warning: WarningHandler = on_warning

    def _calendar(self, zone: Zone) -> HostCalendar:
        if zone == "utc":
            return self.utc
        if zone == "local":
            return self.local
        raise ValueError(f"Invalid zone '{zone}'. Valid zones: utc, local")

    def _warn(self, warning: DateTimeWarning) -> None:
        self._on_warning(warning)

    def _native(self, epoch: int) -> int:
        # A 32-bit time_t wraps where a 64-bit one doesn't
        return to_signed32(epoch) if self.time_bits == 32 else epoch

    def _read_clock(self, caller: str) -> tuple[int, int] | None:
        """Return (seconds, microseconds), or None if the clock failed."""
        try:
            nanos = self._clock()
        except OSError as e:
            self._warn(HostClockFailure(f"{caller}: reading the clock failed: {e}"))
            return None
        seconds, remainder = divmod(nanos, _NANOS_PER_SECOND)
        return seconds, remainder // _NANOS_PER_MICROSECOND

    def _check_factor(self, caller: str, factor: int) -> bool:
        if factor > 0:
            return True
        self._warn(InvalidFactor(f"{caller}: factor must be positive, got {factor}"))
        return False

    def now(self) -> AbsoluteTime:
        """Current wall-clock time; epoch zero if the clock can't be read."""
        reading = self._read_clock("now")
        if reading is None:
            return encode(0, 0, bits=self.time_bits)
        seconds, microseconds = reading
        return encode(self._native(seconds), microseconds, bits=self.time_bits)

    def now_simplified(self, factor: int) -> int:
        """Current time in ``factor``-second units; 0 on any failure."""
        if not self._check_factor("now_simplified", factor):
            return 0
        reading = self._read_clock("now_simplified")
        if reading is None:
            return 0
        return simplify(self._native(reading[0]), factor)

    def to_date(self, time: AbsoluteTime, zone: Zone) -> CalendarDate:
        return to_calendar(time, self._calendar(zone), bits=self.time_bits)

    def simple_time_to_date(self, simple: int, factor: int, zone: Zone) -> CalendarDate:
        """Calendar date of a simplified time.

        Simplified time has no sub-unit precision, so ``microsecond`` is 0.
        """
        epoch = self._native(expand(simple, factor))
        return self._calendar(zone).breakdown(epoch)

    def to_absolute_time(self, date: CalendarDate, zone: Zone) -> AbsoluteTime:
        """Normalize a calendar date and convert it to an absolute timestamp."""
        return from_calendar(date, self._calendar(zone), bits=self.time_bits)

    def to_simple_time(self, date: CalendarDate, factor: int, zone: Zone) -> int:
        """Normalize a calendar date and scale it by ``factor``; 0 on a bad factor."""
        if not self._check_factor("to_simple_time", factor):
            return 0
        epoch, _ = from_calendar_seconds(date, self._calendar(zone))
        return simplify(self._native(epoch), factor)


_default = GlkDateTime()


def set_default(api: GlkDateTime) -> GlkDateTime:
    """Replace the instance behind the module-level functions.

    Returns:
        The previous default, so a caller can restore it
    """
    global _default
    previous, _default = _default, api
    return previous


def get_default() -> GlkDateTime:
    return _default


def now() -> AbsoluteTime:
    return _default.now()


def now_simplified(factor: int) -> int:
    return _default.now_simplified(factor)


def to_date(time: AbsoluteTime, zone: Zone) -> CalendarDate:
    return _default.to_date(time, zone)


def simple_time_to_date(simple: int, factor: int, zone: Zone) -> CalendarDate:
    return _default.simple_time_to_date(simple, factor, zone)


def to_absolute_time(date: CalendarDate, zone: Zone) -> AbsoluteTime:
    return _default.to_absolute_time(date, zone)


def to_simple_time(date: CalendarDate, factor: int, zone: Zone) -> int:
    return _default.to_simple_time(date, factor, zone)


# Per-zone names matching the Glk date/time calls


def current_time() -> AbsoluteTime:
    return _default.now()


def current_simple_time(factor: int) -> int:
    return _default.now_simplified(factor)


def time_to_date_utc(time: AbsoluteTime) -> CalendarDate:
    return _default.to_date(time, "utc")


def time_to_date_local(time: AbsoluteTime) -> CalendarDate:
    return _default.to_date(time, "local")


def simple_time_to_date_utc(simple: int, factor: int) -> CalendarDate:
    return _default.simple_time_to_date(simple, factor, "utc")


def simple_time_to_date_local(simple: int, factor: int) -> CalendarDate:
    return _default.simple_time_to_date(simple, factor, "local")


def date_to_time_utc(date: CalendarDate) -> AbsoluteTime:
    return _default.to_absolute_time(date, "utc")


def date_to_time_local(date: CalendarDate) -> AbsoluteTime:
    return _default.to_absolute_time(date, "local")


def date_to_simple_time_utc(date: CalendarDate, factor: int) -> int:
    return _default.to_simple_time(date, factor, "utc")


def date_to_simple_time_local(date: CalendarDate, factor: int) -> int:
    return _default.to_simple_time(date, factor, "local")
