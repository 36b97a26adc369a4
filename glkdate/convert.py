"""Conversion between absolute timestamps and calendar dates.

Calendar arithmetic is delegated to a HostCalendar. The one carry this
module owns is the microsecond one: host calendars have no sub-second
field, so microseconds are folded into seconds before the host sees them.
"""

from glkdate.codec import NATIVE_TIME_BITS, decode, encode
from glkdate.host import HostCalendar
from glkdate.util import MICROSECONDS_PER_SECOND, to_signed32
from glkdate.values import AbsoluteTime, CalendarDate


def normalize_microseconds(second: int, microsecond: int) -> tuple[int, int]:
    """Fold microsecond overflow or underflow into the seconds field.

    Returns:
        (second, microsecond) with microsecond in [0, 999_999]

    Example:
        >>> normalize_microseconds(0, 1_500_000)
        (1, 500000)
        >>> normalize_microseconds(10, -1)
        (9, 999999)
    """
    if microsecond >= MICROSECONDS_PER_SECOND:
        carry = microsecond // MICROSECONDS_PER_SECOND
        second += carry
        microsecond -= carry * MICROSECONDS_PER_SECOND
    elif microsecond < 0:
        # Work on the nonnegative mirror so no negative operand is divided
        mirror = -1 - microsecond
        second -= 1 + mirror // MICROSECONDS_PER_SECOND
        microsecond = MICROSECONDS_PER_SECOND - 1 - mirror % MICROSECONDS_PER_SECOND
    return second, microsecond


def to_calendar(
    time: AbsoluteTime, calendar: HostCalendar, *, bits: int = NATIVE_TIME_BITS
) -> CalendarDate:
    """Break an absolute timestamp down into a calendar date."""
    fields = calendar.breakdown(decode(time, bits=bits))
    return fields.replace(microsecond=time.microseconds)


def from_calendar_seconds(date: CalendarDate, calendar: HostCalendar) -> tuple[int, int]:
    """Build integer epoch seconds from a possibly unnormalized date.

    Returns:
        (epoch seconds, normalized microsecond remainder)
    """
    second, microsecond = normalize_microseconds(date.second, date.microsecond)
    epoch = calendar.construct(date.replace(second=second, microsecond=0))
    return epoch, microsecond


def from_calendar(
    date: CalendarDate, calendar: HostCalendar, *, bits: int = NATIVE_TIME_BITS
) -> AbsoluteTime:
    """Build an absolute timestamp from a possibly unnormalized date.

    The input ``weekday`` is ignored. On a 32-bit host the epoch wraps
    the way a 32-bit ``time_t`` would before it is split into words.
    """
    epoch, microsecond = from_calendar_seconds(date, calendar)
    if bits == 32:
        epoch = to_signed32(epoch)
    return encode(epoch, microsecond, bits=bits)
