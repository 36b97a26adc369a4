"""Adapter over the host calendar facilities.

Everything zone-dependent goes through a HostCalendar, which presents two
pure functions: ``breakdown(epoch) -> fields`` and ``construct(fields) -> epoch``.
Zone rules come from ``zoneinfo`` for named zones and from
``dateutil.tz.tzlocal`` for the host's own zone. ``tzlocal`` reads the
process-wide time-zone state of the ``time`` module, so every call that
touches a tzinfo is serialized behind one lock.

``datetime`` only spans years 1 to 9999. Instants outside that window are
shifted by whole 400-year Gregorian cycles, converted, and shifted back, so
any 64-bit timestamp converts without raising.
"""

import logging
import threading
from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo

from dateutil.tz import resolve_imaginary, tzlocal
from typing_extensions import override

from glkdate.util import CYCLE, DAY, DAYS_PER_CYCLE, HOUR, MINUTE, YEARS_PER_CYCLE
from glkdate.values import CalendarDate

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_EPOCH_NAIVE = datetime(1970, 1, 1)
_EPOCH_ORDINAL = _EPOCH.toordinal()
_ONE_SECOND = timedelta(seconds=1)

# Any zone offset applied to an instant in this window stays inside datetime.
_SAFE_MIN = (datetime(2, 1, 1, tzinfo=timezone.utc) - _EPOCH) // _ONE_SECOND
_SAFE_MAX = (datetime(9998, 1, 1, tzinfo=timezone.utc) - _EPOCH) // _ONE_SECOND

_lock = threading.Lock()


def _fold_cycles(epoch: int) -> tuple[int, int]:
    """Shift ``epoch`` into datetime's range; return (shifted, cycles removed)."""
    if _SAFE_MIN <= epoch < _SAFE_MAX:
        return epoch, 0
    cycles = epoch // CYCLE
    logger.debug("Folding %d by %d Gregorian cycles", epoch, cycles)
    return epoch - cycles * CYCLE, cycles


def civil_seconds(
    year: int, month: int, day: int, hour: int, minute: int, second: int
) -> int:
    """Seconds since the epoch of a wall-clock reading taken as UTC.

    Follows ``timegm``: month overflow carries into the year, and day, hour,
    minute and second overflow is absorbed linearly (``second=65`` is one
    minute and five seconds later, ``day=0`` is the last day of the previous
    month).
    """
    carry, month_index = divmod(month - 1, 12)
    cycles, year_index = divmod(year + carry - 1, YEARS_PER_CYCLE)
    days = (
        date(year_index + 1, month_index + 1, 1).toordinal()
        - _EPOCH_ORDINAL
        + cycles * DAYS_PER_CYCLE
        + day
        - 1
    )
    return days * DAY + hour * HOUR + minute * MINUTE + second


class HostCalendar(ABC):
    """Calendar breakdown and epoch construction for one time zone."""

    zone: tzinfo

    def breakdown(self, epoch: int) -> CalendarDate:
        """Break integer epoch seconds down into calendar fields.

        The result carries no sub-second part; ``microsecond`` is 0.
        """
        shifted, cycles = _fold_cycles(epoch)
        with _lock:
            moment = (_EPOCH + timedelta(seconds=shifted)).astimezone(self.zone)
        return CalendarDate(
            year=moment.year + cycles * YEARS_PER_CYCLE,
            month=moment.month,
            day=moment.day,
            # isoweekday() is Monday=1..Sunday=7; the public convention is Sunday=0
            weekday=moment.isoweekday() % 7,
            hour=moment.hour,
            minute=moment.minute,
            second=moment.second,
        )

    @abstractmethod
    def construct(self, fields: CalendarDate) -> int:
        """Turn calendar fields into integer epoch seconds.

        ``weekday`` and ``microsecond`` are ignored. Out-of-range minute,
        hour, day and month values are absorbed.
        """
        pass


class UtcCalendar(HostCalendar):
    def __init__(self) -> None:
        self.zone: tzinfo = timezone.utc

    @override
    def construct(self, fields: CalendarDate) -> int:
        # DST is never in effect
        return civil_seconds(
            fields.year,
            fields.month,
            fields.day,
            fields.hour,
            fields.minute,
            fields.second,
        )


class ZoneCalendar(HostCalendar):
    """Calendar for a named IANA zone, or the host's local zone."""

    def __init__(self, tz: str | None = None):
        """
        Initialize a zone calendar.

        Args:
            tz: IANA timezone name (e.g., "US/Pacific"), or None for the
                host's local zone
        """
        self.zone: tzinfo = tzlocal() if tz is None else ZoneInfo(tz)

    @override
    def construct(self, fields: CalendarDate) -> int:
        """Resolve a local wall-clock reading with DST left unspecified.

        Readings inside a DST transition resolve with ``fold=0``: a repeated
        hour picks its first (earlier) occurrence, and a skipped hour is read
        with the offset in force before the transition. The gap is resolved
        explicitly because ``tzlocal`` ignores ``fold`` inside one.
        """
        wall = civil_seconds(
            fields.year,
            fields.month,
            fields.day,
            fields.hour,
            fields.minute,
            fields.second,
        )
        shifted, _ = _fold_cycles(wall)
        naive = _EPOCH_NAIVE + timedelta(seconds=shifted)
        with _lock:
            # A skipped reading moves forward by the gap length, so subtracting
            # the later offset equals subtracting the earlier one from the original
            local = resolve_imaginary(naive.replace(tzinfo=self.zone, fold=0))
            offset = local.utcoffset()
        if offset is None:
            return wall
        moved = (local.replace(tzinfo=None) - naive) // _ONE_SECOND
        return wall + moved - offset // _ONE_SECOND
