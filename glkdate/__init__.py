from .api import (
    GlkDateTime,
    current_simple_time,
    current_time,
    date_to_simple_time_local,
    date_to_simple_time_utc,
    date_to_time_local,
    date_to_time_utc,
    get_default,
    now,
    now_simplified,
    set_default,
    simple_time_to_date,
    simple_time_to_date_local,
    simple_time_to_date_utc,
    time_to_date_local,
    time_to_date_utc,
    to_absolute_time,
    to_date,
    to_simple_time,
)
from .codec import NATIVE_TIME_BITS, decode, encode
from .convert import normalize_microseconds
from .errors import DateTimeWarning, HostClockFailure, InvalidFactor
from .scaling import expand, simplify
from .util import DAY, HOUR, MINUTE
from .values import AbsoluteTime, CalendarDate, Zone

__all__ = [
    "AbsoluteTime",
    "CalendarDate",
    "Zone",
    "GlkDateTime",
    "get_default",
    "set_default",
    "now",
    "now_simplified",
    "to_date",
    "simple_time_to_date",
    "to_absolute_time",
    "to_simple_time",
    "current_time",
    "current_simple_time",
    "time_to_date_utc",
    "time_to_date_local",
    "simple_time_to_date_utc",
    "simple_time_to_date_local",
    "date_to_time_utc",
    "date_to_time_local",
    "date_to_simple_time_utc",
    "date_to_simple_time_local",
    "encode",
    "decode",
    "NATIVE_TIME_BITS",
    "normalize_microseconds",
    "simplify",
    "expand",
    "DateTimeWarning",
    "HostClockFailure",
    "InvalidFactor",
    "MINUTE",
    "HOUR",
    "DAY",
]
