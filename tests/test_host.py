"""Tests for the host calendar adapter."""

import time
from collections.abc import Iterator
from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pytest
from dateutil.tz import tzlocal

from glkdate.host import UtcCalendar, ZoneCalendar, civil_seconds
from glkdate.util import DAY, HOUR
from glkdate.values import CalendarDate

PACIFIC = "US/Pacific"


def utc_ts(*args: int) -> int:
    return int(datetime(*args, tzinfo=timezone.utc).timestamp())


def test_civil_seconds_matches_datetime():
    assert civil_seconds(2025, 1, 6, 9, 30, 0) == utc_ts(2025, 1, 6, 9, 30)
    assert civil_seconds(1970, 1, 1, 0, 0, 0) == 0
    assert civil_seconds(1969, 12, 31, 23, 59, 59) == -1


def test_civil_seconds_month_underflow():
    """Test that month 0 is December of the previous year."""
    assert civil_seconds(2025, 0, 1, 0, 0, 0) == utc_ts(2024, 12, 1)
    assert civil_seconds(2025, -11, 1, 0, 0, 0) == utc_ts(2024, 1, 1)
    assert civil_seconds(2025, 25, 1, 0, 0, 0) == utc_ts(2027, 1, 1)


def test_utc_breakdown_sunday_is_zero():
    date = UtcCalendar().breakdown(utc_ts(2025, 1, 5, 18))

    assert date == CalendarDate(year=2025, month=1, day=5, weekday=0, hour=18)


def test_zone_breakdown_applies_offset():
    """Test that a named zone shifts the wall clock by its offset."""
    # Jan 6, 2025 00:00 UTC is Jan 5, 2025 16:00 Pacific (Sunday)
    date = ZoneCalendar(PACIFIC).breakdown(utc_ts(2025, 1, 6))

    assert date == CalendarDate(year=2025, month=1, day=5, weekday=0, hour=16)


def test_zone_construct_inverts_breakdown():
    calendar = ZoneCalendar(PACIFIC)
    epoch = utc_ts(2025, 7, 4, 19, 45, 12)

    assert calendar.construct(calendar.breakdown(epoch)) == epoch


@pytest.mark.parametrize(
    "epoch",
    [
        utc_ts(2025, 1, 15, 12),  # PST
        utc_ts(2025, 7, 1, 12),  # PDT
        utc_ts(1985, 6, 1, 3),
        -DAY * 365,
    ],
)
def test_utc_and_local_differ_by_zone_offset(epoch: int):
    """Test that UTC and local wall clocks differ by the zone's offset."""
    utc = UtcCalendar().breakdown(epoch)
    local = ZoneCalendar(PACIFIC).breakdown(epoch)

    offset = datetime.fromtimestamp(epoch, tz=ZoneInfo(PACIFIC)).utcoffset()
    assert offset is not None

    utc_wall = civil_seconds(utc.year, utc.month, utc.day, utc.hour, utc.minute, utc.second)
    local_wall = civil_seconds(
        local.year, local.month, local.day, local.hour, local.minute, local.second
    )
    assert local_wall - utc_wall == int(offset.total_seconds())


def test_local_gap_uses_offset_before_transition():
    """Test a wall-clock time skipped by the spring-forward transition.

    2:30am on Mar 9, 2025 never happens in Pacific time. It is read with the
    standard-time offset, landing on 3:30am daylight time.
    """
    calendar = ZoneCalendar(PACIFIC)

    epoch = calendar.construct(CalendarDate(year=2025, month=3, day=9, hour=2, minute=30))

    assert epoch == utc_ts(2025, 3, 9, 10, 30)
    assert calendar.breakdown(epoch).hour == 3


def test_local_overlap_picks_first_occurrence():
    """Test a wall-clock time repeated by the fall-back transition.

    1:30am on Nov 2, 2025 happens twice in Pacific time; the earlier,
    daylight-time occurrence wins.
    """
    calendar = ZoneCalendar(PACIFIC)

    epoch = calendar.construct(CalendarDate(year=2025, month=11, day=2, hour=1, minute=30))

    assert epoch == utc_ts(2025, 11, 2, 8, 30)
    assert epoch + HOUR == utc_ts(2025, 11, 2, 9, 30)
    assert calendar.breakdown(epoch + HOUR).hour == 1


def test_zone_calendar_defaults_to_host_zone():
    assert isinstance(ZoneCalendar().zone, tzlocal)


def test_zone_calendar_rejects_unknown_zone():
    with pytest.raises(ZoneInfoNotFoundError):
        ZoneCalendar("Not/A_Zone")


def test_breakdown_far_past_and_future():
    """Test instants outside datetime's range in a named zone."""
    calendar = ZoneCalendar(PACIFIC)

    for year in (-5000, 12_000):
        fields = CalendarDate(year=year, month=6, day=15, hour=12)
        assert calendar.breakdown(calendar.construct(fields)).replace(weekday=0) == fields


@pytest.fixture
def pacific_host(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Pin the process-wide local zone to Pacific time."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is unavailable on this platform")
    monkeypatch.setenv("TZ", "America/Los_Angeles")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


def test_host_zone_gap_uses_offset_before_transition(pacific_host: None):
    """Test that the host's own zone reads a skipped hour like a named zone."""
    calendar = ZoneCalendar()
    skipped = CalendarDate(year=2025, month=3, day=9, hour=2, minute=30)

    epoch = calendar.construct(skipped)

    assert epoch == utc_ts(2025, 3, 9, 10, 30)
    assert epoch == ZoneCalendar(PACIFIC).construct(skipped)
    assert calendar.breakdown(epoch).hour == 3


def test_host_zone_overlap_picks_first_occurrence(pacific_host: None):
    calendar = ZoneCalendar()
    repeated = CalendarDate(year=2025, month=11, day=2, hour=1, minute=30)

    epoch = calendar.construct(repeated)

    assert epoch == utc_ts(2025, 11, 2, 8, 30)
    assert epoch == ZoneCalendar(PACIFIC).construct(repeated)


def test_host_zone_outside_transitions(pacific_host: None):
    calendar = ZoneCalendar()
    fields = CalendarDate(year=2025, month=7, day=4, weekday=5, hour=12)

    epoch = calendar.construct(fields)

    assert epoch == utc_ts(2025, 7, 4, 19)
    assert calendar.breakdown(epoch) == fields
