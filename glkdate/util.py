"""Utility constants and helpers for glkdate.

Time unit constants represent durations in seconds.
"""

# Time unit constants (all values in seconds)
MINUTE = 60
HOUR = 3600
DAY = 86400

MICROSECONDS_PER_SECOND = 1_000_000

# The Gregorian calendar repeats every 400 years, and 146097 days is a whole
# number of weeks, so shifting by a cycle preserves month, day and weekday.
DAYS_PER_CYCLE = 146097
YEARS_PER_CYCLE = 400
CYCLE = DAYS_PER_CYCLE * DAY

WORD_MASK = 0xFFFFFFFF


def to_signed32(value: int) -> int:
    """Truncate to 32 bits and reinterpret as two's-complement."""
    value &= WORD_MASK
    return value - 0x100000000 if value & 0x80000000 else value


def to_unsigned32(value: int) -> int:
    """Truncate to 32 bits as an unsigned word."""
    return value & WORD_MASK
