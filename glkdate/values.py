import struct
from dataclasses import dataclass, replace
from typing import Any, Literal, TypeAlias

from glkdate.util import WORD_MASK, to_signed32, to_unsigned32

Zone: TypeAlias = Literal["utc", "local"]

# Glulx lays a glktimeval_t out as three big-endian words.
_TIMEVAL_LAYOUT = struct.Struct(">iIi")

_INT32_MIN = -0x80000000
_INT32_MAX = 0x7FFFFFFF


@dataclass(frozen=True, kw_only=True)
class AbsoluteTime:
    """Seconds since the epoch split into two 32-bit words, plus microseconds.

    The word split is an ABI: other subsystems persist ``seconds_high`` and
    ``seconds_low`` directly, so both must hold exact 32-bit values.
    """

    seconds_high: int
    seconds_low: int
    microseconds: int = 0

    def __post_init__(self) -> None:
        if not (_INT32_MIN <= self.seconds_high <= _INT32_MAX):
            raise ValueError(
                f"seconds_high must be a signed 32-bit value, got {self.seconds_high}"
            )
        if not (0 <= self.seconds_low <= WORD_MASK):
            raise ValueError(
                f"seconds_low must be an unsigned 32-bit value, got {self.seconds_low}"
            )

    def __str__(self) -> str:
        return (
            f"AbsoluteTime(high={self.seconds_high}, low={self.seconds_low}, "
            f"{self.microseconds}µs)"
        )

    def to_words(self) -> tuple[int, int, int]:
        """Return (high, low, microseconds) as unsigned 32-bit words."""
        return (
            to_unsigned32(self.seconds_high),
            self.seconds_low,
            to_unsigned32(self.microseconds),
        )

    @classmethod
    def from_words(cls, high: int, low: int, microseconds: int) -> "AbsoluteTime":
        """Build from three raw 32-bit words, as read back from interpreter memory."""
        return cls(
            seconds_high=to_signed32(high),
            seconds_low=to_unsigned32(low),
            microseconds=to_signed32(microseconds),
        )

    def pack(self) -> bytes:
        """Serialize to the 12-byte big-endian glktimeval layout."""
        return _TIMEVAL_LAYOUT.pack(
            self.seconds_high, self.seconds_low, to_signed32(self.microseconds)
        )

    @classmethod
    def unpack(cls, data: bytes) -> "AbsoluteTime":
        """Parse the 12-byte big-endian glktimeval layout.

        Raises:
            struct.error: If ``data`` is not exactly 12 bytes
        """
        high, low, micro = _TIMEVAL_LAYOUT.unpack(data)
        return cls(seconds_high=high, seconds_low=low, microseconds=micro)


@dataclass(frozen=True, kw_only=True)
class CalendarDate:
    """Broken-down calendar date.

    When produced by a conversion every field is normalized (``month`` 1-12,
    ``weekday`` 0=Sunday through 6=Saturday). When used as a construction
    source the fields may be out of range and are treated as offsets;
    ``weekday`` is ignored and recomputed.
    """

    year: int
    month: int
    day: int
    weekday: int = 0
    hour: int = 0
    minute: int = 0
    second: int = 0
    microsecond: int = 0

    def replace(self, **changes: Any) -> "CalendarDate":
        return replace(self, **changes)
