"""Split and join absolute timestamps as two 32-bit words.

Internally a timestamp is a plain Python integer of seconds since the epoch.
The two-word form only exists at the ABI boundary, where it must be exact
two's-complement 64-bit arithmetic.

Hosts whose native time is 32 bits wide can't carry the high word. On such a
host ``encode`` sign-extends into the high word and ``decode`` ignores it,
so instants past 2038 wrap. That precision loss is the documented contract
and is kept as is.
"""

import logging
import os

from glkdate.util import WORD_MASK, to_signed32, to_unsigned32
from glkdate.values import AbsoluteTime

logger = logging.getLogger(__name__)

TIME_BITS_ENV = "GLKDATE_TIME_BITS"
_SUPPORTED_BITS = (32, 64)


def _resolve_time_bits() -> int:
    raw = os.environ.get(TIME_BITS_ENV)
    if raw is None:
        return 64
    try:
        bits = int(raw)
    except ValueError:
        bits = 0
    if bits not in _SUPPORTED_BITS:
        logger.warning(
            "Ignoring %s=%r (expected 32 or 64); using 64-bit time",
            TIME_BITS_ENV,
            raw,
        )
        return 64
    return bits


# Resolved once per process; never re-detected per call.
NATIVE_TIME_BITS: int = _resolve_time_bits()


def encode(
    epoch_seconds: int, microseconds: int = 0, *, bits: int = NATIVE_TIME_BITS
) -> AbsoluteTime:
    """Split seconds since the epoch into an AbsoluteTime.

    Args:
        epoch_seconds: Signed seconds since 1970-01-01T00:00:00Z
        microseconds: Fractional part, copied through unchanged
        bits: Native time width of the host (32 or 64)
    """
    if bits == 32:
        return AbsoluteTime(
            seconds_high=0 if epoch_seconds >= 0 else -1,
            seconds_low=to_unsigned32(epoch_seconds),
            microseconds=microseconds,
        )
    return AbsoluteTime(
        seconds_high=to_signed32((epoch_seconds >> 32) & WORD_MASK),
        seconds_low=epoch_seconds & WORD_MASK,
        microseconds=microseconds,
    )


def decode(time: AbsoluteTime, *, bits: int = NATIVE_TIME_BITS) -> int:
    """Join an AbsoluteTime back into signed seconds since the epoch."""
    if bits == 32:
        return to_signed32(time.seconds_low)
    return time.seconds_low + (time.seconds_high << 32)
