"""Scale absolute timestamps to and from a single 32-bit integer.

A simplified time counts ``factor``-second units since the epoch. Division
rounds toward negative infinity, so a factor of ``DAY`` gives calendar day
boundaries before the epoch as well as after it.
"""

from glkdate.util import to_signed32


def simplify(epoch_seconds: int, factor: int) -> int:
    """Divide epoch seconds by ``factor``, rounding toward negative infinity.

    The result is truncated to a signed 32-bit integer.

    Raises:
        ValueError: If factor is not positive

    Example:
        >>> simplify(-1, 86400)
        -1
        >>> simplify(86399, 86400)
        0
    """
    if factor <= 0:
        raise ValueError(f"factor must be positive, got {factor}")
    if epoch_seconds >= 0:
        return to_signed32(epoch_seconds // factor)
    return to_signed32(-1 - (-1 - epoch_seconds) // factor)


def expand(simple: int, factor: int) -> int:
    """Multiply a simplified time back out to epoch seconds.

    Lossy: the sub-factor remainder dropped by ``simplify`` is gone.
    """
    return simple * factor
