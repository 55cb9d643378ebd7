"""Conversion between SRT timestamps and millisecond offsets."""

import re

from pysubs2.time import ms_to_times, times_to_ms

# Hours take two or more digits so long-form media still round-trips
TIMESTAMP_PATTERN = re.compile(r"([0-9]{2,}):([0-9]{2}):([0-9]{2}),([0-9]{3})")


def parse_timestamp(value: str) -> int:
    """Convert an ``HH:MM:SS,mmm`` timestamp to milliseconds.

    Lenient: returns 0 when ``value`` does not contain a timestamp, since
    callers match the time line before converting it.
    """
    match = TIMESTAMP_PATTERN.search(value)
    if not match:
        return 0
    hours, minutes, seconds, milliseconds = map(int, match.groups())
    return times_to_ms(h=hours, m=minutes, s=seconds, ms=milliseconds)


def format_timestamp(ms: int) -> str:
    """Convert milliseconds to an ``HH:MM:SS,mmm`` timestamp.

    Negative input is clamped to zero. Hours are not capped, so offsets of
    100 hours or more produce a wider hour field.
    """
    hours, minutes, seconds, milliseconds = ms_to_times(max(ms, 0))
    return f"{hours:02d}:{minutes:02d}:{seconds:02d},{milliseconds:03d}"
