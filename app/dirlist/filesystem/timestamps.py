"""Conversion between Windows FILETIME ticks and Unix nanoseconds.

FILETIME counts 100-nanosecond intervals since 1601-01-01 UTC. All
timestamps exposed by dirlist are integer nanoseconds since 1970-01-01 UTC.
The conversion is integer exact.
"""

from datetime import UTC, datetime

# 100 ns ticks between 1601-01-01 and 1970-01-01
FILETIME_EPOCH_OFFSET = 116_444_736_000_000_000

NANOSECONDS_PER_TICK = 100


def join_high_low(high: int, low: int) -> int:
    """Combine the two 32-bit halves of a 64-bit value."""
    return ((high & 0xFFFFFFFF) << 32) | (low & 0xFFFFFFFF)


def filetime_to_unix_ns(ticks: int) -> int:
    """Convert FILETIME ticks to nanoseconds since the Unix epoch."""
    return (ticks - FILETIME_EPOCH_OFFSET) * NANOSECONDS_PER_TICK


def ns_to_datetime(ns: int) -> datetime:
    """Convert Unix nanoseconds to an aware UTC datetime (microsecond precision)."""
    seconds, remainder = divmod(ns, 1_000_000_000)
    return datetime.fromtimestamp(seconds, tz=UTC).replace(microsecond=remainder // 1000)
