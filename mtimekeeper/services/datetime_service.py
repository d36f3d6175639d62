"""Timestamp codec shared by the snapshot and restore sides.

Manifests store modification times as ISO 8601 text with an explicit offset.
Both sides go through this module so that what one writes the other can read.
"""

from __future__ import annotations

import calendar
from datetime import UTC, datetime, timedelta

import pendulum

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_NS_PER_SECOND = 1_000_000_000


def from_ns(ns: int) -> datetime:
    """Convert a nanosecond POSIX timestamp (``st_mtime_ns``) to a UTC datetime.

    Precision is truncated to microseconds.
    """
    seconds, remainder = divmod(ns, _NS_PER_SECOND)
    return _EPOCH + timedelta(seconds=seconds, microseconds=remainder // 1000)


def to_ns(dt: datetime) -> int:
    """Convert a datetime to a nanosecond POSIX timestamp for ``os.utime``.

    Naive datetimes are taken to be UTC.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    seconds = calendar.timegm(dt.utctimetuple())
    return seconds * _NS_PER_SECOND + dt.microsecond * 1000


def format_timestamp(dt: datetime) -> str:
    """Format a datetime for a manifest.

    Output: YYYY-MM-DDTHH:MM:SS.ffffff+00:00
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).isoformat(timespec="microseconds")


def parse_timestamp(value: str) -> datetime:
    """Parse a manifest timestamp into a timezone-aware datetime.

    Accepts ISO 8601 / RFC 3339 date-times, including ``Z`` suffixes and
    fractional seconds beyond microseconds. A missing offset means UTC.
    Anything that is not a full date and time raises ``ValueError``.
    """
    parsed = pendulum.parse(value.strip(), exact=True)
    if not isinstance(parsed, datetime):
        msg = f"Timestamp must include a date and a time of day: {value!r}"
        raise ValueError(msg)
    return parsed
