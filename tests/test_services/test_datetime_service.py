"""Tests for the manifest timestamp codec."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from mtimekeeper.services.datetime_service import (
    format_timestamp,
    from_ns,
    parse_timestamp,
    to_ns,
)


class TestFormatTimestamp:
    def test_format_utc(self) -> None:
        dt = datetime(2026, 2, 2, 22, 21, 29, 975359, tzinfo=UTC)
        assert format_timestamp(dt) == "2026-02-02T22:21:29.975359+00:00"

    def test_format_always_has_microseconds(self) -> None:
        dt = datetime(2026, 2, 2, 22, 21, 29, tzinfo=UTC)
        assert format_timestamp(dt) == "2026-02-02T22:21:29.000000+00:00"

    def test_format_converts_offset_to_utc(self) -> None:
        dt = datetime(2026, 2, 2, 10, 0, tzinfo=timezone(timedelta(hours=2)))
        assert format_timestamp(dt) == "2026-02-02T08:00:00.000000+00:00"

    def test_format_naive_is_utc(self) -> None:
        assert format_timestamp(datetime(2026, 1, 1)).endswith("+00:00")


class TestParseTimestamp:
    def test_parse_round_trips_format(self) -> None:
        dt = datetime(2021, 3, 4, 5, 6, 7, 123456, tzinfo=UTC)
        assert parse_timestamp(format_timestamp(dt)) == dt

    def test_parse_rfc3339_nanoseconds_with_offset(self) -> None:
        result = parse_timestamp("2023-04-05T06:07:08.123456789+02:00")
        assert result.tzinfo is not None
        assert result.astimezone(UTC) == datetime(2023, 4, 5, 4, 7, 8, 123456, tzinfo=UTC)

    def test_parse_zulu_suffix(self) -> None:
        result = parse_timestamp("2023-04-05T06:07:08Z")
        assert result == datetime(2023, 4, 5, 6, 7, 8, tzinfo=UTC)

    def test_parse_missing_offset_defaults_to_utc(self) -> None:
        result = parse_timestamp("2023-04-05T06:07:08")
        assert result.utcoffset() == timedelta(0)

    def test_invalid_raises_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_timestamp("not-a-date")

    def test_date_only_raises_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_timestamp("2023-04-05")


class TestNanosecondConversion:
    def test_from_ns_truncates_to_microseconds(self) -> None:
        result = from_ns(1_600_000_000_123_456_789)
        assert result == datetime(2020, 9, 13, 12, 26, 40, 123456, tzinfo=UTC)

    def test_to_ns_inverts_from_ns(self) -> None:
        ns = 1_600_000_000_123_456_000
        assert to_ns(from_ns(ns)) == ns

    def test_before_epoch(self) -> None:
        ns = -1_500_000_000
        assert from_ns(ns) == datetime(1969, 12, 31, 23, 59, 58, 500000, tzinfo=UTC)
        assert to_ns(from_ns(ns)) == ns

    def test_to_ns_respects_offset(self) -> None:
        local = datetime(1970, 1, 1, 1, 0, tzinfo=timezone(timedelta(hours=1)))
        assert to_ns(local) == 0
