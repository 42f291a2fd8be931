from datetime import datetime, timedelta, timezone

import pytest

from submittrx.services.timestamp_service import (
    TimestampValidator,
    format_signing_timestamp,
    format_timestamp,
    is_fresh,
    parse_timestamp,
)

NOW = datetime(2024, 1, 1, 0, 5, 0, tzinfo=timezone.utc)


def test_parse_valid_timestamp():
    parsed = parse_timestamp("2024-01-01T12:34:56.1234567Z")

    assert parsed == datetime(2024, 1, 1, 12, 34, 56, 123456, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "value",
    [
        None,
        "",
        "2024-01-01T00:00:00.000000Z",
        "2024-01-01T00:00:00.00000000Z",
        "2024-01-01T00:00:00.0000000",
        "2024-01-01T00:00:00.0000000+00:00",
        "2024-01-01T00:00:00.0000000z",
        "2024-01-01 00:00:00.0000000Z",
        "2024-01-01T00:00:00Z",
        "2024-13-01T00:00:00.0000000Z",
        "2024-02-30T00:00:00.0000000Z",
        "2024-01-01T24:00:00.0000000Z",
        " 2024-01-01T00:00:00.0000000Z",
        "2024-01-01T00:00:00.0000000Z\n",
        "２０２４-01-01T00:00:00.0000000Z",
    ],
)
def test_parse_rejects_deviations(value):
    assert parse_timestamp(value) is None


def test_format_timestamp_round_trips_microseconds():
    moment = datetime(2024, 3, 9, 7, 8, 9, 120034, tzinfo=timezone.utc)

    assert format_timestamp(moment) == "2024-03-09T07:08:09.1200340Z"
    assert parse_timestamp(format_timestamp(moment)) == moment


def test_format_timestamp_converts_to_utc():
    moment = datetime(2024, 1, 1, 8, 0, 0, tzinfo=timezone(timedelta(hours=8)))

    assert format_timestamp(moment) == "2024-01-01T00:00:00.0000000Z"


def test_format_signing_timestamp():
    moment = datetime(2024, 1, 2, 3, 4, 5, 999999, tzinfo=timezone.utc)

    assert format_signing_timestamp(moment) == "20240102030405"


def test_exactly_five_minutes_old_is_fresh():
    assert is_fresh("2024-01-01T00:00:00.0000000Z", now=NOW)


def test_just_over_five_minutes_old_is_expired():
    assert not is_fresh("2023-12-31T23:59:59.9990000Z", now=NOW)


def test_exactly_five_minutes_ahead_is_fresh():
    assert is_fresh("2024-01-01T00:10:00.0000000Z", now=NOW)


def test_just_over_five_minutes_ahead_is_expired():
    assert not is_fresh("2024-01-01T00:10:00.0010000Z", now=NOW)


def test_unparseable_timestamp_is_not_fresh():
    assert not is_fresh("2024-01-01T00:05:00Z", now=NOW)


def test_validator_uses_injected_clock_and_tolerance():
    validator = TimestampValidator(tolerance=timedelta(seconds=30), clock=lambda: NOW)

    assert validator.is_fresh("2024-01-01T00:04:30.0000000Z")
    assert not validator.is_fresh("2024-01-01T00:04:29.9999990Z")


def test_one_tick_past_window_ahead_is_expired():
    assert not is_fresh("2024-01-01T00:10:00.0000001Z", now=NOW)


def test_one_tick_past_window_behind_is_expired():
    assert not is_fresh("2023-12-31T23:59:59.9999999Z", now=NOW)


def test_one_tick_inside_window_behind_is_fresh():
    assert is_fresh("2024-01-01T00:00:00.0000001Z", now=NOW)
