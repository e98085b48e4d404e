"""Tests for the application timezone helpers."""

from datetime import datetime, timedelta, timezone

import pytest

from app.utils import datetime as datetime_utils


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("UTC-05:00", timedelta(hours=-5)),
        ("GMT+0530", timedelta(hours=5, minutes=30)),
        ("utc+2", timedelta(hours=2)),
        ("Not/AZone", timedelta(0)),
    ],
)
def test_resolve_timezone(name, expected):
    resolved = datetime_utils._resolve_timezone(name)

    assert resolved.utcoffset(datetime(2026, 1, 1)) == expected


def test_naive_values_are_read_as_app_time():
    value = datetime(2026, 10, 19, 12, 0)

    assert datetime_utils.ensure_app_timezone(value) == value.replace(tzinfo=timezone.utc)
    assert datetime_utils.ensure_app_timezone(None) is None


def test_aware_values_are_stored_without_offset():
    value = datetime(2026, 10, 19, 9, 0, tzinfo=timezone(timedelta(hours=-3)))

    assert datetime_utils.ensure_app_naive_datetime(value) == datetime(2026, 10, 19, 12, 0)
