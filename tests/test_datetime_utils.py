from datetime import date, datetime, time, timedelta, timezone

from utils.datetime_utils import (
    day_bounds,
    end_of_day,
    same_day,
    start_of_day,
    to_local_naive,
    with_time,
)


def test_day_bounds_close_one_second_before_midnight():
    start, end = day_bounds(datetime(2024, 1, 5, 14, 30, 12, 999))
    assert start == datetime(2024, 1, 5, 0, 0, 0)
    assert end == datetime(2024, 1, 5, 23, 59, 59)
    assert end_of_day(date(2024, 1, 5)) == end


def test_plain_date_is_midnight():
    assert to_local_naive(date(2024, 2, 29)) == datetime(2024, 2, 29)
    assert start_of_day(date(2024, 2, 29)) == datetime(2024, 2, 29)


def test_aware_datetime_converted_to_local_naive():
    aware = datetime(2024, 1, 5, 12, 0, tzinfo=timezone.utc)
    local = to_local_naive(aware)
    assert local.tzinfo is None
    assert local == aware.astimezone().replace(tzinfo=None)


def test_same_day_and_with_time():
    morning = datetime(2024, 1, 5, 7, 15)
    assert same_day(morning, date(2024, 1, 5))
    assert not same_day(morning, morning + timedelta(days=1))
    assert not same_day(None, morning)
    assert with_time(morning, time(21, 45)) == datetime(2024, 1, 5, 21, 45)
