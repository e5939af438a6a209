import os
import sys
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

import pytest

# Ensure project root on path for direct module imports
sys.path.insert(0, os.path.abspath(os.path.join(Path(__file__).resolve().parent, "..")))

from time_helper import (
    UTC,
    add_days,
    day_difference,
    normalize_to_midnight,
    parse_timestamp,
)


def test_normalize_to_midnight():
    t = datetime(2012, 2, 27, 15, 30, 12, tzinfo=UTC)
    assert normalize_to_midnight(t) == datetime(2012, 2, 27, tzinfo=UTC)


def test_day_difference_ignores_time_of_day():
    late = datetime(2012, 2, 3, 23, 59, tzinfo=UTC)
    early = datetime(2012, 2, 7, 0, 1, tzinfo=UTC)
    assert day_difference(early, late) == 4
    assert day_difference(late, early) == -4
    assert day_difference(late, late.replace(hour=0)) == 0


def test_day_difference_uses_gmt_days():
    # 02:00 on Feb 28 at +05:00 is still Feb 27 in GMT.
    local = datetime(2012, 2, 28, 2, 0, tzinfo=timezone(timedelta(hours=5)))
    start = datetime(2012, 2, 27, tzinfo=UTC)
    assert day_difference(local, start) == 0


def test_add_days_keeps_time_of_day_across_leap_day():
    t = datetime(2012, 2, 27, 10, 0, tzinfo=UTC)
    assert add_days(t, 3) == datetime(2012, 3, 1, 10, 0, tzinfo=UTC)
    assert day_difference(add_days(t, 365), t) == 365


def test_parse_timestamp_variants():
    expected = datetime(2012, 2, 27, tzinfo=UTC)
    assert parse_timestamp(1330300800) == expected
    assert parse_timestamp("2012-02-27T00:00:00Z") == expected
    assert parse_timestamp("2012-02-27T05:00:00+05:00") == expected
    assert parse_timestamp(date(2012, 2, 27)) == expected
    assert parse_timestamp(datetime(2012, 2, 27)) == expected


def test_parse_timestamp_rejects_garbage():
    with pytest.raises(ValueError):
        parse_timestamp("last tuesday-ish")
    with pytest.raises(ValueError):
        parse_timestamp(None)
