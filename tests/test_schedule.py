from datetime import datetime, time, timedelta, timezone

import pytest

from aus_lotto.games import SATURDAY, TUESDAY
from aus_lotto.services.schedule_service import next_draw, to_local


def test_draw_time_already_passed_rolls_to_next_week(saturday, tz):
    now = datetime(2024, 1, 27, 20, 0, tzinfo=tz)  # Saturday

    assert next_draw(saturday, now, tz) == datetime(2024, 2, 3, 19, 30, tzinfo=tz)


def test_draw_later_today(saturday, tz):
    now = datetime(2024, 1, 27, 19, 0, tzinfo=tz)

    assert next_draw(saturday, now, tz) == datetime(2024, 1, 27, 19, 30, tzinfo=tz)


def test_exactly_at_draw_time_is_not_in_the_future(saturday, tz):
    now = datetime(2024, 1, 27, 19, 30, tzinfo=tz)

    assert next_draw(saturday, now, tz) == datetime(2024, 2, 3, 19, 30, tzinfo=tz)


def test_midweek_goes_forward_to_draw_day(saturday, tz):
    now = datetime(2024, 1, 24, 9, 15, tzinfo=tz)  # Wednesday

    assert next_draw(saturday, now, tz) == datetime(2024, 1, 27, 19, 30, tzinfo=tz)


def test_naive_now_is_local_time(saturday, tz):
    assert next_draw(saturday, datetime(2024, 1, 27, 19, 0), tz) == datetime(
        2024, 1, 27, 19, 30, tzinfo=tz
    )


def test_other_timezones_are_converted(saturday, tz):
    # 08:00 UTC is 19:00 AEDT on the same Saturday
    now = datetime(2024, 1, 27, 8, 0, tzinfo=timezone.utc)

    assert next_draw(saturday, now, tz) == datetime(2024, 1, 27, 19, 30, tzinfo=tz)


def test_keeps_draw_time_across_daylight_saving_change(saturday, tz):
    # Daylight saving ends on Sunday 7 April 2024
    now = datetime(2024, 4, 6, 20, 0, tzinfo=tz)

    result = next_draw(saturday, now, tz)

    assert result == datetime(2024, 4, 13, 19, 30, tzinfo=tz)
    assert result.utcoffset() == timedelta(hours=10)


def test_idempotent_for_a_frozen_now(catalog, tz):
    now = datetime(2024, 3, 5, 12, 0, tzinfo=tz)
    for ruleset in catalog.rulesets():
        assert next_draw(ruleset, now, tz) == next_draw(ruleset, now, tz)


@pytest.mark.parametrize("hours", range(0, 24 * 15, 5))
def test_always_future_on_draw_day_at_draw_time(catalog, tz, hours):
    now = datetime(2024, 9, 30, 0, 17, tzinfo=tz) + timedelta(hours=hours)

    for ruleset in catalog.rulesets():
        result = next_draw(ruleset, now, tz)
        assert result > now
        assert result - now <= timedelta(days=7)
        assert result.weekday() == ruleset.draw_weekday
        assert result.timetz().replace(tzinfo=None) == ruleset.draw_time


def test_custom_schedule(saturday, tz):
    tuesday_morning = saturday.model_copy(update={"draw_weekday": TUESDAY, "draw_time": time(9, 0)})
    now = datetime(2024, 1, 27, 20, 0, tzinfo=tz)

    result = next_draw(tuesday_morning, now, tz)

    assert result == datetime(2024, 1, 30, 9, 0, tzinfo=tz)
    assert saturday.draw_weekday == SATURDAY


def test_to_local_handles_naive_and_aware(tz):
    naive = datetime(2024, 1, 27, 19, 0)
    utc = datetime(2024, 1, 27, 8, 0, tzinfo=timezone.utc)

    assert to_local(naive, tz) == datetime(2024, 1, 27, 19, 0, tzinfo=tz)
    assert to_local(utc, tz) == datetime(2024, 1, 27, 19, 0, tzinfo=tz)
    assert to_local(utc, tz).tzinfo is tz
