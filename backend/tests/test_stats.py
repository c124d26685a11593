"""
Tests for the derived statistics
"""
from datetime import date, datetime

import pytest
import pytz

from habittrack.services.habits import stats


def done(*days, value=1):
    return {d: {"completed": True, "value": value, "timestamp": 0} for d in days}


SAMPLE = done("2024-01-01", "2024-01-02", "2024-01-03", "2024-01-05")


def test_longest_streak_breaks_on_gap():
    assert stats.longest_streak(SAMPLE) == 3


def test_longest_streak_empty():
    assert stats.longest_streak({}) == 0


def test_longest_streak_single_day():
    assert stats.longest_streak(done("2024-02-29")) == 1


def test_longest_streak_across_month_and_leap_day():
    check_ins = done("2024-02-27", "2024-02-28", "2024-02-29", "2024-03-01", "2024-03-03")
    assert stats.longest_streak(check_ins) == 4


def test_longest_streak_ignores_incomplete_records():
    check_ins = {
        **done("2024-01-01", "2024-01-03"),
        "2024-01-02": {"completed": False, "value": 0, "note": "sick", "timestamp": 0},
    }
    assert stats.longest_streak(check_ins) == 1


def test_current_streak_counts_today():
    assert stats.current_streak(SAMPLE, date(2024, 1, 5)) == 1


def test_current_streak_falls_back_to_yesterday():
    assert stats.current_streak(SAMPLE, date(2024, 1, 6)) == 1


def test_current_streak_runs_back_to_first_gap():
    assert stats.current_streak(SAMPLE, date(2024, 1, 3)) == 3
    assert stats.current_streak(SAMPLE, date(2024, 1, 4)) == 3


def test_current_streak_zero_after_two_open_days():
    assert stats.current_streak(SAMPLE, date(2024, 1, 7)) == 0


def test_current_streak_ignores_future_records():
    check_ins = done("2024-01-09", "2024-01-10", "2024-01-11", "2024-01-12")
    assert stats.current_streak(check_ins, date(2024, 1, 10)) == 2


def test_future_records_do_not_count():
    check_ins = done("2024-01-08", "2024-01-09", "2024-01-11", "2024-01-12")
    today = date(2024, 1, 10)

    assert stats.total_completions(check_ins, today) == 2
    assert stats.longest_streak(check_ins, today) == 2
    assert stats.completed_dates(check_ins, today) == [date(2024, 1, 8), date(2024, 1, 9)]


def test_unreadable_date_keys_are_skipped():
    check_ins = {**done("2024-01-01"), "not-a-date": {"completed": True, "value": 1}}
    assert stats.total_completions(check_ins) == 1


def test_days_tracked_inclusive():
    assert stats.days_tracked("2024-01-01T08:00:00.000Z", date(2024, 1, 10)) == 10
    assert stats.days_tracked("2024-01-10T23:59:00.000Z", date(2024, 1, 10)) == 1


def test_days_tracked_clamps_to_zero():
    assert stats.days_tracked("2024-02-01T00:00:00.000Z", date(2024, 1, 10)) == 0


def test_days_tracked_uses_timezone():
    la = pytz.timezone("America/Los_Angeles")
    # 03:00 UTC on the 2nd is still the 1st in Los Angeles
    assert stats.days_tracked("2024-01-02T03:00:00.000Z", date(2024, 1, 10), la) == 10
    assert stats.days_tracked("2024-01-02T03:00:00.000Z", date(2024, 1, 10)) == 9


def test_days_tracked_accepts_dates_and_datetimes():
    assert stats.days_tracked(date(2024, 1, 1), date(2024, 1, 1)) == 1
    assert stats.days_tracked(datetime(2024, 1, 1, 12, tzinfo=pytz.utc), date(2024, 1, 2)) == 2


def test_days_tracked_unreadable_created_at():
    assert stats.days_tracked(None, date(2024, 1, 10)) == 0
    assert stats.days_tracked("yesterday", date(2024, 1, 10)) == 0


@pytest.mark.parametrize("completions,tracked,expected", [
    (3, 10, 30),
    (1, 3, 33),
    (2, 3, 67),
    (1, 8, 13),
    (1, 200, 1),
    (1, 40, 3),
    (5, 0, 0),
])
def test_completion_rate(completions, tracked, expected):
    assert stats.completion_rate(completions, tracked) == expected


def test_habit_stats():
    habit = {"id": "h1", "createdAt": "2024-01-01T00:00:00.000Z"}
    check_ins = done("2024-01-02", "2024-01-08", "2024-01-09")

    result = stats.habit_stats(habit, check_ins, date(2024, 1, 10))

    assert result == {
        "currentStreak": 2,
        "longestStreak": 2,
        "totalCompletions": 3,
        "daysTracked": 10,
        "completionRate": 30,
    }


def test_habit_stats_is_repeatable():
    habit = {"createdAt": "2024-01-01T00:00:00.000Z"}
    first = stats.habit_stats(habit, SAMPLE, date(2024, 1, 6))
    assert stats.habit_stats(habit, SAMPLE, date(2024, 1, 6)) == first
