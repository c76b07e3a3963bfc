"""Calendar walking, initial schedule and forward rescheduling."""

from dataclasses import replace
from datetime import date

import pytest

from mesoplan.models import SkipReason
from mesoplan.scheduling import (
    build_schedule,
    default_preferred_days,
    format_schedule_text,
    next_scheduled_day,
    planned_day_for_date,
    reschedule_forward,
)
from mesoplan.scheduling.dates import monday_of, next_assignable_date, next_preferred_day
from mesoplan.scheduling.engine import consume_merged_days, find_index, pending_merged_days

MWF = (0, 2, 4)
START = date(2025, 3, 3)


def _dates(schedule):
    return [sd.planned_date for sd in schedule.scheduled_days]


class TestDates:

    def test_monday_of(self):
        assert monday_of(date(2025, 3, 9)) == date(2025, 3, 3)
        assert monday_of(date(2025, 3, 3)) == date(2025, 3, 3)

    def test_next_preferred_day(self):
        assert next_preferred_day(date(2025, 3, 3), MWF) == date(2025, 3, 3)
        assert next_preferred_day(date(2025, 3, 4), MWF) == date(2025, 3, 5)
        assert next_preferred_day(date(2025, 3, 8), MWF) == date(2025, 3, 10)

    def test_new_week_waits_for_monday(self):
        assert next_assignable_date(date(2025, 3, 12), MWF, new_week=True) == date(2025, 3, 17)
        assert next_assignable_date(date(2025, 3, 10), MWF, new_week=True) == date(2025, 3, 10)
        assert next_assignable_date(date(2025, 3, 12), MWF, new_week=False) == date(2025, 3, 12)

    @pytest.mark.parametrize("days,expected", [
        (3, (0, 2, 4)), (4, (0, 1, 3, 4)), (5, (0, 1, 2, 3, 4)), (6, (0, 1, 2, 3, 4, 5)),
    ])
    def test_default_preferred_days(self, days, expected):
        assert default_preferred_days(days) == expected


class TestBuildSchedule:

    def test_monday_start(self, full_body_program):
        schedule = build_schedule(full_body_program, MWF, START)
        assert _dates(schedule) == [
            date(2025, 3, 3), date(2025, 3, 5), date(2025, 3, 7),
            date(2025, 3, 10), date(2025, 3, 12), date(2025, 3, 14),
            date(2025, 3, 17), date(2025, 3, 19), date(2025, 3, 21),
            date(2025, 3, 24), date(2025, 3, 26), date(2025, 3, 28),
        ]

    def test_mid_week_start_pushes_next_week(self, full_body_program):
        schedule = build_schedule(full_body_program, MWF, date(2025, 3, 6))
        dates = _dates(schedule)
        assert dates[:3] == [date(2025, 3, 7), date(2025, 3, 10), date(2025, 3, 12)]
        assert dates[3] == date(2025, 3, 17)

    def test_one_entry_per_day(self, full_body_program):
        schedule = build_schedule(full_body_program, MWF, START)
        keys = [sd.key for sd in schedule.scheduled_days]
        assert len(keys) == len(set(keys)) == 12
        assert keys[0] == "1-0"
        assert keys[-1] == "4-2"

    def test_preferred_days_normalized(self, full_body_program):
        schedule = build_schedule(full_body_program, [4, 0, 2, 2], START)
        assert schedule.preferred_days == MWF

    def test_no_preferred_days(self, full_body_program):
        schedule = build_schedule(full_body_program, [], START)
        assert schedule.scheduled_days == ()


class TestRescheduleForward:

    def test_on_time_changes_nothing(self, full_body_program):
        schedule = build_schedule(full_body_program, MWF, START)
        updated = reschedule_forward(schedule, 1, 0, START)
        assert _dates(updated) == _dates(schedule)
        assert updated.scheduled_days[0].completed_date == START

    def test_late_session_shifts_rest(self, full_body_program):
        schedule = build_schedule(full_body_program, MWF, START)
        updated = reschedule_forward(schedule, 1, 0, date(2025, 3, 6))
        dates = _dates(updated)
        assert dates[1] == date(2025, 3, 7)
        assert dates[2] == date(2025, 3, 10)
        # Week 2 never starts before the Monday after week 1 ends
        assert dates[3] == date(2025, 3, 17)

    def test_early_session_pulls_forward(self, full_body_program):
        schedule = build_schedule(full_body_program, MWF, START)
        schedule = reschedule_forward(schedule, 1, 0, START)
        updated = reschedule_forward(schedule, 1, 1, date(2025, 3, 4))
        dates = _dates(updated)
        assert dates[2] == date(2025, 3, 5)
        assert dates[3] == date(2025, 3, 10)

    def test_done_days_keep_their_dates(self, full_body_program):
        schedule = build_schedule(full_body_program, MWF, START)
        days = list(schedule.scheduled_days)
        days[1] = replace(days[1], skipped_date=START, skipped_reason=SkipReason.USER_SKIP)
        schedule = replace(schedule, scheduled_days=tuple(days))

        updated = reschedule_forward(schedule, 1, 0, date(2025, 3, 4))
        assert updated.scheduled_days[1].planned_date == date(2025, 3, 5)
        assert updated.scheduled_days[1].skipped_date == START
        assert updated.scheduled_days[2].planned_date == date(2025, 3, 5)

    def test_unknown_day_is_noop(self, full_body_program):
        schedule = build_schedule(full_body_program, MWF, START)
        assert reschedule_forward(schedule, 9, 0, START) is schedule
        assert find_index(schedule, 9, 0) == -1


class TestLookups:

    def test_planned_day_for_date(self, full_body_program):
        schedule = build_schedule(full_body_program, MWF, START)
        assert planned_day_for_date(schedule, date(2025, 3, 5)).key == "1-1"
        assert planned_day_for_date(schedule, date(2025, 3, 4)) is None

    def test_next_scheduled_day(self, full_body_program):
        schedule = build_schedule(full_body_program, MWF, START)
        assert next_scheduled_day(schedule, date(2025, 3, 5)).key == "1-1"
        assert next_scheduled_day(schedule, date(2025, 3, 6)).key == "1-2"
        assert next_scheduled_day(schedule, date(2025, 4, 1)) is None

    def test_next_scheduled_day_skips_done(self, full_body_program):
        schedule = reschedule_forward(build_schedule(full_body_program, MWF, START), 1, 0, START)
        assert next_scheduled_day(schedule, START).key == "1-1"

    def test_format_schedule_text(self, full_body_program):
        schedule = reschedule_forward(build_schedule(full_body_program, MWF, START), 1, 0, START)
        text = format_schedule_text(schedule, full_body_program)
        lines = text.splitlines()
        assert len(lines) == 12
        assert lines[0] == "W1 D1 Full Body A: Mon 2025-03-03 [done 2025-03-03]"
        assert lines[1].endswith("[planned]")

    def test_merged_day_consumed_once(self, full_body_program):
        schedule = build_schedule(full_body_program, MWF, START)
        days = list(schedule.scheduled_days)
        days[1] = replace(days[1], skipped_date=date(2025, 3, 6), skipped_reason=SkipReason.MERGED)
        days[2] = replace(days[2], skipped_date=date(2025, 3, 6), skipped_reason=SkipReason.USER_SKIP)
        schedule = replace(schedule, scheduled_days=tuple(days))

        assert [sd.key for sd in pending_merged_days(schedule)] == ["1-1"]
        assert "[skipped (merged)]" in format_schedule_text(schedule)

        schedule = consume_merged_days(schedule, "2-0")
        assert pending_merged_days(schedule) == []
        assert schedule.scheduled_days[1].carried_into == "2-0"
        assert schedule.scheduled_days[2].carried_into is None
        assert consume_merged_days(schedule, "2-1") is schedule

        lines = format_schedule_text(schedule, full_body_program).splitlines()
        assert lines[1].endswith("[skipped (merged into 2-0)]")
        assert lines[2].endswith("[skipped (user_skip)]")
