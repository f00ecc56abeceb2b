"""Tests for ClockService — minute/hour rollover, pause, day rollover."""

from __future__ import annotations

import pytest

from citycore.engine.clock_service import ClockService
from citycore.models.clock import ClockState, TimeOfDay, time_of_day_for_hour
from citycore.util.events import DayRolledOver, EventBus, HourAdvanced, TimeOfDayChanged


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_clock(hour: int = 8, minute: int = 0, paused: bool = False):
    bus = EventBus()
    state = ClockState(hour=hour, minute=minute, paused=paused)
    return ClockService(state, bus), state, bus


def _record(bus: EventBus, event_type: type) -> list:
    received: list = []
    bus.on(event_type, received.append)
    return received


# ---------------------------------------------------------------------------
# Time of day
# ---------------------------------------------------------------------------

class TestTimeOfDay:
    @pytest.mark.parametrize("hour,expected", [
        (0, TimeOfDay.NIGHT),
        (4, TimeOfDay.NIGHT),
        (5, TimeOfDay.MORNING),
        (9, TimeOfDay.MORNING),
        (10, TimeOfDay.DAY),
        (16, TimeOfDay.DAY),
        (17, TimeOfDay.EVENING),
        (20, TimeOfDay.EVENING),
        (21, TimeOfDay.NIGHT),
        (23, TimeOfDay.NIGHT),
    ])
    def test_boundaries(self, hour, expected):
        assert time_of_day_for_hour(hour) == expected

    def test_clock_state_exposes_time_of_day(self):
        assert ClockState(hour=18).time_of_day == TimeOfDay.EVENING


# ---------------------------------------------------------------------------
# Ticking
# ---------------------------------------------------------------------------

class TestTick:
    def test_tick_advances_minute(self):
        svc, state, _ = _make_clock(hour=8, minute=0)
        svc.tick()
        assert (state.hour, state.minute) == (8, 1)

    def test_sixty_ticks_advance_one_hour(self):
        svc, state, _ = _make_clock(hour=8, minute=30)
        for _ in range(60):
            svc.tick()
        assert state.hour == 9
        assert state.minute == 30

    def test_rollover_emits_hour_and_time_of_day(self):
        svc, state, bus = _make_clock(hour=9, minute=59)
        hours = _record(bus, HourAdvanced)
        parts = _record(bus, TimeOfDayChanged)

        svc.tick()

        assert (state.hour, state.minute) == (10, 0)
        assert [e.hour for e in hours] == [10]
        assert [e.time_of_day for e in parts] == [TimeOfDay.DAY]

    def test_no_hour_event_without_rollover(self):
        svc, _, bus = _make_clock(hour=9, minute=10)
        hours = _record(bus, HourAdvanced)
        svc.tick()
        assert hours == []

    def test_hour_wraps_at_midnight(self):
        svc, state, _ = _make_clock(hour=23, minute=59)
        svc.tick()
        assert (state.hour, state.minute) == (0, 0)

    def test_paused_tick_is_noop(self):
        svc, state, bus = _make_clock(hour=5, minute=59, paused=True)
        hours = _record(bus, HourAdvanced)
        for _ in range(120):
            svc.tick()
        assert (state.hour, state.minute) == (5, 59)
        assert hours == []

    def test_resume_after_pause(self):
        svc, state, _ = _make_clock(hour=8, minute=0)
        svc.pause()
        svc.tick()
        svc.resume()
        svc.tick()
        assert state.minute == 1

    def test_toggle_pause_returns_new_state(self):
        svc, state, _ = _make_clock()
        assert svc.toggle_pause() is True
        assert state.paused is True
        assert svc.toggle_pause() is False


# ---------------------------------------------------------------------------
# Day rollover
# ---------------------------------------------------------------------------

class TestDayRollover:
    def test_fires_when_hour_reaches_six(self):
        svc, _, bus = _make_clock(hour=5, minute=59)
        days = _record(bus, DayRolledOver)
        svc.tick()
        assert [e.hour for e in days] == [6]

    def test_fires_once_per_full_day(self):
        svc, _, bus = _make_clock(hour=8, minute=0)
        days = _record(bus, DayRolledOver)
        hours = _record(bus, HourAdvanced)

        for _ in range(24 * 60):
            svc.tick()

        assert len(hours) == 24
        assert len(days) == 1
        assert days[0].hour == 6

    def test_midnight_is_not_a_day_boundary(self):
        svc, _, bus = _make_clock(hour=23, minute=59)
        days = _record(bus, DayRolledOver)
        svc.tick()
        assert days == []


# ---------------------------------------------------------------------------
# set_time
# ---------------------------------------------------------------------------

class TestSetTime:
    def test_set_time_wraps_and_emits_time_of_day(self):
        svc, state, bus = _make_clock()
        parts = _record(bus, TimeOfDayChanged)
        svc.set_time(26, 75)
        assert (state.hour, state.minute) == (2, 15)
        assert parts[-1].time_of_day == TimeOfDay.NIGHT

    def test_set_time_to_six_does_not_roll_day(self):
        svc, _, bus = _make_clock()
        days = _record(bus, DayRolledOver)
        svc.set_time(6)
        assert days == []
