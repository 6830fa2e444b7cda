"""Tests for build_windows: free time between shift boundaries and appointments."""

from __future__ import annotations

from conftest import appointment


def _events(day, config, *records):
    from field_scheduler.classify import split_tasks

    appointments, _ = split_tasks(list(records), day, config)
    return appointments


class TestBuildWindows:

    def test_no_appointments_single_window(self):
        from field_scheduler.windows import build_windows

        windows = build_windows(480, 1020, [])
        assert len(windows) == 1
        assert (windows[0].start, windows[0].end) == (480, 1020)
        assert windows[0].is_trailing

    def test_n_plus_one_windows(self, day, config):
        from field_scheduler.windows import build_windows

        events = _events(
            day, config,
            appointment("A1", "09:00", 30),
            appointment("A2", "13:00", 60),
        )
        windows = build_windows(480, 1020, events)
        assert [(w.start, w.end) for w in windows] == [
            (480, 540),
            (570, 780),
            (840, 1020),
        ]
        assert [w.index for w in windows] == [0, 1, 2]
        assert windows[0].appointment.task_id == "A1"
        assert windows[1].appointment.task_id == "A2"
        assert windows[2].appointment is None

    def test_overlapping_appointments_give_negative_window(self, day, config):
        from field_scheduler.windows import build_windows

        events = _events(
            day, config,
            appointment("A1", "09:00", 90),
            appointment("A2", "10:00", 60),
        )
        windows = build_windows(480, 1020, events)
        assert len(windows) == 3
        middle = windows[1]
        assert middle.start > middle.end
        assert middle.length == -30
        assert not middle.is_open

    def test_back_to_back_appointments_give_empty_window(self, day, config):
        from field_scheduler.windows import build_windows

        events = _events(
            day, config,
            appointment("A1", "09:00", 60),
            appointment("A2", "10:00", 60),
        )
        windows = build_windows(480, 1020, events)
        assert windows[1].length == 0
        assert not windows[1].is_open

    def test_appointment_before_shift(self, day, config):
        from field_scheduler.windows import build_windows

        events = _events(day, config, appointment("A", "07:00", 60))
        windows = build_windows(480, 1020, events)
        assert (windows[0].start, windows[0].end) == (480, 420)
        assert not windows[0].is_open
        assert (windows[1].start, windows[1].end) == (480, 1020)
