"""Tests for strikeview.data.interval — TimeInterval navigation."""

from __future__ import annotations

import pytest

from strikeview.data.history import History
from strikeview.data.interval import (
    DEFAULT_INTERVAL_DURATION,
    IntervalChange,
    TimeInterval,
)


class TestTimeIntervalBasics:
    def test_defaults(self):
        iv = TimeInterval()
        assert iv.offset == 0
        assert iv.duration == DEFAULT_INTERVAL_DURATION
        assert iv.is_realtime()

    def test_not_realtime_in_past(self):
        assert not TimeInterval(offset=-30).is_realtime()

    def test_frozen(self):
        iv = TimeInterval()
        with pytest.raises(AttributeError):
            iv.offset = -30  # type: ignore[misc]

    def test_oldest_offset_zero_duration(self, history):
        assert TimeInterval(duration=0).oldest_offset(history) == -1440

    def test_oldest_offset_accounts_for_duration(self, history):
        assert TimeInterval(duration=60).oldest_offset(history) == -1380

    def test_oldest_offset_window_longer_than_range(self, history):
        assert TimeInterval(duration=2000).oldest_offset(history) == 0


class TestRewInterval:
    def test_first_step(self, history):
        iv, changed = TimeInterval(duration=0).rew_interval(history)
        assert changed is True
        assert iv.offset == -30

    def test_returns_interval_change(self, history):
        result = TimeInterval(duration=0).rew_interval(history)
        assert isinstance(result, IntervalChange)
        assert result.interval.offset == -30

    def test_original_untouched(self, history):
        iv = TimeInterval(duration=0)
        iv.rew_interval(history)
        assert iv.offset == 0

    def test_rewind_to_limit(self, history):
        iv = TimeInterval(duration=0)
        for _ in range(48):
            iv, changed = iv.rew_interval(history)
            assert changed
        assert iv.offset == -1440

        again, changed = iv.rew_interval(history)
        assert changed is False
        assert again is iv

    def test_saturates_at_boundary(self):
        h = History(time_increment=40, range=100)
        iv = TimeInterval(offset=-80, duration=0)
        iv, changed = iv.rew_interval(h)
        assert changed is True
        assert iv.offset == -100

    def test_monotonic_and_bounded(self):
        h = History(time_increment=45, range=500)
        iv = TimeInterval(duration=20)
        previous = iv.offset
        for _ in range(30):
            iv, _ = iv.rew_interval(h)
            assert iv.offset <= previous
            assert iv.offset >= -h.range
            previous = iv.offset
        assert iv.offset == iv.oldest_offset(h)

    def test_never_moves_forward_when_out_of_range(self):
        # Offset already older than the (shrunken) history allows
        h = History(time_increment=30, range=60)
        iv = TimeInterval(offset=-300, duration=0)
        result, changed = iv.rew_interval(h)
        assert changed is False
        assert result.offset == -300

    def test_zero_increment_is_noop(self):
        h = History(time_increment=0, range=1440)
        _, changed = TimeInterval(duration=0).rew_interval(h)
        assert changed is False


class TestFfwdInterval:
    def test_step_forward(self, history):
        iv, changed = TimeInterval(offset=-90, duration=0).ffwd_interval(history)
        assert changed is True
        assert iv.offset == -60

    def test_clamped_at_realtime(self):
        h = History(time_increment=40, range=200)
        iv, changed = TimeInterval(offset=-20, duration=0).ffwd_interval(h)
        assert changed is True
        assert iv.offset == 0

    def test_noop_at_realtime(self, history):
        iv = TimeInterval()
        result, changed = iv.ffwd_interval(history)
        assert changed is False
        assert result is iv

    def test_reaches_realtime_eventually(self, history):
        iv = TimeInterval(offset=-1440, duration=0)
        steps = 0
        while True:
            iv, changed = iv.ffwd_interval(history)
            if not changed:
                break
            steps += 1
        assert steps == 48
        assert iv.is_realtime()


class TestAnimationStep:
    def test_advances(self, history):
        iv = TimeInterval(offset=-60, duration=0).animation_step(history)
        assert iv.offset == -30

    def test_stays_at_realtime(self, history):
        iv = TimeInterval().animation_step(history)
        assert iv.offset == 0


class TestWithOffset:
    @pytest.mark.parametrize(
        "requested, expected",
        [(-100, -100), (0, 0), (50, 0), (-1440, -1440), (-5000, -1440)],
    )
    def test_clamped(self, history, requested, expected):
        iv = TimeInterval(duration=0).with_offset(requested, history)
        assert iv.offset == expected

    def test_clamp_respects_duration(self, history):
        iv = TimeInterval(duration=120).with_offset(-5000, history)
        assert iv.offset == -1320

    def test_keeps_duration(self, history):
        iv = TimeInterval(duration=90).with_offset(-30, history)
        assert iv.duration == 90

    def test_with_duration(self):
        iv = TimeInterval(offset=-30, duration=60).with_duration(120)
        assert iv == TimeInterval(offset=-30, duration=120)


class TestGoRealtime:
    def test_from_past(self):
        iv, changed = TimeInterval(offset=-300).go_realtime()
        assert changed is True
        assert iv.offset == 0

    def test_idempotent(self):
        first, changed_first = TimeInterval(offset=-300).go_realtime()
        second, changed_second = first.go_realtime()
        assert first.offset == 0 and second.offset == 0
        assert changed_first is True
        assert changed_second is False


class TestTimeIntervalSerialization:
    def test_to_dict(self):
        assert TimeInterval(offset=-30, duration=60).to_dict() == {
            "offset": -30,
            "duration": 60,
        }

    def test_from_partial_dict(self):
        iv = TimeInterval.from_dict({"offset": -90})
        assert iv.offset == -90
        assert iv.duration == DEFAULT_INTERVAL_DURATION
