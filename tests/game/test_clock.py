"""Tests for the tick-driven chess clock."""

from hotseat.core.enums import Color
from hotseat.game.clock import Clock
from hotseat.game.interfaces import TimeControl


class TestClock:
    def test_initial_time(self) -> None:
        clock = Clock(TimeControl.blitz_5m())
        assert clock.remaining(Color.WHITE) == 300
        assert clock.remaining(Color.BLACK) == 300
        assert not clock.is_running
        assert clock.active_color is None

    def test_tick_only_moves_active_side(self) -> None:
        clock = Clock(TimeControl(60))
        clock.start(Color.WHITE)
        assert clock.tick(1.5) == 58.5
        assert clock.remaining(Color.BLACK) == 60

    def test_tick_when_stopped_is_ignored(self) -> None:
        clock = Clock(TimeControl(60))
        clock.start(Color.WHITE)
        clock.stop()
        clock.tick(5)
        assert clock.remaining(Color.WHITE) == 60

    def test_start_hands_over(self) -> None:
        clock = Clock(TimeControl(60))
        clock.start(Color.WHITE)
        clock.start(Color.BLACK)
        assert clock.active_color == Color.BLACK
        clock.tick(2)
        assert clock.remaining(Color.BLACK) == 58
        assert clock.remaining(Color.WHITE) == 60

    def test_flag_fall_floors_at_zero(self) -> None:
        clock = Clock(TimeControl(1))
        clock.start(Color.BLACK)
        assert clock.tick(3) == 0.0
        assert clock.is_flag_fallen(Color.BLACK)
        assert not clock.is_flag_fallen(Color.WHITE)

    def test_increment(self) -> None:
        clock = Clock(TimeControl.blitz_3m2s())
        clock.add_increment(Color.WHITE)
        assert clock.remaining(Color.WHITE) == 182

    def test_unlimited(self) -> None:
        clock = Clock(TimeControl.unlimited())
        assert clock.is_unlimited
        clock.start(Color.WHITE)
        clock.tick(10_000)
        assert not clock.is_flag_fallen(Color.WHITE)

    def test_snapshot_restore(self) -> None:
        clock = Clock(TimeControl(60))
        clock.start(Color.WHITE)
        snap = clock.snapshot()
        clock.tick(10)
        clock.start(Color.BLACK)
        clock.restore(snap)
        assert clock.remaining(Color.WHITE) == 60
        assert clock.active_color == Color.WHITE
        assert clock.is_running

    def test_set_remaining(self) -> None:
        clock = Clock(TimeControl(60))
        clock.set_remaining(Color.BLACK, 5)
        assert clock.remaining(Color.BLACK) == 5


class TestTimeControl:
    def test_repr(self) -> None:
        assert repr(TimeControl.rapid_15m10s()) == "TimeControl(15m+10s)"
        assert repr(TimeControl.rapid_10m()) == "TimeControl(10m)"
