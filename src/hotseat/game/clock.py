"""Tick-driven chess clock with Fischer increment support."""

from __future__ import annotations

from dataclasses import dataclass

from hotseat.core.enums import Color
from hotseat.game.interfaces import IClock, TimeControl


@dataclass(frozen=True, slots=True)
class ClockSnapshot:
    """Clock state used to restore time after undo."""

    white_remaining: float
    black_remaining: float
    active_color: Color | None
    is_running: bool


class Clock(IClock):
    """Dual chess clock tracking remaining time for both players.

    Time only moves when :meth:`tick` is called, so the owner decides the
    tick rate.  Starting one side makes it the single active side, so a
    handover can never leave two sides counting down at once.
    """

    __slots__ = (
        "_time_control",
        "_remaining",
        "_active_color",
        "_running",
    )

    def __init__(self, time_control: TimeControl) -> None:
        self._time_control = time_control
        self._remaining: dict[Color, float] = {
            Color.WHITE: time_control.initial_seconds,
            Color.BLACK: time_control.initial_seconds,
        }
        self._active_color: Color | None = None
        self._running: bool = False

    # ── IClock implementation ────────────────────────────────────────────

    def start(self, color: Color) -> None:
        self._active_color = color
        self._running = True

    def stop(self) -> None:
        self._running = False

    def tick(self, seconds: float) -> float:
        if not self._running or self._active_color is None:
            return 0.0
        color = self._active_color
        self._remaining[color] = max(0.0, self._remaining[color] - seconds)
        return self._remaining[color]

    def remaining(self, color: Color) -> float:
        return max(0.0, self._remaining[color])

    def is_flag_fallen(self, color: Color) -> bool:
        return self.remaining(color) <= 0.0

    def add_increment(self, color: Color) -> None:
        self._remaining[color] += self._time_control.increment_seconds

    # ── Extra helpers ────────────────────────────────────────────────────

    @property
    def time_control(self) -> TimeControl:
        return self._time_control

    @property
    def is_unlimited(self) -> bool:
        return self._time_control.initial_seconds == float("inf")

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def active_color(self) -> Color | None:
        return self._active_color

    def set_remaining(self, color: Color, seconds: float) -> None:
        """Manually override remaining time (for testing / UI override)."""
        self._remaining[color] = seconds

    def snapshot(self) -> ClockSnapshot:
        """Capture current clock state (including active side and running flag)."""
        return ClockSnapshot(
            white_remaining=self._remaining[Color.WHITE],
            black_remaining=self._remaining[Color.BLACK],
            active_color=self._active_color,
            is_running=self._running,
        )

    def restore(self, snapshot: ClockSnapshot) -> None:
        """Restore clock state previously captured with :meth:`snapshot`."""
        self._remaining[Color.WHITE] = snapshot.white_remaining
        self._remaining[Color.BLACK] = snapshot.black_remaining
        self._active_color = snapshot.active_color
        self._running = snapshot.is_running and snapshot.active_color is not None
