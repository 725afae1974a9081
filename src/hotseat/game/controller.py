"""GameController — the central orchestrator of a hot-seat chess game.

Coordinates: GameState, Clock and the tick source driving it.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from hotseat.config import GameSettings
from hotseat.core.enums import Color, GameResult, PieceType
from hotseat.core.types import Square, parse_square
from hotseat.game.clock import Clock, ClockSnapshot
from hotseat.game.interfaces import (
    CommandResult,
    GameEndReason,
    GamePhase,
    IGameController,
    ITickSource,
    PendingPromotion,
    RejectReason,
    TimeControl,
)
from hotseat.game.state import GameSnapshot, GameState

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

SnapshotCallback = Callable[[GameSnapshot], None]
RejectedCallback = Callable[[RejectReason], None]
CheckCallback = Callable[[Color], None]  # color in check
GameOverCallback = Callable[[GameResult, GameEndReason], None]
PromotionCallback = Callable[[PendingPromotion], None]
PausedCallback = Callable[[bool], None]
ClockTickCallback = Callable[[Color, float], None]  # color, remaining


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_snapshot: list[SnapshotCallback] = field(default_factory=list)
    on_rejected: list[RejectedCallback] = field(default_factory=list)
    on_check: list[CheckCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_promotion_required: list[PromotionCallback] = field(default_factory=list)
    on_paused: list[PausedCallback] = field(default_factory=list)
    on_clock_tick: list[ClockTickCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Validates requests, runs the clock, switches turns, notifies listeners.

    Every method is meant to be called from one thread (the UI thread);
    timer callbacks arrive through :meth:`on_tick` on that same thread.
    """

    __slots__ = (
        "_state",
        "_settings",
        "_clock",
        "_clock_history",
        "_tick_source",
        "events",
    )

    def __init__(
        self,
        settings: GameSettings | None = None,
        tick_source: ITickSource | None = None,
    ) -> None:
        self._settings = settings if settings is not None else GameSettings()
        self._tick_source = tick_source
        self._state = GameState()
        self._clock: Clock | None = None
        self._clock_history: list[ClockSnapshot] = []
        self.events = GameEvents()
        self._reset_clock(self._settings.time_control())
        if self._settings.start_immediately:
            self.start()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def clock(self) -> Clock | None:
        return self._clock

    @property
    def settings(self) -> GameSettings:
        return self._settings

    @property
    def tick_seconds(self) -> float:
        return self._settings.tick_interval_ms / 1000.0

    def snapshot(self) -> GameSnapshot:
        return self._state.snapshot(self._clock_readings())

    # ── Lifecycle ────────────────────────────────────────────────────────

    def new_game(
        self,
        time_control: TimeControl | None = None,
        fen: str | None = None,
    ) -> None:
        """Set up a fresh game. It stays NOT_STARTED until :meth:`start`."""
        self._stop_ticking()
        self._state = GameState()
        self._state.setup(fen)
        self._reset_clock(
            time_control if time_control is not None else self._settings.time_control()
        )
        _LOGGER.info("New game set up (%s)", fen or "standard position")
        self._emit_snapshot()
        if self._settings.start_immediately:
            self.start()

    def start(self) -> CommandResult:
        result = self._state.start()
        if not result:
            return self._reject(result.reason)

        _LOGGER.info("Game started, %s to move", self._state.side_to_move)
        if self._state.is_game_over:
            self._emit_snapshot()
            self._emit_game_over()
            return result
        self._run_clock()
        self._emit_snapshot()
        return result

    def request_restart(self) -> CommandResult:
        _LOGGER.info("Restart requested")
        self.new_game()
        return CommandResult.ok()

    def request_pause_toggle(self) -> CommandResult:
        state = self._state
        if state.phase == GamePhase.RUNNING:
            result = state.pause()
            self._stop_ticking()
            if self._clock is not None:
                self._clock.stop()
            paused = True
        else:
            result = state.resume()
            if not result:
                return self._reject(result.reason)
            self._run_clock()
            paused = False

        _LOGGER.debug("Game %s", "paused" if paused else "resumed")
        for cb in self.events.on_paused:
            cb(paused)
        self._emit_snapshot()
        return result

    # ── Moves ────────────────────────────────────────────────────────────

    def request_move(self, from_sq: Square, to_sq: Square) -> CommandResult:
        result = self._state.commit_move(from_sq, to_sq)
        if not result:
            return self._reject(result.reason)

        if result.pending is not None:
            _LOGGER.debug("Promotion pending on token %d", result.pending.token)
            self._emit_snapshot()
            for cb in self.events.on_promotion_required:
                cb(result.pending)
            return result

        self._after_commit(result)
        return result

    def request_move_by_name(self, from_name: str, to_name: str) -> CommandResult:
        """Like :meth:`request_move` but with square names such as ``"e2"``."""
        try:
            from_sq = parse_square(from_name)
            to_sq = parse_square(to_name)
        except ValueError:
            return self._reject(RejectReason.INVALID_SQUARE)
        return self.request_move(from_sq, to_sq)

    def resolve_promotion(
        self, pending: PendingPromotion, piece_type: PieceType
    ) -> CommandResult:
        result = self._state.resolve_promotion(pending, piece_type)
        if not result:
            return self._reject(result.reason)
        _LOGGER.debug("Promoted to %s", piece_type)
        self._after_commit(result)
        return result

    def request_undo(self) -> CommandResult:
        was_pending = self._state.pending is not None
        result = self._state.undo()
        if not result:
            return self._reject(result.reason)

        if not was_pending and self._clock is not None:
            if self._clock_history:
                self._clock.restore(self._clock_history.pop())
            if self._state.phase == GamePhase.RUNNING:
                self._run_clock()
            else:
                self._clock.stop()

        _LOGGER.debug("Undid %s", result.record)
        self._emit_snapshot()
        return result

    def request_redo(self) -> CommandResult:
        result = self._state.redo()
        if not result:
            return self._reject(result.reason)
        _LOGGER.debug("Redid %s", result.record)
        self._after_commit(result)
        return result

    # ── Clock ────────────────────────────────────────────────────────────

    def on_tick(self, color: Color, seconds: float = 1.0) -> bool:
        clock = self._clock
        if (
            clock is None
            or self._state.phase != GamePhase.RUNNING
            or not clock.is_running
            or clock.active_color != color
        ):
            _LOGGER.debug("Ignoring tick for %s", color)
            return False

        remaining = clock.tick(seconds)
        for cb in self.events.on_clock_tick:
            cb(color, remaining)

        if clock.is_flag_fallen(color):
            clock.stop()
            self._stop_ticking()
            self._state.flag_fall(color)
            _LOGGER.info("%s ran out of time", color)
            self._emit_snapshot()
            self._emit_game_over()
        return True

    def _on_timer(self) -> None:
        clock = self._clock
        if clock is not None and clock.active_color is not None:
            self.on_tick(clock.active_color, self.tick_seconds)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _after_commit(self, result: CommandResult) -> None:
        """Clock handover and notifications after a move entered history."""
        state = self._state
        mover = state.side_to_move.opposite
        if self._clock is not None:
            self._clock_history.append(self._clock.snapshot())
            self._clock.add_increment(mover)

        if state.is_game_over:
            if self._clock is not None:
                self._clock.stop()
            self._stop_ticking()
            _LOGGER.info("Game over: %s by %s", state.result.name, state.end_reason)
            self._emit_snapshot()
            self._emit_game_over()
            return

        if state.phase == GamePhase.RUNNING:
            self._run_clock()
        self._emit_snapshot()
        if result.check:
            for cb in self.events.on_check:
                cb(state.side_to_move)

    def _run_clock(self) -> None:
        """(Re)start the side to move's clock and the single tick schedule."""
        self._stop_ticking()
        if self._clock is None:
            return
        self._clock.start(self._state.side_to_move)
        if self._tick_source is not None and not self._clock.is_unlimited:
            self._tick_source.start(self._on_timer)

    def _stop_ticking(self) -> None:
        if self._tick_source is not None and self._tick_source.is_active:
            self._tick_source.stop()

    def _reset_clock(self, time_control: TimeControl | None) -> None:
        self._clock = Clock(time_control) if time_control is not None else None
        self._clock_history = []

    def _clock_readings(self) -> dict[Color, float | None]:
        clock = self._clock
        if clock is None or clock.is_unlimited:
            return {Color.WHITE: None, Color.BLACK: None}
        return {color: clock.remaining(color) for color in Color}

    def _reject(self, reason: RejectReason | None) -> CommandResult:
        assert reason is not None
        _LOGGER.debug("Request rejected: %s", reason.name)
        for cb in self.events.on_rejected:
            cb(reason)
        return CommandResult.rejected(reason)

    def _emit_snapshot(self) -> None:
        if not self.events.on_snapshot:
            return
        snap = self.snapshot()
        for cb in self.events.on_snapshot:
            cb(snap)

    def _emit_game_over(self) -> None:
        state = self._state
        assert state.end_reason is not None
        for cb in self.events.on_game_over:
            cb(state.result, state.end_reason)
