"""Qt bridge re-emitting controller callbacks as signals."""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal

from hotseat.core.enums import Color, GameResult
from hotseat.game.controller import GameController
from hotseat.game.interfaces import GameEndReason, PendingPromotion, RejectReason
from hotseat.game.state import GameSnapshot


class GameBridge(QObject):
    """Subscribes to :class:`GameEvents` and forwards them as Qt signals.

    Widgets connect to the signals instead of registering plain callbacks,
    which keeps the controller free of any Qt import.
    """

    snapshot_changed = pyqtSignal(object)  # GameSnapshot
    move_rejected = pyqtSignal(object)  # RejectReason
    check_given = pyqtSignal(object)  # Color in check
    game_over = pyqtSignal(object, object)  # GameResult, GameEndReason
    promotion_required = pyqtSignal(object)  # PendingPromotion
    pause_toggled = pyqtSignal(bool)
    clock_ticked = pyqtSignal(object, float)  # Color, remaining

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._controller: GameController | None = None

    @property
    def controller(self) -> GameController | None:
        return self._controller

    def attach(self, controller: GameController) -> None:
        """Register forwarding callbacks on *controller*."""
        self._controller = controller
        ev = controller.events
        ev.on_snapshot.append(self._forward_snapshot)
        ev.on_rejected.append(self._forward_rejected)
        ev.on_check.append(self._forward_check)
        ev.on_game_over.append(self._forward_game_over)
        ev.on_promotion_required.append(self._forward_promotion)
        ev.on_paused.append(self.pause_toggled.emit)
        ev.on_clock_tick.append(self._forward_tick)

    # -- Forwarders ----------------------------------------------------------

    def _forward_snapshot(self, snapshot: GameSnapshot) -> None:
        self.snapshot_changed.emit(snapshot)

    def _forward_rejected(self, reason: RejectReason) -> None:
        self.move_rejected.emit(reason)

    def _forward_check(self, color: Color) -> None:
        self.check_given.emit(color)

    def _forward_game_over(self, result: GameResult, reason: GameEndReason) -> None:
        self.game_over.emit(result, reason)

    def _forward_promotion(self, pending: PendingPromotion) -> None:
        self.promotion_required.emit(pending)

    def _forward_tick(self, color: Color, remaining: float) -> None:
        self.clock_ticked.emit(color, remaining)
