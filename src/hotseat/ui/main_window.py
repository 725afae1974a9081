"""MainWindow — a minimal hot-seat board with clocks and controls."""

from __future__ import annotations

import logging
from collections.abc import Callable

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import (
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from hotseat.config import GameSettings
from hotseat.core.enums import Color, GameResult, PieceType
from hotseat.core.types import Square, make_square, square_name
from hotseat.game.controller import GameController
from hotseat.game.interfaces import (
    GameEndReason,
    GamePhase,
    PendingPromotion,
    RejectReason,
)
from hotseat.game.selection import BoardSelection, NoticeKind
from hotseat.game.state import GameSnapshot
from hotseat.ui.dialogs.promotion_dialog import PromotionDialog
from hotseat.ui.i18n import (
    color_name,
    describe_notice,
    describe_rejection,
    format_clock,
    game_over_text,
    phase_name,
    set_language,
    t,
)
from hotseat.ui.qt_bridge import GameBridge
from hotseat.ui.qt_clock import QtTickSource

_LOGGER = logging.getLogger(__name__)

PromotionChooser = Callable[[Color, QWidget | None], PieceType | None]

_LIGHT = "#f0d9b5"
_DARK = "#b58863"
_SELECTED = "#f6f669"
_TARGET = "#9fd18b"
_LAST_MOVE = "#cdd26a"
_CHECK = "#e07070"

_NOTICE_STYLES: dict[NoticeKind, str] = {
    NoticeKind.INFO: "color: #2c5d8f;",
    NoticeKind.SUCCESS: "color: #2e7d32;",
    NoticeKind.WARNING: "color: #b26a00;",
    NoticeKind.ERROR: "color: #c62828;",
}


class MainWindow(QMainWindow):
    """Main application window: 8x8 square buttons plus side panel."""

    def __init__(
        self,
        settings: GameSettings | None = None,
        promotion_chooser: PromotionChooser | None = None,
    ) -> None:
        super().__init__()
        self._settings = settings if settings is not None else GameSettings()
        set_language(self._settings.language)
        self._choose_promotion: PromotionChooser = (
            promotion_chooser if promotion_chooser is not None else PromotionDialog.ask
        )

        self._tick_source = QtTickSource(self._settings.tick_interval_ms, self)
        self._controller = GameController(self._settings, self._tick_source)
        self._selection = BoardSelection(self._controller)
        self._bridge = GameBridge(self)
        self._bridge.attach(self._controller)
        self._snapshot: GameSnapshot = self._controller.snapshot()

        self._squares: dict[Square, QPushButton] = {}
        # Set when a check or game-over message lands during a click.
        self._event_notice = False
        self._build_ui()
        self._connect_signals()
        self.retranslate_ui()
        self._controller.new_game()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def controller(self) -> GameController:
        return self._controller

    @property
    def selection(self) -> BoardSelection:
        return self._selection

    def square_button(self, sq: Square) -> QPushButton:
        return self._squares[sq]

    # ── Layout ───────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        central = QWidget()
        root = QHBoxLayout(central)

        grid = QGridLayout()
        grid.setSpacing(0)
        piece_font = QFont("DejaVu Sans", 28)
        for rank in range(8):
            for file in range(8):
                sq = make_square(file, rank)
                btn = QPushButton()
                btn.setFixedSize(64, 64)
                btn.setFont(piece_font)
                btn.setToolTip(square_name(sq))
                btn.clicked.connect(lambda checked, s=sq: self._on_square_clicked(s))
                self._squares[sq] = btn
                grid.addWidget(btn, 7 - rank, file)
        root.addLayout(grid)

        side = QVBoxLayout()
        self._black_clock = QLabel()
        self._white_clock = QLabel()
        for label in (self._black_clock, self._white_clock):
            label.setFont(QFont("Adwaita Mono", 20))
            label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._captured_black = QLabel()
        self._captured_white = QLabel()
        self._turn_label = QLabel()
        self._phase_label = QLabel()
        self._notice_label = QLabel()
        self._notice_label.setWordWrap(True)

        side.addWidget(self._black_clock)
        side.addWidget(self._captured_white)
        side.addStretch(1)
        side.addWidget(self._turn_label)
        side.addWidget(self._phase_label)
        side.addWidget(self._notice_label)
        side.addStretch(1)
        side.addWidget(self._captured_black)
        side.addWidget(self._white_clock)

        buttons = QHBoxLayout()
        self._btn_start = QPushButton()
        self._btn_pause = QPushButton()
        self._btn_undo = QPushButton()
        self._btn_redo = QPushButton()
        self._btn_restart = QPushButton()
        for btn in (
            self._btn_start,
            self._btn_pause,
            self._btn_undo,
            self._btn_redo,
            self._btn_restart,
        ):
            buttons.addWidget(btn)
        side.addLayout(buttons)
        root.addLayout(side)

        self.setCentralWidget(central)
        self.setStatusBar(QStatusBar())

    def _connect_signals(self) -> None:
        ctrl = self._controller
        self._btn_start.clicked.connect(ctrl.start)
        self._btn_pause.clicked.connect(ctrl.request_pause_toggle)
        self._btn_undo.clicked.connect(self._on_undo)
        self._btn_redo.clicked.connect(self._on_redo)
        self._btn_restart.clicked.connect(self._on_restart)

        bridge = self._bridge
        bridge.snapshot_changed.connect(self._on_snapshot)
        bridge.move_rejected.connect(self._on_rejected)
        bridge.check_given.connect(self._on_check)
        bridge.game_over.connect(self._on_game_over)
        bridge.promotion_required.connect(self._on_promotion_required)
        bridge.clock_ticked.connect(self._on_clock_ticked)

    def retranslate_ui(self) -> None:
        s = t()
        self.setWindowTitle(s.window_title)
        self._btn_start.setText(s.btn_start)
        self._btn_undo.setText(s.btn_undo)
        self._btn_redo.setText(s.btn_redo)
        self._btn_restart.setText(s.btn_restart)
        self._refresh()

    # ── Slots ────────────────────────────────────────────────────────────

    def _on_square_clicked(self, sq: Square) -> None:
        self._event_notice = False
        notice = self._selection.click(sq)
        if not self._event_notice:
            self._show_notice(describe_notice(notice), notice.kind)
        self._refresh_board()

    def _on_undo(self) -> None:
        self._selection.clear()
        self._controller.request_undo()

    def _on_redo(self) -> None:
        self._selection.clear()
        self._controller.request_redo()

    def _on_restart(self) -> None:
        self._selection.clear()
        self._controller.request_restart()
        self._notice_label.clear()

    def _on_snapshot(self, snapshot: GameSnapshot) -> None:
        self._snapshot = snapshot
        self._refresh()

    def _on_rejected(self, reason: RejectReason) -> None:
        self.statusBar().showMessage(describe_rejection(reason), 3000)

    def _on_check(self, color: Color) -> None:
        text = t().check_given.format(color=color_name(color))
        self._show_notice(text, NoticeKind.WARNING)
        self._event_notice = True

    def _on_game_over(self, result: GameResult, reason: GameEndReason) -> None:
        text = game_over_text(result, reason)
        _LOGGER.info("Game over shown: %s", text)
        self._show_notice(text, NoticeKind.SUCCESS)
        self.statusBar().showMessage(f"{t().game_over_title}: {text}")
        self._event_notice = True

    def _on_promotion_required(self, pending: PendingPromotion) -> None:
        piece_type = self._choose_promotion(pending.color, self)
        if piece_type is None:
            _LOGGER.warning("Promotion dialog cancelled, taking the pawn move back")
            self._controller.request_undo()
            return
        self._controller.resolve_promotion(pending, piece_type)

    def _on_clock_ticked(self, color: Color, remaining: float) -> None:
        label = self._white_clock if color == Color.WHITE else self._black_clock
        label.setText(format_clock(remaining))

    # ── Rendering ────────────────────────────────────────────────────────

    def _show_notice(self, text: str, kind: NoticeKind) -> None:
        self._notice_label.setStyleSheet(_NOTICE_STYLES[kind])
        self._notice_label.setText(text)

    def _refresh(self) -> None:
        snap = self._snapshot
        s = t()
        turn = color_name(snap.side_to_move)
        self._turn_label.setText(s.turn_label.format(color=turn))
        self._phase_label.setText(phase_name(snap.phase))
        self._btn_pause.setText(
            s.btn_resume if snap.phase == GamePhase.PAUSED else s.btn_pause
        )
        self._btn_start.setEnabled(snap.phase == GamePhase.NOT_STARTED)
        self._white_clock.setText(format_clock(snap.clocks[Color.WHITE]))
        self._black_clock.setText(format_clock(snap.clocks[Color.BLACK]))
        for color, label in (
            (Color.WHITE, self._captured_white),
            (Color.BLACK, self._captured_black),
        ):
            symbols = "".join(p.symbol for p in snap.captured[color])
            title = s.captured_label.format(color=color_name(color))
            label.setText(f"{title} {symbols}")
        self._refresh_board()

    def _refresh_board(self) -> None:
        snap = self._snapshot
        selected = self._selection.selected
        targets = self._selection.targets
        last = snap.last_move
        check_sq = snap.board.king_square(snap.side_to_move) if snap.in_check else None

        for sq, btn in self._squares.items():
            piece = snap.board[sq]
            btn.setText(piece.symbol if piece is not None else "")
            if sq == selected:
                colour = _SELECTED
            elif sq in targets:
                colour = _TARGET
            elif sq == check_sq:
                colour = _CHECK
            elif last is not None and sq in (last.from_sq, last.to_sq):
                colour = _LAST_MOVE
            elif (sq // 8 + sq % 8) % 2 == 0:
                colour = _DARK
            else:
                colour = _LIGHT
            btn.setStyleSheet(f"background-color: {colour}; border: none;")
