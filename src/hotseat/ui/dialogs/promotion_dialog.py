"""Promotion dialog — lets the player pick the promotion piece."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from hotseat.core.enums import PROMOTION_TYPES, Color, PieceType
from hotseat.core.piece import Piece
from hotseat.ui.i18n import piece_name, t


class PromotionDialog(QDialog):
    """Modal dialog with one button per promotion piece."""

    def __init__(
        self,
        color: Color,
        parent: QWidget | None = None,
        choices: tuple[PieceType, ...] = PROMOTION_TYPES,
    ) -> None:
        super().__init__(parent)
        self.setModal(True)
        self.setFixedSize(340, 130)
        self.setWindowFlags(
            self.windowFlags() & ~Qt.WindowType.WindowContextHelpButtonHint
        )

        self._selected: PieceType = PieceType.QUEEN
        self._buttons: dict[PieceType, QPushButton] = {}

        layout = QVBoxLayout(self)
        self._label = QLabel()
        self._label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._label.setFont(QFont("Adwaita Sans", 11))
        layout.addWidget(self._label)

        btn_row = QHBoxLayout()
        for pt in choices:
            btn = QPushButton(Piece(color, pt).symbol)
            btn.setFont(QFont("DejaVu Sans", 32))
            btn.setFixedSize(68, 68)
            btn.clicked.connect(lambda checked, p=pt: self._choose(p))
            self._buttons[pt] = btn
            btn_row.addWidget(btn)

        layout.addLayout(btn_row)
        self.retranslate_ui()

    def retranslate_ui(self) -> None:
        s = t()
        self.setWindowTitle(s.promote_title)
        self._label.setText(s.promote_label)
        for pt, btn in self._buttons.items():
            btn.setToolTip(piece_name(pt).capitalize())

    def button(self, piece_type: PieceType) -> QPushButton:
        return self._buttons[piece_type]

    def _choose(self, piece_type: PieceType) -> None:
        self._selected = piece_type
        self.accept()

    @property
    def selected(self) -> PieceType:
        return self._selected

    @staticmethod
    def ask(color: Color, parent: QWidget | None = None) -> PieceType | None:
        """Show the dialog and return the chosen piece type, or ``None`` on cancel."""
        dlg = PromotionDialog(color, parent)
        if dlg.exec() == QDialog.DialogCode.Accepted:
            return dlg.selected
        return None
