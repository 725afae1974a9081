"""Click-to-select, click-to-move input handling.

Translates single square clicks into :meth:`GameController.request_move`
calls and describes each click with a :class:`Notice` the UI can show as
a toast.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from hotseat.core.enums import Color
from hotseat.core.piece import Piece
from hotseat.core.types import Square
from hotseat.game.interfaces import CommandResult, RejectReason

if TYPE_CHECKING:
    from hotseat.game.controller import GameController


class NoticeKind(IntEnum):
    """Toast severity."""

    INFO = auto()
    SUCCESS = auto()
    WARNING = auto()
    ERROR = auto()


class NoticeCode(IntEnum):
    PIECE_SELECTED = auto()
    SELECTION_SWITCHED = auto()
    SELECTION_CANCELLED = auto()
    NOT_YOUR_PIECE = auto()
    MOVED = auto()
    CAPTURED = auto()
    PROMOTION_REQUIRED = auto()
    INVALID_MOVE = auto()
    REJECTED = auto()


@dataclass(frozen=True)
class Notice:
    """What a click did, for presentation."""

    kind: NoticeKind
    code: NoticeCode
    color: Color | None = None
    piece: Piece | None = None
    reason: RejectReason | None = None
    targets: frozenset[Square] = field(default_factory=frozenset)
    result: CommandResult | None = None


class BoardSelection:
    """Tracks the selected square between clicks."""

    __slots__ = ("_controller", "_selected", "_targets")

    def __init__(self, controller: GameController) -> None:
        self._controller = controller
        self._selected: Square | None = None
        self._targets: frozenset[Square] = frozenset()

    @property
    def selected(self) -> Square | None:
        return self._selected

    @property
    def targets(self) -> frozenset[Square]:
        """Legal destinations of the selected piece."""
        return self._targets

    def clear(self) -> None:
        self._selected = None
        self._targets = frozenset()

    def click(self, sq: Square) -> Notice:
        state = self._controller.state
        reason = state.availability()
        if reason is not None:
            self.clear()
            return Notice(NoticeKind.ERROR, NoticeCode.REJECTED, reason=reason)

        side = state.side_to_move
        piece = state.position.board[sq]
        own_piece = piece is not None and piece.color == side

        if self._selected is None:
            if not own_piece:
                return Notice(NoticeKind.WARNING, NoticeCode.NOT_YOUR_PIECE, color=side)
            return self._select(sq, NoticeCode.PIECE_SELECTED)

        if sq == self._selected:
            self.clear()
            return Notice(NoticeKind.INFO, NoticeCode.SELECTION_CANCELLED, color=side)

        if own_piece:
            return self._select(sq, NoticeCode.SELECTION_SWITCHED)

        if sq not in self._targets:
            self.clear()
            return Notice(NoticeKind.ERROR, NoticeCode.INVALID_MOVE, color=side)

        from_sq = self._selected
        self.clear()
        result = self._controller.request_move(from_sq, sq)
        if not result:
            return Notice(
                NoticeKind.ERROR,
                NoticeCode.REJECTED,
                reason=result.reason,
                result=result,
            )
        record = result.record
        if result.pending is not None:
            state = self._controller.state
            if state.pending is not None:
                return Notice(
                    NoticeKind.INFO,
                    NoticeCode.PROMOTION_REQUIRED,
                    color=side,
                    result=result,
                )
            # Listeners answered or withdrew the promotion before we got here.
            record = state.last_move
            if (
                record is None
                or record.promotion is None
                or result.record is None
                or record.moving_piece.uid != result.record.moving_piece.uid
            ):
                return Notice(
                    NoticeKind.INFO, NoticeCode.SELECTION_CANCELLED, color=side
                )
            result = CommandResult.ok(record, check=state.in_check)
        if record is not None and record.captured_piece is not None:
            return Notice(
                NoticeKind.SUCCESS,
                NoticeCode.CAPTURED,
                color=side,
                piece=record.captured_piece,
                result=result,
            )
        return Notice(NoticeKind.INFO, NoticeCode.MOVED, color=side, result=result)

    def _select(self, sq: Square, code: NoticeCode) -> Notice:
        piece = self._controller.state.position.board[sq]
        self._selected = sq
        self._targets = frozenset(self._controller.state.legal_moves(sq))
        return Notice(
            NoticeKind.INFO,
            code,
            color=piece.color if piece else None,
            piece=piece,
            targets=self._targets,
        )
