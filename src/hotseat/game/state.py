"""Game state machine — phases, move history, redo stack, captures."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field

from hotseat.core.board import Board
from hotseat.core.enums import PROMOTION_TYPES, Color, GameResult, PieceType
from hotseat.core.fen import position_from_fen
from hotseat.core.move import MoveRecord
from hotseat.core.move_generator import MoveGenerator
from hotseat.core.piece import Piece
from hotseat.core.position import Position
from hotseat.core.rules import Rules
from hotseat.core.types import Square
from hotseat.game.interfaces import (
    CommandResult,
    GameEndReason,
    GamePhase,
    PendingPromotion,
    RejectReason,
)


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of the game handed to presentation code."""

    board: Board
    side_to_move: Color
    last_move: MoveRecord | None
    captured: dict[Color, tuple[Piece, ...]]
    phase: GamePhase
    result: GameResult
    end_reason: GameEndReason | None
    clocks: dict[Color, float | None]
    pending_promotion: PendingPromotion | None = None
    in_check: bool = False


def _empty_captures() -> dict[Color, list[Piece]]:
    return {Color.WHITE: [], Color.BLACK: []}


@dataclass
class GameState:
    """Owns one game: position, phase, history and captured pieces.

    This is a pure data/logic class — no clock, no UI.  Every method that
    refuses a request returns a rejected :class:`CommandResult` and leaves
    all fields untouched.
    """

    position: Position = field(default_factory=Position, init=False)
    phase: GamePhase = field(default=GamePhase.NOT_STARTED, init=False)
    result: GameResult = field(default=GameResult.IN_PROGRESS, init=False)
    end_reason: GameEndReason | None = field(default=None, init=False)
    history: list[MoveRecord] = field(default_factory=list, init=False)
    redo_stack: list[MoveRecord] = field(default_factory=list, init=False)
    # Keyed by the color of the captured piece, in capture order.
    captured: dict[Color, list[Piece]] = field(
        default_factory=_empty_captures, init=False
    )
    pending: PendingPromotion | None = field(default=None, init=False)
    in_check: bool = field(default=False, init=False)
    _pending_record: MoveRecord | None = field(default=None, init=False, repr=False)
    _tokens: itertools.count = field(
        default_factory=lambda: itertools.count(1), init=False, repr=False
    )

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, fen: str | None = None) -> None:
        """Initialise (or reset) the game; the phase returns to NOT_STARTED."""
        self.position = position_from_fen(fen) if fen else Position()
        self.phase = GamePhase.NOT_STARTED
        self.result = GameResult.IN_PROGRESS
        self.end_reason = None
        self.history.clear()
        self.redo_stack.clear()
        self.captured = _empty_captures()
        self.pending = None
        self._pending_record = None
        self.in_check = MoveGenerator(self.position).is_in_check(self.side_to_move)

    # ── Phase transitions ────────────────────────────────────────────────

    def start(self) -> CommandResult:
        if self.phase == GamePhase.ENDED:
            return CommandResult.rejected(RejectReason.GAME_OVER)
        if self.phase != GamePhase.NOT_STARTED:
            return CommandResult.rejected(RejectReason.NOT_RUNNING)
        self.phase = GamePhase.RUNNING
        # A set-up position may already be decided.
        self._evaluate_terminal()
        return CommandResult.ok()

    def pause(self) -> CommandResult:
        if self.phase != GamePhase.RUNNING:
            return CommandResult.rejected(self._phase_reason())
        self.phase = GamePhase.PAUSED
        return CommandResult.ok()

    def resume(self) -> CommandResult:
        if self.phase != GamePhase.PAUSED:
            return CommandResult.rejected(self._phase_reason())
        self.phase = GamePhase.RUNNING
        return CommandResult.ok()

    def flag_fall(self, color: Color) -> None:
        """Time ran out for *color*. A provisional promotion move is taken back."""
        if self._pending_record is not None:
            self.position.unmake_move(self._pending_record)
            self.pending = None
            self._pending_record = None
        self._end(GameResult.win_for(color.opposite), GameEndReason.FLAG_FALL)

    # ── Moves ────────────────────────────────────────────────────────────

    def validate_move(self, from_sq: Square, to_sq: Square) -> RejectReason | None:
        """Why ``from_sq → to_sq`` cannot be played now, or ``None`` if it can."""
        reason = self.availability()
        if reason is not None:
            return reason
        piece = self.position.board[from_sq]
        if piece is None:
            return RejectReason.NO_PIECE
        if piece.color != self.side_to_move:
            return RejectReason.WRONG_SIDE
        if to_sq not in MoveGenerator(self.position).legal_moves(from_sq):
            return RejectReason.ILLEGAL_DESTINATION
        return None

    def availability(self) -> RejectReason | None:
        """Why no move can be played at all right now, or ``None``."""
        if self.phase != GamePhase.RUNNING:
            return self._phase_reason()
        if self.pending is not None:
            return RejectReason.AWAITING_PROMOTION
        return None

    def commit_move(self, from_sq: Square, to_sq: Square) -> CommandResult:
        """Play a move for the side to move.

        A pawn reaching the last rank only moves provisionally: the result
        carries a :class:`PendingPromotion` and nothing is committed until
        :meth:`resolve_promotion` is called with the same token.
        """
        reason = self.validate_move(from_sq, to_sq)
        if reason is not None:
            return CommandResult.rejected(reason)

        record = self.position.make_move(from_sq, to_sq)
        if record.needs_promotion:
            self._pending_record = record
            self.pending = PendingPromotion(
                token=next(self._tokens),
                color=record.moving_piece.color,
                square=to_sq,
            )
            return CommandResult.ok(record, pending=self.pending)

        return self._commit(record, clear_redo=True)

    def resolve_promotion(
        self, pending: PendingPromotion, piece_type: PieceType
    ) -> CommandResult:
        if self.phase != GamePhase.RUNNING:
            return CommandResult.rejected(self._phase_reason())
        if self.pending is None or self._pending_record is None:
            return CommandResult.rejected(RejectReason.BAD_PROMOTION)
        if pending.token != self.pending.token or piece_type not in PROMOTION_TYPES:
            return CommandResult.rejected(RejectReason.BAD_PROMOTION)

        record = self.position.promote(self._pending_record, piece_type)
        self.pending = None
        self._pending_record = None
        return self._commit(record, clear_redo=True)

    def undo(self) -> CommandResult:
        """Take back the last move, or cancel a suspended promotion."""
        if self._pending_record is not None:
            record = self._pending_record
            self.position.unmake_move(record)
            self.pending = None
            self._pending_record = None
            return CommandResult.ok(record)

        if not self.history:
            return CommandResult.rejected(RejectReason.EMPTY_HISTORY)

        record = self.history.pop()
        self.position.unmake_move(record)
        if record.captured_piece is not None:
            self.captured[record.captured_piece.color].pop()
        self.redo_stack.append(record)
        self.position.switch_side()

        # Reset result if we un-did a game-ending move
        if self.phase == GamePhase.ENDED:
            self.phase = GamePhase.RUNNING
            self.result = GameResult.IN_PROGRESS
            self.end_reason = None
        self.in_check = MoveGenerator(self.position).is_in_check(self.side_to_move)
        return CommandResult.ok(record, check=self.in_check)

    def redo(self) -> CommandResult:
        """Replay the most recently undone move with its promotion choice."""
        if self.pending is not None:
            return CommandResult.rejected(RejectReason.AWAITING_PROMOTION)
        if not self.redo_stack:
            return CommandResult.rejected(RejectReason.EMPTY_REDO)
        if self.phase == GamePhase.ENDED:
            return CommandResult.rejected(RejectReason.GAME_OVER)

        record = self.position.replay(self.redo_stack.pop())
        return self._commit(record, clear_redo=False)

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def side_to_move(self) -> Color:
        return self.position.side_to_move

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.ENDED

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.history)

    @property
    def fullmove_display(self) -> int:
        """Current full-move number for display."""
        return (self.ply_count // 2) + 1

    @property
    def last_move(self) -> MoveRecord | None:
        if self._pending_record is not None:
            return self._pending_record
        return self.history[-1] if self.history else None

    def legal_moves(self, sq: Square) -> set[Square]:
        """Legal destinations from *sq*; empty unless its owner is to move."""
        piece = self.position.board[sq]
        if piece is None or piece.color != self.side_to_move:
            return set()
        return MoveGenerator(self.position).legal_moves(sq)

    def snapshot(self, clocks: dict[Color, float | None] | None = None) -> GameSnapshot:
        return GameSnapshot(
            board=self.position.board.copy(),
            side_to_move=self.side_to_move,
            last_move=self.last_move,
            captured={color: tuple(pieces) for color, pieces in self.captured.items()},
            phase=self.phase,
            result=self.result,
            end_reason=self.end_reason,
            clocks=clocks or {Color.WHITE: None, Color.BLACK: None},
            pending_promotion=self.pending,
            in_check=self.in_check,
        )

    # ── Internal ─────────────────────────────────────────────────────────

    def _commit(self, record: MoveRecord, *, clear_redo: bool) -> CommandResult:
        if record.captured_piece is not None:
            self.captured[record.captured_piece.color].append(record.captured_piece)
        self.history.append(record)
        if clear_redo:
            self.redo_stack.clear()
        self.position.switch_side()
        self._evaluate_terminal()
        return CommandResult.ok(record, check=self.in_check)

    def _evaluate_terminal(self) -> None:
        position = self.position
        self.in_check = Rules.is_in_check(position)
        result = Rules.game_result(position)
        if result == GameResult.IN_PROGRESS:
            return
        reason = (
            GameEndReason.STALEMATE
            if result == GameResult.DRAW
            else GameEndReason.CHECKMATE
        )
        self._end(result, reason)

    def _end(self, result: GameResult, reason: GameEndReason) -> None:
        self.result = result
        self.end_reason = reason
        self.phase = GamePhase.ENDED

    def _phase_reason(self) -> RejectReason:
        if self.phase == GamePhase.ENDED:
            return RejectReason.GAME_OVER
        return RejectReason.NOT_RUNNING
