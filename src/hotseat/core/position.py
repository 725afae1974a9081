"""Position — board plus side to move and en-passant marker, with make/unmake."""

from __future__ import annotations

from dataclasses import replace

from hotseat.core.board import Board
from hotseat.core.enums import PROMOTION_TYPES, Color, MoveKind, PieceType
from hotseat.core.move import EnPassantMarker, MoveRecord
from hotseat.core.piece import Piece
from hotseat.core.types import Square, file_of, make_square, rank_of, square_name


class Position:
    """Board + side to move + en-passant marker.

    :meth:`make_move` applies a move and returns the :class:`MoveRecord`
    that :meth:`unmake_move` needs to restore the previous state exactly.
    Neither touches ``side_to_move``; turn alternation belongs to the game
    layer so probes made by the legality filter leave it alone.
    """

    __slots__ = ("board", "side_to_move", "en_passant")

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        en_passant: EnPassantMarker | None = None,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.en_passant = en_passant

    # ── Core move operations ─────────────────────────────────────────────

    def make_move(self, from_sq: Square, to_sq: Square) -> MoveRecord:
        """Apply the move *from_sq* → *to_sq* and return its undo record.

        The move is assumed pseudo-legal; only a missing piece is rejected.
        """
        board = self.board
        piece = board[from_sq]
        if piece is None:
            raise ValueError(f"No piece on {square_name(from_sq)}")

        captured = board[to_sq]
        captured_sq: Square | None = to_sq if captured is not None else None
        kind = MoveKind.NORMAL
        rook: Piece | None = None
        rook_from: Square | None = None
        rook_to: Square | None = None

        if (
            piece.piece_type == PieceType.PAWN
            and file_of(from_sq) != file_of(to_sq)
            and captured is None
        ):
            # En passant: the captured pawn sits beside the origin square
            kind = MoveKind.EN_PASSANT
            captured_sq = make_square(file_of(to_sq), rank_of(from_sq))
            captured = board[captured_sq]
        elif (
            piece.piece_type == PieceType.KING
            and abs(file_of(to_sq) - file_of(from_sq)) == 2
        ):
            kind = MoveKind.CASTLE
            rank = rank_of(from_sq)
            if file_of(to_sq) > file_of(from_sq):
                rook_from, rook_to = make_square(7, rank), make_square(5, rank)
            else:
                rook_from, rook_to = make_square(0, rank), make_square(3, rank)
            rook = board[rook_from]
            if rook is None:
                raise ValueError(f"No rook on {square_name(rook_from)} to castle with")

        record = MoveRecord(
            from_sq=from_sq,
            to_sq=to_sq,
            moving_piece=piece,
            captured_piece=captured,
            captured_sq=captured_sq,
            kind=kind,
            rook_piece=rook,
            rook_from=rook_from,
            rook_to=rook_to,
            previous_en_passant=self.en_passant,
        )

        board[from_sq] = None
        if captured_sq is not None:
            board[captured_sq] = None
        placed = piece.moved()
        board[to_sq] = placed

        if rook is not None and rook_from is not None and rook_to is not None:
            board[rook_from] = None
            board[rook_to] = rook.moved()

        double_step = abs(rank_of(to_sq) - rank_of(from_sq)) == 2
        if piece.piece_type == PieceType.PAWN and double_step:
            self.en_passant = EnPassantMarker(placed, from_sq, to_sq)
        else:
            self.en_passant = None

        return record

    def unmake_move(self, record: MoveRecord) -> None:
        """Invert *record*, which must be the most recently applied move."""
        board = self.board
        board[record.to_sq] = None

        if record.rook_from is not None and record.rook_to is not None:
            board[record.rook_to] = None
            board[record.rook_from] = record.rook_piece

        board[record.from_sq] = record.moving_piece
        if record.captured_sq is not None:
            board[record.captured_sq] = record.captured_piece

        self.en_passant = record.previous_en_passant

    def promote(self, record: MoveRecord, piece_type: PieceType) -> MoveRecord:
        """Replace the pawn that *record* moved onto the last rank.

        Returns the finalized record; :meth:`unmake_move` on it brings the
        original pawn back.
        """
        if piece_type not in PROMOTION_TYPES:
            raise ValueError(f"Cannot promote to {piece_type.name}")
        if not record.needs_promotion:
            raise ValueError(f"Move {record} does not require promotion")

        pawn = self.board[record.to_sq]
        if pawn is None or pawn.uid != record.moving_piece.uid:
            where = square_name(record.to_sq)
            raise ValueError(f"Promoting pawn is no longer on {where}")

        self.board[record.to_sq] = Piece(pawn.color, piece_type, has_moved=True)
        return replace(record, promotion=piece_type)

    def replay(self, record: MoveRecord) -> MoveRecord:
        """Re-apply *record*'s move, including its promotion choice."""
        fresh = self.make_move(record.from_sq, record.to_sq)
        if record.promotion is not None:
            fresh = self.promote(fresh, record.promotion)
        return fresh

    # ── Utilities ────────────────────────────────────────────────────────

    def switch_side(self) -> None:
        self.side_to_move = self.side_to_move.opposite

    @property
    def en_passant_target(self) -> Square | None:
        if self.en_passant is None:
            return None
        return self.en_passant.target

    def copy(self) -> Position:
        """Independent copy sharing the (immutable) pieces."""
        return Position(
            board=self.board.copy(),
            side_to_move=self.side_to_move,
            en_passant=self.en_passant,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (
            self.board == other.board
            and self.side_to_move == other.side_to_move
            and self.en_passant == other.en_passant
        )

    def __repr__(self) -> str:
        return f"{self.board!r}\n{self.side_to_move} to move"
