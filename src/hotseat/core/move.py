"""Move records (undo units) and the en-passant marker."""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from hotseat.core.enums import MoveKind, PieceType
from hotseat.core.piece import Piece
from hotseat.core.types import Square, file_of, make_square, rank_of, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class EnPassantMarker:
    """Pawn double step made on the immediately preceding ply."""

    piece: Piece
    from_sq: Square
    to_sq: Square

    @property
    def target(self) -> Square:
        """The square the pawn skipped over (where a capturer lands)."""
        return make_square(
            file_of(self.to_sq),
            (rank_of(self.from_sq) + rank_of(self.to_sq)) // 2,
        )


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """Everything needed to invert one applied move exactly.

    ``moving_piece`` and ``captured_piece`` are the snapshots taken before
    the move; ``captured_sq`` differs from ``to_sq`` only for en passant.
    For castling ``rook_piece`` travelled from ``rook_from`` to ``rook_to``.
    """

    from_sq: Square
    to_sq: Square
    moving_piece: Piece
    captured_piece: Piece | None = None
    captured_sq: Square | None = None
    kind: MoveKind = MoveKind.NORMAL
    rook_piece: Piece | None = None
    rook_from: Square | None = None
    rook_to: Square | None = None
    previous_en_passant: EnPassantMarker | None = None
    promotion: PieceType | None = None
    timestamp: float = field(default_factory=time.time, compare=False)

    @property
    def previous_moved_flag(self) -> bool:
        return self.moving_piece.has_moved

    @property
    def is_capture(self) -> bool:
        return self.captured_piece is not None

    @property
    def is_castle(self) -> bool:
        return self.kind == MoveKind.CASTLE

    @property
    def is_en_passant(self) -> bool:
        return self.kind == MoveKind.EN_PASSANT

    @property
    def reaches_last_rank(self) -> bool:
        if self.moving_piece.piece_type != PieceType.PAWN:
            return False
        return rank_of(self.to_sq) == self.moving_piece.color.opposite.home_rank

    @property
    def needs_promotion(self) -> bool:
        """Pawn reached the last rank and no piece was substituted yet."""
        return self.reaches_last_rank and self.promotion is None

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        return str(self)
