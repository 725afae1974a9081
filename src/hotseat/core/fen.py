"""FEN placement loading and dumping for setting up positions.

Only the first four FEN fields carry meaning here.  Castling rights are
mapped onto the moved flags of kings and rooks, and the en-passant field
rebuilds the marker of the pawn that just double-stepped.  Clock fields
are accepted and ignored.
"""

from __future__ import annotations

from hotseat.core.board import Board
from hotseat.core.enums import Color, PieceType
from hotseat.core.move import EnPassantMarker
from hotseat.core.piece import Piece
from hotseat.core.position import Position
from hotseat.core.types import Square, make_square, parse_square, rank_of, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

# castling letter -> (color, rook file)
_CASTLING_LETTERS: dict[str, tuple[Color, int]] = {
    "K": (Color.WHITE, 7),
    "Q": (Color.WHITE, 0),
    "k": (Color.BLACK, 7),
    "q": (Color.BLACK, 0),
}


def position_from_fen(fen: str) -> Position:
    """Parse a FEN string into a :class:`Position`."""
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]

    # 1. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")

    # 2. Castling -> unmoved rook squares (kings follow their rooks)
    unmoved_rooks: set[Square] = set()
    unmoved_kings: set[Square] = set()
    if castling_part != "-":
        for ch in castling_part:
            entry = _CASTLING_LETTERS.get(ch)
            if entry is None:
                raise ValueError(f"Invalid FEN castling field: {castling_part!r}")
            color, rook_file = entry
            unmoved_rooks.add(make_square(rook_file, color.home_rank))
            unmoved_kings.add(make_square(4, color.home_rank))

    # 3. Piece placement
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    board = Board()
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                file += step
            else:
                if file >= 8:
                    raise ValueError(f"Invalid FEN rank width: {fen!r}")
                sq = make_square(file, rank)
                piece = Piece.from_char(ch)
                if _initially_moved(piece, sq, unmoved_rooks, unmoved_kings):
                    piece = piece.moved()
                board[sq] = piece
                file += 1
            if file > 8:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
        if file != 8:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")

    for color in Color:
        # Raises ValueError when a king is missing.
        board.king_square(color)

    # 4. En passant
    marker: EnPassantMarker | None = None
    if ep_part != "-":
        target = parse_square(ep_part)
        expected_rank = 5 if side == Color.WHITE else 2
        if rank_of(target) != expected_rank:
            raise ValueError(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )
        mover = side.opposite
        to_sq = target + 8 * mover.forward
        from_sq = target - 8 * mover.forward
        pawn = board[to_sq]
        if pawn is None or pawn.piece_type != PieceType.PAWN or pawn.color != mover:
            raise ValueError(f"No double-stepped pawn behind {ep_part!r}")
        marker = EnPassantMarker(pawn, from_sq, to_sq)

    return Position(board, side, marker)


def _initially_moved(
    piece: Piece,
    sq: Square,
    unmoved_rooks: set[Square],
    unmoved_kings: set[Square],
) -> bool:
    match piece.piece_type:
        case PieceType.ROOK:
            return sq not in unmoved_rooks
        case PieceType.KING:
            return sq not in unmoved_kings
        case PieceType.PAWN:
            return rank_of(sq) != piece.color.home_rank + piece.color.forward
        case _:
            return False


def position_to_fen(pos: Position) -> str:
    """Serialise the first four FEN fields of *pos*."""
    board = pos.board

    # 1. Board
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = board[make_square(file, rank)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if pos.side_to_move == Color.WHITE else "b"

    # 3. Castling, derived from moved flags
    castling_str = ""
    for letter, (color, rook_file) in _CASTLING_LETTERS.items():
        king = board[make_square(4, color.home_rank)]
        rook = board[make_square(rook_file, color.home_rank)]
        if (
            king is not None
            and king.piece_type == PieceType.KING
            and king.color == color
            and not king.has_moved
            and rook is not None
            and rook.piece_type == PieceType.ROOK
            and rook.color == color
            and not rook.has_moved
        ):
            castling_str += letter
    if not castling_str:
        castling_str = "-"

    # 4. En passant
    target = pos.en_passant_target
    ep_str = square_name(target) if target is not None else "-"

    return f"{board_str} {side_str} {castling_str} {ep_str}"
