"""Pseudo-legal and legal move generation + attack detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from hotseat.core.enums import Color, PieceType
from hotseat.core.piece import Piece
from hotseat.core.types import Square, file_of, make_square, offset_square, rank_of

if TYPE_CHECKING:
    from hotseat.core.position import Position


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

# (rook file, files that must be empty, files the king crosses incl. destination,
#  king destination file)
_CASTLING_WINGS: tuple[tuple[int, tuple[int, ...], tuple[int, ...], int], ...] = (
    (7, (5, 6), (5, 6), 6),
    (0, (1, 2, 3), (3, 2), 2),
)
_KING_START_FILE = 4


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in range(64):
        moves: list[Square] = []
        for df, dr in offsets:
            to_sq = offset_square(sq, df, dr)
            if to_sq is not None:
                moves.append(to_sq)
        targets.append(tuple(moves))
    return tuple(targets)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            ray: list[Square] = []
            to_sq = offset_square(sq, df, dr)
            while to_sq is not None:
                ray.append(to_sq)
                to_sq = offset_square(to_sq, df, dr)
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)

_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)


class MoveGenerator:
    """Generates moves for the pieces of a given :class:`Position`.

    Legality checks mutate the position via ``make_move`` / ``unmake_move``
    internally but always restore it before returning.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Legal moves --------------------------------------------------------

    def legal_moves(self, sq: Square) -> set[Square]:
        """Destinations of the piece on *sq* that keep its own king safe."""
        piece = self._board[sq]
        if piece is None:
            return set()

        pos = self._pos
        legal: set[Square] = set()
        for to_sq in self.pseudo_moves(sq):
            record = pos.make_move(sq, to_sq)
            try:
                if not self.is_in_check(piece.color):
                    legal.add(to_sq)
            finally:
                pos.unmake_move(record)
        return legal

    def legal_moves_for(self, color: Color) -> dict[Square, set[Square]]:
        """Legal destinations per origin square; pieces with none are omitted."""
        result: dict[Square, set[Square]] = {}
        for sq, _piece in list(self._board.pieces(color)):
            targets = self.legal_moves(sq)
            if targets:
                result[sq] = targets
        return result

    def legal_move_count(self, color: Color) -> int:
        return sum(len(targets) for targets in self.legal_moves_for(color).values())

    def has_legal_move(self, color: Color) -> bool:
        for sq, _piece in list(self._board.pieces(color)):
            if self.legal_moves(sq):
                return True
        return False

    # -- Pseudo-legal moves -------------------------------------------------

    def pseudo_moves(self, sq: Square) -> set[Square]:
        """Destinations by movement pattern only (own king safety ignored)."""
        piece = self._board[sq]
        if piece is None:
            return set()

        match piece.piece_type:
            case PieceType.PAWN:
                return self._pawn_moves(sq, piece)
            case PieceType.KNIGHT:
                return self._step_moves(_KNIGHT_TARGETS[sq], piece.color)
            case PieceType.BISHOP:
                return self._slide_moves(_BISHOP_RAYS[sq], piece.color)
            case PieceType.ROOK:
                return self._slide_moves(_ROOK_RAYS[sq], piece.color)
            case PieceType.QUEEN:
                return self._slide_moves(_QUEEN_RAYS[sq], piece.color)
            case PieceType.KING:
                moves = self._step_moves(_KING_TARGETS[sq], piece.color)
                moves |= self._castling_moves(sq, piece)
                return moves

    # -- Attack detection ---------------------------------------------------

    def attacks(self, sq: Square) -> set[Square]:
        """Squares the piece on *sq* attacks.

        Same as :meth:`pseudo_moves` except that pawns attack only their
        forward diagonals and kings never attack by castling.
        """
        piece = self._board[sq]
        if piece is None:
            return set()

        match piece.piece_type:
            case PieceType.PAWN:
                attacked: set[Square] = set()
                for df in (-1, 1):
                    to_sq = offset_square(sq, df, piece.color.forward)
                    if to_sq is None:
                        continue
                    target = self._board[to_sq]
                    if target is None or target.color != piece.color:
                        attacked.add(to_sq)
                return attacked
            case PieceType.KING:
                return self._step_moves(_KING_TARGETS[sq], piece.color)
            case _:
                return self.pseudo_moves(sq)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?"""
        for from_sq, _piece in self._board.pieces(by_color):
            if sq in self.attacks(from_sq):
                return True
        return False

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        king_sq = self._board.king_square(color)
        return self.is_square_attacked(king_sq, color.opposite)

    # -- Piece-specific generators (private) -------------------------------

    def _pawn_moves(self, sq: Square, pawn: Piece) -> set[Square]:
        board = self._board
        color = pawn.color
        forward = color.forward
        moves: set[Square] = set()

        one_step = offset_square(sq, 0, forward)
        if one_step is not None and board.is_empty(one_step):
            moves.add(one_step)
            start_rank = color.home_rank + forward
            if rank_of(sq) == start_rank and not pawn.has_moved:
                two_step = offset_square(sq, 0, 2 * forward)
                if two_step is not None and board.is_empty(two_step):
                    moves.add(two_step)

        for df in (-1, 1):
            cap_sq = offset_square(sq, df, forward)
            if cap_sq is None:
                continue
            target = board[cap_sq]
            if target is not None:
                if target.color != color:
                    moves.add(cap_sq)
            elif self._is_en_passant_target(sq, cap_sq, color):
                moves.add(cap_sq)
        return moves

    def _is_en_passant_target(self, sq: Square, cap_sq: Square, color: Color) -> bool:
        marker = self._pos.en_passant
        if marker is None or marker.piece.color == color:
            return False
        if marker.target != cap_sq:
            return False
        # The double-stepped pawn must still flank the capturer on its rank.
        if rank_of(marker.to_sq) != rank_of(sq):
            return False
        if abs(file_of(marker.to_sq) - file_of(sq)) != 1:
            return False
        return self._board[marker.to_sq] == marker.piece

    def _step_moves(self, targets: tuple[Square, ...], color: Color) -> set[Square]:
        board = self._board
        moves: set[Square] = set()
        for to_sq in targets:
            target = board[to_sq]
            if target is None or target.color != color:
                moves.add(to_sq)
        return moves

    def _slide_moves(
        self,
        rays: tuple[tuple[Square, ...], ...],
        color: Color,
    ) -> set[Square]:
        board = self._board
        moves: set[Square] = set()
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.add(to_sq)
                    continue
                if target.color != color:
                    moves.add(to_sq)
                break
        return moves

    def _castling_moves(self, king_sq: Square, king: Piece) -> set[Square]:
        moves: set[Square] = set()
        color = king.color
        home = color.home_rank
        if king.has_moved or king_sq != make_square(_KING_START_FILE, home):
            return moves

        opponent = color.opposite
        if self.is_square_attacked(king_sq, opponent):
            return moves

        board = self._board
        for rook_file, between, crossed, dest_file in _CASTLING_WINGS:
            rook = board[make_square(rook_file, home)]
            if (
                rook is None
                or rook.color != color
                or rook.piece_type != PieceType.ROOK
                or rook.has_moved
            ):
                continue
            if any(not board.is_empty(make_square(f, home)) for f in between):
                continue
            if any(
                self.is_square_attacked(make_square(f, home), opponent) for f in crossed
            ):
                continue
            moves.add(make_square(dest_file, home))
        return moves
