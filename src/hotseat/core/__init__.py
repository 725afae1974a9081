"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from hotseat.core import MoveGenerator, Position, parse_square

    pos = Position()
    gen = MoveGenerator(pos)
    print(sorted(gen.legal_moves(parse_square("g1"))))
"""

from hotseat.core.board import Board
from hotseat.core.enums import PROMOTION_TYPES, Color, GameResult, MoveKind, PieceType
from hotseat.core.fen import STARTING_FEN, position_from_fen, position_to_fen
from hotseat.core.move import EnPassantMarker, MoveRecord
from hotseat.core.move_generator import MoveGenerator
from hotseat.core.piece import Piece
from hotseat.core.position import Position
from hotseat.core.rules import Rules
from hotseat.core.types import (
    Square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums
    "Color",
    "GameResult",
    "MoveKind",
    "PieceType",
    "PROMOTION_TYPES",
    # Types / helpers
    "Square",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "EnPassantMarker",
    "MoveGenerator",
    "MoveRecord",
    "Piece",
    "Position",
    "Rules",
    # Setup
    "STARTING_FEN",
    "position_from_fen",
    "position_to_fen",
]
