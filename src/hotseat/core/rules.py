"""High-level chess rules: check, checkmate, stalemate."""

from __future__ import annotations

from typing import TYPE_CHECKING

from hotseat.core.enums import GameResult
from hotseat.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from hotseat.core.position import Position


class Rules:
    """Static rule-checker that operates on a :class:`Position`.

    Only stalemate ends a game as a draw; repetition, fifty-move and
    material draws are not tracked.
    """

    @staticmethod
    def is_in_check(position: Position) -> bool:
        gen = MoveGenerator(position)
        return gen.is_in_check(position.side_to_move)

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        if not Rules.is_in_check(position):
            return False
        gen = MoveGenerator(position)
        return not gen.has_legal_move(position.side_to_move)

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        if Rules.is_in_check(position):
            return False
        gen = MoveGenerator(position)
        return not gen.has_legal_move(position.side_to_move)

    @staticmethod
    def game_result(position: Position) -> GameResult:
        """Determine the result for the side to move."""
        gen = MoveGenerator(position)
        color = position.side_to_move
        if gen.has_legal_move(color):
            return GameResult.IN_PROGRESS
        if gen.is_in_check(color):
            return GameResult.win_for(color.opposite)
        return GameResult.DRAW  # stalemate
