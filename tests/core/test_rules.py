"""Tests for check, checkmate and stalemate detection."""

from hotseat.core.enums import GameResult
from hotseat.core.fen import STARTING_FEN, position_from_fen
from hotseat.core.rules import Rules


class TestRules:
    def test_start_in_progress(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert not Rules.is_in_check(pos)
        assert Rules.game_result(pos) == GameResult.IN_PROGRESS

    def test_fools_mate(self) -> None:
        pos = position_from_fen(
            "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"
        )
        assert Rules.is_in_check(pos)
        assert Rules.is_checkmate(pos)
        assert not Rules.is_stalemate(pos)
        assert Rules.game_result(pos) == GameResult.BLACK_WINS

    def test_back_rank_mate_for_white(self) -> None:
        pos = position_from_fen("R5k1/5ppp/8/8/8/8/8/6K1 b - - 0 1")
        assert Rules.is_checkmate(pos)
        assert Rules.game_result(pos) == GameResult.WHITE_WINS

    def test_stalemate(self) -> None:
        pos = position_from_fen("7k/5Q2/6K1/8/8/8/8/8 b - - 0 1")
        assert not Rules.is_in_check(pos)
        assert Rules.is_stalemate(pos)
        assert not Rules.is_checkmate(pos)
        assert Rules.game_result(pos) == GameResult.DRAW

    def test_check_with_escape(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/4K2r w - - 0 1")
        assert Rules.is_in_check(pos)
        assert not Rules.is_checkmate(pos)
        assert Rules.game_result(pos) == GameResult.IN_PROGRESS


class TestGameResult:
    def test_winner(self) -> None:
        assert GameResult.WHITE_WINS.winner is not None
        assert GameResult.DRAW.winner is None
        assert GameResult.IN_PROGRESS.winner is None
