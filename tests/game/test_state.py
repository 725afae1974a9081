"""Tests for the GameState phase machine, history and captures."""

import pytest

from hotseat.core.enums import Color, GameResult, PieceType
from hotseat.core.types import D5, E4, E5, E7, parse_square
from hotseat.game.interfaces import GameEndReason, GamePhase, RejectReason
from hotseat.game.state import GameState


def _running(fen: str | None = None) -> GameState:
    state = GameState()
    state.setup(fen)
    state.start()
    return state


def _play(state: GameState, *moves: str) -> None:
    for move in moves:
        result = state.commit_move(parse_square(move[:2]), parse_square(move[2:]))
        assert result, f"{move} rejected: {result.reason}"


class TestPhases:
    def test_setup_is_not_started(self) -> None:
        state = GameState()
        state.setup()
        assert state.phase == GamePhase.NOT_STARTED
        assert state.side_to_move == Color.WHITE

    def test_moves_refused_before_start(self) -> None:
        state = GameState()
        state.setup()
        result = state.commit_move(parse_square("e2"), E4)
        assert not result
        assert result.reason == RejectReason.NOT_RUNNING

    def test_start_twice(self) -> None:
        state = _running()
        assert state.start().reason == RejectReason.NOT_RUNNING

    def test_pause_resume(self) -> None:
        state = _running()
        assert state.pause()
        assert state.phase == GamePhase.PAUSED
        assert state.availability() == RejectReason.NOT_RUNNING
        assert not state.pause()
        assert state.resume()
        assert state.phase == GamePhase.RUNNING

    def test_start_on_decided_position_ends(self) -> None:
        state = _running("7k/5Q2/6K1/8/8/8/8/8 b - - 0 1")
        assert state.phase == GamePhase.ENDED
        assert state.result == GameResult.DRAW
        assert state.end_reason == GameEndReason.STALEMATE

    def test_flag_fall(self) -> None:
        state = _running()
        state.flag_fall(Color.WHITE)
        assert state.is_game_over
        assert state.result == GameResult.BLACK_WINS
        assert state.end_reason == GameEndReason.FLAG_FALL


class TestValidation:
    def test_no_piece(self) -> None:
        state = _running()
        assert state.validate_move(E4, E5) == RejectReason.NO_PIECE

    def test_wrong_side(self) -> None:
        state = _running()
        assert state.validate_move(E7, E5) == RejectReason.WRONG_SIDE

    def test_illegal_destination(self) -> None:
        state = _running()
        assert (
            state.validate_move(parse_square("e2"), parse_square("e5"))
            == RejectReason.ILLEGAL_DESTINATION
        )

    def test_rejection_leaves_state_untouched(self) -> None:
        state = _running()
        before = state.position.copy()
        state.commit_move(E7, E5)
        assert state.position == before
        assert state.history == []

    def test_legal_moves_only_for_side_to_move(self) -> None:
        state = _running()
        assert state.legal_moves(E7) == set()
        assert state.legal_moves(parse_square("e2")) == {parse_square("e3"), E4}


class TestHistory:
    def test_turns_alternate(self) -> None:
        state = _running()
        _play(state, "e2e4")
        assert state.side_to_move == Color.BLACK
        assert state.ply_count == 1
        assert state.fullmove_display == 1
        _play(state, "e7e5")
        assert state.fullmove_display == 2

    def test_captures_are_tracked_by_captured_color(self) -> None:
        state = _running()
        _play(state, "e2e4", "d7d5", "e4d5")
        assert [p.piece_type for p in state.captured[Color.BLACK]] == [
            PieceType.PAWN
        ]
        assert state.captured[Color.WHITE] == []

    def test_undo_restores_capture_and_turn(self) -> None:
        state = _running()
        _play(state, "e2e4", "d7d5", "e4d5")
        result = state.undo()
        assert result
        assert state.side_to_move == Color.WHITE
        assert state.captured[Color.BLACK] == []
        assert state.position.board[D5] is not None
        assert len(state.redo_stack) == 1

    def test_undo_empty(self) -> None:
        state = _running()
        assert state.undo().reason == RejectReason.EMPTY_HISTORY

    def test_redo_empty(self) -> None:
        state = _running()
        assert state.redo().reason == RejectReason.EMPTY_REDO

    def test_undo_redo_round_trip(self) -> None:
        state = _running()
        _play(state, "e2e4", "e7e5")
        after = state.position.copy()
        state.undo()
        state.undo()
        assert state.redo()
        assert state.redo()
        assert state.position == after
        assert state.ply_count == 2

    def test_new_move_clears_redo(self) -> None:
        state = _running()
        _play(state, "e2e4")
        state.undo()
        _play(state, "d2d4")
        assert state.redo().reason == RejectReason.EMPTY_REDO

    def test_undo_reopens_finished_game(self) -> None:
        state = _running()
        _play(state, "f2f3", "e7e5", "g2g4", "d8h4")
        assert state.result == GameResult.BLACK_WINS
        assert state.undo()
        assert state.phase == GamePhase.RUNNING
        assert state.result == GameResult.IN_PROGRESS
        assert state.end_reason is None


class TestPromotion:
    FEN = "4k3/P7/8/8/8/8/8/4K3 w - - 0 1"

    def test_pending_blocks_other_moves(self) -> None:
        state = _running(self.FEN)
        result = state.commit_move(parse_square("a7"), parse_square("a8"))
        assert result
        assert result.pending is not None
        assert state.side_to_move == Color.WHITE
        assert state.history == []
        blocked = state.commit_move(parse_square("e1"), parse_square("e2"))
        assert blocked.reason == RejectReason.AWAITING_PROMOTION

    def test_resolve(self) -> None:
        state = _running(self.FEN)
        pending = state.commit_move(parse_square("a7"), parse_square("a8")).pending
        assert pending is not None
        result = state.resolve_promotion(pending, PieceType.QUEEN)
        assert result
        assert result.check
        assert state.side_to_move == Color.BLACK
        assert state.history[-1].promotion == PieceType.QUEEN
        assert state.pending is None

    def test_stale_token(self) -> None:
        state = _running(self.FEN)
        pending = state.commit_move(parse_square("a7"), parse_square("a8")).pending
        assert pending is not None
        state.undo()
        result = state.resolve_promotion(pending, PieceType.QUEEN)
        assert result.reason == RejectReason.BAD_PROMOTION

    @pytest.mark.parametrize("bad", [PieceType.PAWN, PieceType.KING])
    def test_bad_choice(self, bad: PieceType) -> None:
        state = _running(self.FEN)
        pending = state.commit_move(parse_square("a7"), parse_square("a8")).pending
        assert pending is not None
        result = state.resolve_promotion(pending, bad)
        assert result.reason == RejectReason.BAD_PROMOTION
        assert state.pending == pending

    def test_resolve_refused_while_paused(self) -> None:
        state = _running(self.FEN)
        pending = state.commit_move(parse_square("a7"), parse_square("a8")).pending
        assert pending is not None
        assert state.pause()
        result = state.resolve_promotion(pending, PieceType.QUEEN)
        assert result.reason == RejectReason.NOT_RUNNING
        assert state.history == []
        assert state.side_to_move == Color.WHITE
        assert state.pending == pending
        assert state.resume()
        assert state.resolve_promotion(pending, PieceType.QUEEN)

    def test_undo_cancels_pending(self) -> None:
        state = _running(self.FEN)
        state.commit_move(parse_square("a7"), parse_square("a8"))
        assert state.undo()
        pawn = state.position.board[parse_square("a7")]
        assert pawn is not None and pawn.piece_type == PieceType.PAWN
        assert state.pending is None
        assert state.side_to_move == Color.WHITE

    def test_redo_keeps_choice(self) -> None:
        state = _running(self.FEN)
        pending = state.commit_move(parse_square("a7"), parse_square("a8")).pending
        assert pending is not None
        state.resolve_promotion(pending, PieceType.KNIGHT)
        state.undo()
        assert state.redo()
        piece = state.position.board[parse_square("a8")]
        assert piece is not None and piece.piece_type == PieceType.KNIGHT

    def test_flag_fall_reverts_provisional_move(self) -> None:
        state = _running(self.FEN)
        state.commit_move(parse_square("a7"), parse_square("a8"))
        state.flag_fall(Color.WHITE)
        assert state.position.board[parse_square("a8")] is None
        assert state.pending is None
        assert state.result == GameResult.BLACK_WINS


class TestSnapshot:
    def test_snapshot_is_detached(self) -> None:
        state = _running()
        snap = state.snapshot()
        _play(state, "e2e4")
        assert snap.board[E4] is None
        assert snap.side_to_move == Color.WHITE
        assert snap.clocks == {Color.WHITE: None, Color.BLACK: None}
