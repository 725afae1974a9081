"""Tests for Position make/unmake, promotion and replay."""

import pytest

from hotseat.core.enums import Color, MoveKind, PieceType
from hotseat.core.fen import position_from_fen, position_to_fen
from hotseat.core.move_generator import MoveGenerator
from hotseat.core.position import Position
from hotseat.core.types import (
    A1,
    D1,
    D5,
    D6,
    D8,
    E1,
    E2,
    E4,
    E5,
    E7,
    E8,
    F1,
    G1,
    H1,
    parse_square,
)


def _assert_round_trip(pos: Position, from_sq: int, to_sq: int) -> None:
    before = pos.copy()
    record = pos.make_move(from_sq, to_sq)
    assert pos != before
    pos.unmake_move(record)
    assert pos == before


class TestMakeUnmake:
    def test_side_is_left_alone(self) -> None:
        pos = Position()
        pos.make_move(E2, E4)
        assert pos.side_to_move == Color.WHITE

    def test_quiet_move_marks_piece_moved(self) -> None:
        pos = Position()
        record = pos.make_move(E2, E4)
        pawn = pos.board[E4]
        assert pawn is not None and pawn.has_moved
        assert pawn.uid == record.moving_piece.uid
        assert not record.previous_moved_flag
        assert pos.board[E2] is None

    def test_double_step_sets_marker(self) -> None:
        pos = Position()
        pos.make_move(E2, E4)
        assert pos.en_passant is not None
        assert pos.en_passant_target == parse_square("e3")

    def test_single_step_clears_marker(self) -> None:
        pos = Position()
        pos.make_move(E2, E4)
        pos.make_move(parse_square("g8"), parse_square("f6"))
        assert pos.en_passant is None

    def test_round_trip_quiet(self) -> None:
        _assert_round_trip(Position(), E2, E4)

    def test_round_trip_capture(self) -> None:
        pos = position_from_fen("4k3/8/8/3p4/4P3/8/8/4K3 w - - 0 1")
        record = pos.make_move(E4, D5)
        assert record.is_capture
        assert record.captured_sq == D5
        pos.unmake_move(record)
        _assert_round_trip(pos, E4, D5)

    def test_round_trip_en_passant(self) -> None:
        pos = position_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1")
        record = pos.make_move(E5, D6)
        assert record.kind == MoveKind.EN_PASSANT
        assert record.captured_sq == D5
        assert pos.board[D5] is None
        pos.unmake_move(record)
        _assert_round_trip(pos, E5, D6)

    def test_round_trip_castle(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/R3K2R w KQ - 0 1")
        record = pos.make_move(E1, G1)
        assert record.is_castle
        rook = pos.board[F1]
        assert rook is not None and rook.piece_type == PieceType.ROOK
        assert rook.has_moved
        assert pos.board[H1] is None
        pos.unmake_move(record)
        _assert_round_trip(pos, E1, G1)
        _assert_round_trip(pos, E1, parse_square("c1"))

    def test_queenside_castle_moves_rook_to_d(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/R3K2R w KQ - 0 1")
        pos.make_move(E1, parse_square("c1"))
        rook = pos.board[D1]
        assert rook is not None and rook.piece_type == PieceType.ROOK
        assert pos.board[A1] is None

    def test_every_legal_move_round_trips(self) -> None:
        pos = position_from_fen(
            "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"
        )
        fen_before = position_to_fen(pos)
        gen = MoveGenerator(pos)
        for from_sq, targets in gen.legal_moves_for(Color.WHITE).items():
            for to_sq in targets:
                record = pos.make_move(from_sq, to_sq)
                pos.unmake_move(record)
                assert position_to_fen(pos) == fen_before

    def test_missing_piece_raises(self) -> None:
        with pytest.raises(ValueError):
            Position().make_move(E4, parse_square("e5"))


class TestPromotion:
    FEN = "3r2k1/4P3/8/8/8/8/8/4K3 w - - 0 1"

    def test_pawn_stays_until_promoted(self) -> None:
        pos = position_from_fen(self.FEN)
        record = pos.make_move(E7, E8)
        assert record.needs_promotion
        pawn = pos.board[E8]
        assert pawn is not None and pawn.piece_type == PieceType.PAWN

    def test_promote_replaces_pawn(self) -> None:
        pos = position_from_fen(self.FEN)
        record = pos.make_move(E7, E8)
        final = pos.promote(record, PieceType.KNIGHT)
        assert final.promotion == PieceType.KNIGHT
        assert not final.needs_promotion
        piece = pos.board[E8]
        assert piece is not None and piece.piece_type == PieceType.KNIGHT
        assert piece.uid != record.moving_piece.uid
        assert str(final) == "e7e8n"

    def test_unmake_promoted_capture_restores_both(self) -> None:
        pos = position_from_fen(self.FEN)
        before = pos.copy()
        record = pos.promote(pos.make_move(E7, D8), PieceType.QUEEN)
        assert record.captured_piece is not None
        pos.unmake_move(record)
        assert pos == before

    @pytest.mark.parametrize("bad", [PieceType.PAWN, PieceType.KING])
    def test_bad_promotion_type(self, bad: PieceType) -> None:
        pos = position_from_fen(self.FEN)
        record = pos.make_move(E7, E8)
        with pytest.raises(ValueError):
            pos.promote(record, bad)

    def test_promote_non_promotion_raises(self) -> None:
        pos = Position()
        record = pos.make_move(E2, E4)
        with pytest.raises(ValueError):
            pos.promote(record, PieceType.QUEEN)

    def test_replay_reapplies_choice(self) -> None:
        pos = position_from_fen(self.FEN)
        record = pos.promote(pos.make_move(E7, E8), PieceType.ROOK)
        pos.unmake_move(record)
        again = pos.replay(record)
        assert again.promotion == PieceType.ROOK
        piece = pos.board[E8]
        assert piece is not None and piece.piece_type == PieceType.ROOK
