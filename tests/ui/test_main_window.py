"""Smoke tests for the main window wiring."""

from hotseat.config import GameSettings
from hotseat.core.enums import Color, PieceType
from hotseat.core.types import parse_square
from hotseat.game.interfaces import GamePhase
from hotseat.ui.main_window import MainWindow


def _window(**kwargs: object) -> MainWindow:
    return MainWindow(GameSettings(**kwargs))  # type: ignore[arg-type]


def _click(window: MainWindow, name: str) -> None:
    window.square_button(parse_square(name)).click()


class TestMainWindow:
    def test_initial_board(self, qapp) -> None:
        window = _window()
        assert window.square_button(parse_square("e1")).text() == "♔"
        assert window.square_button(parse_square("d8")).text() == "♛"
        assert window.square_button(parse_square("e4")).text() == ""
        assert window.controller.state.phase == GamePhase.NOT_STARTED

    def test_start_and_move_by_clicks(self, qapp) -> None:
        window = _window()
        window._btn_start.click()
        assert window.controller.state.phase == GamePhase.RUNNING
        _click(window, "e2")
        assert window.selection.selected == parse_square("e2")
        _click(window, "e4")
        assert window.square_button(parse_square("e4")).text() == "♙"
        assert window.controller.state.side_to_move == Color.BLACK
        assert "Black" in window._turn_label.text()

    def test_undo_button(self, qapp) -> None:
        window = _window(start_immediately=True)
        _click(window, "g1")
        _click(window, "f3")
        window._btn_undo.click()
        assert window.square_button(parse_square("g1")).text() == "♘"
        window._btn_redo.click()
        assert window.square_button(parse_square("f3")).text() == "♘"

    def test_pause_button_toggles_text(self, qapp) -> None:
        window = _window(start_immediately=True)
        window._btn_pause.click()
        assert window.controller.state.phase == GamePhase.PAUSED
        assert window._btn_pause.text() == "▶ Resume"

    def test_promotion_uses_chooser(self, qapp) -> None:
        asked: list[Color] = []

        def choose(color: Color, parent: object) -> PieceType:
            asked.append(color)
            return PieceType.ROOK

        window = MainWindow(GameSettings(), promotion_chooser=choose)
        ctrl = window.controller
        ctrl.new_game(fen="4k3/P7/8/8/8/8/8/4K3 w - - 0 1")
        ctrl.start()
        _click(window, "a7")
        _click(window, "a8")
        assert asked == [Color.WHITE]
        assert window.square_button(parse_square("a8")).text() == "♖"
        assert ctrl.state.side_to_move == Color.BLACK

    def test_cancelled_promotion_takes_pawn_back(self, qapp) -> None:
        window = MainWindow(GameSettings(), promotion_chooser=lambda c, p: None)
        ctrl = window.controller
        ctrl.new_game(fen="4k3/P7/8/8/8/8/8/4K3 w - - 0 1")
        ctrl.start()
        _click(window, "a7")
        _click(window, "a8")
        assert ctrl.state.pending is None
        assert window.square_button(parse_square("a7")).text() == "♙"
        assert ctrl.state.side_to_move == Color.WHITE

    def test_russian_labels(self, qapp) -> None:
        window = _window(language="Russian")
        assert window.windowTitle() == "Шахматы вдвоём"

    def test_mating_promotion_keeps_game_over_text(self, qapp) -> None:
        window = MainWindow(
            GameSettings(), promotion_chooser=lambda c, p: PieceType.QUEEN
        )
        ctrl = window.controller
        ctrl.new_game(fen="7k/P7/6K1/8/8/8/8/8 w - - 0 1")
        ctrl.start()
        _click(window, "a7")
        _click(window, "a8")
        assert ctrl.state.phase == GamePhase.ENDED
        assert window._notice_label.text() == "White wins by checkmate."

    def test_checking_move_keeps_check_text(self, qapp) -> None:
        window = _window(start_immediately=True)
        for a, b in (("e2", "e4"), ("f7", "f6")):
            _click(window, a)
            _click(window, b)
        _click(window, "d1")
        _click(window, "h5")
        assert window._notice_label.text() == "Black is in check!"
