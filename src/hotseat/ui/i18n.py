"""Internationalisation strings for the hot-seat UI.

Usage::

    from hotseat.ui.i18n import t, set_language

    set_language("Russian")
    print(t().btn_undo)          # "↩ Отмена"
"""

from __future__ import annotations

from dataclasses import dataclass

from hotseat.core.enums import Color, GameResult, PieceType
from hotseat.game.interfaces import GameEndReason, GamePhase, RejectReason
from hotseat.game.selection import Notice, NoticeCode


@dataclass(frozen=True)
class Strings:
    # ── Main window ──────────────────────────────────────────────────────
    window_title: str
    btn_start: str
    btn_pause: str
    btn_resume: str
    btn_undo: str
    btn_redo: str
    btn_restart: str
    turn_label: str  # "Turn: {color}"
    captured_label: str  # "Captured {color}:"

    color_white: str
    color_black: str
    piece_names: tuple[str, ...]  # indexed by PieceType - 1

    # Phase names (map from GamePhase name → display)
    phase_not_started: str
    phase_running: str
    phase_paused: str
    phase_ended: str

    # Game-over reasons
    game_over_title: str
    wins_checkmate: str  # "{color} wins by checkmate."
    wins_time: str  # "{color} wins on time."
    draw_stalemate: str
    check_given: str  # "{color} is in check!"

    # Rejections
    reject_not_running: str
    reject_game_over: str
    reject_awaiting_promotion: str
    reject_no_piece: str
    reject_wrong_side: str
    reject_illegal_destination: str
    reject_invalid_square: str
    reject_empty_history: str
    reject_empty_redo: str
    reject_bad_promotion: str

    # Selection notices
    notice_selected: str  # "{color} selected {piece}"
    notice_switched: str  # "{color} switched selection to {piece}"
    notice_cancelled: str
    notice_not_your_piece: str
    notice_moved: str  # "Now it's {color}'s turn"
    notice_captured: str  # "{color} captured {piece}!"
    notice_promotion: str
    notice_invalid_move: str

    # ── Promotion dialog ─────────────────────────────────────────────────
    promote_title: str
    promote_label: str


_EN = Strings(
    window_title="Hot-seat Chess",
    btn_start="▶ Start",
    btn_pause="⏸ Pause",
    btn_resume="▶ Resume",
    btn_undo="↩ Undo",
    btn_redo="↪ Redo",
    btn_restart="Restart",
    turn_label="Turn: {color}",
    captured_label="Captured {color}:",
    color_white="White",
    color_black="Black",
    piece_names=("pawn", "knight", "bishop", "rook", "queen", "king"),
    phase_not_started="Not started",
    phase_running="Running",
    phase_paused="Paused",
    phase_ended="Game over",
    game_over_title="Game over",
    wins_checkmate="{color} wins by checkmate.",
    wins_time="{color} wins on time.",
    draw_stalemate="Draw by stalemate.",
    check_given="{color} is in check!",
    reject_not_running="The game is not running.",
    reject_game_over="The game is over.",
    reject_awaiting_promotion="Choose a piece for the promotion first.",
    reject_no_piece="There is no piece on that square.",
    reject_wrong_side="It is not that side's turn.",
    reject_illegal_destination="Illegal move.",
    reject_invalid_square="Unknown square.",
    reject_empty_history="Nothing to undo.",
    reject_empty_redo="Nothing to redo.",
    reject_bad_promotion="That promotion is no longer pending.",
    notice_selected="{color} selected {piece}",
    notice_switched="{color} switched selection to {piece}",
    notice_cancelled="Selection cancelled.",
    notice_not_your_piece="Please select your own piece.",
    notice_moved="Now it's {color}'s turn",
    notice_captured="{color} captured {piece}!",
    notice_promotion="Choose a promotion piece.",
    notice_invalid_move="Invalid move! Select a highlighted square.",
    promote_title="Pawn Promotion",
    promote_label="Choose piece for promotion:",
)

_RU = Strings(
    window_title="Шахматы вдвоём",
    btn_start="▶ Начать",
    btn_pause="⏸ Пауза",
    btn_resume="▶ Продолжить",
    btn_undo="↩ Отмена",
    btn_redo="↪ Повтор",
    btn_restart="Заново",
    turn_label="Ход: {color}",
    captured_label="Взятые ({color}):",
    color_white="Белые",
    color_black="Чёрные",
    piece_names=("пешка", "конь", "слон", "ладья", "ферзь", "король"),
    phase_not_started="Не начата",
    phase_running="Идёт игра",
    phase_paused="Пауза",
    phase_ended="Конец игры",
    game_over_title="Конец игры",
    wins_checkmate="{color} победили матом.",
    wins_time="{color} победили по времени.",
    draw_stalemate="Ничья: пат.",
    check_given="{color}: шах!",
    reject_not_running="Партия не идёт.",
    reject_game_over="Партия окончена.",
    reject_awaiting_promotion="Сначала выберите фигуру для превращения.",
    reject_no_piece="На этом поле нет фигуры.",
    reject_wrong_side="Сейчас ход другой стороны.",
    reject_illegal_destination="Недопустимый ход.",
    reject_invalid_square="Неизвестное поле.",
    reject_empty_history="Нечего отменять.",
    reject_empty_redo="Нечего повторять.",
    reject_bad_promotion="Это превращение уже неактуально.",
    notice_selected="{color}: выбрана фигура {piece}",
    notice_switched="{color}: выбор изменён на {piece}",
    notice_cancelled="Выбор отменён.",
    notice_not_your_piece="Выберите свою фигуру.",
    notice_moved="Ход переходит: {color}",
    notice_captured="{color} взяли: {piece}!",
    notice_promotion="Выберите фигуру для превращения.",
    notice_invalid_move="Недопустимый ход! Выберите подсвеченное поле.",
    promote_title="Превращение пешки",
    promote_label="Выберите фигуру для превращения:",
)

_LOCALES: dict[str, Strings] = {
    "English": _EN,
    "Russian": _RU,
}

LANGUAGES: list[str] = list(_LOCALES.keys())

_current: Strings = _EN


def t() -> Strings:
    """Return the active locale strings."""
    return _current


def set_language(language: str) -> None:
    """Switch the global locale. Unknown names fall back to English."""
    global _current
    _current = _LOCALES.get(language, _EN)


# ── Formatting helpers ───────────────────────────────────────────────────────


def color_name(color: Color) -> str:
    s = t()
    return s.color_white if color == Color.WHITE else s.color_black


def piece_name(piece_type: PieceType) -> str:
    return t().piece_names[piece_type - 1]


def phase_name(phase: GamePhase) -> str:
    s = t()
    return {
        GamePhase.NOT_STARTED: s.phase_not_started,
        GamePhase.RUNNING: s.phase_running,
        GamePhase.PAUSED: s.phase_paused,
        GamePhase.ENDED: s.phase_ended,
    }[phase]


def describe_rejection(reason: RejectReason) -> str:
    s = t()
    return {
        RejectReason.NOT_RUNNING: s.reject_not_running,
        RejectReason.GAME_OVER: s.reject_game_over,
        RejectReason.AWAITING_PROMOTION: s.reject_awaiting_promotion,
        RejectReason.NO_PIECE: s.reject_no_piece,
        RejectReason.WRONG_SIDE: s.reject_wrong_side,
        RejectReason.ILLEGAL_DESTINATION: s.reject_illegal_destination,
        RejectReason.INVALID_SQUARE: s.reject_invalid_square,
        RejectReason.EMPTY_HISTORY: s.reject_empty_history,
        RejectReason.EMPTY_REDO: s.reject_empty_redo,
        RejectReason.BAD_PROMOTION: s.reject_bad_promotion,
    }[reason]


def game_over_text(result: GameResult, reason: GameEndReason | None) -> str:
    s = t()
    if result == GameResult.DRAW:
        return s.draw_stalemate
    winner = result.winner
    if winner is None:
        return ""
    if reason == GameEndReason.FLAG_FALL:
        return s.wins_time.format(color=color_name(winner))
    return s.wins_checkmate.format(color=color_name(winner))


def describe_notice(notice: Notice) -> str:
    s = t()
    color = color_name(notice.color) if notice.color is not None else ""
    piece = piece_name(notice.piece.piece_type) if notice.piece is not None else ""

    match notice.code:
        case NoticeCode.PIECE_SELECTED:
            return s.notice_selected.format(color=color, piece=piece)
        case NoticeCode.SELECTION_SWITCHED:
            return s.notice_switched.format(color=color, piece=piece)
        case NoticeCode.SELECTION_CANCELLED:
            return s.notice_cancelled
        case NoticeCode.NOT_YOUR_PIECE:
            return s.notice_not_your_piece
        case NoticeCode.MOVED:
            next_side = notice.color.opposite if notice.color is not None else None
            return s.notice_moved.format(
                color=color_name(next_side) if next_side is not None else ""
            )
        case NoticeCode.CAPTURED:
            return s.notice_captured.format(color=color, piece=piece)
        case NoticeCode.PROMOTION_REQUIRED:
            return s.notice_promotion
        case NoticeCode.INVALID_MOVE:
            return s.notice_invalid_move
        case NoticeCode.REJECTED:
            if notice.reason is None:
                return s.reject_illegal_destination
            return describe_rejection(notice.reason)
    return ""


def format_clock(seconds: float | None) -> str:
    """``m:ss`` for the clock labels; tenths are shown under ten minutes."""
    if seconds is None:
        return "∞"
    s = max(0.0, seconds)
    mins = int(s) // 60
    secs = int(s) % 60
    tenths = int((s * 10) % 10)
    if mins >= 10:
        return f"{mins}:{secs:02d}"
    return f"{mins}:{secs:02d}.{tenths}"
