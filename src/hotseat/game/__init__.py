"""Game management layer — controller, clock, state machine, input handling.

Quick start::

    from hotseat.game import GameController

    ctrl = GameController()
    ctrl.start()
    ctrl.request_move_by_name("e2", "e4")
"""

from hotseat.game.clock import Clock, ClockSnapshot
from hotseat.game.controller import GameController, GameEvents
from hotseat.game.interfaces import (
    CommandResult,
    GameEndReason,
    GamePhase,
    IClock,
    IGameController,
    ITickSource,
    PendingPromotion,
    RejectReason,
    TimeControl,
)
from hotseat.game.selection import BoardSelection, Notice, NoticeCode, NoticeKind
from hotseat.game.state import GameSnapshot, GameState

__all__ = [
    # Interfaces / value types
    "CommandResult",
    "GameEndReason",
    "GamePhase",
    "IClock",
    "IGameController",
    "ITickSource",
    "PendingPromotion",
    "RejectReason",
    "TimeControl",
    # Concrete
    "BoardSelection",
    "Clock",
    "ClockSnapshot",
    "GameController",
    "GameEvents",
    "GameSnapshot",
    "GameState",
    "Notice",
    "NoticeCode",
    "NoticeKind",
]
