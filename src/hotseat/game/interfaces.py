"""Abstract interfaces and small value types for the game layer.

The controller depends on these ABCs, not on the concrete clock or the
timer that drives it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from hotseat.core.enums import PROMOTION_TYPES, Color, PieceType
from hotseat.core.types import Square

if TYPE_CHECKING:
    from hotseat.core.move import MoveRecord


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game."""

    NOT_STARTED = auto()
    RUNNING = auto()
    PAUSED = auto()
    ENDED = auto()


class GameEndReason(IntEnum):
    """Why a game reached :attr:`GamePhase.ENDED`."""

    CHECKMATE = auto()
    STALEMATE = auto()
    FLAG_FALL = auto()


class RejectReason(IntEnum):
    """Why a request was refused. State is unchanged whenever one is returned."""

    NOT_RUNNING = auto()
    GAME_OVER = auto()
    AWAITING_PROMOTION = auto()
    NO_PIECE = auto()
    WRONG_SIDE = auto()
    ILLEGAL_DESTINATION = auto()
    INVALID_SQUARE = auto()
    EMPTY_HISTORY = auto()
    EMPTY_REDO = auto()
    BAD_PROMOTION = auto()


# ── Value types ──────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class PendingPromotion:
    """Token for a pawn move that waits for a piece choice."""

    token: int
    color: Color
    square: Square
    choices: tuple[PieceType, ...] = PROMOTION_TYPES


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of a request. Truthy iff the request was accepted."""

    accepted: bool
    reason: RejectReason | None = None
    record: MoveRecord | None = None
    pending: PendingPromotion | None = None
    check: bool = False

    def __bool__(self) -> bool:
        return self.accepted

    @classmethod
    def ok(
        cls,
        record: MoveRecord | None = None,
        *,
        pending: PendingPromotion | None = None,
        check: bool = False,
    ) -> CommandResult:
        return cls(True, None, record, pending, check)

    @classmethod
    def rejected(cls, reason: RejectReason) -> CommandResult:
        return cls(False, reason)


# ── Time control presets ─────────────────────────────────────────────────────


class TimeControl:
    """Immutable time-control definition.

    Args:
        initial_seconds: Starting time per player.
        increment_seconds: Per-move increment (Fischer).
    """

    __slots__ = ("initial_seconds", "increment_seconds")

    def __init__(self, initial_seconds: float, increment_seconds: float = 0.0) -> None:
        self.initial_seconds = initial_seconds
        self.increment_seconds = increment_seconds

    # Common presets
    @classmethod
    def blitz_3m2s(cls) -> TimeControl:
        return cls(180, 2)

    @classmethod
    def blitz_5m(cls) -> TimeControl:
        return cls(300, 0)

    @classmethod
    def rapid_10m(cls) -> TimeControl:
        return cls(600, 0)

    @classmethod
    def rapid_15m10s(cls) -> TimeControl:
        return cls(900, 10)

    @classmethod
    def unlimited(cls) -> TimeControl:
        """No time limit."""
        return cls(float("inf"), 0)

    def __repr__(self) -> str:
        mins = self.initial_seconds / 60
        if self.increment_seconds:
            return f"TimeControl({mins:.0f}m+{self.increment_seconds:.0f}s)"
        return f"TimeControl({mins:.0f}m)"


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IClock(ABC):
    """Interface for a tick-driven chess clock."""

    @abstractmethod
    def start(self, color: Color) -> None:
        """Start the clock for *color*."""

    @abstractmethod
    def stop(self) -> None:
        """Pause the running clock."""

    @abstractmethod
    def tick(self, seconds: float) -> float:
        """Charge *seconds* to the active side; return its remaining time."""

    @abstractmethod
    def remaining(self, color: Color) -> float:
        """Seconds remaining for *color*."""

    @abstractmethod
    def is_flag_fallen(self, color: Color) -> bool:
        """Has *color* run out of time?"""

    @abstractmethod
    def add_increment(self, color: Color) -> None:
        """Add Fischer increment after a move."""


class ITickSource(ABC):
    """Periodic timer that drives the clock.

    At most one callback is scheduled at a time: :meth:`start` replaces
    any previous schedule.
    """

    @abstractmethod
    def start(self, callback: Callable[[], None]) -> None:
        """Begin invoking *callback* once per interval."""

    @abstractmethod
    def stop(self) -> None:
        """Cancel the periodic callback."""

    @property
    @abstractmethod
    def is_active(self) -> bool: ...


class IGameController(ABC):
    """Operations the input adapter may invoke."""

    @abstractmethod
    def request_move(self, from_sq: Square, to_sq: Square) -> CommandResult:
        """Move the piece on *from_sq* to *to_sq* if legal."""

    @abstractmethod
    def resolve_promotion(
        self, pending: PendingPromotion, piece_type: PieceType
    ) -> CommandResult:
        """Finish a suspended promotion with the chosen *piece_type*."""

    @abstractmethod
    def request_undo(self) -> CommandResult:
        """Take back the last move."""

    @abstractmethod
    def request_redo(self) -> CommandResult:
        """Replay the last undone move."""

    @abstractmethod
    def request_restart(self) -> CommandResult:
        """Reset to the initial position."""

    @abstractmethod
    def request_pause_toggle(self) -> CommandResult:
        """Pause a running game or resume a paused one."""

    @abstractmethod
    def on_tick(self, color: Color, seconds: float = 1.0) -> bool:
        """Charge one tick to *color*'s clock. Returns True if it was charged."""
