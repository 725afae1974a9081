"""User-configurable game settings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hotseat.game.interfaces import TimeControl


@dataclass
class GameSettings:
    """All user-configurable settings."""

    # General
    language: str = "English"

    # Clock; ``None`` plays without a clock
    initial_seconds: float | None = 600.0
    increment_seconds: float = 0.0
    tick_interval_ms: int = 1000

    # Lifecycle
    start_immediately: bool = False

    def time_control(self) -> TimeControl | None:
        from hotseat.game.interfaces import TimeControl

        if self.initial_seconds is None:
            return None
        return TimeControl(self.initial_seconds, self.increment_seconds)
