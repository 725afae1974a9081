"""QTimer-backed tick source for the game clock."""

from __future__ import annotations

import logging
from collections.abc import Callable

from PyQt6.QtCore import QObject, QTimer

from hotseat.game.interfaces import ITickSource

_LOGGER = logging.getLogger(__name__)


class QtTickSource(ITickSource):
    """Drives :meth:`GameController.on_tick` from the Qt event loop.

    Owns a single :class:`QTimer`; starting again disconnects the previous
    callback, so two schedules can never run side by side.
    """

    __slots__ = ("_timer", "_callback")

    def __init__(self, interval_ms: int = 1000, parent: QObject | None = None) -> None:
        self._timer = QTimer(parent)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._fire)
        self._callback: Callable[[], None] | None = None

    @property
    def interval_ms(self) -> int:
        return self._timer.interval()

    def start(self, callback: Callable[[], None]) -> None:
        self._callback = callback
        self._timer.start()
        _LOGGER.debug("Tick source started (%d ms)", self._timer.interval())

    def stop(self) -> None:
        self._timer.stop()
        self._callback = None

    @property
    def is_active(self) -> bool:
        return self._timer.isActive()

    def _fire(self) -> None:
        if self._callback is None:
            _LOGGER.warning("Tick fired with no callback scheduled")
            return
        self._callback()
