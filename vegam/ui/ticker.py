"""QTimer-backed tick scheduler for the round controller."""

from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer


class QtTickHandle:
    """A running QTimer that can be cancelled exactly once."""

    def __init__(self, timer: QTimer) -> None:
        self._timer: Optional[QTimer] = timer

    @property
    def active(self) -> bool:
        return self._timer is not None and self._timer.isActive()

    def cancel(self) -> None:
        if self._timer is None:
            return
        self._timer.stop()
        self._timer.deleteLater()
        self._timer = None


class QtTickScheduler:
    def __init__(self, parent: Optional[QObject] = None) -> None:
        self._parent = parent

    def __call__(self, interval_seconds: float, callback: Callable[[], None]) -> QtTickHandle:
        timer = QTimer(self._parent)
        timer.setInterval(max(1, int(interval_seconds * 1000)))
        timer.timeout.connect(callback)
        timer.start()
        return QtTickHandle(timer)
