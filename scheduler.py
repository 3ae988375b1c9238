"""
scheduler.py — Cancellable periodic tasks on the Qt event loop.
Both the eye-state sampler and the fleet status engine run their tick
bodies through a PeriodicTask. A QCoreApplication must exist for the
timer to fire.
"""

from typing import Callable

from PyQt6.QtCore import QTimer


class PeriodicTask:
    """Calls ``callback`` every ``interval_ms`` until cancelled.

    ``cancel`` is idempotent, and no callback runs after it returns, even if
    a timeout was already queued on the event loop.
    """

    def __init__(self, interval_ms: int, callback: Callable[[], object]):
        self._callback = callback
        self._running = False
        self._timer = QTimer()
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._fire)

    @property
    def interval_ms(self) -> int:
        return self._timer.interval()

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self):
        if self._running:
            return
        self._running = True
        self._timer.start()

    def cancel(self):
        if not self._running:
            return
        self._running = False
        self._timer.stop()

    def _fire(self):
        if self._running:
            self._callback()
