# core/chrono.py
from PySide6.QtCore import QObject, QElapsedTimer, QTimer, Signal


class Stopwatch:
    """Monotonic seconds since start()."""

    def __init__(self):
        self._t = QElapsedTimer()

    def start(self):
        self._t.start()

    def is_running(self) -> bool:
        return self._t.isValid()

    def elapsed_sec(self) -> float:
        if not self._t.isValid():
            return 0.0
        return max(0.0, self._t.elapsed() / 1000.0)


class Ticker(QObject):
    """Fixed-interval tick source living on the thread that owns it."""

    ticked = Signal()
    started = Signal()
    stopped = Signal()

    def __init__(self, interval_ms: int, parent=None):
        super().__init__(parent)
        self._tick = QTimer(self)
        self._tick.setInterval(interval_ms)
        self._tick.timeout.connect(self.ticked)

    @property
    def interval_ms(self) -> int:
        return self._tick.interval()

    def is_active(self) -> bool:
        return self._tick.isActive()

    def start(self):
        if not self._tick.isActive():
            self._tick.start()
            self.started.emit()

    def stop(self):
        if self._tick.isActive():
            self._tick.stop()
            self.stopped.emit()
