# core/threads.py
import logging
import threading

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal

log = logging.getLogger(__name__)


class InputPollSignals(QObject):
    eventRead = Signal(object)
    failed = Signal(str)


class InputPollWorker(QRunnable):
    """
    Polls the terminal without blocking and posts every event it reads.
    The receiver lives on another thread, so delivery is queued into its event loop.
    """

    def __init__(self, terminal, poll_ms: int = 10):
        super().__init__()
        self.setAutoDelete(False)
        self.terminal = terminal
        self.poll_sec = poll_ms / 1000.0
        self.signals = InputPollSignals()
        self._stop = threading.Event()
        self._done = threading.Event()

    def run(self):
        try:
            while not self._stop.is_set():
                event = self.terminal.poll_event()
                if event is None:
                    self._stop.wait(self.poll_sec)
                    continue
                self.signals.eventRead.emit(event)
        except Exception as e:
            log.exception("Input polling failed")
            self.signals.failed.emit(str(e))
        finally:
            self._done.set()

    def stop(self, timeout: float = 1.0) -> bool:
        """Ask the loop to exit; returns True once run() has returned."""
        self._stop.set()
        return self._done.wait(timeout)

    @property
    def is_stopping(self) -> bool:
        return self._stop.is_set()


class Workers:
    pool = QThreadPool.globalInstance()
