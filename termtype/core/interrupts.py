# core/interrupts.py
import logging
import signal

from PySide6.QtCore import QObject, Signal

log = logging.getLogger(__name__)

DEFAULT_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class InterruptListener(QObject):
    """
    Turns SIGINT/SIGTERM into a Qt signal.
    Python runs the handler on the main thread between bytecodes, so receivers
    should connect with Qt.QueuedConnection to get the event through the loop.
    """

    interrupted = Signal(int)

    def __init__(self, signals=DEFAULT_SIGNALS, parent=None):
        super().__init__(parent)
        self._signals = tuple(signals)
        self._previous = {}

    @property
    def installed(self) -> bool:
        return bool(self._previous)

    def install(self):
        if self._previous:
            return
        for signum in self._signals:
            self._previous[signum] = signal.signal(signum, self._handle)
        log.debug("Interrupt handlers installed for %s", self._signals)

    def remove(self):
        while self._previous:
            signum, handler = self._previous.popitem()
            signal.signal(signum, handler if handler is not None else signal.SIG_DFL)
        log.debug("Interrupt handlers removed")

    def _handle(self, signum, frame):
        self.interrupted.emit(signum)
