# core/controller.py
from __future__ import annotations
from enum import Enum
from typing import Callable, Optional, Tuple
import logging
import random

from PySide6.QtCore import QEventLoop, QObject, Qt, Signal, Slot

from termtype.app.calculation import LiveStats, final_stats, live_stats
from termtype.app.config import DEFAULT_SETTINGS, Settings
from termtype.app.errors import RenderFault
from termtype.app.state import Mode, Session
from termtype.app.themes import DEFAULT_THEME, Theme
from termtype.core.chrono import Stopwatch, Ticker
from termtype.core.events import Key, KeyEvent, ResizeEvent
from termtype.core.interrupts import InterruptListener
from termtype.core.threads import InputPollWorker, Workers
from termtype.core.wrap import WrappedLayout, wrap
from termtype.services.typing_engine import TypingEngine
from termtype.services.word_source import pick_words
from termtype.ui.view import ViewModel, compose_view, text_width

log = logging.getLogger(__name__)


class State(Enum):
    RUNNING = "running"
    TERMINATED = "terminated"


class EndReason(str, Enum):
    COMPLETED = "completed"
    ABORTED = "aborted"
    INTERRUPTED = "interrupted"
    FAULT = "fault"


class SessionController(QObject):
    """
    Owns the Session and is its only writer.
    Input events, both tickers and OS interrupts all arrive as slots on the
    thread running the event loop, one at a time.
    """

    finished = Signal(object)  # LiveStats
    extended = Signal(int)     # characters added to the target

    def __init__(
        self,
        session: Session,
        renderer,
        settings: Settings = DEFAULT_SETTINGS,
        theme: Theme = DEFAULT_THEME,
        clock: Optional[Callable[[], float]] = None,
        rng: Optional[random.Random] = None,
        parent=None,
    ):
        super().__init__(parent)
        self.session = session
        self.engine = TypingEngine(session)
        self.renderer = renderer
        self.settings = settings
        self.theme = theme
        self.rng = rng or random.Random()

        self.state = State.RUNNING
        self.end_reason: Optional[EndReason] = None
        self.fault: Optional[RenderFault] = None
        self.final: Optional[LiveStats] = None
        self.cursor_visible = True

        self._stopwatch = Stopwatch()
        self._clock = clock or self._stopwatch.elapsed_sec
        self._worker: Optional[InputPollWorker] = None
        self._loop: Optional[QEventLoop] = None

        self.blink = Ticker(settings.blink_interval_ms, self)
        self.blink.ticked.connect(self.on_blink)
        self.stats_ticker = Ticker(settings.stats_interval_ms, self)
        self.stats_ticker.ticked.connect(self.on_stats_tick)

        self.interrupts = InterruptListener(parent=self)
        self.interrupts.interrupted.connect(self.on_interrupt, Qt.QueuedConnection)

        self.size: Tuple[int, int] = renderer.size()
        self.layout: WrappedLayout = self._wrap()

    # ---------- lifecycle ----------
    @property
    def is_running(self) -> bool:
        return self.state is State.RUNNING

    def start(self, worker: Optional[InputPollWorker] = None):
        self._stopwatch.start()
        self.session.start(self._clock())
        if worker is not None:
            self._worker = worker
            worker.signals.eventRead.connect(self.handle_event)
            worker.signals.failed.connect(self.on_input_failed)
            Workers.pool.start(worker)
        self.interrupts.install()
        self.blink.start()
        self.stats_ticker.start()
        log.info("Session started (%s mode, %d chars)", self.session.mode.value,
                 len(self.session.target_text))
        self.render()

    def run(self, worker: Optional[InputPollWorker] = None) -> LiveStats:
        """Start, block in the event loop until terminated, return final stats."""
        self._loop = QEventLoop()
        self.start(worker)
        if self.is_running:
            self._loop.exec()
        self._loop = None
        if self.fault is not None:
            raise self.fault
        return self.final

    # ---------- event slots ----------
    @Slot(object)
    def handle_event(self, event):
        if not self.is_running:
            return
        if isinstance(event, ResizeEvent):
            self.on_resize(event.width, event.height)
        elif isinstance(event, KeyEvent):
            self.on_key(event)

    def on_key(self, event: KeyEvent):
        s = self.session
        if event.key is Key.ESCAPE:
            self.terminate(EndReason.ABORTED)
        elif event.key is Key.ENTER:
            if s.mode is Mode.FIXED and s.is_full:
                self.terminate(EndReason.COMPLETED)
        elif event.key is Key.BACKSPACE:
            if self.engine.backspace():
                self.render()
        elif event.key is Key.CHAR:
            if not self.engine.process_key(event.char):
                return  # fixed mode, buffer already full
            if s.mode is Mode.UNBOUNDED:
                self._maybe_extend()
            self.render()
            if s.mode is Mode.FIXED and s.is_full:
                self.terminate(EndReason.COMPLETED)

    def on_resize(self, width: int, height: int):
        self.size = (width, height)
        self.layout = self._wrap()
        log.debug("Resized to %dx%d, %d lines", width, height, len(self.layout.lines))
        self.render()

    @Slot()
    def on_blink(self):
        if not self.is_running:
            return
        self.cursor_visible = not self.cursor_visible
        self.render()

    @Slot()
    def on_stats_tick(self):
        if self.is_running:
            self.render()

    @Slot(int)
    def on_interrupt(self, signum: int):
        log.info("Interrupted by signal %d", signum)
        self.terminate(EndReason.INTERRUPTED)

    @Slot(str)
    def on_input_failed(self, message: str):
        self.fault = RenderFault(f"input failed: {message}")
        self.terminate(EndReason.FAULT)

    # ---------- transitions ----------
    def _maybe_extend(self):
        s = self.session
        threshold = self.settings.extension_threshold
        if s.remaining >= threshold or not s.source_words:
            return
        added = 0
        while s.remaining < threshold:
            added += self.engine.extend(pick_words(s.source_words, self.settings.extension_words, self.rng))
        self.layout = self._wrap()
        log.info("Target extended by %d chars (now %d)", added, len(s.target_text))
        self.extended.emit(added)

    def terminate(self, reason: EndReason):
        if not self.is_running:
            return
        self.state = State.TERMINATED
        self.end_reason = reason
        self.session.finish(self._clock())

        self.blink.stop()
        self.stats_ticker.stop()
        self.interrupts.remove()
        if self._worker is not None and not self._worker.stop():
            log.warning("Input poller did not stop in time")

        self.final = final_stats(self.session)
        log.info(
            "Session %s after %.1fs: %d/%d correct, %.1f WPM",
            reason.value, self.session.duration(), self.session.correct_keystrokes,
            self.session.total_keystrokes, self.final.wpm,
        )
        self.finished.emit(self.final)
        if self._loop is not None:
            self._loop.quit()

    # ---------- rendering ----------
    def _wrap(self) -> WrappedLayout:
        return wrap(self.session.target_text, text_width(self.size[0], self.settings))

    def view(self) -> ViewModel:
        return compose_view(
            self.session,
            self.layout,
            self.size,
            live_stats(self.session, self._clock()),
            cursor_visible=self.cursor_visible,
            theme=self.theme,
            settings=self.settings,
        )

    def render(self):
        try:
            self.renderer.paint(self.view())
        except RenderFault as e:
            log.error("Render failed: %s", e)
            self.fault = e
            self.terminate(EndReason.FAULT)
