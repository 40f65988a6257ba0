# ui/terminal.py
from __future__ import annotations
from typing import Dict, Optional, Tuple
import curses
import logging
import threading

from termtype.app.errors import RenderFault
from termtype.app.themes import Color
from termtype.core.events import InputEvent, Key, KeyEvent, ResizeEvent, key_from_char

log = logging.getLogger(__name__)

_CURSES_COLORS = {
    Color.DEFAULT: -1,
    Color.WHITE: curses.COLOR_WHITE,
    Color.YELLOW: curses.COLOR_YELLOW,
    Color.RED: curses.COLOR_RED,
    Color.CYAN: curses.COLOR_CYAN,
}

_SPECIAL_KEYS = {
    curses.KEY_BACKSPACE: KeyEvent(Key.BACKSPACE),
    curses.KEY_ENTER: KeyEvent(Key.ENTER),
}


class CursesTerminal:
    """
    Cell-drawing surface over a curses screen.
    The input poller and the renderer run on different threads; every curses
    call goes through one lock.
    """

    def __init__(self, escdelay_ms: int = 25):
        self._lock = threading.RLock()
        self._screen = None
        self._pairs: Dict[Tuple[Color, Color], int] = {}
        self._colors = False
        self._escdelay_ms = escdelay_ms

    # ---------- lifecycle ----------
    def open(self) -> "CursesTerminal":
        with self._lock:
            if self._screen is not None:
                return self
            try:
                screen = curses.initscr()
                curses.noecho()
                curses.cbreak()
                screen.keypad(True)
                screen.nodelay(True)
                curses.set_escdelay(self._escdelay_ms)
                if curses.has_colors():
                    curses.start_color()
                    curses.use_default_colors()
                    self._colors = True
                try:
                    curses.curs_set(0)
                except curses.error:
                    pass  # terminal cannot hide the hardware cursor
            except curses.error as e:
                self._restore()
                raise RenderFault(f"cannot initialise terminal: {e}") from e
            self._screen = screen
            log.info("Terminal opened (%dx%d)", *self.size())
            return self

    def close(self):
        with self._lock:
            if self._screen is None:
                return
            self._screen = None
            self._pairs.clear()
            self._restore()
            log.info("Terminal restored")

    @staticmethod
    def _restore():
        try:
            curses.nocbreak()
            curses.echo()
            curses.endwin()
        except curses.error:
            log.warning("Terminal restore was incomplete")

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()

    # ---------- drawing ----------
    def size(self) -> Tuple[int, int]:
        with self._lock:
            height, width = self._require().getmaxyx()
            return width, height

    def clear(self):
        with self._lock:
            try:
                self._require().erase()
            except curses.error as e:
                raise RenderFault(f"clear failed: {e}") from e

    def set_cell(self, x: int, y: int, ch: str, fg: Color = Color.DEFAULT,
                 bg: Color = Color.DEFAULT, dim: bool = False):
        with self._lock:
            screen = self._require()
            height, width = screen.getmaxyx()
            if not (0 <= x < width and 0 <= y < height):
                return
            attr = self._pair_attr(fg, bg)
            if dim:
                attr |= curses.A_DIM
            try:
                screen.addstr(y, x, ch, attr)
            except curses.error as e:
                # writing the bottom-right cell moves the cursor off-screen; the cell is drawn
                if (x, y) == (width - 1, height - 1):
                    return
                raise RenderFault(f"set_cell({x}, {y}) failed: {e}") from e

    def flush(self):
        with self._lock:
            try:
                self._require().refresh()
            except curses.error as e:
                raise RenderFault(f"flush failed: {e}") from e

    # ---------- input ----------
    def poll_event(self) -> Optional[InputEvent]:
        """Next pending input event, or None when nothing is waiting."""
        with self._lock:
            screen = self._screen
            if screen is None:
                return None
            try:
                ch = screen.get_wch()
            except curses.error:
                return None
            if isinstance(ch, str):
                return key_from_char(ch)
            if ch == curses.KEY_RESIZE:
                height, width = screen.getmaxyx()
                return ResizeEvent(width, height)
            return _SPECIAL_KEYS.get(ch)

    # ---------- helpers ----------
    def _require(self):
        if self._screen is None:
            raise RenderFault("terminal is not open")
        return self._screen

    def _pair_attr(self, fg: Color, bg: Color) -> int:
        if not self._colors:
            return curses.A_NORMAL
        key = (fg, bg)
        pair = self._pairs.get(key)
        if pair is None:
            pair = len(self._pairs) + 1
            try:
                curses.init_pair(pair, _CURSES_COLORS[fg], _CURSES_COLORS[bg])
            except curses.error as e:
                raise RenderFault(f"cannot allocate color pair {key}: {e}") from e
            self._pairs[key] = pair
        return curses.color_pair(pair)
