import os
from collections import deque

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from termtype.app.errors import RenderFault  # noqa: E402
from termtype.app.state import Mode, Session  # noqa: E402


class FakeTerminal:
    """In-memory cell surface with a scripted input queue."""

    def __init__(self, width=40, height=12):
        self.width = width
        self.height = height
        self.cells = {}
        self.flushes = 0
        self.events = deque()
        self.fail_on_flush = False
        self.poll_error = None

    def size(self):
        return self.width, self.height

    def clear(self):
        self.cells.clear()

    def set_cell(self, x, y, ch, fg, bg, dim=False):
        self.cells[(x, y)] = (ch, fg, bg, dim)

    def flush(self):
        if self.fail_on_flush:
            raise RenderFault("flush failed: broken pipe")
        self.flushes += 1

    def poll_event(self):
        if self.poll_error is not None:
            raise self.poll_error
        if self.events:
            return self.events.popleft()
        return None

    def row(self, y):
        xs = sorted(x for (x, yy) in self.cells if yy == y)
        return "".join(self.cells[(x, y)][0] for x in xs)


@pytest.fixture
def terminal():
    return FakeTerminal()


@pytest.fixture
def make_session():
    def factory(target="cat dog", mode=Mode.FIXED, words=("cat", "dog", "bird")):
        return Session(target_text=target, mode=mode, source_words=words)
    return factory
