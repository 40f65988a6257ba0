# ui/renderer.py
from termtype.ui.view import ViewModel


class Renderer:
    """Paints a ViewModel. The only writer to the terminal surface."""

    def __init__(self, terminal):
        self.terminal = terminal
        self.frames = 0

    def size(self):
        return self.terminal.size()

    def paint(self, view: ViewModel):
        t = self.terminal
        t.clear()
        for cell in view.cells:
            if 0 <= cell.x < view.width and 0 <= cell.y < view.height:
                s = cell.style
                t.set_cell(cell.x, cell.y, cell.ch, s.fg, s.bg, dim=s.dim)
        t.flush()
        self.frames += 1
