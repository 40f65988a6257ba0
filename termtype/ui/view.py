# ui/view.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Tuple

from termtype.app.calculation import LiveStats
from termtype.app.config import DEFAULT_SETTINGS, Settings
from termtype.app.state import Session
from termtype.app.themes import DEFAULT_THEME, Style, Theme
from termtype.core.wrap import WrappedLayout, char_width
from termtype.services.typing_engine import CharState, classify

HEADER = "Type the following text (ESC or Ctrl+C to exit):"
HEADER_Y = 1
# rows kept free: header, gap above text, gap below text, stats line, bottom padding
RESERVED_ROWS = 5


@dataclass(frozen=True)
class Cell:
    x: int
    y: int
    ch: str
    style: Style


@dataclass(frozen=True)
class ViewModel:
    width: int
    height: int
    cells: List[Cell] = field(default_factory=list)
    first_line: int = 0
    visible_lines: int = 0


def format_stats(stats: LiveStats) -> str:
    return f"WPM: {stats.wpm:.1f} | CPM: {stats.cpm:.1f} | Accuracy: {stats.accuracy:.1f}%"


def text_width(screen_width: int, settings: Settings = DEFAULT_SETTINGS) -> int:
    return max(1, screen_width - 2 * settings.margin)


def visible_window(layout: WrappedLayout, cursor_line: int, visible: int) -> Tuple[int, int]:
    """
    First line shown and how many lines fit.
    Everything fits -> start at 0; otherwise keep one line of context above the cursor.
    """
    visible = max(1, visible)
    total = len(layout.lines)
    if total <= visible:
        return 0, visible
    first = min(max(0, cursor_line - 1), total - visible)
    return first, visible


def _style_for(state: CharState, cursor_visible: bool, theme: Theme) -> Style:
    if state is CharState.CORRECT:
        return theme.correct
    if state is CharState.INCORRECT:
        return theme.incorrect
    if state is CharState.CURSOR:
        return theme.cursor_on if cursor_visible else theme.cursor_off
    return theme.untyped


def compose_view(
    session: Session,
    layout: WrappedLayout,
    size: Tuple[int, int],
    stats: LiveStats,
    cursor_visible: bool = True,
    theme: Theme = DEFAULT_THEME,
    settings: Settings = DEFAULT_SETTINGS,
) -> ViewModel:
    width, height = size
    cells: List[Cell] = []
    left = settings.margin

    for i, ch in enumerate(HEADER):
        cells.append(Cell(left + i, HEADER_Y, ch, theme.header))

    target = session.target_text
    typed = session.typed_text
    cursor = len(typed)
    cursor_line = layout.line_of(cursor)
    stats_y = height - 1
    # text rows stay above the stats line
    room = min(max(1, height - RESERVED_ROWS), stats_y - settings.text_top)
    if room < 1:
        first, visible = 0, 0
    else:
        first, visible = visible_window(layout, cursor_line, room)

    cursor_drawn = False
    for row, li in enumerate(range(first, min(first + visible, len(layout.lines)))):
        y = settings.text_top + row
        for offset in layout.line_offsets[li]:
            ch = target[offset]
            state = classify(target, typed, offset)
            cursor_drawn = cursor_drawn or state is CharState.CURSOR
            style = _style_for(state, cursor_visible, theme)
            x = left + layout.cell_x[offset]
            if char_width(ch) == 0 and cells and cells[-1].y == y and cells[-1].x == x:
                # combining mark: drawn together with its base character
                base = cells[-1]
                if state in (CharState.CURSOR, CharState.INCORRECT):
                    base_style = style
                else:
                    base_style = base.style
                cells[-1] = Cell(x, y, base.ch + ch, base_style)
            else:
                cells.append(Cell(x, y, ch, style))

    # cursor on a line-breaking space or past the end: draw it after the line
    if not cursor_drawn and cursor > 0:
        prev = layout.position_to_coord.get(cursor - 1)
        if prev is not None and first <= prev.line < first + visible:
            x = left + layout.line_widths[prev.line]
            y = settings.text_top + prev.line - first
            style = theme.cursor_on if cursor_visible else theme.cursor_off
            cells.append(Cell(x, y, " ", style))

    for i, ch in enumerate(format_stats(stats)):
        if i < width - 2:
            cells.append(Cell(left + i, stats_y, ch, theme.stats))

    return ViewModel(width=width, height=height, cells=cells, first_line=first, visible_lines=visible)
