# core/wrap.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple
import unicodedata


class Position(NamedTuple):
    line: int
    column: int


@dataclass(frozen=True)
class WrappedLayout:
    """
    Target text laid out on screen lines.
      - lines: the rendered text of each line
      - position_to_coord: absolute offset -> (line, character index on that line)
      - line_offsets: for each line, the absolute offset of every character on it
      - cell_x: absolute offset -> display column where its cell starts
      - line_widths: display width of each line
    A space that ends a line is not drawn, so its offset has no entry.
    A zero-width character shares the cell of the character before it.
    """
    lines: List[str] = field(default_factory=list)
    position_to_coord: Dict[int, Position] = field(default_factory=dict)
    line_offsets: List[List[int]] = field(default_factory=list)
    cell_x: Dict[int, int] = field(default_factory=dict)
    line_widths: List[int] = field(default_factory=list)

    def line_of(self, offset: int) -> int:
        """Line holding offset; past the end (or a dropped space) maps forward."""
        if not self.lines:
            return 0
        coord = self.position_to_coord.get(offset)
        if coord is not None:
            return coord.line
        nxt = self.position_to_coord.get(offset + 1)
        if nxt is not None:
            return nxt.line
        return len(self.lines) - 1


def char_width(ch: str) -> int:
    if unicodedata.combining(ch) or unicodedata.category(ch) in ("Mn", "Me", "Cf"):
        return 0
    if unicodedata.east_asian_width(ch) in ("W", "F"):
        return 2
    return 1


def display_width(text: str) -> int:
    return sum(char_width(ch) for ch in text)


def wrap(text: str, max_width: int) -> WrappedLayout:
    """
    Greedy word wrap on single spaces, measured in display columns.
    Words are never split; a word wider than the line gets a line to itself.
    """
    if not text:
        return WrappedLayout()
    max_width = max(1, max_width)

    lines: List[str] = []
    coords: Dict[int, Position] = {}
    offsets: List[List[int]] = []
    xs: Dict[int, int] = {}
    widths: List[int] = []

    current = ""
    current_width = 0
    current_offsets: List[int] = []
    line_no = 0
    pos = 0

    def place(ch: str):
        nonlocal current, current_width, pos
        w = char_width(ch)
        if w == 0:
            if current:
                # joins the previous cell
                xs[pos] = xs[current_offsets[-1]]
            else:
                # nothing to join at the start of a line: takes a cell of its own
                xs[pos] = 0
                w = 1
        else:
            xs[pos] = current_width
        coords[pos] = Position(line_no, len(current_offsets))
        current_offsets.append(pos)
        current += ch
        current_width += w
        pos += 1

    def end_line():
        lines.append(current)
        offsets.append(current_offsets)
        widths.append(current_width)

    for i, word in enumerate(text.split(" ")):
        if i == 0:
            for ch in word:
                place(ch)
            continue

        # the separator space sits at pos; keep it if the word still fits
        proposed = current_width + 1 + display_width(word)
        if not current or proposed <= max_width:
            place(" ")
        else:
            end_line()
            current, current_width, current_offsets = "", 0, []
            line_no += 1
            pos += 1  # line-breaking space: skipped, never mapped
        for ch in word:
            place(ch)

    end_line()
    return WrappedLayout(lines=lines, position_to_coord=coords, line_offsets=offsets,
                         cell_x=xs, line_widths=widths)
