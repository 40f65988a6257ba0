"""Tests for termtype.ui.view and termtype.ui.renderer - the visual model and painting."""
from termtype.app.calculation import LiveStats
from termtype.app.state import Session
from termtype.app.themes import DEFAULT_THEME, THEMES, Color
from termtype.core.wrap import wrap
from termtype.ui.renderer import Renderer
from termtype.ui.view import HEADER, compose_view, format_stats, text_width, visible_window


def _session(target, typed=""):
    s = Session(target_text=target)
    s.typed.extend(typed)
    return s


def _cells(view):
    return {(c.x, c.y): c for c in view.cells}


def _view(target, typed="", size=(40, 12), cursor_visible=True, width=None):
    s = _session(target, typed)
    layout = wrap(target, width or text_width(size[0]))
    return compose_view(s, layout, size, LiveStats(), cursor_visible=cursor_visible)


class TestComposeView:
    def test_header(self):
        cells = _cells(_view("cat dog"))
        assert "".join(cells[(2 + i, 1)].ch for i in range(len(HEADER))) == HEADER
        assert cells[(2, 1)].style == DEFAULT_THEME.header

    def test_character_styles(self):
        cells = _cells(_view("cat dog", typed="cx"))
        assert cells[(2, 3)].style == DEFAULT_THEME.correct
        assert cells[(3, 3)].style == DEFAULT_THEME.incorrect
        assert cells[(3, 3)].ch == "a"  # the target character is shown, not the typed one
        assert cells[(4, 3)].style == DEFAULT_THEME.cursor_on
        assert cells[(5, 3)].style == DEFAULT_THEME.untyped

    def test_cursor_blink_off(self):
        cells = _cells(_view("cat", cursor_visible=False))
        assert cells[(2, 3)].style == DEFAULT_THEME.cursor_off

    def test_classic_colors(self):
        t = DEFAULT_THEME
        assert t.correct.fg is Color.YELLOW
        assert t.incorrect.fg is Color.RED
        assert t.stats.fg is Color.CYAN
        assert t.untyped.fg is Color.WHITE and t.untyped.dim

    def test_stats_line_at_bottom(self):
        s = _session("cat")
        view = compose_view(s, wrap("cat", 56), (60, 12), LiveStats(42.0, 210.0, 97.5))
        cells = _cells(view)
        text = format_stats(LiveStats(42.0, 210.0, 97.5))
        assert text == "WPM: 42.0 | CPM: 210.0 | Accuracy: 97.5%"
        assert "".join(cells[(2 + i, 11)].ch for i in range(len(text))) == text
        assert cells[(2, 11)].style == DEFAULT_THEME.stats

    def test_wrapped_lines_on_consecutive_rows(self):
        cells = _cells(_view("the quick brown fox", size=(14, 12)))
        assert "".join(cells[(2 + i, 3)].ch for i in range(9)) == "the quick"
        assert "".join(cells[(2 + i, 4)].ch for i in range(9)) == "brown fox"

    def test_cursor_on_line_breaking_space(self):
        cells = _cells(_view("the quick brown fox", typed="the quick", size=(14, 12)))
        cursor = cells[(11, 3)]
        assert cursor.ch == " "
        assert cursor.style == DEFAULT_THEME.cursor_on

    def test_scrolls_to_keep_cursor_visible(self):
        target = " ".join(["word"] * 20)  # one word per line at width 4
        offset = target.index("word", 5 * 5)  # start of the sixth word
        view = _view(target, typed=target[:offset], size=(8, 8))
        assert view.visible_lines == 3
        assert view.first_line == 4
        cells = _cells(view)
        assert cells[(2, 4)].style == DEFAULT_THEME.cursor_on

    def test_combining_mark_drawn_with_its_base(self):
        view = _view("cafe\u0301 x", typed="caf")
        positions = [(c.x, c.y) for c in view.cells]
        assert len(positions) == len(set(positions))
        cells = _cells(view)
        assert cells[(5, 3)].ch == "e\u0301"
        assert cells[(5, 3)].style == DEFAULT_THEME.cursor_on
        assert cells[(6, 3)].ch == " "
        assert cells[(7, 3)].ch == "x"

    def test_cursor_on_combining_mark(self):
        cells = _cells(_view("cafe\u0301 x", typed="cafe"))
        assert cells[(5, 3)].ch == "e\u0301"
        assert cells[(5, 3)].style == DEFAULT_THEME.cursor_on
        assert cells[(4, 3)].style == DEFAULT_THEME.correct

    def test_wrong_combining_mark_marks_the_cell(self):
        cells = _cells(_view("cafe\u0301 x", typed="cafex"))
        assert cells[(5, 3)].style == DEFAULT_THEME.incorrect

    def test_short_terminal_keeps_text_off_the_stats_line(self):
        view = _view("cat dog", size=(40, 4))
        assert view.visible_lines == 0
        row = [c for c in view.cells if c.y == 3]
        assert row and all(c.style == DEFAULT_THEME.stats for c in row)

    def test_one_text_row_above_stats(self):
        view = _view("cat dog", size=(40, 5))
        assert view.visible_lines == 1
        cells = _cells(view)
        assert cells[(2, 3)].ch == "c"
        assert cells[(2, 4)].style == DEFAULT_THEME.stats


class TestVisibleWindow:
    def test_everything_fits(self):
        layout = wrap("a b c", 1)
        assert visible_window(layout, 2, 5) == (0, 5)

    def test_keeps_one_line_above(self):
        layout = wrap(" ".join("abcdefghij"), 1)
        assert visible_window(layout, 5, 3) == (4, 3)

    def test_clamped_at_the_end(self):
        layout = wrap(" ".join("abcdefghij"), 1)
        assert visible_window(layout, 9, 3) == (7, 3)


class TestRenderer:
    def test_paints_and_flushes(self, terminal):
        view = _view("cat dog", typed="ca")
        renderer = Renderer(terminal)
        renderer.paint(view)
        assert terminal.flushes == 1
        assert renderer.frames == 1
        assert terminal.row(3) == "cat dog"
        ch, fg, bg, dim = terminal.cells[(2, 3)]
        assert (ch, fg, dim) == ("c", Color.YELLOW, False)

    def test_clips_to_screen(self, terminal):
        terminal.width = 10
        view = _view("cat dog", size=(10, 12))
        Renderer(terminal).paint(view)
        assert all(x < 10 for (x, _) in terminal.cells)

    def test_clears_previous_frame(self, terminal):
        renderer = Renderer(terminal)
        terminal.set_cell(30, 8, "z", Color.RED, Color.DEFAULT)
        renderer.paint(_view("cat"))
        assert (30, 8) not in terminal.cells


def test_builtin_theme_names_unique():
    names = [t.name for t in THEMES]
    assert len(names) == len(set(names))
