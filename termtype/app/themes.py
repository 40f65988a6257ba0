# app/themes.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List

from termtype.app.errors import ConfigurationError


class Color(str, Enum):
    DEFAULT = "default"
    WHITE = "white"
    YELLOW = "yellow"
    RED = "red"
    CYAN = "cyan"


@dataclass(frozen=True)
class Style:
    fg: Color = Color.DEFAULT
    bg: Color = Color.DEFAULT
    dim: bool = False


@dataclass(frozen=True)
class Theme:
    name: str
    header: Style
    untyped: Style
    correct: Style
    incorrect: Style
    cursor_on: Style
    cursor_off: Style
    stats: Style


# -------- Built-in themes --------
THEMES: List[Theme] = [
    Theme(
        name="classic",
        header=Style(Color.WHITE),
        untyped=Style(Color.WHITE, dim=True),
        correct=Style(Color.YELLOW),
        incorrect=Style(Color.RED),
        cursor_on=Style(Color.WHITE),
        cursor_off=Style(Color.WHITE, dim=True),
        stats=Style(Color.CYAN),
    ),
    Theme(
        name="mono",
        header=Style(Color.WHITE),
        untyped=Style(Color.WHITE, dim=True),
        correct=Style(Color.WHITE),
        incorrect=Style(Color.DEFAULT, Color.RED),
        cursor_on=Style(Color.DEFAULT, Color.WHITE),
        cursor_off=Style(Color.WHITE, dim=True),
        stats=Style(Color.WHITE),
    ),
]

DEFAULT_THEME = THEMES[0]


def themes_by_name() -> Dict[str, Theme]:
    return {t.name: t for t in THEMES}


def get_theme(name: str) -> Theme:
    try:
        return themes_by_name()[name]
    except KeyError:
        known = ", ".join(t.name for t in THEMES)
        raise ConfigurationError(f"Unknown theme '{name}' (known: {known})") from None
