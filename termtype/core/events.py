# core/events.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class Key(Enum):
    CHAR = "char"
    BACKSPACE = "backspace"
    ENTER = "enter"
    ESCAPE = "escape"


@dataclass(frozen=True)
class KeyEvent:
    key: Key
    char: str = ""


@dataclass(frozen=True)
class ResizeEvent:
    width: int
    height: int


InputEvent = Union[KeyEvent, ResizeEvent]

ESC = "\x1b"
_BACKSPACE_CHARS = ("\x08", "\x7f")
_ENTER_CHARS = ("\n", "\r")


def key_from_char(ch: str) -> Optional[KeyEvent]:
    """
    Map one character read from the terminal to a key event.
    Space and printable characters become CHAR; other control characters are dropped.
    """
    if not ch:
        return None
    if ch == ESC:
        return KeyEvent(Key.ESCAPE)
    if ch in _BACKSPACE_CHARS:
        return KeyEvent(Key.BACKSPACE)
    if ch in _ENTER_CHARS:
        return KeyEvent(Key.ENTER)
    if ch == " " or ch.isprintable():
        return KeyEvent(Key.CHAR, ch)
    return None
