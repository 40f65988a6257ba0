# services/typing_engine.py
from enum import Enum
from typing import Iterable

from termtype.app.state import Mode, Session


class CharState(Enum):
    UNTYPED = "untyped"
    CORRECT = "correct"
    INCORRECT = "incorrect"
    CURSOR = "cursor"


def classify(target: str, typed: str, offset: int) -> CharState:
    if offset < len(typed):
        if offset < len(target) and typed[offset] == target[offset]:
            return CharState.CORRECT
        return CharState.INCORRECT
    if offset == len(typed):
        return CharState.CURSOR
    return CharState.UNTYPED


class TypingEngine:
    """Applies keystrokes to a Session. The caller is the only writer."""

    def __init__(self, session: Session):
        self.session = session

    def process_key(self, ch: str) -> bool:
        s = self.session
        if not ch:
            return False
        if s.mode is Mode.FIXED and s.is_full:
            return False

        at = len(s.typed)
        correct = at < len(s.target_text) and s.target_text[at] == ch
        s.typed.append(ch)
        s.flags.append(correct)
        s.total_keystrokes += 1
        if correct:
            s.correct_keystrokes += 1
        return True

    def backspace(self) -> bool:
        s = self.session
        if not s.typed:
            return False
        s.typed.pop()
        # undo what this character counted when it was typed
        if s.flags.pop():
            s.correct_keystrokes -= 1
        s.total_keystrokes -= 1
        return True

    def extend(self, words: Iterable[str]) -> int:
        """Append words to the target; returns how many characters were added."""
        s = self.session
        addition = " ".join(words)
        if not addition:
            return 0
        if s.target_text:
            addition = " " + addition
        s.target_text += addition
        return len(addition)
