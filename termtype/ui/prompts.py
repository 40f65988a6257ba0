# ui/prompts.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, List, Optional

from termtype.app.config import DEFAULT_SETTINGS, Settings
from termtype.app.state import Mode
from termtype.app.validation import parse_choice, validate_word_count
from termtype.services.word_source import CATEGORIES

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


@dataclass(frozen=True)
class SessionOptions:
    category: str
    mode: Mode
    word_count: int


class SessionPrompt:
    """Asks for word list, mode and word count on stdin/stdout."""

    def __init__(self, settings: Settings = DEFAULT_SETTINGS,
                 input_fn: Optional[InputFn] = None, output_fn: Optional[OutputFn] = None):
        self.settings = settings
        self.ask = input_fn or input
        self.say = output_fn or print

    def choose_category(self) -> str:
        self.say("Choose word list:")
        labels: List[str] = ["Short words", "Medium words", "Long words", "All combined"]
        for i, label in enumerate(labels, start=1):
            self.say(f"{i}: {label}")
        choice = parse_choice(self.ask(f"Enter your choice (1-{len(CATEGORIES)}): "),
                              1, len(CATEGORIES), "word list choice")
        return CATEGORIES[choice - 1]

    def choose_mode(self) -> Mode:
        self.say("")
        self.say("Select mode:")
        self.say("1: Fixed number of words")
        self.say("2: Infinite mode (type until you exit)")
        choice = parse_choice(self.ask("Enter your choice (1-2): "), 1, 2, "mode choice")
        return Mode.FIXED if choice == 1 else Mode.UNBOUNDED

    def choose_word_count(self) -> int:
        low, high = self.settings.min_words, self.settings.max_words
        return validate_word_count(self.ask(f"Enter number of words to type ({low}-{high}): "), low, high)

    def run(self) -> SessionOptions:
        category = self.choose_category()
        mode = self.choose_mode()
        if mode is Mode.UNBOUNDED:
            count = self.settings.unbounded_initial_words
        else:
            count = self.choose_word_count()
        return SessionOptions(category=category, mode=mode, word_count=count)

    def wait_for_start(self, mode: Mode):
        if mode is Mode.UNBOUNDED:
            self.say("Starting infinite typing test... Press Enter to begin!")
        else:
            self.say("Starting typing test... Press Enter to begin!")
        self.say("Press ESC or Ctrl+C to exit")
        self.ask("")
