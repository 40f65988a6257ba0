from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence


class Mode(str, Enum):
    FIXED = "fixed"
    UNBOUNDED = "unbounded"


@dataclass
class Session:
    target_text: str = ""
    mode: Mode = Mode.FIXED
    source_words: Sequence[str] = ()
    typed: List[str] = field(default_factory=list)
    # correctness of each typed character, recorded when it was typed
    flags: List[bool] = field(default_factory=list)
    total_keystrokes: int = 0
    correct_keystrokes: int = 0
    start_time: Optional[float] = None
    end_time: Optional[float] = None

    def __post_init__(self):
        self.source_words = tuple(self.source_words)

    @property
    def typed_text(self) -> str:
        return "".join(self.typed)

    @property
    def position(self) -> int:
        return len(self.typed)

    @property
    def remaining(self) -> int:
        return len(self.target_text) - len(self.typed)

    @property
    def is_full(self) -> bool:
        return len(self.typed) >= len(self.target_text)

    @property
    def is_finished(self) -> bool:
        return self.end_time is not None

    def start(self, now: float):
        if self.start_time is None:
            self.start_time = now

    def finish(self, now: float):
        if self.end_time is None:
            self.end_time = now

    def duration(self) -> float:
        if self.start_time is None or self.end_time is None:
            return 0.0
        return self.end_time - self.start_time
