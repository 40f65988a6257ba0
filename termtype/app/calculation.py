from dataclasses import dataclass

from termtype.app.state import Session

CHARS_PER_WORD = 5.0
MIN_LIVE_MINUTES = 1.0 / 60.0


@dataclass(frozen=True)
class LiveStats:
    wpm: float = 0.0
    cpm: float = 0.0
    accuracy: float = 0.0


def accuracy(correct: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return correct / total * 100.0


def compute_stats(correct: int, total: int, minutes: float) -> LiveStats:
    """
    WPM = (correct chars / 5) / minutes
    CPM = correct chars / minutes
    Rates are zero for a non-positive duration.
    """
    if minutes <= 0:
        return LiveStats(0.0, 0.0, accuracy(correct, total))
    return LiveStats(
        wpm=(correct / CHARS_PER_WORD) / minutes,
        cpm=correct / minutes,
        accuracy=accuracy(correct, total),
    )


def live_stats(session: Session, now: float) -> LiveStats:
    """Stats shown while typing. All zero during the first second."""
    if session.start_time is None:
        return LiveStats()
    minutes = (now - session.start_time) / 60.0
    if minutes < MIN_LIVE_MINUTES:
        return LiveStats()
    return compute_stats(session.correct_keystrokes, session.total_keystrokes, minutes)


def final_stats(session: Session) -> LiveStats:
    # no one-second floor here; a near-instant run may report extreme rates
    minutes = session.duration() / 60.0
    return compute_stats(session.correct_keystrokes, session.total_keystrokes, minutes)


def completion_percent(session: Session) -> float:
    if not session.target_text:
        return 0.0
    return len(session.typed) / len(session.target_text) * 100.0


def words_completed(session: Session) -> int:
    return round(session.correct_keystrokes / CHARS_PER_WORD)
