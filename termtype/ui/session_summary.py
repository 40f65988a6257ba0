# ui/session_summary.py
from __future__ import annotations
from typing import List

from termtype.app.calculation import LiveStats, completion_percent, words_completed
from termtype.app.state import Mode, Session


def summary_lines(session: Session, stats: LiveStats) -> List[str]:
    lines = [""]
    if session.mode is Mode.UNBOUNDED:
        lines.append("Infinite Mode Results:")
        lines.append(f"Total Words Typed: {words_completed(session)}")
    else:
        lines.append(f"Typing Test Results ({completion_percent(session):.1f}% completed):")
    lines.append(f"WPM: {stats.wpm:.1f}")
    lines.append(f"CPM: {stats.cpm:.1f}")
    lines.append(f"Accuracy: {stats.accuracy:.1f}%")
    return lines


def print_summary(session: Session, stats: LiveStats, output_fn=print):
    for line in summary_lines(session, stats):
        output_fn(line)
