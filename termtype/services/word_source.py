# services/word_source.py
from __future__ import annotations
from pathlib import Path
from typing import Dict, List, Optional, Sequence
import logging
import random

from termtype.app.config import ASSETS_DIR
from termtype.app.errors import ConfigurationError

log = logging.getLogger(__name__)

WORD_FILES: Dict[str, str] = {
    "short": "short-english.txt",
    "medium": "medium-english.txt",
    "long": "long-english.txt",
}
COMBINED = "combined"
CATEGORIES = ("short", "medium", "long", COMBINED)


def load_words_from_file(path: Path) -> List[str]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            words = [ln.strip() for ln in f]
    except OSError as e:
        raise ConfigurationError(f"error loading words from {path}: {e}") from e
    return [w for w in words if w]


def load_word_list(category: str, assets_dir: Optional[Path] = None) -> List[str]:
    """Words for a category; 'combined' is short + medium + long in that order."""
    base = Path(assets_dir) if assets_dir else ASSETS_DIR
    category = category.lower()
    if category == COMBINED:
        names = list(WORD_FILES)
    elif category in WORD_FILES:
        names = [category]
    else:
        raise ConfigurationError(f"invalid word list: {category!r}")

    words: List[str] = []
    for name in names:
        words.extend(load_words_from_file(base / WORD_FILES[name]))
    if not words:
        raise ConfigurationError(f"word list '{category}' is empty")
    log.info("Loaded %d words (%s) from %s", len(words), category, base)
    return words


def pick_words(words: Sequence[str], count: int, rng: Optional[random.Random] = None) -> List[str]:
    rng = rng or random.Random()
    return [rng.choice(words) for _ in range(count)]


def generate_text(words: Sequence[str], count: int, rng: Optional[random.Random] = None) -> str:
    return " ".join(pick_words(words, count, rng))
