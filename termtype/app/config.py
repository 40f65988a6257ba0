# app/config.py
from __future__ import annotations
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional
import json
import logging

from termtype.app.errors import ConfigurationError

log = logging.getLogger(__name__)

APP_NAME = "termtype"
ASSETS_DIR = Path(__file__).resolve().parent.parent / "assets"
DEFAULT_CONFIG_FILE = Path("termtype.json")
DEFAULT_LOG_FILE = Path("termtype.log")


@dataclass(frozen=True)
class Settings:
    # timers
    blink_interval_ms: int = 500
    stats_interval_ms: int = 100
    input_poll_ms: int = 10

    # unbounded mode
    extension_threshold: int = 100
    extension_words: int = 50
    unbounded_initial_words: int = 100

    # fixed mode word count bounds (inclusive)
    min_words: int = 5
    max_words: int = 50

    # screen layout
    margin: int = 2
    text_top: int = 3
    theme: str = "classic"
    words_dir: str = ""

    def assets_path(self) -> Path:
        return Path(self.words_dir) if self.words_dir else ASSETS_DIR


DEFAULT_SETTINGS = Settings()


def _settings_from_dict(d: Dict[str, Any], base: Settings = DEFAULT_SETTINGS) -> Settings:
    known = {f.name: f for f in fields(Settings)}
    unknown = set(d) - set(known)
    if unknown:
        raise ConfigurationError(f"Unknown settings: {', '.join(sorted(unknown))}")

    values: Dict[str, Any] = {}
    for key, value in d.items():
        expected = type(getattr(base, key))
        # bool is an int subclass; reject it for numeric fields
        if isinstance(value, bool) or not isinstance(value, expected):
            raise ConfigurationError(
                f"Setting '{key}' must be {expected.__name__}, got {type(value).__name__}"
            )
        values[key] = value

    settings = replace(base, **values)
    if settings.blink_interval_ms <= 0 or settings.stats_interval_ms <= 0 or settings.input_poll_ms <= 0:
        raise ConfigurationError("Timer intervals must be positive")
    if not 1 <= settings.min_words <= settings.max_words:
        raise ConfigurationError("min_words must be between 1 and max_words")
    if settings.extension_words < 1 or settings.extension_threshold < 0:
        raise ConfigurationError("Extension settings must be positive")
    return settings


def load_settings(path: Optional[Path] = None) -> Settings:
    """
    Load settings from a JSON object file.
    - An explicit path must exist
    - Without one, termtype.json in the working directory is used if present
    - Missing keys keep their defaults; unknown keys are rejected
    """
    if path is None:
        if not DEFAULT_CONFIG_FILE.exists():
            return DEFAULT_SETTINGS
        path = DEFAULT_CONFIG_FILE

    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(f"Cannot read settings file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Cannot parse settings file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Settings file {path} must contain a JSON object")

    settings = _settings_from_dict(data)
    log.info("Loaded settings from %s", path)
    return settings
