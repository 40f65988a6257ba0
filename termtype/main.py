# main.py
from __future__ import annotations
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence
import argparse
import logging
import sys

from PySide6.QtCore import QCoreApplication

from termtype import __version__
from termtype.app.config import APP_NAME, DEFAULT_LOG_FILE, Settings, load_settings
from termtype.app.calculation import LiveStats
from termtype.app.errors import ConfigurationError, RenderFault
from termtype.app.state import Session
from termtype.app.themes import get_theme
from termtype.core.controller import SessionController
from termtype.core.threads import InputPollWorker
from termtype.services.word_source import generate_text, load_word_list
from termtype.ui.prompts import SessionPrompt
from termtype.ui.renderer import Renderer
from termtype.ui.session_summary import print_summary
from termtype.ui.terminal import CursesTerminal

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG = 1
EXIT_TERMINAL = 2


def setup_logging(log_file: Path = DEFAULT_LOG_FILE, debug: bool = False) -> None:
    # curses owns stdout while a session runs, so logs only go to the file
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=[logging.FileHandler(log_file, encoding="utf-8")],
    )

    # Log any uncaught exceptions rather than silently dying
    def excepthook(exctype, value, tb):
        logging.critical("Unhandled exception", exc_info=(exctype, value, tb))
        sys.__excepthook__(exctype, value, tb)
        sys.exit(1)

    sys.excepthook = excepthook


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=APP_NAME, description="Terminal typing speed practice.")
    parser.add_argument("--words-dir", type=Path, help="directory holding the word list files")
    parser.add_argument("--config", type=Path, help="JSON settings file (default: ./termtype.json)")
    parser.add_argument("--log-file", type=Path, default=DEFAULT_LOG_FILE)
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def prepare_session(settings: Settings, prompt: SessionPrompt) -> Session:
    options = prompt.run()
    words = load_word_list(options.category, settings.assets_path())
    log.info("Word list %s, %s mode, %d words", options.category, options.mode.value, options.word_count)
    return Session(
        target_text=generate_text(words, options.word_count),
        mode=options.mode,
        source_words=words,
    )


def play(session: Session, settings: Settings) -> LiveStats:
    theme = get_theme(settings.theme)
    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    app.setApplicationName(APP_NAME)
    with CursesTerminal() as terminal:
        controller = SessionController(session, Renderer(terminal), settings=settings, theme=theme)
        return controller.run(InputPollWorker(terminal, settings.input_poll_ms))


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_file, args.debug)

    try:
        settings = load_settings(args.config)
        if args.words_dir:
            settings = replace(settings, words_dir=str(args.words_dir))
        get_theme(settings.theme)
        prompt = SessionPrompt(settings)
        session = prepare_session(settings, prompt)
        prompt.wait_for_start(session.mode)
    except ConfigurationError as e:
        log.error("Configuration error: %s", e)
        print(f"Error: {e}")
        return EXIT_CONFIG
    except EOFError:
        log.error("Standard input closed during setup")
        print("Error: no input")
        return EXIT_CONFIG
    except KeyboardInterrupt:
        print()
        return EXIT_OK

    try:
        stats = play(session, settings)
    except RenderFault as e:
        log.error("Terminal failure: %s", e)
        print(f"Terminal error: {e}", file=sys.stderr)
        return EXIT_TERMINAL

    print_summary(session, stats)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
