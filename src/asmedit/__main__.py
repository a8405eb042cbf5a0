"""
Entry point for asmedit.
"""

import argparse
import curses
import logging
import sys
from typing import List, Optional

from .config import EditorConfig, SUPPORTED_SYNTAXES, SUPPORTED_TARGETS
from .core.analyzer import R2FunctionAnalyzer
from .core.assembler import Assembler
from .core.disassembler import Disassembler
from .core.errors import InvariantViolation
from .core.session import EditorSession
from .logging_setup import setup_logging
from .ui.input_handler import InputHandler
from .ui.window import WindowManager

logger = logging.getLogger(__name__)

EXIT_INVARIANT_VIOLATION = 2


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""

    parser = argparse.ArgumentParser(
        description="asmedit - edit the disassembled functions of a binary in place"
    )
    parser.add_argument(
        "file",
        type=str,
        help="Binary to open"
    )
    parser.add_argument(
        "--arch",
        choices=sorted(SUPPORTED_TARGETS),
        default="x86",
        help="Target architecture"
    )
    parser.add_argument(
        "--mode",
        choices=sorted({mode for modes in SUPPORTED_TARGETS.values() for mode in modes}),
        default="64",
        help="Address size in bits"
    )
    parser.add_argument(
        "--syntax",
        choices=SUPPORTED_SYNTAXES,
        default="intel",
        help="Assembly syntax used for display and assembling"
    )
    parser.add_argument(
        "--tick",
        type=int,
        default=100,
        help="Milliseconds between resynchronization ticks"
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Write log records to this file"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Log level (DEBUG, INFO, WARNING, ERROR)"
    )
    return parser.parse_args(argv)


def run(stdscr: 'curses.window', session: EditorSession, config: EditorConfig) -> None:
    """Run the event loop until the user quits."""

    curses.use_default_colors()
    curses.curs_set(0)
    stdscr.timeout(config.tick_ms)

    window_manager = WindowManager(stdscr, session, config.syntax)
    input_handler = InputHandler(window_manager)

    if not len(session.catalog):
        window_manager.set_status("Error: No functions were found in this binary")

    while True:
        current_height, current_width = stdscr.getmaxyx()
        if (current_height, current_width) != (window_manager.height, window_manager.width):
            window_manager.resize()

        window_manager.refresh_all()

        try:
            ch = stdscr.getch()
        except KeyboardInterrupt:
            break
        except curses.error:
            continue

        if ch == curses.KEY_RESIZE:
            continue

        if ch != -1 and not input_handler.handle_input(ch):
            break

        # Every event, key or timeout, ends with a tick so edits are
        # reconciled before the next render.
        session.tick()


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the application."""

    args = parse_args(argv)
    try:
        config = EditorConfig.from_args(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    setup_logging(config.log_level, config.log_file)

    try:
        session = EditorSession.load(
            config.binary,
            R2FunctionAnalyzer(),
            Disassembler(config),
            Assembler(config),
        )
    except OSError as e:
        print(f"Error loading {config.binary}: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        curses.wrapper(run, session, config)
    except InvariantViolation as e:
        logger.critical("Session aborted: %s", e, exc_info=True)
        print(f"Internal error, session aborted: {e}", file=sys.stderr)
        sys.exit(EXIT_INVARIANT_VIOLATION)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
