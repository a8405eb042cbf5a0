"""
Input handler module for processing keyboard events.
"""

import curses
import logging
from typing import Callable, Dict, Final

from ..core.errors import WriteBackError
from ..core.navigation import Column, Direction, Mode
from ..utils.search import SEARCH_TYPES
from .window import WindowManager

logger = logging.getLogger(__name__)

SEARCH_STATUS_MESSAGE: Final[str] = "Find function. Type a name, Enter for next match, Esc to close."
EDIT_STATUS_MESSAGE: Final[str] = "Editing. Esc to stop."
EMPTY_CATALOG_STATUS_MESSAGE: Final[str] = "Error: No functions were found in this binary"

ESCAPE: Final[int] = 27
BACKSPACE_KEYS: Final[tuple] = (curses.KEY_BACKSPACE, 127, 8)


class QuitEditor(Exception):
    """Raised by the quit command to leave the event loop."""


class InputHandler:
    """Handles keyboard input and executes corresponding actions."""

    def __init__(self, window_manager: WindowManager) -> None:
        self.window_manager = window_manager
        self.window_manager.input_handler = self
        self.session = window_manager.session
        self.search_mode = False
        self.search_query = ""
        self.search_type = "fuzzy"
        self.case_sensitive = False
        self.view_handlers: Dict[int, Callable[[], None]] = self._setup_view_handlers()
        self.movement_handlers: Dict[int, Callable[[], None]] = self._setup_movement_handlers()

    def _setup_view_handlers(self) -> Dict[int, Callable[[], None]]:
        """Set up the commands available while viewing."""

        return {
            ord('q'): self._quit,
            ord('w'): self._write,
            ord('a'): lambda: self._select(Column.FUNCTION),
            ord('s'): lambda: self._select(Column.HEX),
            ord('d'): lambda: self._select(Column.DISASM),
            ord('e'): self._start_edit,
            ord('/'): self._start_search,
            ord('n'): self._find_next,
            ord('N'): self._find_previous,
        }

    def _setup_movement_handlers(self) -> Dict[int, Callable[[], None]]:
        """Set up the commands available in both modes."""

        navigator = self.session.navigator
        return {
            curses.KEY_UP: navigator.previous_row,
            curses.KEY_DOWN: navigator.next_row,
            curses.KEY_LEFT: lambda: navigator.move_cursor(Direction.LEFT),
            curses.KEY_RIGHT: lambda: navigator.move_cursor(Direction.RIGHT),
            curses.KEY_HOME: navigator.cursor_home,
            curses.KEY_END: navigator.cursor_end,
        }

    def handle_input(self, ch: int) -> bool:
        """Handle a single keyboard input. Returns False if should quit."""

        try:
            if self.search_mode:
                self._handle_search_input(ch)
            elif self.session.mode is Mode.EDITING:
                self._handle_edit_input(ch)
            elif ch in self.view_handlers:
                self.view_handlers[ch]()
            elif ch in self.movement_handlers:
                self.movement_handlers[ch]()
        except QuitEditor:
            return False

        return True

    def _handle_edit_input(self, ch: int) -> None:
        """Apply a key while editing a Hex or Disasm cell."""

        navigator = self.session.navigator

        if ch == ESCAPE:
            self.session.cancel_edit()
            self.window_manager.set_status("View mode")
            return

        if ch == curses.KEY_DC:
            navigator.delete_forward()
            return

        if ch in BACKSPACE_KEYS:
            navigator.backspace()
            return

        if ch in self.movement_handlers:
            self.movement_handlers[ch]()
            return

        if 32 <= ch <= 126:
            navigator.insert_char(chr(ch))

    def _handle_search_input(self, ch: int) -> None:
        """Handle a key while the function search dialog is open."""

        if ch == ord('\n'):
            self._find_next()
            return

        if ch == ESCAPE:
            self.search_mode = False
            self.window_manager.dialog_window = None
            return

        if ch == ord('\t'):
            index = SEARCH_TYPES.index(self.search_type)
            self.search_type = SEARCH_TYPES[(index + 1) % len(SEARCH_TYPES)]
            return

        if ch in BACKSPACE_KEYS:
            self.search_query = self.search_query[:-1]
            return

        if 32 <= ch <= 126:
            self.search_query += chr(ch)

    def _select(self, column: Column) -> None:
        if not self.session.navigator.select_column(column) and column.editable:
            self.window_manager.set_status(EMPTY_CATALOG_STATUS_MESSAGE)

    def _start_edit(self) -> None:
        if self.session.navigator.enter_edit():
            self.window_manager.set_status(EDIT_STATUS_MESSAGE)

    def _start_search(self) -> None:
        self.search_mode = True
        self.search_query = ""
        self.window_manager.set_status(SEARCH_STATUS_MESSAGE)

    def _find_next(self) -> None:
        if not self.search_query:
            return

        result = self.session.find_function(self.search_query, self.search_type, self.case_sensitive)
        if result is None:
            self.window_manager.set_status(f"No function matches: {self.search_query}")
            return

        self.window_manager.set_status(f"Found: {result.name}")

    def _find_previous(self) -> None:
        result = self.session.find_previous()
        if result is None:
            return

        self.window_manager.set_status(f"Found: {result.name}")

    def _write(self) -> None:
        """Write all functions back to the binary."""

        try:
            drifts = self.session.write()
        except WriteBackError as e:
            logger.error("Write failed: %s", e)
            self.window_manager.set_status(f"Error: {e}")
            return

        if drifts:
            names = ", ".join(drift.function.name for drift in drifts)
            self.window_manager.set_status(f"Saved. Size changed: {names}")
            return

        self.window_manager.set_status(f"Saved: {self.session.path}")

    def _quit(self) -> None:
        raise QuitEditor()
