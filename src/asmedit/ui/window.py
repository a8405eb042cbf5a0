"""
Window management module for the three-column editor UI.
"""

import curses
import os
import time
from typing import List, Optional, Set, TYPE_CHECKING

from ..core.navigation import Column, Mode
from ..core.session import EditorSession
from ..core.syntax import SyntaxHighlighter
from ..utils.hex_utils import format_offset

if TYPE_CHECKING:
    from .input_handler import InputHandler


def safe_addstr(window: 'curses.window', y: int, x: int, string: str, attr: int = 0) -> None:
    """Safely add a string to a window, truncating if necessary."""

    height, width = window.getmaxyx()
    if y >= height or x >= width:
        return

    available = width - x
    if available <= 0:
        return

    if len(string) > available:
        string = string[:available]

    try:
        window.addstr(y, x, string, attr)
    except curses.error:
        pass


def visible_start(selected: int, visible_lines: int) -> int:
    """First row to draw so that the selected row stays centred."""

    return max(0, selected - (visible_lines // 2))


class WindowManager:
    """Manages the curses windows and the Functions / Hex / Disasm layout."""

    STATUS_MESSAGE_DURATION = 3
    MIN_HEIGHT = 10
    MIN_WIDTH = 60

    def __init__(self, stdscr: 'curses.window', session: EditorSession, syntax: str = 'intel'):
        self.stdscr = stdscr
        self.session = session
        self.height, self.width = stdscr.getmaxyx()

        if self.height < self.MIN_HEIGHT or self.width < self.MIN_WIDTH:
            raise ValueError(
                f"Terminal too small. Minimum size: {self.MIN_WIDTH}x{self.MIN_HEIGHT}, "
                f"Current size: {self.width}x{self.height}"
            )

        self.function_window: Optional['curses.window'] = None
        self.hex_window: Optional['curses.window'] = None
        self.disasm_window: Optional['curses.window'] = None
        self.status_window: Optional['curses.window'] = None
        self.dialog_window: Optional['curses.window'] = None
        self.input_handler: Optional['InputHandler'] = None
        self.status_message: Optional[str] = None
        self.status_message_time = 0.0

        self.syntax_highlighter = SyntaxHighlighter(syntax)

        curses.start_color()
        curses.init_pair(1, curses.COLOR_WHITE, -1)  # Status bar
        curses.init_pair(2, curses.COLOR_GREEN, -1)  # Active column border
        curses.init_pair(3, curses.COLOR_BLACK, curses.COLOR_GREEN)  # Selected row
        curses.init_pair(6, curses.COLOR_WHITE, -1)  # Dialog
        curses.init_pair(7, curses.COLOR_RED, -1)   # Error messages
        curses.init_pair(8, curses.COLOR_BLACK, curses.COLOR_YELLOW)  # Search highlights
        curses.init_pair(10, 8, -1)  # Offsets (gray, default background)

        self.syntax_highlighter.init_colors()
        self.setup_windows()

    def setup_windows(self) -> None:
        """Create and position all windows."""

        if self.height < self.MIN_HEIGHT or self.width < self.MIN_WIDTH:
            return

        column_width = self.width // 3
        content_height = self.height - 1

        self.function_window = curses.newwin(content_height, column_width, 0, 0)
        self.hex_window = curses.newwin(content_height, column_width, 0, column_width)
        self.disasm_window = curses.newwin(
            content_height,
            self.width - 2 * column_width,
            0,
            2 * column_width
        )
        self.status_window = curses.newwin(1, self.width, self.height - 1, 0)

    def refresh_all(self) -> None:
        """Refresh all windows."""

        self.draw_functions()
        if len(self.session.catalog):
            self.draw_cells(self.hex_window, Column.HEX)
            self.draw_cells(self.disasm_window, Column.DISASM)
        else:
            self.draw_empty(self.hex_window, Column.HEX)
            self.draw_empty(self.disasm_window, Column.DISASM)

        if self.input_handler and self.input_handler.search_mode:
            self.draw_search_dialog()

        self.draw_status()
        self.place_cursor()
        curses.doupdate()

    def draw_frame(self, window: 'curses.window', column: Column) -> None:
        """Draw a column border and title, highlighted when active."""

        active = self.session.column is column
        attr = curses.color_pair(2) | curses.A_BOLD if active else curses.A_NORMAL

        window.attron(attr)
        window.box()
        safe_addstr(window, 0, 2, f" {column.value} ", attr)
        window.attroff(attr)

    def draw_empty(self, window: Optional['curses.window'], column: Column) -> None:
        if not window:
            return

        window.clear()
        self.draw_frame(window, column)
        window.noutrefresh()

    def draw_functions(self) -> None:
        """Draw the function list."""

        if not self.function_window:
            return

        window = self.function_window
        window.clear()
        self.draw_frame(window, Column.FUNCTION)

        height, width = window.getmaxyx()
        visible_lines = height - 2
        selected = self.session.navigator.selection.function
        start_line = visible_start(selected, visible_lines)

        matches: Set[int] = set()
        if self.input_handler and self.input_handler.search_query:
            matches = {
                result.row for result in self.session.function_matches(
                    self.input_handler.search_query,
                    self.input_handler.search_type,
                    self.input_handler.case_sensitive
                )
            }

        for i in range(visible_lines):
            row = start_line + i
            if row >= len(self.session.catalog):
                break

            function = self.session.catalog[row]
            text = f"{format_offset(function.offset)} {function.name}"

            attr = curses.A_NORMAL
            if row == selected:
                attr = curses.color_pair(3) | curses.A_BOLD
            elif row in matches:
                attr = curses.color_pair(8)

            safe_addstr(window, i + 1, 1, text.ljust(width - 2), attr)

        window.noutrefresh()

    def draw_cells(self, window: Optional['curses.window'], column: Column) -> None:
        """Draw the Hex or Disasm cells of the current function."""

        if not window:
            return

        window.clear()
        self.draw_frame(window, column)

        height, width = window.getmaxyx()
        visible_lines = height - 2
        selection = self.session.navigator.selection
        function = self.session.current_function()
        rows: List[str] = [
            byte_text if column is Column.HEX else asm_text
            for byte_text, asm_text in self.session.store.values(function.id)
        ]
        start_line = visible_start(selection.row, visible_lines)

        for i in range(visible_lines):
            row = start_line + i
            if row >= len(rows):
                break

            text = rows[row]
            is_selected = row == selection.row

            if is_selected and selection.column is column:
                safe_addstr(window, i + 1, 1, text.ljust(width - 2), curses.color_pair(3) | curses.A_BOLD)
                continue

            if column is Column.DISASM:
                x_pos = 1
                for segment, attr in self.syntax_highlighter.highlight_line(text):
                    if is_selected:
                        attr |= curses.A_BOLD
                    safe_addstr(window, i + 1, x_pos, segment, attr)
                    x_pos += len(segment)
                continue

            safe_addstr(window, i + 1, 1, text, curses.A_BOLD if is_selected else curses.A_NORMAL)

        window.noutrefresh()

    def place_cursor(self) -> None:
        """Show the terminal cursor inside the active cell while editing."""

        selection = self.session.navigator.selection
        if self.session.mode is not Mode.EDITING or not selection.column.editable:
            try:
                curses.curs_set(0)
            except curses.error:
                pass
            return

        window = self.hex_window if selection.column is Column.HEX else self.disasm_window
        if not window:
            return

        height, width = window.getmaxyx()
        y = selection.row - visible_start(selection.row, height - 2) + 1
        x = min(selection.cursor + 1, width - 2)
        try:
            curses.curs_set(1)
            window.move(y, x)
            window.noutrefresh()
        except curses.error:
            pass

    def draw_search_dialog(self) -> None:
        """Draw the find-function dialog over the columns."""

        if self.input_handler is None:
            return

        if self.dialog_window is None:
            height = 7
            width = min(70, self.width - 4)
            self.dialog_window = curses.newwin(
                height, width, (self.height - height) // 2, (self.width - width) // 2
            )

        dialog = self.dialog_window
        _, width = dialog.getmaxyx()
        attr = curses.color_pair(6) | curses.A_BOLD

        dialog.erase()
        dialog.attron(attr)
        dialog.box()

        title = " Find Function "
        safe_addstr(dialog, 0, (width - len(title)) // 2, title)

        label = "Name: "
        query = self.input_handler.search_query
        field_width = width - len(label) - 5
        safe_addstr(dialog, 2, 2, label + query[-field_width:])
        safe_addstr(dialog, 2, 2 + len(label) + min(len(query), field_width), " ", curses.A_REVERSE)

        matches = len(self.session.function_matches(
            query, self.input_handler.search_type, self.input_handler.case_sensitive
        ))
        safe_addstr(dialog, 4, 2, f"{self.input_handler.search_type.capitalize()} search, {matches} matches")
        safe_addstr(dialog, 5, 2, "Tab: type  Enter: next  Esc: close")

        dialog.attroff(attr)
        dialog.noutrefresh()

    def current_status_message(self) -> Optional[str]:
        """The transient message to show, or None once it has expired."""

        if not self.status_message:
            return None

        now = time.time()
        if not self.status_message_time:
            self.status_message_time = now
        elif now - self.status_message_time > self.STATUS_MESSAGE_DURATION:
            self.status_message = None
            self.status_message_time = 0
            return None

        return self.status_message

    def status_text(self) -> str:
        """Status bar contents: file, mode, column and position."""

        left = f" {os.path.basename(self.session.path)}  {self.session.status_line()}"
        if self.session.modified:
            left += "  [Modified]"

        right = ""
        if len(self.session.catalog):
            selection = self.session.navigator.selection
            right = (
                f"{self.session.current_function().name}  "
                f"Row {selection.row + 1}  Col {selection.cursor + 1} "
            )

        room = self.width - 1 - len(right)
        if len(left) > room:
            left = left[:max(0, room - 3)] + "..."

        return left.ljust(room) + right

    def draw_status(self) -> None:
        """Draw the status bar."""

        if not self.status_window:
            return

        message = self.current_status_message()
        attr = curses.color_pair(1) | curses.A_BOLD | curses.A_REVERSE
        if message and message.startswith("Error:"):
            attr = curses.color_pair(7) | curses.A_BOLD | curses.A_REVERSE

        self.status_window.erase()
        safe_addstr(self.status_window, 0, 0, f" {message}" if message else self.status_text(), attr)
        self.status_window.noutrefresh()

    def set_status(self, message: str) -> None:
        self.status_message = message
        self.status_message_time = 0

    def resize(self) -> None:
        """Rebuild the windows for the new terminal size."""

        self.height, self.width = self.stdscr.getmaxyx()

        if self.height < self.MIN_HEIGHT or self.width < self.MIN_WIDTH:
            self.set_status(f"Error: Terminal too small, need {self.MIN_WIDTH}x{self.MIN_HEIGHT}")
            return

        self.dialog_window = None
        self.setup_windows()
