"""
Selection state and the navigation state machine for the three columns.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .catalog import Function, FunctionCatalog
from .errors import InvariantViolation
from .store import InstructionStore

logger = logging.getLogger(__name__)


class Column(Enum):
    FUNCTION = 'Function'
    HEX = 'Hex'
    DISASM = 'Disasm'

    @property
    def editable(self) -> bool:
        return self is not Column.FUNCTION

    @property
    def peer(self) -> 'Column':
        """The other view of the same instruction slot."""
        if self is Column.HEX:
            return Column.DISASM
        if self is Column.DISASM:
            return Column.HEX
        return self


class Mode(Enum):
    VIEWING = 'Viewing'
    EDITING = 'Editing'


class Direction(Enum):
    LEFT = -1
    RIGHT = 1


def cursor_transition(column: Column, direction: Direction, cursor: int,
                      length: int, other_length: int) -> Tuple[Column, int]:
    """
    Compute where a horizontal cursor move lands.

    The Hex and Disasm cells of one row behave as a single line: moving right
    at the end of one continues at the start of its peer, and moving left at
    the start of one continues at the end of its peer. Valid positions in a
    cell of length L are 0..L.

    Args:
        column: Column the cursor is in
        direction: Direction of the move
        cursor: Current cursor position
        length: Length of the text in the current cell
        other_length: Length of the text in the peer cell

    Returns:
        The column and cursor position after the move
    """

    if not column.editable:
        return column, cursor

    if direction is Direction.RIGHT:
        if cursor >= length:
            return column.peer, _clamp(cursor - length, other_length)
        return column, cursor + 1

    if cursor <= 0:
        return column.peer, _clamp(other_length + cursor - 1, other_length)
    return column, min(cursor - 1, length)


def _clamp(cursor: int, length: int) -> int:
    return max(0, min(cursor, length))


@dataclass
class Selection:
    """Which function, column, row and character position is active."""
    function: int = 0
    column: Column = Column.FUNCTION
    row: int = 0
    cursor: int = 0

    @property
    def active_row(self) -> int:
        """Row in the active column: a catalog index or an instruction index."""
        if self.column is Column.FUNCTION:
            return self.function
        return self.row


Edit = Tuple[int, int, Column]


class Navigator:
    """Applies navigation and editing commands to the selection and cell text."""

    def __init__(self, catalog: FunctionCatalog, store: InstructionStore) -> None:
        self.catalog = catalog
        self.store = store
        self.selection = Selection()
        self.mode = Mode.VIEWING
        self.pending_edits: List[Edit] = []

    def current_function(self) -> Function:
        return self.catalog[self.selection.function]

    def row_count(self, column: Optional[Column] = None) -> int:
        """Number of rows in a column, the active one by default."""

        column = column or self.selection.column
        if column is Column.FUNCTION:
            return len(self.catalog)

        function = self.current_function()
        if not self.store.has_function(function.id):
            raise InvariantViolation(f"{function.name} has no instructions in the store")

        return self.store.row_count(function.id)

    def cell_text(self, column: Optional[Column] = None) -> str:
        """Text of the active row's cell in an instruction column."""

        column = column or self.selection.column
        if not column.editable:
            raise InvariantViolation("The function column has no cell text")

        function = self.current_function()
        if column is Column.HEX:
            return self.store.byte_text(function.id, self.selection.row)

        return self.store.asm_text(function.id, self.selection.row)

    def select_column(self, column: Column) -> bool:
        """Switch the active column while viewing. Returns True if it changed."""

        if self.mode is not Mode.VIEWING:
            return False

        if column.editable and not len(self.catalog):
            logger.info("No functions loaded; staying in the function column")
            return False

        self.selection.column = column
        self.selection.cursor = 0
        return True

    def select_function(self, index: int) -> None:
        """Jump to the first cell of a function, cursor at its start."""

        function = self.catalog[index]
        self.selection.function = index
        self.selection.row = 0
        self.selection.cursor = 0
        logger.debug("Selected %s", function.name)

    def next_row(self) -> None:
        self._move_row(1)

    def previous_row(self) -> None:
        self._move_row(-1)

    def _move_row(self, step: int) -> None:
        count = self.row_count()
        if count == 0:
            return

        if self.selection.column is Column.FUNCTION:
            self.selection.function = (self.selection.function + step) % count
            self.selection.row = 0
            return

        self.selection.row = (self.selection.row + step) % count
        self.selection.cursor = _clamp(self.selection.cursor, len(self.cell_text()))

    def enter_edit(self) -> bool:
        """Start editing. Not possible in the function column."""

        if not self.selection.column.editable or self.row_count() == 0:
            return False

        self.mode = Mode.EDITING
        return True

    def cancel_edit(self) -> None:
        """Stop editing. Characters already typed stay in the cell."""

        self.mode = Mode.VIEWING

    def move_cursor(self, direction: Direction) -> None:
        column = self.selection.column
        if not column.editable or self.row_count() == 0:
            return

        new_column, new_cursor = cursor_transition(
            column, direction, self.selection.cursor,
            len(self.cell_text(column)), len(self.cell_text(column.peer))
        )
        self.selection.column = new_column
        self.selection.cursor = new_cursor

    def cursor_home(self) -> None:
        if self.selection.column.editable:
            self.selection.cursor = 0

    def cursor_end(self) -> None:
        if self.selection.column.editable and self.row_count():
            self.selection.cursor = len(self.cell_text())

    def insert_char(self, char: str) -> Optional[Edit]:
        """Insert a character at the cursor and advance past it."""

        if not self._can_edit():
            return None

        text = self.cell_text()
        cursor = _clamp(self.selection.cursor, len(text))
        self.selection.cursor = cursor + len(char)
        return self._replace(text[:cursor] + char + text[cursor:])

    def delete_forward(self) -> Optional[Edit]:
        """Remove the character under the cursor."""

        if not self._can_edit():
            return None

        text = self.cell_text()
        cursor = self.selection.cursor
        if not 0 <= cursor < len(text):
            return None

        return self._replace(text[:cursor] + text[cursor + 1:])

    def backspace(self) -> Optional[Edit]:
        """Remove the character before the cursor and step back."""

        if not self._can_edit():
            return None

        text = self.cell_text()
        cursor = _clamp(self.selection.cursor, len(text))
        if cursor == 0:
            return None

        self.selection.cursor = cursor - 1
        return self._replace(text[:cursor - 1] + text[cursor:])

    def take_pending_edits(self) -> List[Edit]:
        edits, self.pending_edits = self.pending_edits, []
        return edits

    def _can_edit(self) -> bool:
        return (
            self.mode is Mode.EDITING
            and self.selection.column.editable
            and self.row_count() > 0
        )

    def _replace(self, text: str) -> Edit:
        function = self.current_function()
        row = self.selection.row
        column = self.selection.column

        if column is Column.HEX:
            self.store.set_byte_text(function.id, row, text)
        else:
            self.store.set_asm_text(function.id, row, text)

        edit = (function.id, row, column)
        if edit not in self.pending_edits:
            self.pending_edits.append(edit)

        return edit
